class MainView:
    """What the presenter can ask a front end to do.

    Subclasses override the calls they care about; the defaults do nothing.
    """

    def ensure_browse_mode(self):
        pass

    def select_entry(self, entry_id):
        pass

    def display_message(self, text, duration):
        pass

    def display_entry(self, entry_id, word, body):
        pass

    def display_syntax_section(self, section, xml):
        pass

    def display_help(self):
        pass


class NullView(MainView):
    """Stand-in used when no front end is attached."""


class CollectingView(MainView):
    """Records every call as an event dict, in call order."""

    def __init__(self):
        self.events = []

    def ensure_browse_mode(self):
        self.events.append({"event": "ensure_browse_mode"})

    def select_entry(self, entry_id):
        self.events.append({"event": "select_entry", "id": entry_id})

    def display_message(self, text, duration):
        self.events.append({"event": "display_message", "text": text, "duration": duration})

    def display_entry(self, entry_id, word, body):
        self.events.append({"event": "display_entry", "id": entry_id, "word": word, "body": body})

    def display_syntax_section(self, section, xml):
        self.events.append({"event": "display_syntax_section", "section": section, "xml": xml})

    def display_help(self):
        self.events.append({"event": "display_help"})

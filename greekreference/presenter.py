import logging

logger = logging.getLogger("GreekReference")

from .constants import DURATION_LONG, MSG_SEARCH_NO_RESULTS
from .errors import InvariantViolation, NotFound
from .models import DisplayPayload, SearchOutcome
from .utils import normalize_query
from .view import NullView


class Presenter:
    """Turns searches and selections into store reads and view calls.

    A free-text search that finds nothing is normal and ends in a message.
    A selection or external reference that does not resolve means some id
    went stale, and raises InvariantViolation.
    """

    def __init__(self, view, reference_store, history, favorites=None):
        self.view = view if view is not None else NullView()
        self.store = reference_store
        self.history_store = history
        self.favorites_store = favorites

    def search(self, query):
        """Search the lexicon by Greek or Beta code, case-insensitively."""
        # TODO: offer a choice when a word has more than one entry instead of taking the lowest id.
        word = normalize_query(query)
        try:
            entry = self.store.find_by_key(word)
        except NotFound:
            self.view.display_message(MSG_SEARCH_NO_RESULTS, DURATION_LONG)
            return SearchOutcome.no_results()

        self.view.ensure_browse_mode()
        self.view.select_entry(entry.id)
        return SearchOutcome.found_entry(entry)

    def resolve_by_reference(self, ref):
        try:
            entry = self.store.find_by_reference(ref)
        except NotFound as exc:
            raise InvariantViolation(f"Failed to retrieve lexicon entry for {ref!r}") from exc

        self.view.select_entry(entry.id)
        return entry

    def select_lexicon_entry(self, entry_id):
        try:
            entry = self.store.find_by_id(entry_id)
        except NotFound as exc:
            raise InvariantViolation("Failed to retrieve lexicon entry") from exc

        self.view.display_entry(entry.id, entry.display_word, entry.body)
        return DisplayPayload(entry.id, entry.display_word, entry.body)

    def select_syntax_entry(self, entry_id):
        try:
            entry = self.store.find_syntax_by_id(entry_id)
        except NotFound as exc:
            raise InvariantViolation("Failed to retrieve syntax section") from exc

        logger.warning("Syntax item selected: %s: %s", entry.section, entry.body)
        self.view.display_syntax_section(entry.section, entry.body)
        return DisplayPayload(entry.id, entry.display_word, entry.body, section=entry.section)

    def select_favorite(self, favorite_id):
        lexicon_id = self._favorites().lexicon_id_for(favorite_id)
        return self.select_lexicon_entry(lexicon_id)

    # ── history ──

    def add_to_history(self, entry_id, word):
        return self.history_store.add(entry_id, word)

    def clear_history(self):
        return self.history_store.clear()

    def history(self):
        return self.history_store.list()

    # ── favorites ──

    def add_favorite(self, entry_id):
        try:
            entry = self.store.find_by_id(entry_id)
        except NotFound as exc:
            raise InvariantViolation("Failed to retrieve lexicon entry") from exc
        return self._favorites().add(entry.id, entry.display_word)

    def remove_favorite(self, entry_id):
        return self._favorites().remove(entry_id)

    def is_favorite(self, entry_id):
        return self._favorites().contains(entry_id)

    def favorites(self):
        return self._favorites().list()

    def clear_favorites(self):
        return self._favorites().clear()

    def display_help(self):
        self.view.display_help()

    def _favorites(self):
        if self.favorites_store is None:
            raise RuntimeError("Presenter was created without a favorites store")
        return self.favorites_store

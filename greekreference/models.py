from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Entry:
    """A lexicon entry, or a syntax section when `section` is set."""

    id: int
    display_word: str
    body: str
    search_keys: Tuple[str, ...] = ()
    section: Optional[str] = None

    @property
    def is_syntax(self) -> bool:
        return self.section is not None

    def to_dict(self):
        out = {
            "id": self.id,
            "display_word": self.display_word,
            "body": self.body,
            "search_keys": list(self.search_keys),
        }
        if self.section is not None:
            out["section"] = self.section
        return out


@dataclass(frozen=True)
class HistoryItem:
    entry_id: int
    display_word: str
    id: Optional[int] = None
    created_at: str = ""

    def to_dict(self):
        return {
            "id": self.id,
            "entry_id": self.entry_id,
            "display_word": self.display_word,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class FavoriteItem:
    lexicon_id: int
    display_word: str
    id: Optional[int] = None
    created_at: str = ""

    def to_dict(self):
        return {
            "id": self.id,
            "lexicon_id": self.lexicon_id,
            "display_word": self.display_word,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class DisplayPayload:
    id: int
    display_word: str
    body: str
    section: Optional[str] = None

    def to_dict(self):
        return {
            "id": self.id,
            "display_word": self.display_word,
            "body": self.body,
            "section": self.section,
        }


@dataclass(frozen=True)
class SearchOutcome:
    FOUND = "found"
    NO_RESULTS = "no_results"

    status: str
    entry: Optional[Entry] = field(default=None)

    @classmethod
    def found_entry(cls, entry):
        return cls(cls.FOUND, entry)

    @classmethod
    def no_results(cls):
        return cls(cls.NO_RESULTS)

    @property
    def found(self) -> bool:
        return self.status == self.FOUND

    def to_dict(self):
        return {
            "status": self.status,
            "entry": self.entry.to_dict() if self.entry is not None else None,
        }

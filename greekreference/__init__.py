from .constants import APP_NAME, SCHEMA_VERSION, VERSION
from .db import ReferenceStore
from .errors import GreekReferenceError, InvariantViolation, NotFound, PreconditionFailure
from .history import LexiconFavorites, LexiconHistory
from .models import DisplayPayload, Entry, FavoriteItem, HistoryItem, SearchOutcome
from .presenter import Presenter
from .view import CollectingView, MainView, NullView

__all__ = [
    "APP_NAME",
    "SCHEMA_VERSION",
    "VERSION",
    "CollectingView",
    "DisplayPayload",
    "Entry",
    "FavoriteItem",
    "GreekReferenceError",
    "HistoryItem",
    "InvariantViolation",
    "LexiconFavorites",
    "LexiconHistory",
    "MainView",
    "NotFound",
    "NullView",
    "PreconditionFailure",
    "Presenter",
    "ReferenceStore",
    "SearchOutcome",
]

class GreekReferenceError(Exception):
    """Base class for errors raised by the lookup core."""


class NotFound(GreekReferenceError, KeyError):
    """A lookup found nothing. Expected for free-text searches."""

    def __str__(self):
        # KeyError quotes its argument; keep messages readable.
        return str(self.args[0]) if self.args else "not found"


class InvariantViolation(GreekReferenceError, RuntimeError):
    """An id that should exist did not resolve, e.g. a stale selection."""


class PreconditionFailure(GreekReferenceError, ValueError):
    """Malformed input from outside the core, such as an unparseable reference."""

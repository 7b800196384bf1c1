"""Exception hierarchy for albumdedupe.

Every error raised by the engine derives from :class:`DedupeError`, so callers
and the CLI can catch a single base class.
"""

__all__ = [
    "DedupeError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "ActionInFlightError",
    "SessionStateError",
]


class DedupeError(Exception):
    """Base class for all albumdedupe errors."""


class InvalidArgumentError(DedupeError, ValueError):
    """Raised when an operation receives missing or malformed arguments."""


class NotFoundError(DedupeError, LookupError):
    """Raised when a referenced album does not exist."""

    def __init__(self, message: str, album_id: str | None = None) -> None:
        """Initialize not-found error.

        Parameters
        ----------
        message : str
            Error message.
        album_id : str | None, optional
            Album that could not be found.
        """
        super().__init__(message)
        self.album_id = album_id


class ConflictError(DedupeError):
    """Raised when an operation was already applied by someone else.

    The typical case is merging an album that an earlier merge has already
    absorbed.
    """

    def __init__(self, message: str, album_id: str | None = None) -> None:
        """Initialize conflict error.

        Parameters
        ----------
        message : str
            Error message.
        album_id : str | None, optional
            Album the conflict is about.
        """
        super().__init__(message)
        self.album_id = album_id


class StorageError(DedupeError):
    """Raised when the underlying database fails; the cause is chained."""


class ActionInFlightError(DedupeError):
    """Raised when a review action is submitted while another is running."""


class SessionStateError(DedupeError):
    """Raised when a review action does not fit the session's state."""

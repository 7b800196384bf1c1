"""Shared SQLite helpers for the store package."""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

from albumdedupe.errors import StorageError

__all__ = ["storage_errors"]


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise ``sqlite3.Error`` as :class:`StorageError`."""
    try:
        yield
    except sqlite3.Error as exc:
        raise StorageError(f"{action} failed: {exc}") from exc

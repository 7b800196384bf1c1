"""Shared utilities for albumdedupe."""

from albumdedupe.utils.timestamps import format_utc, get_iso_timestamp

__all__ = ["format_utc", "get_iso_timestamp"]

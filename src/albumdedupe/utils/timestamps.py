"""UTC timestamps in the ``...Z`` form stored in the catalog and the audit log."""

from datetime import UTC, datetime

__all__ = ["format_utc", "get_iso_timestamp"]


def format_utc(moment: datetime) -> str:
    """Render an aware datetime as UTC ISO8601 with a ``Z`` suffix."""
    return moment.astimezone(UTC).isoformat().replace("+00:00", "Z")


def get_iso_timestamp() -> str:
    """Current UTC time with microseconds, e.g. ``2026-02-03T12:34:56.123456Z``."""
    return format_utc(datetime.now(UTC))

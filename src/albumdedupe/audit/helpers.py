"""Run identifiers for audit logs."""

import secrets
from datetime import UTC, datetime

from albumdedupe.utils import format_utc

__all__ = ["generate_run_id"]

RUN_ID_SEPARATOR = "__"


def generate_run_id() -> str:
    """New run identifier: start time and a random hex suffix.

    Examples
    --------
        >>> generate_run_id()  # doctest: +SKIP
        '2026-02-03T12:34:56.123456Z__9f1c2e7a'
    """
    return f"{format_utc(datetime.now(UTC))}{RUN_ID_SEPARATOR}{secrets.token_hex(4)}"


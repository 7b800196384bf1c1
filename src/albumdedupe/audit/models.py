"""Data models for audit logging."""

import json
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

from albumdedupe.utils import get_iso_timestamp

__all__ = ["EventType", "LogEvent"]


class EventType(StrEnum):
    """Audit event identifiers emitted by the engine."""

    SCAN_STARTED = "scan_started"
    SCAN_FINISHED = "scan_finished"
    MERGE_APPLIED = "merge_applied"
    MERGE_CONFLICT = "merge_conflict"
    PAIR_MARKED_DISTINCT = "pair_marked_distinct"
    REVIEW_ACTION = "review_action"
    ERROR = "error"


@dataclass(frozen=True)
class LogEvent:
    """One line of the audit log.

    Attributes
    ----------
    ts : str
        UTC ISO8601 timestamp ending in ``Z``.
    run_id : str
        Run the event belongs to.
    level : str
        "DEBUG", "INFO", "WARN" or "ERROR".
    event : str
        Event name.
    stage : str | None
        Stage that emitted the event.
    album_id : str | None
        Album the event is about, when there is one.
    data : dict[str, Any]
        Event-specific payload.
    """

    ts: str
    run_id: str
    level: str
    event: str
    stage: str | None = None
    album_id: str | None = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        run_id: str,
        event: str,
        data: dict[str, Any],
        *,
        level: str = "INFO",
        stage: str | None = None,
        album_id: str | None = None,
    ) -> "LogEvent":
        """Build an event stamped with the current time."""
        return cls(
            ts=get_iso_timestamp(),
            run_id=run_id,
            level=level,
            event=event,
            stage=stage,
            album_id=album_id,
            data=data,
        )

    def to_json(self) -> str:
        """Compact single-line JSON encoding."""
        return json.dumps(asdict(self), ensure_ascii=False, separators=(",", ":"))

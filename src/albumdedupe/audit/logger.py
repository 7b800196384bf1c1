"""Append-only JSONL audit log for catalog operations.

Every scan, merge, distinct-pair decision and review action can be traced
back to a run through the events written here. The log file is opened once
and each event is flushed as soon as it is written, so a crashed run still
leaves a readable trail.
"""

from pathlib import Path
from typing import Any

from albumdedupe.audit.models import EventType, LogEvent

__all__ = ["AuditLogger"]


class AuditLogger:
    """Writes one JSON object per line for a single run.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event.
    log_path : Path
        JSONL file events are appended to.
    current_stage : str | None
        Stage of the scan in progress. Events that do not name a stage
        inherit it.
    """

    def __init__(self, run_id: str, log_path: str | Path) -> None:
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the log file; safe to call twice."""
        if self._file.closed:
            return
        self._file.flush()
        self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        stage: str | None = None,
        album_id: str | None = None,
    ) -> None:
        """Append an event to the log.

        Parameters
        ----------
        event_type : str
            Event name, usually an :class:`EventType`.
        data : dict[str, Any] | None, optional
            JSON-serializable payload.
        level : str, optional
            One of "DEBUG", "INFO", "WARN", "ERROR".
        stage : str | None, optional
            Stage the event belongs to; defaults to ``current_stage``.
        album_id : str | None, optional
            Album the event is about.
        """
        log_event = LogEvent.create(
            self.run_id,
            str(event_type),
            data or {},
            level=level,
            stage=stage if stage is not None else self.current_stage,
            album_id=album_id,
        )
        self._file.write(log_event.to_json() + "\n")
        self._file.flush()

    # -----------------------------------------------------------------------
    # Scans
    # -----------------------------------------------------------------------

    def scan_started(self, stage: str, sensitivity: float, total_records: int) -> None:
        """Log scan_started and enter ``stage``.

        Parameters
        ----------
        stage : str
            Stage identifier ("scan", "manual_audit").
        sensitivity : float
            Effective (clamped) sensitivity.
        total_records : int
            Number of records considered.
        """
        self.current_stage = stage
        self.event(
            EventType.SCAN_STARTED,
            data={"sensitivity": sensitivity, "total_records": total_records},
        )

    def scan_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log scan_finished and leave the stage.

        Parameters
        ----------
        stage : str
            Stage identifier.
        duration_seconds : float
            Scan execution time in seconds.
        counters : dict[str, int] | None, optional
            Scan counters (comparisons, matches, excluded pairs).
        """
        data: dict[str, Any] = {"duration_seconds": round(duration_seconds, 6)}
        if counters:
            data["counters"] = counters

        self.event(EventType.SCAN_FINISHED, data=data, stage=stage)
        self.current_stage = None

    # -----------------------------------------------------------------------
    # Catalog changes
    # -----------------------------------------------------------------------

    def merge_applied(self, keep_id: str, delete_id: str, counters: dict[str, Any]) -> None:
        """Log merge_applied event.

        Parameters
        ----------
        keep_id : str
            Surviving album.
        delete_id : str
            Absorbed (deleted) album.
        counters : dict[str, Any]
            Merge result counters and adopted fields.
        """
        self.event(
            EventType.MERGE_APPLIED,
            data={"delete_id": delete_id, **counters},
            stage="merge",
            album_id=keep_id,
        )

    def merge_conflict(self, keep_id: str, delete_id: str, message: str) -> None:
        """Log merge_conflict event for a merge that was already applied."""
        self.event(
            EventType.MERGE_CONFLICT,
            data={"delete_id": delete_id, "message": message},
            level="WARN",
            stage="merge",
            album_id=keep_id,
        )

    def pair_marked_distinct(
        self,
        album_id_1: str,
        album_id_2: str,
        created: bool,
        created_by: str | None = None,
    ) -> None:
        """Log pair_marked_distinct event.

        Parameters
        ----------
        album_id_1 : str
            Smaller album ID of the canonical pair.
        album_id_2 : str
            Larger album ID of the canonical pair.
        created : bool
            False when the pair was already recorded.
        created_by : str | None, optional
            Reviewer identity.
        """
        self.event(
            EventType.PAIR_MARKED_DISTINCT,
            data={
                "album_id_1": album_id_1,
                "album_id_2": album_id_2,
                "created": created,
                "created_by": created_by,
            },
            stage="exclusions",
        )

    # -----------------------------------------------------------------------
    # Review and failures
    # -----------------------------------------------------------------------

    def review_action(self, action: str, pair_id: str, outcome: dict[str, Any]) -> None:
        """Log review_action event for one reviewer decision."""
        self.event(
            EventType.REVIEW_ACTION,
            data={"action": action, "pair_id": pair_id, **outcome},
            stage="review",
        )

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        album_id: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Log error event.

        Parameters
        ----------
        exception_class : str
            Exception class name.
        message : str
            Error message.
        stage : str | None, optional
            Stage where error occurred.
        album_id : str | None, optional
            Album identifier if error is album-specific.
        traceback : str | None, optional
            Stack trace (only in debug mode).
        """
        data: dict[str, Any] = {
            "exception_class": exception_class,
            "message": message,
        }
        if traceback is not None:
            data["traceback"] = traceback

        self.event(EventType.ERROR, data=data, stage=stage, level="ERROR", album_id=album_id)

"""Audit logging subsystem for albumdedupe.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: run identifier factory
"""

from albumdedupe.audit.helpers import generate_run_id
from albumdedupe.audit.logger import AuditLogger
from albumdedupe.audit.models import EventType, LogEvent
from albumdedupe.utils import get_iso_timestamp

__all__ = [
    "AuditLogger",
    "EventType",
    "LogEvent",
    "generate_run_id",
    "get_iso_timestamp",
]

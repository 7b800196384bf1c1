"""Manual album reconciliation against the canonical catalog."""

from albumdedupe.reconcile.auditor import find_manual_albums, merge_manual_album
from albumdedupe.reconcile.models import (
    IntegrityIssue,
    IssueType,
    ManualAlbumEntry,
    ManualAuditResult,
    ManualMatch,
    ManualMergeResult,
    Severity,
)

__all__ = [
    "IssueType",
    "Severity",
    "ManualMatch",
    "ManualAlbumEntry",
    "IntegrityIssue",
    "ManualAuditResult",
    "ManualMergeResult",
    "find_manual_albums",
    "merge_manual_album",
]

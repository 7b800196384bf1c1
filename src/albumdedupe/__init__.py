"""Duplicate detection and resolution for a shared album catalog.

This package provides:
- Data models (albumdedupe.models) — album records, list references, distinct pairs
- Normalization (albumdedupe.normalize) — comparison-form text normalization
- Scoring (albumdedupe.scoring) — string similarity and pair evaluation
- Decision (albumdedupe.decision) — sensitivity policy and routing
- Candidates (albumdedupe.candidates) — catalog scan and single-record probe
- Store (albumdedupe.store) — SQLite catalog and distinct-pair exclusions
- Merge (albumdedupe.merge) — transactional merge with field fusion
- Reconcile (albumdedupe.reconcile) — manual album audit and merge
- Review (albumdedupe.review) — sequential human arbitration sessions
- Engine (albumdedupe.engine) — configuration
- Audit (albumdedupe.audit) — JSONL event logging
- CLI (albumdedupe.cli) — command-line interface
- Public API (albumdedupe.api) — high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from albumdedupe.api import (
    audit_manual_albums,
    check_similar,
    mark_distinct,
    merge_albums,
    merge_manual_album,
    scan_duplicates,
)
from albumdedupe.engine import EngineConfig
from albumdedupe.errors import (
    ActionInFlightError,
    ConflictError,
    DedupeError,
    InvalidArgumentError,
    NotFoundError,
    SessionStateError,
    StorageError,
)
from albumdedupe.models import AlbumRecord
from albumdedupe.normalize import normalize_for_comparison
from albumdedupe.review import ManualReviewSession, ReviewAction, ReviewSession
from albumdedupe.scoring import similarity
from albumdedupe.store import CatalogStore

__all__ = [
    "__version__",
    "__license__",
    "AlbumRecord",
    "CatalogStore",
    "EngineConfig",
    "scan_duplicates",
    "merge_albums",
    "mark_distinct",
    "audit_manual_albums",
    "merge_manual_album",
    "check_similar",
    "normalize_for_comparison",
    "similarity",
    "ReviewSession",
    "ManualReviewSession",
    "ReviewAction",
    "DedupeError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "ActionInFlightError",
    "SessionStateError",
]

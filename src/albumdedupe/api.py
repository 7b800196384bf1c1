"""Public API for album duplicate detection and resolution.

This module provides the high-level entry points used by the CLI and by
catalog maintenance scripts:
- Scanning the catalog for potential duplicates
- Merging duplicates and recording distinct pairs
- Auditing and merging manually-entered albums
- Checking an incoming album against the catalog
"""

from __future__ import annotations

from typing import Any

from albumdedupe.audit.logger import AuditLogger
from albumdedupe.candidates.generator import find_potential_duplicates, scan_catalog
from albumdedupe.candidates.models import ScanResult, SimilarCheck
from albumdedupe.decision.models import MODAL_THRESHOLD
from albumdedupe.decision.policy import clamp_sensitivity
from albumdedupe.engine.config import EngineConfig
from albumdedupe.merge.models import MergeResult
from albumdedupe.merge.resolver import merge_albums as _merge_albums
from albumdedupe.models import AlbumRecord
from albumdedupe.reconcile.auditor import find_manual_albums
from albumdedupe.reconcile.auditor import merge_manual_album as _merge_manual_album
from albumdedupe.reconcile.models import ManualAuditResult, ManualMergeResult
from albumdedupe.store import CatalogStore

__all__ = [
    "scan_duplicates",
    "merge_albums",
    "mark_distinct",
    "audit_manual_albums",
    "merge_manual_album",
    "check_similar",
]


def scan_duplicates(
    store: CatalogStore,
    sensitivity: Any = None,
    *,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> ScanResult:
    """Scan the whole catalog for potential duplicate albums.

    Parameters
    ----------
    store : CatalogStore
        Catalog to scan.
    sensitivity : float | None, optional
        Scan sensitivity; clamped into [0.03, 0.5]. Missing or non-numeric
        values fall back to ``config.sensitivity`` (0.10).
    config : EngineConfig | None, optional
        Engine configuration (weights, result limit).
    logger : AuditLogger | None, optional
        Audit logger for scan events.

    Returns
    -------
    ScanResult
        At most ``config.result_limit`` pairs, best first, plus the true
        number of matches and the number of stored distinct pairs.

    Examples
    --------
        >>> from albumdedupe import CatalogStore, scan_duplicates
        >>> with CatalogStore("catalog.db") as store:
        ...     result = scan_duplicates(store, sensitivity=0.15)
        >>> print(result.total_matches)
    """
    config = config or EngineConfig()
    sensitivity = clamp_sensitivity(sensitivity, default=config.sensitivity)

    return scan_catalog(
        store.list_albums(),
        store.exclusions.load_keys(),
        config.match_options(sensitivity),
        limit=config.result_limit,
        logger=logger,
    )


def merge_albums(
    store: CatalogStore,
    keep_id: str,
    delete_id: str,
    *,
    fuse_fields: bool = True,
    logger: AuditLogger | None = None,
) -> MergeResult:
    """Merge ``delete_id`` into ``keep_id``.

    List references are rewritten to the keeper, missing keeper fields are
    filled from the loser, and the loser is deleted, all in one transaction.

    Raises
    ------
    InvalidArgumentError
        If an ID is missing or both IDs are equal.
    NotFoundError
        If the keeper does not exist.
    ConflictError
        If the loser was already merged away.
    StorageError
        If the database rejects the change (nothing is persisted).
    """
    return _merge_albums(store, keep_id, delete_id, fuse_fields=fuse_fields, logger=logger)


def mark_distinct(
    store: CatalogStore,
    album_id_a: str,
    album_id_b: str,
    created_by: str | None = None,
    *,
    logger: AuditLogger | None = None,
) -> bool:
    """Record that two albums are not duplicates.

    Idempotent: marking the same pair again (in either order) changes nothing.

    Returns
    -------
    bool
        True when a new distinct pair was stored.

    Raises
    ------
    InvalidArgumentError
        If an ID is missing or both IDs are equal.
    """
    created = store.exclusions.add(album_id_a, album_id_b, created_by=created_by)
    if logger:
        first, second = sorted((album_id_a, album_id_b))
        logger.pair_marked_distinct(first, second, created, created_by)
    return created


def audit_manual_albums(
    store: CatalogStore,
    threshold: float | None = None,
    max_matches: int | None = None,
    *,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> ManualAuditResult:
    """Find canonical matches and integrity issues for manual albums.

    Parameters
    ----------
    store : CatalogStore
        Catalog to audit.
    threshold : float | None, optional
        Match threshold (default 0.15).
    max_matches : int | None, optional
        Matches reported per manual album (default 5).
    config : EngineConfig | None, optional
        Engine configuration.
    logger : AuditLogger | None, optional
        Audit logger for scan events.
    """
    return find_manual_albums(
        store, threshold, max_matches, config=config, logger=logger
    )


def merge_manual_album(
    store: CatalogStore,
    manual_id: str,
    canonical_id: str,
    sync_metadata: bool = True,
    *,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> ManualMergeResult:
    """Merge a manual album into its canonical counterpart.

    See :func:`albumdedupe.reconcile.merge_manual_album`.
    """
    return _merge_manual_album(
        store, manual_id, canonical_id, sync_metadata, config=config, logger=logger
    )


def check_similar(
    store: CatalogStore,
    artist: str | None,
    title: str | None,
    album_id: str | None = None,
    *,
    config: EngineConfig | None = None,
) -> SimilarCheck:
    """Check an incoming album against the catalog before it is added.

    Parameters
    ----------
    store : CatalogStore
        Catalog to compare against.
    artist : str | None
        Incoming artist name.
    title : str | None
        Incoming album title.
    album_id : str | None, optional
        ID of the incoming album when it is already stored; the album itself
        and its distinct pairs are then excluded.
    config : EngineConfig | None, optional
        Engine configuration (weights, ``check_max_matches``).

    Returns
    -------
    SimilarCheck
        Up to three matches at the default sensitivity, best first.
    """
    config = config or EngineConfig()
    probe = AlbumRecord(album_id=album_id or "", artist=artist, title=title)
    exclusions = store.exclusions.load_keys() if album_id else frozenset()

    matches = find_potential_duplicates(
        probe,
        store.list_albums(),
        exclusions,
        config.match_options(MODAL_THRESHOLD),
        max_results=config.check_max_matches,
    )
    return SimilarCheck(matches=tuple(matches))

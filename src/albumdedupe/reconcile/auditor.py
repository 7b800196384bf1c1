"""Reconcile manually-entered albums with canonical catalog albums.

Manual entries are typed in by users when a metadata lookup fails. This
module finds canonical albums they probably duplicate, reports integrity
problems, and merges a manual entry into its canonical counterpart.
"""

from __future__ import annotations

import time
from collections import defaultdict

from albumdedupe.audit.logger import AuditLogger
from albumdedupe.candidates.generator import find_potential_duplicates
from albumdedupe.engine.config import EngineConfig
from albumdedupe.errors import InvalidArgumentError, NotFoundError
from albumdedupe.merge.resolver import merge_albums
from albumdedupe.models import AlbumRecord, is_blank, is_internal_id, is_manual_id
from albumdedupe.normalize import normalized_key
from albumdedupe.reconcile.models import (
    SEVERITY_ORDER,
    IntegrityIssue,
    IssueType,
    ManualAlbumEntry,
    ManualAuditResult,
    ManualMatch,
    ManualMergeResult,
    Severity,
)
from albumdedupe.store import CatalogStore

__all__ = ["find_manual_albums", "merge_manual_album"]

STAGE_NAME = "manual_audit"


def find_manual_albums(
    store: CatalogStore,
    threshold: float | None = None,
    max_matches: int | None = None,
    *,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> ManualAuditResult:
    """Audit manual albums and find their canonical matches.

    Parameters
    ----------
    store : CatalogStore
        Catalog to read.
    threshold : float | None
        Match threshold (default: ``config.manual_threshold``, 0.15).
    max_matches : int | None
        Matches kept per manual album (default: ``config.manual_max_matches``, 5).
    config : EngineConfig | None, optional
        Engine configuration (prefixes, weights).
    logger : AuditLogger | None, optional
        Audit logger for scan events.

    Returns
    -------
    ManualAuditResult
        Entries with matches first (best match first), then integrity issues.
    """
    config = config or EngineConfig()
    threshold = config.manual_threshold if threshold is None else threshold
    max_matches = config.manual_max_matches if max_matches is None else max_matches

    records = store.list_albums()
    usage = store.reference_usage()
    exclusions = store.exclusions.load_keys()

    manual = [r for r in records if is_manual_id(r.album_id, config.manual_prefix)]
    canonical = [
        r
        for r in records
        if not is_manual_id(r.album_id, config.manual_prefix)
        and not is_internal_id(r.album_id, config.internal_prefix)
        and r.is_comparable
    ]

    start = time.perf_counter()
    if logger:
        logger.scan_started(STAGE_NAME, threshold, len(manual))

    options = config.match_options(threshold)
    entries: list[ManualAlbumEntry] = []
    issues: list[IntegrityIssue] = []
    groups: dict[str, list[str]] = defaultdict(list)

    for record in manual:
        used_in = tuple(usage.get(record.album_id, ()))
        if not record.is_comparable:
            issues.append(_missing_metadata_issue(record))
            continue

        groups[normalized_key(record.artist, record.title)].append(record.album_id)
        pairs = find_potential_duplicates(record, canonical, exclusions, options, max_matches)
        entries.append(
            ManualAlbumEntry(
                manual_id=record.album_id,
                artist=record.artist,
                title=record.title,
                has_cover=record.has_cover,
                used_in=used_in,
                matches=tuple(
                    ManualMatch(
                        album_id=pair.album_b.album_id,
                        artist=pair.album_b.artist,
                        title=pair.album_b.title,
                        has_cover=pair.album_b.has_cover,
                        confidence=pair.confidence,
                        should_auto_merge=pair.should_auto_merge,
                    )
                    for pair in pairs
                ),
            )
        )

    for key, album_ids in groups.items():
        if len(album_ids) > 1:
            issues.append(
                IntegrityIssue(
                    type=IssueType.DUPLICATE_MANUAL,
                    severity=Severity.LOW,
                    description=f"{len(album_ids)} manual albums with same normalized name",
                    album_ids=tuple(album_ids),
                    normalized_key=key,
                )
            )

    # Stable sort: entries with matches first, best match first
    entries.sort(key=lambda e: (not e.matches, -e.top_confidence))
    issues.sort(key=lambda i: SEVERITY_ORDER[i.severity])

    result = ManualAuditResult(
        entries=tuple(entries),
        total_manual=len(manual),
        total_with_matches=sum(1 for e in entries if e.matches),
        integrity_issues=tuple(issues),
    )
    if logger:
        logger.scan_finished(
            STAGE_NAME,
            duration_seconds=time.perf_counter() - start,
            counters={
                "manual_albums": result.total_manual,
                "canonical_albums": len(canonical),
                "with_matches": result.total_with_matches,
                "integrity_issues": len(result.integrity_issues),
            },
        )
    return result


def merge_manual_album(
    store: CatalogStore,
    manual_id: str,
    canonical_id: str,
    sync_metadata: bool = True,
    *,
    config: EngineConfig | None = None,
    logger: AuditLogger | None = None,
) -> ManualMergeResult:
    """Merge a manual album into a canonical album.

    List references move to the canonical album and the manual album is
    deleted. With ``sync_metadata`` the canonical album also adopts fields it
    lacks from the manual entry.

    Parameters
    ----------
    store : CatalogStore
        Catalog to modify.
    manual_id : str
        Manual album to absorb; must carry the manual prefix.
    canonical_id : str
        Canonical album that survives.
    sync_metadata : bool
        Fuse missing fields into the canonical album (default True).
    config : EngineConfig | None, optional
        Engine configuration (manual prefix).
    logger : AuditLogger | None, optional
        Audit logger for merge events.

    Raises
    ------
    InvalidArgumentError
        If ``manual_id`` is not a manual album ID or the IDs are invalid.
    NotFoundError
        If the canonical album does not exist.
    ConflictError
        If the manual album was already merged.
    """
    config = config or EngineConfig()
    if not is_manual_id(manual_id, config.manual_prefix):
        raise InvalidArgumentError(f"Invalid manual album ID: {manual_id!r}")
    if not canonical_id:
        raise InvalidArgumentError("Canonical album ID is required")
    if manual_id == canonical_id:
        raise InvalidArgumentError("Cannot merge album into itself")

    with store.transaction():
        canonical = store.get_album(canonical_id, include_cover=False)
        if canonical is None:
            raise NotFoundError(f"Canonical album {canonical_id} not found", album_id=canonical_id)
        affected = tuple(sorted({ref.list_id for ref in store.list_items_for(manual_id)}))
        merge = merge_albums(
            store,
            canonical_id,
            manual_id,
            fuse_fields=sync_metadata,
            logger=logger,
        )

    return ManualMergeResult(
        manual_id=manual_id,
        canonical_id=canonical_id,
        affected_lists=affected,
        merge=merge,
        synced_metadata=(
            {"artist": canonical.artist, "title": canonical.title} if sync_metadata else None
        ),
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _missing_metadata_issue(record: AlbumRecord) -> IntegrityIssue:
    missing = [name for name in ("artist", "title") if is_blank(getattr(record, name))]
    return IntegrityIssue(
        type=IssueType.MISSING_METADATA,
        severity=Severity.MEDIUM,
        description=f"Missing {' and '.join(missing)}",
        album_ids=(record.album_id,),
    )

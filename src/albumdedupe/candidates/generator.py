"""Candidate pair generation.

Two entry points share the same exclusion, ordering and capping rules:

- :func:`scan_catalog` compares every unordered pair of catalog records.
- :func:`find_potential_duplicates` probes one record against a candidate set.

Both are O(n^2) / O(n) in comparisons; no blocking is applied.
"""

from __future__ import annotations

import time
from collections.abc import Collection, Iterable

from albumdedupe.audit.logger import AuditLogger
from albumdedupe.candidates.models import CandidatePair, ScanResult
from albumdedupe.decision.models import PROBE_MAX_RESULTS, SCAN_RESULT_LIMIT
from albumdedupe.decision.policy import classify
from albumdedupe.models import AlbumRecord, canonical_pair
from albumdedupe.scoring.evaluator import MatchOptions, evaluate_pair

__all__ = ["scan_catalog", "find_potential_duplicates", "is_excluded"]

STAGE_SCAN = "scan"


def is_excluded(
    album_id_a: str,
    album_id_b: str,
    exclusions: Collection[tuple[str, str]],
) -> bool:
    """Whether the pair was marked distinct, in either ordering."""
    return (album_id_a, album_id_b) in exclusions or (album_id_b, album_id_a) in exclusions


def scan_catalog(
    records: Iterable[AlbumRecord],
    exclusions: Collection[tuple[str, str]] = frozenset(),
    options: MatchOptions | float | None = None,
    limit: int = SCAN_RESULT_LIMIT,
    *,
    logger: AuditLogger | None = None,
) -> ScanResult:
    """Find potential duplicate pairs across the whole catalog.

    Parameters
    ----------
    records : Iterable[AlbumRecord]
        Catalog records; those without an ID, artist or title are ignored.
    exclusions : Collection[tuple[str, str]]
        Pairs marked distinct; either ordering suppresses the pair.
    options : MatchOptions | float | None
        Evaluation options (a bare number is the threshold).
    limit : int
        Maximum number of pairs returned.
    logger : AuditLogger | None, optional
        Audit logger for scan events.

    Returns
    -------
    ScanResult
        Top pairs by confidence plus the true match total.
    """
    opts = MatchOptions.coerce(options)
    eligible = [record for record in records if record.is_comparable]
    excluded_pair_count = len({canonical_pair(a, b) for a, b in exclusions})

    start = time.perf_counter()
    if logger:
        logger.scan_started(STAGE_SCAN, opts.threshold, len(eligible))

    matches: list[CandidatePair] = []
    comparisons = 0
    skipped = 0
    for i, album_a in enumerate(eligible):
        for album_b in eligible[i + 1 :]:
            if album_a.album_id == album_b.album_id:
                continue
            if is_excluded(album_a.album_id, album_b.album_id, exclusions):
                skipped += 1
                continue
            comparisons += 1
            pair = _evaluate(album_a, album_b, opts)
            if pair is not None:
                matches.append(pair)

    matches.sort(key=CandidatePair.sort_key)
    result = ScanResult(
        total_records=len(eligible),
        total_matches=len(matches),
        excluded_pair_count=excluded_pair_count,
        pairs=tuple(matches[: max(limit, 0)]),
        sensitivity=opts.threshold,
        comparisons=comparisons,
    )

    if logger:
        logger.scan_finished(
            STAGE_SCAN,
            duration_seconds=time.perf_counter() - start,
            counters={
                "records": result.total_records,
                "comparisons": comparisons,
                "excluded_skipped": skipped,
                "matches": result.total_matches,
                "returned": len(result.pairs),
            },
        )
    return result


def find_potential_duplicates(
    record: AlbumRecord,
    candidates: Iterable[AlbumRecord],
    exclusions: Collection[tuple[str, str]] = frozenset(),
    options: MatchOptions | float | None = None,
    max_results: int = PROBE_MAX_RESULTS,
) -> list[CandidatePair]:
    """Find catalog records that may duplicate ``record``.

    Parameters
    ----------
    record : AlbumRecord
        Record being probed (may be new and not yet stored).
    candidates : Iterable[AlbumRecord]
        Records to compare against; ``record`` itself is skipped.
    exclusions : Collection[tuple[str, str]]
        Pairs marked distinct.
    options : MatchOptions | float | None
        Evaluation options (a bare number is the threshold).
    max_results : int
        Maximum number of pairs returned.

    Returns
    -------
    list[CandidatePair]
        Matches with ``album_a`` set to the probe record, best first.
    """
    opts = MatchOptions.coerce(options)
    if _is_blank_probe(record):
        return []

    matches: list[CandidatePair] = []
    for candidate in candidates:
        if not candidate.is_comparable:
            continue
        if record.album_id and candidate.album_id == record.album_id:
            continue
        if record.album_id and is_excluded(record.album_id, candidate.album_id, exclusions):
            continue
        pair = _evaluate(record, candidate, opts)
        if pair is not None:
            matches.append(pair)

    matches.sort(key=CandidatePair.sort_key)
    return matches[: max(max_results, 0)]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _is_blank_probe(record: AlbumRecord) -> bool:
    """A probe needs at least an artist or a title to compare."""
    return not (record.artist or "").strip() and not (record.title or "").strip()


def _evaluate(
    album_a: AlbumRecord,
    album_b: AlbumRecord,
    options: MatchOptions,
) -> CandidatePair | None:
    """Evaluate a pair and wrap matches as candidates."""
    evaluation = evaluate_pair(album_a, album_b, options)
    if not evaluation.is_match:
        return None
    return CandidatePair(
        album_a=album_a,
        album_b=album_b,
        evaluation=evaluation,
        decision=classify(evaluation),
    )

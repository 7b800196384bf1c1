"""Data models for candidate pair representation.

Candidate pairs are ephemeral: they are produced by a scan or probe, handed to
a reviewer and never persisted.
"""

from dataclasses import dataclass, field
from typing import Any

from albumdedupe.decision.models import Decision
from albumdedupe.models import AlbumRecord, pair_id
from albumdedupe.scoring.models import PairEvaluation

__all__ = ["CandidatePair", "ScanResult", "SimilarCheck"]


@dataclass(frozen=True, slots=True)
class CandidatePair:
    """A potential duplicate pair with its scores.

    Attributes
    ----------
    album_a : AlbumRecord
        Left-hand record (earlier in scan order, or the probe record).
    album_b : AlbumRecord
        Right-hand record.
    evaluation : PairEvaluation
        Scores and verdict for the pair.
    decision : Decision
        Routing of the pair (auto-merge or review).
    """

    album_a: AlbumRecord
    album_b: AlbumRecord
    evaluation: PairEvaluation
    decision: Decision

    @property
    def pair_id(self) -> str:
        """Order-independent pair identifier."""
        return pair_id(self.album_a.album_id, self.album_b.album_id)

    @property
    def confidence(self) -> float:
        """Weighted confidence of the pair."""
        return self.evaluation.confidence

    @property
    def artist_score(self) -> float:
        """Artist similarity."""
        return self.evaluation.artist_score.score

    @property
    def album_score(self) -> float:
        """Album title similarity."""
        return self.evaluation.album_score.score

    @property
    def should_auto_merge(self) -> bool:
        """Whether the pair may be merged without review."""
        return self.evaluation.should_auto_merge

    def mentions(self, album_id: str) -> bool:
        """Whether either side of the pair is ``album_id``."""
        return album_id in (self.album_a.album_id, self.album_b.album_id)

    def sort_key(self) -> tuple[float, str, str]:
        """Confidence descending, then IDs ascending."""
        return (-self.confidence, self.album_a.album_id, self.album_b.album_id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "pair_id": self.pair_id,
            "album_a": self.album_a.brief(),
            "album_b": self.album_b.brief(),
            "confidence": round(self.confidence, 4),
            "artist_score": round(self.artist_score, 4),
            "album_score": round(self.album_score, 4),
            "should_auto_merge": self.should_auto_merge,
            "decision": str(self.decision),
            "reasons": {
                "artist": str(self.evaluation.artist_score.reason),
                "album": str(self.evaluation.album_score.reason),
            },
        }


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of a catalog-wide duplicate scan.

    Attributes
    ----------
    total_records : int
        Records eligible for comparison.
    total_matches : int
        Matches found before the result limit was applied.
    excluded_pair_count : int
        Number of stored distinct pairs.
    pairs : tuple[CandidatePair, ...]
        Top matches, confidence descending.
    sensitivity : float
        Effective sensitivity the scan ran with.
    comparisons : int
        Number of pair evaluations performed.
    """

    total_records: int
    total_matches: int
    excluded_pair_count: int
    pairs: tuple[CandidatePair, ...] = field(default_factory=tuple)
    sensitivity: float = 0.0
    comparisons: int = 0

    @property
    def truncated(self) -> bool:
        """Whether matches were dropped by the result limit."""
        return self.total_matches > len(self.pairs)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_records": self.total_records,
            "total_matches": self.total_matches,
            "excluded_pair_count": self.excluded_pair_count,
            "sensitivity": self.sensitivity,
            "comparisons": self.comparisons,
            "pairs": [pair.to_dict() for pair in self.pairs],
        }


@dataclass(frozen=True, slots=True)
class SimilarCheck:
    """Result of checking an incoming album against the catalog.

    Attributes
    ----------
    matches : tuple[CandidatePair, ...]
        Best catalog matches; ``album_a`` is the incoming album.
    """

    matches: tuple[CandidatePair, ...] = ()

    @property
    def has_similar(self) -> bool:
        """Whether any catalog album looks like the incoming one."""
        return bool(self.matches)

    @property
    def should_auto_merge(self) -> bool:
        """Whether the best match is confident enough to reuse silently."""
        return bool(self.matches) and self.matches[0].should_auto_merge

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "has_similar": self.has_similar,
            "should_auto_merge": self.should_auto_merge,
            "matches": [
                {**pair.album_b.brief(), "confidence": round(pair.confidence, 4)}
                for pair in self.matches
            ],
        }

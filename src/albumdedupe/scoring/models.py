"""Data models for pairwise scoring.

This module defines the similarity result for a single field and the
evaluation produced for a pair of album records.
"""

from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

__all__ = [
    "SimilarityReason",
    "SimilarityResult",
    "ScoringWeights",
    "PairEvaluation",
]


class SimilarityReason(StrEnum):
    """Which signal produced a similarity score."""

    EMPTY_INPUT = "empty_input"
    EXACT_NORMALIZED = "exact_normalized"
    EDIT_DISTANCE = "edit_distance"
    TOKEN_OVERLAP = "token_overlap"


@dataclass(frozen=True, slots=True)
class SimilarityResult:
    """Similarity between two text fields.

    Attributes
    ----------
    score : float
        Similarity in [0.0, 1.0].
    reason : SimilarityReason
        Signal that produced the score.
    """

    score: float
    reason: SimilarityReason

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"score": self.score, "reason": str(self.reason)}


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    """Relative weight of artist and album similarity in the confidence.

    Attributes
    ----------
    artist : float
        Weight of the artist score.
    album : float
        Weight of the album title score.
    """

    artist: float = 0.4
    album: float = 0.6

    def __post_init__(self) -> None:
        """Validate weights."""
        if self.artist < 0 or self.album < 0:
            raise ValueError(f"weights must be non-negative, got {self.artist}, {self.album}")
        if abs(self.artist + self.album - 1.0) > 1e-9:
            raise ValueError(f"weights must sum to 1.0, got {self.artist + self.album}")

    def to_dict(self) -> dict[str, float]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)


@dataclass(frozen=True, slots=True)
class PairEvaluation:
    """Outcome of comparing two album records.

    Attributes
    ----------
    is_match : bool
        Whether the pair passes the per-field minimums and the threshold.
    confidence : float
        Weighted combination of artist and album scores.
    artist_score : SimilarityResult
        Artist field similarity.
    album_score : SimilarityResult
        Album title similarity.
    should_auto_merge : bool
        Whether the match is confident enough to merge without review.
    """

    is_match: bool
    confidence: float
    artist_score: SimilarityResult
    album_score: SimilarityResult
    should_auto_merge: bool

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "is_match": self.is_match,
            "confidence": round(self.confidence, 4),
            "artist_score": self.artist_score.to_dict(),
            "album_score": self.album_score.to_dict(),
            "should_auto_merge": self.should_auto_merge,
        }

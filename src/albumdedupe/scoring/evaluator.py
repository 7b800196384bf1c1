"""Pair evaluation: artist and album similarity combined into a verdict."""

from dataclasses import dataclass, field

from albumdedupe.decision.models import AUTO_MERGE_THRESHOLD, MODAL_THRESHOLD
from albumdedupe.decision.policy import min_score_for
from albumdedupe.models import AlbumRecord
from albumdedupe.scoring.comparators import similarity
from albumdedupe.scoring.models import PairEvaluation, ScoringWeights

__all__ = ["MatchOptions", "evaluate_pair"]


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Tunable parameters for pair evaluation.

    Attributes
    ----------
    threshold : float
        Minimum confidence for a match; also selects per-field minimums.
    auto_merge_threshold : float
        Confidence at or above which a match should auto-merge.
    artist_min_score : float | None
        Override for the artist minimum (default derived from threshold).
    album_min_score : float | None
        Override for the album minimum (default derived from threshold).
    weights : ScoringWeights
        Artist/album weighting of the confidence.
    remove_articles : bool
        Strip leading articles during normalization.
    """

    threshold: float = MODAL_THRESHOLD
    auto_merge_threshold: float = AUTO_MERGE_THRESHOLD
    artist_min_score: float | None = None
    album_min_score: float | None = None
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    remove_articles: bool = True

    @classmethod
    def coerce(cls, options: "MatchOptions | float | None") -> "MatchOptions":
        """Accept the legacy numeric form where a bare number is the threshold."""
        if options is None:
            return cls()
        if isinstance(options, MatchOptions):
            return options
        if isinstance(options, (int, float)) and not isinstance(options, bool):
            return cls(threshold=float(options))
        raise TypeError(f"options must be MatchOptions or a number, got {type(options).__name__}")

    @property
    def min_artist(self) -> float:
        """Effective artist minimum score."""
        if self.artist_min_score is not None:
            return self.artist_min_score
        return min_score_for(self.threshold)

    @property
    def min_album(self) -> float:
        """Effective album minimum score."""
        if self.album_min_score is not None:
            return self.album_min_score
        return min_score_for(self.threshold)


def evaluate_pair(
    record_a: AlbumRecord,
    record_b: AlbumRecord,
    options: MatchOptions | float | None = None,
) -> PairEvaluation:
    """Score two album records and decide whether they match.

    Parameters
    ----------
    record_a : AlbumRecord
        First record.
    record_b : AlbumRecord
        Second record.
    options : MatchOptions | float | None
        Evaluation options; a bare number is read as the threshold.

    Returns
    -------
    PairEvaluation
        Verdict, confidence and per-field scores.

    Notes
    -----
    Both fields must clear their minimum independently, so a perfect artist
    match cannot carry an unrelated album title over the line.
    """
    opts = MatchOptions.coerce(options)

    artist = similarity(record_a.artist, record_b.artist, remove_articles=opts.remove_articles)
    album = similarity(record_a.title, record_b.title, remove_articles=opts.remove_articles)
    confidence = opts.weights.artist * artist.score + opts.weights.album * album.score

    is_match = (
        artist.score >= opts.min_artist
        and album.score >= opts.min_album
        and confidence >= opts.threshold
    )
    return PairEvaluation(
        is_match=is_match,
        confidence=confidence,
        artist_score=artist,
        album_score=album,
        should_auto_merge=is_match and confidence >= opts.auto_merge_threshold,
    )

"""Data models for the human review workflow."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from albumdedupe.merge.models import MergeResult
from albumdedupe.models import AlbumRecord

__all__ = [
    "SessionState",
    "ReviewAction",
    "ActionOutcome",
    "FieldDiff",
    "RecordDiff",
    "diff_records",
]


class SessionState(StrEnum):
    """Lifecycle of a review session.

    Attributes
    ----------
    IDLE : str
        Created, not started.
    PRESENTING : str
        An item is waiting for a decision.
    COMPLETE : str
        Every item was decided, skipped or dropped as stale.
    """

    IDLE = "IDLE"
    PRESENTING = "PRESENTING"
    COMPLETE = "COMPLETE"


class ReviewAction(StrEnum):
    """Reviewer decisions."""

    KEEP_LEFT = "keep_left"
    KEEP_RIGHT = "keep_right"
    MERGE_INTO = "merge_into"
    MARK_DISTINCT = "mark_distinct"
    SKIP = "skip"


@dataclass(frozen=True)
class ActionOutcome:
    """Result of one reviewer action.

    Attributes
    ----------
    action : ReviewAction
        Action that was applied.
    item_id : str
        Pair ID (or manual album ID) the action targeted.
    success : bool
        False when the action failed and the session stayed on the item.
    resolved : bool
        Whether the item counts as resolved.
    message : str | None
        Error or informational message for the reviewer.
    merge_result : MergeResult | None
        Merge counters for merge actions.
    """

    action: ReviewAction
    item_id: str
    success: bool
    resolved: bool = False
    message: str | None = None
    merge_result: MergeResult | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "action": str(self.action),
            "item_id": self.item_id,
            "success": self.success,
            "resolved": self.resolved,
            "message": self.message,
            "merge_result": self.merge_result.to_dict() if self.merge_result else None,
        }


@dataclass(frozen=True)
class FieldDiff:
    """One compared field of a pair.

    Attributes
    ----------
    name : str
        Field label.
    left : Any
        Value on the left record.
    right : Any
        Value on the right record.
    differs : bool
        Whether the values are meaningfully different.
    """

    name: str
    left: Any
    right: Any
    differs: bool


@dataclass(frozen=True)
class RecordDiff:
    """Field-by-field comparison shown to a reviewer."""

    fields: tuple[FieldDiff, ...]

    @property
    def difference_count(self) -> int:
        """Number of differing fields."""
        return sum(1 for f in self.fields if f.differs)

    @property
    def has_differences(self) -> bool:
        """Whether any field differs."""
        return self.difference_count > 0

    def __getitem__(self, name: str) -> FieldDiff:
        for item in self.fields:
            if item.name == name:
                return item
        raise KeyError(name)


def _text_differs(left: str | None, right: str | None) -> bool:
    # None and "" are the same; comparison ignores case and outer whitespace
    norm_left = (left or "").strip().lower()
    norm_right = (right or "").strip().lower()
    if not norm_left and not norm_right:
        return False
    return norm_left != norm_right


def _format_genres(genre_1: str | None, genre_2: str | None) -> str | None:
    genres = [g for g in (genre_1, genre_2) if g]
    return ", ".join(genres) if genres else None


def diff_records(left: AlbumRecord, right: AlbumRecord) -> RecordDiff:
    """Compare two records field by field for review.

    Track counts only differ when both are known; cover presence differs when
    exactly one side has art.

    Parameters
    ----------
    left : AlbumRecord
        Left-hand record.
    right : AlbumRecord
        Right-hand record.

    Returns
    -------
    RecordDiff
        Artist, title, release date, genres, track count and cover diffs.
    """
    genres_differ = _text_differs(left.genre_1, right.genre_1) or _text_differs(
        left.genre_2, right.genre_2
    )
    tracks_differ = (
        left.track_count is not None
        and right.track_count is not None
        and left.track_count != right.track_count
    )
    return RecordDiff(
        fields=(
            FieldDiff(
                "artist", left.artist, right.artist, _text_differs(left.artist, right.artist)
            ),
            FieldDiff("title", left.title, right.title, _text_differs(left.title, right.title)),
            FieldDiff(
                "release_date",
                left.release_date,
                right.release_date,
                _text_differs(left.release_date, right.release_date),
            ),
            FieldDiff(
                "genres",
                _format_genres(left.genre_1, left.genre_2),
                _format_genres(right.genre_1, right.genre_2),
                genres_differ,
            ),
            FieldDiff("track_count", left.track_count, right.track_count, tracks_differ),
            FieldDiff("cover", left.has_cover, right.has_cover, left.has_cover != right.has_cover),
        )
    )

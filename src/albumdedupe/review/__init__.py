"""Human arbitration of duplicate candidates."""

from albumdedupe.review.manual import ManualReviewSession
from albumdedupe.review.models import (
    ActionOutcome,
    FieldDiff,
    RecordDiff,
    ReviewAction,
    SessionState,
    diff_records,
)
from albumdedupe.review.session import ReviewSession, SequentialSession

__all__ = [
    "SessionState",
    "ReviewAction",
    "ActionOutcome",
    "FieldDiff",
    "RecordDiff",
    "diff_records",
    "SequentialSession",
    "ReviewSession",
    "ManualReviewSession",
]

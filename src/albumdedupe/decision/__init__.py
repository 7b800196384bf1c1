"""Three-way match decision policy.

This module maps sensitivity to per-field minimum scores and routes pair
evaluations to auto-merge, review or ignore.
"""

from albumdedupe.decision.models import (
    AUTO_MERGE_THRESHOLD,
    MAX_SENSITIVITY,
    MIN_SENSITIVITY,
    MODAL_THRESHOLD,
    Decision,
)
from albumdedupe.decision.policy import clamp_sensitivity, classify, min_score_for

__all__ = [
    "Decision",
    "MODAL_THRESHOLD",
    "AUTO_MERGE_THRESHOLD",
    "MIN_SENSITIVITY",
    "MAX_SENSITIVITY",
    "min_score_for",
    "clamp_sensitivity",
    "classify",
]

"""Threshold-driven decision policy.

Sensitivity is a user-facing knob: lower values surface more candidate pairs.
It maps to the per-field minimum similarity both artist and album must reach,
while the auto-merge cutoff stays fixed.
"""

import math
from typing import TYPE_CHECKING, Any

from albumdedupe.decision.models import (
    MAX_SENSITIVITY,
    MIN_SCORE_CEILING,
    MIN_SCORE_STEPS,
    MIN_SENSITIVITY,
    MODAL_THRESHOLD,
    Decision,
)

if TYPE_CHECKING:
    from albumdedupe.scoring.models import PairEvaluation

__all__ = [
    "min_score_for",
    "clamp_sensitivity",
    "classify",
]


def min_score_for(threshold: float) -> float:
    """Per-field minimum similarity derived from a sensitivity threshold.

    Parameters
    ----------
    threshold : float
        Sensitivity threshold.

    Returns
    -------
    float
        0.25 up to 0.05, 0.35 up to 0.15, 0.45 up to 0.30, otherwise 0.50.
    """
    for upper, min_score in MIN_SCORE_STEPS:
        if threshold <= upper:
            return min_score
    return MIN_SCORE_CEILING


def clamp_sensitivity(value: Any, default: float = MODAL_THRESHOLD) -> float:
    """Coerce a user-supplied sensitivity into the accepted range.

    Parameters
    ----------
    value : Any
        Raw sensitivity (number, numeric string or None).
    default : float
        Used when ``value`` is missing or not numeric.

    Returns
    -------
    float
        Value clamped into ``[MIN_SENSITIVITY, MAX_SENSITIVITY]``.
    """
    if value is None or isinstance(value, bool):
        number = default
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = default
        if math.isnan(number):
            number = default
    return min(MAX_SENSITIVITY, max(MIN_SENSITIVITY, number))


def classify(evaluation: "PairEvaluation") -> Decision:
    """Route a pair evaluation to auto-merge, review or ignore."""
    if not evaluation.is_match:
        return Decision.IGNORE
    if evaluation.should_auto_merge:
        return Decision.AUTO_MERGE
    return Decision.REVIEW

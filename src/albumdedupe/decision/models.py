"""Data models and constants for the match decision policy."""

from enum import StrEnum

__all__ = [
    "Decision",
    "MODAL_THRESHOLD",
    "AUTO_MERGE_THRESHOLD",
    "MIN_SENSITIVITY",
    "MAX_SENSITIVITY",
    "CHECK_MAX_MATCHES",
    "MANUAL_THRESHOLD",
    "MANUAL_MAX_MATCHES",
    "SCAN_RESULT_LIMIT",
    "PROBE_MAX_RESULTS",
    "MIN_SCORE_STEPS",
    "MIN_SCORE_CEILING",
]


class Decision(StrEnum):
    """Three-way routing of a candidate pair.

    Attributes
    ----------
    AUTO_MERGE : str
        Confident enough to merge without a human.
    REVIEW : str
        Surfaced to a reviewer.
    IGNORE : str
        Not a duplicate candidate.
    """

    AUTO_MERGE = "AUTO_MERGE"
    REVIEW = "REVIEW"
    IGNORE = "IGNORE"


# Default sensitivity used by scans and incoming-album checks
MODAL_THRESHOLD = 0.10
# Confidence at or above which a match may be merged without review
AUTO_MERGE_THRESHOLD = 0.98

# Accepted sensitivity range; values outside are clamped
MIN_SENSITIVITY = 0.03
MAX_SENSITIVITY = 0.5

CHECK_MAX_MATCHES = 3
MANUAL_THRESHOLD = 0.15
MANUAL_MAX_MATCHES = 5
SCAN_RESULT_LIMIT = 100
PROBE_MAX_RESULTS = 10

# (upper bound on threshold, per-field minimum score), checked in order
MIN_SCORE_STEPS: tuple[tuple[float, float], ...] = (
    (0.05, 0.25),
    (0.15, 0.35),
    (0.30, 0.45),
)
MIN_SCORE_CEILING = 0.50

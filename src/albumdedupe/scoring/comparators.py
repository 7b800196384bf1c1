"""Field comparators for pairwise scoring.

This module provides pure, deterministic functions for comparing artist and
album title strings. Every score is bounded in [0.0, 1.0] and symmetric in its
arguments.
"""

from rapidfuzz.distance import Levenshtein

from albumdedupe.normalize import normalize_for_comparison
from albumdedupe.scoring.models import SimilarityReason, SimilarityResult

__all__ = [
    "edit_similarity",
    "jaccard_similarity",
    "token_similarity",
    "similarity",
]


def edit_similarity(text_a: str, text_b: str) -> float:
    """Levenshtein similarity normalized by the longer string.

    Parameters
    ----------
    text_a : str
        First (normalized) string.
    text_b : str
        Second (normalized) string.

    Returns
    -------
    float
        ``1 - distance / max(len(a), len(b))``; 1.0 when both are empty.
    """
    longest = max(len(text_a), len(text_b))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(text_a, text_b) / longest


def jaccard_similarity(set_a: set[str], set_b: set[str]) -> float:
    """Calculate Jaccard similarity between two sets.

    Parameters
    ----------
    set_a : set[str]
        First set.
    set_b : set[str]
        Second set.

    Returns
    -------
    float
        Jaccard similarity (0.0-1.0).

    Notes
    -----
    Jaccard = |A ∩ B| / |A ∪ B|

    When both sets are empty the result is 1.0; callers guard empty input
    before reaching this point.
    """
    if not set_a and not set_b:
        return 1.0
    if not set_a or not set_b:
        return 0.0
    return len(set_a & set_b) / len(set_a | set_b)


def token_similarity(text_a: str, text_b: str) -> float:
    """Jaccard similarity over whitespace-separated tokens."""
    return jaccard_similarity(set(text_a.split()), set(text_b.split()))


def similarity(
    text_a: str | None,
    text_b: str | None,
    *,
    remove_articles: bool = True,
) -> SimilarityResult:
    """Compare two raw strings after normalization.

    Parameters
    ----------
    text_a : str | None
        First raw value (artist or title).
    text_b : str | None
        Second raw value.
    remove_articles : bool
        Forwarded to the normalizer.

    Returns
    -------
    SimilarityResult
        Score and the signal that produced it.

    Notes
    -----
    The score is the maximum of edit similarity and token overlap, so word
    reordering ("Black Album The") and small typos ("Metalica") both score
    high. Ties are reported as edit distance.
    """
    norm_a = normalize_for_comparison(text_a, remove_articles=remove_articles)
    norm_b = normalize_for_comparison(text_b, remove_articles=remove_articles)

    if not norm_a or not norm_b:
        return SimilarityResult(0.0, SimilarityReason.EMPTY_INPUT)
    if norm_a == norm_b:
        return SimilarityResult(1.0, SimilarityReason.EXACT_NORMALIZED)

    edit = edit_similarity(norm_a, norm_b)
    token = token_similarity(norm_a, norm_b)
    if token > edit:
        return SimilarityResult(token, SimilarityReason.TOKEN_OVERLAP)
    return SimilarityResult(edit, SimilarityReason.EDIT_DISTANCE)

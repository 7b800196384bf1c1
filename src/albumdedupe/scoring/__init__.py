"""Pairwise similarity scoring for album records.

This module combines edit distance and token overlap over normalized artist
and title strings into an explainable pair evaluation.
"""

from albumdedupe.scoring.comparators import (
    edit_similarity,
    jaccard_similarity,
    similarity,
    token_similarity,
)
from albumdedupe.scoring.evaluator import MatchOptions, evaluate_pair
from albumdedupe.scoring.models import (
    PairEvaluation,
    ScoringWeights,
    SimilarityReason,
    SimilarityResult,
)

__all__ = [
    # Models
    "SimilarityReason",
    "SimilarityResult",
    "ScoringWeights",
    "PairEvaluation",
    # Comparators
    "edit_similarity",
    "jaccard_similarity",
    "token_similarity",
    "similarity",
    # Evaluation
    "MatchOptions",
    "evaluate_pair",
]

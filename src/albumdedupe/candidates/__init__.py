"""Candidate pair generation for album deduplication."""

from albumdedupe.candidates.generator import (
    find_potential_duplicates,
    is_excluded,
    scan_catalog,
)
from albumdedupe.candidates.models import CandidatePair, ScanResult, SimilarCheck

__all__ = [
    "CandidatePair",
    "ScanResult",
    "SimilarCheck",
    "scan_catalog",
    "find_potential_duplicates",
    "is_excluded",
]

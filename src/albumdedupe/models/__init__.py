"""Shared data types for albumdedupe.

This package contains the catalog records and identifier helpers consumed
across the engine.

Domain-specific types live closer to their consumers:
- Scoring types → albumdedupe.scoring.models
- Candidate types → albumdedupe.candidates.models
- Merge types → albumdedupe.merge.models
"""

from albumdedupe.models.identifiers import (
    INTERNAL_PREFIX,
    MANUAL_PREFIX,
    canonical_pair,
    exclusion_keys,
    is_internal_id,
    is_manual_id,
    pair_id,
)
from albumdedupe.models.records import (
    AlbumRecord,
    DistinctPair,
    ListReference,
    is_blank,
)

__all__ = [
    # Record models
    "AlbumRecord",
    "ListReference",
    "DistinctPair",
    "is_blank",
    # Identifiers
    "MANUAL_PREFIX",
    "INTERNAL_PREFIX",
    "canonical_pair",
    "pair_id",
    "exclusion_keys",
    "is_manual_id",
    "is_internal_id",
]

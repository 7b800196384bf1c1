"""Album merge: field fusion, reference rewrite and loser deletion."""

from albumdedupe.merge.field_merge import fuse_fields, should_adopt
from albumdedupe.merge.models import (
    MergeProvenance,
    MergeProvenanceField,
    MergeResult,
    MergeRule,
)
from albumdedupe.merge.resolver import merge_albums

__all__ = [
    "MergeRule",
    "MergeProvenanceField",
    "MergeProvenance",
    "MergeResult",
    "fuse_fields",
    "should_adopt",
    "merge_albums",
]

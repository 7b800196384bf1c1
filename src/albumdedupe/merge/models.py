"""Data models for album merges."""

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "MergeRule",
    "MergeProvenanceField",
    "MergeProvenance",
    "MergeResult",
]


class MergeRule:
    """Rule identifiers recorded in merge provenance."""

    FILL_IF_MISSING = "fill_if_missing"
    TRACKS_IF_EMPTY = "tracks_if_empty"
    COVER_IF_MISSING = "cover_if_missing"
    COVER_LARGER = "cover_larger"
    SUMMARY_IF_MISSING = "summary_if_missing"


@dataclass(frozen=True)
class MergeProvenanceField:
    """Provenance for a single adopted field.

    Attributes
    ----------
    from_album_id : str
        Album that supplied the value.
    rule : str
        Rule used for adoption.
    """

    from_album_id: str
    rule: str


@dataclass
class MergeProvenance:
    """Field-level provenance of a merge.

    Attributes
    ----------
    fields : dict[str, MergeProvenanceField]
        Adopted field name to provenance.
    """

    fields: dict[str, MergeProvenanceField] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            name: {"from_album_id": prov.from_album_id, "rule": prov.rule}
            for name, prov in self.fields.items()
        }


@dataclass(frozen=True)
class MergeResult:
    """Outcome of merging one album into another.

    Attributes
    ----------
    keep_id : str
        Surviving album.
    delete_id : str
        Absorbed album.
    list_items_updated : int
        List positions rewritten to the keeper.
    records_deleted : int
        Albums deleted (0 or 1).
    distinct_pairs_removed : int
        Distinct pairs that mentioned the absorbed album.
    metadata_merged : bool
        Whether any field was adopted by the keeper.
    fields_merged : tuple[str, ...]
        Names of adopted fields.
    provenance : MergeProvenance
        Where each adopted field came from.
    """

    keep_id: str
    delete_id: str
    list_items_updated: int
    records_deleted: int
    distinct_pairs_removed: int = 0
    metadata_merged: bool = False
    fields_merged: tuple[str, ...] = ()
    provenance: MergeProvenance = field(default_factory=MergeProvenance)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "keep_id": self.keep_id,
            "delete_id": self.delete_id,
            "list_items_updated": self.list_items_updated,
            "records_deleted": self.records_deleted,
            "distinct_pairs_removed": self.distinct_pairs_removed,
            "metadata_merged": self.metadata_merged,
            "fields_merged": list(self.fields_merged),
            "provenance": self.provenance.to_dict(),
        }

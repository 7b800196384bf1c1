"""Merge one catalog album into another.

All steps run inside a single ``BEGIN IMMEDIATE`` transaction:

1. Adopt missing fields from the loser into the keeper.
2. Rewrite list references from the loser to the keeper.
3. Delete the loser.
4. Delete distinct pairs that mention the loser.

A failure at any step rolls every change back.
"""

from __future__ import annotations

from typing import Any

from albumdedupe.audit.logger import AuditLogger
from albumdedupe.errors import ConflictError, InvalidArgumentError, NotFoundError
from albumdedupe.merge.field_merge import fuse_fields as compute_fused_fields
from albumdedupe.merge.models import MergeProvenance, MergeResult
from albumdedupe.store import CatalogStore

__all__ = ["merge_albums"]


def merge_albums(
    store: CatalogStore,
    keep_id: str,
    delete_id: str,
    *,
    fuse_fields: bool = True,
    logger: AuditLogger | None = None,
) -> MergeResult:
    """Absorb ``delete_id`` into ``keep_id``.

    Parameters
    ----------
    store : CatalogStore
        Catalog to modify.
    keep_id : str
        Album that survives.
    delete_id : str
        Album that is absorbed and deleted.
    fuse_fields : bool
        Adopt missing metadata from the loser (default True).
    logger : AuditLogger | None, optional
        Audit logger for merge events.

    Returns
    -------
    MergeResult
        Counters and adopted fields.

    Raises
    ------
    InvalidArgumentError
        If an ID is missing or both IDs are equal.
    NotFoundError
        If the keeper does not exist.
    ConflictError
        If the loser is already gone and nothing references it.
    StorageError
        If the database fails; nothing is changed.
    """
    if not keep_id or not delete_id:
        raise InvalidArgumentError("keep_id and delete_id are required")
    if keep_id == delete_id:
        raise InvalidArgumentError("Cannot merge album with itself")

    with store.transaction():
        keeper = store.get_album(keep_id)
        if keeper is None:
            raise NotFoundError(f"Keep album not found: {keep_id}", album_id=keep_id)

        loser = store.get_album(delete_id)
        if loser is None and store.count_references(delete_id) == 0:
            message = f"Album {delete_id} was already merged or deleted"
            if logger:
                logger.merge_conflict(keep_id, delete_id, message)
            raise ConflictError(message, album_id=delete_id)

        updates: dict[str, Any] = {}
        provenance = MergeProvenance()
        if loser is not None and fuse_fields:
            updates, provenance = compute_fused_fields(keeper, loser)
            store.update_album_fields(keep_id, updates)

        list_items_updated = store.rewrite_references(delete_id, keep_id)
        records_deleted = store.delete_album(delete_id)
        pairs_removed = store.exclusions.forget(delete_id)

    result = MergeResult(
        keep_id=keep_id,
        delete_id=delete_id,
        list_items_updated=list_items_updated,
        records_deleted=records_deleted,
        distinct_pairs_removed=pairs_removed,
        metadata_merged=bool(updates),
        fields_merged=tuple(updates),
        provenance=provenance,
    )
    if logger:
        logger.merge_applied(
            keep_id,
            delete_id,
            {
                "list_items_updated": result.list_items_updated,
                "records_deleted": result.records_deleted,
                "distinct_pairs_removed": result.distinct_pairs_removed,
                "fields_merged": list(result.fields_merged),
            },
        )
    return result

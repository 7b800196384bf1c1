"""Persisted user-confirmed "not a duplicate" decisions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from albumdedupe.errors import InvalidArgumentError
from albumdedupe.models import DistinctPair, canonical_pair, exclusion_keys
from albumdedupe.store._sqlite import storage_errors
from albumdedupe.utils import get_iso_timestamp

if TYPE_CHECKING:
    from albumdedupe.store.catalog import CatalogStore

__all__ = ["ExclusionStore"]


class ExclusionStore:
    """Distinct pairs stored in ``album_distinct_pairs``.

    Shares the catalog's connection, so its writes join any open catalog
    transaction.
    """

    def __init__(self, catalog: CatalogStore) -> None:
        self._catalog = catalog

    def add(self, album_id_a: str, album_id_b: str, created_by: str | None = None) -> bool:
        """Record that two albums are distinct.

        Parameters
        ----------
        album_id_a : str
            One album ID.
        album_id_b : str
            The other album ID (argument order does not matter).
        created_by : str | None, optional
            Reviewer identity.

        Returns
        -------
        bool
            True when a new row was created, False when it already existed.

        Raises
        ------
        InvalidArgumentError
            If either ID is missing or both are the same.
        """
        if not album_id_a or not album_id_b:
            raise InvalidArgumentError("Both album IDs are required")
        if album_id_a == album_id_b:
            raise InvalidArgumentError("Cannot mark an album as distinct from itself")

        pair = DistinctPair.of(
            album_id_a, album_id_b, created_by=created_by, created_at=get_iso_timestamp()
        )
        with storage_errors("mark distinct"):
            cursor = self._catalog.connection.execute(
                "INSERT INTO album_distinct_pairs (album_id_1, album_id_2, created_by, created_at) "
                "VALUES (?, ?, ?, ?) ON CONFLICT (album_id_1, album_id_2) DO NOTHING",
                (pair.album_id_1, pair.album_id_2, pair.created_by, pair.created_at),
            )
        return cursor.rowcount > 0

    def contains(self, album_id_a: str, album_id_b: str) -> bool:
        """Whether the pair is recorded, in either ordering."""
        first, second = canonical_pair(album_id_a, album_id_b)
        with storage_errors("look up distinct pair"):
            row = self._catalog.connection.execute(
                "SELECT 1 FROM album_distinct_pairs WHERE album_id_1 = ? AND album_id_2 = ?",
                (first, second),
            ).fetchone()
        return row is not None

    def list_pairs(self) -> list[DistinctPair]:
        """All stored pairs in canonical order."""
        with storage_errors("list distinct pairs"):
            rows = self._catalog.connection.execute(
                "SELECT album_id_1, album_id_2, created_by, created_at "
                "FROM album_distinct_pairs ORDER BY album_id_1, album_id_2"
            ).fetchall()
        return [
            DistinctPair(
                row["album_id_1"],
                row["album_id_2"],
                created_by=row["created_by"],
                created_at=row["created_at"],
            )
            for row in rows
        ]

    def load_keys(self) -> frozenset[tuple[str, str]]:
        """Lookup set holding both orderings of every stored pair."""
        return exclusion_keys((p.album_id_1, p.album_id_2) for p in self.list_pairs())

    def count(self) -> int:
        """Number of stored pairs."""
        with storage_errors("count distinct pairs"):
            row = self._catalog.connection.execute(
                "SELECT COUNT(*) FROM album_distinct_pairs"
            ).fetchone()
        return int(row[0])

    def forget(self, album_id: str) -> int:
        """Delete every pair mentioning ``album_id``; returns rows removed."""
        with storage_errors("forget distinct pairs"):
            cursor = self._catalog.connection.execute(
                "DELETE FROM album_distinct_pairs WHERE album_id_1 = ? OR album_id_2 = ?",
                (album_id, album_id),
            )
        return cursor.rowcount

"""SQLite-backed catalog of albums and list references.

The connection runs in autocommit mode; multi-statement changes go through
:meth:`CatalogStore.transaction`, which issues ``BEGIN IMMEDIATE`` so
concurrent writers serialize instead of interleaving.
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from albumdedupe.errors import InvalidArgumentError, NotFoundError, StorageError
from albumdedupe.models import AlbumRecord, ListReference
from albumdedupe.store._sqlite import storage_errors
from albumdedupe.store.exclusions import ExclusionStore
from albumdedupe.store.schema import ALBUM_COLUMNS, SCHEMA_DDL, SCHEMA_VERSION
from albumdedupe.utils import get_iso_timestamp

__all__ = ["CatalogStore"]

# Fields the merge resolver may rewrite on a surviving album
MUTABLE_FIELDS: frozenset[str] = frozenset(ALBUM_COLUMNS) - {"album_id"}


class CatalogStore:
    """Album catalog over a single SQLite connection.

    Attributes
    ----------
    path : str
        Database path (``":memory:"`` for an in-memory catalog).
    """

    def __init__(self, path: str | Path = ":memory:") -> None:
        """Open the database and create the schema if missing.

        Parameters
        ----------
        path : str | Path
            SQLite database file, or ``":memory:"``.

        Raises
        ------
        StorageError
            If the file cannot be opened or was written by a newer schema.
        """
        self.path = str(path)
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        with storage_errors("open catalog"):
            self._conn = sqlite3.connect(self.path, isolation_level=None)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            self._conn.executescript(SCHEMA_DDL)
            stored_version = self._conn.execute("PRAGMA user_version").fetchone()[0]
            if stored_version == 0:
                self._conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")

        if stored_version > SCHEMA_VERSION:
            self._conn.close()
            raise StorageError(
                f"Catalog schema version {stored_version} is newer than supported "
                f"({SCHEMA_VERSION})"
            )

        self._depth = 0
        self.exclusions = ExclusionStore(self)

    def __enter__(self) -> CatalogStore:
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close the connection."""
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    @property
    def schema_version(self) -> int:
        """Schema version stamped in the database file."""
        with storage_errors("read schema version"):
            return int(self._conn.execute("PRAGMA user_version").fetchone()[0])

    @property
    def connection(self) -> sqlite3.Connection:
        """Underlying connection, for collaborators sharing transactions."""
        return self._conn

    # -----------------------------------------------------------------------
    # Transactions
    # -----------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Run a block atomically.

        Nested calls join the outermost transaction. Any exception rolls the
        whole transaction back and propagates; ``sqlite3.Error`` is re-raised
        as :class:`StorageError`.

        Yields
        ------
        sqlite3.Connection
            The connection to execute statements on.
        """
        if self._depth:
            self._depth += 1
            try:
                yield self._conn
            finally:
                self._depth -= 1
            return

        with storage_errors("begin transaction"):
            self._conn.execute("BEGIN IMMEDIATE")
        self._depth = 1
        try:
            yield self._conn
        except BaseException as exc:
            self._depth = 0
            if self._conn.in_transaction:
                with storage_errors("rollback"):
                    self._conn.execute("ROLLBACK")
            if isinstance(exc, sqlite3.Error):
                raise StorageError(f"transaction failed: {exc}") from exc
            raise
        else:
            self._depth = 0
            with storage_errors("commit"):
                self._conn.execute("COMMIT")

    @property
    def in_transaction(self) -> bool:
        """Whether a transaction is currently open."""
        return self._depth > 0

    # -----------------------------------------------------------------------
    # Albums
    # -----------------------------------------------------------------------

    def upsert_album(self, record: AlbumRecord) -> None:
        """Insert an album or replace all of its stored fields."""
        values = _record_to_row(record)
        columns = ", ".join(ALBUM_COLUMNS)
        placeholders = ", ".join("?" for _ in ALBUM_COLUMNS)
        updates = ", ".join(f"{col} = excluded.{col}" for col in ALBUM_COLUMNS[1:])
        sql = (
            f"INSERT INTO albums ({columns}, updated_at) VALUES ({placeholders}, ?) "
            f"ON CONFLICT(album_id) DO UPDATE SET {updates}, updated_at = excluded.updated_at"
        )
        with storage_errors("upsert album"):
            self._conn.execute(sql, (*values, get_iso_timestamp()))

    def add_albums(self, records: Iterable[AlbumRecord]) -> int:
        """Upsert several albums in one transaction; returns the count."""
        count = 0
        with self.transaction():
            for record in records:
                self.upsert_album(record)
                count += 1
        return count

    def get_album(self, album_id: str, *, include_cover: bool = True) -> AlbumRecord | None:
        """Load one album, or None when it does not exist."""
        sql = f"SELECT {_select_columns(include_cover)} FROM albums WHERE album_id = ?"
        with storage_errors("load album"):
            row = self._conn.execute(sql, (album_id,)).fetchone()
        return _row_to_record(row) if row is not None else None

    def has_album(self, album_id: str) -> bool:
        """Whether an album with ``album_id`` exists."""
        with storage_errors("look up album"):
            row = self._conn.execute(
                "SELECT 1 FROM albums WHERE album_id = ?", (album_id,)
            ).fetchone()
        return row is not None

    def list_albums(self, *, include_cover: bool = False) -> list[AlbumRecord]:
        """Load every album ordered by ID.

        Cover bytes are not loaded by default; ``cover_image_size`` is still
        populated.
        """
        sql = f"SELECT {_select_columns(include_cover)} FROM albums ORDER BY album_id"
        with storage_errors("list albums"):
            rows = self._conn.execute(sql).fetchall()
        return [_row_to_record(row) for row in rows]

    def count_albums(self) -> int:
        """Number of albums in the catalog."""
        with storage_errors("count albums"):
            return int(self._conn.execute("SELECT COUNT(*) FROM albums").fetchone()[0])

    def update_album_fields(self, album_id: str, fields: dict[str, Any]) -> int:
        """Overwrite selected fields of an album.

        Parameters
        ----------
        album_id : str
            Album to update.
        fields : dict[str, Any]
            Column values keyed by field name.

        Returns
        -------
        int
            Number of rows updated (0 or 1).
        """
        if not fields:
            return 0
        unknown = set(fields) - MUTABLE_FIELDS
        if unknown:
            raise InvalidArgumentError(f"Cannot update unknown album fields: {sorted(unknown)}")

        values = [
            json.dumps(list(value)) if name == "tracks" and value is not None else value
            for name, value in fields.items()
        ]
        assignments = ", ".join(f"{name} = ?" for name in fields)
        sql = f"UPDATE albums SET {assignments}, updated_at = ? WHERE album_id = ?"
        with storage_errors("update album"):
            cursor = self._conn.execute(sql, (*values, get_iso_timestamp(), album_id))
        return cursor.rowcount

    def delete_album(self, album_id: str) -> int:
        """Delete an album; returns the number of rows removed."""
        with storage_errors("delete album"):
            cursor = self._conn.execute("DELETE FROM albums WHERE album_id = ?", (album_id,))
        return cursor.rowcount

    # -----------------------------------------------------------------------
    # List references
    # -----------------------------------------------------------------------

    def add_list_item(self, list_id: str, position: int, album_id: str) -> ListReference:
        """Place an album at a list position.

        Raises
        ------
        NotFoundError
            If the album does not exist.
        """
        if not self.has_album(album_id):
            raise NotFoundError(f"Album not found: {album_id}", album_id=album_id)
        with storage_errors("add list item"):
            self._conn.execute(
                "INSERT OR REPLACE INTO list_items (list_id, position, album_id) VALUES (?, ?, ?)",
                (list_id, position, album_id),
            )
        return ListReference(list_id=list_id, position=position, album_id=album_id)

    def list_items_for(self, album_id: str) -> list[ListReference]:
        """All list positions referencing ``album_id``."""
        with storage_errors("load list items"):
            rows = self._conn.execute(
                "SELECT list_id, position, album_id FROM list_items "
                "WHERE album_id = ? ORDER BY list_id, position",
                (album_id,),
            ).fetchall()
        return [ListReference(row["list_id"], row["position"], row["album_id"]) for row in rows]

    def get_list(self, list_id: str) -> list[ListReference]:
        """All positions of one list, in order."""
        with storage_errors("load list"):
            rows = self._conn.execute(
                "SELECT list_id, position, album_id FROM list_items "
                "WHERE list_id = ? ORDER BY position",
                (list_id,),
            ).fetchall()
        return [ListReference(row["list_id"], row["position"], row["album_id"]) for row in rows]

    def count_references(self, album_id: str) -> int:
        """Number of list positions referencing ``album_id``."""
        with storage_errors("count list items"):
            row = self._conn.execute(
                "SELECT COUNT(*) FROM list_items WHERE album_id = ?", (album_id,)
            ).fetchone()
        return int(row[0])

    def reference_usage(self) -> dict[str, list[str]]:
        """Map album ID to the distinct list IDs referencing it."""
        with storage_errors("load list usage"):
            rows = self._conn.execute(
                "SELECT DISTINCT album_id, list_id FROM list_items ORDER BY album_id, list_id"
            ).fetchall()
        usage: dict[str, list[str]] = {}
        for row in rows:
            usage.setdefault(row["album_id"], []).append(row["list_id"])
        return usage

    def rewrite_references(self, from_album_id: str, to_album_id: str) -> int:
        """Point every list position at ``to_album_id``; returns rows changed."""
        with storage_errors("rewrite list items"):
            cursor = self._conn.execute(
                "UPDATE list_items SET album_id = ? WHERE album_id = ?",
                (to_album_id, from_album_id),
            )
        return cursor.rowcount


# ---------------------------------------------------------------------------
# Row conversion
# ---------------------------------------------------------------------------


def _select_columns(include_cover: bool) -> str:
    columns = [col for col in ALBUM_COLUMNS if col != "cover_image"]
    columns.append("cover_image" if include_cover else "NULL AS cover_image")
    columns.append("COALESCE(length(cover_image), 0) AS cover_image_size")
    return ", ".join(columns)


def _record_to_row(record: AlbumRecord) -> tuple[Any, ...]:
    return (
        record.album_id,
        record.artist,
        record.title,
        record.release_date,
        record.country,
        record.genre_1,
        record.genre_2,
        json.dumps(list(record.tracks)) if record.tracks is not None else None,
        record.cover_image,
        record.cover_image_format,
        record.summary,
        record.summary_source,
        record.summary_fetched_at,
    )


def _row_to_record(row: sqlite3.Row) -> AlbumRecord:
    tracks = json.loads(row["tracks"]) if row["tracks"] else None
    cover = row["cover_image"]
    return AlbumRecord(
        album_id=row["album_id"],
        artist=row["artist"],
        title=row["title"],
        release_date=row["release_date"],
        country=row["country"],
        genre_1=row["genre_1"],
        genre_2=row["genre_2"],
        tracks=tuple(tracks) if tracks is not None else None,
        cover_image=bytes(cover) if cover is not None else None,
        cover_image_format=row["cover_image_format"],
        summary=row["summary"],
        summary_source=row["summary_source"],
        summary_fetched_at=row["summary_fetched_at"],
        cover_image_size=int(row["cover_image_size"] or 0),
    )

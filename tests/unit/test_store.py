"""Tests for the SQLite catalog and distinct-pair store."""

import sqlite3
from collections.abc import Callable
from pathlib import Path

import pytest

from albumdedupe.errors import InvalidArgumentError, NotFoundError, StorageError
from albumdedupe.models import AlbumRecord
from albumdedupe.store import SCHEMA_VERSION, CatalogStore

# ---------------------------------------------------------------------------
# Albums
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_upsert_and_get_album(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test an album round-trips through the catalog."""
    record = make_record(
        "a1",
        tracks=["Speak to Me", "Breathe"],
        cover_image=b"\x89PNG" * 4,
        cover_image_format="png",
        country="UK",
    )
    store.upsert_album(record)

    loaded = store.get_album("a1")

    assert loaded == record
    assert loaded.tracks == ("Speak to Me", "Breathe")
    assert loaded.cover_image_size == 16


@pytest.mark.unit
def test_upsert_replaces_fields(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test upserting an existing ID overwrites its fields."""
    store.upsert_album(make_record("a1", country="UK"))
    store.upsert_album(make_record("a1", country=None, genre_1="Rock"))

    loaded = store.get_album("a1")

    assert loaded.country is None
    assert loaded.genre_1 == "Rock"
    assert store.count_albums() == 1


@pytest.mark.unit
def test_list_albums_skips_cover_bytes(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test bulk reads leave covers unloaded but report their size."""
    store.add_albums([make_record("b", cover_image=b"x" * 10), make_record("a")])

    albums = store.list_albums()

    assert [a.album_id for a in albums] == ["a", "b"]
    assert albums[1].cover_image is None
    assert albums[1].cover_image_size == 10
    assert albums[1].has_cover
    assert not albums[0].has_cover


@pytest.mark.unit
def test_get_missing_album(store: CatalogStore) -> None:
    """Test loading an unknown ID returns None."""
    assert store.get_album("nope") is None
    assert not store.has_album("nope")


@pytest.mark.unit
def test_update_album_fields(store: CatalogStore, make_record: Callable[..., AlbumRecord]) -> None:
    """Test selected fields can be overwritten."""
    store.upsert_album(make_record("a1"))

    assert store.update_album_fields("a1", {"country": "NO", "tracks": ("One",)}) == 1

    loaded = store.get_album("a1")
    assert loaded.country == "NO"
    assert loaded.tracks == ("One",)


@pytest.mark.unit
def test_update_album_rejects_unknown_fields(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test unknown or immutable columns are rejected."""
    store.upsert_album(make_record("a1"))

    with pytest.raises(InvalidArgumentError):
        store.update_album_fields("a1", {"album_id": "a2"})
    with pytest.raises(InvalidArgumentError):
        store.update_album_fields("a1", {"rating": 5})


# ---------------------------------------------------------------------------
# List references
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_list_items(store: CatalogStore, make_record: Callable[..., AlbumRecord]) -> None:
    """Test list positions reference albums."""
    store.add_albums([make_record("a"), make_record("b")])
    store.add_list_item("L1", 1, "a")
    store.add_list_item("L1", 2, "b")
    store.add_list_item("L2", 1, "a")

    assert [ref.album_id for ref in store.get_list("L1")] == ["a", "b"]
    assert store.count_references("a") == 2
    assert store.reference_usage() == {"a": ["L1", "L2"], "b": ["L1"]}


@pytest.mark.unit
def test_list_item_requires_album(store: CatalogStore) -> None:
    """Test a list cannot reference a missing album."""
    with pytest.raises(NotFoundError) as exc_info:
        store.add_list_item("L1", 1, "ghost")

    assert exc_info.value.album_id == "ghost"


@pytest.mark.unit
def test_delete_referenced_album_is_rejected(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test foreign keys prevent dangling list references."""
    store.upsert_album(make_record("a"))
    store.add_list_item("L1", 1, "a")

    with pytest.raises(StorageError) as exc_info:
        store.delete_album("a")

    assert isinstance(exc_info.value.__cause__, sqlite3.IntegrityError)
    assert store.has_album("a")


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_transaction_rolls_back_on_error(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test an exception inside a transaction undoes every write."""
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.upsert_album(make_record("a"))
            raise RuntimeError("boom")

    assert store.count_albums() == 0
    assert not store.in_transaction


@pytest.mark.unit
def test_nested_transaction_joins_outer(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test a failing outer block also undoes nested writes."""
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.add_albums([make_record("a"), make_record("b")])
            assert store.in_transaction
            raise RuntimeError("boom")

    assert store.count_albums() == 0


@pytest.mark.unit
def test_transaction_wraps_sqlite_errors(store: CatalogStore) -> None:
    """Test raw sqlite errors surface as StorageError."""
    with pytest.raises(StorageError):
        with store.transaction() as conn:
            conn.execute("INSERT INTO no_such_table VALUES (1)")


class _RollbackFails:
    """Connection stand-in whose ROLLBACK runs but then reports an error."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    @property
    def in_transaction(self) -> bool:
        return self._conn.in_transaction

    def execute(self, sql: str, *args: object) -> sqlite3.Cursor:
        if sql == "ROLLBACK":
            self._conn.execute(sql)
            raise sqlite3.OperationalError("disk I/O error")
        return self._conn.execute(sql, *args)

    def close(self) -> None:
        self._conn.close()


@pytest.mark.unit
def test_failed_rollback_surfaces_as_storage_error(
    store: CatalogStore, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test a failing rollback is wrapped and keeps the original error chained."""
    monkeypatch.setattr(store, "_conn", _RollbackFails(store.connection))

    with pytest.raises(StorageError, match="rollback failed") as exc_info:
        with store.transaction():
            raise RuntimeError("boom")

    assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)
    assert isinstance(exc_info.value.__cause__.__context__, RuntimeError)
    assert not store.in_transaction


@pytest.mark.unit
def test_file_backed_catalog_persists(
    tmp_path: Path, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test data survives reopening a file-backed catalog."""
    db_path = tmp_path / "nested" / "catalog.db"
    with CatalogStore(db_path) as catalog:
        catalog.upsert_album(make_record("a"))
        catalog.exclusions.add("a", "b")

    with CatalogStore(db_path) as catalog:
        assert catalog.has_album("a")
        assert catalog.exclusions.count() == 1


@pytest.mark.unit
def test_new_catalog_is_stamped_with_schema_version(tmp_path: Path) -> None:
    """Test a fresh catalog records the schema version it was created with."""
    db_path = tmp_path / "catalog.db"
    with CatalogStore(db_path) as catalog:
        assert catalog.schema_version == SCHEMA_VERSION

    with CatalogStore(db_path) as catalog:
        assert catalog.schema_version == SCHEMA_VERSION


@pytest.mark.unit
def test_newer_schema_version_is_rejected(tmp_path: Path) -> None:
    """Test a catalog written by a newer schema is not opened."""
    db_path = tmp_path / "catalog.db"
    CatalogStore(db_path).close()
    conn = sqlite3.connect(db_path)
    conn.execute(f"PRAGMA user_version = {SCHEMA_VERSION + 1}")
    conn.close()

    with pytest.raises(StorageError, match="newer than supported"):
        CatalogStore(db_path)


# ---------------------------------------------------------------------------
# Distinct pairs
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_exclusion_add_is_idempotent(store: CatalogStore) -> None:
    """Test marking a pair twice, in either order, stores one row."""
    assert store.exclusions.add("b", "a", created_by="alice")
    assert not store.exclusions.add("a", "b", created_by="bob")

    pairs = store.exclusions.list_pairs()
    assert len(pairs) == 1
    assert (pairs[0].album_id_1, pairs[0].album_id_2) == ("a", "b")
    assert pairs[0].created_by == "alice"
    assert pairs[0].created_at.endswith("Z")


@pytest.mark.unit
@pytest.mark.parametrize(("a", "b"), [("a", "a"), ("", "b"), ("a", None)])
def test_exclusion_add_rejects_invalid_ids(store: CatalogStore, a: str, b: str | None) -> None:
    """Test missing or equal IDs are rejected."""
    with pytest.raises(InvalidArgumentError):
        store.exclusions.add(a, b)  # type: ignore[arg-type]


@pytest.mark.unit
def test_exclusion_lookup(store: CatalogStore) -> None:
    """Test lookups work in both orderings."""
    store.exclusions.add("a", "b")

    assert store.exclusions.contains("b", "a")
    assert store.exclusions.load_keys() == frozenset({("a", "b"), ("b", "a")})


@pytest.mark.unit
def test_exclusion_forget(store: CatalogStore) -> None:
    """Test forgetting an album removes every pair mentioning it."""
    store.exclusions.add("a", "b")
    store.exclusions.add("c", "a")
    store.exclusions.add("b", "c")

    assert store.exclusions.forget("a") == 2
    assert store.exclusions.count() == 1

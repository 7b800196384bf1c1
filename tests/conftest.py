"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from albumdedupe.models import AlbumRecord  # noqa: E402
from albumdedupe.store import CatalogStore  # noqa: E402


@pytest.fixture
def make_record() -> Callable[..., AlbumRecord]:
    """Factory for album records with minimal boilerplate.

    Only the identifying fields are positional; everything else defaults to
    "unknown" (None).
    """

    def _factory(
        album_id: str = "alb_001",
        artist: str | None = "Pink Floyd",
        title: str | None = "The Dark Side of the Moon",
        **fields: object,
    ) -> AlbumRecord:
        return AlbumRecord(album_id=album_id, artist=artist, title=title, **fields)

    return _factory


@pytest.fixture
def store() -> Iterator[CatalogStore]:
    """In-memory catalog that is closed after the test."""
    catalog = CatalogStore(":memory:")
    yield catalog
    catalog.close()


@pytest.fixture
def pink_floyd_records(make_record: Callable[..., AlbumRecord]) -> list[AlbumRecord]:
    """Three Pink Floyd albums, two of them the same release."""
    return [
        make_record("pf-1", "Pink Floyd", "The Dark Side of the Moon", country="UK"),
        make_record("pf-2", "Pink Floyd", "The Dark Side of the Moon (Deluxe Edition)"),
        make_record("pf-3", "Pink Floyd", "The Wall"),
    ]


@pytest.fixture
def pink_floyd_store(
    store: CatalogStore, pink_floyd_records: list[AlbumRecord]
) -> CatalogStore:
    """Catalog seeded with the Pink Floyd albums."""
    store.add_albums(pink_floyd_records)
    return store

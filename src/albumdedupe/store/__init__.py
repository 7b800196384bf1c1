"""SQLite persistence for albums, list references and distinct pairs."""

from albumdedupe.store.catalog import CatalogStore
from albumdedupe.store.exclusions import ExclusionStore
from albumdedupe.store.schema import SCHEMA_VERSION

__all__ = ["CatalogStore", "ExclusionStore", "SCHEMA_VERSION"]

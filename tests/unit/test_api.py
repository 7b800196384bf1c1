"""Tests for the public API module."""

from collections.abc import Callable

import pytest

import albumdedupe
from albumdedupe import (
    CatalogStore,
    EngineConfig,
    InvalidArgumentError,
    check_similar,
    mark_distinct,
    scan_duplicates,
)
from albumdedupe.models import AlbumRecord


@pytest.mark.unit
def test_package_exports() -> None:
    """Test the package exposes its version and API."""
    assert albumdedupe.__version__
    for name in albumdedupe.__all__:
        assert hasattr(albumdedupe, name)


# ---------------------------------------------------------------------------
# scan_duplicates
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_scan_duplicates_pink_floyd(pink_floyd_store: CatalogStore) -> None:
    """Test the deluxe edition is the only duplicate at sensitivity 0.15."""
    result = scan_duplicates(pink_floyd_store, sensitivity=0.15)

    assert result.total_records == 3
    assert result.total_matches == 1
    assert result.excluded_pair_count == 0
    assert result.sensitivity == 0.15
    assert result.pairs[0].pair_id == "pf-1::pf-2"
    assert result.pairs[0].should_auto_merge


@pytest.mark.unit
@pytest.mark.parametrize(("raw", "effective"), [(None, 0.10), ("junk", 0.10), (2, 0.5)])
def test_scan_duplicates_clamps_sensitivity(
    pink_floyd_store: CatalogStore, raw: object, effective: float
) -> None:
    """Test unusable sensitivities fall back or clamp instead of failing."""
    assert scan_duplicates(pink_floyd_store, raw).sensitivity == effective


@pytest.mark.unit
def test_scan_duplicates_uses_config(pink_floyd_store: CatalogStore) -> None:
    """Test configured defaults apply when no sensitivity is given."""
    config = EngineConfig(sensitivity=0.3, result_limit=1)

    result = scan_duplicates(pink_floyd_store, config=config)

    assert result.sensitivity == 0.3
    assert len(result.pairs) == 1


@pytest.mark.unit
def test_scan_duplicates_skips_distinct_pairs(pink_floyd_store: CatalogStore) -> None:
    """Test stored distinct pairs are excluded and counted."""
    mark_distinct(pink_floyd_store, "pf-2", "pf-1")

    result = scan_duplicates(pink_floyd_store)

    assert result.total_matches == 0
    assert result.excluded_pair_count == 1


# ---------------------------------------------------------------------------
# mark_distinct
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_mark_distinct_is_idempotent(store: CatalogStore) -> None:
    """Test repeated marking reports whether a row was created."""
    assert mark_distinct(store, "a", "b", created_by="alice")
    assert not mark_distinct(store, "b", "a")
    assert store.exclusions.count() == 1


@pytest.mark.unit
def test_mark_distinct_rejects_same_album(store: CatalogStore) -> None:
    """Test an album cannot be distinct from itself."""
    with pytest.raises(InvalidArgumentError):
        mark_distinct(store, "a", "a")

    with pytest.raises(ValueError):
        mark_distinct(store, "", "a")


# ---------------------------------------------------------------------------
# check_similar
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_check_similar_incoming_album(pink_floyd_store: CatalogStore) -> None:
    """Test an incoming album finds its catalog counterparts."""
    result = check_similar(pink_floyd_store, "Pink Floyd", "Dark Side of the Moon")

    assert result.has_similar
    assert result.should_auto_merge
    assert [p.album_b.album_id for p in result.matches] == ["pf-1", "pf-2"]
    assert result.to_dict()["matches"][0]["album_id"] == "pf-1"


@pytest.mark.unit
def test_check_similar_no_match(pink_floyd_store: CatalogStore) -> None:
    """Test an unrelated album reports nothing."""
    result = check_similar(pink_floyd_store, "Kraftwerk", "Autobahn")

    assert not result.has_similar
    assert not result.should_auto_merge
    assert result.to_dict() == {"has_similar": False, "should_auto_merge": False, "matches": []}


@pytest.mark.unit
def test_check_similar_stored_album(pink_floyd_store: CatalogStore) -> None:
    """Test a stored album skips itself and its distinct pairs."""
    result = check_similar(
        pink_floyd_store, "Pink Floyd", "The Dark Side of the Moon", album_id="pf-1"
    )
    assert [p.album_b.album_id for p in result.matches] == ["pf-2"]

    mark_distinct(pink_floyd_store, "pf-1", "pf-2")
    result = check_similar(
        pink_floyd_store, "Pink Floyd", "The Dark Side of the Moon", album_id="pf-1"
    )
    assert not result.has_similar


@pytest.mark.unit
def test_check_similar_caps_matches(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test at most three matches are returned by default."""
    store.add_albums([make_record(f"a{i}", "Artist X", "Album Y") for i in range(5)])

    assert len(check_similar(store, "Artist X", "Album Y").matches) == 3


@pytest.mark.unit
def test_check_similar_uses_configured_cap(
    store: CatalogStore, make_record: Callable[..., AlbumRecord]
) -> None:
    """Test check_max_matches bounds the reported matches."""
    store.add_albums([make_record(f"a{i}", "Artist X", "Album Y") for i in range(8)])

    one = check_similar(store, "Artist X", "Album Y", config=EngineConfig(check_max_matches=1))
    six = check_similar(store, "Artist X", "Album Y", config=EngineConfig(check_max_matches=6))

    assert [p.album_b.album_id for p in one.matches] == ["a0"]
    assert len(six.matches) == 6

"""Field-level fusion rules for album merges.

The keeper's values always win. A field is adopted from the loser only when
the keeper lacks it (``None`` or ``""``) and the loser has a real value. Cover
art is the exception: the larger image wins even when both are present.
"""

from typing import Any

from albumdedupe.merge.models import MergeProvenance, MergeProvenanceField, MergeRule
from albumdedupe.models import AlbumRecord, is_blank

__all__ = ["FILL_IF_MISSING_FIELDS", "SUMMARY_FIELDS", "fuse_fields", "should_adopt"]

FILL_IF_MISSING_FIELDS: tuple[str, ...] = ("release_date", "country", "genre_1", "genre_2")
SUMMARY_FIELDS: tuple[str, ...] = ("summary", "summary_source", "summary_fetched_at")
DEFAULT_COVER_FORMAT = "jpeg"


def should_adopt(keep_value: Any, loser_value: Any) -> bool:
    """Fill-if-missing test: keeper empty and loser non-empty."""
    return is_blank(keep_value) and not is_blank(loser_value)


def fuse_fields(
    keeper: AlbumRecord,
    loser: AlbumRecord,
) -> tuple[dict[str, Any], MergeProvenance]:
    """Compute the field updates the keeper adopts from the loser.

    Parameters
    ----------
    keeper : AlbumRecord
        Surviving album, with cover bytes loaded.
    loser : AlbumRecord
        Album being absorbed, with cover bytes loaded.

    Returns
    -------
    tuple[dict[str, Any], MergeProvenance]
        Column updates for the keeper and their provenance. Empty when the
        keeper already has everything the loser offers.
    """
    updates: dict[str, Any] = {}
    provenance = MergeProvenance()

    def adopt(name: str, value: Any, rule: str) -> None:
        updates[name] = value
        provenance.fields[name] = MergeProvenanceField(loser.album_id, rule)

    for name in FILL_IF_MISSING_FIELDS:
        loser_value = getattr(loser, name)
        if should_adopt(getattr(keeper, name), loser_value):
            adopt(name, loser_value, MergeRule.FILL_IF_MISSING)

    if not keeper.tracks and loser.tracks:
        adopt("tracks", loser.tracks, MergeRule.TRACKS_IF_EMPTY)

    cover_rule = _cover_rule(keeper, loser)
    if cover_rule is not None:
        # Format travels with the image
        adopt("cover_image", loser.cover_image, cover_rule)
        adopt("cover_image_format", loser.cover_image_format or DEFAULT_COVER_FORMAT, cover_rule)

    # Summary, source and fetch time move together
    if should_adopt(keeper.summary, loser.summary):
        for name in SUMMARY_FIELDS:
            adopt(name, getattr(loser, name), MergeRule.SUMMARY_IF_MISSING)

    return updates, provenance


def _cover_rule(keeper: AlbumRecord, loser: AlbumRecord) -> str | None:
    if not loser.cover_image:
        return None
    if not keeper.cover_image:
        return MergeRule.COVER_IF_MISSING
    if len(loser.cover_image) > len(keeper.cover_image):
        return MergeRule.COVER_LARGER
    return None

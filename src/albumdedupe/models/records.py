"""Catalog record data models for albumdedupe.

This module defines the typed records the dedup engine reads from and writes
to the catalog. Optional fields distinguish ``None`` (unknown) from ``""``
(explicitly empty); for fusion purposes both count as missing.
"""

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "AlbumRecord",
    "ListReference",
    "DistinctPair",
    "is_blank",
]


def is_blank(value: Any) -> bool:
    """Return True when a field value carries no information.

    Parameters
    ----------
    value : Any
        Field value (string, sequence, bytes or None).

    Returns
    -------
    bool
        True for None, empty/whitespace strings and empty sequences.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (bytes, tuple, list)):
        return len(value) == 0
    return False


@dataclass(frozen=True)
class AlbumRecord:
    """A single album in the shared catalog.

    Attributes
    ----------
    album_id : str
        Opaque, stable, unique identifier.
    artist : str | None
        Artist name as imported.
    title : str | None
        Album title as imported.
    release_date : str | None
        Release date (free-form, usually ISO).
    country : str | None
        Country code or name.
    genre_1 : str | None
        Primary genre slot.
    genre_2 : str | None
        Secondary genre slot.
    tracks : tuple[str, ...] | None
        Ordered track titles.
    cover_image : bytes | None
        Cover art bytes. May be left unloaded by bulk reads, in which case
        ``cover_image_size`` still reports the stored size.
    cover_image_format : str | None
        Image format of the cover (e.g., 'jpeg').
    summary : str | None
        Album summary text.
    summary_source : str | None
        Provider of the summary.
    summary_fetched_at : str | None
        ISO8601 timestamp the summary was fetched.
    cover_image_size : int
        Byte size of the stored cover (0 when absent).
    """

    album_id: str
    artist: str | None
    title: str | None
    release_date: str | None = None
    country: str | None = None
    genre_1: str | None = None
    genre_2: str | None = None
    tracks: tuple[str, ...] | None = None
    cover_image: bytes | None = field(default=None, repr=False)
    cover_image_format: str | None = None
    summary: str | None = None
    summary_source: str | None = None
    summary_fetched_at: str | None = None
    cover_image_size: int = 0

    def __post_init__(self) -> None:
        """Keep cover size consistent with loaded cover bytes."""
        if self.tracks is not None and not isinstance(self.tracks, tuple):
            object.__setattr__(self, "tracks", tuple(self.tracks))
        if self.cover_image is not None:
            object.__setattr__(self, "cover_image_size", len(self.cover_image))

    @property
    def has_cover(self) -> bool:
        """Whether the record has cover art stored."""
        return self.cover_image_size > 0

    @property
    def track_count(self) -> int | None:
        """Number of tracks, or None when the track list is empty/unknown."""
        return len(self.tracks) if self.tracks else None

    @property
    def is_comparable(self) -> bool:
        """Whether the record can take part in duplicate detection."""
        return bool(self.album_id) and not is_blank(self.artist) and not is_blank(self.title)

    def brief(self) -> dict[str, Any]:
        """Summarize the record for reports (no binary payloads).

        Returns
        -------
        dict[str, Any]
            JSON-serializable description of the record.
        """
        return {
            "album_id": self.album_id,
            "artist": self.artist,
            "title": self.title,
            "release_date": self.release_date,
            "country": self.country,
            "genre_1": self.genre_1,
            "genre_2": self.genre_2,
            "track_count": self.track_count,
            "has_cover": self.has_cover,
        }


@dataclass(frozen=True)
class ListReference:
    """A position in a user list pointing at a catalog album.

    Attributes
    ----------
    list_id : str
        Owning list identifier.
    position : int
        Position within the list.
    album_id : str
        Referenced album; must always resolve to an existing record.
    """

    list_id: str
    position: int
    album_id: str


@dataclass(frozen=True)
class DistinctPair:
    """User-confirmed statement that two albums are different releases.

    Pairs are symmetric and stored in canonical order
    (``album_id_1 < album_id_2``); use :meth:`of` to build one.

    Attributes
    ----------
    album_id_1 : str
        Lexicographically smaller album ID.
    album_id_2 : str
        Lexicographically larger album ID.
    created_by : str | None
        Reviewer who marked the pair.
    created_at : str | None
        ISO8601 creation timestamp.
    """

    album_id_1: str
    album_id_2: str
    created_by: str | None = None
    created_at: str | None = None

    @classmethod
    def of(
        cls,
        album_id_a: str,
        album_id_b: str,
        *,
        created_by: str | None = None,
        created_at: str | None = None,
    ) -> "DistinctPair":
        """Build a pair in canonical order regardless of argument order."""
        first, second = sorted((album_id_a, album_id_b))
        return cls(first, second, created_by=created_by, created_at=created_at)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "album_id_1": self.album_id_1,
            "album_id_2": self.album_id_2,
            "created_by": self.created_by,
            "created_at": self.created_at,
        }

"""Data models for manual album reconciliation."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from albumdedupe.merge.models import MergeResult

__all__ = [
    "IssueType",
    "Severity",
    "ManualMatch",
    "ManualAlbumEntry",
    "IntegrityIssue",
    "ManualAuditResult",
    "ManualMergeResult",
]


class IssueType(StrEnum):
    """Data integrity problems found among manual albums."""

    MISSING_METADATA = "missing_metadata"
    DUPLICATE_MANUAL = "duplicate_manual"


class Severity(StrEnum):
    """Issue severity, most urgent first."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


SEVERITY_ORDER: dict[Severity, int] = {Severity.HIGH: 0, Severity.MEDIUM: 1, Severity.LOW: 2}


@dataclass(frozen=True)
class ManualMatch:
    """A canonical album that may be the same release as a manual entry.

    Attributes
    ----------
    album_id : str
        Canonical album ID.
    artist : str | None
        Canonical artist.
    title : str | None
        Canonical album title.
    has_cover : bool
        Whether the canonical album has cover art.
    confidence : float
        Pair confidence in [0, 1].
    should_auto_merge : bool
        Whether the pair clears the auto-merge threshold.
    """

    album_id: str
    artist: str | None
    title: str | None
    has_cover: bool
    confidence: float
    should_auto_merge: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary; confidence is reported as a percentage."""
        return {
            "album_id": self.album_id,
            "artist": self.artist,
            "title": self.title,
            "has_cover": self.has_cover,
            "confidence": round(self.confidence * 100),
            "should_auto_merge": self.should_auto_merge,
        }


@dataclass(frozen=True)
class ManualAlbumEntry:
    """A manual album with its list usage and canonical matches.

    Attributes
    ----------
    manual_id : str
        Manual album ID.
    artist : str | None
        Manual artist.
    title : str | None
        Manual album title.
    has_cover : bool
        Whether the manual album has cover art.
    used_in : tuple[str, ...]
        Lists referencing the manual album.
    matches : tuple[ManualMatch, ...]
        Best canonical matches, confidence descending.
    """

    manual_id: str
    artist: str | None
    title: str | None
    has_cover: bool
    used_in: tuple[str, ...] = ()
    matches: tuple[ManualMatch, ...] = ()

    @property
    def top_confidence(self) -> float:
        """Confidence of the best match, 0.0 when there is none."""
        return self.matches[0].confidence if self.matches else 0.0

    def has_match(self, album_id: str) -> bool:
        """Whether ``album_id`` is one of the canonical matches shown."""
        return any(m.album_id == album_id for m in self.matches)

    def without_match(self, album_id: str) -> "ManualAlbumEntry":
        """Copy of the entry with one canonical match removed."""
        return ManualAlbumEntry(
            manual_id=self.manual_id,
            artist=self.artist,
            title=self.title,
            has_cover=self.has_cover,
            used_in=self.used_in,
            matches=tuple(m for m in self.matches if m.album_id != album_id),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "manual_id": self.manual_id,
            "artist": self.artist,
            "title": self.title,
            "has_cover": self.has_cover,
            "used_in": list(self.used_in),
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass(frozen=True)
class IntegrityIssue:
    """A data problem that blocks automatic reconciliation.

    Attributes
    ----------
    type : IssueType
        Issue category.
    severity : Severity
        Urgency.
    description : str
        Human-readable summary.
    album_ids : tuple[str, ...]
        Manual albums involved.
    normalized_key : str | None
        Shared ``artist|title`` key for duplicate manual entries.
    """

    type: IssueType
    severity: Severity
    description: str
    album_ids: tuple[str, ...]
    normalized_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "type": str(self.type),
            "severity": str(self.severity),
            "description": self.description,
            "album_ids": list(self.album_ids),
            "normalized_key": self.normalized_key,
        }


@dataclass(frozen=True)
class ManualAuditResult:
    """Outcome of a manual reconciliation audit.

    Attributes
    ----------
    entries : tuple[ManualAlbumEntry, ...]
        Manual albums with complete metadata, entries with matches first.
    total_manual : int
        Manual albums examined, including those with issues.
    total_with_matches : int
        Entries that have at least one canonical match.
    integrity_issues : tuple[IntegrityIssue, ...]
        Problems found, most severe first.
    """

    entries: tuple[ManualAlbumEntry, ...] = ()
    total_manual: int = 0
    total_with_matches: int = 0
    integrity_issues: tuple[IntegrityIssue, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_manual": self.total_manual,
            "total_with_matches": self.total_with_matches,
            "total_integrity_issues": len(self.integrity_issues),
            "entries": [e.to_dict() for e in self.entries],
            "integrity_issues": [i.to_dict() for i in self.integrity_issues],
        }


@dataclass(frozen=True)
class ManualMergeResult:
    """Outcome of merging a manual album into a canonical one.

    Attributes
    ----------
    manual_id : str
        Absorbed manual album.
    canonical_id : str
        Surviving canonical album.
    affected_lists : tuple[str, ...]
        Lists whose references were rewritten.
    merge : MergeResult
        Underlying merge counters.
    synced_metadata : dict[str, str | None] | None
        Canonical artist/title the lists now show, when metadata was synced.
    """

    manual_id: str
    canonical_id: str
    affected_lists: tuple[str, ...]
    merge: MergeResult
    synced_metadata: dict[str, str | None] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "manual_id": self.manual_id,
            "canonical_id": self.canonical_id,
            "affected_lists": list(self.affected_lists),
            "updated_list_items": self.merge.list_items_updated,
            "merge": self.merge.to_dict(),
            "synced_metadata": self.synced_metadata,
        }

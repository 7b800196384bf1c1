"""Engine configuration dataclass."""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from albumdedupe.decision.models import (
    AUTO_MERGE_THRESHOLD,
    CHECK_MAX_MATCHES,
    MANUAL_MAX_MATCHES,
    MANUAL_THRESHOLD,
    MODAL_THRESHOLD,
    SCAN_RESULT_LIMIT,
)
from albumdedupe.decision.policy import clamp_sensitivity
from albumdedupe.errors import InvalidArgumentError
from albumdedupe.models import INTERNAL_PREFIX, MANUAL_PREFIX
from albumdedupe.scoring.evaluator import MatchOptions
from albumdedupe.scoring.models import ScoringWeights

__all__ = ["EngineConfig"]


@dataclass
class EngineConfig:
    """Configuration for duplicate detection and reconciliation.

    Attributes
    ----------
    sensitivity : float
        Default scan sensitivity; clamped into [0.03, 0.5] (default: 0.10).
    auto_merge_threshold : float
        Confidence at or above which a match may auto-merge (default: 0.98).
    weights : ScoringWeights
        Artist/album weighting of the confidence (default: 0.4 / 0.6).
    result_limit : int
        Maximum pairs returned by a catalog scan (default: 100).
    check_max_matches : int
        Maximum matches returned when checking an incoming album.
    manual_threshold : float
        Threshold used to match manual entries to canonical albums.
    manual_max_matches : int
        Canonical matches reported per manual entry.
    manual_prefix : str
        ID prefix of manually-entered albums.
    internal_prefix : str
        ID prefix of internal placeholder albums.
    remove_articles : bool
        Strip leading articles during normalization.
    """

    sensitivity: float = MODAL_THRESHOLD
    auto_merge_threshold: float = AUTO_MERGE_THRESHOLD
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    result_limit: int = SCAN_RESULT_LIMIT
    check_max_matches: int = CHECK_MAX_MATCHES
    manual_threshold: float = MANUAL_THRESHOLD
    manual_max_matches: int = MANUAL_MAX_MATCHES
    manual_prefix: str = MANUAL_PREFIX
    internal_prefix: str = INTERNAL_PREFIX
    remove_articles: bool = True

    def __post_init__(self) -> None:
        """Coerce and validate."""
        if isinstance(self.weights, dict):
            try:
                self.weights = ScoringWeights(**self.weights)
            except (TypeError, ValueError) as exc:
                raise InvalidArgumentError(f"invalid weights: {exc}") from exc

        self.sensitivity = clamp_sensitivity(self.sensitivity)

        if not 0.0 <= self.auto_merge_threshold <= 1.0:
            raise InvalidArgumentError(
                f"auto_merge_threshold must be in [0, 1], got {self.auto_merge_threshold}"
            )

        if not 0.0 <= self.manual_threshold <= 1.0:
            raise InvalidArgumentError(
                f"manual_threshold must be in [0, 1], got {self.manual_threshold}"
            )

        for name in ("result_limit", "check_max_matches", "manual_max_matches"):
            if getattr(self, name) < 1:
                raise InvalidArgumentError(f"{name} must be >= 1, got {getattr(self, name)}")

        if not self.manual_prefix or not self.internal_prefix:
            raise InvalidArgumentError("manual_prefix and internal_prefix must be non-empty")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        """Build a configuration from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise InvalidArgumentError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: str | Path) -> "EngineConfig":
        """Load a configuration from a JSON file.

        Parameters
        ----------
        path : str | Path
            JSON file holding a flat object of configuration keys.

        Raises
        ------
        InvalidArgumentError
            If the file is not a JSON object or holds invalid values.
        """
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise InvalidArgumentError(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise InvalidArgumentError(f"Configuration in {path} must be a JSON object")
        return cls.from_dict(data)

    def match_options(self, threshold: float | None = None) -> MatchOptions:
        """Pair evaluation options at ``threshold`` (default: sensitivity)."""
        return MatchOptions(
            threshold=self.sensitivity if threshold is None else threshold,
            auto_merge_threshold=self.auto_merge_threshold,
            weights=self.weights,
            remove_articles=self.remove_articles,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

"""Text normalization for album matching."""

from albumdedupe.normalize.normalizer import (
    normalize_for_comparison,
    normalized_key,
    sanitize_for_storage,
    strip_accents,
    strip_edition_suffix,
    strip_leading_article,
)

__all__ = [
    "normalize_for_comparison",
    "normalized_key",
    "sanitize_for_storage",
    "strip_accents",
    "strip_edition_suffix",
    "strip_leading_article",
]

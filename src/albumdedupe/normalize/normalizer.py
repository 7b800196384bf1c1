"""Deterministic text normalization for album matching.

All functions are pure, deterministic and locale-independent. The main entry
point, :func:`normalize_for_comparison`, is idempotent.
"""

import unicodedata

from albumdedupe.normalize._patterns import (
    AMPERSAND_RE,
    APOSTROPHE_RE,
    ARTICLES,
    DASH_RE,
    DOUBLE_QUOTE_RE,
    EDITION_PATTERNS,
    ELLIPSIS_RE,
    PUNCT_RE,
    SINGLE_QUOTE_RE,
    SLASH_RE,
    WHITESPACE_RE,
)

__all__ = [
    "sanitize_for_storage",
    "strip_accents",
    "strip_edition_suffix",
    "strip_leading_article",
    "normalize_for_comparison",
    "normalized_key",
]


def sanitize_for_storage(text: str | None) -> str | None:
    """Fold typographic variants into their ASCII forms.

    Ellipsis characters become three dots, unicode dashes become hyphens and
    smart quotes become straight quotes. Case and content are preserved, so
    the result is suitable for storing back into the catalog.

    Parameters
    ----------
    text : str | None
        Raw field value.

    Returns
    -------
    str | None
        Sanitized value, or the input unchanged when it is None or empty.
    """
    if not text:
        return text
    text = ELLIPSIS_RE.sub("...", text)
    text = DASH_RE.sub("-", text)
    text = SINGLE_QUOTE_RE.sub("'", text)
    text = DOUBLE_QUOTE_RE.sub('"', text)
    return text


def strip_accents(text: str) -> str:
    """Remove diacritical marks for cross-locale matching.

    Parameters
    ----------
    text : str
        Input text with potential diacritics.

    Returns
    -------
    str
        Text with diacritical marks removed.
    """
    nfd = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in nfd if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def strip_edition_suffix(text: str) -> str:
    """Remove one trailing edition, disc, year or format qualifier.

    Examples
    --------
        >>> strip_edition_suffix("dark side of the moon (deluxe edition)")
        'dark side of the moon'
        >>> strip_edition_suffix("abbey road - 2019 remaster")
        'abbey road'
    """
    for pattern in EDITION_PATTERNS:
        stripped, count = pattern.subn("", text)
        if count:
            return stripped.strip()
    return text


def strip_leading_article(text: str) -> str:
    """Drop a single leading article when more words follow.

    The article is kept when the remainder itself starts with an article
    ("the the" stays as is), which keeps repeated application stable.
    """
    words = text.split(" ")
    if len(words) > 1 and words[0] in ARTICLES and words[1] not in ARTICLES:
        return " ".join(words[1:])
    return text


def normalize_for_comparison(
    text: str | None,
    *,
    remove_articles: bool = True,
    strip_editions: bool = True,
) -> str:
    """Canonicalize a text field for similarity comparison.

    Steps, in order: typographic folding, NFKC, casefold, accent stripping,
    trim, edition qualifier stripping, ``&`` to ``and``, apostrophe and slash
    removal, punctuation removal, whitespace collapsing and finally leading
    article removal.

    Parameters
    ----------
    text : str | None
        Raw artist or album title.
    remove_articles : bool
        Strip a single leading ``the``/``a``/``an``.
    strip_editions : bool
        Strip one trailing edition/disc/year/format qualifier.

    Returns
    -------
    str
        Normalized text; empty string for None or blank input.

    Notes
    -----
    ``normalize_for_comparison(normalize_for_comparison(s)) ==
    normalize_for_comparison(s)`` holds for every input.
    """
    if not text:
        return ""
    text = sanitize_for_storage(text) or ""
    text = unicodedata.normalize("NFKC", text)
    text = text.casefold()
    text = strip_accents(text)
    text = text.strip()

    if strip_editions:
        text = strip_edition_suffix(text)

    text = AMPERSAND_RE.sub(" and ", text)
    text = APOSTROPHE_RE.sub("", text)
    text = SLASH_RE.sub("", text)
    text = PUNCT_RE.sub(" ", text)
    text = WHITESPACE_RE.sub(" ", text).strip()

    if remove_articles:
        text = strip_leading_article(text)
    return text


def normalized_key(artist: str | None, title: str | None) -> str:
    """Composite ``artist|title`` key used to group identical entries."""
    return f"{normalize_for_comparison(artist)}|{normalize_for_comparison(title)}"

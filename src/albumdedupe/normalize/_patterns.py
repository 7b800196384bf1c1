"""Compiled regex patterns for album text normalization.

Edition patterns are matched against casefolded text and anchored at the end
of the string. Every pattern requires a bracket, parenthesis, dash or colon,
so text that has already been stripped of punctuation can never match again.
"""

import re

_EDITION_WORDS = (
    r"(?:deluxe|special|expanded|remastered|remaster|anniversary|limited"
    r"|collector'?s?|super deluxe)"
)
_EDITION_TAIL = r"(?:\s*(?:edition|version|release))?"

# Ordered; the first match wins and only one qualifier is stripped.
EDITION_PATTERNS: tuple[re.Pattern[str], ...] = (
    # "(Deluxe Edition)", "[Remastered]", "(25th Anniversary Edition)"
    re.compile(
        rf"\s*\(\s*(?:\d+(?:st|nd|rd|th)\s+)?{_EDITION_WORDS}{_EDITION_TAIL}\s*\)$",
        re.IGNORECASE,
    ),
    re.compile(
        rf"\s*\[\s*(?:\d+(?:st|nd|rd|th)\s+)?{_EDITION_WORDS}{_EDITION_TAIL}\s*\]$",
        re.IGNORECASE,
    ),
    # " - Deluxe Edition", ": Remastered"
    re.compile(rf"\s*[-:]\s*{_EDITION_WORDS}{_EDITION_TAIL}$", re.IGNORECASE),
    # " - 2011 Remaster", "(2011 Remastered Version)", "(1997 Reissue)", "(2009)"
    re.compile(
        r"\s*[-:]\s*\d{4}\s+(?:remaster|remastered|reissue|edition)(?:\s*(?:version|edition))?$",
        re.IGNORECASE,
    ),
    re.compile(
        r"\s*[(\[]\s*\d{4}(?:\s+(?:remaster|remastered|reissue|edition))?"
        r"(?:\s*(?:version|edition))?\s*[)\]]$",
        re.IGNORECASE,
    ),
    # Disc indicators
    re.compile(r"\s*[(\[]\s*(?:disc|disk|cd)\s*\d+\s*[)\]]$", re.IGNORECASE),
    re.compile(r"\s*[-:]\s*(?:disc|disk|cd)\s*\d+$", re.IGNORECASE),
    # Release format markers
    re.compile(r"\s*[(\[]\s*(?:e\.?p\.?|l\.?p\.?|single)\s*[)\]]$", re.IGNORECASE),
)

# Typographic variants folded before comparison and storage
ELLIPSIS_RE = re.compile(r"…")
DASH_RE = re.compile(r"[‐-―−]")
SINGLE_QUOTE_RE = re.compile(r"[‘’‚‛′]")
DOUBLE_QUOTE_RE = re.compile(r"[“”„‟″]")

AMPERSAND_RE = re.compile(r"\s*[&+]\s*")
APOSTROPHE_RE = re.compile(r"['`´]")
SLASH_RE = re.compile(r"[/\\]")
PUNCT_RE = re.compile(r"[^\w\s]|_")
WHITESPACE_RE = re.compile(r"\s+")

ARTICLES = frozenset({"the", "a", "an"})

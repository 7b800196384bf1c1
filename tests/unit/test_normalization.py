"""Tests for album text normalization."""

import pytest

from albumdedupe.normalize import (
    normalize_for_comparison,
    normalized_key,
    sanitize_for_storage,
    strip_accents,
    strip_edition_suffix,
    strip_leading_article,
)

# ========== Typographic folding ==========


@pytest.mark.unit
def test_sanitize_folds_typographic_variants() -> None:
    """Test ellipsis, dashes and smart quotes become ASCII."""
    assert sanitize_for_storage("Wait…") == "Wait..."
    assert sanitize_for_storage("Jay‐Z – Live") == "Jay-Z - Live"
    assert sanitize_for_storage("Don’t “Stop”") == "Don't \"Stop\""


@pytest.mark.unit
def test_sanitize_preserves_case_and_empty_values() -> None:
    """Test sanitizing keeps content and passes through empty input."""
    assert sanitize_for_storage("Björk") == "Björk"
    assert sanitize_for_storage("") == ""
    assert sanitize_for_storage(None) is None


@pytest.mark.unit
def test_strip_accents() -> None:
    """Test diacritics are removed."""
    assert strip_accents("sigur rós") == "sigur ros"
    assert strip_accents("motörhead") == "motorhead"


# ========== Edition qualifiers ==========


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("dark side of the moon (deluxe edition)", "dark side of the moon"),
        ("ok computer [remastered]", "ok computer"),
        ("the wall (25th anniversary edition)", "the wall"),
        ("abbey road - 2019 remaster", "abbey road"),
        ("nevermind (2011 remastered version)", "nevermind"),
        ("rumours (1977)", "rumours"),
        ("mellon collie (disc 2)", "mellon collie"),
        ("the fragile - cd 1", "the fragile"),
        ("ep title (ep)", "ep title"),
        ("help (single)", "help"),
    ],
)
def test_strip_edition_suffix(raw: str, expected: str) -> None:
    """Test trailing edition qualifiers are removed."""
    assert strip_edition_suffix(raw) == expected


@pytest.mark.unit
def test_strip_edition_suffix_removes_only_one_qualifier() -> None:
    """Test only the trailing qualifier is stripped."""
    assert strip_edition_suffix("album (disc 1) (deluxe edition)") == "album (disc 1)"


@pytest.mark.unit
def test_strip_edition_suffix_keeps_plain_titles() -> None:
    """Test titles without qualifiers are unchanged."""
    assert strip_edition_suffix("deluxe") == "deluxe"
    assert strip_edition_suffix("1999") == "1999"


# ========== Articles ==========


@pytest.mark.unit
def test_strip_leading_article() -> None:
    """Test a single leading article is dropped only when words follow."""
    assert strip_leading_article("the beatles") == "beatles"
    assert strip_leading_article("a perfect circle") == "perfect circle"
    assert strip_leading_article("the") == "the"
    assert strip_leading_article("the the") == "the the"


# ========== Full pipeline ==========


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("AC/DC", "acdc"),
        ("Guns N' Roses", "guns n roses"),
        ("Simon & Garfunkel", "simon and garfunkel"),
        ("Sigur Rós", "sigur ros"),
        ("The Beatles", "beatles"),
        ("  The   Dark Side of the Moon  ", "dark side of the moon"),
        ("The Dark Side of the Moon (Deluxe Edition)", "dark side of the moon"),
        ("Don’t Stop…", "dont stop"),
        ("blink-182", "blink 182"),
        ("ＡＢＣ", "abc"),
    ],
)
def test_normalize_for_comparison(raw: str, expected: str) -> None:
    """Test full normalization on common catalog spellings."""
    assert normalize_for_comparison(raw) == expected


@pytest.mark.unit
def test_normalize_options() -> None:
    """Test article and edition stripping can be disabled."""
    assert normalize_for_comparison("The Beatles", remove_articles=False) == "the beatles"
    assert (
        normalize_for_comparison("Help (Deluxe Edition)", strip_editions=False)
        == "help deluxe edition"
    )


@pytest.mark.unit
@pytest.mark.parametrize("raw", [None, "", "   ", "!!!"])
def test_normalize_blank_input(raw: str | None) -> None:
    """Test blank or punctuation-only input normalizes to empty string."""
    assert normalize_for_comparison(raw) == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        "The The",
        "A Tribe Called Quest",
        "The (Deluxe Edition)",
        "Album (Disc 1) (Deluxe Edition)",
        "Rock & Roll / Part 2",
        "Café del Mar – Vol. 3",
        "the a band",
        "...And Justice for All",
        "R.E.M.",
        "an",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    """Test normalizing twice equals normalizing once."""
    once = normalize_for_comparison(raw)
    assert normalize_for_comparison(once) == once


@pytest.mark.unit
def test_normalized_key() -> None:
    """Test composite key joins normalized artist and title."""
    assert normalized_key("The Beatles", "Abbey Road (Remastered)") == "beatles|abbey road"
    assert normalized_key(None, "Help") == "|help"

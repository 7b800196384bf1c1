"""Tests for similarity scoring and pair evaluation."""

from collections.abc import Callable

import pytest

from albumdedupe.models import AlbumRecord
from albumdedupe.scoring import (
    MatchOptions,
    ScoringWeights,
    SimilarityReason,
    evaluate_pair,
    similarity,
)
from albumdedupe.scoring.comparators import (
    edit_similarity,
    jaccard_similarity,
    token_similarity,
)

# ========== Comparators ==========


@pytest.mark.unit
def test_edit_similarity() -> None:
    """Test Levenshtein similarity is normalized by the longer string."""
    assert edit_similarity("abc", "abc") == 1.0
    assert edit_similarity("", "") == 1.0
    assert edit_similarity("metallica", "metalica") == pytest.approx(1 - 1 / 9)
    assert edit_similarity("abcd", "wxyz") == 0.0


@pytest.mark.unit
def test_jaccard_similarity() -> None:
    """Test Jaccard similarity on token sets."""
    assert jaccard_similarity({"a", "b"}, {"a", "b"}) == 1.0
    assert jaccard_similarity({"a", "b"}, {"b", "c"}) == pytest.approx(1 / 3)
    assert jaccard_similarity(set(), {"a"}) == 0.0
    assert jaccard_similarity(set(), set()) == 1.0


@pytest.mark.unit
def test_token_similarity_ignores_order() -> None:
    """Test token overlap is order-independent."""
    assert token_similarity("black album the", "the black album") == 1.0


# ========== similarity() ==========


@pytest.mark.unit
def test_similarity_identity() -> None:
    """Test a non-empty string is fully similar to itself."""
    result = similarity("Master of Puppets", "Master of Puppets")

    assert result.score == 1.0
    assert result.reason == SimilarityReason.EXACT_NORMALIZED


@pytest.mark.unit
@pytest.mark.parametrize(("a", "b"), [("", "Metallica"), ("Metallica", None), (None, None)])
def test_similarity_empty_input(a: str | None, b: str | None) -> None:
    """Test empty input scores zero."""
    result = similarity(a, b)

    assert result.score == 0.0
    assert result.reason == SimilarityReason.EMPTY_INPUT


@pytest.mark.unit
def test_similarity_matches_after_normalization() -> None:
    """Test strings equal after normalization score 1.0."""
    assert similarity("The Beatles", "beatles").score == 1.0
    assert similarity("AC/DC", "ACDC").score == 1.0
    assert similarity("Abbey Road", "Abbey Road (2019 Remaster)").score == 1.0


@pytest.mark.unit
@pytest.mark.parametrize(
    ("a", "b"),
    [
        ("Metallica", "Metalica"),
        ("Black Album The", "The Black Album"),
        ("Completely Different", "Something Else"),
        ("Radiohead", "Radio Head"),
    ],
)
def test_similarity_is_symmetric(a: str, b: str) -> None:
    """Test similarity(a, b) == similarity(b, a)."""
    assert similarity(a, b).score == similarity(b, a).score


@pytest.mark.unit
def test_similarity_typo() -> None:
    """Test a single typo keeps similarity high."""
    result = similarity("Metallica", "Metalica")

    assert result.score > 0.5
    assert result.reason == SimilarityReason.EDIT_DISTANCE


@pytest.mark.unit
def test_similarity_word_order() -> None:
    """Test reordered words stay similar."""
    assert similarity("Black Album The", "The Black Album").score > 0.7


@pytest.mark.unit
def test_similarity_token_overlap_wins_on_reordering() -> None:
    """Test token overlap is reported when it beats edit distance."""
    result = similarity("Moon Dark Side", "Dark Side Moon")

    assert result.score == 1.0
    assert result.reason == SimilarityReason.TOKEN_OVERLAP


@pytest.mark.unit
def test_similarity_unrelated() -> None:
    """Test unrelated strings score low."""
    assert similarity("Completely Different", "Something Else").score < 0.5


# ========== Weights ==========


@pytest.mark.unit
def test_scoring_weights_defaults() -> None:
    """Test default weights favor the album title."""
    weights = ScoringWeights()

    assert weights.artist == 0.4
    assert weights.album == 0.6


@pytest.mark.unit
@pytest.mark.parametrize(("artist", "album"), [(0.5, 0.6), (-0.2, 1.2)])
def test_scoring_weights_validation(artist: float, album: float) -> None:
    """Test weights must be non-negative and sum to one."""
    with pytest.raises(ValueError):
        ScoringWeights(artist=artist, album=album)


# ========== evaluate_pair ==========


@pytest.mark.unit
def test_evaluate_identical_pair(make_record: Callable[..., AlbumRecord]) -> None:
    """Test identical normalized artist and title give full confidence."""
    a = make_record("a", "Pink Floyd", "The Dark Side of the Moon")
    b = make_record("b", "pink floyd", "Dark Side of the Moon (Deluxe Edition)")

    evaluation = evaluate_pair(a, b)

    assert evaluation.is_match
    assert evaluation.confidence == 1.0
    assert evaluation.should_auto_merge


@pytest.mark.unit
def test_evaluate_weighted_confidence(make_record: Callable[..., AlbumRecord]) -> None:
    """Test confidence is the weighted sum of field scores."""
    a = make_record("a", "Metallica", "Master of Puppets")
    b = make_record("b", "Metalica", "Master of Puppets")

    evaluation = evaluate_pair(a, b)

    expected = 0.4 * evaluation.artist_score.score + 0.6 * 1.0
    assert evaluation.confidence == pytest.approx(expected)
    assert evaluation.is_match
    assert not evaluation.should_auto_merge


@pytest.mark.unit
def test_evaluate_custom_weights(make_record: Callable[..., AlbumRecord]) -> None:
    """Test custom weights change the confidence."""
    a = make_record("a", "Metallica", "Master of Puppets")
    b = make_record("b", "Metalica", "Master of Puppets")
    options = MatchOptions(weights=ScoringWeights(artist=0.0, album=1.0))

    assert evaluate_pair(a, b, options).confidence == 1.0


@pytest.mark.unit
def test_evaluate_requires_both_fields(make_record: Callable[..., AlbumRecord]) -> None:
    """Test a perfect artist cannot carry an unrelated title."""
    a = make_record("a", "Pink Floyd", "The Dark Side of the Moon")
    b = make_record("b", "Pink Floyd", "The Wall")

    evaluation = evaluate_pair(a, b)

    assert evaluation.artist_score.score == 1.0
    assert evaluation.album_score.score < 0.35
    assert not evaluation.is_match
    assert not evaluation.should_auto_merge


@pytest.mark.unit
def test_evaluate_accepts_legacy_numeric_threshold(
    make_record: Callable[..., AlbumRecord],
) -> None:
    """Test a bare number is read as the threshold."""
    a = make_record("a", "Metallica", "Master of Puppets")
    b = make_record("b", "Metalica", "Master of Puppets")

    assert evaluate_pair(a, b, 0.3).is_match
    assert not evaluate_pair(a, b, 0.99).is_match


@pytest.mark.unit
def test_evaluate_min_score_override(make_record: Callable[..., AlbumRecord]) -> None:
    """Test explicit per-field minimums override the derived ones."""
    a = make_record("a", "Metallica", "Master of Puppets")
    b = make_record("b", "Metalica", "Master of Puppets")

    assert not evaluate_pair(a, b, MatchOptions(artist_min_score=0.95)).is_match
    assert evaluate_pair(a, b, MatchOptions(album_min_score=1.0)).is_match


@pytest.mark.unit
def test_match_options_coerce() -> None:
    """Test option coercion from None, numbers and instances."""
    options = MatchOptions(threshold=0.2)

    assert MatchOptions.coerce(None) == MatchOptions()
    assert MatchOptions.coerce(options) is options
    assert MatchOptions.coerce(0.2).threshold == 0.2
    assert MatchOptions.coerce(0.2).min_artist == 0.45
    with pytest.raises(TypeError):
        MatchOptions.coerce("0.2")  # type: ignore[arg-type]

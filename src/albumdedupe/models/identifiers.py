"""Album identifier helpers.

Album IDs are opaque strings. The only structure the engine relies on is the
source prefix used for manually-entered and internal records, and the
canonical ordering of ID pairs.
"""

from collections.abc import Iterable

__all__ = [
    "MANUAL_PREFIX",
    "INTERNAL_PREFIX",
    "PAIR_SEPARATOR",
    "canonical_pair",
    "pair_id",
    "exclusion_keys",
    "is_manual_id",
    "is_internal_id",
]

MANUAL_PREFIX = "manual-"
INTERNAL_PREFIX = "internal-"
PAIR_SEPARATOR = "::"


def canonical_pair(album_id_a: str, album_id_b: str) -> tuple[str, str]:
    """Return the two IDs in lexicographic order."""
    if album_id_a <= album_id_b:
        return album_id_a, album_id_b
    return album_id_b, album_id_a


def pair_id(album_id_a: str, album_id_b: str) -> str:
    """Deterministic, order-independent identifier for a pair.

    Examples
    --------
        >>> pair_id("b", "a")
        'a::b'
    """
    first, second = canonical_pair(album_id_a, album_id_b)
    return f"{first}{PAIR_SEPARATOR}{second}"


def exclusion_keys(pairs: Iterable[tuple[str, str]]) -> frozenset[tuple[str, str]]:
    """Expand stored pairs into a lookup set holding both orderings.

    Parameters
    ----------
    pairs : Iterable[tuple[str, str]]
        Stored distinct pairs.

    Returns
    -------
    frozenset[tuple[str, str]]
        Set containing ``(a, b)`` and ``(b, a)`` for every input pair.
    """
    keys: set[tuple[str, str]] = set()
    for first, second in pairs:
        keys.add((first, second))
        keys.add((second, first))
    return frozenset(keys)


def is_manual_id(album_id: str | None, prefix: str = MANUAL_PREFIX) -> bool:
    """Whether ``album_id`` belongs to a manually-entered album."""
    return bool(album_id) and album_id.startswith(prefix)


def is_internal_id(album_id: str | None, prefix: str = INTERNAL_PREFIX) -> bool:
    """Whether ``album_id`` belongs to an internal placeholder album."""
    return bool(album_id) and album_id.startswith(prefix)

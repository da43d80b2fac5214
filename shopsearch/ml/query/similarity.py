"""
Edit-distance similarity for fuzzy title matching.
"""

from rapidfuzz.distance import Levenshtein

from .normalizer import normalize


def levenshtein(a: str, b: str) -> int:
    """
    Unit-cost edit distance (insertions, deletions, substitutions).

    Args:
        a: First string (compared as-is, no normalization)
        b: Second string

    Returns:
        Minimum number of single-character edits turning a into b
    """
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """
    Similarity ratio in [0, 1] over normalized strings.

    1 - distance / max(len), with two empty strings counting as identical.

    Examples:
        >>> similarity("", "")
        1.0
        >>> round(similarity("iPhone", "ifone"), 3)
        0.667
    """
    first = normalize(a)
    second = normalize(b)
    max_len = max(len(first), len(second))

    if max_len == 0:
        return 1.0

    return 1.0 - levenshtein(first, second) / max_len

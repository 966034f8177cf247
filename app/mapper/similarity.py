"""String similarity scoring for header matching."""

from __future__ import annotations

from app.mapper.normalizers import normalize


EXACT_SCORE = 1.0
CONTAINS_SCORE = 0.8


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance with unit cost insert/delete/substitute.

    The table has len(b) + 1 rows and len(a) + 1 columns.
    """
    matrix = [[0] * (len(a) + 1) for _ in range(len(b) + 1)]

    for i in range(len(a) + 1):
        matrix[0][i] = i
    for j in range(len(b) + 1):
        matrix[j][0] = j

    for j in range(1, len(b) + 1):
        for i in range(1, len(a) + 1):
            indicator = 0 if a[i - 1] == b[j - 1] else 1
            matrix[j][i] = min(
                matrix[j][i - 1] + 1,
                matrix[j - 1][i] + 1,
                matrix[j - 1][i - 1] + indicator,
            )

    return matrix[len(b)][len(a)]


def similarity(a: str, b: str) -> float:
    """Score how alike two labels are, in the range [0.0, 1.0].

    Both inputs are normalized first. Identical strings score 1.0, strings
    where one contains the other score 0.8, and everything else scores
    1 - distance / longest length.

    Args:
        a: First label
        b: Second label

    Returns:
        Similarity score; 1.0 when both normalize to the empty string
    """
    s1 = normalize(a)
    s2 = normalize(b)

    if s1 == s2:
        return EXACT_SCORE

    if s1 in s2 or s2 in s1:
        return CONTAINS_SCORE

    # Both strings are non-empty here: an empty one is contained in the other.
    return 1 - levenshtein(s1, s2) / max(len(s1), len(s2))

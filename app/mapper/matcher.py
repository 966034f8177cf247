"""Field matching utilities for column reconciliation.

This module picks the most plausible spreadsheet column for one business
field out of a pool of columns not yet claimed by another field. Matching
runs in three stages and stops at the first stage that produces a column:

- Stage A (exact): case-insensitive equality with the field key or label
- Stage B (cleaned-exact): equality after normalize()
- Stage C (fuzzy): substring, edit-distance and keyword scoring plus
  domain boosts, accepted only above a threshold

Key functions:
- find_best_match: Run all three stages for one field
- rank_candidates: Fuzzy score of every eligible candidate, for diagnostics
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from app.core.models import BusinessField
from app.mapper.normalizers import keywords, normalize
from app.mapper.similarity import CONTAINS_SCORE, similarity


# Minimum fuzzy score a candidate must reach to be accepted
FUZZY_MATCH_THRESHOLD = 0.5

# Headers containing any of these tokens describe the product rather than a
# price component and never enter fuzzy scoring
DENYLIST_TOKENS: tuple[str, ...] = (
    'product',
    'model',
    'code',
    'category',
    'region',
    'status',
)

# Domain tokens that earn a boost when present in both field key and header
BOOST_TOKENS: tuple[str, ...] = (
    'price',
    'tax',
    'insurance',
    'subsidy',
    'discount',
    'road',
    'rto',
)

BOOST_AMOUNT = 0.2

# Floor for a field keyword found verbatim inside the header text
KEYWORD_CONTAINED_SCORE = 0.7


@dataclass(frozen=True)
class MatcherConfig:
    """Tunable inputs of the fuzzy stage.

    Scores are a ranking signal, not a probability: boosts stack and may
    push a score above 1.0, and the threshold is compared against that
    unclamped value.
    """

    threshold: float = FUZZY_MATCH_THRESHOLD
    denylist: tuple[str, ...] = DENYLIST_TOKENS
    boost_tokens: tuple[str, ...] = BOOST_TOKENS
    boost_amount: float = BOOST_AMOUNT


DEFAULT_CONFIG = MatcherConfig()


@dataclass(frozen=True)
class ScoredCandidate:
    column: str
    score: float


def exact_match(field: BusinessField, candidates: Sequence[str]) -> str | None:
    """Return the first candidate equal to the field key or label, ignoring case."""
    key = field.key.lower()
    label = field.label.lower()
    for column in candidates:
        column_lower = column.lower()
        if column_lower == key or column_lower == label:
            return column
    return None


def cleaned_match(field: BusinessField, candidates: Sequence[str]) -> str | None:
    """Return the first candidate equal to the field key or label after normalize()."""
    key = normalize(field.key)
    label = normalize(field.label)
    for column in candidates:
        cleaned = normalize(column)
        if cleaned == key or cleaned == label:
            return column
    return None


def is_denylisted(column: str, denylist: Sequence[str] = DENYLIST_TOKENS) -> bool:
    """Check whether a header contains any denylisted token."""
    column_lower = column.lower()
    return any(token.lower() in column_lower for token in denylist)


def _keyword_score(field_keywords: list[str], column: str) -> float:
    column_lower = column.lower()
    column_keywords = keywords(column)

    score = 0.0
    for field_keyword in field_keywords:
        for column_keyword in column_keywords:
            score = max(score, similarity(field_keyword, column_keyword))
        if field_keyword in column_lower:
            score = max(score, KEYWORD_CONTAINED_SCORE)
    return score


def score_candidate(
    field: BusinessField,
    column: str,
    config: MatcherConfig = DEFAULT_CONFIG,
) -> float:
    """Compute the fuzzy score of one column for one field.

    Args:
        field: Business field being matched
        column: Candidate header text
        config: Boost tokens and amount to apply

    Returns:
        Unclamped score; CONTAINS_SCORE for substring containment, otherwise
        the best of edit-distance and keyword similarity plus domain boosts
    """
    key = field.key.lower()
    label = field.label.lower()
    column_lower = column.lower()

    if (
        column_lower in key
        or key in column_lower
        or column_lower in label
        or label in column_lower
    ):
        return CONTAINS_SCORE

    score = max(
        similarity(field.key, column),
        similarity(field.label, column),
        _keyword_score(keywords(field.label), column),
    )

    # Boosts apply only below CONTAINS_SCORE and stack per shared token.
    if score < CONTAINS_SCORE:
        for token in config.boost_tokens:
            token = token.lower()
            if token in key and token in column_lower:
                score += config.boost_amount

    return score


def rank_candidates(
    field: BusinessField,
    candidates: Sequence[str],
    config: MatcherConfig = DEFAULT_CONFIG,
) -> list[ScoredCandidate]:
    """Score every candidate that is not denylisted, keeping pool order."""
    return [
        ScoredCandidate(column=column, score=score_candidate(field, column, config))
        for column in candidates
        if not is_denylisted(column, config.denylist)
    ]


def fuzzy_match(
    field: BusinessField,
    candidates: Sequence[str],
    config: MatcherConfig = DEFAULT_CONFIG,
) -> ScoredCandidate | None:
    """Pick the top fuzzy candidate if it clears the threshold.

    Ties keep the candidate seen first.
    """
    best: ScoredCandidate | None = None
    for candidate in rank_candidates(field, candidates, config):
        if best is None or candidate.score > best.score:
            best = candidate

    if best is not None and best.score >= config.threshold:
        return best
    return None


def find_best_match(
    field: BusinessField,
    candidates: Sequence[str],
    config: MatcherConfig | None = None,
) -> str | None:
    """Find the most plausible column for a field.

    Args:
        field: Business field being matched
        candidates: Columns not claimed by another field, in sheet order
        config: Fuzzy stage configuration (defaults to DEFAULT_CONFIG)

    Returns:
        The chosen column header, or None when no stage finds a candidate

    Example:
        >>> field = BusinessField(key="insurance", label="Insurance")
        >>> find_best_match(field, ["Model", "Insurance Amount"])
        'Insurance Amount'
    """
    config = config or DEFAULT_CONFIG

    column = exact_match(field, candidates)
    if column is not None:
        return column

    column = cleaned_match(field, candidates)
    if column is not None:
        return column

    best = fuzzy_match(field, candidates, config)
    return best.column if best is not None else None

"""Reconciliation engine: map a whole field catalog onto sheet columns.

The engine runs three catalog-wide passes, each of which may only claim
columns that no earlier assignment has claimed:

1. exact: case-insensitive key/label equality, in catalog order
2. cleaned: key/label equality after normalize(), in catalog order
3. fuzzy: find_best_match() for the rest, longest labels first

Every pass is a pure function of (fields, columns, mapping, claimed) that
returns a new mapping and a new claimed set, so the whole reconciliation
holds no state between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType

from app.core.models import BusinessField
from app.mapper.matcher import MatcherConfig, cleaned_match, exact_match, find_best_match

logger = logging.getLogger(__name__)

MatchFunc = Callable[[BusinessField, Sequence[str]], str | None]
PassResult = tuple[dict[str, str], frozenset[str]]


def _run_pass(
    fields: Sequence[BusinessField],
    columns: Sequence[str],
    mapping: Mapping[str, str],
    claimed: frozenset[str],
    match: MatchFunc,
) -> PassResult:
    result = dict(mapping)
    taken = set(claimed)

    for field in fields:
        if field.key in result:
            continue
        available = [column for column in columns if column not in taken]
        column = match(field, available)
        if column is not None:
            result[field.key] = column
            taken.add(column)

    return result, frozenset(taken)


def exact_pass(
    fields: Sequence[BusinessField],
    columns: Sequence[str],
    mapping: Mapping[str, str],
    claimed: frozenset[str],
) -> PassResult:
    """Claim case-insensitive exact matches across the whole catalog."""
    return _run_pass(fields, columns, mapping, claimed, exact_match)


def cleaned_pass(
    fields: Sequence[BusinessField],
    columns: Sequence[str],
    mapping: Mapping[str, str],
    claimed: frozenset[str],
) -> PassResult:
    """Claim punctuation- and case-insensitive matches for unmapped fields."""
    return _run_pass(fields, columns, mapping, claimed, cleaned_match)


def specificity_order(fields: Sequence[BusinessField]) -> list[BusinessField]:
    """Order fields by label word count, longest first, keeping catalog order on ties."""
    return sorted(fields, key=lambda field: len(field.label.split()), reverse=True)


def fuzzy_pass(
    fields: Sequence[BusinessField],
    columns: Sequence[str],
    mapping: Mapping[str, str],
    claimed: frozenset[str],
    config: MatcherConfig | None = None,
) -> PassResult:
    """Fuzzy-match the remaining fields, most specific label first.

    A multi-word label is more discriminating than a short one, so it gets
    first pick of the remaining columns.
    """
    remaining = [field for field in fields if field.key not in mapping]

    def match(field: BusinessField, available: Sequence[str]) -> str | None:
        return find_best_match(field, available, config)

    return _run_pass(specificity_order(remaining), columns, mapping, claimed, match)


def reconcile(
    fields: Sequence[BusinessField],
    columns: Sequence[str],
    config: MatcherConfig | None = None,
) -> Mapping[str, str]:
    """Map each business field to its most plausible column.

    Args:
        fields: Field catalog in priority order
        columns: Header strings in sheet order (duplicates allowed)
        config: Fuzzy stage configuration (defaults to the matcher defaults)

    Returns:
        Read-only mapping of field key to column header. No column appears
        twice; fields without an acceptable column are absent.

    Example:
        >>> fields = [BusinessField(key="insurance", label="Insurance")]
        >>> dict(reconcile(fields, ["Insurance", "Product Name"]))
        {'insurance': 'Insurance'}
    """
    mapping: dict[str, str] = {}
    claimed: frozenset[str] = frozenset()

    mapping, claimed = exact_pass(fields, columns, mapping, claimed)
    exact_count = len(mapping)

    mapping, claimed = cleaned_pass(fields, columns, mapping, claimed)
    cleaned_count = len(mapping) - exact_count

    mapping, claimed = fuzzy_pass(fields, columns, mapping, claimed, config)
    fuzzy_count = len(mapping) - exact_count - cleaned_count

    logger.debug(
        "Reconciled fields=%d columns=%d exact=%d cleaned=%d fuzzy=%d unmapped=%d",
        len(fields),
        len(columns),
        exact_count,
        cleaned_count,
        fuzzy_count,
        len(fields) - len(mapping),
    )

    return MappingProxyType(mapping)

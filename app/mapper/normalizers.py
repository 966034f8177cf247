"""Normalization utilities for header matching.

This module provides the two canonical forms used when comparing a business
field against a spreadsheet header:
- normalize: lower-case text with everything but ASCII letters/digits removed
- keywords: significant word tokens of a label
"""

from __future__ import annotations

import re


_NON_ALNUM_PATTERN = re.compile(r'[^a-z0-9]')

# Mirrors a non-word, non-space character class restricted to ASCII.
_NON_WORD_PATTERN = re.compile(r'[^\w\s]', re.ASCII)

# Tokens of this length or shorter carry too little signal ("of", "to", "%").
MIN_KEYWORD_LENGTH = 3


def normalize(text: str) -> str:
    """Canonicalize a label for cosmetic-insensitive comparison.

    Lower-cases the text and deletes (not replaces) every character that is
    not an ASCII letter or digit, so "RTO - Road safety tax / CESS." becomes
    "rtoroadsafetytaxcess".
    """
    return _NON_ALNUM_PATTERN.sub('', text.lower())


def keywords(label: str) -> list[str]:
    """Extract keyword tokens from a label.

    Punctuation is turned into spaces before splitting, and tokens shorter
    than MIN_KEYWORD_LENGTH are dropped. Repeated tokens are kept.

    Example:
        >>> keywords("Road tax (% tax on Ex showroom excl. subsidy) [130]")
        ['road', 'tax', 'tax', 'showroom', 'excl', 'subsidy', '130']
    """
    spaced = _NON_WORD_PATTERN.sub(' ', label.lower())
    return [word for word in spaced.split() if len(word) >= MIN_KEYWORD_LENGTH]

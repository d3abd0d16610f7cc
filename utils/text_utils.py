"""
Text utilities for matching Spanish identifiers with accents.

Used by the dashboard SKU filter.
"""

import unicodedata
from typing import Optional


def normalize_for_search(text: Optional[str]) -> str:
    """
    Normalize text for case-insensitive substring search.

    Handles Spanish accents and stray whitespace:
    - "Cerámica Ñandú" → "ceramica nandu"
    - "  SKU-001  " → "sku-001"

    Args:
        text: Original text (may have accents, mixed case)

    Returns:
        Lowercase ASCII-folded string, "" for None/blank input
    """
    if not text:
        return ""

    text = text.strip()

    if not text:
        return ""

    # NFD separates base chars from accents
    normalized = unicodedata.normalize('NFD', text)

    # Drop accent marks (combining characters in Unicode category 'Mn')
    ascii_text = ''.join(
        c for c in normalized
        if unicodedata.category(c) != 'Mn'
    )

    return ascii_text.casefold()


def contains_ignoring_case(haystack: Optional[str], needle: Optional[str]) -> bool:
    """
    Substring test ignoring case and accents.

    An empty needle matches everything; a missing haystack matches
    only an empty needle.
    """
    needle_norm = normalize_for_search(needle)
    if not needle_norm:
        return True
    return needle_norm in normalize_for_search(haystack)

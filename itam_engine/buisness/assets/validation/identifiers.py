"""
Identifier generation

Global Asset ID: AS-YYYY-NNNNNN
Asset tag:       SITE5-CATEGORY5-NNNNN
"""

import re
from datetime import date
from typing import Optional

from itam_engine.buisness.assets.errors import AssetIdentityError

_WHITESPACE = re.compile(r'\s+')


MAX_GLOBAL_ID_SEQUENCE = 999999
MAX_TAG_SEQUENCE = 99999


def _check_sequence(sequence: int, maximum: int) -> int:
    if isinstance(sequence, bool) or not isinstance(sequence, int):
        raise AssetIdentityError(f"Sequence must be an integer, got {sequence!r}")
    if sequence < 0:
        raise AssetIdentityError(f"Sequence must not be negative, got {sequence}")
    if sequence > maximum:
        raise AssetIdentityError(f"Sequence {sequence} exceeds the maximum of {maximum}")
    return sequence


def _segment(value: str) -> str:
    # Truncate first, then strip whitespace
    return _WHITESPACE.sub('', value[:5].upper())


def generate_global_asset_id(sequence: int, year: Optional[int] = None) -> str:
    """
    Build a Global Asset ID for the given sequence number.

    Args:
        sequence: Sequence number issued by the persistence layer
        year: Year component; defaults to the current year

    Raises:
        AssetIdentityError: If the sequence is outside 0..999999 or the year
            is not four digits

    Returns:
        str: e.g. ``AS-2024-000007``
    """
    sequence = _check_sequence(sequence, MAX_GLOBAL_ID_SEQUENCE)
    if year is None:
        year = date.today().year
    if isinstance(year, bool) or not isinstance(year, int) or not 0 <= year <= 9999:
        raise AssetIdentityError(f"Year must be a four-digit year, got {year!r}")
    return f"AS-{year:04d}-{sequence:06d}"


def generate_asset_tag(site: str, category: str, sequence: int) -> str:
    """
    Build a human-friendly asset tag.

    Each text segment is the first five characters, uppercased, with whitespace
    removed; the sequence is zero-padded to five digits.

    Example:
        >>> generate_asset_tag("Philadelphia", "Engineering", 123)
        'PHILA-ENGIN-00123'
    """
    sequence = _check_sequence(sequence, MAX_TAG_SEQUENCE)
    return f"{_segment(site or '')}-{_segment(category or '')}-{sequence:05d}"

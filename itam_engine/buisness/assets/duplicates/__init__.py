"""
Duplicate detection across discovery sources.
"""

from itam_engine.buisness.assets.duplicates.duplicate_detector import (
    find_potential_duplicates,
    fuzzy_match_serial,
    is_potential_duplicate,
    levenshtein_distance,
)
from itam_engine.buisness.assets.duplicates.duplicate_index import DuplicateIndex

__all__ = [
    'DuplicateIndex',
    'find_potential_duplicates',
    'fuzzy_match_serial',
    'is_potential_duplicate',
    'levenshtein_distance',
]

"""
Duplicate asset detection

Flags existing records that probably describe the same physical asset as a
candidate: fuzzy serial match, exact asset tag match, or a shared device GUID
from the same discovery source. Matches are advisory and unranked; deciding
whether to merge, ignore or reject belongs to the caller.
"""

from typing import Iterable, List

from rapidfuzz.distance import Levenshtein

from itam_engine.buisness.assets.normalization import normalize_asset_tag, normalize_serial_number
from itam_engine.data.assets.asset_record import AssetRecord, coerce_asset
from itam_engine.utils.logger import get_logger

logger = get_logger("itam_engine.buisness.assets.duplicates")

MAX_SERIAL_EDIT_DISTANCE = 2
MAX_SERIAL_LENGTH_DIFFERENCE = 2
# Substring matches only count once both serials are longer than this
MIN_SUBSTRING_MATCH_LENGTH = 5


def levenshtein_distance(first: str, second: str) -> int:
    """Unit-cost edit distance (insert, delete, substitute)"""
    return Levenshtein.distance(first or '', second or '')


def fuzzy_match_serial(first: str, second: str) -> bool:
    """
    Check whether two serial numbers are probably the same.

    Matches when the normalized serials are equal, when both are longer than
    five characters and one contains the other (some OEMs prefix or suffix
    serials), or when they are within two edits and two characters of length
    of each other (transcription typos).

    Args:
        first: Raw serial number
        second: Raw serial number

    Returns:
        bool: True if the serials match
    """
    norm_first = normalize_serial_number(first) or ''
    norm_second = normalize_serial_number(second) or ''

    if norm_first == norm_second:
        return True

    if len(norm_first) > MIN_SUBSTRING_MATCH_LENGTH and len(norm_second) > MIN_SUBSTRING_MATCH_LENGTH:
        if norm_first in norm_second or norm_second in norm_first:
            return True

    if abs(len(norm_first) - len(norm_second)) > MAX_SERIAL_LENGTH_DIFFERENCE:
        return False
    return levenshtein_distance(norm_first, norm_second) <= MAX_SERIAL_EDIT_DISTANCE


def shares_device_guid(first: AssetRecord, second: AssetRecord) -> bool:
    """True when both records report the same GUID under the same source key"""
    if not first.device_guids or not second.device_guids:
        return False
    for source, guid in first.device_guids.items():
        if guid and second.device_guids.get(source) == guid:
            return True
    return False


def same_identity(candidate: AssetRecord, existing: AssetRecord) -> bool:
    """True when ``existing`` is the stored copy of the candidate itself"""
    return bool(candidate.global_asset_id) and existing.global_asset_id == candidate.global_asset_id


def is_potential_duplicate(candidate: AssetRecord, existing: AssetRecord) -> bool:
    """
    Compare one candidate against one existing record.

    Records sharing the candidate's Global Asset ID are never duplicates.
    """
    if same_identity(candidate, existing):
        return False

    if candidate.serial_number and existing.serial_number:
        if fuzzy_match_serial(candidate.serial_number, existing.serial_number):
            return True

    if candidate.asset_tag and existing.asset_tag:
        if normalize_asset_tag(candidate.asset_tag) == normalize_asset_tag(existing.asset_tag):
            return True

    return shares_device_guid(candidate, existing)


def find_potential_duplicates(candidate, existing_assets: Iterable) -> List[AssetRecord]:
    """
    Scan a corpus for records that may duplicate the candidate.

    This is a linear scan with a quadratic serial comparison per pair; callers
    should pre-filter large corpora (see ``DuplicateIndex``) before invoking it
    on a request path.

    Args:
        candidate: AssetRecord or wire mapping
        existing_assets: Iterable of AssetRecords or wire mappings

    Returns:
        List[AssetRecord]: Matching records in corpus order
    """
    candidate = coerce_asset(candidate)
    duplicates = []
    scanned = 0
    for existing in existing_assets:
        existing = coerce_asset(existing)
        scanned += 1
        if is_potential_duplicate(candidate, existing):
            duplicates.append(existing)

    logger.debug(
        f"Duplicate scan for {candidate.global_asset_id}: {len(duplicates)} match(es) in {scanned} record(s)"
    )
    return duplicates

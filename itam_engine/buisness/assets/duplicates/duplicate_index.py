"""
Pre-indexed duplicate scan for large corpora

Returns exactly what ``find_potential_duplicates`` returns for the same corpus,
without comparing the candidate against every record:

- asset tag and device GUID matches come from hash maps
- equal serials come from a map keyed by normalized serial
- substring serials come from fixed-width serial fragments
- near-miss serials are only compared within the allowed length window
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set, Tuple

from itam_engine.buisness.assets.duplicates.duplicate_detector import (
    MAX_SERIAL_LENGTH_DIFFERENCE,
    MIN_SUBSTRING_MATCH_LENGTH,
    fuzzy_match_serial,
    same_identity,
)
from itam_engine.buisness.assets.normalization import normalize_asset_tag, normalize_serial_number
from itam_engine.data.assets.asset_record import AssetRecord, coerce_asset

# Shortest serial the substring rule applies to
FRAGMENT_LENGTH = MIN_SUBSTRING_MATCH_LENGTH + 1


class DuplicateIndex:
    """
    Index built once over an existing-asset corpus.

    The corpus is read on construction and not referenced afterwards, so the
    index is safe to share between request threads.
    """

    def __init__(self, existing_assets: Iterable):
        self._records: List[AssetRecord] = []
        self._serials: List[Optional[str]] = []
        self._by_tag: Dict[str, List[int]] = defaultdict(list)
        self._by_guid: Dict[Tuple[str, str], List[int]] = defaultdict(list)
        self._by_serial: Dict[str, List[int]] = defaultdict(list)
        self._by_fragment: Dict[str, Set[int]] = defaultdict(set)
        self._by_length: Dict[int, List[int]] = defaultdict(list)

        for position, existing in enumerate(existing_assets):
            record = coerce_asset(existing)
            self._records.append(record)

            if record.asset_tag:
                self._by_tag[normalize_asset_tag(record.asset_tag)].append(position)
            for source, guid in (record.device_guids or {}).items():
                if guid:
                    self._by_guid[(source, guid)].append(position)

            serial = normalize_serial_number(record.serial_number) if record.serial_number else None
            self._serials.append(serial)
            if serial is None:
                continue
            self._by_serial[serial].append(position)
            self._by_length[len(serial)].append(position)
            if len(serial) >= FRAGMENT_LENGTH:
                for start in range(len(serial) - FRAGMENT_LENGTH + 1):
                    self._by_fragment[serial[start:start + FRAGMENT_LENGTH]].add(position)

    def __len__(self) -> int:
        return len(self._records)

    def _serial_candidates(self, serial: str) -> Set[int]:
        positions: Set[int] = set(self._by_serial.get(serial, ()))

        if len(serial) >= FRAGMENT_LENGTH:
            # Longer serials containing this one share its leading fragment
            positions.update(self._by_fragment.get(serial[:FRAGMENT_LENGTH], ()))
            # Shorter serials contained in this one are one of its substrings
            for start in range(len(serial)):
                for end in range(start + FRAGMENT_LENGTH, len(serial) + 1):
                    positions.update(self._by_serial.get(serial[start:end], ()))

        for length in range(len(serial) - MAX_SERIAL_LENGTH_DIFFERENCE,
                            len(serial) + MAX_SERIAL_LENGTH_DIFFERENCE + 1):
            positions.update(self._by_length.get(length, ()))
        return positions

    def find_potential_duplicates(self, candidate) -> List[AssetRecord]:
        """
        Indexed equivalent of ``find_potential_duplicates``.

        Returns:
            List[AssetRecord]: Matching records in corpus order, never the candidate itself
        """
        candidate = coerce_asset(candidate)
        hits: Set[int] = set()

        if candidate.asset_tag:
            hits.update(self._by_tag.get(normalize_asset_tag(candidate.asset_tag), ()))

        for source, guid in (candidate.device_guids or {}).items():
            if guid:
                hits.update(self._by_guid.get((source, guid), ()))

        if candidate.serial_number:
            serial = normalize_serial_number(candidate.serial_number)
            for position in self._serial_candidates(serial) - hits:
                if fuzzy_match_serial(serial, self._serials[position]):
                    hits.add(position)

        return [
            self._records[position]
            for position in sorted(hits)
            if not same_identity(candidate, self._records[position])
        ]

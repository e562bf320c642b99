"""
Asset intake service

Runs an inbound create/update payload through the engine in order:
normalize -> validate -> lifecycle check -> advisory duplicate scan.
Nothing is persisted; the accepted record is handed back to the caller's
persistence layer together with warnings and duplicate hints.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from itam_engine.buisness.assets.duplicates import DuplicateIndex, find_potential_duplicates
from itam_engine.buisness.assets.errors import AssetTransitionError
from itam_engine.buisness.assets.lifecycle import AssetLifecycleStateMachine
from itam_engine.buisness.assets.normalization import normalize_asset
from itam_engine.buisness.assets.validation import (
    ValidationError,
    generate_global_asset_id,
    validate_asset,
)
from itam_engine.config import DEFAULT_DUPLICATE_SCAN_LIMIT
from itam_engine.data.assets.asset_record import AssetRecord, AssetState, coerce_asset
from itam_engine.data.assets.reference_catalog import ReferenceCatalog
from itam_engine.utils.logger import get_logger

logger = get_logger("itam_engine.services.asset_intake")


@dataclass(frozen=True)
class IntakeResult:
    accepted: bool
    asset: AssetRecord
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    duplicates: List[AssetRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'accepted': self.accepted,
            'asset': self.asset.to_dict(),
            'errors': [error.to_dict() for error in self.errors],
            'warnings': list(self.warnings),
            'duplicates': [duplicate.to_dict() for duplicate in self.duplicates],
        }


class AssetIntakeService:
    """
    Stateless pipeline over the engine components.

    Args:
        catalog: Reference catalog override
        duplicate_scan_limit: Corpus size above which the pre-built
            ``DuplicateIndex`` replaces the linear scan
        state_machine: Lifecycle state machine class
    """

    def __init__(self, catalog: Optional[ReferenceCatalog] = None,
                 duplicate_scan_limit: int = DEFAULT_DUPLICATE_SCAN_LIMIT,
                 state_machine=AssetLifecycleStateMachine):
        self.catalog = catalog
        self.duplicate_scan_limit = duplicate_scan_limit
        self.state_machine = state_machine

    def create(self, payload, sequence: Optional[int] = None,
               existing_assets: Optional[Sequence] = None) -> IntakeResult:
        """
        Intake a new asset.

        A missing Global Asset ID is generated from ``sequence``; a missing
        state defaults to Ordered. Discovery syncs may supply any valid state.
        """
        record = coerce_asset(payload)
        if not record.global_asset_id and sequence is not None:
            record = record.with_changes(global_asset_id=generate_global_asset_id(sequence))
        if not record.state:
            record = record.with_changes(state=AssetState.ORDERED)

        return self._process(record, None, existing_assets)

    def update(self, previous, payload, existing_assets: Optional[Sequence] = None) -> IntakeResult:
        """
        Intake a change to a stored asset.

        The Global Asset ID is immutable and a changed state must be a legal,
        guard-passing transition from the stored state.
        """
        return self._process(coerce_asset(payload), coerce_asset(previous), existing_assets)

    def _process(self, record: AssetRecord, previous: Optional[AssetRecord],
                 existing_assets: Optional[Sequence]) -> IntakeResult:
        normalized = normalize_asset(record, self.catalog)

        validation = validate_asset(normalized, self.catalog)
        errors = list(validation.errors)

        if previous is not None:
            errors.extend(self._check_update(previous, normalized))

        if errors:
            logger.info(
                f"Rejected asset {normalized.global_asset_id}: {', '.join(error.field for error in errors)}"
            )
            return IntakeResult(False, normalized, errors, list(validation.warnings))

        duplicates = self._scan_duplicates(normalized, existing_assets) if existing_assets else []
        if duplicates:
            logger.info(f"Asset {normalized.global_asset_id} has {len(duplicates)} potential duplicate(s)")

        return IntakeResult(True, normalized, [], list(validation.warnings), duplicates)

    def _check_update(self, previous: AssetRecord, normalized: AssetRecord) -> List[ValidationError]:
        errors = []
        if previous.global_asset_id != normalized.global_asset_id:
            errors.append(ValidationError(
                'globalAssetId',
                f"Global Asset ID is immutable ({previous.global_asset_id} cannot become "
                f"{normalized.global_asset_id})",
            ))

        if previous.state != normalized.state:
            try:
                self.state_machine.validate_transition(previous.state, normalized.state, normalized)
            except AssetTransitionError as exc:
                errors.append(ValidationError('state', exc.reason))
        return errors

    def _scan_duplicates(self, candidate: AssetRecord, existing_assets: Sequence) -> List[AssetRecord]:
        if len(existing_assets) > self.duplicate_scan_limit:
            logger.warning(
                f"Corpus of {len(existing_assets)} exceeds scan limit {self.duplicate_scan_limit}; "
                f"using duplicate index"
            )
            return DuplicateIndex(existing_assets).find_potential_duplicates(candidate)
        return find_potential_duplicates(candidate, existing_assets)

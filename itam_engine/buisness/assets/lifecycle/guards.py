"""
Transition guards

Each guard is a named pure predicate over an asset record. The transition
table refers to guards by name; adding a guard means registering it here and
listing its name on an edge.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from itam_engine.data.assets.asset_record import AssetRecord, AssetState, WIPE_CERT

OWNER_REQUIRED = 'ownerRequired'
DATA_WIPE_CERT_REQUIRED = 'dataWipeCertRequired'
WARRANTY_CHECK_REQUIRED = 'warrantyCheckRequired'


@dataclass(frozen=True)
class GuardResult:
    passed: bool
    reason: Optional[str] = None


PASS = GuardResult(True)

GuardCheck = Callable[[AssetRecord, str], GuardResult]


def owner_required(asset: AssetRecord, to_state: str) -> GuardResult:
    if not asset.owner:
        return GuardResult(False, 'Owner is required for this transition')
    return PASS


def data_wipe_cert_required(asset: AssetRecord, to_state: str) -> GuardResult:
    # Only meaningful on the way into Disposed
    if to_state != AssetState.DISPOSED:
        return PASS
    if not asset.has_document(WIPE_CERT):
        return GuardResult(False, 'Data wipe certificate is required for disposal')
    return PASS


def warranty_check_required(asset: AssetRecord, to_state: str) -> GuardResult:
    if not asset.warranty:
        return GuardResult(False, 'Warranty information is required for this transition')
    return PASS


GUARDS: Dict[str, GuardCheck] = {
    OWNER_REQUIRED: owner_required,
    DATA_WIPE_CERT_REQUIRED: data_wipe_cert_required,
    WARRANTY_CHECK_REQUIRED: warranty_check_required,
}

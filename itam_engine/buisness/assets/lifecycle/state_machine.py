"""
State machine for the asset lifecycle

Encodes the legal edges between lifecycle states and the guards each edge
carries. Keeps "what is allowed" separate from "how persistence occurs" and
from "who may ask": authorization is checked by the caller.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from itam_engine.buisness.assets.errors import AssetTransitionError
from itam_engine.buisness.assets.lifecycle.guards import (
    DATA_WIPE_CERT_REQUIRED,
    GUARDS,
    OWNER_REQUIRED,
)
from itam_engine.data.assets.asset_record import AssetRecord, AssetState, coerce_asset
from itam_engine.utils.logger import get_logger

logger = get_logger("itam_engine.buisness.assets.lifecycle")


@dataclass(frozen=True)
class LifecycleVerdict:
    valid: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        payload = {'valid': self.valid}
        if self.reason:
            payload['reason'] = self.reason
        return payload


VALID = LifecycleVerdict(True)


class AssetLifecycleStateMachine:
    """
    State machine for asset ``state`` transitions.

    Only edges declared in ``TRANSITIONS`` are legal. An edge lists guard
    names that must all pass, evaluated in order, for the transition to be
    allowed when an asset is supplied. Subclasses may declare their own table.

    Note: Disposed is terminal. Retired cannot return to service; reinstating
    a retired asset is not an edge in this table.
    """

    ORDERED = AssetState.ORDERED
    RECEIVED = AssetState.RECEIVED
    IN_STAGING = AssetState.IN_STAGING
    IN_SERVICE = AssetState.IN_SERVICE
    IN_REPAIR = AssetState.IN_REPAIR
    IN_LOANER = AssetState.IN_LOANER
    LOST = AssetState.LOST
    RETIRED = AssetState.RETIRED
    DISPOSED = AssetState.DISPOSED

    STATES = AssetState.ALL

    # (from_state, to_state) -> ordered guard names
    TRANSITIONS: Dict[Tuple[str, str], Tuple[str, ...]] = {
        (ORDERED, RECEIVED): (),
        (RECEIVED, IN_STAGING): (),
        (IN_STAGING, IN_SERVICE): (OWNER_REQUIRED,),
        (IN_SERVICE, IN_REPAIR): (),
        (IN_SERVICE, IN_LOANER): (),
        (IN_REPAIR, IN_SERVICE): (),
        (IN_LOANER, IN_SERVICE): (),
        (IN_SERVICE, LOST): (),
        (IN_SERVICE, RETIRED): (),
        (IN_SERVICE, DISPOSED): (DATA_WIPE_CERT_REQUIRED,),
        (LOST, IN_SERVICE): (),  # asset recovered
        (RETIRED, DISPOSED): (DATA_WIPE_CERT_REQUIRED,),
    }

    @classmethod
    def is_valid_transition(cls, from_state: str, to_state: str, asset=None) -> LifecycleVerdict:
        """
        Check if a transition is legal.

        Args:
            from_state: Current state
            to_state: Target state
            asset: Optional AssetRecord (or wire mapping) for guard evaluation;
                   without it only table membership is checked

        Returns:
            LifecycleVerdict: ``reason`` names the missing edge or the first failing guard
        """
        # Allow staying in same state (no-op)
        if from_state == to_state:
            return VALID

        guard_names = cls.TRANSITIONS.get((from_state, to_state))
        if guard_names is None:
            return LifecycleVerdict(False, f"No such transition: {from_state} → {to_state}")

        if asset is None:
            return VALID

        record = coerce_asset(asset)
        for guard_name in guard_names:
            result = GUARDS[guard_name](record, to_state)
            if not result.passed:
                logger.debug(
                    f"Guard {guard_name} blocked {record.global_asset_id}: {from_state} → {to_state}"
                )
                return LifecycleVerdict(False, result.reason)

        return VALID

    @classmethod
    def get_valid_next_states(cls, current_state: str, asset=None) -> List[str]:
        """States reachable by one legal, guard-passing edge, in table order"""
        record = coerce_asset(asset) if asset is not None else None
        return [
            to_state
            for (from_state, to_state) in cls.TRANSITIONS
            if from_state == current_state
            and cls.is_valid_transition(current_state, to_state, record).valid
        ]

    @classmethod
    def get_allowed_transitions(cls, from_state: str) -> set:
        """Table edges out of a state, ignoring guards"""
        return {to_state for (source, to_state) in cls.TRANSITIONS if source == from_state}

    @classmethod
    def is_terminal(cls, state: str) -> bool:
        return state in cls.STATES and not cls.get_allowed_transitions(state)

    @classmethod
    def validate_transition(cls, from_state: str, to_state: str, asset=None) -> None:
        """
        Validate transition and raise exception if invalid.

        Raises:
            AssetTransitionError: If the transition is not allowed
        """
        verdict = cls.is_valid_transition(from_state, to_state, asset)
        if not verdict.valid:
            raise AssetTransitionError(from_state, to_state, verdict.reason)

    @classmethod
    def apply_transition(cls, asset, to_state: str) -> AssetRecord:
        """
        Return a copy of the asset moved to ``to_state``.

        The guards see the asset as it stands before the move. The input is
        never mutated.

        Raises:
            AssetTransitionError: If the transition is not allowed
        """
        record = coerce_asset(asset)
        cls.validate_transition(record.state, to_state, record)
        return record.with_changes(state=to_state)

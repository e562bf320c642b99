"""
Guarded asset lifecycle.

Module-level helpers delegate to ``AssetLifecycleStateMachine``.
"""

from itam_engine.buisness.assets.lifecycle.guards import GUARDS, GuardResult
from itam_engine.buisness.assets.lifecycle.policies import (
    AssignmentPolicy,
    DisposalPolicy,
    LoanerCheckoutPolicy,
    can_assign,
    can_checkout_as_loaner,
    can_dispose,
)
from itam_engine.buisness.assets.lifecycle.state_machine import (
    AssetLifecycleStateMachine,
    LifecycleVerdict,
)


def is_valid_transition(from_state, to_state, asset=None) -> LifecycleVerdict:
    return AssetLifecycleStateMachine.is_valid_transition(from_state, to_state, asset)


def get_valid_next_states(current_state, asset=None):
    return AssetLifecycleStateMachine.get_valid_next_states(current_state, asset)


__all__ = [
    'GUARDS',
    'AssetLifecycleStateMachine',
    'AssignmentPolicy',
    'DisposalPolicy',
    'GuardResult',
    'LifecycleVerdict',
    'LoanerCheckoutPolicy',
    'can_assign',
    'can_checkout_as_loaner',
    'can_dispose',
    'get_valid_next_states',
    'is_valid_transition',
]

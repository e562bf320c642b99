"""
Tests for the asset lifecycle state machine
"""

import pytest

from itam_engine.buisness.assets.errors import AssetTransitionError
from itam_engine.buisness.assets.lifecycle import (
    AssetLifecycleStateMachine,
    get_valid_next_states,
    is_valid_transition,
)
from itam_engine.buisness.assets.lifecycle.guards import WARRANTY_CHECK_REQUIRED
from itam_engine.data.assets.asset_record import AssetState


@pytest.mark.parametrize('state', AssetState.ALL)
def test_same_state_is_always_valid(state, make_asset):
    assert is_valid_transition(state, state).valid
    assert is_valid_transition(state, state, make_asset(owner=None)).valid


def test_ordered_cannot_jump_to_disposed():
    verdict = is_valid_transition(AssetState.ORDERED, AssetState.DISPOSED)

    assert not verdict.valid
    assert verdict.reason == 'No such transition: Ordered → Disposed'


def test_table_edges_are_valid_without_asset():
    for from_state, to_state in AssetLifecycleStateMachine.TRANSITIONS:
        assert is_valid_transition(from_state, to_state).valid, f"{from_state} → {to_state}"


def test_retired_cannot_be_reinstated():
    assert not is_valid_transition(AssetState.RETIRED, AssetState.IN_SERVICE).valid


def test_disposed_is_terminal():
    assert AssetLifecycleStateMachine.is_terminal(AssetState.DISPOSED)
    assert get_valid_next_states(AssetState.DISPOSED) == []
    for state in AssetState.ALL:
        if state != AssetState.DISPOSED:
            assert not is_valid_transition(AssetState.DISPOSED, state).valid


@pytest.mark.parametrize('state', ['Shipped', '', None])
def test_unknown_state_is_not_terminal(state):
    assert not AssetLifecycleStateMachine.is_terminal(state)
    assert get_valid_next_states(state) == []


def test_staging_to_service_requires_owner(make_asset):
    unowned = make_asset(state='In Staging')
    owned = make_asset(state='In Staging', owner={'upn': 'sam@example.com'})

    verdict = is_valid_transition(AssetState.IN_STAGING, AssetState.IN_SERVICE, unowned)

    assert not verdict.valid
    assert verdict.reason == 'Owner is required for this transition'
    assert is_valid_transition(AssetState.IN_STAGING, AssetState.IN_SERVICE, owned).valid


def test_disposal_requires_wipe_certificate(make_asset):
    retired = make_asset(state='Retired')
    certified = make_asset(state='Retired', docs=[{'type': 'WipeCert', 'url': 'https://docs/1'}])

    verdict = is_valid_transition(AssetState.RETIRED, AssetState.DISPOSED, retired)

    assert verdict.reason == 'Data wipe certificate is required for disposal'
    assert is_valid_transition(AssetState.RETIRED, AssetState.DISPOSED, certified).valid


def test_guards_are_skipped_without_asset():
    assert is_valid_transition(AssetState.IN_STAGING, AssetState.IN_SERVICE).valid


def test_valid_next_states_follow_table_order(make_asset):
    assert get_valid_next_states(AssetState.IN_SERVICE) == [
        'In Repair', 'In Loaner', 'Lost', 'Retired', 'Disposed',
    ]
    assert get_valid_next_states(AssetState.IN_SERVICE, make_asset()) == [
        'In Repair', 'In Loaner', 'Lost', 'Retired',
    ], "Disposed is filtered out by the wipe certificate guard"


def test_verdict_wire_shape():
    assert is_valid_transition('Ordered', 'Received').to_dict() == {'valid': True}
    assert is_valid_transition('Ordered', 'Lost').to_dict() == {
        'valid': False,
        'reason': 'No such transition: Ordered → Lost',
    }


def test_validate_transition_raises_with_reason(make_asset):
    with pytest.raises(AssetTransitionError) as excinfo:
        AssetLifecycleStateMachine.validate_transition('In Service', 'Disposed', make_asset())

    assert excinfo.value.reason == 'Data wipe certificate is required for disposal'
    assert excinfo.value.to_state == 'Disposed'


def test_apply_transition_returns_copy(make_asset):
    asset = make_asset(state='In Service')

    moved = AssetLifecycleStateMachine.apply_transition(asset, 'In Repair')

    assert moved.state == 'In Repair'
    assert asset.state == 'In Service'


class WarrantyGatedStateMachine(AssetLifecycleStateMachine):
    """Variant where repairs require warranty data"""

    TRANSITIONS = dict(AssetLifecycleStateMachine.TRANSITIONS)
    TRANSITIONS[(AssetState.IN_SERVICE, AssetState.IN_REPAIR)] = (WARRANTY_CHECK_REQUIRED,)


def test_subclass_table_with_warranty_guard(make_asset):
    no_warranty = make_asset()
    with_warranty = make_asset(warranty={'end': '2027-01-01'})

    verdict = WarrantyGatedStateMachine.is_valid_transition('In Service', 'In Repair', no_warranty)

    assert verdict.reason == 'Warranty information is required for this transition'
    assert WarrantyGatedStateMachine.is_valid_transition('In Service', 'In Repair', with_warranty).valid
    assert AssetLifecycleStateMachine.is_valid_transition('In Service', 'In Repair', no_warranty).valid


def test_guards_short_circuit_in_declared_order(make_asset):
    class StrictStateMachine(AssetLifecycleStateMachine):
        TRANSITIONS = {
            (AssetState.RETIRED, AssetState.DISPOSED): ('ownerRequired', 'dataWipeCertRequired'),
        }

    verdict = StrictStateMachine.is_valid_transition('Retired', 'Disposed', make_asset(state='Retired'))

    assert verdict.reason == 'Owner is required for this transition'

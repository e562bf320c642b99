"""
Lifecycle action policies

Preconditions for disposal, assignment and loaner checkout. Each policy
answers with a verdict rather than raising, so callers can show the reason.
"""

from itam_engine.buisness.assets.lifecycle.state_machine import LifecycleVerdict, VALID
from itam_engine.data.assets.asset_record import AssetState, WIPE_CERT, coerce_asset


class DisposalPolicy:
    """
    An asset may be disposed when it is unassigned (or already Retired) and
    has a data wipe certificate on file.
    """

    @classmethod
    def check(cls, asset) -> LifecycleVerdict:
        record = coerce_asset(asset)
        if record.owner and record.state != AssetState.RETIRED:
            return LifecycleVerdict(False, 'Asset must be unassigned before disposal')
        if not record.has_document(WIPE_CERT):
            return LifecycleVerdict(False, 'Data wipe certificate is required')
        return VALID


class AssignmentPolicy:
    """Only assets In Service or In Loaner can be assigned to a person."""

    ASSIGNABLE_STATES = {AssetState.IN_SERVICE, AssetState.IN_LOANER}

    @classmethod
    def check(cls, asset) -> LifecycleVerdict:
        record = coerce_asset(asset)
        if record.state not in cls.ASSIGNABLE_STATES:
            return LifecycleVerdict(
                False, f"Asset must be in service to assign. Current state: {record.state}"
            )
        return VALID


class LoanerCheckoutPolicy:
    """A loaner must be In Service and not assigned to anyone."""

    @classmethod
    def check(cls, asset) -> LifecycleVerdict:
        record = coerce_asset(asset)
        if record.state != AssetState.IN_SERVICE:
            return LifecycleVerdict(False, 'Asset must be in service to checkout as loaner')
        if record.owner:
            return LifecycleVerdict(False, 'Asset must be unassigned to checkout as loaner')
        return VALID


def can_dispose(asset) -> LifecycleVerdict:
    return DisposalPolicy.check(asset)


def can_assign(asset) -> LifecycleVerdict:
    return AssignmentPolicy.check(asset)


def can_checkout_as_loaner(asset) -> LifecycleVerdict:
    return LoanerCheckoutPolicy.check(asset)

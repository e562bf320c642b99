"""
Domain exceptions for asset identity and lifecycle logic

Rule violations (bad formats, missing fields, failed guards) are reported as data.
These exceptions cover the raising convenience wrappers and integration faults
such as unreadable reference data or malformed payloads.
"""


class AssetDomainError(Exception):
    """Base exception for all asset engine errors"""
    pass


class AssetTransitionError(AssetDomainError):
    """Raised when a lifecycle transition is not allowed"""

    def __init__(self, from_state, to_state, reason):
        super().__init__(reason)
        self.from_state = from_state
        self.to_state = to_state
        self.reason = reason


class AssetPayloadError(AssetDomainError):
    """Raised when an inbound payload cannot be read as an asset record"""
    pass


class AssetIdentityError(AssetDomainError):
    """Raised when an identifier cannot be generated or would change"""
    pass


class CatalogLoadError(AssetDomainError):
    """Raised when the reference catalog is missing or malformed"""
    pass


class ConfigurationError(AssetDomainError):
    """Raised when engine configuration values are invalid"""
    pass

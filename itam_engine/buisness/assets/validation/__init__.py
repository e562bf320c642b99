"""
Record validation and identifier generation.
"""

from itam_engine.buisness.assets.validation.asset_validator import (
    ValidationError,
    ValidationResult,
    validate_asset,
    validate_asset_tag,
    validate_global_asset_id,
    validate_required_fields,
    validate_serial_number,
    validate_upn,
)
from itam_engine.buisness.assets.validation.identifiers import (
    generate_asset_tag,
    generate_global_asset_id,
)

__all__ = [
    'ValidationError',
    'ValidationResult',
    'generate_asset_tag',
    'generate_global_asset_id',
    'validate_asset',
    'validate_asset_tag',
    'validate_global_asset_id',
    'validate_required_fields',
    'validate_serial_number',
    'validate_upn',
]

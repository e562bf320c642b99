"""
Asset record validation

Checks structural completeness and field formats. Blocking problems come back
as field-scoped errors; advisory problems come back as warnings that never
block a save.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from itam_engine.data.assets.asset_record import AssetState, coerce_asset
from itam_engine.data.assets.reference_catalog import ReferenceCatalog, get_default_catalog

GLOBAL_ASSET_ID_PATTERN = re.compile(r'^AS-\d{4}-\d{6}$')
SERIAL_NUMBER_PATTERN = re.compile(r'^[A-Z0-9-]{6,20}$')
ASSET_TAG_PATTERN = re.compile(r'^[A-Z]{2,5}-[A-Z0-9]{2,5}-\d{3,5}$')
UPN_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


@dataclass(frozen=True)
class ValidationError:
    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {'field': self.field, 'message': self.message}


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def error_fields(self) -> List[str]:
        return [error.field for error in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'valid': self.valid,
            'errors': [error.to_dict() for error in self.errors],
            'warnings': list(self.warnings),
        }


def validate_serial_number(serial_number: Optional[str]) -> bool:
    if not serial_number:
        return True  # optional field
    return bool(SERIAL_NUMBER_PATTERN.match(serial_number))


def validate_asset_tag(asset_tag: Optional[str]) -> bool:
    if not asset_tag:
        return True  # optional field
    return bool(ASSET_TAG_PATTERN.match(asset_tag))


def validate_global_asset_id(global_asset_id: Optional[str]) -> bool:
    return bool(global_asset_id) and bool(GLOBAL_ASSET_ID_PATTERN.match(global_asset_id))


def validate_upn(upn: Optional[str]) -> bool:
    """Basic email shape"""
    return bool(upn) and bool(UPN_PATTERN.match(upn))


def get_nested_value(data: Dict[str, Any], path: str) -> Any:
    """Resolve a dot path ("owner.upn") against a wire mapping"""
    current = data
    for key in path.split('.'):
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def _missing(value: Any) -> bool:
    return value is None or value == ''


def validate_required_fields(asset, catalog: Optional[ReferenceCatalog] = None) -> List[ValidationError]:
    """
    Check the required-field list for the asset's class category.

    Args:
        asset: AssetRecord or wire mapping
        catalog: Reference catalog override

    Returns:
        List[ValidationError]: One error per missing field
    """
    record = coerce_asset(asset)
    catalog = catalog or get_default_catalog()
    payload = record.to_dict()

    errors = []
    for field_path in catalog.required_fields_for_class(record.asset_class):
        if _missing(get_nested_value(payload, field_path)):
            errors.append(ValidationError(field_path, f"Required field {field_path} is missing"))
    return errors


def validate_asset(asset, catalog: Optional[ReferenceCatalog] = None) -> ValidationResult:
    """
    Validate an asset record.

    Args:
        asset: AssetRecord or wire mapping (an empty mapping is allowed)
        catalog: Reference catalog override

    Returns:
        ValidationResult: ``valid`` is False whenever any blocking error exists
    """
    record = coerce_asset(asset)
    errors: List[ValidationError] = []
    warnings: List[str] = []

    if not record.global_asset_id:
        errors.append(ValidationError('globalAssetId', 'Global Asset ID is required'))
    elif not validate_global_asset_id(record.global_asset_id):
        errors.append(ValidationError(
            'globalAssetId', 'Global Asset ID format is invalid (expected: AS-YYYY-NNNNNN)'
        ))

    if not record.asset_class:
        errors.append(ValidationError('class', 'Asset class is required'))

    if not record.model:
        errors.append(ValidationError('model', 'Model is required'))

    if not record.state:
        errors.append(ValidationError('state', 'Asset state is required'))
    elif record.state not in AssetState.ALL:
        errors.append(ValidationError('state', f"Unknown asset state: {record.state}"))

    if not validate_serial_number(record.serial_number):
        errors.append(ValidationError(
            'serialNumber',
            'Serial number format is invalid (expected: 6-20 alphanumeric characters and hyphens)',
        ))

    if not validate_asset_tag(record.asset_tag):
        errors.append(ValidationError('assetTag', 'Asset tag format is invalid (expected: XX-XXXXX-NNNNN)'))

    if record.owner and record.owner.upn and not validate_upn(record.owner.upn):
        errors.append(ValidationError('owner.upn', 'Owner UPN format is invalid (expected: email address)'))

    if record.asset_class:
        errors.extend(validate_required_fields(record, catalog))

    # Advisory only
    if not record.serial_number:
        warnings.append('Serial number is missing - may impact warranty tracking')

    if not (record.purchase and record.purchase.unit_cost):
        warnings.append('Purchase price is missing - depreciation cannot be calculated')

    if not (record.warranty and record.warranty.end):
        warnings.append('Warranty end date is missing - compliance tracking incomplete')

    if record.state == AssetState.IN_SERVICE and not record.owner:
        warnings.append('Asset is in service but has no owner assigned')

    if record.state == AssetState.IN_SERVICE and not (record.security and record.security.edr):
        warnings.append('Asset is in service but has no EDR status')

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)

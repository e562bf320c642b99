"""
Tests for asset validation and identifier generation
"""

from datetime import date

import pytest

from itam_engine.buisness.assets.errors import AssetIdentityError
from itam_engine.buisness.assets.validation import (
    generate_asset_tag,
    generate_global_asset_id,
    validate_asset,
    validate_asset_tag,
    validate_global_asset_id,
    validate_serial_number,
    validate_upn,
)


def test_empty_asset_is_invalid():
    result = validate_asset({})

    assert result.valid is False
    for field in ('globalAssetId', 'class', 'model', 'state'):
        assert field in result.error_fields(), f"Missing error for {field}"


def test_complete_laptop_is_valid(laptop):
    result = validate_asset(laptop)

    assert result.valid, result.to_dict()
    assert result.errors == []
    assert result.warnings == []


def test_malformed_global_asset_id(laptop_payload):
    laptop_payload['globalAssetId'] = 'AS-24-7'
    result = validate_asset(laptop_payload)

    assert not result.valid
    assert result.errors[0].field == 'globalAssetId'
    assert 'AS-YYYY-NNNNNN' in result.errors[0].message


@pytest.mark.parametrize('field, value', [
    ('serialNumber', 'ab12'),
    ('serialNumber', 'lowercase123'),
    ('assetTag', 'PHILADELPHIA-1-1'),
])
def test_format_errors_are_blocking(laptop_payload, field, value):
    laptop_payload[field] = value
    result = validate_asset(laptop_payload)

    assert not result.valid
    assert field in result.error_fields()


def test_owner_upn_must_look_like_email(laptop_payload):
    laptop_payload['owner']['upn'] = 'jordan.lee'
    result = validate_asset(laptop_payload)

    assert 'owner.upn' in result.error_fields()


def test_unknown_state_is_blocking(laptop_payload):
    laptop_payload['state'] = 'Shipped'
    assert 'state' in validate_asset(laptop_payload).error_fields()


def test_end_user_device_required_fields(laptop_payload):
    del laptop_payload['deviceGuids']
    laptop_payload['purchase'] = {'unitCost': 900}
    laptop_payload['location'] = None

    result = validate_asset(laptop_payload)

    assert not result.valid
    assert set(result.error_fields()) == {'purchase.po', 'purchase.invoice', 'location', 'deviceGuids'}
    assert result.errors[0].message == 'Required field purchase.po is missing'


def test_empty_device_guids_mapping_counts_as_present(laptop_payload):
    laptop_payload['deviceGuids'] = {}
    assert validate_asset(laptop_payload).valid


def test_peripheral_required_fields():
    result = validate_asset({
        'globalAssetId': 'AS-2024-000200',
        'class': 'Monitor',
        'model': 'Dell U2723QE',
        'state': 'Received',
    })

    assert set(result.error_fields()) == {'purchase.unitCost', 'location'}


def test_other_class_has_no_extra_requirements():
    result = validate_asset({
        'globalAssetId': 'AS-2024-000300',
        'class': 'Server',
        'model': 'PowerEdge R750',
        'state': 'Ordered',
    })

    assert result.valid
    assert len(result.warnings) == 3


def test_saas_license_falls_into_other_category():
    result = validate_asset({
        'globalAssetId': 'AS-2024-000400',
        'class': 'SaaS license',
        'model': 'Figma',
        'state': 'In Service',
    })

    assert result.valid, result.to_dict()
    assert result.errors == []
    assert 'Asset is in service but has no owner assigned' in result.warnings


def test_in_service_warnings(laptop_payload):
    laptop_payload['owner'] = None
    laptop_payload['security'] = None
    laptop_payload['class'] = 'Server'

    result = validate_asset(laptop_payload)

    assert result.valid, "Warnings never block"
    assert 'Asset is in service but has no owner assigned' in result.warnings
    assert 'Asset is in service but has no EDR status' in result.warnings


def test_missing_optional_data_warnings():
    result = validate_asset({
        'globalAssetId': 'AS-2024-000300',
        'class': 'Other',
        'model': 'Label printer',
        'state': 'Ordered',
        'purchase': {'unitCost': 0},
    })

    assert result.warnings == [
        'Serial number is missing - may impact warranty tracking',
        'Purchase price is missing - depreciation cannot be calculated',
        'Warranty end date is missing - compliance tracking incomplete',
    ]


def test_result_serializes_to_wire_shape():
    payload = validate_asset({}).to_dict()

    assert payload['valid'] is False
    assert {'field': 'class', 'message': 'Asset class is required'} in payload['errors']
    assert isinstance(payload['warnings'], list)


def test_format_helpers():
    assert validate_serial_number(None)
    assert validate_serial_number('ABC-12345')
    assert not validate_serial_number('A' * 21)
    assert validate_asset_tag('PHILA-ENGIN-00123')
    assert validate_global_asset_id('AS-2024-000007')
    assert not validate_global_asset_id(None)
    assert validate_upn('a.b@corp.example')
    assert not validate_upn('a b@corp.example')


def test_generate_global_asset_id():
    assert generate_global_asset_id(7, year=2024) == 'AS-2024-000007'
    assert generate_global_asset_id(7) == f"AS-{date.today().year}-000007"


def test_generate_asset_tag():
    assert generate_asset_tag('Philadelphia', 'Engineering', 123) == 'PHILA-ENGIN-00123'
    assert generate_asset_tag('new york', 'it', 5) == 'NEWY-IT-00005', \
        "Truncated to five characters before whitespace is stripped"


def test_generated_identifiers_pass_validation():
    assert validate_global_asset_id(generate_global_asset_id(42))
    assert validate_asset_tag(generate_asset_tag('Philadelphia', 'Engineering', 123))


@pytest.mark.parametrize('sequence', [-1, '7', 1.5, True])
def test_invalid_sequence_rejected(sequence):
    with pytest.raises(AssetIdentityError):
        generate_global_asset_id(sequence)


def test_sequence_upper_bounds():
    assert generate_global_asset_id(999999, year=2024) == 'AS-2024-999999'
    assert generate_asset_tag('Philadelphia', 'Engineering', 99999) == 'PHILA-ENGIN-99999'

    with pytest.raises(AssetIdentityError):
        generate_global_asset_id(1000000, year=2024)
    with pytest.raises(AssetIdentityError):
        generate_asset_tag('Philadelphia', 'Engineering', 100000)


@pytest.mark.parametrize('year', [10000, -1, '2024'])
def test_invalid_year_rejected(year):
    with pytest.raises(AssetIdentityError):
        generate_global_asset_id(1, year=year)

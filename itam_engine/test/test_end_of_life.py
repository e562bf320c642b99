"""
Tests for end-of-life tracking
"""

from datetime import date

from itam_engine.buisness.assets.end_of_life import (
    calculate_eol_date,
    get_assets_approaching_eol,
    get_eol_status,
)

TODAY = date(2026, 6, 1)


def _asset(asset_class, purchased, manufacturer=None, asset_id='AS-2020-000001'):
    return {
        'globalAssetId': asset_id,
        'class': asset_class,
        'manufacturer': manufacturer,
        'purchase': {'date': purchased} if purchased else None,
    }


def test_manufacturer_specific_period():
    assert calculate_eol_date(_asset('Laptop', '2020-03-01', 'Apple Inc.')) == date(2027, 3, 1)


def test_class_default_period():
    assert calculate_eol_date(_asset('Phone', '2020-03-01', 'Samsung')) == date(2023, 3, 1)


def test_generic_default_period():
    assert calculate_eol_date(_asset('Headset', '2020-03-01')) == date(2025, 3, 1)


def test_leap_day_purchase():
    assert calculate_eol_date(_asset('Laptop', '2020-02-29', 'Dell')) == date(2025, 2, 28)


def test_unknown_without_purchase_date():
    status = get_eol_status(_asset('Laptop', None), TODAY)

    assert status.status == 'unknown'
    assert status.eol_date is None


def test_status_bands():
    assert get_eol_status(_asset('Laptop', '2020-01-01', 'Dell'), TODAY).status == 'past_eol'
    assert get_eol_status(_asset('Laptop', '2021-07-15', 'Dell'), TODAY).status == 'critical'
    assert get_eol_status(_asset('Laptop', '2021-11-01', 'Dell'), TODAY).status == 'warning'
    assert get_eol_status(_asset('Laptop', '2022-04-01', 'Dell'), TODAY).status == 'info'
    assert get_eol_status(_asset('Laptop', '2025-01-01', 'Dell'), TODAY).status == 'ok'


def test_past_eol_details():
    status = get_eol_status(_asset('Laptop', '2020-01-01', 'Dell'), TODAY)

    assert status.is_past_eol
    assert status.severity == 'critical'
    assert status.message.startswith('Past end-of-life by')
    assert status.to_dict()['eolDate'] == '2025-01-01'


def test_assets_approaching_eol_sorted_soonest_first():
    assets = [
        _asset('Laptop', '2022-04-01', 'Dell', 'AS-2022-000001'),
        _asset('Laptop', '2021-07-15', 'Dell', 'AS-2021-000001'),
        _asset('Laptop', '2020-01-01', 'Dell', 'AS-2020-000001'),
        _asset('Laptop', '2025-01-01', 'Dell', 'AS-2025-000001'),
    ]

    approaching = get_assets_approaching_eol(assets, today=TODAY)

    assert [record.global_asset_id for record, _ in approaching] == ['AS-2021-000001', 'AS-2022-000001']

"""
End-of-life (EOL) tracking

EOL dates are the purchase date plus a support period looked up by
manufacturer and class, then by class alone, then a five-year default.
"""

from __future__ import annotations

import calendar
import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Tuple

from itam_engine.buisness.assets.normalization import normalize_manufacturer
from itam_engine.data.assets.asset_record import AssetRecord, coerce_asset
from itam_engine.data.assets.reference_catalog import ReferenceCatalog, get_default_catalog

DEFAULT_EOL_YEARS = 5

# Months before EOL
CRITICAL_THRESHOLD_MONTHS = 3
WARNING_THRESHOLD_MONTHS = 6
INFO_THRESHOLD_MONTHS = 12


@dataclass(frozen=True)
class EOLStatus:
    status: str
    eol_date: Optional[date] = None
    days_until_eol: Optional[int] = None
    months_until_eol: Optional[int] = None
    is_past_eol: bool = False
    severity: Optional[str] = None
    message: str = ''

    def to_dict(self) -> dict:
        return {
            'status': self.status,
            'eolDate': self.eol_date.isoformat() if self.eol_date else None,
            'daysUntilEOL': self.days_until_eol,
            'monthsUntilEOL': self.months_until_eol,
            'isPastEOL': self.is_past_eol,
            'severity': self.severity,
            'message': self.message,
        }


UNKNOWN_STATUS = EOLStatus(status='unknown', message='Unable to determine EOL date')


def _parse_date(value) -> Optional[date]:
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _add_years(start: date, years: int) -> date:
    target_year = start.year + years
    # Feb 29 purchases roll to Feb 28 in non-leap years
    day = min(start.day, calendar.monthrange(target_year, start.month)[1])
    return start.replace(year=target_year, day=day)


def eol_years_for(asset: AssetRecord, catalog: Optional[ReferenceCatalog] = None) -> int:
    catalog = catalog or get_default_catalog()
    category = (asset.asset_class or '').lower()
    manufacturer = (normalize_manufacturer(asset.manufacturer, catalog) or '').lower()

    manufacturer_periods = catalog.eol_years.get(manufacturer, {})
    if manufacturer and category in manufacturer_periods:
        return manufacturer_periods[category]

    default_periods = catalog.eol_years.get('default', {})
    if category in default_periods:
        return default_periods[category]

    return DEFAULT_EOL_YEARS


def calculate_eol_date(asset, catalog: Optional[ReferenceCatalog] = None) -> Optional[date]:
    """
    EOL date for an asset, or None when it has no purchase date.
    """
    record = coerce_asset(asset)
    purchased = _parse_date(record.purchase.date if record.purchase else None)
    if purchased is None:
        return None
    return _add_years(purchased, eol_years_for(record, catalog))


def get_eol_status(asset, today: Optional[date] = None, catalog: Optional[ReferenceCatalog] = None) -> EOLStatus:
    """
    Classify how close an asset is to end of life.

    Args:
        asset: AssetRecord or wire mapping
        today: Reference date; defaults to today
        catalog: Reference catalog override

    Returns:
        EOLStatus: one of past_eol, critical, warning, info, ok, unknown
    """
    eol_date = calculate_eol_date(asset, catalog)
    if eol_date is None:
        return UNKNOWN_STATUS

    today = today or date.today()
    days_until = (eol_date - today).days
    months_until = math.ceil(days_until / 30)

    if days_until < 0:
        return EOLStatus('past_eol', eol_date, days_until, months_until, True, 'critical',
                         f"Past end-of-life by {abs(months_until)} months")
    if months_until <= CRITICAL_THRESHOLD_MONTHS:
        plural = '' if months_until == 1 else 's'
        return EOLStatus('critical', eol_date, days_until, months_until, False, 'critical',
                         f"Approaching end-of-life in {months_until} month{plural}")
    if months_until <= WARNING_THRESHOLD_MONTHS:
        return EOLStatus('warning', eol_date, days_until, months_until, False, 'warning',
                         f"End-of-life in {months_until} months")
    if months_until <= INFO_THRESHOLD_MONTHS:
        return EOLStatus('info', eol_date, days_until, months_until, False, 'info',
                         f"End-of-life in {months_until} months")
    return EOLStatus('ok', eol_date, days_until, months_until, False, None,
                     f"Supported for {months_until} more months")


def get_assets_approaching_eol(assets: Iterable, threshold_months: int = INFO_THRESHOLD_MONTHS,
                               today: Optional[date] = None,
                               catalog: Optional[ReferenceCatalog] = None) -> List[Tuple[AssetRecord, EOLStatus]]:
    """Assets not yet past EOL but within the threshold, soonest first"""
    approaching = []
    for asset in assets:
        record = coerce_asset(asset)
        status = get_eol_status(record, today, catalog)
        if status.months_until_eol is None or status.is_past_eol:
            continue
        if status.months_until_eol <= threshold_months:
            approaching.append((record, status))
    approaching.sort(key=lambda pair: pair[1].days_until_eol)
    return approaching

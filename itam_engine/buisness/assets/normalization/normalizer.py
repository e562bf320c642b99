"""
Asset attribute normalization

Canonicalizes manufacturer, model, serial number and asset tag strings so that
records from different discovery sources compare equal. Every function is pure,
never raises, and hands back empty or missing input unchanged.
"""

import re
from typing import Optional

from itam_engine.data.assets.asset_record import coerce_asset, AssetRecord
from itam_engine.data.assets.reference_catalog import ReferenceCatalog, get_default_catalog

_WHITESPACE = re.compile(r'\s+')


def _lookup_alias(value: str, aliases: dict) -> Optional[str]:
    # Exact key first, then case-insensitive
    if value in aliases:
        return aliases[value]
    lowered = value.lower()
    for key, canonical in aliases.items():
        if key.lower() == lowered:
            return canonical
    return None


def normalize_manufacturer(manufacturer, catalog: Optional[ReferenceCatalog] = None):
    """
    Canonical manufacturer name ("Dell Inc." -> "Dell").

    Unknown names pass through untouched.
    """
    if not manufacturer:
        return manufacturer
    catalog = catalog or get_default_catalog()
    canonical = _lookup_alias(manufacturer, catalog.manufacturer_aliases)
    return canonical if canonical is not None else manufacturer


def normalize_model(model, manufacturer=None, catalog: Optional[ReferenceCatalog] = None):
    """
    Canonical model name.

    Alias table match wins. Otherwise, when a manufacturer is supplied and its
    canonical name is not already a prefix of the model, it is prepended
    ("Latitude 5520" + "Dell Inc." -> "Dell Latitude 5520").

    Args:
        model: Raw model string
        manufacturer: Optional raw or canonical manufacturer name
        catalog: Reference catalog override

    Returns:
        The canonical model string
    """
    if not model:
        return model
    catalog = catalog or get_default_catalog()

    canonical = _lookup_alias(model, catalog.model_aliases)
    if canonical is not None:
        return canonical

    if manufacturer:
        canonical_manufacturer = normalize_manufacturer(manufacturer, catalog)
        if not model.lower().startswith(canonical_manufacturer.lower()):
            return f"{canonical_manufacturer} {model}"

    return model


def normalize_serial_number(serial):
    """Trim, remove internal whitespace, uppercase"""
    if not serial:
        return serial
    return _WHITESPACE.sub('', serial.strip()).upper()


def normalize_asset_tag(tag):
    """Trim and uppercase"""
    if not tag:
        return tag
    return tag.strip().upper()


def normalize_asset(asset, catalog: Optional[ReferenceCatalog] = None) -> AssetRecord:
    """
    Normalize every canonicalized attribute of a record.

    The model is normalized against the record's own (normalized) manufacturer.
    A new record is returned; the input is left as-is.
    """
    record = coerce_asset(asset)
    catalog = catalog or get_default_catalog()

    manufacturer = normalize_manufacturer(record.manufacturer, catalog)
    return record.with_changes(
        manufacturer=manufacturer,
        model=normalize_model(record.model, manufacturer, catalog),
        serial_number=normalize_serial_number(record.serial_number),
        asset_tag=normalize_asset_tag(record.asset_tag),
    )

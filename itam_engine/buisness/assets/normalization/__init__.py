"""
Attribute normalization for asset identity matching.
"""

from itam_engine.buisness.assets.normalization.normalizer import (
    normalize_asset,
    normalize_asset_tag,
    normalize_manufacturer,
    normalize_model,
    normalize_serial_number,
)

__all__ = [
    'normalize_asset',
    'normalize_asset_tag',
    'normalize_manufacturer',
    'normalize_model',
    'normalize_serial_number',
]

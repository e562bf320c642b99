"""
Reference catalog loader

Manufacturer/model aliases, class categories, required-field lists and EOL
periods are a versioned JSON dataset loaded at startup, so they can be
extended without touching code.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from itam_engine.buisness.assets.errors import CatalogLoadError
from itam_engine.utils.logger import get_logger

logger = get_logger("itam_engine.data.reference_catalog")

DEFAULT_CATALOG_PATH = Path(__file__).parent / "reference_catalog.json"

OTHER_CATEGORY = "Other"

_REQUIRED_SECTIONS = (
    "manufacturer_aliases",
    "model_aliases",
    "class_categories",
    "required_fields",
    "eol_years",
)


@dataclass(frozen=True)
class ReferenceCatalog:
    version: str
    manufacturer_aliases: Dict[str, str]
    model_aliases: Dict[str, str]
    class_categories: Dict[str, Tuple[str, ...]]
    required_fields: Dict[str, Tuple[str, ...]]
    eol_years: Dict[str, Dict[str, int]]

    @classmethod
    def from_dict(cls, data: dict) -> ReferenceCatalog:
        """
        Build a catalog from its JSON document.

        Raises:
            CatalogLoadError: If a section is missing or has the wrong shape
        """
        if not isinstance(data, dict):
            raise CatalogLoadError("Reference catalog must be a JSON object")
        missing = [section for section in _REQUIRED_SECTIONS if not isinstance(data.get(section), dict)]
        if missing:
            raise CatalogLoadError(f"Reference catalog is missing sections: {', '.join(missing)}")

        return cls(
            version=str(data.get("version", "unversioned")),
            manufacturer_aliases=dict(data["manufacturer_aliases"]),
            model_aliases=dict(data["model_aliases"]),
            class_categories={name: tuple(classes) for name, classes in data["class_categories"].items()},
            required_fields={name: tuple(fields) for name, fields in data["required_fields"].items()},
            eol_years={key: dict(periods) for key, periods in data["eol_years"].items()},
        )

    def category_for_class(self, asset_class: Optional[str]) -> str:
        """Map an asset class to its validation category"""
        for category, classes in self.class_categories.items():
            if asset_class in classes:
                return category
        return OTHER_CATEGORY

    def required_fields_for_class(self, asset_class: Optional[str]) -> Tuple[str, ...]:
        return self.required_fields.get(self.category_for_class(asset_class), ())


def load_reference_catalog(path=None) -> ReferenceCatalog:
    """
    Load a reference catalog from disk.

    Args:
        path: JSON file path; defaults to the bundled catalog

    Returns:
        ReferenceCatalog: The loaded catalog

    Raises:
        CatalogLoadError: If the file is missing, unreadable or malformed
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH
    try:
        with catalog_path.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise CatalogLoadError(f"Reference catalog not found: {catalog_path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise CatalogLoadError(f"Reference catalog could not be read: {catalog_path}: {exc}") from exc

    catalog = ReferenceCatalog.from_dict(data)
    logger.info(f"Loaded reference catalog version {catalog.version} from {catalog_path}")
    return catalog


_default_catalog: Optional[ReferenceCatalog] = None
_default_lock = threading.Lock()


def get_default_catalog() -> ReferenceCatalog:
    """Lazily load and cache the bundled catalog"""
    global _default_catalog
    if _default_catalog is None:
        with _default_lock:
            if _default_catalog is None:
                _default_catalog = load_reference_catalog()
    return _default_catalog


def set_default_catalog(catalog: Optional[ReferenceCatalog]) -> None:
    """Install the catalog loaded at startup; ``None`` resets to the bundled one"""
    global _default_catalog
    with _default_lock:
        _default_catalog = catalog

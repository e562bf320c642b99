"""
Engine configuration

Values come from the environment (a ``.env`` file is loaded by ``create_app``
and the run script). Defaults are suitable for local development.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from itam_engine.buisness.assets.errors import ConfigurationError

DEFAULT_DUPLICATE_SCAN_LIMIT = 5000


def _env_flag(environ: Mapping[str, str], key: str, default: str) -> bool:
    return environ.get(key, default).lower() in ('true', '1', 'yes', 'on')


def _env_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw = environ.get(key)
    if raw in (None, ''):
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{key} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{key} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class EngineConfig:
    catalog_path: Optional[str] = None
    duplicate_scan_limit: int = DEFAULT_DUPLICATE_SCAN_LIMIT
    log_level: str = 'INFO'
    log_dir: Optional[str] = None
    enable_hsts: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
        """
        Build configuration from environment variables.

        Raises:
            ConfigurationError: If a numeric setting is not a valid integer
        """
        environ = os.environ if environ is None else environ
        return cls(
            catalog_path=environ.get('ITAM_CATALOG_PATH') or None,
            duplicate_scan_limit=_env_int(environ, 'ITAM_DUPLICATE_SCAN_LIMIT', DEFAULT_DUPLICATE_SCAN_LIMIT),
            log_level=environ.get('ITAM_LOG_LEVEL', 'INFO').upper(),
            log_dir=environ.get('ITAM_LOG_DIR') or None,
            enable_hsts=_env_flag(environ, 'ITAM_ENABLE_HSTS', 'False'),
        )

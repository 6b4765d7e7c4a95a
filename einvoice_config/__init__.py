"""
einvoice_config -- single public entrypoint for compliance settings.

Responsibility:
    ``get_active_settings()`` is the one way to obtain ``ComplianceSettings``
    at runtime. Without an explicit path it reads the packaged
    ``defaults.yaml``.

Architecture position:
    Configuration -- sits above ``einvoice_kernel`` and below
    ``einvoice_services``. Engines MUST NEVER import from this package;
    services pass the resolved values into engine calls.

Failure modes:
    - ``FileNotFoundError`` -- the settings file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ConfigurationError`` -- unknown keys or invalid values.

Audit relevance:
    Every call emits an ``EINVOICE_CONFIG_TRACE`` log entry with the source
    path and a SHA-256 checksum of the resolved settings, tying each
    validation run to the exact settings that governed it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from einvoice_config.loader import compute_checksum, load_yaml_file, parse_settings
from einvoice_config.schema import ComplianceSettings

_logger = logging.getLogger("einvoice_kernel.config")

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_settings(path: Path | str | None = None) -> ComplianceSettings:
    """Load and return the active compliance settings."""
    source = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    settings = parse_settings(load_yaml_file(source))

    _logger.info(
        "EINVOICE_CONFIG_TRACE",
        extra={
            "trace_type": "EINVOICE_CONFIG_TRACE",
            "source": str(source),
            "checksum": compute_checksum(settings.to_dict()),
            "default_locale": settings.default_locale,
        },
    )
    return settings


__all__ = [
    "ComplianceSettings",
    "DEFAULT_SETTINGS_PATH",
    "get_active_settings",
]

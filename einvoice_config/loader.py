"""
Settings Loader (``einvoice_config.loader``).

Loads a YAML settings document and parses it into a frozen
``ComplianceSettings``. Callers obtain settings through
``einvoice_config.get_active_settings()``; the functions here are the
building blocks behind it.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown keys or invalid values  -> ``ConfigurationError``.
"""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from einvoice_config.schema import SUPPORTED_LOCALES, ComplianceSettings
from einvoice_kernel.domain.values import to_decimal
from einvoice_kernel.exceptions import ConfigurationError, InvalidAmountError
from einvoice_kernel.utils.hashing import hash_payload

_DECIMAL_KEYS = ("amount_tolerance", "ledger_tolerance", "ba_bs_threshold")
_RATE_LIST_KEYS = ("legal_vat_rates", "withholding_rates", "tevkifat_rates")
_URL_KEYS = ("archive_qr_base_url", "invoice_qr_base_url")
_KNOWN_KEYS = frozenset(_DECIMAL_KEYS + _RATE_LIST_KEYS + _URL_KEYS + ("default_locale",))


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("<root>", "settings document must be a mapping")
    return data


def _parse_non_negative(key: str, value: Any) -> Decimal:
    try:
        parsed = to_decimal(value, key)
    except InvalidAmountError as e:
        raise ConfigurationError(key, f"not a number: {value!r}") from e
    if parsed < 0:
        raise ConfigurationError(key, "must not be negative")
    return parsed


def parse_settings(data: dict[str, Any]) -> ComplianceSettings:
    """
    Parse a ``ComplianceSettings`` from a dict.

    Keys that are absent keep their defaults. The optional top-level
    ``compliance`` key is unwrapped, so both flat documents and
    ``compliance:``-namespaced ones are accepted.
    """
    if "compliance" in data and isinstance(data["compliance"], dict):
        data = data["compliance"]

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError(sorted(unknown)[0], "unknown setting")

    values: dict[str, Any] = {}

    for key in _DECIMAL_KEYS:
        if key in data:
            values[key] = _parse_non_negative(key, data[key])

    for key in _RATE_LIST_KEYS:
        if key in data:
            raw = data[key]
            if not isinstance(raw, list):
                raise ConfigurationError(key, "must be a list")
            values[key] = tuple(_parse_non_negative(key, item) for item in raw)

    for key in _URL_KEYS:
        if key in data:
            url = data[key]
            if not isinstance(url, str) or not url.startswith("https://"):
                raise ConfigurationError(key, "must be an https URL")
            values[key] = url

    if "default_locale" in data:
        locale = str(data["default_locale"]).strip().lower()
        if locale not in SUPPORTED_LOCALES:
            raise ConfigurationError("default_locale", f"unsupported locale {locale!r}")
        values["default_locale"] = locale

    return ComplianceSettings(**values)


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 checksum of the canonical JSON serialization of ``data``."""
    return hash_payload(data)

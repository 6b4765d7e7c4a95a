"""
GİB error code catalog.

Static, read-only table of regulator error codes with a Turkish and an
English message and a severity. Built once at import; lookups never mutate
it. An unknown code degrades to a generated "unknown error" message with
severity ``error`` instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from types import MappingProxyType

from einvoice_engines.messages import PRIMARY_LOCALE, Locale, render, resolve_locale
from einvoice_kernel.logging_config import get_logger

logger = get_logger("engines.error_catalog")


@unique
class Severity(str, Enum):
    """Severity of a regulator error code."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ErrorCatalogEntry:
    """One regulator error code with its localized messages."""

    code: str
    tr: str
    en: str
    severity: Severity

    def message(self, locale: Locale | str = PRIMARY_LOCALE) -> str:
        return self.tr if resolve_locale(locale) is Locale.TR else self.en


@dataclass(frozen=True)
class ErrorTranslation:
    """Localized message and severity for an error code."""

    message: str
    severity: Severity
    known: bool = True


def _entry(code: str, tr: str, en: str, severity: Severity) -> tuple[str, ErrorCatalogEntry]:
    return code, ErrorCatalogEntry(code=code, tr=tr, en=en, severity=severity)


GIB_ERROR_CATALOG: MappingProxyType = MappingProxyType(dict([
    # Authentication
    _entry("GIB_AUTH_001", "Kimlik doğrulama başarısız", "Authentication failed", Severity.ERROR),
    _entry("GIB_AUTH_002", "Oturum süresi doldu", "Session expired", Severity.WARNING),
    _entry("GIB_AUTH_003", "Yetkisiz erişim", "Unauthorized access", Severity.ERROR),
    # VKN/TCKN
    _entry("GIB_VKN_001", "Geçersiz VKN formatı", "Invalid VKN format", Severity.ERROR),
    _entry(
        "GIB_VKN_002",
        "VKN GİB sisteminde kayıtlı değil",
        "VKN not registered in GİB system",
        Severity.ERROR,
    ),
    _entry("GIB_VKN_003", "E-Fatura mükellefi değil", "Not an E-Fatura taxpayer", Severity.WARNING),
    # Invoice
    _entry("GIB_INV_001", "Fatura formatı geçersiz", "Invalid invoice format", Severity.ERROR),
    _entry(
        "GIB_INV_002",
        "Fatura numarası zaten kullanılmış",
        "Invoice number already used",
        Severity.ERROR,
    ),
    _entry("GIB_INV_003", "Fatura tutarı hatalı", "Invalid invoice amount", Severity.ERROR),
    _entry("GIB_INV_004", "KDV hesaplama hatası", "VAT calculation error", Severity.ERROR),
    _entry("GIB_INV_005", "Zorunlu alan eksik", "Required field missing", Severity.ERROR),
    _entry("GIB_INV_006", "Fatura iptal edilemez", "Invoice cannot be cancelled", Severity.ERROR),
    # E-Defter
    _entry("GIB_DEF_001", "Dönem formatı hatalı", "Invalid period format", Severity.ERROR),
    _entry("GIB_DEF_002", "Borç/Alacak dengesi bozuk", "Debit/Credit imbalance", Severity.ERROR),
    _entry("GIB_DEF_003", "Önceki dönem eksik", "Previous period missing", Severity.ERROR),
    _entry("GIB_DEF_004", "Defter zaten gönderilmiş", "Ledger already submitted", Severity.WARNING),
    # Network/system
    _entry(
        "GIB_SYS_001",
        "GİB sistemi geçici olarak kullanılamıyor",
        "GİB system temporarily unavailable",
        Severity.WARNING,
    ),
    _entry("GIB_SYS_002", "Bağlantı zaman aşımı", "Connection timeout", Severity.ERROR),
    _entry("GIB_SYS_003", "Rate limit aşıldı", "Rate limit exceeded", Severity.WARNING),
]))


def get_catalog_entry(code: str) -> ErrorCatalogEntry | None:
    """Return the catalog entry for ``code``, or None."""
    return GIB_ERROR_CATALOG.get(code)


def translate_error_code(
    code: str, locale: Locale | str = PRIMARY_LOCALE
) -> ErrorTranslation:
    """
    Translate a regulator error code into a localized message and severity.

    Raises:
        UnsupportedLocaleError: If the locale is not tr/en (or primary/secondary).
    """
    resolved = resolve_locale(locale)
    entry = GIB_ERROR_CATALOG.get(code)

    if entry is None:
        logger.warning("unknown_gib_error_code", extra={"error_code": code})
        return ErrorTranslation(
            message=render("unknown_error", resolved, code=code),
            severity=Severity.ERROR,
            known=False,
        )

    return ErrorTranslation(message=entry.message(resolved), severity=entry.severity)

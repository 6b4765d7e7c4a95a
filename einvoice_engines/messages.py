"""
Localized diagnostic messages for the compliance engines.

Turkish is the primary locale (the regulator's language), English the
secondary one. Templates are read-only and use ``str.format`` fields.
"""

from __future__ import annotations

from enum import Enum, unique
from types import MappingProxyType
from typing import Any

from einvoice_kernel.exceptions import UnsupportedLocaleError


@unique
class Locale(str, Enum):
    """Supported message locales."""

    TR = "tr"  # primary
    EN = "en"  # secondary


PRIMARY_LOCALE = Locale.TR
SECONDARY_LOCALE = Locale.EN

_LOCALE_ALIASES = MappingProxyType({
    "tr": Locale.TR,
    "en": Locale.EN,
    "primary": Locale.TR,
    "secondary": Locale.EN,
})


def resolve_locale(locale: Locale | str) -> Locale:
    """Normalize a Locale, locale code, or primary/secondary alias.

    Raises:
        UnsupportedLocaleError: If the locale is not known.
    """
    if isinstance(locale, Locale):
        return locale
    if isinstance(locale, str):
        resolved = _LOCALE_ALIASES.get(locale.strip().lower())
        if resolved is not None:
            return resolved
    raise UnsupportedLocaleError(locale)


def _pair(tr: str, en: str) -> MappingProxyType:
    return MappingProxyType({Locale.TR: tr, Locale.EN: en})


MESSAGES: MappingProxyType = MappingProxyType({
    # Taxpayer identifiers
    "vkn_empty": _pair("VKN boş olamaz", "VKN cannot be empty"),
    "vkn_format": _pair(
        "VKN 10 haneli rakam olmalıdır", "VKN must be 10 digits"
    ),
    "vkn_checksum": _pair(
        "VKN kontrol hanesi geçersiz", "VKN check digit is invalid"
    ),
    "tckn_empty": _pair("TCKN boş olamaz", "TCKN cannot be empty"),
    "tckn_format": _pair(
        "TCKN 11 haneli rakam olmalıdır", "TCKN must be 11 digits"
    ),
    "tckn_leading_zero": _pair(
        "TCKN 0 ile başlayamaz", "TCKN cannot start with 0"
    ),
    "tckn_check10": _pair(
        "TCKN 10. hane kontrol hatası", "TCKN 10th digit check failed"
    ),
    "tckn_check11": _pair(
        "TCKN 11. hane kontrol hatası", "TCKN 11th digit check failed"
    ),
    "tax_id_length": _pair(
        "Vergi kimlik numarası 10 veya 11 haneli olmalıdır",
        "Tax identifier must be 10 or 11 digits",
    ),
    # Invoice totals
    "subtotal_mismatch": _pair(
        "Ara toplam uyuşmazlığı: Hesaplanan {computed}, Beyan edilen {declared}",
        "Subtotal mismatch: computed {computed}, declared {declared}",
    ),
    "vat_mismatch": _pair(
        "KDV uyuşmazlığı: Hesaplanan {computed}, Beyan edilen {declared}",
        "VAT mismatch: computed {computed}, declared {declared}",
    ),
    "total_mismatch": _pair(
        "Toplam uyuşmazlığı: Hesaplanan {computed}, Beyan edilen {declared}",
        "Total mismatch: computed {computed}, declared {declared}",
    ),
    "line_vat_mismatch": _pair(
        "Satır {line}: KDV tutarı hesaplaması uyuşmuyor. Beklenen: {expected}, "
        "Beyan edilen: {declared}",
        "Line {line}: VAT amount does not match. Expected: {expected}, "
        "declared: {declared}",
    ),
    "line_vat_rate_illegal": _pair(
        "Satır {line}: KDV oranı (%{rate}) geçerli bir oran değil. "
        "Geçerli oranlar: {allowed}",
        "Line {line}: VAT rate ({rate}%) is not a legal rate. "
        "Legal rates: {allowed}",
    ),
    "withholding_rate_nonstandard": _pair(
        "Stopaj oranı (%{rate}) standart oranlar arasında değil",
        "Withholding rate ({rate}%) is not a standard rate",
    ),
    "tevkifat_rate_nonstandard": _pair(
        "KDV tevkifat oranı ({rate}) standart oranlar arasında değil",
        "VAT withholding (tevkifat) ratio ({rate}) is not a standard ratio",
    ),
    "ba_bs_required": _pair(
        "Tutar {amount} TL, Ba-Bs bildirim eşiğini ({threshold} TL) aşıyor",
        "Amount {amount} TRY reaches the Ba-Bs reporting threshold "
        "({threshold} TRY)",
    ),
    "supplier_tax_id_invalid": _pair(
        "Satıcı vergi numarası geçersiz: {reason}",
        "Supplier tax identifier is invalid: {reason}",
    ),
    "customer_tax_id_invalid": _pair(
        "Alıcı vergi numarası geçersiz: {reason}",
        "Customer tax identifier is invalid: {reason}",
    ),
    "invalid_transaction_id": _pair(
        "ETTN formatı geçersiz: {value}",
        "Invalid ETTN format: {value}",
    ),
    # UBL-TR structure
    "missing_root": _pair(
        "Fatura root elementi eksik", "Invoice root element missing"
    ),
    "missing_id": _pair(
        "Fatura numarası (ID) eksik", "Invoice number (ID) missing"
    ),
    "missing_issue_date": _pair(
        "Fatura tarihi eksik", "Invoice issue date missing"
    ),
    "missing_supplier": _pair(
        "Satıcı bilgileri eksik", "Supplier party missing"
    ),
    "missing_customer": _pair(
        "Alıcı bilgileri eksik", "Customer party missing"
    ),
    "missing_tax_total": _pair("Vergi toplamı eksik", "Tax total missing"),
    "missing_monetary_total": _pair(
        "Parasal toplamlar eksik", "Legal monetary total missing"
    ),
    "missing_namespace": _pair(
        "Zorunlu namespace eksik: {namespace}",
        "Required namespace missing: {namespace}",
    ),
    # Error catalog fallback
    "unknown_error": _pair(
        "Bilinmeyen hata: {code}", "Unknown error: {code}"
    ),
})


def render(key: str, locale: Locale | str = PRIMARY_LOCALE, **fields: Any) -> str:
    """Render the message ``key`` in ``locale``.

    Raises:
        KeyError: If ``key`` is not a known message.
        UnsupportedLocaleError: If the locale is not supported.
    """
    template = MESSAGES[key][resolve_locale(locale)]
    return template.format(**fields) if fields else template

"""
Module: einvoice_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    compliance engines. This is the canonical import surface for callers
    (einvoice_services and the surrounding platform).

Architecture position:
    Engines -- pure calculation/validation layer, zero I/O.
    May only import einvoice_kernel (and sibling engine modules).
    MUST NOT import einvoice_config or einvoice_services.

Invariants enforced:
    - Purity: engines never read the clock; dates are passed in.
      ``generate_transaction_id`` is the only entropy consumer.
    - Decimal-only arithmetic: monetary amounts are ``Decimal``, rounded
      half-up to kuruş.
    - Expected invalid input is reported in result objects, never raised.

Usage:
    from einvoice_engines import classify_and_validate, compute_vat
    from einvoice_engines import validate_double_entry, translate_error_code
"""

from einvoice_kernel.logging_config import get_logger

logger = get_logger("engines")

from einvoice_engines.document_structure import (
    REQUIRED_ELEMENTS,
    REQUIRED_NAMESPACES,
    StructureCheck,
    validate_document_structure,
)
from einvoice_engines.error_catalog import (
    GIB_ERROR_CATALOG,
    ErrorCatalogEntry,
    ErrorTranslation,
    Severity,
    get_catalog_entry,
    translate_error_code,
)
from einvoice_engines.identifiers import (
    generate_archive_qr_payload,
    generate_invoice_qr_payload,
    generate_invoice_series_id,
    generate_transaction_id,
    is_valid_transaction_id,
)
from einvoice_engines.ledger import BalanceCheck, LedgerEntry, validate_double_entry
from einvoice_engines.messages import PRIMARY_LOCALE, SECONDARY_LOCALE, Locale
from einvoice_engines.reporting import (
    BA_BS_THRESHOLD,
    PeriodGranularity,
    ReportingForm,
    ba_form_code,
    bs_form_code,
    format_gib_date,
    format_gib_datetime,
    format_ledger_period,
    format_turkish_amount,
    get_ba_bs_threshold,
    requires_ba_bs_reporting,
)
from einvoice_engines.status_catalog import (
    DocumentKind,
    EArsivStatus,
    EDefterStatus,
    EFaturaStatus,
    InvoiceScenario,
    InvoiceTypeCode,
    map_internal_status,
)
from einvoice_engines.tax_identifier import (
    IdentifierCheck,
    TaxIdKind,
    classify_and_validate,
    validate_tckn,
    validate_vkn,
)
from einvoice_engines.vat import (
    InvoiceLine,
    TotalsCheck,
    VatBreakdown,
    compute_vat,
    is_legal_vat_rate,
    is_standard_tevkifat_rate,
    is_standard_withholding_rate,
    validate_invoice_totals,
    validate_line_vat,
)

__all__ = [
    # Document structure
    "REQUIRED_ELEMENTS",
    "REQUIRED_NAMESPACES",
    "StructureCheck",
    "validate_document_structure",
    # Error catalog
    "GIB_ERROR_CATALOG",
    "ErrorCatalogEntry",
    "ErrorTranslation",
    "Severity",
    "get_catalog_entry",
    "translate_error_code",
    # Identifiers
    "generate_archive_qr_payload",
    "generate_invoice_qr_payload",
    "generate_invoice_series_id",
    "generate_transaction_id",
    "is_valid_transaction_id",
    # Ledger
    "BalanceCheck",
    "LedgerEntry",
    "validate_double_entry",
    # Messages
    "Locale",
    "PRIMARY_LOCALE",
    "SECONDARY_LOCALE",
    # Reporting
    "BA_BS_THRESHOLD",
    "PeriodGranularity",
    "ReportingForm",
    "ba_form_code",
    "bs_form_code",
    "format_gib_date",
    "format_gib_datetime",
    "format_ledger_period",
    "format_turkish_amount",
    "get_ba_bs_threshold",
    "requires_ba_bs_reporting",
    # Status catalog
    "DocumentKind",
    "EArsivStatus",
    "EDefterStatus",
    "EFaturaStatus",
    "InvoiceScenario",
    "InvoiceTypeCode",
    "map_internal_status",
    # Tax identifiers
    "IdentifierCheck",
    "TaxIdKind",
    "classify_and_validate",
    "validate_tckn",
    "validate_vkn",
    # VAT
    "InvoiceLine",
    "TotalsCheck",
    "VatBreakdown",
    "compute_vat",
    "is_legal_vat_rate",
    "is_standard_tevkifat_rate",
    "is_standard_withholding_rate",
    "validate_invoice_totals",
    "validate_line_vat",
]

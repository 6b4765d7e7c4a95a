"""
Typed exception hierarchy for the e-invoice compliance kernel.

Expected invalid input (a malformed VKN, a totals mismatch, a missing UBL
element, an unknown regulator error code) is never raised: engines return
result objects carrying the verdict and localized diagnostics. The
exceptions below are reserved for callers that break a function's basic
contract, such as passing a negative VAT rate or an unknown document kind.

Every exception carries a class-level ``code`` (machine-readable) and stores
its context as attributes, so the structured log formatter can emit them as
``exc_*`` fields.

    EInvoiceKernelError (base)
    |
    +-- InputContractError
    |   +-- InvalidAmountError
    |   +-- InvalidVatRateError
    |   +-- InvalidToleranceError
    |   +-- NegativeLedgerAmountError
    |   +-- InvalidSeriesComponentError
    |   +-- InvalidPeriodGranularityError
    |
    +-- CatalogError
    |   +-- UnknownDocumentKindError
    |   +-- UnsupportedLocaleError
    |
    +-- ConfigurationError

Category  | Code                         | When Raised
----------|------------------------------|--------------------------------------
Input     | INVALID_AMOUNT               | Amount is not a finite decimal
          | INVALID_VAT_RATE             | VAT rate is negative or not finite
          | INVALID_TOLERANCE            | Tolerance is negative
          | NEGATIVE_LEDGER_AMOUNT       | Debit or credit below zero
          | INVALID_SERIES_COMPONENT     | Year/serial out of invoice-ID range
          | INVALID_PERIOD_GRANULARITY   | Unknown e-Defter period type
----------|------------------------------|--------------------------------------
Catalog   | UNKNOWN_DOCUMENT_KIND        | Status vocabulary does not exist
          | UNSUPPORTED_LOCALE           | Locale other than tr/en
----------|------------------------------|--------------------------------------
Config    | CONFIGURATION_ERROR          | Settings file has invalid values
"""

from typing import Any


class EInvoiceKernelError(Exception):
    """
    Base exception for all e-invoice kernel errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "EINVOICE_KERNEL_ERROR"


# Input contract violations


class InputContractError(EInvoiceKernelError):
    """Base exception for arguments that violate a function's contract."""

    code: str = "INPUT_CONTRACT_ERROR"


class InvalidAmountError(InputContractError):
    """Value cannot be interpreted as a finite decimal amount."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field_name: str, value: Any):
        self.field_name = field_name
        self.value = repr(value)
        super().__init__(f"Invalid amount for {field_name}: {value!r}")


class InvalidVatRateError(InputContractError):
    """VAT rate is negative."""

    code: str = "INVALID_VAT_RATE"

    def __init__(self, rate: Any):
        self.rate = str(rate)
        super().__init__(f"VAT rate cannot be negative: {rate}")


class InvalidToleranceError(InputContractError):
    """Comparison tolerance is negative."""

    code: str = "INVALID_TOLERANCE"

    def __init__(self, tolerance: Any):
        self.tolerance = str(tolerance)
        super().__init__(f"Tolerance cannot be negative: {tolerance}")


class NegativeLedgerAmountError(InputContractError):
    """Debit or credit amount on a ledger entry is below zero."""

    code: str = "NEGATIVE_LEDGER_AMOUNT"

    def __init__(self, side: str, amount: Any):
        self.side = side
        self.amount = str(amount)
        super().__init__(f"Ledger {side} cannot be negative: {amount}")


class InvalidSeriesComponentError(InputContractError):
    """Year or serial number does not fit the invoice ID layout."""

    code: str = "INVALID_SERIES_COMPONENT"

    def __init__(self, component: str, value: Any, reason: str):
        self.component = component
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid invoice ID {component} {value!r}: {reason}")


class InvalidPeriodGranularityError(InputContractError):
    """Period type is not monthly, quarterly or yearly."""

    code: str = "INVALID_PERIOD_GRANULARITY"

    def __init__(self, granularity: Any):
        self.granularity = repr(granularity)
        super().__init__(f"Unknown period granularity: {granularity!r}")


# Catalog lookups


class CatalogError(EInvoiceKernelError):
    """Base exception for status/error catalog misuse."""

    code: str = "CATALOG_ERROR"


class UnknownDocumentKindError(CatalogError):
    """No status vocabulary exists for the requested document kind."""

    code: str = "UNKNOWN_DOCUMENT_KIND"

    def __init__(self, document_kind: Any):
        self.document_kind = repr(document_kind)
        super().__init__(f"Unknown document kind: {document_kind!r}")


class UnsupportedLocaleError(CatalogError):
    """Requested locale has no catalog messages."""

    code: str = "UNSUPPORTED_LOCALE"

    def __init__(self, locale: Any):
        self.locale = repr(locale)
        super().__init__(f"Unsupported locale: {locale!r}")


# Configuration


class ConfigurationError(EInvoiceKernelError):
    """Compliance settings contain an invalid value."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Invalid setting {key!r}: {message}")

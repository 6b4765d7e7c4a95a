"""
Regulator status vocabularies and internal-status mapping.

Three closed vocabularies exist, one per document kind:

    e-Fatura (invoice)  -> EFaturaStatus
    e-Arşiv  (archive)  -> EArsivStatus
    e-Defter (ledger)   -> EDefterStatus

``map_internal_status`` translates the caller's lifecycle state into the
regulator vocabulary of the given kind. The mapping is fail-open: an
internal state with no regulator counterpart is returned unchanged.

The e-Fatura scenario and invoice-type code lists live here as well, since
they are part of the same regulator vocabulary.
"""

from __future__ import annotations

from enum import Enum, unique
from types import MappingProxyType

from einvoice_kernel.exceptions import UnknownDocumentKindError
from einvoice_kernel.logging_config import get_logger

logger = get_logger("engines.status_catalog")


@unique
class DocumentKind(str, Enum):
    """Document families with their own status vocabulary."""

    INVOICE = "invoice"  # e-Fatura
    ARCHIVE = "archive"  # e-Arşiv
    LEDGER = "ledger"  # e-Defter


@unique
class EFaturaStatus(str, Enum):
    """e-Fatura submission status."""

    DRAFT = "DRAFT"  # Taslak
    QUEUED = "QUEUED"  # Sırada bekliyor
    SENDING = "SENDING"  # Gönderiliyor
    SENT = "SENT"  # Gönderildi
    DELIVERED = "DELIVERED"  # Teslim edildi
    ACCEPTED = "ACCEPTED"  # Kabul edildi
    REJECTED = "REJECTED"  # Reddedildi
    CANCELLED = "CANCELLED"  # İptal edildi
    WAITING_RESPONSE = "WAITING_RESPONSE"  # Yanıt bekleniyor
    FAILED = "FAILED"  # Başarısız


@unique
class EArsivStatus(str, Enum):
    """e-Arşiv archival status."""

    DRAFT = "DRAFT"
    ARCHIVED = "ARCHIVED"
    SENT_TO_CUSTOMER = "SENT_TO_CUSTOMER"
    CANCELLED = "CANCELLED"
    FAILED = "FAILED"


@unique
class EDefterStatus(str, Enum):
    """e-Defter ledger submission status."""

    DRAFT = "DRAFT"
    GENERATED = "GENERATED"
    VALIDATED = "VALIDATED"
    SUBMITTED = "SUBMITTED"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    PENDING_CORRECTION = "PENDING_CORRECTION"


@unique
class InvoiceScenario(str, Enum):
    """e-Fatura scenario (ProfileID)."""

    TICARIFATURA = "TICARIFATURA"  # Commercial invoice
    TEMELFATURA = "TEMELFATURA"  # Basic invoice
    YOLCUBERABERI = "YOLCUBERABERI"  # Passenger accompanying
    IHRACAT = "IHRACAT"  # Export
    KAMU = "KAMU"  # Public sector
    OZELFATURA = "OZELFATURA"  # Special invoice
    HKS = "HKS"  # Hal Kayıt Sistemi
    SGK = "SGK"  # Social Security Institution


@unique
class InvoiceTypeCode(str, Enum):
    """e-Fatura invoice type (InvoiceTypeCode)."""

    SATIS = "SATIS"  # Sales
    IADE = "IADE"  # Return
    TEVKIFAT = "TEVKIFAT"  # Withholding
    ISTISNA = "ISTISNA"  # Exemption
    OZELMATRAH = "OZELMATRAH"  # Special base
    IHRACKAYITLI = "IHRACKAYITLI"  # Export registered


_INVOICE_STATUS_MAP = MappingProxyType({
    "DRAFT": EFaturaStatus.DRAFT,
    "PENDING": EFaturaStatus.QUEUED,
    "SUBMITTED": EFaturaStatus.SENT,
    "ACCEPTED": EFaturaStatus.ACCEPTED,
    "REJECTED": EFaturaStatus.REJECTED,
    "CANCELLED": EFaturaStatus.CANCELLED,
    "FAILED": EFaturaStatus.FAILED,
})

_ARCHIVE_STATUS_MAP = MappingProxyType({
    "DRAFT": EArsivStatus.DRAFT,
    "ARCHIVED": EArsivStatus.ARCHIVED,
    "SENT": EArsivStatus.SENT_TO_CUSTOMER,
    "CANCELLED": EArsivStatus.CANCELLED,
    "FAILED": EArsivStatus.FAILED,
})

_LEDGER_STATUS_MAP = MappingProxyType({
    "DRAFT": EDefterStatus.DRAFT,
    "GENERATED": EDefterStatus.GENERATED,
    "VALIDATED": EDefterStatus.VALIDATED,
    "SUBMITTED": EDefterStatus.SUBMITTED,
    "ACCEPTED": EDefterStatus.ACCEPTED,
    "REJECTED": EDefterStatus.REJECTED,
})

STATUS_MAPS: MappingProxyType = MappingProxyType({
    DocumentKind.INVOICE: _INVOICE_STATUS_MAP,
    DocumentKind.ARCHIVE: _ARCHIVE_STATUS_MAP,
    DocumentKind.LEDGER: _LEDGER_STATUS_MAP,
})

# Product names used by the surrounding platform
_KIND_ALIASES = MappingProxyType({
    "efatura": DocumentKind.INVOICE,
    "earsiv": DocumentKind.ARCHIVE,
    "edefter": DocumentKind.LEDGER,
})


def resolve_document_kind(document_kind: DocumentKind | str) -> DocumentKind:
    """Normalize a DocumentKind, its value, or an e-Fatura/e-Arşiv/e-Defter alias.

    Raises:
        UnknownDocumentKindError: If no vocabulary exists for the kind.
    """
    if isinstance(document_kind, DocumentKind):
        return document_kind
    if isinstance(document_kind, str):
        key = document_kind.strip().lower().replace("-", "")
        if key in _KIND_ALIASES:
            return _KIND_ALIASES[key]
        try:
            return DocumentKind(key)
        except ValueError:
            pass
    raise UnknownDocumentKindError(document_kind)


def map_internal_status(
    internal_status: str, document_kind: DocumentKind | str
) -> str:
    """
    Map an internal lifecycle state to the regulator status of ``document_kind``.

    Unmapped states pass through unchanged.

    Raises:
        UnknownDocumentKindError: If the document kind is not known.
    """
    kind = resolve_document_kind(document_kind)
    mapped = STATUS_MAPS[kind].get(internal_status)
    if mapped is None:
        logger.debug("status_passthrough", extra={
            "internal_status": internal_status,
            "document_kind": kind.value,
        })
        return internal_status
    return mapped.value

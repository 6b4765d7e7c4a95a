"""
DocumentIssuanceService -- identifiers and QR payloads for a new invoice.

Assigns the ETTN and the GİB invoice number and builds the QR verification
URL against the portal configured in ``ComplianceSettings``
(``archive_qr_base_url`` for e-Arşiv, ``invoice_qr_base_url`` for e-Fatura).

Architecture: einvoice_services -- imperative shell.
    Serial allocation is the caller's concern; the service only formats
    the number it is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from einvoice_config import ComplianceSettings, get_active_settings
from einvoice_engines.identifiers import (
    generate_archive_qr_payload,
    generate_invoice_qr_payload,
    generate_invoice_series_id,
    generate_transaction_id,
)
from einvoice_engines.status_catalog import DocumentKind
from einvoice_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.issuance")


@dataclass(frozen=True)
class IssuedDocument:
    """Identifiers assigned to an invoice at issue time."""

    document_kind: DocumentKind
    transaction_id: str
    invoice_number: str
    qr_payload: str


class DocumentIssuanceService:
    """Assigns identifiers and QR payloads using the active settings."""

    def __init__(self, settings: ComplianceSettings | None = None) -> None:
        self._settings = settings or get_active_settings()

    @property
    def settings(self) -> ComplianceSettings:
        return self._settings

    def issue_archive_invoice(
        self,
        prefix: str,
        year: int,
        serial: int,
        issuer_tax_id: str,
        issued_at: datetime | date,
        amount: Decimal | int | str,
        transaction_id: str | None = None,
    ) -> IssuedDocument:
        """Identifiers for an e-Arşiv invoice; the QR hash covers the amount."""
        ettn = transaction_id or generate_transaction_id()
        with LogContext.bind(document_id=ettn):
            invoice_number = generate_invoice_series_id(prefix, year, serial)
            qr_payload = generate_archive_qr_payload(
                ettn,
                issuer_tax_id,
                issued_at,
                amount,
                base_url=self._settings.archive_qr_base_url,
            )
            return self._issued(DocumentKind.ARCHIVE, ettn, invoice_number, qr_payload)

    def issue_einvoice(
        self,
        prefix: str,
        year: int,
        serial: int,
        sender_tax_id: str,
        receiver_tax_id: str,
        issued_at: datetime | date,
        transaction_id: str | None = None,
    ) -> IssuedDocument:
        """Identifiers for an e-Fatura exchanged between two registered parties."""
        ettn = transaction_id or generate_transaction_id()
        with LogContext.bind(document_id=ettn):
            invoice_number = generate_invoice_series_id(prefix, year, serial)
            qr_payload = generate_invoice_qr_payload(
                ettn,
                sender_tax_id,
                receiver_tax_id,
                issued_at,
                base_url=self._settings.invoice_qr_base_url,
            )
            return self._issued(DocumentKind.INVOICE, ettn, invoice_number, qr_payload)

    @staticmethod
    def _issued(
        kind: DocumentKind, ettn: str, invoice_number: str, qr_payload: str
    ) -> IssuedDocument:
        logger.info("document_identifiers_issued", extra={
            "document_kind": kind.value,
            "invoice_number": invoice_number,
        })
        return IssuedDocument(
            document_kind=kind,
            transaction_id=ettn,
            invoice_number=invoice_number,
            qr_payload=qr_payload,
        )

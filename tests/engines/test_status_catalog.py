"""
Tests for regulator status vocabularies and internal-status mapping.
"""

import pytest

from einvoice_engines.status_catalog import (
    STATUS_MAPS,
    DocumentKind,
    EArsivStatus,
    EDefterStatus,
    EFaturaStatus,
    InvoiceScenario,
    InvoiceTypeCode,
    map_internal_status,
    resolve_document_kind,
)
from einvoice_kernel.exceptions import UnknownDocumentKindError


class TestMapInternalStatus:

    @pytest.mark.parametrize("internal, expected", [
        ("DRAFT", "DRAFT"),
        ("PENDING", "QUEUED"),
        ("SUBMITTED", "SENT"),
        ("ACCEPTED", "ACCEPTED"),
        ("REJECTED", "REJECTED"),
        ("CANCELLED", "CANCELLED"),
        ("FAILED", "FAILED"),
    ])
    def test_invoice(self, internal, expected):
        assert map_internal_status(internal, DocumentKind.INVOICE) == expected

    def test_archive_sent_means_sent_to_customer(self):
        assert map_internal_status("SENT", "archive") == "SENT_TO_CUSTOMER"
        assert map_internal_status("ARCHIVED", "archive") == "ARCHIVED"

    def test_ledger(self):
        assert map_internal_status("GENERATED", "ledger") == "GENERATED"
        assert map_internal_status("VALIDATED", "ledger") == "VALIDATED"

    def test_unknown_state_passes_through(self):
        assert map_internal_status("UNKNOWN_STATE", "invoice") == "UNKNOWN_STATE"

    def test_pending_not_mapped_for_archive(self):
        assert map_internal_status("PENDING", "archive") == "PENDING"

    def test_returns_plain_string(self):
        result = map_internal_status("PENDING", "invoice")
        assert type(result) is str

    def test_unknown_kind_raises(self):
        with pytest.raises(UnknownDocumentKindError) as exc_info:
            map_internal_status("DRAFT", "receipt")
        assert exc_info.value.code == "UNKNOWN_DOCUMENT_KIND"


class TestResolveDocumentKind:

    @pytest.mark.parametrize("alias, kind", [
        ("efatura", DocumentKind.INVOICE),
        ("e-Fatura", DocumentKind.INVOICE),
        ("E-ARSIV", DocumentKind.ARCHIVE),
        ("e-defter", DocumentKind.LEDGER),
        ("Ledger", DocumentKind.LEDGER),
        (DocumentKind.ARCHIVE, DocumentKind.ARCHIVE),
    ])
    def test_aliases(self, alias, kind):
        assert resolve_document_kind(alias) is kind

    def test_non_string_raises(self):
        with pytest.raises(UnknownDocumentKindError):
            resolve_document_kind(3)


class TestVocabularies:

    def test_every_mapped_value_in_vocabulary(self):
        vocabularies = {
            DocumentKind.INVOICE: EFaturaStatus,
            DocumentKind.ARCHIVE: EArsivStatus,
            DocumentKind.LEDGER: EDefterStatus,
        }
        for kind, mapping in STATUS_MAPS.items():
            for status in mapping.values():
                assert isinstance(status, vocabularies[kind])

    def test_maps_read_only(self):
        with pytest.raises(TypeError):
            STATUS_MAPS[DocumentKind.INVOICE]["NEW"] = EFaturaStatus.DRAFT

    def test_invoice_vocabulary(self):
        assert {s.value for s in EFaturaStatus} == {
            "DRAFT", "QUEUED", "SENDING", "SENT", "DELIVERED", "ACCEPTED",
            "REJECTED", "CANCELLED", "WAITING_RESPONSE", "FAILED",
        }

    def test_ledger_has_pending_correction(self):
        assert EDefterStatus.PENDING_CORRECTION.value == "PENDING_CORRECTION"

    def test_scenarios_and_type_codes(self):
        assert InvoiceScenario("TICARIFATURA") is InvoiceScenario.TICARIFATURA
        assert InvoiceTypeCode.TEVKIFAT.value == "TEVKIFAT"
        assert len(InvoiceScenario) == 8
        assert len(InvoiceTypeCode) == 6

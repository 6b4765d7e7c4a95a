"""
Tests for the UBL-TR structural completeness check.
"""

import pytest

from einvoice_engines.document_structure import (
    REQUIRED_ELEMENTS,
    REQUIRED_NAMESPACES,
    StructureCheck,
    validate_document_structure,
)


class TestValidateDocumentStructure:

    def test_complete_document(self, ubl_invoice):
        result = validate_document_structure(ubl_invoice)
        assert result == StructureCheck(valid=True, errors=(), missing=())

    def test_empty_document_reports_everything(self):
        result = validate_document_structure("")

        assert result.valid is False
        assert len(result.errors) == 10
        assert len(result.missing) == len(REQUIRED_ELEMENTS) + len(REQUIRED_NAMESPACES)

    def test_missing_issue_date(self, ubl_invoice):
        document = ubl_invoice.replace(
            "<cbc:IssueDate>2024-01-15</cbc:IssueDate>", ""
        )
        result = validate_document_structure(document)

        assert result.valid is False
        assert result.errors == ("Fatura tarihi eksik",)
        assert result.missing == ("<cbc:IssueDate>",)

    def test_missing_namespace_english(self, ubl_invoice):
        namespace = (
            "urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2"
        )
        document = ubl_invoice.replace(namespace, "urn:example:other")
        result = validate_document_structure(document, "en")

        assert result.errors == (f"Required namespace missing: {namespace}",)

    def test_errors_in_declaration_order(self):
        document = "<Invoice><cbc:ID>1</cbc:ID></Invoice>"
        result = validate_document_structure(document)

        assert result.missing[0] == "<cbc:IssueDate>"
        assert result.missing[-1] == REQUIRED_NAMESPACES[-1]

    def test_presence_only(self, ubl_invoice):
        """Markers are matched as text; well-formedness is not checked."""
        document = ubl_invoice.replace("</Invoice>", "")
        assert validate_document_structure(document).valid is True

    def test_non_string_raises(self):
        with pytest.raises(TypeError):
            validate_document_structure(b"<Invoice/>")

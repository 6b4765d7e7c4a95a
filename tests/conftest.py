"""
Pytest fixtures for the e-invoice compliance test suite.

Provides:
- Known-valid taxpayer identifiers
- A complete UBL-TR invoice skeleton
- Default compliance settings
"""

from datetime import UTC, datetime

import pytest

from einvoice_config import ComplianceSettings

# Check digits worked by hand against the VKN/TCKN algorithms
VALID_VKNS = ("1234567890", "0123456789", "5555555553")
VALID_TCKNS = ("10000000146", "12345678950")

UBL_INVOICE = """<?xml version="1.0" encoding="UTF-8"?>
<Invoice xmlns="urn:oasis:names:specification:ubl:schema:xsd:Invoice-2"
    xmlns:cac="urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2"
    xmlns:cbc="urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2">
  <cbc:ProfileID>TICARIFATURA</cbc:ProfileID>
  <cbc:ID>ABC2024000000001</cbc:ID>
  <cbc:IssueDate>2024-01-15</cbc:IssueDate>
  <cac:AccountingSupplierParty><cac:Party/></cac:AccountingSupplierParty>
  <cac:AccountingCustomerParty><cac:Party/></cac:AccountingCustomerParty>
  <cac:TaxTotal><cbc:TaxAmount currencyID="TRY">20.00</cbc:TaxAmount></cac:TaxTotal>
  <cac:LegalMonetaryTotal>
    <cbc:PayableAmount currencyID="TRY">120.00</cbc:PayableAmount>
  </cac:LegalMonetaryTotal>
</Invoice>
"""


@pytest.fixture
def valid_vkn() -> str:
    return VALID_VKNS[0]


@pytest.fixture
def valid_tckn() -> str:
    return VALID_TCKNS[0]


@pytest.fixture
def ubl_invoice() -> str:
    return UBL_INVOICE


@pytest.fixture
def issue_moment() -> datetime:
    return datetime(2024, 1, 15, 10, 30, tzinfo=UTC)


@pytest.fixture
def settings() -> ComplianceSettings:
    return ComplianceSettings()

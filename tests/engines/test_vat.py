"""
Tests for the VAT engine.

Covers:
- Exclusive and VAT-included (reverse) calculation
- Per-step half-up rounding
- Invoice totals reconciliation with tolerance
- Line-level VAT checks
- Legal rate tables (KDV, stopaj, tevkifat)
- Edge cases and error handling
"""

from decimal import Decimal

import pytest

from einvoice_engines.vat import (
    LEGAL_VAT_RATES,
    InvoiceLine,
    TotalsCheck,
    VatBreakdown,
    compute_vat,
    expected_line_vat,
    is_legal_vat_rate,
    is_standard_tevkifat_rate,
    is_standard_withholding_rate,
    validate_invoice_totals,
    validate_line_vat,
)
from einvoice_kernel.exceptions import (
    InvalidAmountError,
    InvalidToleranceError,
    InvalidVatRateError,
)


class TestComputeVatExclusive:
    """Tests for VAT added on top of a net amount."""

    def test_standard_rate(self):
        result = compute_vat(Decimal("100.00"), Decimal("20"))

        assert result.tax_base == Decimal("100.00")
        assert result.tax_amount == Decimal("20.00")
        assert result.total_amount == Decimal("120.00")

    def test_half_up_rounding(self):
        """0.025 rounds up to 0.03, not to the even 0.02."""
        result = compute_vat("0.25", "10")
        assert result.tax_amount == Decimal("0.03")
        assert result.total_amount == Decimal("0.28")

    def test_float_input_converted_via_str(self):
        result = compute_vat(100.1, 18)
        assert result.tax_amount == Decimal("18.02")
        assert result.total_amount == Decimal("118.12")

    def test_zero_rate(self):
        result = compute_vat(Decimal("250.00"), 0)
        assert result.tax_amount == Decimal("0.00")
        assert result.total_amount == Decimal("250.00")

    def test_rounded_to_two_places(self):
        result = compute_vat(Decimal("10.05"), Decimal("18"))
        assert result.tax_amount == Decimal("1.81")
        assert result.tax_amount.as_tuple().exponent == -2
        assert result.total_amount == Decimal("11.86")

    def test_breakdown_consistent(self):
        assert compute_vat(Decimal("33.33"), Decimal("20")).is_consistent()


class TestComputeVatIncluded:
    """Tests for extracting VAT from a VAT-inclusive total."""

    def test_reverse_standard_rate(self):
        result = compute_vat(Decimal("120.00"), Decimal("20"), is_vat_included=True)

        assert result.tax_base == Decimal("100.00")
        assert result.tax_amount == Decimal("20.00")
        assert result.total_amount == Decimal("120.00")

    def test_reverse_rounds_base_first(self):
        # 100 / 1.18 = 84.7457... -> 84.75, VAT is the remainder
        result = compute_vat(Decimal("100"), Decimal("18"), is_vat_included=True)

        assert result.tax_base == Decimal("84.75")
        assert result.tax_amount == Decimal("15.25")
        assert result.total_amount == Decimal("100")

    def test_half_kurus_base_rounded_before_tax(self):
        # 0.25 / 2 = 0.125 -> base 0.13, VAT is what remains of the total
        result = compute_vat("0.25", "100", is_vat_included=True)

        assert result.tax_base == Decimal("0.13")
        assert result.tax_amount == Decimal("0.12")
        assert result.total_amount == Decimal("0.25")

    def test_total_equals_input(self):
        result = compute_vat("57.31", "10", True)
        assert result.total_amount == Decimal("57.31")
        assert result.tax_base + result.tax_amount == result.total_amount

    def test_round_trip_within_one_kurus(self):
        forward = compute_vat(Decimal("84.75"), Decimal("18"))
        back = compute_vat(forward.total_amount, Decimal("18"), is_vat_included=True)
        assert abs(back.tax_base - Decimal("84.75")) <= Decimal("0.01")


class TestComputeVatErrors:

    def test_negative_rate_raises(self):
        with pytest.raises(InvalidVatRateError) as exc_info:
            compute_vat(Decimal("100"), Decimal("-1"))
        assert exc_info.value.code == "INVALID_VAT_RATE"

    def test_non_numeric_amount_raises(self):
        with pytest.raises(InvalidAmountError):
            compute_vat("abc", 20)

    def test_none_rate_raises(self):
        with pytest.raises(InvalidAmountError):
            compute_vat(100, None)

    @pytest.mark.parametrize("included", [False, True])
    def test_amount_too_large_raises(self, included):
        with pytest.raises(InvalidAmountError):
            compute_vat(Decimal("1E+30"), 20, is_vat_included=included)


class TestVatBreakdown:

    def test_inconsistent_detected(self):
        breakdown = VatBreakdown(
            tax_base=Decimal("100.00"),
            tax_amount=Decimal("20.00"),
            total_amount=Decimal("120.05"),
        )
        assert breakdown.is_consistent() is False
        assert breakdown.is_consistent(Decimal("0.05")) is True


class TestInvoiceLine:

    def test_coerces_values(self):
        line = InvoiceLine(quantity=2, unit_price="50.00", vat_rate=20)
        assert line.quantity == Decimal("2")
        assert line.line_total == Decimal("100.00")

    def test_from_mapping(self):
        line = InvoiceLine.from_mapping({"quantity": 3, "unit_price": 10, "vat_rate": 1})
        assert line == InvoiceLine(Decimal("3"), Decimal("10"), Decimal("1"))

    def test_missing_key(self):
        with pytest.raises(KeyError):
            InvoiceLine.from_mapping({"quantity": 1, "unit_price": 10})

    def test_negative_rate_rejected(self):
        with pytest.raises(InvalidVatRateError):
            InvoiceLine(quantity=1, unit_price=10, vat_rate=-20)


class TestValidateInvoiceTotals:
    """Tests for declared-total reconciliation."""

    def setup_method(self):
        self.lines = [{"quantity": 2, "unit_price": 50, "vat_rate": 18}]

    def test_matching_totals(self):
        result = validate_invoice_totals(
            self.lines, declared_subtotal=100, declared_vat=18, declared_total=118
        )

        assert isinstance(result, TotalsCheck)
        assert result.valid is True
        assert result.errors == ()
        assert result.computed_subtotal == Decimal("100.00")
        assert result.computed_vat == Decimal("18.00")
        assert result.computed_total == Decimal("118.00")

    def test_vat_mismatch_single_error(self):
        result = validate_invoice_totals(
            self.lines, declared_subtotal=100, declared_vat=20, declared_total=118
        )

        assert result.valid is False
        assert len(result.errors) == 1
        assert "KDV" in result.errors[0]
        assert "18.00" in result.errors[0]

    def test_english_messages(self):
        result = validate_invoice_totals(
            self.lines, 100, 20, 118, locale="en"
        )
        assert result.errors == ("VAT mismatch: computed 18.00, declared 20",)

    def test_every_field_reported(self):
        result = validate_invoice_totals(self.lines, 90, 20, 200)

        assert len(result.errors) == 3
        assert result.errors[0].startswith("Ara toplam uyuşmazlığı")
        assert result.errors[1].startswith("KDV uyuşmazlığı")
        assert result.errors[2].startswith("Toplam uyuşmazlığı")

    def test_difference_equal_to_tolerance_accepted(self):
        result = validate_invoice_totals(self.lines, "100.01", 18, 118)
        assert result.valid is True

    def test_difference_above_tolerance_rejected(self):
        result = validate_invoice_totals(self.lines, "100.02", 18, 118)
        assert len(result.errors) == 1

    def test_custom_tolerance(self):
        result = validate_invoice_totals(
            self.lines, 100, 19, 119, tolerance=Decimal("1.00")
        )
        assert result.valid is True

    def test_vat_rounded_after_full_sum(self):
        """Three lines of 0.005 VAT sum to 0.015 -> 0.02, not 3 x 0.01."""
        lines = [{"quantity": 1, "unit_price": "0.05", "vat_rate": 10}] * 3
        result = validate_invoice_totals(lines, "0.15", "0.02", "0.17", tolerance=0)

        assert result.computed_vat == Decimal("0.02")
        assert result.valid is True

    def test_mixed_rates(self):
        lines = [
            InvoiceLine(quantity=2, unit_price=50, vat_rate=18),
            InvoiceLine(quantity=1, unit_price="33.33", vat_rate=20),
        ]
        result = validate_invoice_totals(lines, "133.33", "24.67", "158.00")

        assert result.valid is True
        assert result.computed_vat == Decimal("24.67")

    def test_no_lines(self):
        result = validate_invoice_totals([], 0, 0, 0)
        assert result.valid is True
        assert result.computed_total == Decimal("0.00")

    def test_negative_tolerance_raises(self):
        with pytest.raises(InvalidToleranceError):
            validate_invoice_totals(self.lines, 100, 18, 118, tolerance="-0.01")

    def test_negative_line_rate_raises(self):
        with pytest.raises(InvalidVatRateError):
            validate_invoice_totals(
                [{"quantity": 1, "unit_price": 10, "vat_rate": -1}], 10, 0, 10
            )


class TestLineVat:

    def test_expected_line_vat(self):
        assert expected_line_vat("33.33", 20) == Decimal("6.67")

    def test_matching(self):
        assert validate_line_vat(100, 20, 20) == (True, Decimal("20.00"))

    def test_within_tolerance(self):
        ok, _ = validate_line_vat(100, 20, "20.01")
        assert ok is True

    def test_mismatch(self):
        ok, expected = validate_line_vat(100, 20, "20.02")
        assert ok is False
        assert expected == Decimal("20.00")


class TestRateTables:

    @pytest.mark.parametrize("rate", ["0", "1", "10", "20", "20.00"])
    def test_legal_vat_rates(self, rate):
        assert is_legal_vat_rate(rate) is True

    @pytest.mark.parametrize("rate", ["8", "18", "5"])
    def test_retired_or_unknown_vat_rates(self, rate):
        assert is_legal_vat_rate(rate) is False

    def test_custom_rate_table(self):
        assert is_legal_vat_rate(18, LEGAL_VAT_RATES + (Decimal("18"),)) is True

    def test_withholding(self):
        assert is_standard_withholding_rate(20) is True
        assert is_standard_withholding_rate(25) is False

    def test_tevkifat(self):
        assert is_standard_tevkifat_rate("0.7") is True
        assert is_standard_tevkifat_rate(Decimal("0.70")) is True
        assert is_standard_tevkifat_rate("0.6") is False

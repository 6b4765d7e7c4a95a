"""
VAT Engine - KDV breakdowns and invoice total reconciliation.

Pure functions with no I/O. Amounts are Decimals rounded half-up to kuruş
(0.01) after every arithmetic step, mirroring how the regulator rounds
intermediate values. Rounding only the final result gives different answers
by one kuruş for some amount/rate combinations.

Usage:
    from decimal import Decimal
    from einvoice_engines.vat import compute_vat, validate_invoice_totals

    breakdown = compute_vat(Decimal("100.00"), Decimal("20"))
    breakdown.tax_amount    # Decimal("20.00")
    breakdown.total_amount  # Decimal("120.00")

    check = validate_invoice_totals(
        [{"quantity": 2, "unit_price": 50, "vat_rate": 20}],
        declared_subtotal=100, declared_vat=20, declared_total=120,
    )
    check.valid  # True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from einvoice_engines.messages import PRIMARY_LOCALE, Locale, render
from einvoice_engines.tracer import traced_engine
from einvoice_kernel.domain.values import (
    DEFAULT_TOLERANCE,
    HUNDRED,
    ZERO,
    round_money,
    to_decimal,
)
from einvoice_kernel.exceptions import InvalidToleranceError, InvalidVatRateError
from einvoice_kernel.logging_config import get_logger

logger = get_logger("engines.vat")

# KDV rates in force (3065 sayılı KDV Kanunu Md. 28), as percentages
LEGAL_VAT_RATES: tuple[Decimal, ...] = (
    Decimal("0"), Decimal("1"), Decimal("10"), Decimal("20"),
)

# Income tax withholding (stopaj) rates commonly applied, GVK Md. 94
STANDARD_WITHHOLDING_RATES: tuple[Decimal, ...] = (
    Decimal("15"), Decimal("20"), Decimal("30"), Decimal("40"), Decimal("50"),
)

# KDV tevkifat ratios (2/10, 5/10, 7/10, 9/10)
STANDARD_TEVKIFAT_RATES: tuple[Decimal, ...] = (
    Decimal("0.2"), Decimal("0.5"), Decimal("0.7"), Decimal("0.9"),
)


@dataclass(frozen=True)
class VatBreakdown:
    """
    Tax base, VAT amount and total for one amount.

    All three values are rounded to kuruş.
    """

    tax_base: Decimal  # matrah
    tax_amount: Decimal  # KDV tutarı
    total_amount: Decimal  # toplam tutar

    def is_consistent(self, tolerance: Decimal = DEFAULT_TOLERANCE) -> bool:
        """True if total == base + tax within ``tolerance``."""
        return abs(self.total_amount - (self.tax_base + self.tax_amount)) <= tolerance


@dataclass(frozen=True)
class InvoiceLine:
    """One invoice line as declared by the caller."""

    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal  # percent, e.g. 20 for %20

    def __post_init__(self) -> None:
        object.__setattr__(self, "quantity", to_decimal(self.quantity, "quantity"))
        object.__setattr__(self, "unit_price", to_decimal(self.unit_price, "unit_price"))
        rate = to_decimal(self.vat_rate, "vat_rate")
        if rate < ZERO:
            raise InvalidVatRateError(rate)
        object.__setattr__(self, "vat_rate", rate)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> InvoiceLine:
        """Build from a mapping with ``quantity``, ``unit_price``, ``vat_rate``."""
        return cls(
            quantity=data["quantity"],
            unit_price=data["unit_price"],
            vat_rate=data["vat_rate"],
        )

    @property
    def line_total(self) -> Decimal:
        """Unrounded quantity * unit price."""
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class TotalsCheck:
    """Result of reconciling declared invoice totals against line items."""

    valid: bool
    errors: tuple[str, ...]
    computed_subtotal: Decimal
    computed_vat: Decimal
    computed_total: Decimal


def _validated_rate(vat_rate_percent: Any) -> Decimal:
    rate = to_decimal(vat_rate_percent, "vat_rate_percent")
    if rate < ZERO:
        logger.error("vat_rate_negative", extra={"vat_rate": str(rate)})
        raise InvalidVatRateError(rate)
    return rate


def _validated_tolerance(tolerance: Any) -> Decimal:
    value = to_decimal(tolerance, "tolerance")
    if value < ZERO:
        raise InvalidToleranceError(value)
    return value


@traced_engine(
    "vat", "1.0",
    fingerprint_fields=("net_amount", "vat_rate_percent", "is_vat_included"),
)
def compute_vat(
    net_amount: Decimal | int | str,
    vat_rate_percent: Decimal | int | str,
    is_vat_included: bool = False,
) -> VatBreakdown:
    """
    Compute the KDV breakdown of an amount.

    Args:
        net_amount: Amount before VAT, or the VAT-inclusive total when
            ``is_vat_included`` is True.
        vat_rate_percent: VAT rate as a percentage (20 for %20).
        is_vat_included: True if ``net_amount`` already includes VAT.

    Returns:
        VatBreakdown rounded to kuruş at every step.

    Raises:
        InvalidVatRateError: If the rate is negative.
        InvalidAmountError: If an argument is not a finite number.
    """
    amount = to_decimal(net_amount, "net_amount")
    rate = _validated_rate(vat_rate_percent)

    if is_vat_included:
        # KDV dahil: extract base from the gross amount
        total_amount = amount
        tax_base = round_money(amount / (1 + rate / HUNDRED))
        tax_amount = round_money(total_amount - tax_base)
    else:
        tax_base = amount
        tax_amount = round_money(tax_base * (rate / HUNDRED))
        total_amount = round_money(tax_base + tax_amount)

    logger.debug("vat_computed", extra={
        "tax_base": str(tax_base),
        "tax_amount": str(tax_amount),
        "total_amount": str(total_amount),
        "vat_rate": str(rate),
        "is_vat_included": is_vat_included,
    })

    return VatBreakdown(
        tax_base=tax_base,
        tax_amount=tax_amount,
        total_amount=total_amount,
    )


def _coerce_line(item: InvoiceLine | Mapping[str, Any]) -> InvoiceLine:
    if isinstance(item, InvoiceLine):
        return item
    return InvoiceLine.from_mapping(item)


@traced_engine("invoice_totals", "1.0")
def validate_invoice_totals(
    line_items: Iterable[InvoiceLine | Mapping[str, Any]],
    declared_subtotal: Decimal | int | str,
    declared_vat: Decimal | int | str,
    declared_total: Decimal | int | str,
    tolerance: Decimal | int | str = DEFAULT_TOLERANCE,
    locale: Locale | str = PRIMARY_LOCALE,
) -> TotalsCheck:
    """
    Reconcile declared invoice totals against the line items.

    Subtotal and VAT are summed unrounded across all lines and rounded once
    after the full sum; the total is their sum. Each declared figure that
    differs from its computed counterpart by more than ``tolerance`` yields
    one localized error.

    Raises:
        InvalidToleranceError: If tolerance is negative.
        InvalidVatRateError: If a line carries a negative VAT rate.
    """
    limit = _validated_tolerance(tolerance)
    lines = [_coerce_line(item) for item in line_items]

    subtotal = ZERO
    vat = ZERO
    for line in lines:
        line_total = line.line_total
        subtotal += line_total
        vat += line_total * (line.vat_rate / HUNDRED)

    computed_subtotal = round_money(subtotal)
    computed_vat = round_money(vat)
    computed_total = computed_subtotal + computed_vat

    comparisons = (
        ("subtotal_mismatch", computed_subtotal,
         to_decimal(declared_subtotal, "declared_subtotal")),
        ("vat_mismatch", computed_vat, to_decimal(declared_vat, "declared_vat")),
        ("total_mismatch", computed_total,
         to_decimal(declared_total, "declared_total")),
    )

    errors: list[str] = []
    for message_key, computed, declared in comparisons:
        if abs(computed - declared) > limit:
            errors.append(render(
                message_key, locale, computed=computed, declared=declared
            ))
            logger.info("invoice_totals_mismatch", extra={
                "field": message_key.removesuffix("_mismatch"),
                "computed": str(computed),
                "declared": str(declared),
                "tolerance": str(limit),
            })

    return TotalsCheck(
        valid=not errors,
        errors=tuple(errors),
        computed_subtotal=computed_subtotal,
        computed_vat=computed_vat,
        computed_total=computed_total,
    )


def expected_line_vat(
    line_total: Decimal | int | str, vat_rate_percent: Decimal | int | str
) -> Decimal:
    """VAT of a single line, rounded to kuruş."""
    total = to_decimal(line_total, "line_total")
    rate = _validated_rate(vat_rate_percent)
    return round_money(total * (rate / HUNDRED))


def validate_line_vat(
    line_total: Decimal | int | str,
    vat_rate_percent: Decimal | int | str,
    declared_vat_amount: Decimal | int | str,
    tolerance: Decimal | int | str = DEFAULT_TOLERANCE,
) -> tuple[bool, Decimal]:
    """Check a line's declared VAT against line_total * rate.

    Returns:
        Tuple of (is_valid, expected_vat_amount).
    """
    expected = expected_line_vat(line_total, vat_rate_percent)
    declared = to_decimal(declared_vat_amount, "declared_vat_amount")
    return abs(expected - declared) <= _validated_tolerance(tolerance), expected


def _matches_any(
    value: Decimal, candidates: Iterable[Decimal], tolerance: Decimal
) -> bool:
    return any(abs(value - candidate) < tolerance for candidate in candidates)


def is_legal_vat_rate(
    vat_rate_percent: Decimal | int | str,
    legal_rates: Iterable[Decimal] = LEGAL_VAT_RATES,
) -> bool:
    """True if the percentage is one of the KDV rates in force."""
    rate = to_decimal(vat_rate_percent, "vat_rate_percent")
    return _matches_any(rate, legal_rates, DEFAULT_TOLERANCE)


def is_standard_withholding_rate(
    rate_percent: Decimal | int | str,
    standard_rates: Iterable[Decimal] = STANDARD_WITHHOLDING_RATES,
) -> bool:
    """True if the stopaj percentage is one of the commonly applied rates."""
    rate = to_decimal(rate_percent, "withholding_rate")
    return _matches_any(rate, standard_rates, DEFAULT_TOLERANCE)


def is_standard_tevkifat_rate(
    ratio: Decimal | int | str,
    standard_ratios: Iterable[Decimal] = STANDARD_TEVKIFAT_RATES,
) -> bool:
    """True if the tevkifat ratio (0.7 for 7/10) is a standard ratio."""
    value = to_decimal(ratio, "tevkifat_rate")
    return _matches_any(value, standard_ratios, DEFAULT_TOLERANCE)

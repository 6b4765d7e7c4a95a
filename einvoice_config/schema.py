"""
ComplianceSettings schema.

Typed, immutable defaults for callers of the compliance engines. YAML
documents are parsed into this type by the loader; engines never read it
directly, they receive the values as call arguments.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

SUPPORTED_LOCALES: frozenset[str] = frozenset({"tr", "en"})


@dataclass(frozen=True)
class ComplianceSettings:
    """Per-deployment compliance defaults."""

    # Maximum |computed - declared| accepted for invoice totals
    amount_tolerance: Decimal = Decimal("0.01")
    # Debits and credits must differ by strictly less than this
    ledger_tolerance: Decimal = Decimal("0.01")
    ba_bs_threshold: Decimal = Decimal("5000")
    default_locale: str = "tr"

    archive_qr_base_url: str = (
        "https://earsivportal.efatura.gov.tr/intragibi/pages/FaturaGoruntule.xhtml"
    )
    invoice_qr_base_url: str = "https://efatura.gov.tr/verify"

    # Percentages
    legal_vat_rates: tuple[Decimal, ...] = field(default=(
        Decimal("0"), Decimal("1"), Decimal("10"), Decimal("20"),
    ))
    withholding_rates: tuple[Decimal, ...] = field(default=(
        Decimal("15"), Decimal("20"), Decimal("30"), Decimal("40"), Decimal("50"),
    ))
    # Ratios (7/10 -> 0.7)
    tevkifat_rates: tuple[Decimal, ...] = field(default=(
        Decimal("0.2"), Decimal("0.5"), Decimal("0.7"), Decimal("0.9"),
    ))

    def to_dict(self) -> dict[str, object]:
        """Plain-data view, used for checksums and trace logging."""
        return {
            "amount_tolerance": str(self.amount_tolerance),
            "ledger_tolerance": str(self.ledger_tolerance),
            "ba_bs_threshold": str(self.ba_bs_threshold),
            "default_locale": self.default_locale,
            "archive_qr_base_url": self.archive_qr_base_url,
            "invoice_qr_base_url": self.invoice_qr_base_url,
            "legal_vat_rates": [str(r) for r in self.legal_vat_rates],
            "withholding_rates": [str(r) for r in self.withholding_rates],
            "tevkifat_rates": [str(r) for r in self.tevkifat_rates],
        }

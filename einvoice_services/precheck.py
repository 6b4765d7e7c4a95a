"""
InvoicePrecheckService -- Pre-submission compliance check for e-Fatura drafts.

Composes the pure engines (identifier, VAT, totals, structure) with the
active ``ComplianceSettings`` and collects every finding into one report,
so the caller can decide whether to submit, block, or show the issues.

Architecture: einvoice_services -- imperative shell.
    The service receives an already-parsed ``InvoiceDraft``. Parsing,
    persistence and regulator communication are the caller's concern.

Findings:
    TAX_ID_001  error    Supplier VKN/TCKN invalid
    TAX_ID_002  error    Customer VKN/TCKN invalid
    ETTN_001    error    Transaction ID not 32 hex chars
    VAT_001     error    Line VAT rate not a legal KDV rate
    VAT_002     error    Line VAT amount does not match line total * rate
    VAT_003     error    Declared subtotal/VAT/total mismatch
    VAT_005     warning  Non-standard withholding (stopaj) rate
    VAT_006     warning  Non-standard tevkifat ratio
    UBL_001     error    Required UBL-TR element or namespace missing
    BABS_001    info     Amount reaches the Ba-Bs reporting threshold
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from einvoice_config import ComplianceSettings, get_active_settings
from einvoice_engines.document_structure import validate_document_structure
from einvoice_engines.error_catalog import Severity
from einvoice_engines.identifiers import is_valid_transaction_id
from einvoice_engines.messages import Locale, render, resolve_locale
from einvoice_engines.reporting import requires_ba_bs_reporting
from einvoice_engines.tax_identifier import classify_and_validate
from einvoice_engines.vat import (
    InvoiceLine,
    is_legal_vat_rate,
    is_standard_tevkifat_rate,
    is_standard_withholding_rate,
    validate_invoice_totals,
    validate_line_vat,
)
from einvoice_kernel.domain.values import to_decimal, to_plain_string
from einvoice_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.precheck")


class PrecheckStatus(str, Enum):
    """Overall verdict of a pre-check."""

    PASSED = "passed"
    FAILED = "failed"  # At least one ERROR finding
    WARNING = "warning"  # Warnings only, no errors


@dataclass(frozen=True)
class InvoiceDraftLine:
    """Invoice line as held by the caller; ``vat_amount`` is optional."""

    quantity: Decimal
    unit_price: Decimal
    vat_rate: Decimal
    vat_amount: Decimal | None = None

    def as_invoice_line(self) -> InvoiceLine:
        return InvoiceLine(
            quantity=self.quantity,
            unit_price=self.unit_price,
            vat_rate=self.vat_rate,
        )


@dataclass(frozen=True)
class InvoiceDraft:
    """Parsed invoice ready for pre-submission checks."""

    supplier_tax_id: str
    customer_tax_id: str | None
    lines: tuple[InvoiceDraftLine, ...]
    declared_subtotal: Decimal
    declared_vat: Decimal
    declared_total: Decimal
    transaction_id: str | None = None
    withholding_rate: Decimal | None = None  # percent
    tevkifat_rate: Decimal | None = None  # ratio, 0.7 for 7/10
    document_xml: str | None = None


@dataclass(frozen=True)
class PrecheckIssue:
    """One finding of the pre-check."""

    code: str
    severity: Severity
    field: str
    message: str


@dataclass(frozen=True)
class PrecheckReport:
    """All findings for one draft."""

    issues: tuple[PrecheckIssue, ...] = field(default_factory=tuple)

    @property
    def errors(self) -> tuple[PrecheckIssue, ...]:
        return tuple(i for i in self.issues if i.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[PrecheckIssue, ...]:
        return tuple(i for i in self.issues if i.severity is Severity.WARNING)

    @property
    def status(self) -> PrecheckStatus:
        if self.errors:
            return PrecheckStatus.FAILED
        if self.warnings:
            return PrecheckStatus.WARNING
        return PrecheckStatus.PASSED

    @property
    def can_submit(self) -> bool:
        return not self.errors


class InvoicePrecheckService:
    """Runs all pre-submission checks on an ``InvoiceDraft``.

    Contract:
        - ``precheck()`` never raises for invalid invoice content; every
          problem becomes a ``PrecheckIssue``.
        - Contract violations inside the draft (negative VAT rate, non-numeric
          amounts) propagate as typed kernel exceptions.

    Non-goals:
        - Does NOT query the regulator's taxpayer registry.
        - Does NOT persist reports.
    """

    def __init__(self, settings: ComplianceSettings | None = None) -> None:
        self._settings = settings or get_active_settings()

    @property
    def settings(self) -> ComplianceSettings:
        return self._settings

    def precheck(
        self,
        draft: InvoiceDraft,
        locale: Locale | str | None = None,
        correlation_id: str | None = None,
    ) -> PrecheckReport:
        """
        Check a draft invoice and return every finding.

        Log records emitted during the check carry the draft's ETTN as
        ``document_id`` and the caller's ``correlation_id`` when given.
        """
        lang = resolve_locale(locale or self._settings.default_locale)
        issues: list[PrecheckIssue] = []

        with LogContext.bind(
            document_id=draft.transaction_id, correlation_id=correlation_id
        ):
            self._check_tax_ids(draft, lang, issues)
            self._check_transaction_id(draft, lang, issues)
            self._check_lines(draft, lang, issues)
            self._check_totals(draft, lang, issues)
            self._check_withholding(draft, lang, issues)
            self._check_structure(draft, lang, issues)
            self._check_ba_bs(draft, lang, issues)

            report = PrecheckReport(issues=tuple(issues))
            logger.info("invoice_precheck_completed", extra={
                "status": report.status.value,
                "error_count": len(report.errors),
                "warning_count": len(report.warnings),
                "issue_codes": [i.code for i in report.issues],
            })
        return report

    # -----------------------------------------------------------------
    # Individual checks
    # -----------------------------------------------------------------

    def _check_tax_ids(
        self, draft: InvoiceDraft, lang: Locale, issues: list[PrecheckIssue]
    ) -> None:
        supplier = classify_and_validate(draft.supplier_tax_id, lang)
        if not supplier.valid:
            issues.append(PrecheckIssue(
                code="TAX_ID_001",
                severity=Severity.ERROR,
                field="supplier_tax_id",
                message=render("supplier_tax_id_invalid", lang, reason=supplier.error),
            ))

        # Customers without a tax ID (e-Arşiv retail sales) are allowed
        if draft.customer_tax_id:
            customer = classify_and_validate(draft.customer_tax_id, lang)
            if not customer.valid:
                issues.append(PrecheckIssue(
                    code="TAX_ID_002",
                    severity=Severity.ERROR,
                    field="customer_tax_id",
                    message=render("customer_tax_id_invalid", lang, reason=customer.error),
                ))

    def _check_transaction_id(
        self, draft: InvoiceDraft, lang: Locale, issues: list[PrecheckIssue]
    ) -> None:
        if draft.transaction_id is not None and not is_valid_transaction_id(
            draft.transaction_id
        ):
            issues.append(PrecheckIssue(
                code="ETTN_001",
                severity=Severity.ERROR,
                field="transaction_id",
                message=render("invalid_transaction_id", lang, value=draft.transaction_id),
            ))

    def _check_lines(
        self, draft: InvoiceDraft, lang: Locale, issues: list[PrecheckIssue]
    ) -> None:
        legal_rates = self._settings.legal_vat_rates
        allowed = ", ".join(f"%{to_plain_string(r)}" for r in legal_rates)

        for index, line in enumerate(draft.lines):
            invoice_line = line.as_invoice_line()
            line_number = index + 1

            if not is_legal_vat_rate(invoice_line.vat_rate, legal_rates):
                issues.append(PrecheckIssue(
                    code="VAT_001",
                    severity=Severity.ERROR,
                    field=f"lines[{index}].vat_rate",
                    message=render(
                        "line_vat_rate_illegal", lang,
                        line=line_number,
                        rate=to_plain_string(invoice_line.vat_rate),
                        allowed=allowed,
                    ),
                ))

            if line.vat_amount is not None:
                ok, expected = validate_line_vat(
                    invoice_line.line_total,
                    invoice_line.vat_rate,
                    line.vat_amount,
                    self._settings.amount_tolerance,
                )
                if not ok:
                    issues.append(PrecheckIssue(
                        code="VAT_002",
                        severity=Severity.ERROR,
                        field=f"lines[{index}].vat_amount",
                        message=render(
                            "line_vat_mismatch", lang,
                            line=line_number,
                            expected=expected,
                            declared=to_decimal(line.vat_amount, "vat_amount"),
                        ),
                    ))

    def _check_totals(
        self, draft: InvoiceDraft, lang: Locale, issues: list[PrecheckIssue]
    ) -> None:
        result = validate_invoice_totals(
            [line.as_invoice_line() for line in draft.lines],
            declared_subtotal=draft.declared_subtotal,
            declared_vat=draft.declared_vat,
            declared_total=draft.declared_total,
            tolerance=self._settings.amount_tolerance,
            locale=lang,
        )
        for message in result.errors:
            issues.append(PrecheckIssue(
                code="VAT_003",
                severity=Severity.ERROR,
                field="totals",
                message=message,
            ))

    def _check_withholding(
        self, draft: InvoiceDraft, lang: Locale, issues: list[PrecheckIssue]
    ) -> None:
        if draft.withholding_rate is not None:
            rate = to_decimal(draft.withholding_rate, "withholding_rate")
            if rate > 0 and not is_standard_withholding_rate(
                rate, self._settings.withholding_rates
            ):
                issues.append(PrecheckIssue(
                    code="VAT_005",
                    severity=Severity.WARNING,
                    field="withholding_rate",
                    message=render(
                        "withholding_rate_nonstandard", lang, rate=to_plain_string(rate)
                    ),
                ))

        if draft.tevkifat_rate is not None:
            ratio = to_decimal(draft.tevkifat_rate, "tevkifat_rate")
            if ratio > 0 and not is_standard_tevkifat_rate(
                ratio, self._settings.tevkifat_rates
            ):
                issues.append(PrecheckIssue(
                    code="VAT_006",
                    severity=Severity.WARNING,
                    field="tevkifat_rate",
                    message=render(
                        "tevkifat_rate_nonstandard", lang, rate=to_plain_string(ratio)
                    ),
                ))

    def _check_structure(
        self, draft: InvoiceDraft, lang: Locale, issues: list[PrecheckIssue]
    ) -> None:
        if draft.document_xml is None:
            return
        result = validate_document_structure(draft.document_xml, lang)
        for message in result.errors:
            issues.append(PrecheckIssue(
                code="UBL_001",
                severity=Severity.ERROR,
                field="document_xml",
                message=message,
            ))

    def _check_ba_bs(
        self, draft: InvoiceDraft, lang: Locale, issues: list[PrecheckIssue]
    ) -> None:
        threshold = self._settings.ba_bs_threshold
        if requires_ba_bs_reporting(draft.declared_total, threshold):
            issues.append(PrecheckIssue(
                code="BABS_001",
                severity=Severity.INFO,
                field="declared_total",
                message=render(
                    "ba_bs_required", lang,
                    amount=to_decimal(draft.declared_total, "declared_total"),
                    threshold=to_plain_string(threshold),
                ),
            ))

"""
Reporting obligations and regulator formatting helpers.

Covers the Ba-Bs monthly declaration threshold, e-Defter period
identifiers, and the date/amount renderings GİB integrations expect.
All functions are pure; none read the clock.
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum, unique

from einvoice_kernel.domain.values import round_money, to_decimal
from einvoice_kernel.exceptions import InvalidPeriodGranularityError

# Ba-Bs forms are required for transactions of 5,000 TL and above
BA_BS_THRESHOLD = Decimal("5000")

# Türkiye has used a fixed UTC+3 offset since 2016
TURKEY_TZ = timezone(timedelta(hours=3), "TRT")


@unique
class PeriodGranularity(str, Enum):
    """e-Defter reporting period type."""

    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


@unique
class ReportingForm(str, Enum):
    """Ba-Bs declaration forms."""

    BA = "Form Ba"  # purchases
    BS = "Form Bs"  # sales


def get_ba_bs_threshold() -> Decimal:
    """Return the Ba-Bs reporting threshold in TL."""
    return BA_BS_THRESHOLD


def requires_ba_bs_reporting(
    amount: Decimal | int | str,
    threshold: Decimal | int | str = BA_BS_THRESHOLD,
) -> bool:
    """True if ``amount`` reaches the Ba-Bs threshold."""
    return to_decimal(amount, "amount") >= to_decimal(threshold, "threshold")


def ba_form_code() -> str:
    return ReportingForm.BA.value


def bs_form_code() -> str:
    return ReportingForm.BS.value


def _resolve_granularity(granularity: PeriodGranularity | str) -> PeriodGranularity:
    if isinstance(granularity, PeriodGranularity):
        return granularity
    try:
        return PeriodGranularity(str(granularity).strip().lower())
    except ValueError as e:
        raise InvalidPeriodGranularityError(granularity) from e


def format_ledger_period(
    on_date: date,
    granularity: PeriodGranularity | str = PeriodGranularity.MONTHLY,
) -> str:
    """
    Format the e-Defter period identifier containing ``on_date``.

    ``YYYY-MM`` for monthly, ``YYYY-Qn`` for quarterly, ``YYYY`` for yearly.

    Raises:
        InvalidPeriodGranularityError: If the granularity is not recognized.
    """
    period_type = _resolve_granularity(granularity)
    year = on_date.year
    month = on_date.month

    if period_type is PeriodGranularity.QUARTERLY:
        quarter = (month - 1) // 3 + 1
        return f"{year}-Q{quarter}"
    if period_type is PeriodGranularity.YEARLY:
        return f"{year}"
    return f"{year}-{month:02d}"


def format_turkish_amount(amount: Decimal | int | str) -> str:
    """Render an amount the Turkish way: ``1234.5`` -> ``1.234,50``."""
    rounded = round_money(to_decimal(amount, "amount"))
    # Swap separators: 1,234.50 -> 1.234,50
    return f"{rounded:,.2f}".translate(str.maketrans(",.", ".,"))


def format_gib_date(moment: date | datetime) -> str:
    """``YYYY-MM-DD``; aware datetimes are converted to UTC first."""
    if isinstance(moment, datetime):
        if moment.tzinfo is not None:
            moment = moment.astimezone(UTC)
        return moment.date().isoformat()
    return moment.isoformat()


def format_gib_datetime(moment: datetime) -> str:
    """
    ISO-8601 timestamp in Turkey time with millisecond precision.

    Naive datetimes are taken to be UTC.
    ``2024-01-15T10:30:00Z`` -> ``2024-01-15T13:30:00.000+03:00``
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(TURKEY_TZ).isoformat(timespec="milliseconds")

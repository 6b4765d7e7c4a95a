"""
Double-entry balance check for e-Defter journal entries.

Pure calculation, zero I/O. The ledger-posting caller hands in the
debit/credit pairs of a journal entry before committing it; the engine
reports whether total debits equal total credits within one kuruş.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from einvoice_engines.tracer import traced_engine
from einvoice_kernel.domain.values import (
    DEFAULT_TOLERANCE,
    ZERO,
    round_money,
    to_decimal,
)
from einvoice_kernel.exceptions import InvalidToleranceError, NegativeLedgerAmountError
from einvoice_kernel.logging_config import get_logger

logger = get_logger("engines.ledger")


@dataclass(frozen=True)
class LedgerEntry:
    """One posting line: a debit (borç) and a credit (alacak) amount."""

    debit: Decimal = ZERO
    credit: Decimal = ZERO

    def __post_init__(self) -> None:
        for side in ("debit", "credit"):
            raw = getattr(self, side)
            amount = ZERO if raw is None else to_decimal(raw, side)
            if amount < ZERO:
                raise NegativeLedgerAmountError(side, amount)
            object.__setattr__(self, side, amount)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LedgerEntry:
        """Build from a mapping; a missing side counts as zero."""
        return cls(debit=data.get("debit"), credit=data.get("credit"))


@dataclass(frozen=True)
class BalanceCheck:
    """Totals and verdict of a double-entry balance check."""

    valid: bool
    total_debit: Decimal
    total_credit: Decimal
    difference: Decimal


@traced_engine("ledger_balance", "1.0")
def validate_double_entry(
    entries: Iterable[LedgerEntry | Mapping[str, Any]],
    tolerance: Decimal | int | str = DEFAULT_TOLERANCE,
) -> BalanceCheck:
    """
    Check that debits and credits balance.

    Both sums are rounded to kuruş before the difference is taken, and the
    entry is balanced when the difference is strictly below ``tolerance``.

    Raises:
        NegativeLedgerAmountError: If any debit or credit is negative.
        InvalidToleranceError: If tolerance is negative.
    """
    limit = to_decimal(tolerance, "tolerance")
    if limit < ZERO:
        raise InvalidToleranceError(limit)

    total_debit = ZERO
    total_credit = ZERO
    count = 0
    for item in entries:
        entry = item if isinstance(item, LedgerEntry) else LedgerEntry.from_mapping(item)
        total_debit += entry.debit
        total_credit += entry.credit
        count += 1

    total_debit = round_money(total_debit)
    total_credit = round_money(total_credit)
    difference = abs(total_debit - total_credit)
    valid = difference < limit

    if not valid:
        logger.warning("ledger_imbalance_detected", extra={
            "entry_count": count,
            "total_debit": str(total_debit),
            "total_credit": str(total_credit),
            "difference": str(difference),
        })

    return BalanceCheck(
        valid=valid,
        total_debit=total_debit,
        total_credit=total_credit,
        difference=difference,
    )

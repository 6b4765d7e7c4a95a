"""
Values -- Decimal conversion and regulator rounding helpers.

Responsibility:
    Single place where raw caller input (str, int, Decimal, and float for
    convenience) becomes a ``Decimal``, and where amounts are rounded to
    kuruş precision the way the regulator rounds them.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every engine that handles money.

Invariants enforced:
    - Money is never held as binary float; floats are converted through
      ``str()`` so 0.1 becomes Decimal("0.1"), not its binary expansion.
    - Rounding is ROUND_HALF_UP to 2 fractional digits.
    - NaN and infinity are rejected at the boundary.

Failure modes:
    - InvalidAmountError for None, bool, NaN, infinity or unparsable input,
      and from round_money for amounts too large to hold at kuruş precision.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from einvoice_kernel.exceptions import InvalidAmountError

# Turkish lira minor unit
KURUS = Decimal("0.01")

# One kuruş, the default comparison tolerance for totals and ledgers
DEFAULT_TOLERANCE = Decimal("0.01")

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value: Any, field_name: str = "amount") -> Decimal:
    """
    Convert caller input to a finite Decimal.

    Args:
        value: Decimal, int, str or float.
        field_name: Name used in the error when conversion fails.

    Returns:
        Decimal with the same textual value.

    Raises:
        InvalidAmountError: If value is None, a bool, non-numeric, or not finite.
    """
    if value is None or isinstance(value, bool):
        raise InvalidAmountError(field_name, value)

    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError) as e:
            raise InvalidAmountError(field_name, value) from e

    if not result.is_finite():
        raise InvalidAmountError(field_name, value)
    return result


def round_money(value: Decimal) -> Decimal:
    """Round to kuruş precision, half-up."""
    try:
        return value.quantize(KURUS, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        # More integer digits than the decimal context can hold
        raise InvalidAmountError("amount", value) from e


def to_plain_string(value: Decimal) -> str:
    """
    Render a Decimal without exponent and without trailing zeros.

    Decimal("100.50") -> "100.5", Decimal("1E+2") -> "100".
    """
    normalized = value.normalize()
    if normalized == ZERO:
        return "0"
    return format(normalized, "f")

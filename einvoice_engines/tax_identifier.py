"""
Taxpayer identifier validation (VKN / TCKN).

Turkish taxpayers are identified either by a 10-digit VKN (Vergi Kimlik
Numarası, issued to organizations) or by an 11-digit TCKN (T.C. Kimlik
Numarası, the national ID of individuals). Both carry trailing checksum
digits derived from the preceding digits.

Pure functions, no I/O. An invalid identifier is reported through
``IdentifierCheck.valid`` and a localized ``error``; nothing is raised for
malformed input. Identifiers are never logged in clear text.

Usage:
    from einvoice_engines.tax_identifier import classify_and_validate

    result = classify_and_validate("1234567890")
    result.valid  # True
    result.kind   # TaxIdKind.VKN
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from einvoice_engines.messages import PRIMARY_LOCALE, Locale, render
from einvoice_engines.tracer import traced_engine
from einvoice_kernel.logging_config import get_logger

logger = get_logger("engines.tax_identifier")

VKN_LENGTH = 10
TCKN_LENGTH = 11

_VKN_PATTERN = re.compile(r"[0-9]{10}")
_TCKN_PATTERN = re.compile(r"[0-9]{11}")


class TaxIdKind(str, Enum):
    """Kind of taxpayer identifier."""

    VKN = "VKN"  # Organization (10 digits)
    TCKN = "TCKN"  # Individual (11 digits)
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class IdentifierCheck:
    """Outcome of a taxpayer identifier validation."""

    valid: bool
    kind: TaxIdKind = TaxIdKind.UNKNOWN
    error: str | None = None


def clean_identifier(value: str | None) -> str:
    """Remove every whitespace character from an identifier.

    Raises:
        TypeError: If value is neither a string nor None.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise TypeError(
            f"Tax identifier must be a string, got {type(value).__name__}"
        )
    return "".join(value.split())


def vkn_check_digit(first_nine: str) -> int:
    """Compute the VKN check digit from the first nine digits.

    Each digit is shifted by its 1-based position (mod 10); a shifted value
    of 9 counts as 9, anything else is weighted by a power of two and
    reduced mod 9.
    """
    total = 0
    for i, ch in enumerate(first_nine):
        position = i + 1
        shifted = (int(ch) + 10 - position) % 10
        if shifted == 9:
            total += shifted
        else:
            total += (shifted * 2 ** (10 - position)) % 9
    return (10 - total % 10) % 10


def tckn_check_digits(first_nine: str) -> tuple[int, int]:
    """Compute the 10th and 11th TCKN digits from the first nine digits."""
    digits = [int(ch) for ch in first_nine]
    odd_sum = digits[0] + digits[2] + digits[4] + digits[6] + digits[8]
    even_sum = digits[1] + digits[3] + digits[5] + digits[7]
    check10 = (odd_sum * 7 - even_sum) % 10
    check11 = (odd_sum + even_sum + check10) % 10
    return check10, check11


def validate_vkn(
    value: str | None, locale: Locale | str = PRIMARY_LOCALE
) -> IdentifierCheck:
    """Validate a 10-digit organization identifier (VKN)."""
    clean = clean_identifier(value)
    if not clean:
        return IdentifierCheck(valid=False, error=render("vkn_empty", locale))

    if not _VKN_PATTERN.fullmatch(clean):
        return IdentifierCheck(valid=False, error=render("vkn_format", locale))

    if int(clean[9]) != vkn_check_digit(clean[:9]):
        return IdentifierCheck(valid=False, error=render("vkn_checksum", locale))

    return IdentifierCheck(valid=True, kind=TaxIdKind.VKN)


def validate_tckn(
    value: str | None, locale: Locale | str = PRIMARY_LOCALE
) -> IdentifierCheck:
    """Validate an 11-digit individual identifier (TCKN)."""
    clean = clean_identifier(value)
    if not clean:
        return IdentifierCheck(valid=False, error=render("tckn_empty", locale))

    if not _TCKN_PATTERN.fullmatch(clean):
        return IdentifierCheck(valid=False, error=render("tckn_format", locale))

    if clean[0] == "0":
        return IdentifierCheck(
            valid=False, error=render("tckn_leading_zero", locale)
        )

    check10, check11 = tckn_check_digits(clean[:9])

    if int(clean[9]) != check10:
        return IdentifierCheck(valid=False, error=render("tckn_check10", locale))

    # check11 sums the 10th digit, which is known to equal check10 here
    if int(clean[10]) != check11:
        return IdentifierCheck(valid=False, error=render("tckn_check11", locale))

    return IdentifierCheck(valid=True, kind=TaxIdKind.TCKN)


@traced_engine("tax_identifier", "1.0")
def classify_and_validate(
    value: str | None, locale: Locale | str = PRIMARY_LOCALE
) -> IdentifierCheck:
    """Validate a VKN or TCKN, dispatching on the cleaned length.

    The returned ``kind`` is only set when the identifier is valid.
    """
    clean = clean_identifier(value)

    if len(clean) == VKN_LENGTH:
        result = validate_vkn(clean, locale)
    elif len(clean) == TCKN_LENGTH:
        result = validate_tckn(clean, locale)
    else:
        result = IdentifierCheck(valid=False, error=render("tax_id_length", locale))

    if not result.valid:
        logger.debug("tax_identifier_rejected", extra={
            "length": len(clean),
            "reason": result.error,
        })
    return result

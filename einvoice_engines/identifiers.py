"""
Transaction identifiers, invoice numbers and QR verification payloads.

ETTN (Evrensel Tekil Tanımlama Numarası) is the opaque transaction
identifier that ties a submitted document to its regulator-side record.
It is a random version-4 UUID rendered as 32 uppercase hex characters.

Invoice numbers follow the GİB layout ``{PREFIX}{YEAR}{SERIAL}``, for
example ``ABC2024000000001``.

QR payloads are verification URLs that embed the ETTN plus a 16-hex SHA-256
prefix over identifying fields, so a scanned code can be checked for
tampering without the full document.

Only ``generate_transaction_id`` draws entropy; everything else here is a
pure function of its arguments.
"""

from __future__ import annotations

import re
import uuid
from datetime import UTC, date, datetime
from decimal import Decimal

from einvoice_kernel.domain.values import to_decimal, to_plain_string
from einvoice_kernel.exceptions import InvalidSeriesComponentError
from einvoice_kernel.logging_config import get_logger
from einvoice_kernel.utils.hashing import sha256_prefix

logger = get_logger("engines.identifiers")

ARCHIVE_QR_BASE_URL = (
    "https://earsivportal.efatura.gov.tr/intragibi/pages/FaturaGoruntule.xhtml"
)
INVOICE_QR_BASE_URL = "https://efatura.gov.tr/verify"

VERIFICATION_HASH_LENGTH = 16

SERIES_PREFIX_LENGTH = 3
SERIES_PREFIX_FILLER = "X"
SERIES_SERIAL_DIGITS = 9

_TRANSACTION_ID_PATTERN = re.compile(r"[A-F0-9]{32}", re.IGNORECASE)


# ---------------------------------------------------------------------------
# ETTN
# ---------------------------------------------------------------------------


def generate_transaction_id() -> str:
    """Generate a new ETTN: a random UUID4 as 32 uppercase hex characters."""
    return uuid.uuid4().hex.upper()


def is_valid_transaction_id(value: str) -> bool:
    """Check that ``value`` is exactly 32 hex characters (any case)."""
    if not isinstance(value, str):
        return False
    return _TRANSACTION_ID_PATTERN.fullmatch(value) is not None


# ---------------------------------------------------------------------------
# Invoice number
# ---------------------------------------------------------------------------


def generate_invoice_series_id(prefix: str, year: int, serial: int) -> str:
    """
    Build a GİB invoice number.

    The prefix is uppercased and forced to exactly three characters
    (truncated, or right-padded with ``X``), followed by the 4-digit year
    and the serial zero-padded to 9 digits.

    Raises:
        InvalidSeriesComponentError: If year is outside 0-9999 or serial is
            negative or longer than 9 digits.
    """
    if isinstance(year, bool) or not isinstance(year, int) or not 0 <= year <= 9999:
        raise InvalidSeriesComponentError("year", year, "must be an integer in 0-9999")
    if isinstance(serial, bool) or not isinstance(serial, int) or serial < 0:
        raise InvalidSeriesComponentError("serial", serial, "must be a non-negative integer")
    if serial >= 10 ** SERIES_SERIAL_DIGITS:
        raise InvalidSeriesComponentError(
            "serial", serial, f"must fit in {SERIES_SERIAL_DIGITS} digits"
        )

    normalized_prefix = (
        prefix.upper()[:SERIES_PREFIX_LENGTH]
        .ljust(SERIES_PREFIX_LENGTH, SERIES_PREFIX_FILLER)
    )
    return f"{normalized_prefix}{year:04d}{serial:0{SERIES_SERIAL_DIGITS}d}"


# ---------------------------------------------------------------------------
# QR verification payloads
# ---------------------------------------------------------------------------


def _as_utc(moment: datetime | date) -> datetime:
    if not isinstance(moment, datetime):
        return datetime(moment.year, moment.month, moment.day, tzinfo=UTC)
    if moment.tzinfo is None:
        # Naive datetimes are taken to be UTC already
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def format_iso_timestamp(moment: datetime | date) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a ``Z`` suffix.

    ``datetime(2024, 1, 15, 10, 30, tzinfo=UTC)`` -> ``2024-01-15T10:30:00.000Z``
    """
    utc = _as_utc(moment)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def archive_verification_hash(
    transaction_id: str,
    tax_id: str,
    issued_at: datetime | date,
    amount: Decimal | int | str,
) -> str:
    """16-hex SHA-256 prefix over ETTN + VKN + ISO timestamp + amount."""
    amount_text = to_plain_string(to_decimal(amount, "amount"))
    data = f"{transaction_id}{tax_id}{format_iso_timestamp(issued_at)}{amount_text}"
    return sha256_prefix(data, VERIFICATION_HASH_LENGTH)


def invoice_verification_hash(
    transaction_id: str,
    sender_tax_id: str,
    receiver_tax_id: str,
    issued_at: datetime | date,
) -> str:
    """16-hex SHA-256 prefix over ETTN + sender + receiver + YYYYMMDD."""
    date_text = _as_utc(issued_at).strftime("%Y%m%d")
    data = f"{transaction_id}{sender_tax_id}{receiver_tax_id}{date_text}"
    return sha256_prefix(data, VERIFICATION_HASH_LENGTH)


def generate_archive_qr_payload(
    transaction_id: str,
    tax_id: str,
    issued_at: datetime | date,
    amount: Decimal | int | str,
    base_url: str = ARCHIVE_QR_BASE_URL,
) -> str:
    """
    Build the e-Arşiv QR verification URL.

    Args:
        transaction_id: ETTN of the archived invoice.
        tax_id: Issuer VKN/TCKN.
        issued_at: Issue moment; naive datetimes are treated as UTC.
        amount: Invoice total.
        base_url: Verification portal page.

    Returns:
        ``{base_url}?ettn={transaction_id}&hmac={hash}``
    """
    verification_hash = archive_verification_hash(
        transaction_id, tax_id, issued_at, amount
    )
    logger.debug("archive_qr_payload_generated", extra={
        "transaction_id": transaction_id,
        "verification_hash": verification_hash,
    })
    return f"{base_url}?ettn={transaction_id}&hmac={verification_hash}"


def generate_invoice_qr_payload(
    transaction_id: str,
    sender_tax_id: str,
    receiver_tax_id: str,
    issued_at: datetime | date,
    base_url: str = INVOICE_QR_BASE_URL,
) -> str:
    """Build the e-Fatura QR verification URL: ``{base_url}?ettn=..&h=..``."""
    verification_hash = invoice_verification_hash(
        transaction_id, sender_tax_id, receiver_tax_id, issued_at
    )
    logger.debug("invoice_qr_payload_generated", extra={
        "transaction_id": transaction_id,
        "verification_hash": verification_hash,
    })
    return f"{base_url}?ettn={transaction_id}&h={verification_hash}"

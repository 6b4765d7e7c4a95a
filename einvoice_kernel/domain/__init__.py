"""
Pure domain layer.

Value helpers with NO dependencies on I/O, clocks or configuration.
"""

from einvoice_kernel.domain.values import (
    DEFAULT_TOLERANCE,
    HUNDRED,
    KURUS,
    ZERO,
    round_money,
    to_decimal,
    to_plain_string,
)

__all__ = [
    "DEFAULT_TOLERANCE",
    "HUNDRED",
    "KURUS",
    "ZERO",
    "round_money",
    "to_decimal",
    "to_plain_string",
]

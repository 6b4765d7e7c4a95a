"""Utility modules for the e-invoice kernel."""

from einvoice_kernel.utils.hashing import (
    canonicalize_json,
    hash_payload,
    sha256_prefix,
)

__all__ = [
    "canonicalize_json",
    "hash_payload",
    "sha256_prefix",
]

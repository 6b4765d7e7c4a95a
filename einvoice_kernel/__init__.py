"""
E-Invoice Kernel

Shared foundation for the e-invoice compliance engines:
- Structured JSON logging tagged with the document being processed
- Typed exception hierarchy with machine-readable codes
- Decimal conversion and kuruş rounding
- Deterministic hashing
"""

__version__ = "0.1.0"

"""
Logging -- one JSON line per record for the compliance packages.

Responsibility:
    Render records from the ``einvoice_kernel`` logger tree as JSON and
    attach the document the record belongs to.

Record layout:
    ``ts``, ``level``, ``logger`` and ``message`` come first, then the
    bound document fields, then the record's ``extra`` fields. Engines log
    snake_case event names (``vat_computed``, ``ledger_imbalance_detected``);
    the tracer logs ``EINVOICE_ENGINE_TRACE``. When a kernel exception is
    attached, its ``code`` and public attributes are flattened into
    ``exc_*`` keys.

Document fields:
    Services wrap their work in ``LogContext.bind(document_id=...,
    correlation_id=...)``. Only those two names are accepted; ``None``
    values are skipped so callers can pass optional identifiers straight
    through.
"""

__all__ = [
    "LogContext",
    "StructuredFormatter",
    "configure_logging",
    "get_logger",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import IO, Any
from uuid import UUID

from einvoice_kernel.exceptions import EInvoiceKernelError

LOGGER_ROOT = "einvoice_kernel"

_NO_FIELDS: Mapping[str, str] = MappingProxyType({})
_document_fields: ContextVar[Mapping[str, str]] = ContextVar(
    "einvoice_document_fields", default=_NO_FIELDS
)


class LogContext:
    """Document fields stamped on every record emitted inside ``bind``."""

    FIELDS = ("correlation_id", "document_id")

    @classmethod
    def current(cls) -> dict[str, str]:
        return dict(_document_fields.get())

    @classmethod
    @contextmanager
    def bind(cls, **fields: str | None) -> Iterator[None]:
        unknown = sorted(set(fields) - set(cls.FIELDS))
        if unknown:
            raise TypeError(f"Unknown log context field(s): {', '.join(unknown)}")

        merged = dict(_document_fields.get())
        merged.update({k: v for k, v in fields.items() if v is not None})
        token = _document_fields.set(MappingProxyType(merged))
        try:
            yield
        finally:
            _document_fields.reset(token)


# ---------------------------------------------------------------------------
# Formatter
# ---------------------------------------------------------------------------

_RECORD_ATTRS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (Decimal, UUID)):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=str)
    return str(obj)


def _exception_fields(exc: BaseException) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "exc_type": type(exc).__name__,
        "exc_message": str(exc),
    }
    if isinstance(exc, EInvoiceKernelError):
        fields["exc_code"] = exc.code
        for name, value in vars(exc).items():
            if not name.startswith("_"):
                fields[f"exc_{name}"] = value
    return fields


class StructuredFormatter(logging.Formatter):
    """Formats a record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_document_fields.get())
        payload.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload
        )

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(_exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        # Turkish messages stay readable in the output
        return json.dumps(payload, default=_json_default, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Setup
# ---------------------------------------------------------------------------


def get_logger(name: str) -> logging.Logger:
    """Logger under the ``einvoice_kernel`` tree, e.g. ``engines.vat``."""
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")


_configured = False
_lock = threading.Lock()


def configure_logging(
    *,
    level: int = logging.INFO,
    stream: IO[str] | None = None,
    handler: logging.Handler | None = None,
) -> logging.Logger:
    """
    Attach a JSON handler to the ``einvoice_kernel`` logger.

    Only the first call has an effect; later calls return the already
    configured logger unchanged.
    """
    global _configured
    root = logging.getLogger(LOGGER_ROOT)
    with _lock:
        if _configured:
            return root
        target = handler or logging.StreamHandler(stream or sys.stderr)
        target.setFormatter(StructuredFormatter())
        root.addHandler(target)
        root.setLevel(level)
        root.propagate = False
        _configured = True
    return root


def reset_logging() -> None:
    """Undo ``configure_logging``. Used by tests."""
    global _configured
    root = logging.getLogger(LOGGER_ROOT)
    with _lock:
        root.handlers.clear()
        root.setLevel(logging.NOTSET)
        root.propagate = True
        _configured = False

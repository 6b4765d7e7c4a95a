"""
JournalCheckService -- double-entry balance check with the configured tolerance.

Runs ``validate_double_entry`` over a journal entry's posting lines using
``ComplianceSettings.ledger_tolerance``. The e-Defter submission itself is
out of scope; this is the check a caller runs before posting.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from einvoice_config import ComplianceSettings, get_active_settings
from einvoice_engines.ledger import BalanceCheck, LedgerEntry, validate_double_entry
from einvoice_kernel.logging_config import LogContext


class JournalCheckService:
    """Balance checks for journal entries."""

    def __init__(self, settings: ComplianceSettings | None = None) -> None:
        self._settings = settings or get_active_settings()

    @property
    def settings(self) -> ComplianceSettings:
        return self._settings

    def check_balance(
        self,
        entries: Iterable[LedgerEntry | Mapping[str, Any]],
        journal_id: str | None = None,
    ) -> BalanceCheck:
        """Debits and credits must differ by less than ``ledger_tolerance``."""
        with LogContext.bind(document_id=journal_id):
            return validate_double_entry(
                entries, tolerance=self._settings.ledger_tolerance
            )

"""
einvoice_services -- imperative shell over the compliance engines.

Services resolve settings from ``einvoice_config`` and compose the pure
engines into caller-facing workflows.

Dependency direction:
    einvoice_services/ -> einvoice_engines/, einvoice_config/, einvoice_kernel/
    einvoice_engines/  -> einvoice_services/  (FORBIDDEN)
    einvoice_kernel/   -> einvoice_services/  (FORBIDDEN)
"""

from einvoice_services.issuance import DocumentIssuanceService, IssuedDocument
from einvoice_services.journal import JournalCheckService
from einvoice_services.precheck import (
    InvoiceDraft,
    InvoiceDraftLine,
    InvoicePrecheckService,
    PrecheckIssue,
    PrecheckReport,
    PrecheckStatus,
)

__all__ = [
    "DocumentIssuanceService",
    "InvoiceDraft",
    "InvoiceDraftLine",
    "InvoicePrecheckService",
    "IssuedDocument",
    "JournalCheckService",
    "PrecheckIssue",
    "PrecheckReport",
    "PrecheckStatus",
]

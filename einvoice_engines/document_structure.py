"""
Structural completeness check for UBL-TR invoice documents.

A shallow presence check, not schema validation: the serialized document is
searched for the elements and namespaces every UBL-TR invoice must carry.
All missing markers are reported in one pass. Callers that need strict
conformance must validate against the UBL-TR XSD separately.
"""

from __future__ import annotations

from dataclasses import dataclass

from einvoice_engines.messages import PRIMARY_LOCALE, Locale, render
from einvoice_engines.tracer import traced_engine
from einvoice_kernel.logging_config import get_logger

logger = get_logger("engines.document_structure")

# (marker, message key)
REQUIRED_ELEMENTS: tuple[tuple[str, str], ...] = (
    ("<Invoice", "missing_root"),
    ("<cbc:ID>", "missing_id"),
    ("<cbc:IssueDate>", "missing_issue_date"),
    ("<cac:AccountingSupplierParty>", "missing_supplier"),
    ("<cac:AccountingCustomerParty>", "missing_customer"),
    ("<cac:TaxTotal>", "missing_tax_total"),
    ("<cac:LegalMonetaryTotal>", "missing_monetary_total"),
)

REQUIRED_NAMESPACES: tuple[str, ...] = (
    "urn:oasis:names:specification:ubl:schema:xsd:Invoice-2",
    "urn:oasis:names:specification:ubl:schema:xsd:CommonBasicComponents-2",
    "urn:oasis:names:specification:ubl:schema:xsd:CommonAggregateComponents-2",
)


@dataclass(frozen=True)
class StructureCheck:
    """Outcome of a structural check.

    ``errors`` holds localized messages; ``missing`` the raw markers, in the
    same order.
    """

    valid: bool
    errors: tuple[str, ...]
    missing: tuple[str, ...]


@traced_engine("document_structure", "1.0")
def validate_document_structure(
    serialized_xml: str, locale: Locale | str = PRIMARY_LOCALE
) -> StructureCheck:
    """Check a serialized UBL-TR invoice for required elements and namespaces.

    Raises:
        TypeError: If ``serialized_xml`` is not a string.
    """
    if not isinstance(serialized_xml, str):
        raise TypeError(
            f"Document must be a string, got {type(serialized_xml).__name__}"
        )

    errors: list[str] = []
    missing: list[str] = []

    for marker, message_key in REQUIRED_ELEMENTS:
        if marker not in serialized_xml:
            missing.append(marker)
            errors.append(render(message_key, locale))

    for namespace in REQUIRED_NAMESPACES:
        if namespace not in serialized_xml:
            missing.append(namespace)
            errors.append(render("missing_namespace", locale, namespace=namespace))

    if missing:
        logger.info("document_structure_incomplete", extra={
            "missing_count": len(missing),
            "missing": missing,
        })

    return StructureCheck(
        valid=not errors,
        errors=tuple(errors),
        missing=tuple(missing),
    )

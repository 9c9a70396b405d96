"""Company ownership checks for documents.

A document always references its owner by foreign key. The counterpart may
only be known by name when it had not registered yet at creation time, so
lookups fall back to a case-insensitive name match whenever the counterpart
foreign key is empty.
"""

import logging

from django.apps import apps
from django.db.models import Q
from rest_framework.exceptions import PermissionDenied

logger = logging.getLogger(__name__)

# (model label, side whose foreign key may be empty and matched by name)
COUNTERPART_REFERENCES = (
    ("sourcing.RFQ", "seller"),
    ("sourcing.Quotation", "buyer"),
    ("sourcing.Contract", "buyer"),
    ("orders.PurchaseOrder", "seller"),
    ("orders.SalesOrder", "buyer"),
    ("fulfillment.DeliveryNote", "buyer"),
    ("fulfillment.PackingList", "buyer"),
    ("fulfillment.Invoice", "buyer"),
)


def _normalize_name(value):
    return (value or "").strip().casefold()


def company_matches(document, company, side):
    """True when ``company`` is the document's party on ``side`` ("buyer" or "seller")."""
    if company is None:
        return False
    company_id = getattr(document, f"{side}_company_id")
    if company_id is not None:
        return company_id == company.id
    name = _normalize_name(getattr(document, f"{side}_company_name", ""))
    return bool(name) and name == _normalize_name(company.name)


def ensure_company_matches(document, company, side, message):
    if not company_matches(document, company, side):
        logger.warning(
            "document_access_denied",
            extra={"document_id": str(document.pk), "company_id": str(getattr(company, "id", ""))},
        )
        raise PermissionDenied(f"Forbidden: {message}")


def company_scope(company, side):
    """Q filter selecting documents where ``company`` is the party on ``side``."""
    return Q(**{f"{side}_company": company}) | Q(
        **{f"{side}_company__isnull": True, f"{side}_company_name__iexact": company.name.strip()}
    )


def resolve_company(name, company_type):
    """Registered company of ``company_type`` whose name matches ``name``, if any."""
    from core.models import Company

    name = (name or "").strip()
    if not name:
        return None
    return Company.objects.filter(type=company_type, name__iexact=name).first()


def reconcile_company_references(company):
    """Attach documents that named ``company`` before it registered."""
    side = company.side
    updated = 0
    for label, reference_side in COUNTERPART_REFERENCES:
        if reference_side != side:
            continue
        model = apps.get_model(label)
        updated += model.objects.filter(
            **{f"{side}_company__isnull": True, f"{side}_company_name__iexact": company.name.strip()}
        ).update(**{f"{side}_company": company})
    if updated:
        logger.info("company_references_reconciled", extra={"company_id": str(company.id)})
    return updated

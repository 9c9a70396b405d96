"""Helpers for creating one document from another one upstream in the chain."""

from rest_framework.exceptions import NotFound, ValidationError

from common.models import PARTY_FIELDS

ITEM_FIELDS = ("product_name", "product_description", "sku", "hsn_code", "uom", "quantity")


def fetch_source(model, pk, label):
    """Load the upstream document or raise 404."""
    if pk is None:
        return None
    source = model.objects.filter(pk=pk).first()
    if source is None:
        raise NotFound(f"{label} not found.")
    return source


def ensure_source_status(source, allowed_statuses, message):
    if source.status not in allowed_statuses:
        raise ValidationError({"status": [message]})


def party_snapshot(source, side):
    return {
        f"{side}_{field}": getattr(source, f"{side}_{field}")
        for field in PARTY_FIELDS
        if hasattr(source, f"{side}_{field}")
    }


def company_snapshot(company, side):
    """Snapshot fields for a registered company's own profile."""
    return {
        f"{side}_company_name": company.name,
        f"{side}_contact_name": company.contact_name,
        f"{side}_email": company.email,
        f"{side}_phone": company.phone,
        f"{side}_address_type": company.address_type,
        f"{side}_country": company.country,
        f"{side}_state": company.state,
        f"{side}_city": company.city,
        f"{side}_address": company.address,
    }


def fill_blank(attrs, values):
    """Copy ``values`` into ``attrs`` where the client left the field out or blank."""
    for key, value in values.items():
        if attrs.get(key) in (None, ""):
            attrs[key] = value
    return attrs


def carry_party(attrs, source, side):
    """Counterpart identity always comes from the source; contact details only fill gaps."""
    snapshot = party_snapshot(source, side)
    attrs[f"{side}_company_name"] = snapshot.pop(f"{side}_company_name", "")
    attrs[f"{side}_company"] = getattr(source, f"{side}_company")
    return fill_blank(attrs, snapshot)


def carry_items(source_items, *, priced=False, extra=None):
    items = []
    for source_item in source_items:
        item = {field: getattr(source_item, field) for field in ITEM_FIELDS}
        if priced:
            item["unit_price"] = getattr(source_item, "unit_price", 0)
        if extra:
            item.update(extra(source_item))
        items.append(item)
    return items

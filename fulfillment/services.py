"""Fulfilment bookkeeping: delivered quantities against purchase order lines and invoice payments."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction
from rest_framework.exceptions import ValidationError

from common.money import ZERO, coerce_decimal, to_money
from fulfillment.models import DeliveryNote, DeliveryNoteItem, Invoice
from fulfillment.workflows import INVOICE_WORKFLOW

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemainingLine:
    item: object
    ordered: Decimal
    delivered: Decimal
    remaining: Decimal


def _normalize(value):
    return (value or "").strip().lower()


def match_purchase_order_item(po_items, product_name, sku=""):
    """PO line for an unlinked delivery line: same product name, and same SKU when the PO line has one."""
    name = _normalize(product_name)
    for po_item in po_items:
        if _normalize(po_item.product_name) != name:
            continue
        if po_item.sku and _normalize(po_item.sku) != _normalize(sku):
            continue
        return po_item
    return None


def delivered_quantities(purchase_order, po_items, exclude_delivery_note=None):
    delivered = defaultdict(lambda: ZERO)
    items = DeliveryNoteItem.objects.filter(delivery_note__purchase_order=purchase_order).exclude(
        delivery_note__status=DeliveryNote.Status.CANCELLED
    )
    if exclude_delivery_note is not None:
        items = items.exclude(delivery_note=exclude_delivery_note)

    for item in items:
        po_item_id = item.purchase_order_item_id
        if po_item_id is None:
            match = match_purchase_order_item(po_items, item.product_name, item.sku)
            if match is None:
                continue
            po_item_id = match.id
        delivered[po_item_id] += item.quantity_delivered
    return delivered


def remaining_quantities(purchase_order, exclude_delivery_note=None) -> list[RemainingLine]:
    po_items = list(purchase_order.items.all())
    delivered = delivered_quantities(purchase_order, po_items, exclude_delivery_note)
    lines = []
    for po_item in po_items:
        shipped = to_money(delivered[po_item.id])
        lines.append(
            RemainingLine(
                item=po_item,
                ordered=to_money(po_item.quantity),
                delivered=shipped,
                remaining=max(ZERO, to_money(po_item.quantity - shipped)),
            )
        )
    return lines


def validate_delivery_quantities(purchase_order, lines, exclude_delivery_note=None):
    """Check delivery lines against what is left to ship and link them to PO lines.

    Lines are checked in order so several lines for the same PO line share
    one remaining balance.
    """
    remaining = {line.item.id: line for line in remaining_quantities(purchase_order, exclude_delivery_note)}
    po_items = [line.item for line in remaining.values()]
    used = defaultdict(lambda: ZERO)

    for line in lines:
        product = line.get("product_name") or "item"
        quantity_delivered = line["quantity_delivered"]
        if quantity_delivered <= 0:
            raise ValidationError({"items": [f"Quantity delivered must be greater than zero for {product}"]})

        po_item = line.get("purchase_order_item")
        if po_item is not None and po_item.purchase_order_id != purchase_order.id:
            raise ValidationError({"items": [f"{product} does not belong to purchase order {purchase_order.po_number}"]})
        if po_item is None:
            po_item = match_purchase_order_item(po_items, line.get("product_name"), line.get("sku"))
            line["purchase_order_item"] = po_item

        if po_item is None:
            if quantity_delivered > line["quantity"]:
                raise ValidationError(
                    {"items": [f"Quantity delivered ({quantity_delivered:.2f}) cannot exceed quantity ({line['quantity']:.2f}) for {product}"]}
                )
            continue

        available = remaining[po_item.id].remaining - used[po_item.id]
        if quantity_delivered > available:
            raise ValidationError(
                {"items": [f"Quantity delivered ({quantity_delivered:.2f}) cannot exceed remaining quantity ({available:.2f}) for {product}"]}
            )
        used[po_item.id] += quantity_delivered
    return lines


@transaction.atomic
def settle_invoice(invoice, *, action, actor, payload=None):
    """Record a full or partial payment; the invoice becomes PAID once nothing is left to pay."""
    payload = payload or {}
    transition = INVOICE_WORKFLOW.resolve(invoice.status, action, actor)
    previous_status = invoice.status
    total = to_money(invoice.total_amount)
    balance = max(ZERO, to_money(total - invoice.paid_amount))

    if action == "pay":
        invoice.paid_amount = total
    else:
        amount = to_money(coerce_decimal(payload.get("payment_amount")))
        if amount <= 0:
            raise ValidationError({"payment_amount": ["Payment amount must be greater than zero."]})
        if amount > balance:
            raise ValidationError(
                {"payment_amount": [f"Payment amount ({amount:.2f}) cannot exceed the remaining amount ({balance:.2f})."]}
            )
        invoice.paid_amount = to_money(invoice.paid_amount + amount)

    invoice.remaining_amount = max(ZERO, to_money(total - invoice.paid_amount))
    if invoice.remaining_amount == 0:
        invoice.status = Invoice.Status.PAID

    update_fields = ["paid_amount", "remaining_amount", "status", "updated_at"]
    reference = (payload.get("payment_reference") or "").strip()
    if reference:
        invoice.payment_reference = reference
        update_fields.append("payment_reference")

    invoice.save(update_fields=update_fields)
    logger.info(
        "invoice_payment",
        extra={
            "document": "invoice",
            "document_id": str(invoice.pk),
            "action": action,
            "from_status": previous_status,
            "to_status": invoice.status,
        },
    )
    return transition

from rest_framework import serializers

from common.derivation import carry_items, carry_party, fetch_source, fill_blank
from common.money import ZERO, coerce_decimal, compute_rollup, to_money
from common.ownership import ensure_company_matches
from common.serializers import (
    DELIVERY_ADDRESS_FIELDS,
    PARTY_SNAPSHOT_FIELDS,
    ROLLUP_INPUT_FIELDS,
    ROLLUP_OUTPUT_FIELDS,
    DocumentSerializer,
    LenientDecimalField,
    LineItemSerializer,
    PricedLineItemSerializer,
)
from core.models import Company
from fulfillment.models import (
    DeliveryNote,
    DeliveryNoteItem,
    Invoice,
    InvoiceItem,
    PackingList,
    PackingListItem,
)
from fulfillment.services import remaining_quantities, validate_delivery_quantities
from fulfillment.workflows import DELIVERY_NOTE_WORKFLOW, INVOICE_WORKFLOW, PACKING_LIST_WORKFLOW
from orders.models import PurchaseOrder, PurchaseOrderItem, SalesOrder

DOCUMENT_READ_ONLY_FIELDS = ["id", "buyer_company", "seller_company", "created_at", "updated_at"]
SHIP_TO_FIELDS = [f"ship_to_{field}" for field in ("contact_name", "phone", "address_type", "country", "state", "city", "address")]


class PurchaseOrderSourceMixin:
    """Fulfilment documents are always raised by the seller against a purchase order."""

    def require_purchase_order(self, attrs):
        purchase_order = fetch_source(PurchaseOrder, attrs.pop("purchase_order_id", None), "Purchase order")
        if purchase_order is None:
            raise serializers.ValidationError({"purchase_order_id": ["This field is required."]})
        ensure_company_matches(purchase_order, self.company, "seller", "This purchase order was not sent to your company")
        attrs["purchase_order"] = purchase_order
        carry_party(attrs, purchase_order, "buyer")
        return purchase_order

    def linked_source(self, attrs, field, model, label, purchase_order):
        """Optional sibling document; it must be the seller's own and raised against the same PO."""
        source = fetch_source(model, attrs.pop(f"{field}_id", None), label)
        if source is None:
            return None
        ensure_company_matches(source, self.company, "seller", f"This {label.lower()} does not belong to your company")
        if source.purchase_order_id != purchase_order.id:
            raise serializers.ValidationError(
                {f"{field}_id": [f"This {label.lower()} does not reference purchase order {purchase_order.po_number}."]}
            )
        attrs[field] = source
        return source


class DeliveryNoteItemSerializer(LineItemSerializer):
    quantity_delivered = LenientDecimalField(required=False)
    purchase_order_item = serializers.PrimaryKeyRelatedField(
        queryset=PurchaseOrderItem.objects.all(), required=False, allow_null=True
    )

    class Meta(LineItemSerializer.Meta):
        model = DeliveryNoteItem
        fields = LineItemSerializer.Meta.fields + ["purchase_order_item", "quantity_delivered"]


class DeliveryNoteSerializer(PurchaseOrderSourceMixin, DocumentSerializer):
    items = DeliveryNoteItemSerializer(many=True, required=False)
    purchase_order_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)
    sales_order_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)

    workflow = DELIVERY_NOTE_WORKFLOW
    owner_side = "seller"
    counterpart_side = "buyer"
    counterpart_type = Company.Type.BUYER
    item_relation = "delivery_note"
    quantity_fields = ("quantity", "quantity_delivered")
    initial_statuses = (DeliveryNote.Status.PENDING,)
    source_fields = ("purchase_order_id", "sales_order_id")

    class Meta:
        model = DeliveryNote
        fields = [
            "id",
            "dn_number",
            "status",
            "purchase_order",
            "purchase_order_id",
            "sales_order",
            "sales_order_id",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            *DELIVERY_ADDRESS_FIELDS,
            "del_date",
            "shipping_method",
            "shipping_date",
            "carrier_name",
            "notes",
            "buyer_remarks",
            "buyer_response_date",
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "dn_number",
            "purchase_order",
            "sales_order",
            "buyer_remarks",
            "buyer_response_date",
            *DOCUMENT_READ_ONLY_FIELDS,
        ]

    def derive(self, attrs):
        purchase_order = self.require_purchase_order(attrs)
        self.linked_source(attrs, "sales_order", SalesOrder, "Sales order", purchase_order)
        fill_blank(attrs, {field: getattr(purchase_order, field) for field in DELIVERY_ADDRESS_FIELDS})
        if not attrs.get("items"):
            attrs["items"] = [
                {
                    "product_name": line.item.product_name,
                    "product_description": line.item.product_description,
                    "sku": line.item.sku,
                    "hsn_code": line.item.hsn_code,
                    "uom": line.item.uom,
                    "quantity": line.item.quantity,
                    "quantity_delivered": line.remaining,
                    "purchase_order_item": line.item,
                }
                for line in remaining_quantities(purchase_order)
                if line.remaining > 0
            ]
        return attrs

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if attrs.get("items"):
            purchase_order = attrs.get("purchase_order") or self.instance.purchase_order
            lines = self.build_items(attrs["items"])
            attrs["items"] = validate_delivery_quantities(purchase_order, lines, exclude_delivery_note=self.instance)
        return attrs

    def validate_dates(self, attrs):
        del_date = self.current_value(attrs, "del_date")
        shipping_date = self.current_value(attrs, "shipping_date")
        if del_date and shipping_date and del_date < shipping_date:
            raise serializers.ValidationError({"del_date": ["Delivery date cannot be before the shipping date."]})


class PackingListItemSerializer(LineItemSerializer):
    gross_weight = LenientDecimalField(required=False)
    net_weight = LenientDecimalField(required=False)
    no_of_packages = serializers.IntegerField(required=False, min_value=0)

    class Meta(LineItemSerializer.Meta):
        model = PackingListItem
        fields = LineItemSerializer.Meta.fields + ["package_type", "gross_weight", "net_weight", "no_of_packages", "dimensions"]


class PackingListSerializer(PurchaseOrderSourceMixin, DocumentSerializer):
    items = PackingListItemSerializer(many=True, required=False)
    purchase_order_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)
    delivery_note_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)
    sales_order_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)

    workflow = PACKING_LIST_WORKFLOW
    owner_side = "seller"
    counterpart_side = "buyer"
    counterpart_type = Company.Type.BUYER
    item_relation = "packing_list"
    quantity_fields = ("quantity", "gross_weight", "net_weight")
    initial_statuses = (PackingList.Status.RECEIVED, PackingList.Status.PENDING, PackingList.Status.APPROVED)
    source_fields = ("purchase_order_id", "delivery_note_id", "sales_order_id")

    class Meta:
        model = PackingList
        fields = [
            "id",
            "pl_number",
            "status",
            "purchase_order",
            "purchase_order_id",
            "delivery_note",
            "delivery_note_id",
            "sales_order",
            "sales_order_id",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            "packing_date",
            "shipment_tracking_id",
            "carrier_name",
            "total_gross_weight",
            "total_net_weight",
            "total_no_of_packages",
            "notes",
            "buyer_remarks",
            "buyer_response_date",
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "pl_number",
            "purchase_order",
            "delivery_note",
            "sales_order",
            "total_gross_weight",
            "total_net_weight",
            "total_no_of_packages",
            "buyer_remarks",
            "buyer_response_date",
            *DOCUMENT_READ_ONLY_FIELDS,
        ]

    def derive(self, attrs):
        purchase_order = self.require_purchase_order(attrs)
        delivery_note = self.linked_source(attrs, "delivery_note", DeliveryNote, "Delivery note", purchase_order)
        self.linked_source(attrs, "sales_order", SalesOrder, "Sales order", purchase_order)
        if not attrs.get("items"):
            if delivery_note is not None:
                attrs["items"] = carry_items(
                    delivery_note.items.all(), extra=lambda item: {"quantity": item.quantity_delivered}
                )
            else:
                attrs["items"] = carry_items(purchase_order.items.all())
        return attrs

    def finalize(self, instance, lines):
        gross = to_money(sum((coerce_decimal(line.get("gross_weight")) for line in lines), ZERO))
        net = to_money(sum((coerce_decimal(line.get("net_weight")) for line in lines), ZERO))
        packages = sum(int(line.get("no_of_packages") or 0) for line in lines)
        instance.total_gross_weight = gross or None
        instance.total_net_weight = net or None
        instance.total_no_of_packages = packages or None


class InvoiceItemSerializer(PricedLineItemSerializer):
    class Meta(PricedLineItemSerializer.Meta):
        model = InvoiceItem


class InvoiceSerializer(PurchaseOrderSourceMixin, DocumentSerializer):
    items = InvoiceItemSerializer(many=True, required=False)
    purchase_order_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)

    workflow = INVOICE_WORKFLOW
    owner_side = "seller"
    counterpart_side = "buyer"
    counterpart_type = Company.Type.BUYER
    item_relation = "invoice"
    priced_items = True
    initial_statuses = (Invoice.Status.DRAFT, Invoice.Status.PENDING)
    source_fields = ("purchase_order_id",)

    class Meta:
        model = Invoice
        fields = [
            "id",
            "invoice_number",
            "status",
            "purchase_order",
            "purchase_order_id",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            *SHIP_TO_FIELDS,
            "invoice_date",
            "due_date",
            "currency",
            "payment_terms",
            "notes",
            *ROLLUP_INPUT_FIELDS,
            *ROLLUP_OUTPUT_FIELDS,
            "paid_amount",
            "remaining_amount",
            "payment_reference",
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "invoice_number",
            "purchase_order",
            "paid_amount",
            "remaining_amount",
            "payment_reference",
            *ROLLUP_OUTPUT_FIELDS,
            *DOCUMENT_READ_ONLY_FIELDS,
        ]

    def derive(self, attrs):
        purchase_order = self.require_purchase_order(attrs)
        fill_blank(
            attrs,
            {f"ship_to_{field[len('delivery_'):]}": getattr(purchase_order, field) for field in DELIVERY_ADDRESS_FIELDS},
        )
        fill_blank(
            attrs,
            {
                "currency": purchase_order.currency,
                "payment_terms": purchase_order.payment_terms,
                **{field: getattr(purchase_order, field) for field in ROLLUP_INPUT_FIELDS},
            },
        )
        if not attrs.get("items"):
            attrs["items"] = carry_items(purchase_order.items.all(), priced=True)
        return attrs

    def validate_dates(self, attrs):
        invoice_date = self.current_value(attrs, "invoice_date")
        due_date = self.current_value(attrs, "due_date")
        if invoice_date and due_date and due_date < invoice_date:
            raise serializers.ValidationError({"due_date": ["Due date cannot be before the invoice date."]})

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if self.instance is not None and self.instance.paid_amount > ZERO:
            self.validate_total_covers_payments(attrs)
        return attrs

    def validate_total_covers_payments(self, attrs):
        """Edits after a payment may not bring the total below what was already paid."""
        changed = [field for field in ("items", *ROLLUP_INPUT_FIELDS) if field in attrs]
        if not changed:
            return
        if "items" in attrs:
            sub_totals = [line["sub_total"] for line in self.build_items(attrs["items"])]
        else:
            sub_totals = list(self.instance.items.values_list("sub_total", flat=True))
        total = compute_rollup(
            sub_totals, **{field: self.current_value(attrs, field) for field in ROLLUP_INPUT_FIELDS}
        ).total_amount
        paid = self.instance.paid_amount
        if total < paid:
            raise serializers.ValidationError(
                {changed[0]: [f"Invoice total ({total:.2f}) cannot be lower than the amount already paid ({paid:.2f})."]}
            )

    def finalize(self, instance, lines):
        super().finalize(instance, lines)
        instance.remaining_amount = max(ZERO, to_money(instance.total_amount - instance.paid_amount))

from rest_framework import serializers

from common.derivation import carry_items, carry_party, ensure_source_status, fetch_source, fill_blank
from common.ownership import ensure_company_matches
from common.serializers import (
    DELIVERY_ADDRESS_FIELDS,
    PARTY_SNAPSHOT_FIELDS,
    ROLLUP_INPUT_FIELDS,
    ROLLUP_OUTPUT_FIELDS,
    DocumentSerializer,
    PricedLineItemSerializer,
)
from core.models import Company
from orders.models import PurchaseOrder, PurchaseOrderItem, SalesOrder, SalesOrderItem
from orders.workflows import PURCHASE_ORDER_WORKFLOW, SALES_ORDER_WORKFLOW
from sourcing.models import Contract, Quotation
from sourcing.workflows import CONTRACT_ORDERABLE

DOCUMENT_READ_ONLY_FIELDS = ["id", "buyer_company", "seller_company", "created_at", "updated_at"]


class PurchaseOrderItemSerializer(PricedLineItemSerializer):
    class Meta(PricedLineItemSerializer.Meta):
        model = PurchaseOrderItem


class PurchaseOrderSerializer(DocumentSerializer):
    items = PurchaseOrderItemSerializer(many=True, required=False)
    contract_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)
    quotation_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)
    selected_seller_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)

    workflow = PURCHASE_ORDER_WORKFLOW
    owner_side = "buyer"
    counterpart_side = "seller"
    counterpart_type = Company.Type.SELLER
    item_relation = "purchase_order"
    priced_items = True
    initial_statuses = (PurchaseOrder.Status.DRAFT, PurchaseOrder.Status.PENDING)
    source_fields = ("contract_id", "quotation_id", "selected_seller_id")

    class Meta:
        model = PurchaseOrder
        fields = [
            "id",
            "po_number",
            "status",
            "contract",
            "contract_id",
            "quotation",
            "quotation_id",
            "selected_seller_id",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            *DELIVERY_ADDRESS_FIELDS,
            "po_issued_date",
            "expected_delivery_date",
            "currency",
            "payment_terms",
            "notes",
            *ROLLUP_INPUT_FIELDS,
            *ROLLUP_OUTPUT_FIELDS,
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["po_number", "contract", "quotation", *ROLLUP_OUTPUT_FIELDS, *DOCUMENT_READ_ONLY_FIELDS]

    def derive(self, attrs):
        selected_seller_id = attrs.pop("selected_seller_id", None)
        contract = fetch_source(Contract, attrs.pop("contract_id", None), "Contract")
        quotation = fetch_source(Quotation, attrs.pop("quotation_id", None), "Quotation")

        if selected_seller_id is not None:
            seller = Company.objects.filter(id=selected_seller_id, type=Company.Type.SELLER).first()
            if seller is None:
                raise serializers.ValidationError({"selected_seller_id": ["Selected seller not found."]})
            attrs["seller_company"] = seller
            attrs["seller_company_name"] = seller.name

        if contract is not None:
            ensure_company_matches(contract, self.company, "buyer", "This contract was not sent to your company")
            ensure_source_status(
                contract,
                CONTRACT_ORDERABLE,
                "Purchase orders can only be raised against approved or signed contracts.",
            )
            source = contract
            attrs["contract"] = contract
            attrs["quotation"] = contract.quotation
        elif quotation is not None:
            ensure_company_matches(quotation, self.company, "buyer", "This quotation was not sent to your company")
            source = quotation
            attrs["quotation"] = quotation
        else:
            return attrs

        if selected_seller_id is None:
            carry_party(attrs, source, "seller")
        fill_blank(attrs, {"currency": source.currency, "payment_terms": source.payment_terms})
        if not attrs.get("items"):
            attrs["items"] = carry_items(source.items.all(), priced=True)
        return attrs

    def validate_dates(self, attrs):
        issued = self.current_value(attrs, "po_issued_date")
        expected = self.current_value(attrs, "expected_delivery_date")
        if issued and expected and expected <= issued:
            raise serializers.ValidationError(
                {"expected_delivery_date": ["Expected delivery date must be after the PO issued date."]}
            )


class SalesOrderItemSerializer(PricedLineItemSerializer):
    class Meta(PricedLineItemSerializer.Meta):
        model = SalesOrderItem


class SalesOrderSerializer(DocumentSerializer):
    items = SalesOrderItemSerializer(many=True, required=False)
    purchase_order_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)

    workflow = SALES_ORDER_WORKFLOW
    owner_side = "seller"
    counterpart_side = "buyer"
    counterpart_type = Company.Type.BUYER
    item_relation = "sales_order"
    priced_items = True
    initial_statuses = (SalesOrder.Status.PENDING,)
    source_fields = ("purchase_order_id",)

    class Meta:
        model = SalesOrder
        fields = [
            "id",
            "so_number",
            "status",
            "purchase_order",
            "purchase_order_id",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            *DELIVERY_ADDRESS_FIELDS,
            "so_created_date",
            "planned_ship_date",
            "currency",
            "payment_terms",
            "notes",
            *ROLLUP_INPUT_FIELDS,
            *ROLLUP_OUTPUT_FIELDS,
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["so_number", "purchase_order", *ROLLUP_OUTPUT_FIELDS, *DOCUMENT_READ_ONLY_FIELDS]

    def derive(self, attrs):
        purchase_order = fetch_source(PurchaseOrder, attrs.pop("purchase_order_id", None), "Purchase order")
        if purchase_order is None:
            return attrs

        ensure_company_matches(purchase_order, self.company, "seller", "This purchase order was not sent to your company")
        ensure_source_status(
            purchase_order,
            (PurchaseOrder.Status.APPROVED,),
            "Sales orders can only be created from approved purchase orders.",
        )
        attrs["purchase_order"] = purchase_order
        carry_party(attrs, purchase_order, "buyer")
        fill_blank(attrs, {field: getattr(purchase_order, field) for field in DELIVERY_ADDRESS_FIELDS})
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
        created = self.current_value(attrs, "so_created_date")
        planned = self.current_value(attrs, "planned_ship_date")
        if created and planned and planned < created:
            raise serializers.ValidationError({"planned_ship_date": ["Planned ship date cannot be before the sales order date."]})

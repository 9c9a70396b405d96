from django.utils import timezone
from rest_framework import serializers

from common.derivation import carry_items, carry_party, fetch_source, fill_blank
from common.money import to_money
from common.ownership import ensure_company_matches
from common.serializers import (
    PARTY_SNAPSHOT_FIELDS,
    ROLLUP_INPUT_FIELDS,
    ROLLUP_OUTPUT_FIELDS,
    DocumentSerializer,
    LineItemSerializer,
    PricedLineItemSerializer,
)
from core.models import Company
from sourcing.models import RFQ, Contract, ContractItem, Quotation, QuotationItem, RFQItem
from sourcing.workflows import CONTRACT_WORKFLOW, QUOTATION_WORKFLOW, RFQ_WORKFLOW

DOCUMENT_READ_ONLY_FIELDS = ["id", "buyer_company", "seller_company", "created_at", "updated_at"]


class RFQItemSerializer(LineItemSerializer):
    class Meta(LineItemSerializer.Meta):
        model = RFQItem


class RFQSerializer(DocumentSerializer):
    items = RFQItemSerializer(many=True, required=False)

    workflow = RFQ_WORKFLOW
    owner_side = "buyer"
    counterpart_side = "seller"
    counterpart_type = Company.Type.SELLER
    item_relation = "rfq"
    items_required = False
    initial_statuses = (RFQ.Status.DRAFT, RFQ.Status.PENDING)

    class Meta:
        model = RFQ
        fields = [
            "id",
            "rfq_number",
            "status",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            "date_issued",
            "due_date",
            "currency",
            "project_name",
            "project_description",
            "technical_requirements",
            "delivery_requirements",
            "terms_and_conditions",
            "notes",
            "signature_by_name",
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["rfq_number", *DOCUMENT_READ_ONLY_FIELDS]

    def validate_dates(self, attrs):
        date_issued = self.current_value(attrs, "date_issued")
        due_date = self.current_value(attrs, "due_date")
        if date_issued and date_issued > timezone.localdate():
            raise serializers.ValidationError({"date_issued": ["Date issued cannot be in the future."]})
        if date_issued and due_date and due_date <= date_issued:
            raise serializers.ValidationError({"due_date": ["Due date must be after the date issued."]})


class QuotationItemSerializer(PricedLineItemSerializer):
    class Meta(PricedLineItemSerializer.Meta):
        model = QuotationItem


class QuotationSerializer(DocumentSerializer):
    items = QuotationItemSerializer(many=True, required=False)
    rfq_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)

    workflow = QUOTATION_WORKFLOW
    owner_side = "seller"
    counterpart_side = "buyer"
    counterpart_type = Company.Type.BUYER
    item_relation = "quotation"
    priced_items = True
    initial_statuses = (Quotation.Status.DRAFT, Quotation.Status.SENT)
    source_fields = ("rfq_id",)

    class Meta:
        model = Quotation
        fields = [
            "id",
            "quote_number",
            "status",
            "rfq",
            "rfq_id",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            "quote_date_issued",
            "quote_validity_date",
            "currency",
            "payment_terms",
            "delivery_terms",
            "notes",
            *ROLLUP_INPUT_FIELDS,
            *ROLLUP_OUTPUT_FIELDS,
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["quote_number", "rfq", *ROLLUP_OUTPUT_FIELDS, *DOCUMENT_READ_ONLY_FIELDS]

    def derive(self, attrs):
        rfq = fetch_source(RFQ, attrs.pop("rfq_id", None), "RFQ")
        if rfq is None:
            return attrs
        ensure_company_matches(rfq, self.company, "seller", "This RFQ was not sent to your company")
        carry_party(attrs, rfq, "buyer")
        fill_blank(attrs, {"currency": rfq.currency})
        attrs["rfq"] = rfq
        if not attrs.get("items"):
            attrs["items"] = carry_items(rfq.items.all(), priced=True)
        return attrs

    def validate_dates(self, attrs):
        issued = self.current_value(attrs, "quote_date_issued")
        validity = self.current_value(attrs, "quote_validity_date")
        if issued and validity and validity <= issued:
            raise serializers.ValidationError({"quote_validity_date": ["Validity date must be after the issue date."]})


class ContractItemSerializer(PricedLineItemSerializer):
    class Meta(PricedLineItemSerializer.Meta):
        model = ContractItem


class ContractSerializer(DocumentSerializer):
    items = ContractItemSerializer(many=True, required=False)
    quotation_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)
    rfq_id = serializers.UUIDField(write_only=True, required=False, allow_null=True)
    agreed_total_value = serializers.DecimalField(max_digits=14, decimal_places=2, required=False, allow_null=True)

    workflow = CONTRACT_WORKFLOW
    owner_side = "seller"
    counterpart_side = "buyer"
    counterpart_type = Company.Type.BUYER
    item_relation = "contract"
    priced_items = True
    initial_statuses = (Contract.Status.DRAFT, Contract.Status.SENT)
    source_fields = ("quotation_id", "rfq_id")

    class Meta:
        model = Contract
        fields = [
            "id",
            "contract_number",
            "status",
            "quotation",
            "quotation_id",
            "rfq",
            "rfq_id",
            "buyer_company",
            "seller_company",
            *PARTY_SNAPSHOT_FIELDS,
            "effective_date",
            "end_date",
            "currency",
            "agreed_total_value",
            "pricing_terms",
            "payment_terms",
            "delivery_terms",
            "confidentiality",
            "indemnity",
            "termination_conditions",
            "dispute_resolution",
            "governing_law",
            "buyer_suggestions",
            "buyer_response_date",
            "seller_response",
            "seller_response_date",
            "items",
            "available_actions",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "contract_number",
            "quotation",
            "rfq",
            "buyer_suggestions",
            "buyer_response_date",
            "seller_response_date",
            *DOCUMENT_READ_ONLY_FIELDS,
        ]

    def validate(self, attrs):
        if self.instance is None:
            attrs.setdefault("agreed_total_value", None)
        elif "items" in attrs and "agreed_total_value" not in attrs and self.agreed_value_is_default():
            attrs["agreed_total_value"] = None
        return super().validate(attrs)

    def agreed_value_is_default(self):
        """True while the agreed value still equals the item total it was defaulted from."""
        item_total = to_money(sum(self.instance.items.values_list("sub_total", flat=True), 0))
        return self.instance.agreed_total_value in (None, item_total)

    def derive(self, attrs):
        quotation = fetch_source(Quotation, attrs.pop("quotation_id", None), "Quotation")
        rfq = fetch_source(RFQ, attrs.pop("rfq_id", None), "RFQ")

        if quotation is not None:
            ensure_company_matches(quotation, self.company, "seller", "This quotation does not belong to your company")
            source = quotation
            attrs["quotation"] = quotation
            attrs["rfq"] = quotation.rfq
            source_items = quotation.items.all()
        elif rfq is not None:
            ensure_company_matches(rfq, self.company, "seller", "This RFQ was not sent to your company")
            source = rfq
            attrs["rfq"] = rfq
            source_items = rfq.items.all()
        else:
            return attrs

        carry_party(attrs, source, "buyer")
        fill_blank(attrs, {"currency": source.currency})
        if not attrs.get("items"):
            attrs["items"] = carry_items(source_items, priced=True)
        return attrs

    def validate_dates(self, attrs):
        effective = self.current_value(attrs, "effective_date")
        end = self.current_value(attrs, "end_date")
        if effective and end and end <= effective:
            raise serializers.ValidationError({"end_date": ["End date must be after the effective date."]})

    def finalize(self, instance, lines):
        if instance.agreed_total_value is None:
            instance.agreed_total_value = to_money(sum((line.get("sub_total") or 0 for line in lines), 0))

    def update(self, instance, validated_data):
        response = (validated_data.get("seller_response") or "").strip()
        if response and response != instance.seller_response:
            validated_data["seller_response"] = response
            validated_data["seller_response_date"] = timezone.now()
            if instance.status == Contract.Status.PENDING_CHANGES:
                validated_data["status"] = Contract.Status.SENT
        return super().update(instance, validated_data)

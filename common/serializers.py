from decimal import Decimal

from django.db import transaction
from rest_framework import serializers

from common.derivation import company_snapshot, fill_blank
from common.money import MONEY_QUANT, apply_rollup, build_line_items, coerce_decimal, to_money
from common.ownership import resolve_company

ITEM_READ_ONLY_FIELDS = ["id", "serial_number"]
LINE_ITEM_FIELDS = ["id", "serial_number", "product_name", "product_description", "sku", "hsn_code", "uom", "quantity"]
PRICED_LINE_ITEM_FIELDS = LINE_ITEM_FIELDS + ["unit_price", "sub_total"]
PARTY_SNAPSHOT_FIELDS = [
    f"{side}_{field}"
    for side in ("buyer", "seller")
    for field in ("company_name", "contact_name", "email", "phone", "address_type", "country", "state", "city", "address")
]
DELIVERY_ADDRESS_FIELDS = [
    "delivery_contact_name",
    "delivery_phone",
    "delivery_address_type",
    "delivery_country",
    "delivery_state",
    "delivery_city",
    "delivery_address",
]
ROLLUP_INPUT_FIELDS = ["discount_percentage", "additional_charges", "tax_percentage"]
ROLLUP_OUTPUT_FIELDS = ["sum_of_sub_total", "discount_amount", "tax_amount", "total_amount"]
# Largest stored amount column is 14 digits with 2 decimals.
MAX_AMOUNT = Decimal(10) ** 12


class LenientDecimalField(serializers.Field):
    """Numeric input where anything unparseable counts as zero.

    Parsed values must still fit the column they are stored in.
    """

    def __init__(self, max_digits=12, decimal_places=2, **kwargs):
        self.max_digits = max_digits
        self.limit = Decimal(10) ** (max_digits - decimal_places)
        super().__init__(**kwargs)

    def to_internal_value(self, data):
        value = coerce_decimal(data)
        if value.copy_abs() >= self.limit or to_money(value).copy_abs() >= self.limit:
            raise serializers.ValidationError(f"Ensure that there are no more than {self.max_digits} digits in total.")
        return to_money(value)

    def to_representation(self, value):
        return value


class LineItemSerializer(serializers.ModelSerializer):
    quantity = LenientDecimalField(required=False)

    class Meta:
        fields = LINE_ITEM_FIELDS
        read_only_fields = ITEM_READ_ONLY_FIELDS


class PricedLineItemSerializer(LineItemSerializer):
    unit_price = LenientDecimalField(required=False)

    class Meta:
        fields = PRICED_LINE_ITEM_FIELDS
        read_only_fields = ITEM_READ_ONLY_FIELDS + ["sub_total"]


class DocumentSerializer(serializers.ModelSerializer):
    """Base for chain documents: header plus an ordered item list written together.

    Subclasses declare ``items``, the owning side and, when created from an
    upstream document, override ``derive``.
    """

    available_actions = serializers.SerializerMethodField()

    workflow = None
    owner_side = None
    counterpart_side = None
    counterpart_type = None
    item_relation = None
    items_required = True
    priced_items = False
    quantity_fields = ("quantity",)
    initial_statuses = ()
    source_fields = ()

    @property
    def company(self):
        return self.context.get("company")

    def get_available_actions(self, obj):
        if self.workflow is None:
            return []
        return self.workflow.available_actions(obj.status, self.context.get("company_type"))

    def validate_status(self, value):
        if value not in self.initial_statuses:
            raise serializers.ValidationError(f"Status must be one of: {', '.join(self.initial_statuses)}.")
        if self.instance is not None and value != self.instance.status and self.instance.status not in self.initial_statuses:
            raise serializers.ValidationError("Use an action to change the status of this document.")
        return value

    def validate(self, attrs):
        attrs = super().validate(attrs)
        if self.instance is None:
            attrs = self.derive(attrs)
            if self.company is not None:
                fill_blank(attrs, company_snapshot(self.company, self.owner_side))
            self.resolve_counterpart(attrs)
            if self.items_required and not attrs.get("items"):
                raise serializers.ValidationError({"items": ["At least one item is required."]})
        else:
            for field in self.source_fields:
                attrs.pop(field, None)
            if self.items_required and "items" in attrs and not attrs["items"]:
                raise serializers.ValidationError({"items": ["At least one item is required."]})
            self.validate_counterpart_change(attrs)
        if self.priced_items and attrs.get("items"):
            self.validate_line_totals(attrs["items"])
        self.validate_dates(attrs)
        return attrs

    def derive(self, attrs):
        return attrs

    def validate_dates(self, attrs):
        pass

    def current_value(self, attrs, field):
        if field in attrs:
            return attrs[field]
        if self.instance is not None:
            return getattr(self.instance, field)
        return None

    def validate_line_totals(self, raw_items):
        sub_totals = [line["sub_total"] for line in self.build_items(raw_items)]
        if max(sub_totals) >= MAX_AMOUNT or sum(sub_totals) >= MAX_AMOUNT:
            raise serializers.ValidationError({"items": [f"Item totals cannot exceed {MAX_AMOUNT - MONEY_QUANT}."]})

    def validate_counterpart_change(self, attrs):
        """The counterpart is fixed once linked to a company or taken from an upstream document.

        Only a name-only counterpart on a standalone document may be renamed,
        which re-runs the registered-company lookup.
        """
        name_field = f"{self.counterpart_side}_company_name"
        if name_field not in attrs:
            return
        current = getattr(self.instance, name_field)
        if (attrs[name_field] or "").strip().casefold() == (current or "").strip().casefold():
            return
        linked = getattr(self.instance, f"{self.counterpart_side}_company_id") is not None
        derived = any(getattr(self.instance, field, None) for field in self.source_fields)
        if linked or derived:
            raise serializers.ValidationError(
                {name_field: [f"The {self.counterpart_side} of this document cannot be changed."]}
            )
        self.resolve_counterpart(attrs, force=True)

    def resolve_counterpart(self, attrs, force=False):
        fk_field = f"{self.counterpart_side}_company"
        if attrs.get(fk_field) is not None and not force:
            return
        attrs[fk_field] = resolve_company(attrs.get(f"{fk_field}_name"), self.counterpart_type)

    def build_items(self, raw_items):
        return build_line_items(raw_items, priced=self.priced_items, quantity_fields=self.quantity_fields)

    def finalize(self, instance, lines):
        """Hook for derived header values; runs before every save."""
        if hasattr(instance, "total_amount"):
            apply_rollup(instance, [line.get("sub_total") for line in lines])

    def write_items(self, instance, lines):
        item_model = self.fields["items"].child.Meta.model
        item_model.objects.bulk_create([item_model(**{self.item_relation: instance}, **line) for line in lines])

    @transaction.atomic
    def create(self, validated_data):
        lines = self.build_items(validated_data.pop("items", []))
        instance = self.Meta.model(**validated_data)
        self.finalize(instance, lines)
        instance.save()
        self.write_items(instance, lines)
        return instance

    @transaction.atomic
    def update(self, instance, validated_data):
        raw_items = validated_data.pop("items", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)

        if raw_items is None:
            lines = list(instance.items.values())
        else:
            lines = self.build_items(raw_items)

        self.finalize(instance, lines)
        instance.save()
        if raw_items is not None:
            instance.items.all().delete()
            self.write_items(instance, lines)
        return instance


class DocumentActionSerializer(serializers.Serializer):
    action = serializers.CharField(max_length=32)
    suggestions = serializers.CharField(required=False, allow_blank=True)
    response = serializers.CharField(required=False, allow_blank=True)
    remarks = serializers.CharField(required=False, allow_blank=True)
    payment_amount = serializers.DecimalField(max_digits=14, decimal_places=2, required=False)
    payment_reference = serializers.CharField(required=False, allow_blank=True, max_length=255)

    def validate_action(self, value):
        return value.strip().lower()

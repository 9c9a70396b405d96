import uuid

from django.db import models

PARTY_FIELDS = ("company_name", "contact_name", "email", "phone", "address_type", "country", "state", "city", "address")


class TimestampedDocument(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class BuyerPartyFields(models.Model):
    """Buyer details copied onto the document when it is written."""

    buyer_company_name = models.CharField(max_length=255, blank=True, default="")
    buyer_contact_name = models.CharField(max_length=255, blank=True, default="")
    buyer_email = models.CharField(max_length=254, blank=True, default="")
    buyer_phone = models.CharField(max_length=64, blank=True, default="")
    buyer_address_type = models.CharField(max_length=64, blank=True, default="")
    buyer_country = models.CharField(max_length=128, blank=True, default="")
    buyer_state = models.CharField(max_length=128, blank=True, default="")
    buyer_city = models.CharField(max_length=128, blank=True, default="")
    buyer_address = models.TextField(blank=True, default="")

    class Meta:
        abstract = True


class SellerPartyFields(models.Model):
    """Seller details copied onto the document when it is written."""

    seller_company_name = models.CharField(max_length=255, blank=True, default="")
    seller_contact_name = models.CharField(max_length=255, blank=True, default="")
    seller_email = models.CharField(max_length=254, blank=True, default="")
    seller_phone = models.CharField(max_length=64, blank=True, default="")
    seller_address_type = models.CharField(max_length=64, blank=True, default="")
    seller_country = models.CharField(max_length=128, blank=True, default="")
    seller_state = models.CharField(max_length=128, blank=True, default="")
    seller_city = models.CharField(max_length=128, blank=True, default="")
    seller_address = models.TextField(blank=True, default="")

    class Meta:
        abstract = True


class DeliveryAddressFields(models.Model):
    delivery_contact_name = models.CharField(max_length=255, blank=True, default="")
    delivery_phone = models.CharField(max_length=64, blank=True, default="")
    delivery_address_type = models.CharField(max_length=64, blank=True, default="")
    delivery_country = models.CharField(max_length=128, blank=True, default="")
    delivery_state = models.CharField(max_length=128, blank=True, default="")
    delivery_city = models.CharField(max_length=128, blank=True, default="")
    delivery_address = models.TextField(blank=True, default="")

    class Meta:
        abstract = True


class PricedTotals(models.Model):
    """Rollup inputs and outputs; outputs are always recomputed server side."""

    discount_percentage = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    additional_charges = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    tax_percentage = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    sum_of_sub_total = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    discount_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    tax_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    total_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    class Meta:
        abstract = True


class LineItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    serial_number = models.PositiveIntegerField()
    product_name = models.CharField(max_length=255)
    product_description = models.TextField(blank=True, default="")
    sku = models.CharField(max_length=128, blank=True, default="")
    hsn_code = models.CharField(max_length=64, blank=True, default="")
    uom = models.CharField(max_length=32, blank=True, default="")
    quantity = models.DecimalField(max_digits=12, decimal_places=2, default=0)

    class Meta:
        abstract = True
        ordering = ["serial_number"]


class PricedLineItem(LineItem):
    unit_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    sub_total = models.DecimalField(max_digits=14, decimal_places=2, default=0)

    class Meta(LineItem.Meta):
        abstract = True

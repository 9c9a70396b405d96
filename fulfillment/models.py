from django.db import models

from common.models import (
    BuyerPartyFields,
    DeliveryAddressFields,
    LineItem,
    PricedLineItem,
    PricedTotals,
    SellerPartyFields,
    TimestampedDocument,
)


class DeliveryNote(TimestampedDocument, BuyerPartyFields, SellerPartyFields, DeliveryAddressFields):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        IN_TRANSIT = "IN_TRANSIT", "In transit"
        ACKNOWLEDGED = "ACKNOWLEDGED", "Acknowledged"
        DISPUTED = "DISPUTED", "Disputed"
        COMPLETED = "COMPLETED", "Completed"
        CANCELLED = "CANCELLED", "Cancelled"

    dn_number = models.CharField(max_length=32)
    seller_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    buyer_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    purchase_order = models.ForeignKey("orders.PurchaseOrder", on_delete=models.PROTECT, related_name="delivery_notes")
    sales_order = models.ForeignKey("orders.SalesOrder", on_delete=models.SET_NULL, null=True, blank=True, related_name="delivery_notes")
    status = models.CharField(max_length=16, choices=Status, default=Status.PENDING)
    del_date = models.DateField()
    shipping_method = models.CharField(max_length=128, blank=True, default="")
    shipping_date = models.DateField(null=True, blank=True)
    carrier_name = models.CharField(max_length=255, blank=True, default="")
    notes = models.TextField(blank=True, default="")
    buyer_remarks = models.TextField(blank=True, default="")
    buyer_response_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["seller_company", "status"], name="fulfil_dn_seller_idx"),
            models.Index(fields=["buyer_company", "status"], name="fulfil_dn_buyer_idx"),
        ]

    def __str__(self):
        return self.dn_number


class DeliveryNoteItem(LineItem):
    delivery_note = models.ForeignKey(DeliveryNote, on_delete=models.CASCADE, related_name="items")
    purchase_order_item = models.ForeignKey(
        "orders.PurchaseOrderItem",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="delivery_note_items",
    )
    quantity_delivered = models.DecimalField(max_digits=12, decimal_places=2, default=0)


class PackingList(TimestampedDocument, BuyerPartyFields, SellerPartyFields):
    class Status(models.TextChoices):
        RECEIVED = "RECEIVED", "Received"
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        ACKNOWLEDGED = "ACKNOWLEDGED", "Acknowledged"
        REJECTED = "REJECTED", "Rejected"

    pl_number = models.CharField(max_length=32)
    seller_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    buyer_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    purchase_order = models.ForeignKey("orders.PurchaseOrder", on_delete=models.PROTECT, related_name="packing_lists")
    delivery_note = models.ForeignKey(DeliveryNote, on_delete=models.SET_NULL, null=True, blank=True, related_name="packing_lists")
    sales_order = models.ForeignKey("orders.SalesOrder", on_delete=models.SET_NULL, null=True, blank=True, related_name="packing_lists")
    status = models.CharField(max_length=16, choices=Status, default=Status.PENDING)
    packing_date = models.DateField()
    shipment_tracking_id = models.CharField(max_length=128, blank=True, default="")
    carrier_name = models.CharField(max_length=255, blank=True, default="")
    total_gross_weight = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    total_net_weight = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    total_no_of_packages = models.PositiveIntegerField(null=True, blank=True)
    notes = models.TextField(blank=True, default="")
    buyer_remarks = models.TextField(blank=True, default="")
    buyer_response_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["seller_company", "status"], name="fulfil_pl_seller_idx"),
            models.Index(fields=["buyer_company", "status"], name="fulfil_pl_buyer_idx"),
        ]

    def __str__(self):
        return self.pl_number


class PackingListItem(LineItem):
    packing_list = models.ForeignKey(PackingList, on_delete=models.CASCADE, related_name="items")
    package_type = models.CharField(max_length=64, blank=True, default="")
    gross_weight = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    net_weight = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    no_of_packages = models.PositiveIntegerField(default=0)
    dimensions = models.CharField(max_length=128, blank=True, default="")


class Invoice(TimestampedDocument, BuyerPartyFields, SellerPartyFields, PricedTotals):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        PENDING = "PENDING", "Pending"
        PAID = "PAID", "Paid"
        OVERDUE = "OVERDUE", "Overdue"

    invoice_number = models.CharField(max_length=32)
    seller_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    buyer_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    purchase_order = models.ForeignKey("orders.PurchaseOrder", on_delete=models.PROTECT, related_name="invoices")
    status = models.CharField(max_length=16, choices=Status, default=Status.DRAFT)
    invoice_date = models.DateField()
    due_date = models.DateField(null=True, blank=True)
    currency = models.CharField(max_length=8, default="USD")
    paid_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    remaining_amount = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    payment_reference = models.CharField(max_length=255, blank=True, default="")
    payment_terms = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")
    ship_to_contact_name = models.CharField(max_length=255, blank=True, default="")
    ship_to_phone = models.CharField(max_length=64, blank=True, default="")
    ship_to_address_type = models.CharField(max_length=64, blank=True, default="")
    ship_to_country = models.CharField(max_length=128, blank=True, default="")
    ship_to_state = models.CharField(max_length=128, blank=True, default="")
    ship_to_city = models.CharField(max_length=128, blank=True, default="")
    ship_to_address = models.TextField(blank=True, default="")

    class Meta:
        indexes = [
            models.Index(fields=["seller_company", "status"], name="fulfil_inv_seller_idx"),
            models.Index(fields=["buyer_company", "status"], name="fulfil_inv_buyer_idx"),
        ]

    def __str__(self):
        return self.invoice_number


class InvoiceItem(PricedLineItem):
    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name="items")

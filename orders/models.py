from django.db import models

from common.models import (
    BuyerPartyFields,
    DeliveryAddressFields,
    PricedLineItem,
    PricedTotals,
    SellerPartyFields,
    TimestampedDocument,
)


class PurchaseOrder(TimestampedDocument, BuyerPartyFields, SellerPartyFields, DeliveryAddressFields, PricedTotals):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"

    po_number = models.CharField(max_length=32)
    buyer_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    seller_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    contract = models.ForeignKey("sourcing.Contract", on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_orders")
    quotation = models.ForeignKey("sourcing.Quotation", on_delete=models.SET_NULL, null=True, blank=True, related_name="purchase_orders")
    status = models.CharField(max_length=16, choices=Status, default=Status.DRAFT)
    po_issued_date = models.DateField()
    expected_delivery_date = models.DateField()
    currency = models.CharField(max_length=8, default="USD")
    payment_terms = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        indexes = [
            models.Index(fields=["buyer_company", "status"], name="orders_po_buyer_idx"),
            models.Index(fields=["seller_company", "status"], name="orders_po_seller_idx"),
        ]

    def __str__(self):
        return self.po_number


class PurchaseOrderItem(PricedLineItem):
    purchase_order = models.ForeignKey(PurchaseOrder, on_delete=models.CASCADE, related_name="items")


class SalesOrder(TimestampedDocument, BuyerPartyFields, SellerPartyFields, DeliveryAddressFields, PricedTotals):
    class Status(models.TextChoices):
        PENDING = "PENDING", "Pending"
        PROCESSING = "PROCESSING", "Processing"
        SHIPPED = "SHIPPED", "Shipped"
        DELIVERED = "DELIVERED", "Delivered"
        CANCELLED = "CANCELLED", "Cancelled"

    so_number = models.CharField(max_length=32)
    seller_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    buyer_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    purchase_order = models.ForeignKey(PurchaseOrder, on_delete=models.SET_NULL, null=True, blank=True, related_name="sales_orders")
    status = models.CharField(max_length=16, choices=Status, default=Status.PENDING)
    so_created_date = models.DateField()
    planned_ship_date = models.DateField()
    currency = models.CharField(max_length=8, default="USD")
    payment_terms = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        indexes = [
            models.Index(fields=["seller_company", "status"], name="orders_so_seller_idx"),
            models.Index(fields=["buyer_company", "status"], name="orders_so_buyer_idx"),
        ]

    def __str__(self):
        return self.so_number


class SalesOrderItem(PricedLineItem):
    sales_order = models.ForeignKey(SalesOrder, on_delete=models.CASCADE, related_name="items")

from django.db import models

from common.models import BuyerPartyFields, LineItem, PricedLineItem, PricedTotals, SellerPartyFields, TimestampedDocument


class RFQ(TimestampedDocument, BuyerPartyFields, SellerPartyFields):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        PENDING = "PENDING", "Pending"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"
        COMPLETED = "COMPLETED", "Completed"

    rfq_number = models.CharField(max_length=32)
    buyer_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    seller_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    status = models.CharField(max_length=16, choices=Status, default=Status.DRAFT)
    date_issued = models.DateField()
    due_date = models.DateField()
    currency = models.CharField(max_length=8, default="USD")
    project_name = models.CharField(max_length=255, blank=True, default="")
    project_description = models.TextField(blank=True, default="")
    technical_requirements = models.TextField(blank=True, default="")
    delivery_requirements = models.TextField(blank=True, default="")
    terms_and_conditions = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")
    signature_by_name = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        verbose_name = "RFQ"
        indexes = [
            models.Index(fields=["buyer_company", "status"], name="sourcing_rfq_buyer_idx"),
            models.Index(fields=["seller_company", "status"], name="sourcing_rfq_seller_idx"),
        ]

    def __str__(self):
        return self.rfq_number


class RFQItem(LineItem):
    rfq = models.ForeignKey(RFQ, on_delete=models.CASCADE, related_name="items")


class Quotation(TimestampedDocument, BuyerPartyFields, SellerPartyFields, PricedTotals):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        SENT = "SENT", "Sent"
        PENDING = "PENDING", "Pending"
        ACCEPTED = "ACCEPTED", "Accepted"
        REJECTED = "REJECTED", "Rejected"

    quote_number = models.CharField(max_length=32)
    seller_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    buyer_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    rfq = models.ForeignKey(RFQ, on_delete=models.SET_NULL, null=True, blank=True, related_name="quotations")
    status = models.CharField(max_length=16, choices=Status, default=Status.SENT)
    quote_date_issued = models.DateField()
    quote_validity_date = models.DateField()
    currency = models.CharField(max_length=8, default="USD")
    payment_terms = models.TextField(blank=True, default="")
    delivery_terms = models.TextField(blank=True, default="")
    notes = models.TextField(blank=True, default="")

    class Meta:
        indexes = [
            models.Index(fields=["seller_company", "status"], name="sourcing_quo_seller_idx"),
            models.Index(fields=["buyer_company", "status"], name="sourcing_quo_buyer_idx"),
        ]

    def __str__(self):
        return self.quote_number


class QuotationItem(PricedLineItem):
    quotation = models.ForeignKey(Quotation, on_delete=models.CASCADE, related_name="items")


class Contract(TimestampedDocument, BuyerPartyFields, SellerPartyFields):
    class Status(models.TextChoices):
        DRAFT = "DRAFT", "Draft"
        SENT = "SENT", "Sent"
        PENDING_CHANGES = "PENDING_CHANGES", "Pending changes"
        APPROVED = "APPROVED", "Approved"
        REJECTED = "REJECTED", "Rejected"
        SIGNED = "SIGNED", "Signed"

    contract_number = models.CharField(max_length=32)
    seller_company = models.ForeignKey("core.Company", on_delete=models.PROTECT, related_name="+")
    buyer_company = models.ForeignKey("core.Company", on_delete=models.SET_NULL, null=True, blank=True, related_name="+")
    quotation = models.ForeignKey(Quotation, on_delete=models.SET_NULL, null=True, blank=True, related_name="contracts")
    rfq = models.ForeignKey(RFQ, on_delete=models.SET_NULL, null=True, blank=True, related_name="contracts")
    status = models.CharField(max_length=16, choices=Status, default=Status.DRAFT)
    effective_date = models.DateField()
    end_date = models.DateField()
    currency = models.CharField(max_length=8, default="USD")
    agreed_total_value = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    pricing_terms = models.TextField(blank=True, default="")
    payment_terms = models.TextField(blank=True, default="")
    delivery_terms = models.TextField(blank=True, default="")
    confidentiality = models.TextField(blank=True, default="")
    indemnity = models.TextField(blank=True, default="")
    termination_conditions = models.TextField(blank=True, default="")
    dispute_resolution = models.TextField(blank=True, default="")
    governing_law = models.CharField(max_length=255, blank=True, default="")
    buyer_suggestions = models.TextField(blank=True, default="")
    buyer_response_date = models.DateTimeField(null=True, blank=True)
    seller_response = models.TextField(blank=True, default="")
    seller_response_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        indexes = [
            models.Index(fields=["seller_company", "status"], name="sourcing_con_seller_idx"),
            models.Index(fields=["buyer_company", "status"], name="sourcing_con_buyer_idx"),
        ]

    def __str__(self):
        return self.contract_number


class ContractItem(PricedLineItem):
    contract = models.ForeignKey(Contract, on_delete=models.CASCADE, related_name="items")

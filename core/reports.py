from decimal import Decimal

from django.apps import apps
from django.db.models import Count, Sum

from common.ownership import company_scope
from core.models import Company

DASHBOARD_DOCUMENTS = {
    Company.Type.BUYER: (
        ("rfqs", "sourcing.RFQ"),
        ("quotations", "sourcing.Quotation"),
        ("contracts", "sourcing.Contract"),
        ("purchase_orders", "orders.PurchaseOrder"),
        ("delivery_notes", "fulfillment.DeliveryNote"),
        ("packing_lists", "fulfillment.PackingList"),
        ("invoices", "fulfillment.Invoice"),
    ),
    Company.Type.SELLER: (
        ("rfqs", "sourcing.RFQ"),
        ("quotations", "sourcing.Quotation"),
        ("contracts", "sourcing.Contract"),
        ("purchase_orders", "orders.PurchaseOrder"),
        ("sales_orders", "orders.SalesOrder"),
        ("delivery_notes", "fulfillment.DeliveryNote"),
        ("packing_lists", "fulfillment.PackingList"),
        ("invoices", "fulfillment.Invoice"),
    ),
}


def status_counts(queryset):
    rows = queryset.values("status").annotate(count=Count("id")).order_by("status")
    return {row["status"]: row["count"] for row in rows}


def build_dashboard_summary(company):
    side = company.side
    documents = {}
    for key, label in DASHBOARD_DOCUMENTS[company.type]:
        model = apps.get_model(label)
        by_status = status_counts(model.objects.filter(company_scope(company, side)))
        documents[key] = {"total": sum(by_status.values()), "by_status": by_status}

    purchase_orders = apps.get_model("orders.PurchaseOrder").objects.filter(company_scope(company, side))
    invoices = apps.get_model("fulfillment.Invoice").objects.filter(company_scope(company, side))

    purchase_order_value = purchase_orders.exclude(status="REJECTED").aggregate(total=Sum("total_amount"))["total"]
    invoice_outstanding = invoices.exclude(status="PAID").aggregate(total=Sum("remaining_amount"))["total"]

    return {
        "company_id": str(company.id),
        "company_type": company.type,
        "documents": documents,
        "purchase_order_value": purchase_order_value or Decimal("0.00"),
        "invoice_outstanding": invoice_outstanding or Decimal("0.00"),
    }

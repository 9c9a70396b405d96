from common.lifecycle import Transition, Workflow
from core.models import Company
from orders.models import PurchaseOrder, SalesOrder

BUYER = Company.Type.BUYER
SELLER = Company.Type.SELLER

PO_DECIDABLE = (PurchaseOrder.Status.DRAFT, PurchaseOrder.Status.PENDING)

PURCHASE_ORDER_WORKFLOW = Workflow(
    "purchase order",
    [
        Transition("submit", (PurchaseOrder.Status.DRAFT,), PurchaseOrder.Status.PENDING, (BUYER,)),
        Transition("accept", PO_DECIDABLE, PurchaseOrder.Status.APPROVED, (SELLER,)),
        Transition("reject", PO_DECIDABLE, PurchaseOrder.Status.REJECTED, (SELLER,)),
    ],
)

SO_ACTIVE = (SalesOrder.Status.PENDING, SalesOrder.Status.PROCESSING)

SALES_ORDER_WORKFLOW = Workflow(
    "sales order",
    [
        Transition("process", (SalesOrder.Status.PENDING,), SalesOrder.Status.PROCESSING, (SELLER,)),
        Transition("ship", SO_ACTIVE, SalesOrder.Status.SHIPPED, (SELLER,)),
        Transition("deliver", (SalesOrder.Status.SHIPPED,), SalesOrder.Status.DELIVERED, (SELLER,)),
        Transition("cancel", SO_ACTIVE, SalesOrder.Status.CANCELLED, (SELLER,)),
    ],
)

from rest_framework.decorators import action
from rest_framework.response import Response

from common.viewsets import READ_AND_ACT_METHODS, CompanyDocumentViewSet
from core.models import Company
from fulfillment.services import remaining_quantities
from orders.models import PurchaseOrder, SalesOrder
from orders.serializers import PurchaseOrderSerializer, SalesOrderSerializer
from orders.workflows import PURCHASE_ORDER_WORKFLOW, SALES_ORDER_WORKFLOW


class PurchaseOrderViewSetMixin:
    queryset = PurchaseOrder.objects.select_related("contract", "quotation").prefetch_related("items")
    serializer_class = PurchaseOrderSerializer
    workflow = PURCHASE_ORDER_WORKFLOW
    audit_entity = "purchase_order"
    document_label = "Purchase order"


class BuyerPurchaseOrderViewSet(PurchaseOrderViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.BUYER
    document_type = "purchase_order"
    number_field = "po_number"
    access_message = "This purchase order does not belong to your company"
    editable_statuses = (PurchaseOrder.Status.DRAFT, PurchaseOrder.Status.PENDING)
    deletable_statuses = (PurchaseOrder.Status.DRAFT,)
    search_fields = ("po_number", "seller_company_name")


class SellerPurchaseOrderViewSet(PurchaseOrderViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.SELLER
    http_method_names = READ_AND_ACT_METHODS
    allow_field_updates = False
    access_message = "This purchase order was not sent to your company"
    search_fields = ("po_number", "buyer_company_name")

    @action(detail=True, methods=["get"], url_path="remaining")
    def remaining(self, request, pk=None):
        purchase_order = self.get_object()
        lines = remaining_quantities(purchase_order)
        return Response(
            {
                "purchase_order": str(purchase_order.id),
                "po_number": purchase_order.po_number,
                "items": [
                    {
                        "purchase_order_item": str(line.item.id),
                        "serial_number": line.item.serial_number,
                        "product_name": line.item.product_name,
                        "sku": line.item.sku,
                        "ordered": line.ordered,
                        "delivered": line.delivered,
                        "remaining": line.remaining,
                    }
                    for line in lines
                ],
            }
        )


class SellerSalesOrderViewSet(CompanyDocumentViewSet):
    queryset = SalesOrder.objects.select_related("purchase_order").prefetch_related("items")
    serializer_class = SalesOrderSerializer
    workflow = SALES_ORDER_WORKFLOW
    audit_entity = "sales_order"
    document_label = "Sales order"
    side = Company.Type.SELLER
    document_type = "sales_order"
    number_field = "so_number"
    access_message = "This sales order does not belong to your company"
    editable_statuses = (SalesOrder.Status.PENDING, SalesOrder.Status.PROCESSING)
    deletable_statuses = (SalesOrder.Status.PENDING,)
    search_fields = ("so_number", "buyer_company_name")
    filter_params = {"purchase_order": "purchase_order_id"}

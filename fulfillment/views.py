from common.viewsets import READ_AND_ACT_METHODS, CompanyDocumentViewSet
from core.models import Company
from fulfillment.models import DeliveryNote, Invoice, PackingList
from fulfillment.serializers import DeliveryNoteSerializer, InvoiceSerializer, PackingListSerializer
from fulfillment.services import settle_invoice
from fulfillment.workflows import (
    DELIVERY_NOTE_WORKFLOW,
    INVOICE_WORKFLOW,
    PACKING_LIST_WORKFLOW,
    SETTLEMENT_ACTIONS,
)

PURCHASE_ORDER_FILTER = {"purchase_order": "purchase_order_id"}


class DeliveryNoteViewSetMixin:
    queryset = DeliveryNote.objects.select_related("purchase_order", "sales_order").prefetch_related("items")
    serializer_class = DeliveryNoteSerializer
    workflow = DELIVERY_NOTE_WORKFLOW
    audit_entity = "delivery_note"
    document_label = "Delivery note"
    filter_params = PURCHASE_ORDER_FILTER


class SellerDeliveryNoteViewSet(DeliveryNoteViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.SELLER
    document_type = "delivery_note"
    number_field = "dn_number"
    access_message = "This delivery note does not belong to your company"
    editable_statuses = (DeliveryNote.Status.PENDING, DeliveryNote.Status.IN_TRANSIT)
    deletable_statuses = (DeliveryNote.Status.PENDING,)
    search_fields = ("dn_number", "buyer_company_name", "carrier_name")


class BuyerDeliveryNoteViewSet(DeliveryNoteViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.BUYER
    http_method_names = READ_AND_ACT_METHODS
    allow_field_updates = False
    access_message = "This delivery note was not sent to your company"
    search_fields = ("dn_number", "seller_company_name", "carrier_name")


class PackingListViewSetMixin:
    queryset = PackingList.objects.select_related("purchase_order", "delivery_note", "sales_order").prefetch_related("items")
    serializer_class = PackingListSerializer
    workflow = PACKING_LIST_WORKFLOW
    audit_entity = "packing_list"
    document_label = "Packing list"
    filter_params = PURCHASE_ORDER_FILTER


class SellerPackingListViewSet(PackingListViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.SELLER
    document_type = "packing_list"
    number_field = "pl_number"
    access_message = "This packing list does not belong to your company"
    editable_statuses = (PackingList.Status.RECEIVED, PackingList.Status.PENDING, PackingList.Status.APPROVED)
    deletable_statuses = (PackingList.Status.RECEIVED, PackingList.Status.PENDING)
    search_fields = ("pl_number", "buyer_company_name", "shipment_tracking_id")


class BuyerPackingListViewSet(PackingListViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.BUYER
    http_method_names = READ_AND_ACT_METHODS
    allow_field_updates = False
    access_message = "This packing list was not sent to your company"
    search_fields = ("pl_number", "seller_company_name", "shipment_tracking_id")


class InvoiceViewSetMixin:
    queryset = Invoice.objects.select_related("purchase_order").prefetch_related("items")
    serializer_class = InvoiceSerializer
    workflow = INVOICE_WORKFLOW
    audit_entity = "invoice"
    document_label = "Invoice"
    filter_params = PURCHASE_ORDER_FILTER

    def perform_transition(self, document, payload):
        if payload["action"] in SETTLEMENT_ACTIONS:
            return settle_invoice(document, action=payload["action"], actor=self.side, payload=payload)
        return super().perform_transition(document, payload)


class SellerInvoiceViewSet(InvoiceViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.SELLER
    document_type = "invoice"
    number_field = "invoice_number"
    access_message = "This invoice does not belong to your company"
    editable_statuses = (Invoice.Status.DRAFT, Invoice.Status.PENDING)
    deletable_statuses = (Invoice.Status.DRAFT,)
    search_fields = ("invoice_number", "buyer_company_name")


class BuyerInvoiceViewSet(InvoiceViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.BUYER
    http_method_names = READ_AND_ACT_METHODS
    allow_field_updates = False
    access_message = "This invoice was not sent to your company"
    search_fields = ("invoice_number", "seller_company_name")

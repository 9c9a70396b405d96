from common.viewsets import READ_AND_ACT_METHODS, CompanyDocumentViewSet
from core.models import Company
from sourcing.models import RFQ, Contract, Quotation
from sourcing.serializers import ContractSerializer, QuotationSerializer, RFQSerializer
from sourcing.workflows import CONTRACT_WORKFLOW, QUOTATION_WORKFLOW, RFQ_WORKFLOW


class RFQViewSetMixin:
    queryset = RFQ.objects.prefetch_related("items")
    serializer_class = RFQSerializer
    workflow = RFQ_WORKFLOW
    audit_entity = "rfq"
    document_label = "RFQ"


class BuyerRFQViewSet(RFQViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.BUYER
    document_type = "rfq"
    number_field = "rfq_number"
    access_message = "This RFQ does not belong to your company"
    editable_statuses = (RFQ.Status.DRAFT, RFQ.Status.PENDING)
    deletable_statuses = (RFQ.Status.DRAFT,)
    search_fields = ("rfq_number", "seller_company_name", "project_name")


class SellerRFQViewSet(RFQViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.SELLER
    http_method_names = READ_AND_ACT_METHODS
    allow_field_updates = False
    access_message = "This RFQ was not sent to your company"
    search_fields = ("rfq_number", "buyer_company_name", "project_name")


class QuotationViewSetMixin:
    queryset = Quotation.objects.select_related("rfq").prefetch_related("items")
    serializer_class = QuotationSerializer
    workflow = QUOTATION_WORKFLOW
    audit_entity = "quotation"
    document_label = "Quotation"


class SellerQuotationViewSet(QuotationViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.SELLER
    document_type = "quotation"
    number_field = "quote_number"
    access_message = "This quotation does not belong to your company"
    editable_statuses = (Quotation.Status.DRAFT, Quotation.Status.SENT, Quotation.Status.PENDING)
    deletable_statuses = (Quotation.Status.DRAFT,)
    search_fields = ("quote_number", "buyer_company_name")


class BuyerQuotationViewSet(QuotationViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.BUYER
    http_method_names = READ_AND_ACT_METHODS
    allow_field_updates = False
    access_message = "This quotation was not sent to your company"
    search_fields = ("quote_number", "seller_company_name")


class ContractViewSetMixin:
    queryset = Contract.objects.select_related("quotation", "rfq").prefetch_related("items")
    serializer_class = ContractSerializer
    workflow = CONTRACT_WORKFLOW
    audit_entity = "contract"
    document_label = "Contract"


class SellerContractViewSet(ContractViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.SELLER
    document_type = "contract"
    number_field = "contract_number"
    access_message = "This contract does not belong to your company"
    editable_statuses = (Contract.Status.DRAFT, Contract.Status.SENT, Contract.Status.PENDING_CHANGES)
    deletable_statuses = (Contract.Status.DRAFT,)
    search_fields = ("contract_number", "buyer_company_name")


class BuyerContractViewSet(ContractViewSetMixin, CompanyDocumentViewSet):
    side = Company.Type.BUYER
    http_method_names = READ_AND_ACT_METHODS
    allow_field_updates = False
    access_message = "This contract was not sent to your company"
    search_fields = ("contract_number", "seller_company_name")

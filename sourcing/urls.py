from rest_framework.routers import DefaultRouter

from sourcing.views import (
    BuyerContractViewSet,
    BuyerQuotationViewSet,
    BuyerRFQViewSet,
    SellerContractViewSet,
    SellerQuotationViewSet,
    SellerRFQViewSet,
)

router = DefaultRouter()
router.register(r"buyer/rfqs", BuyerRFQViewSet, basename="buyer-rfq")
router.register(r"buyer/quotations", BuyerQuotationViewSet, basename="buyer-quotation")
router.register(r"buyer/contracts", BuyerContractViewSet, basename="buyer-contract")
router.register(r"seller/rfqs", SellerRFQViewSet, basename="seller-rfq")
router.register(r"seller/quotations", SellerQuotationViewSet, basename="seller-quotation")
router.register(r"seller/contracts", SellerContractViewSet, basename="seller-contract")

urlpatterns = router.urls

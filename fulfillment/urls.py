from rest_framework.routers import DefaultRouter

from fulfillment.views import (
    BuyerDeliveryNoteViewSet,
    BuyerInvoiceViewSet,
    BuyerPackingListViewSet,
    SellerDeliveryNoteViewSet,
    SellerInvoiceViewSet,
    SellerPackingListViewSet,
)

router = DefaultRouter()
router.register(r"buyer/delivery-notes", BuyerDeliveryNoteViewSet, basename="buyer-delivery-note")
router.register(r"buyer/packing-lists", BuyerPackingListViewSet, basename="buyer-packing-list")
router.register(r"buyer/invoices", BuyerInvoiceViewSet, basename="buyer-invoice")
router.register(r"seller/delivery-notes", SellerDeliveryNoteViewSet, basename="seller-delivery-note")
router.register(r"seller/packing-lists", SellerPackingListViewSet, basename="seller-packing-list")
router.register(r"seller/invoices", SellerInvoiceViewSet, basename="seller-invoice")

urlpatterns = router.urls

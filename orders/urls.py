from rest_framework.routers import DefaultRouter

from orders.views import BuyerPurchaseOrderViewSet, SellerPurchaseOrderViewSet, SellerSalesOrderViewSet

router = DefaultRouter()
router.register(r"buyer/purchase-orders", BuyerPurchaseOrderViewSet, basename="buyer-purchase-order")
router.register(r"seller/purchase-orders", SellerPurchaseOrderViewSet, basename="seller-purchase-order")
router.register(r"seller/sales-orders", SellerSalesOrderViewSet, basename="seller-sales-order")

urlpatterns = router.urls

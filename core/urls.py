from django.urls import path
from rest_framework.routers import DefaultRouter

from core.models import Company
from core.views import (
    AuditLogViewSet,
    CompanyProfileView,
    CurrentUserView,
    DashboardView,
    RegisterView,
    healthz,
    readyz,
)

router = DefaultRouter()
router.register(r"audit-logs", AuditLogViewSet, basename="audit-log")

urlpatterns = router.urls + [
    path("register/", RegisterView.as_view(), name="register"),
    path("me/", CurrentUserView.as_view(), name="current-user"),
    path("company/", CompanyProfileView.as_view(), name="company-profile"),
    path("buyer/dashboard/", DashboardView.as_view(side=Company.Type.BUYER), name="buyer-dashboard"),
    path("seller/dashboard/", DashboardView.as_view(side=Company.Type.SELLER), name="seller-dashboard"),
    path("healthz/", healthz, name="healthz"),
    path("readyz/", readyz, name="readyz"),
]

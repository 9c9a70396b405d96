import logging
import uuid

from django.db import connections
from django.utils.dateparse import parse_datetime
from rest_framework import generics, status, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenObtainPairView

from common.audit import create_audit_log_from_request
from common.ownership import reconcile_company_references
from common.permissions import NO_COMPANY_MESSAGE, CompanyCapabilityPermission
from core.models import AuditLog, Company
from core.reports import build_dashboard_summary
from core.serializers import (
    AuditLogSerializer,
    CompanySerializer,
    EmailOrUsernameTokenObtainPairSerializer,
    UserRegistrationSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


def company_for_user(user):
    company = getattr(user, "company", None)
    if company is None:
        raise PermissionDenied(NO_COMPANY_MESSAGE)
    return company


class RegisterView(generics.CreateAPIView):
    serializer_class = UserRegistrationSerializer
    permission_classes = [AllowAny]

    def perform_create(self, serializer):
        user = serializer.save()
        company = user.company
        linked = reconcile_company_references(company)
        create_audit_log_from_request(
            self.request,
            action="company.register",
            entity="company",
            entity_id=company.id,
            company=company,
            after_snapshot={
                "company": CompanySerializer(company).data,
                "user": {"id": str(user.id), "username": user.username, "email": user.email},
                "linked_documents": linked,
            },
        )


class EmailOrUsernameTokenObtainPairView(TokenObtainPairView):
    serializer_class = EmailOrUsernameTokenObtainPairSerializer
    throttle_classes = [ScopedRateThrottle]
    throttle_scope = "auth"


class CurrentUserView(generics.RetrieveAPIView):
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated]

    def get_object(self):
        return self.request.user


class CompanyProfileView(generics.RetrieveUpdateAPIView):
    serializer_class = CompanySerializer
    permission_classes = [IsAuthenticated, CompanyCapabilityPermission]
    permission_action_map = {"get": "company.manage", "put": "company.manage", "patch": "company.manage"}

    def get_object(self):
        return company_for_user(self.request.user)

    def perform_update(self, serializer):
        before_snapshot = CompanySerializer(serializer.instance).data
        company = serializer.save()
        # A renamed company may now match documents that named it before.
        reconcile_company_references(company)
        create_audit_log_from_request(
            self.request,
            action="company.update",
            entity="company",
            entity_id=company.id,
            company=company,
            before_snapshot=before_snapshot,
            after_snapshot=CompanySerializer(company).data,
        )


class DashboardView(APIView):
    permission_classes = [IsAuthenticated, CompanyCapabilityPermission]
    side = Company.Type.BUYER

    @property
    def default_capability(self):
        return f"{self.side.lower()}.documents.manage"

    def get(self, request):
        return Response(build_dashboard_summary(company_for_user(request.user)))


class AuditLogViewSet(viewsets.ReadOnlyModelViewSet):
    queryset = AuditLog.objects.select_related("actor")
    serializer_class = AuditLogSerializer
    permission_classes = [IsAuthenticated, CompanyCapabilityPermission]
    permission_action_map = {"list": "audit.view", "retrieve": "audit.view"}

    def get_queryset(self):
        company = company_for_user(self.request.user)
        qs = self.queryset.filter(company=company).order_by("-created_at")

        start_date = self.request.query_params.get("start_date")
        end_date = self.request.query_params.get("end_date")
        action = self.request.query_params.get("action")
        entity = self.request.query_params.get("entity")
        entity_id = self.request.query_params.get("entity_id")

        if start_date:
            dt = parse_datetime(start_date)
            if dt:
                qs = qs.filter(created_at__gte=dt)
        if end_date:
            dt = parse_datetime(end_date)
            if dt:
                qs = qs.filter(created_at__lte=dt)
        if action:
            qs = qs.filter(action=action)
        if entity:
            qs = qs.filter(entity=entity)
        if entity_id:
            try:
                qs = qs.filter(entity_id=uuid.UUID(entity_id))
            except ValueError:
                qs = qs.none()

        return qs


@api_view(["GET"])
@permission_classes([AllowAny])
def healthz(request):
    return Response({"status": "ok", "request_id": getattr(request, "request_id", None)})


@api_view(["GET"])
@permission_classes([AllowAny])
def readyz(request):
    try:
        with connections["default"].cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except Exception as exc:
        logger.exception("readiness_check_failed")
        return Response(
            {"status": "error", "request_id": getattr(request, "request_id", None), "detail": str(exc)},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return Response({"status": "ready", "request_id": getattr(request, "request_id", None)})

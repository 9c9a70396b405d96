import logging
import uuid

from django.db import transaction
from django.db.models import ProtectedError, Q
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.audit import create_audit_log_from_request
from common.lifecycle import apply_transition
from common.numbering import next_document_number
from common.ownership import company_scope, ensure_company_matches
from common.permissions import NO_COMPANY_MESSAGE, CompanyCapabilityPermission
from common.serializers import DocumentActionSerializer

logger = logging.getLogger(__name__)

UUID_LOOKUP_REGEX = "[0-9a-fA-F-]{36}"
READ_AND_ACT_METHODS = ["get", "patch", "head", "options"]


class CompanyDocumentViewSet(viewsets.ModelViewSet):
    """CRUD plus ``PATCH {"action": ...}`` transitions for one side of one document type.

    ``side`` is the caller's company type. Detail routes look documents up
    without scoping so a missing document is a 404 and a document belonging
    to someone else is a 403.
    """

    permission_classes = [IsAuthenticated, CompanyCapabilityPermission]
    lookup_value_regex = UUID_LOOKUP_REGEX
    side = None
    workflow = None
    audit_entity = None
    document_type = None
    number_field = None
    document_label = "Document"
    access_message = "This document does not belong to your company"
    editable_statuses = ()
    deletable_statuses = ()
    search_fields = ()
    filter_params = {}
    allow_field_updates = True

    @property
    def party(self):
        return self.side.lower()

    @property
    def default_capability(self):
        return f"{self.party}.documents.manage"

    def get_company(self):
        company = getattr(self.request.user, "company", None)
        if company is None:
            raise PermissionDenied(NO_COMPANY_MESSAGE)
        return company

    def get_serializer_context(self):
        context = super().get_serializer_context()
        user = getattr(self.request, "user", None) if self.request else None
        context["company"] = getattr(user, "company", None)
        context["company_type"] = self.side
        return context

    def get_queryset(self):
        queryset = self.queryset.filter(company_scope(self.get_company(), self.party)).order_by("-created_at")
        params = self.request.query_params

        status_filter = (params.get("status") or "").strip().upper()
        if status_filter and status_filter != "ALL":
            queryset = queryset.filter(status=status_filter)

        search = (params.get("search") or "").strip()
        if search and self.search_fields:
            condition = Q()
            for field in self.search_fields:
                condition |= Q(**{f"{field}__icontains": search})
            queryset = queryset.filter(condition)

        for param, lookup in self.filter_params.items():
            value = params.get(param)
            if not value:
                continue
            try:
                uuid.UUID(str(value))
            except ValueError as exc:
                raise ValidationError({param: ["Must be a valid UUID."]}) from exc
            queryset = queryset.filter(**{lookup: value})

        return queryset

    def get_object(self):
        lookup = self.kwargs[self.lookup_url_kwarg or self.lookup_field]
        document = self.queryset.filter(pk=lookup).first()
        if document is None:
            raise NotFound(f"{self.document_label} not found.")
        self.check_object_permissions(self.request, document)
        ensure_company_matches(document, self.get_company(), self.party, self.access_message)
        return document

    def _audit(self, *, action, instance, before_snapshot=None, after_snapshot=None):
        create_audit_log_from_request(
            self.request,
            action=action,
            entity=self.audit_entity,
            entity_id=instance.id,
            before_snapshot=before_snapshot,
            after_snapshot=after_snapshot,
        )

    def perform_create(self, serializer):
        company = self.get_company()
        model = self.queryset.model
        with transaction.atomic():
            owned = model.objects.filter(**{f"{self.party}_company": company})
            instance = serializer.save(
                **{
                    f"{self.party}_company": company,
                    self.number_field: next_document_number(self.document_type, company, owned),
                }
            )
            self._audit(action=f"{self.audit_entity}.create", instance=instance, after_snapshot=self.get_serializer(instance).data)
        logger.info(
            "document_created",
            extra={"document": self.audit_entity, "document_id": str(instance.id), "company_id": str(company.id)},
        )

    def ensure_editable(self, document):
        if document.status not in self.editable_statuses:
            raise ValidationError({"status": [f"{self.document_label} with status {document.status} can no longer be edited."]})

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        document = self.get_object()
        self.ensure_editable(document)
        serializer = self.get_serializer(document, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        self.perform_update(serializer)

        if getattr(document, "_prefetched_objects_cache", None):
            document._prefetched_objects_cache = {}
        return Response(self.get_serializer(document).data)

    def perform_update(self, serializer):
        before_snapshot = self.get_serializer(serializer.instance).data
        with transaction.atomic():
            instance = serializer.save()
            if getattr(instance, "_prefetched_objects_cache", None):
                instance._prefetched_objects_cache = {}
            self._audit(
                action=f"{self.audit_entity}.update",
                instance=instance,
                before_snapshot=before_snapshot,
                after_snapshot=self.get_serializer(instance).data,
            )

    def partial_update(self, request, *args, **kwargs):
        if "action" not in request.data:
            if not self.allow_field_updates:
                raise ValidationError({"action": ["This field is required."]})
            kwargs["partial"] = True
            return self.update(request, *args, **kwargs)

        document = self.get_object()
        serializer = DocumentActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        before_snapshot = self.get_serializer(document).data
        with transaction.atomic():
            transition = self.perform_transition(document, serializer.validated_data)
            after_snapshot = self.get_serializer(document).data
            self._audit(
                action=f"{self.audit_entity}.{transition.action}",
                instance=document,
                before_snapshot=before_snapshot,
                after_snapshot=after_snapshot,
            )
        return Response(after_snapshot)

    def perform_transition(self, document, payload):
        return apply_transition(document, self.workflow, action=payload["action"], actor=self.side, payload=payload)

    def destroy(self, request, *args, **kwargs):
        document = self.get_object()
        if document.status not in self.deletable_statuses:
            raise ValidationError({"status": [f"{self.document_label} with status {document.status} cannot be deleted."]})
        self.perform_destroy(document)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def perform_destroy(self, instance):
        before_snapshot = self.get_serializer(instance).data
        try:
            with transaction.atomic():
                self._audit(action=f"{self.audit_entity}.delete", instance=instance, before_snapshot=before_snapshot)
                instance.delete()
        except ProtectedError as exc:
            raise ValidationError(
                {"detail": [f"{self.document_label} is referenced by other documents and cannot be deleted."]}
            ) from exc

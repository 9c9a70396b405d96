import json

from django.core.serializers.json import DjangoJSONEncoder

from core.models import AuditLog


def _json_safe(snapshot):
    # Serializer output may hold Decimal, UUID and date values.
    if snapshot is None:
        return None
    return json.loads(json.dumps(snapshot, cls=DjangoJSONEncoder))


def get_request_id(request):
    return getattr(request, "request_id", None) or request.headers.get("X-Request-ID")


def create_audit_log_from_request(
    request,
    *,
    action,
    entity,
    entity_id=None,
    before_snapshot=None,
    after_snapshot=None,
    company=None,
):
    """Append an ``<entity>.<action>`` row for the authenticated caller's company."""
    user = getattr(request, "user", None)
    actor = user if user is not None and user.is_authenticated else None
    return AuditLog.objects.create(
        actor=actor,
        company=company if company is not None else getattr(actor, "company", None),
        action=action,
        entity=entity,
        entity_id=entity_id,
        before_snapshot=_json_safe(before_snapshot),
        after_snapshot=_json_safe(after_snapshot),
        request_id=get_request_id(request),
    )

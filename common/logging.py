from __future__ import annotations

import json
import logging
import time
import uuid
from datetime import datetime, timezone

# Extra attributes copied from the log record into the JSON line when set.
STRUCTURED_FIELDS = (
    "request_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
    "remote_addr",
    "user_id",
    "company_id",
    "company_type",
    "document",
    "document_id",
    "action",
    "from_status",
    "to_status",
)


class JsonFormatter(logging.Formatter):
    """One JSON object per line with the record's structured extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {field: getattr(record, field) for field in STRUCTURED_FIELDS if getattr(record, field, None) is not None}
        )
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _caller(request):
    user = getattr(request, "user", None)
    if user is None or not getattr(user, "is_authenticated", False):
        return {}
    company = getattr(user, "company", None)
    return {
        "user_id": str(user.pk),
        "company_id": str(company.pk) if company is not None else None,
        "company_type": getattr(company, "type", None),
    }


class RequestLogMiddleware:
    """Tags each request with ``X-Request-ID`` and logs ``request_completed``."""

    def __init__(self, get_response):
        self.get_response = get_response
        self.logger = logging.getLogger("api.request")

    def __call__(self, request):
        started = time.perf_counter()
        request.request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex

        response = self.get_response(request)
        response["X-Request-ID"] = request.request_id

        self.logger.info(
            "request_completed",
            extra={
                "request_id": request.request_id,
                "method": request.method,
                "path": request.path,
                "status_code": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                "remote_addr": request.META.get("REMOTE_ADDR"),
                **_caller(request),
            },
        )
        return response

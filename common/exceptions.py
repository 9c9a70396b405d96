from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    MethodNotAllowed,
    NotAuthenticated,
    NotFound,
    ParseError,
    PermissionDenied,
    Throttled,
    UnsupportedMediaType,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR_MESSAGE = "An unexpected error occurred."

EXCEPTION_CODE_MAP: dict[type[Exception], str] = {
    ValidationError: "validation_error",
    NotAuthenticated: "not_authenticated",
    AuthenticationFailed: "authentication_failed",
    PermissionDenied: "permission_denied",
    NotFound: "not_found",
    MethodNotAllowed: "method_not_allowed",
    UnsupportedMediaType: "unsupported_media_type",
    ParseError: "parse_error",
    Throttled: "throttled",
}


def build_error_envelope(*, code: str, message: str, errors: Any, status_code: int, request_id: str | None = None) -> dict[str, Any]:
    envelope = {
        "code": code,
        "message": message,
        "errors": errors,
        "status": status_code,
    }
    if request_id:
        envelope["request_id"] = request_id
    return envelope


def _request_id(context: dict[str, Any]) -> str | None:
    request = context.get("request")
    return getattr(request, "request_id", None) if request is not None else None


def custom_exception_handler(exc: Exception, context: dict[str, Any]) -> Response:
    response = drf_exception_handler(exc, context)
    request_id = _request_id(context)
    view_name = context.get("view").__class__.__name__ if context.get("view") else "unknown"

    if response is None:
        logger.exception("unhandled_api_exception", extra={"request_id": request_id, "action": view_name})
        return Response(
            build_error_envelope(
                code="internal_server_error",
                message=GENERIC_SERVER_ERROR_MESSAGE,
                errors=None,
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                request_id=request_id,
            ),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    code = _build_code(exc)
    if code == "validation_error":
        logger.info("request_rejected", extra={"request_id": request_id, "status_code": response.status_code})

    response.data = build_error_envelope(
        code=code,
        message=_build_message(exc, response.data),
        errors=_normalize_errors(response.data),
        status_code=response.status_code,
        request_id=request_id,
    )
    return response


def _build_code(exc: Exception) -> str:
    for exception_type, stable_code in EXCEPTION_CODE_MAP.items():
        if isinstance(exc, exception_type):
            return stable_code

    if isinstance(exc, APIException):
        return str(getattr(exc, "default_code", "api_error"))

    # DRF answers Django's Http404 and PermissionDenied but passes the original exception.
    if isinstance(exc, Http404):
        return "not_found"
    return "permission_denied"


def _build_message(exc: Exception, data: Any) -> str:
    if isinstance(exc, ValidationError):
        return "Validation failed."

    detail = None
    if isinstance(data, Mapping):
        detail = data.get("detail")
    elif isinstance(data, str):
        detail = data

    if detail:
        return str(detail)

    if isinstance(exc, Throttled):
        return "Request was throttled."

    return str(getattr(exc, "detail", "Request failed."))


def _normalize_errors(data: Any) -> Any:
    """Field errors stay as a dict; a lone ``detail`` is already the message."""
    if isinstance(data, Mapping):
        if set(data.keys()) == {"detail"}:
            return None
        return dict(data)

    if isinstance(data, Sequence) and not isinstance(data, str):
        return list(data)

    return None

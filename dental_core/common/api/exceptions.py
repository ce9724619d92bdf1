# dental_core/common/api/exceptions.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from django.http import Http404
from rest_framework import status
from rest_framework.exceptions import (
    APIException,
    AuthenticationFailed,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from dental_core.common.storage import StorageError

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Request failed."


class ConflictError(APIException):
    """
    409 for business rules that block a write, e.g. deleting a patient that
    still has treatments. Rendered through the same envelope as DRF errors.
    """
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


# First match wins
_ERROR_CODES: tuple[tuple[type, str], ...] = (
    (ValidationError, "validation_error"),
    (NotAuthenticated, "not_authenticated"),
    (AuthenticationFailed, "authentication_failed"),
    (PermissionDenied, "permission_denied"),
    (Http404, "not_found"),
    (NotFound, "not_found"),
    (ConflictError, "conflict"),
)


def request_id_for(request) -> str:
    """The request's correlation id, assigned on first use."""
    if request is None:
        return uuid.uuid4().hex
    rid = getattr(request, "request_id", None)
    if not rid:
        rid = uuid.uuid4().hex
        request.request_id = rid
    return rid


def build_error_envelope(*, request=None, code: str, message: str, details: Any = None) -> dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details,
            "request_id": request_id_for(request),
        }
    }


def error_code(exc: Exception, http_status: int) -> str:
    for exc_type, code in _ERROR_CODES:
        if isinstance(exc, exc_type):
            return code
    if isinstance(exc, APIException):
        return exc.default_code or "api_error"
    return "server_error" if http_status >= 500 else "error"


def split_message(data: Any) -> tuple[str, Optional[Any]]:
    """
    DRF error payload -> (message, details).

    {"detail": msg, **rest} gives msg and rest (None when empty); a one-item
    list gives its item; anything else (field errors) stays in details.
    """
    if isinstance(data, dict) and "detail" in data:
        rest = {k: v for k, v in data.items() if k != "detail"}
        return str(data["detail"]), rest or None
    if isinstance(data, list) and len(data) == 1:
        return str(data[0]), None
    return GENERIC_MESSAGE, data


def _envelope_response(request, *, code: str, message: str, http_status: int, details=None, headers=None) -> Response:
    return Response(
        build_error_envelope(request=request, code=code, message=message, details=details),
        status=http_status,
        headers=headers,
    )


def api_exception_handler(exc: Exception, context: dict[str, Any]):
    request = context.get("request")

    # Slot backend down: login marker writes or a failed unit of work
    if isinstance(exc, StorageError):
        logger.error("Storage unavailable: %s", exc)
        return _envelope_response(
            request,
            code="storage_unavailable",
            message="Storage is temporarily unavailable.",
            http_status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = drf_exception_handler(exc, context)
    if response is None:
        logger.exception("Unhandled API error", exc_info=exc)
        return _envelope_response(
            request,
            code="server_error",
            message="Unexpected server error.",
            http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    message, details = split_message(response.data)
    return _envelope_response(
        request,
        code=error_code(exc, response.status_code),
        message=message,
        details=details,
        http_status=response.status_code,
        headers=response.headers,
    )

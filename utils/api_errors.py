"""
HTTP mapping for service errors.

Views turn a failed ``ServiceResult`` into a response with ``error_response``;
exceptions that escape a view are shaped the same way by
``api_exception_handler`` (wired through ``REST_FRAMEWORK["EXCEPTION_HANDLER"]``).
"""

import logging

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied
from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions, serializers, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from utils.service_base import ErrorCodes, ServiceResult


logger = logging.getLogger(__name__)

ERROR_STATUS_MAP = {
    ErrorCodes.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.DUPLICATE_IDENTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.ALREADY_SELLER: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCodes.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorCodes.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCodes.DUPLICATE_REVIEW: status.HTTP_403_FORBIDDEN,
    ErrorCodes.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField(help_text="Machine readable error code")
    message = serializers.CharField(help_text="Human readable message")
    field = serializers.CharField(required=False, help_text="Offending input field, for validation errors")


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response (documentation only)"""

    success = serializers.BooleanField(default=False)
    error = ErrorDetailSerializer()


def error_body(code, message, field=None):
    error = {"code": code, "message": message}
    if field:
        error["field"] = field
    return {"success": False, "error": error}


def error_response(result: ServiceResult, status_override=None) -> Response:
    """Build the JSON error response for a failed ServiceResult."""
    http_status = status_override or ERROR_STATUS_MAP.get(result.error, status.HTTP_400_BAD_REQUEST)
    return Response(error_body(result.error, result.error_detail, result.field), status=http_status)


def success_response(data, http_status=status.HTTP_200_OK, **extra) -> Response:
    body = {"success": True, "data": data}
    body.update(extra)
    return Response(body, status=http_status)


def _first_validation_error(detail):
    """Return (field, message) for the first entry of a DRF ValidationError detail."""
    if isinstance(detail, dict):
        for field, messages in detail.items():
            _, message = _first_validation_error(messages)
            return (None if field == "non_field_errors" else field), message
    if isinstance(detail, list) and detail:
        return _first_validation_error(detail[0])
    return None, str(detail)


def api_exception_handler(exc, context):
    """
    Project-wide DRF exception handler.

    Authentication problems, permission problems, validation errors and
    missing objects use the standard error body. Database outages become 503
    without internal detail. Anything else is logged and answered with a
    generic 500.
    """
    if isinstance(exc, DatabaseError):
        logger.error("Unhandled database error in %s", context.get("view").__class__.__name__, exc_info=exc)
        return Response(
            error_body(ErrorCodes.STORE_UNAVAILABLE, "Service temporarily unavailable, please retry"),
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    response = exception_handler(exc, context)
    if response is None:
        logger.error("Unhandled exception in %s", context.get("view").__class__.__name__, exc_info=exc)
        return Response(
            error_body(ErrorCodes.INTERNAL_ERROR, "An unexpected error occurred"),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response.data = error_body(ErrorCodes.UNAUTHENTICATED, "Authentication required")
    elif isinstance(exc, (exceptions.PermissionDenied, DjangoPermissionDenied)):
        response.data = error_body(ErrorCodes.FORBIDDEN, str(getattr(exc, "detail", "Permission denied")))
    elif isinstance(exc, exceptions.ValidationError):
        field, message = _first_validation_error(exc.detail)
        response.data = error_body(ErrorCodes.VALIDATION_FAILED, message, field)
    elif isinstance(exc, (Http404, exceptions.NotFound)):
        response.data = error_body(ErrorCodes.NOT_FOUND, "Not found")
    else:
        detail = getattr(exc, "detail", "Request failed")
        response.data = error_body(getattr(exc, "default_code", "error"), str(detail))
    return response

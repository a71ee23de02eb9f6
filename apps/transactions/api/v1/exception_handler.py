"""
DRF exception handler.
Renders domain and framework errors with one body shape:
{timestamp, status, error, messages, path}.
"""

import logging

from django.utils import timezone
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler, set_rollback

from apps.transactions.api.v1.serializers import ErrorResponseSerializer
from apps.transactions.domain.exceptions import (
    ExchangeRateNotFoundError,
    TransactionNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

VALIDATION_ERROR = "Validation Error"
REQUEST_VALUE_ERROR = "Request Value error"
RESOURCE_NOT_FOUND = "Resource Not Found"
INTERNAL_SERVER_ERROR = "Internal Server Error"


class RequestValueError(exceptions.APIException):
    """Invalid query string or path value."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request value."
    default_code = "invalid_request_value"


def build_error_response(status_code: int, error: str, messages: dict, path: str) -> Response:
    body = ErrorResponseSerializer({
        "timestamp": timezone.now(),
        "status": status_code,
        "error": error,
        "messages": messages,
        "path": path,
    }).data
    return Response(body, status=status_code)


def _first_message(detail) -> str:
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    if isinstance(detail, dict):
        return _first_message(next(iter(detail.values()), ""))
    return str(detail)


def _validation_messages(detail) -> dict:
    if isinstance(detail, dict):
        return {field: _first_message(errors) for field, errors in detail.items()}
    return {"requestValue": _first_message(detail)}


def transaction_exception_handler(exc, context):
    request = context.get("request")
    path = request.path if request is not None else ""

    if isinstance(exc, ValidationError):
        logger.warning("Failed to validate the request: %s. Reason: %s", path, exc)
        set_rollback()
        return build_error_response(status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR, exc.errors, path)

    if isinstance(exc, (TransactionNotFoundError, ExchangeRateNotFoundError)):
        logger.warning("Fail to find the resource: %s. Reason: %s", path, exc)
        set_rollback()
        return build_error_response(
            status.HTTP_404_NOT_FOUND, RESOURCE_NOT_FOUND, {"resourceNotFound": str(exc)}, path
        )

    response = exception_handler(exc, context)

    if response is None:
        logger.error("Unhandled exception occurred on %s", path, exc_info=exc)
        set_rollback()
        return build_error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_SERVER_ERROR,
            {"internalError": "An unexpected error occurred. Please try again later."},
            path,
        )

    if isinstance(exc, exceptions.ValidationError):
        error, messages = VALIDATION_ERROR, _validation_messages(exc.detail)
    elif isinstance(exc, (RequestValueError, exceptions.ParseError)):
        error, messages = REQUEST_VALUE_ERROR, {"requestValue": _first_message(exc.detail)}
    elif response.status_code == status.HTTP_404_NOT_FOUND:
        error, messages = RESOURCE_NOT_FOUND, {"resourceNotFound": _first_message(response.data.get("detail", ""))}
    else:
        error, messages = response.status_text, {"detail": _first_message(response.data.get("detail", ""))}

    logger.warning("Request to %s failed with %s. Reason: %s", path, response.status_code, messages)

    error_response = build_error_response(response.status_code, error, messages, path)
    for header in ("Allow", "WWW-Authenticate", "Retry-After"):
        if header in response:
            error_response[header] = response[header]
    return error_response

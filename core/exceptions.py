from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
import logging

logger = logging.getLogger("showcase")


# -----------------------------
# ERROR TAXONOMY
# -----------------------------
class ValidationError(exceptions.ValidationError):
    """Missing or invalid input. HTTP 400."""


class Unauthorized(exceptions.NotAuthenticated):
    """Missing or invalid credential. HTTP 401."""


class Forbidden(exceptions.PermissionDenied):
    """Caller is authenticated but may not touch this resource. HTTP 403."""

    default_detail = "You do not have permission to modify this resource."


class NotFound(exceptions.NotFound):
    """Referenced record does not exist. HTTP 404."""


class InternalError(exceptions.APIException):
    """Storage or collaborator failure. HTTP 500."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Internal server error."
    default_code = "internal_error"


class ImageStorageError(InternalError):
    default_detail = "Image storage failed."
    default_code = "image_storage_error"


# -----------------------------
# ENVELOPE
# -----------------------------
def flatten_detail(detail) -> str:
    """
    Collapse DRF error detail (str / list / dict, possibly nested) into one
    human readable message.

        {"title": ["This field is required."]} -> "title: This field is required."
    """
    if isinstance(detail, dict):
        parts = []
        for field, value in detail.items():
            message = flatten_detail(value)
            if field in ("detail", "non_field_errors"):
                parts.append(message)
            else:
                parts.append(f"{field}: {message}")
        return "; ".join(p for p in parts if p)

    if isinstance(detail, (list, tuple)):
        return " ".join(flatten_detail(item) for item in detail)

    return str(detail)


def error_response(message: str, status_code: int) -> Response:
    return Response(
        {
            "status": "error",
            "message": message,
        },
        status=status_code,
    )


def custom_exception_handler(exc, context):
    """
    Wrap DRF + Django exceptions into the {status, message} envelope.

    Success responses (2xx) are not touched.
    Only errors come through here.
    """
    response = drf_exception_handler(exc, context)

    # If DRF handled it, wrap it
    if response is not None:
        message = flatten_detail(response.data)

        if response.status_code >= 500:
            logger.error("API error %s: %s", response.status_code, message)

        error = error_response(message, response.status_code)
        # keep WWW-Authenticate and Retry-After from DRF
        for header in ("WWW-Authenticate", "Retry-After"):
            if header in response:
                error[header] = response[header]
        return error

    # Unhandled exceptions -> 500
    logger.exception("Unhandled API exception", exc_info=exc)

    return error_response(
        str(exc) or "Internal Server Error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

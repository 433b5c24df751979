"""
Error types and JSON error envelopes shared by routes and services.

Usage:
    from blessing_api.utils.exceptions import ValidationError, error_response

    raise ValidationError(missing_fields=["weather"])
    return error_response(500, "Upstream failed", code="BLESSING_API_ERROR")
"""

from typing import Optional

import httpx
from fastapi import status
from fastapi.responses import JSONResponse

GENERIC_ERROR_MESSAGE = "Unknown error"
GENERATION_ERROR_PREFIX = "Generation failed: "


class BlessingAPIError(Exception):
    """Base class for errors raised by this service."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(BlessingAPIError):
    """Request parameters are missing or invalid. Always reported as 400."""

    def __init__(self, message: str = "", missing_fields: Optional[list[str]] = None):
        self.missing_fields = list(missing_fields or [])
        if not message and self.missing_fields:
            message = f"Missing required parameters: {', '.join(self.missing_fields)}"
        super().__init__(message or "Invalid request parameters")


class UpstreamError(BlessingAPIError):
    """The generation or weather provider failed."""

    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class WeatherServiceError(UpstreamError):
    """The weather provider failed or returned an unusable payload."""


class TransportError(BlessingAPIError):
    """The client went away while a response was being streamed."""


def normalize_error(error: BaseException) -> str:
    """Collapse any failure into the single message exposed to clients."""
    if isinstance(error, UpstreamError):
        if error.status_code is not None:
            return f"{GENERATION_ERROR_PREFIX}API error (status code {error.status_code})"
        return error.message or GENERIC_ERROR_MESSAGE
    if isinstance(error, httpx.HTTPStatusError):
        return f"{GENERATION_ERROR_PREFIX}API error (status code {error.response.status_code})"
    if isinstance(error, httpx.RequestError):
        return f"{GENERATION_ERROR_PREFIX}network error ({error})"
    return str(error) or GENERIC_ERROR_MESSAGE


def error_response(
    status_code: int, error: str, code: Optional[str] = None
) -> JSONResponse:
    """Build the `{success: false, error, code?}` envelope."""
    content = {"success": False, "error": error}
    if code:
        content["code"] = code
    return JSONResponse(status_code=status_code, content=content)


def bad_request(error: str) -> JSONResponse:
    """HTTP 400 Bad Request envelope."""
    return error_response(status.HTTP_400_BAD_REQUEST, error)


def internal_error(error: str = GENERIC_ERROR_MESSAGE, code: Optional[str] = None) -> JSONResponse:
    """HTTP 500 Internal Server Error envelope."""
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, error, code)

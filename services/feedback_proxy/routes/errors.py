"""Shared error-response helpers for the proxy routes."""

from fastapi.responses import JSONResponse

from feedback_proxy.exceptions import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamRateLimitError,
)
from feedback_proxy.response_models import ErrorResponse

AUTH_MESSAGE = "Authentication error with AI provider. Please contact support."
RATE_LIMIT_MESSAGE = "AI provider rate limit exceeded. Please try again later."


def error_response(
    status_code: int,
    error: str,
    code: str | None = None,
    details: str | None = None,
) -> JSONResponse:
    """Builds a JSON error response, omitting empty fields."""
    body = ErrorResponse(error=error, code=code, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def upstream_error_response(error: UpstreamError, generic_message: str) -> JSONResponse:
    """
    Answers an upstream failure with a status and code distinct per class.

    auth -> 500 ``upstream_auth``, rate limit -> 429 ``upstream_rate_limited``,
    anything else -> 502 ``upstream_error``.
    """
    if isinstance(error, UpstreamAuthError):
        return error_response(
            500,
            AUTH_MESSAGE,
            code="upstream_auth",
            details="API key may be invalid or expired",
        )
    if isinstance(error, UpstreamRateLimitError):
        return error_response(
            429, RATE_LIMIT_MESSAGE, code="upstream_rate_limited", details=str(error)
        )
    return error_response(502, generic_message, code="upstream_error", details=str(error))

"""Classification of upstream provider failures."""

from feedback_proxy.exceptions import (
    UpstreamAuthError,
    UpstreamError,
    UpstreamRateLimitError,
    UpstreamServiceError,
)

_AUTH_STATUSES = {401, 403}
_RATE_LIMIT_STATUSES = {429}

_AUTH_HINTS = (
    "api key",
    "api_key",
    "authentication",
    "unauthorized",
    "unauthenticated",
    "permission denied",
    "permission_denied",
    "invalid credentials",
)
_RATE_LIMIT_HINTS = (
    "rate limit",
    "rate_limit",
    "too many requests",
    "quota",
    "resource_exhausted",
    "resource exhausted",
)


def classify_upstream_failure(
    provider: str,
    message: str,
    status_code: int | None = None,
    cause: Exception | None = None,
) -> UpstreamError:
    """
    Maps a provider failure onto the auth / rate-limit / other classes.

    The status code decides first. Providers that report failures without a
    usable status (or with a generic 400) are classified from the message.

    Args:
        provider: Provider name used in the error message.
        message: Error text reported by the provider.
        status_code: HTTP status reported by the provider, if any.
        cause: The original exception.

    Returns:
        The UpstreamError subclass instance to raise.
    """
    if status_code in _AUTH_STATUSES:
        return UpstreamAuthError(provider, message, status_code, cause)
    if status_code in _RATE_LIMIT_STATUSES:
        return UpstreamRateLimitError(provider, message, status_code, cause)

    lowered = (message or "").lower()
    if any(h in lowered for h in _AUTH_HINTS):
        return UpstreamAuthError(provider, message, status_code, cause)
    if any(h in lowered for h in _RATE_LIMIT_HINTS):
        return UpstreamRateLimitError(provider, message, status_code, cause)
    return UpstreamServiceError(provider, message, status_code, cause)

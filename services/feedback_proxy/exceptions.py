"""Custom exceptions for the feedback-proxy service."""


class UpstreamError(Exception):
    """Base class for failures reported by an upstream AI provider."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.provider = provider
        self.status_code = status_code
        self.cause = cause
        super().__init__(f"{provider}: {message}")


class UpstreamAuthError(UpstreamError):
    """Raised when the provider rejects the configured credential."""


class UpstreamRateLimitError(UpstreamError):
    """Raised when the provider throttles or the quota is exhausted."""


class UpstreamServiceError(UpstreamError):
    """Raised for any other provider failure."""


class UnknownFeedbackProfileError(Exception):
    """Raised when a feedback request names a profile that is not loaded."""

    def __init__(self, profile: str, available: list[str]):
        self.profile = profile
        self.available = available
        super().__init__(
            f"Unknown feedback type '{profile}'. "
            f"Available types: {', '.join(sorted(available))}"
        )


class PromptProfileError(Exception):
    """Raised when a prompt profile on disk is incomplete or malformed."""

    def __init__(self, profile: str, reason: str):
        self.profile = profile
        self.reason = reason
        super().__init__(f"Invalid prompt profile '{profile}': {reason}")

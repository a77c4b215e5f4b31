"""Custom exceptions for the answer-recorder client."""

from enum import Enum


class ClientCaptureError(Exception):
    """Raised when the microphone cannot be acquired or sustained."""


class PermissionDenied(ClientCaptureError):
    """Raised when the platform refuses access to the microphone."""


class DeviceNotFound(ClientCaptureError):
    """Raised when no usable input device exists."""


class DeviceBusy(ClientCaptureError):
    """Raised when the input device is held by another session or process."""


class UnsupportedEnvironment(ClientCaptureError):
    """Raised when the platform has no audio capture support at all."""


class CaptureNotActive(Exception):
    """Raised when stopping a capture that has no active session."""

    def __init__(self):
        super().__init__("No recording session is active")


class TranscriptionFailureCause(str, Enum):
    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    EMPTY_RESULT = "empty_result"
    DEADLINE_EXCEEDED = "deadline_exceeded"


class TranscriptionFailed(Exception):
    """Raised when transcription fails after the retry policy is applied."""

    def __init__(
        self,
        cause: TranscriptionFailureCause,
        detail: str = "",
        http_status: int | None = None,
        attempts: int = 0,
    ):
        self.cause = cause
        self.detail = detail
        self.http_status = http_status
        self.attempts = attempts
        message = f"Transcription failed ({cause.value}) after {attempts} attempt(s)"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class FeedbackFailed(Exception):
    """Raised when the feedback endpoint answers with a failure."""

    def __init__(self, http_status: int | None, cause: str):
        self.http_status = http_status
        self.cause = cause
        super().__init__(f"Feedback request failed ({http_status}): {cause}")


class UpstreamAuthError(FeedbackFailed):
    """The proxy's provider credential is invalid or expired."""


class UpstreamRateLimited(FeedbackFailed):
    """The provider is throttling; the user should try again later."""


class UpstreamOther(FeedbackFailed):
    """Any other feedback failure, message passed through."""


class InvalidTransition(Exception):
    """Raised when a pipeline operation is requested in the wrong state."""

    def __init__(self, operation: str, state: str):
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while pipeline is {state}")

"""Exceptions shared across services."""

from interview_common.models import ValidationVerdict


class ValidationRejected(Exception):
    """Raised when a transcript is too short or repetitive for feedback."""

    def __init__(self, verdict: ValidationVerdict):
        self.verdict = verdict
        super().__init__(verdict.reason or "Transcription rejected")

"""Infrastructure interface exports."""

from .feedback_generator import FeedbackGenerator
from .transcription_service import TranscriptionService

__all__ = ["FeedbackGenerator", "TranscriptionService"]

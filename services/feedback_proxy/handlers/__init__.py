"""Handler exports."""

from .feedback_handler import FeedbackHandler
from .transcription_handler import TranscriptionHandler

__all__ = ["FeedbackHandler", "TranscriptionHandler"]

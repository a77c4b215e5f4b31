"""Infrastructure interface exports."""

from .audio_encoder import AudioEncoder
from .feedback_service import FeedbackService
from .microphone import Microphone, MicrophoneStream
from .transcription_service import TranscriptionService

__all__ = [
    "AudioEncoder",
    "FeedbackService",
    "Microphone",
    "MicrophoneStream",
    "TranscriptionService",
]

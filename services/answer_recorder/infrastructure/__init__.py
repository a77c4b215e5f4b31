"""Infrastructure exports."""

from .audio_encoder import DEFAULT_PREFERENCES, PydubAudioEncoder
from .feedback_client import FeedbackClient, classify_feedback_failure
from .interfaces import (
    AudioEncoder,
    FeedbackService,
    Microphone,
    MicrophoneStream,
    TranscriptionService,
)
from .transcription_client import TranscriptionClient

__all__ = [
    "AudioEncoder",
    "DEFAULT_PREFERENCES",
    "FeedbackClient",
    "FeedbackService",
    "Microphone",
    "MicrophoneStream",
    "PydubAudioEncoder",
    "TranscriptionClient",
    "TranscriptionService",
    "classify_feedback_failure",
]

"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .gemini_feedback import GeminiFeedbackGenerator
from .mock_services import MockFeedbackGenerator, MockTranscriptionService

__all__ = [
    "AssemblyAITranscriber",
    "GeminiFeedbackGenerator",
    "MockFeedbackGenerator",
    "MockTranscriptionService",
]

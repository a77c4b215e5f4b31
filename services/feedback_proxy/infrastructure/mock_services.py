"""Labeled stand-ins used when a provider credential is not configured."""

from pathlib import Path

from interview_common.logging import setup_logging

from feedback_proxy.domain.models import (
    BuiltPrompt,
    GeneratedFeedback,
    TranscriptionOutcome,
)

from .interfaces import FeedbackGenerator, TranscriptionService

logger = setup_logging()

MOCK_MODEL = "mock"

MOCK_TRANSCRIPT = (
    "[MOCK TRANSCRIPTION] The transcription credential is not configured on "
    "the server, so this placeholder answer stands in for your recording. "
    "Set ASSEMBLYAI_API_KEY to receive a real transcript of what you said."
)

MOCK_FEEDBACK = """[MOCK FEEDBACK] This is simulated feedback because the \
feedback credential is not configured on the server.

## Overall Score
**Final Score:** N/A (mock)

## STAR Analysis
Set GEMINI_API_KEY to receive a real analysis of your situation, task, action and result.

## Principles & Skills
No assessment is available in mock mode.

## Improvement Suggestions
No suggestions are available in mock mode.

## Summary
The pipeline ran end-to-end without calling a language model.
"""


class MockTranscriptionService(TranscriptionService):
    """Returns a fixed, clearly labeled transcript."""

    def transcribe(self, audio_path: Path) -> TranscriptionOutcome:
        logger.warning(
            "Transcription credential not configured, returning mock transcript",
            extra={"file_name": audio_path.name},
        )
        return TranscriptionOutcome(text=MOCK_TRANSCRIPT, mock=True)


class MockFeedbackGenerator(FeedbackGenerator):
    """Returns fixed, clearly labeled feedback carrying every section marker."""

    def generate(self, prompt: BuiltPrompt) -> GeneratedFeedback:
        logger.warning(
            "Feedback credential not configured, returning mock feedback",
            extra={"profile": prompt.profile},
        )
        return GeneratedFeedback(content=MOCK_FEEDBACK, model=MOCK_MODEL, mock=True)

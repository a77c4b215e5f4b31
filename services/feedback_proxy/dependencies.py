"""FastAPI dependency injection configuration."""

import assemblyai as aai
from google import genai
from interview_common import AnswerValidator
from interview_common.logging import setup_logging

from feedback_proxy.config import load_config
from feedback_proxy.domain import PromptBuilder, load_profiles
from feedback_proxy.handlers import FeedbackHandler, TranscriptionHandler
from feedback_proxy.infrastructure import (
    AssemblyAITranscriber,
    GeminiFeedbackGenerator,
    MockFeedbackGenerator,
    MockTranscriptionService,
)
from feedback_proxy.infrastructure.interfaces import (
    FeedbackGenerator,
    TranscriptionService,
)

logger = setup_logging()

_config = load_config()

# AssemblyAI transcription
_transcription_service: TranscriptionService
if _config.assemblyai.configured:
    aai.settings.api_key = _config.assemblyai.api_key
    _aai_config = aai.TranscriptionConfig(
        speech_model=(
            aai.SpeechModel(_config.assemblyai.speech_model)
            if _config.assemblyai.speech_model
            else None
        )
    )
    _transcription_service = AssemblyAITranscriber(aai.Transcriber(config=_aai_config))
else:
    logger.warning("ASSEMBLYAI_API_KEY is not set, transcription runs in mock mode")
    _transcription_service = MockTranscriptionService()

_transcription_fallback = (
    MockTranscriptionService()
    if _config.assemblyai.configured and _config.assemblyai.fallback_to_mock_on_error
    else None
)

# Gemini feedback
_feedback_generator: FeedbackGenerator
if _config.gemini.configured:
    _gemini_client = genai.Client(api_key=_config.gemini.api_key)
    _feedback_generator = GeminiFeedbackGenerator(
        _gemini_client,
        _config.gemini.model_name,
        _config.gemini.temperature,
        _config.gemini.max_output_tokens,
    )
else:
    logger.warning("GEMINI_API_KEY is not set, feedback runs in mock mode")
    _feedback_generator = MockFeedbackGenerator()

# Prompt profiles
_prompt_builder = PromptBuilder(
    load_profiles(_config.feedback.prompts_dir),
    _config.feedback.default_profile,
)

_validator = (
    AnswerValidator(_config.feedback.answer_gate)
    if _config.feedback.enforce_answer_gate
    else None
)

# Service composition
_transcription_handler = TranscriptionHandler(
    _transcription_service, _transcription_fallback
)
_feedback_handler = FeedbackHandler(_feedback_generator, _prompt_builder, _validator)


def get_transcription_handler() -> TranscriptionHandler:
    """Returns the configured transcription handler."""
    return _transcription_handler


def get_feedback_handler() -> FeedbackHandler:
    """Returns the configured feedback handler."""
    return _feedback_handler


def get_provider_status() -> dict[str, bool]:
    """Reports which operations answer with mock payloads."""
    return {
        "transcription_mock": not _config.assemblyai.configured,
        "feedback_mock": not _config.gemini.configured,
    }

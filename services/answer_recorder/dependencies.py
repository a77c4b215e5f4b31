"""Composition root for the answer-recorder client."""

import httpx
from interview_common import AnswerValidator
from interview_common.logging import setup_logging

from answer_recorder.config import AppConfig
from answer_recorder.domain.audio_capture import AudioCapture
from answer_recorder.domain.pipeline_controller import PipelineController
from answer_recorder.infrastructure import (
    FeedbackClient,
    PydubAudioEncoder,
    TranscriptionClient,
)
from answer_recorder.infrastructure.interfaces import Microphone

logger = setup_logging()


def get_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Returns an HTTP client bound to the proxy base URL."""
    return httpx.AsyncClient(base_url=config.proxy.base_url, timeout=httpx.Timeout(60.0))


def get_microphone(config: AppConfig) -> Microphone:
    """Returns the sounddevice microphone for the configured input device."""
    # PortAudio is only loaded when the microphone is first opened
    from answer_recorder.infrastructure.sounddevice_microphone import SoundDeviceMicrophone

    return SoundDeviceMicrophone(
        sample_rate=config.capture.sample_rate,
        channels=config.capture.channels,
        device=config.capture.input_device,
    )


def build_controller(
    config: AppConfig,
    http_client: httpx.AsyncClient,
    microphone: Microphone | None = None,
) -> PipelineController:
    """Wires capture, proxy clients and the answer gate into a controller."""
    capture = AudioCapture(
        microphone or get_microphone(config),
        PydubAudioEncoder(),
        max_duration_seconds=config.capture.max_duration_seconds,
    )
    transcription = TranscriptionClient(
        http_client,
        path=config.proxy.transcribe_path,
        retry_policy=config.retry,
    )
    feedback = FeedbackClient(
        http_client,
        path=config.proxy.feedback_path,
        timeout_seconds=config.proxy.feedback_timeout_seconds,
        default_profile=config.proxy.feedback_profile,
    )
    logger.info("Pipeline configured", extra={"proxy_base_url": config.proxy.base_url})
    return PipelineController(
        capture,
        transcription,
        feedback,
        AnswerValidator(config.answer_gate),
    )

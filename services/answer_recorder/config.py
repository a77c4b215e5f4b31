"""Client configuration loaded from environment variables."""

import os

from interview_common import AnswerGateConfig, load_answer_gate_config
from pydantic import BaseModel, Field


class RetryPolicy(BaseModel, frozen=True):
    """Bounded retry schedule for transcription uploads."""

    max_attempts: int = Field(default=3, ge=1)
    delay_seconds: float = Field(default=2.0, ge=0)
    deadline_seconds: float = Field(default=180.0, gt=0)


class ProxyConfig(BaseModel, frozen=True):
    """Location of the feedback proxy and per-call limits."""

    base_url: str = "http://localhost:3001"
    transcribe_path: str = "/api/transcribe"
    feedback_path: str = "/api/feedback"
    feedback_timeout_seconds: float = 120.0
    feedback_profile: str | None = None


class CaptureConfig(BaseModel, frozen=True):
    """Microphone capture parameters."""

    max_duration_seconds: int = Field(default=300, ge=1)
    sample_rate: int = 16000
    channels: int = 1
    input_device: str | None = None


class AppConfig(BaseModel, frozen=True):
    """Root client configuration."""

    proxy: ProxyConfig
    retry: RetryPolicy
    capture: CaptureConfig
    answer_gate: AnswerGateConfig


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        proxy=ProxyConfig(
            base_url=os.getenv("PROXY_BASE_URL", "http://localhost:3001"),
            feedback_timeout_seconds=float(os.getenv("FEEDBACK_TIMEOUT_SECONDS", "120")),
            feedback_profile=os.getenv("FEEDBACK_PROFILE") or None,
        ),
        retry=RetryPolicy(
            max_attempts=int(os.getenv("TRANSCRIBE_MAX_ATTEMPTS", "3")),
            delay_seconds=float(os.getenv("TRANSCRIBE_RETRY_DELAY_SECONDS", "2")),
            deadline_seconds=float(os.getenv("TRANSCRIBE_DEADLINE_SECONDS", "180")),
        ),
        capture=CaptureConfig(
            max_duration_seconds=int(os.getenv("RECORDING_MAX_SECONDS", "300")),
            sample_rate=int(os.getenv("AUDIO_SAMPLE_RATE", "16000")),
            input_device=os.getenv("AUDIO_INPUT_DEVICE") or None,
        ),
        answer_gate=load_answer_gate_config(),
    )

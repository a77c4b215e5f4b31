"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from interview_common import AnswerGateConfig, load_answer_gate_config
from pydantic import BaseModel, computed_field


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    speech_model: str | None = None
    fallback_to_mock_on_error: bool = False

    @computed_field
    @property
    def configured(self) -> bool:
        """True when a credential is present."""
        return bool(self.api_key.strip())


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"
    temperature: float = 0.2
    max_output_tokens: int = 4000

    @computed_field
    @property
    def configured(self) -> bool:
        """True when a credential is present."""
        return bool(self.api_key.strip())


class FeedbackConfig(BaseModel, frozen=True):
    """Feedback prompt and gating configuration."""

    default_profile: str = "amazon_pm"
    prompts_dir: Path = Path(__file__).parent / "prompts"
    enforce_answer_gate: bool = True
    answer_gate: AnswerGateConfig = AnswerGateConfig()


class ServerConfig(BaseModel, frozen=True):
    """HTTP server binding."""

    host: str = "0.0.0.0"
    port: int = 3001


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    assemblyai: AssemblyAIConfig
    gemini: GeminiConfig
    feedback: FeedbackConfig
    server: ServerConfig


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            speech_model=os.getenv("ASSEMBLYAI_SPEECH_MODEL") or None,
            fallback_to_mock_on_error=_env_bool("TRANSCRIPTION_MOCK_ON_ERROR", False),
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
            temperature=float(os.getenv("GEMINI_TEMPERATURE", "0.2")),
            max_output_tokens=int(os.getenv("GEMINI_MAX_OUTPUT_TOKENS", "4000")),
        ),
        feedback=FeedbackConfig(
            default_profile=os.getenv("FEEDBACK_DEFAULT_PROFILE", "amazon_pm"),
            enforce_answer_gate=_env_bool("FEEDBACK_ENFORCE_ANSWER_GATE", True),
            answer_gate=load_answer_gate_config(),
        ),
        server=ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
        ),
    )

"""Shared configuration models."""

import os

from pydantic import BaseModel, Field


class AnswerGateConfig(BaseModel, frozen=True):
    """Thresholds a transcript must meet before feedback is requested."""

    min_words: int = Field(default=20, ge=1)
    min_unique_words: int = Field(default=5, ge=1)


def load_answer_gate_config() -> AnswerGateConfig:
    """Loads the answer gate thresholds from environment variables."""
    return AnswerGateConfig(
        min_words=int(os.getenv("ANSWER_MIN_WORDS", "20")),
        min_unique_words=int(os.getenv("ANSWER_MIN_UNIQUE_WORDS", "5")),
    )

"""Domain layer exports."""

from .models import (
    BuiltPrompt,
    FeedbackRequest,
    GeneratedFeedback,
    TranscriptionOutcome,
)
from .prompt_profiles import PromptBuilder, PromptProfile, load_profiles
from .upstream_errors import classify_upstream_failure

__all__ = [
    "BuiltPrompt",
    "FeedbackRequest",
    "GeneratedFeedback",
    "TranscriptionOutcome",
    "PromptBuilder",
    "PromptProfile",
    "load_profiles",
    "classify_upstream_failure",
]

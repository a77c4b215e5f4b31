"""Domain models for the feedback proxy."""

from pydantic import BaseModel, ConfigDict, Field


class FeedbackRequest(BaseModel):
    """Incoming feedback request body."""

    model_config = ConfigDict(populate_by_name=True)

    transcription: str | None = None
    question: str | None = None
    feedback_type: str | None = Field(default=None, alias="feedbackType")


class BuiltPrompt(BaseModel, frozen=True):
    """A profile-specific prompt ready to send to the language model."""

    profile: str
    system_instruction: str
    user_prompt: str


class GeneratedFeedback(BaseModel, frozen=True):
    """Feedback text returned by a generator."""

    content: str
    model: str
    finish_reason: str = "stop"
    mock: bool = False


class TranscriptionOutcome(BaseModel, frozen=True):
    """Text returned by a transcription service."""

    text: str
    mock: bool = False

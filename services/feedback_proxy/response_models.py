"""Response models for the feedback-proxy API."""

from pydantic import BaseModel


class TranscriptionResponse(BaseModel):
    """Transcribed text, flagged when it comes from the mock service."""

    text: str
    mock: bool = False


class ChatMessage(BaseModel):
    role: str = "assistant"
    content: str


class ChatChoice(BaseModel):
    index: int = 0
    message: ChatMessage
    finish_reason: str = "stop"


class FeedbackResponse(BaseModel):
    """Feedback in the chat-completion shape clients key off."""

    id: str
    object: str = "chat.completion"
    model: str
    mock: bool = False
    choices: list[ChatChoice]


class ErrorResponse(BaseModel):
    """Error body returned for every non-success response."""

    error: str
    code: str | None = None
    details: str | None = None


class HealthResponse(BaseModel):
    status: str
    transcription_mock: bool
    feedback_mock: bool

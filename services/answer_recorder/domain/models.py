"""Domain models for the answer-recorder pipeline."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

from interview_common import ReportSection, ValidationVerdict, split_sections
from interview_common.logging import setup_logging
from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from answer_recorder.infrastructure.interfaces import MicrophoneStream

logger = setup_logging()


def _new_id() -> str:
    return uuid.uuid4().hex


class EncodingOption(BaseModel, frozen=True):
    """One audio encoding the capture may negotiate."""

    mime_type: str
    container: str
    codec: str | None = None
    file_extension: str


class AudioArtifact(BaseModel, frozen=True):
    """A finalized, encoded recording."""

    id: str = Field(default_factory=_new_id)
    session_id: str
    data: bytes
    mime_type: str
    duration_estimate: float
    file_name: str


class TranscriptResult(BaseModel, frozen=True):
    """Non-empty text transcribed from an artifact."""

    id: str = Field(default_factory=_new_id)
    text: str = Field(min_length=1)
    source_artifact_id: str


class FeedbackReport(BaseModel, frozen=True):
    """Structured critique returned for one transcript."""

    id: str = Field(default_factory=_new_id)
    raw_markup_text: str
    source_transcript_id: str
    question: str
    profile: str | None = None
    mock: bool = False

    def sections(self) -> dict[ReportSection, str]:
        """Splits the markup at the stable section markers."""
        return split_sections(self.raw_markup_text)


class RetryAttempt(BaseModel, frozen=True):
    """A failed attempt that will be retried after a delay."""

    attempt_number: int
    cause: str
    next_delay_ms: int


class RecordingState(str, Enum):
    ACTIVE = "active"
    FINALIZING = "finalizing"
    RELEASED = "released"


@dataclass
class RecordingSession:
    """
    One bounded recording window.

    Owns the open microphone stream and the PCM chunks captured so far.
    ``release()`` closes the stream and is safe to call more than once.
    """

    max_duration_seconds: int
    encoding: EncodingOption
    stream: "MicrophoneStream | None" = None
    id: str = field(default_factory=_new_id)
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    elapsed_seconds: int = 0
    state: RecordingState = RecordingState.ACTIVE
    chunks: list[bytes] = field(default_factory=list)

    def append(self, chunk: bytes) -> None:
        if self.state is RecordingState.ACTIVE and chunk:
            self.chunks.append(chunk)

    def pcm(self) -> bytes:
        return b"".join(self.chunks)

    def release(self) -> None:
        stream, self.stream = self.stream, None
        self.state = RecordingState.RELEASED
        if stream is None:
            return
        try:
            stream.close()
        except Exception:
            logger.exception("Failed to release microphone", extra={"session_id": self.id})


class PipelineState(str, Enum):
    IDLE = "idle"
    RECORDING = "recording"
    FINALIZING = "finalizing"
    TRANSCRIBING = "transcribing"
    VALIDATING = "validating"
    READY_FOR_FEEDBACK = "ready_for_feedback"
    REJECTED = "rejected"
    GENERATING_FEEDBACK = "generating_feedback"
    COMPLETE = "complete"
    FAILED = "failed"


class PipelineFailure(BaseModel):
    """The stage a session failed in and the error that caused it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    stage: PipelineState
    cause: Exception

    @property
    def message(self) -> str:
        return str(self.cause)


class PipelineSnapshot(BaseModel, frozen=True):
    """Read-only view of the pipeline for UI consumers."""

    state: PipelineState
    session_id: str | None = None
    elapsed_seconds: int = 0
    artifact: AudioArtifact | None = None
    transcript: TranscriptResult | None = None
    verdict: ValidationVerdict | None = None
    report: FeedbackReport | None = None
    failure: PipelineFailure | None = None

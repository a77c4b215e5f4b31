"""Events the pipeline delivers to its subscribers."""

from pydantic import BaseModel

from .models import AudioArtifact, PipelineState, RetryAttempt


class StateChanged(BaseModel, frozen=True):
    session_id: str | None
    previous: PipelineState
    current: PipelineState


class ElapsedTick(BaseModel, frozen=True):
    session_id: str
    elapsed_seconds: int


class DurationLimitReached(BaseModel, frozen=True):
    """Notice that a session hit the recording cap and was auto-stopped."""

    session_id: str
    elapsed_seconds: int
    artifact: AudioArtifact


class RetryScheduled(BaseModel, frozen=True):
    session_id: str
    attempt: RetryAttempt


PipelineEvent = StateChanged | ElapsedTick | DurationLimitReached | RetryScheduled

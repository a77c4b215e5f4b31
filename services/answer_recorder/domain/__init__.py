"""Domain layer exports."""

from .events import (
    DurationLimitReached,
    ElapsedTick,
    PipelineEvent,
    RetryScheduled,
    StateChanged,
)
from .models import (
    AudioArtifact,
    EncodingOption,
    FeedbackReport,
    PipelineFailure,
    PipelineSnapshot,
    PipelineState,
    RecordingSession,
    RecordingState,
    RetryAttempt,
    TranscriptResult,
)

__all__ = [
    "AudioArtifact",
    "DurationLimitReached",
    "ElapsedTick",
    "EncodingOption",
    "FeedbackReport",
    "PipelineEvent",
    "PipelineFailure",
    "PipelineSnapshot",
    "PipelineState",
    "RecordingSession",
    "RecordingState",
    "RetryAttempt",
    "StateChanged",
    "TranscriptResult",
]

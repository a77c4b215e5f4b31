"""Abstract interface for remote transcription."""

from abc import ABC, abstractmethod
from typing import Callable

from answer_recorder.domain.models import AudioArtifact, RetryAttempt, TranscriptResult


class TranscriptionService(ABC):
    @abstractmethod
    async def transcribe(
        self,
        artifact: AudioArtifact,
        on_retry: Callable[[RetryAttempt], None] | None = None,
    ) -> TranscriptResult:
        """
        Converts a finalized artifact into text.

        Args:
            artifact: The recording to upload.
            on_retry: Called with each RetryAttempt before its delay.

        Raises:
            TranscriptionFailed: If no non-empty text could be obtained.
        """
        pass

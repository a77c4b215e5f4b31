"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from feedback_proxy.domain.models import TranscriptionOutcome


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(self, audio_path: Path) -> TranscriptionOutcome:
        """
        Transcribes an audio file stored on local disk.

        Args:
            audio_path: Path to a temporary copy of the uploaded audio.

        Returns:
            TranscriptionOutcome with non-empty text.

        Raises:
            UpstreamError: If the provider call fails.
        """
        pass

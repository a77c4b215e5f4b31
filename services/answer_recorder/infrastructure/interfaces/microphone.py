"""Abstract interface for microphone access."""

from abc import ABC, abstractmethod
from typing import Callable


class MicrophoneStream(ABC):
    """An open, exclusively held input stream producing 16-bit PCM."""

    sample_rate: int
    channels: int
    sample_width: int = 2

    @abstractmethod
    def close(self) -> None:
        """Stops the stream and releases the device."""
        pass


class Microphone(ABC):
    """Abstract base class for audio input backends."""

    @abstractmethod
    async def open(self, on_chunk: Callable[[bytes], None]) -> MicrophoneStream:
        """
        Acquires the input device and starts streaming PCM chunks.

        ``on_chunk`` is always invoked on the event loop thread.

        Raises:
            ClientCaptureError: If the device cannot be acquired.
        """
        pass

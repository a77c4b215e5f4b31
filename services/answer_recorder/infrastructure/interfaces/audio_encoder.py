"""Abstract interface for audio encoding."""

from abc import ABC, abstractmethod

from answer_recorder.domain.models import EncodingOption


class AudioEncoder(ABC):
    """Turns raw PCM into an uploadable container format."""

    @abstractmethod
    def negotiate(self) -> EncodingOption:
        """Returns the first supported option in preference order."""
        pass

    @abstractmethod
    def encode(
        self,
        pcm: bytes,
        option: EncodingOption,
        sample_rate: int,
        channels: int,
        sample_width: int,
    ) -> bytes:
        """Encodes 16-bit little-endian PCM with the negotiated option."""
        pass

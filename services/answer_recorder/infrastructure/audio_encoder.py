"""pydub/ffmpeg implementation of the AudioEncoder interface."""

import io
import subprocess
import wave
from typing import Iterable

from interview_common.logging import setup_logging
from pydub import AudioSegment
from pydub.utils import which

from answer_recorder.domain.models import EncodingOption
from answer_recorder.exceptions import UnsupportedEnvironment

from .interfaces import AudioEncoder

logger = setup_logging()

WEBM_OPUS = EncodingOption(
    mime_type="audio/webm;codecs=opus",
    container="webm",
    codec="libopus",
    file_extension=".webm",
)
WEBM = EncodingOption(mime_type="audio/webm", container="webm", file_extension=".webm")
WAV = EncodingOption(mime_type="audio/wav", container="wav", file_extension=".wav")

DEFAULT_PREFERENCES = (WEBM_OPUS, WEBM, WAV)

# ffmpeg picks one of these for a webm container when no codec is named
WEBM_AUDIO_ENCODERS = ("libopus", "libvorbis")


class PydubAudioEncoder(AudioEncoder):
    """
    Encodes recordings as opus-in-webm when ffmpeg allows it.

    Options are probed in preference order: webm with libopus, webm with
    ffmpeg's default codec, then plain WAV written with the ``wave`` module,
    which needs no external tools.
    """

    def __init__(
        self,
        preferences: Iterable[EncodingOption] = DEFAULT_PREFERENCES,
        ffmpeg_path: str | None = None,
    ):
        self._preferences = tuple(preferences)
        self._ffmpeg = ffmpeg_path or which("ffmpeg")
        self._encoders: set[str] | None = None

    def supports(self, option: EncodingOption) -> bool:
        if option.container == "wav":
            return True
        if not self._ffmpeg:
            return False
        if option.codec is None:
            available = self._available_encoders()
            return any(name in available for name in WEBM_AUDIO_ENCODERS)
        return option.codec in self._available_encoders()

    def negotiate(self) -> EncodingOption:
        for option in self._preferences:
            if self.supports(option):
                logger.info("Audio encoding negotiated", extra={"mime_type": option.mime_type})
                return option
        raise UnsupportedEnvironment(
            "None of the preferred audio encodings is supported: "
            + ", ".join(option.mime_type for option in self._preferences)
        )

    def encode(
        self,
        pcm: bytes,
        option: EncodingOption,
        sample_rate: int,
        channels: int,
        sample_width: int,
    ) -> bytes:
        if option.container == "wav":
            return _pcm_to_wav(pcm, sample_rate, channels, sample_width)

        segment = AudioSegment(
            data=pcm,
            sample_width=sample_width,
            frame_rate=sample_rate,
            channels=channels,
        )
        buffer = io.BytesIO()
        segment.export(buffer, format=option.container, codec=option.codec)
        return buffer.getvalue()

    def _available_encoders(self) -> set[str]:
        if self._encoders is None:
            try:
                result = subprocess.run(
                    [self._ffmpeg, "-hide_banner", "-encoders"],
                    capture_output=True,
                    text=True,
                    timeout=10,
                    check=False,
                )
            except (OSError, subprocess.SubprocessError) as e:
                logger.warning("ffmpeg encoder probe failed", extra={"error": str(e)})
                self._encoders = set()
            else:
                self._encoders = {
                    parts[1]
                    for parts in (line.split() for line in result.stdout.splitlines())
                    if len(parts) >= 2
                }
        return self._encoders


def _pcm_to_wav(pcm: bytes, sample_rate: int, channels: int, sample_width: int) -> bytes:
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buffer.getvalue()

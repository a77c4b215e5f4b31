"""sounddevice implementation of the Microphone interface."""

import asyncio
from typing import Callable

import numpy as np
from interview_common.logging import setup_logging

from answer_recorder.exceptions import (
    ClientCaptureError,
    DeviceBusy,
    DeviceNotFound,
    PermissionDenied,
    UnsupportedEnvironment,
)

from .interfaces import Microphone, MicrophoneStream

logger = setup_logging()

# PortAudio error codes
PA_INVALID_CHANNEL_COUNT = -9998
PA_INVALID_DEVICE = -9996
PA_DEVICE_UNAVAILABLE = -9985


def _load_sounddevice():
    # sounddevice raises OSError at import when the PortAudio library is missing
    try:
        import sounddevice
    except OSError as e:
        raise UnsupportedEnvironment(f"PortAudio is not available: {e}") from e
    return sounddevice


def _map_portaudio_error(error: Exception) -> ClientCaptureError:
    message = str(error)
    lowered = message.lower()
    code = error.args[1] if len(error.args) > 1 else None

    if "permission" in lowered or "not authorized" in lowered:
        return PermissionDenied(message)
    if code in (PA_INVALID_DEVICE, PA_INVALID_CHANNEL_COUNT) or any(
        hint in lowered for hint in ("invalid device", "no default input", "no input device")
    ):
        return DeviceNotFound(message)
    if code == PA_DEVICE_UNAVAILABLE or "unavailable" in lowered or "busy" in lowered:
        return DeviceBusy(message)
    return UnsupportedEnvironment(message)


class SoundDeviceStream(MicrophoneStream):
    """An open sounddevice InputStream."""

    def __init__(self, stream, sample_rate: int, channels: int):
        self._stream = stream
        self.sample_rate = sample_rate
        self.channels = channels

    def close(self) -> None:
        try:
            self._stream.stop()
        finally:
            self._stream.close()
        logger.info("Microphone released")


class SoundDeviceMicrophone(Microphone):
    """Captures 16-bit PCM from a PortAudio input device."""

    def __init__(
        self,
        sample_rate: int = 16000,
        channels: int = 1,
        device: str | None = None,
        blocksize: int = 1600,
    ):
        self._sample_rate = sample_rate
        self._channels = channels
        self._device = int(device) if device and device.isdigit() else device
        self._blocksize = blocksize

    async def open(self, on_chunk: Callable[[bytes], None]) -> MicrophoneStream:
        sd = _load_sounddevice()
        loop = asyncio.get_running_loop()

        def callback(indata, _frames, _time_info, status):
            if status:
                logger.debug("Input stream status", extra={"status": str(status)})
            pcm16 = np.clip(indata * 32768.0, -32768, 32767).astype(np.int16)
            try:
                loop.call_soon_threadsafe(on_chunk, pcm16.tobytes())
            except RuntimeError:
                raise sd.CallbackStop()

        def start_stream():
            stream = sd.InputStream(
                samplerate=self._sample_rate,
                channels=self._channels,
                dtype="float32",
                blocksize=self._blocksize,
                device=self._device,
                callback=callback,
            )
            try:
                stream.start()
            except BaseException:
                stream.close()
                raise
            return stream

        try:
            stream = await asyncio.to_thread(start_stream)
        except sd.PortAudioError as e:
            logger.exception("Failed to open microphone", extra={"device": self._device})
            raise _map_portaudio_error(e) from e
        except ValueError as e:
            # query_devices raises ValueError when no device matches
            logger.exception("Failed to open microphone", extra={"device": self._device})
            raise DeviceNotFound(str(e)) from e

        logger.info(
            "Microphone acquired",
            extra={"device": self._device, "sample_rate": self._sample_rate},
        )
        return SoundDeviceStream(stream, self._sample_rate, self._channels)

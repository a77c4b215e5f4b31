"""Bounded microphone capture with a single owner at a time."""

import asyncio
from typing import Callable

from interview_common.logging import setup_logging

from answer_recorder.exceptions import CaptureNotActive, DeviceBusy
from answer_recorder.infrastructure.interfaces import AudioEncoder, Microphone

from .events import DurationLimitReached
from .models import AudioArtifact, RecordingSession, RecordingState

logger = setup_logging()


class AudioCapture:
    """
    Owns the microphone for one RecordingSession at a time.

    A ticker advances ``elapsed_seconds`` once per tick and stops the session
    itself when the cap is reached; a manual ``stop()`` racing that auto-stop
    shares the same finalization, so only one artifact is produced and the
    microphone is released exactly once. An auto-stopped finalization stays
    shared until the limit notice has been delivered, so a ``stop()`` landing
    in between still receives the artifact.
    """

    def __init__(
        self,
        microphone: Microphone,
        encoder: AudioEncoder,
        max_duration_seconds: int = 300,
        tick_seconds: float = 1.0,
    ):
        self._microphone = microphone
        self._encoder = encoder
        self._max_duration_seconds = max_duration_seconds
        self._tick_seconds = tick_seconds
        self._session: RecordingSession | None = None
        self._ticker: asyncio.Task | None = None
        self._finalizing: asyncio.Task | None = None
        self._opening = False
        # auto-stop finalization kept until the limit notice is delivered
        self._held: asyncio.Task | None = None

    @property
    def session(self) -> RecordingSession | None:
        return self._session

    @property
    def active(self) -> bool:
        return self._opening or self._session is not None or self._finalizing is not None

    async def start(
        self,
        on_tick: Callable[[int], None] | None = None,
        on_limit: Callable[[DurationLimitReached], None] | None = None,
        on_error: Callable[[Exception], None] | None = None,
    ) -> RecordingSession:
        """
        Acquires the microphone and begins a new session.

        Raises:
            DeviceBusy: If a session is already recording or finalizing.
            ClientCaptureError: If the microphone cannot be acquired.
        """
        if self.active:
            raise DeviceBusy("A recording session is already active")

        encoding = self._encoder.negotiate()
        session = RecordingSession(
            max_duration_seconds=self._max_duration_seconds,
            encoding=encoding,
        )
        self._opening = True
        try:
            session.stream = await self._microphone.open(session.append)
        finally:
            self._opening = False
        self._session = session

        logger.info(
            "Recording started",
            extra={
                "session_id": session.id,
                "mime_type": encoding.mime_type,
                "max_duration_seconds": session.max_duration_seconds,
            },
        )
        self._ticker = asyncio.create_task(self._tick(session, on_tick, on_limit, on_error))
        return session

    async def stop(self) -> AudioArtifact:
        """
        Finalizes the active session into an artifact.

        Concurrent callers await the same finalization.

        Raises:
            CaptureNotActive: If there is nothing to stop.
        """
        if self._finalizing is None:
            session = self._session
            if session is None:
                raise CaptureNotActive()
            auto_stop = self._ticker is not None and self._ticker is asyncio.current_task()
            self._cancel_ticker()
            session.state = RecordingState.FINALIZING
            self._finalizing = asyncio.ensure_future(self._finalize(session))
            if auto_stop:
                self._held = self._finalizing
        return await asyncio.shield(self._finalizing)

    async def abort(self) -> None:
        """Releases the microphone and discards any captured audio."""
        self._cancel_ticker()

        finalizing = self._finalizing
        if finalizing is not None:
            await asyncio.wait([finalizing])
            if self._finalizing is finalizing:
                self._finalizing = None
            if not finalizing.cancelled() and finalizing.exception() is not None:
                logger.warning(
                    "Discarded recording failed to finalize",
                    extra={"error": str(finalizing.exception())},
                )
            return

        session, self._session = self._session, None
        if session is not None:
            session.release()
            logger.info("Recording aborted", extra={"session_id": session.id})

    async def _finalize(self, session: RecordingSession) -> AudioArtifact:
        stream = session.stream
        sample_rate = stream.sample_rate
        channels = stream.channels
        sample_width = stream.sample_width
        try:
            session.release()
            pcm = session.pcm()
            data = await asyncio.to_thread(
                self._encoder.encode,
                pcm,
                session.encoding,
                sample_rate,
                channels,
                sample_width,
            )
        except Exception:
            logger.exception("Failed to finalize recording", extra={"session_id": session.id})
            raise
        finally:
            self._session = None
            if self._held is None or self._held is not self._finalizing:
                self._finalizing = None

        artifact = AudioArtifact(
            session_id=session.id,
            data=data,
            mime_type=session.encoding.mime_type,
            duration_estimate=len(pcm) / (sample_rate * channels * sample_width),
            file_name=f"recording{session.encoding.file_extension}",
        )
        logger.info(
            "Recording finalized",
            extra={
                "session_id": session.id,
                "bytes": len(data),
                "duration_estimate": round(artifact.duration_estimate, 2),
            },
        )
        return artifact

    async def _tick(
        self,
        session: RecordingSession,
        on_tick: Callable[[int], None] | None,
        on_limit: Callable[[DurationLimitReached], None] | None,
        on_error: Callable[[Exception], None] | None,
    ) -> None:
        while True:
            await asyncio.sleep(self._tick_seconds)
            if session.state is not RecordingState.ACTIVE:
                return

            session.elapsed_seconds += 1
            if on_tick is not None:
                on_tick(session.elapsed_seconds)

            if session.elapsed_seconds >= session.max_duration_seconds:
                logger.info(
                    "Recording duration limit reached",
                    extra={"session_id": session.id, "elapsed_seconds": session.elapsed_seconds},
                )
                try:
                    artifact = await self.stop()
                except Exception as e:
                    if on_error is not None:
                        on_error(e)
                    return
                else:
                    if on_limit is not None:
                        on_limit(
                            DurationLimitReached(
                                session_id=session.id,
                                elapsed_seconds=session.elapsed_seconds,
                                artifact=artifact,
                            )
                        )
                    return
                finally:
                    self._release_held()

    def _release_held(self) -> None:
        held, self._held = self._held, None
        if held is not None and held.done() and self._finalizing is held:
            self._finalizing = None

    def _cancel_ticker(self) -> None:
        ticker, self._ticker = self._ticker, None
        if ticker is not None and ticker is not asyncio.current_task():
            ticker.cancel()

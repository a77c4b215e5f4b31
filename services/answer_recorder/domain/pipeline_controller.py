"""State machine sequencing capture, transcription, validation and feedback."""

import asyncio
import uuid
from functools import partial
from typing import Callable

from interview_common import AnswerValidator, ValidationVerdict
from interview_common.logging import setup_logging

from answer_recorder.exceptions import InvalidTransition
from answer_recorder.infrastructure.interfaces import FeedbackService, TranscriptionService

from .audio_capture import AudioCapture
from .events import (
    DurationLimitReached,
    ElapsedTick,
    PipelineEvent,
    RetryScheduled,
    StateChanged,
)
from .models import (
    AudioArtifact,
    FeedbackReport,
    PipelineFailure,
    PipelineSnapshot,
    PipelineState,
    RetryAttempt,
    TranscriptResult,
)

logger = setup_logging()

Listener = Callable[[PipelineEvent], None]


class PipelineController:
    """
    Drives one answer at a time from recording to feedback.

    Every piece of background work is tagged with the session id it was
    started for. A completion that arrives after ``start()`` has begun a new
    session is discarded, and the task behind it has already been cancelled.
    """

    def __init__(
        self,
        capture: AudioCapture,
        transcription_service: TranscriptionService,
        feedback_service: FeedbackService,
        validator: AnswerValidator | None = None,
    ):
        self._capture = capture
        self._transcription = transcription_service
        self._feedback = feedback_service
        self._validator = validator or AnswerValidator()
        self._lock = asyncio.Lock()
        self._listeners: list[Listener] = []
        self._task: asyncio.Task | None = None
        self._state = PipelineState.IDLE
        self._reset(None)

    @property
    def state(self) -> PipelineState:
        return self._state

    @property
    def snapshot(self) -> PipelineSnapshot:
        return PipelineSnapshot(
            state=self._state,
            session_id=self._session_id,
            elapsed_seconds=self._elapsed_seconds,
            artifact=self._artifact,
            transcript=self._transcript,
            verdict=self._verdict,
            report=self._report,
            failure=self._failure,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Registers a listener and returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> None:
        """Cancels any in-flight work and begins recording a new answer."""
        async with self._lock:
            await self._teardown()
            session_id = uuid.uuid4().hex
            self._reset(session_id)
            try:
                await self._capture.start(
                    on_tick=partial(self._on_tick, session_id),
                    on_limit=partial(self._on_limit, session_id),
                    on_error=partial(self._on_capture_error, session_id),
                )
            except Exception as e:
                self._fail(PipelineState.RECORDING, e)
                return
            logger.info("Pipeline session started", extra={"session_id": session_id})
            self._transition(PipelineState.RECORDING)

    async def stop(self) -> None:
        """Ends recording and begins transcription. Ignored unless recording."""
        async with self._lock:
            if self._state is not PipelineState.RECORDING:
                logger.info("Stop ignored", extra={"state": self._state.value})
                return

            session_id = self._session_id
            self._transition(PipelineState.FINALIZING)
            try:
                artifact = await self._capture.stop()
            except Exception as e:
                if self._is_current(session_id):
                    self._fail(PipelineState.FINALIZING, e)
                return

            if self._is_current(session_id):
                self._begin_transcription(session_id, artifact)

    async def request_feedback(self, question: str, profile: str | None = None) -> None:
        """
        Requests a critique of the accepted transcript.

        Raises:
            InvalidTransition: If the transcript has not passed validation.
        """
        async with self._lock:
            if self._state is not PipelineState.READY_FOR_FEEDBACK:
                raise InvalidTransition("request feedback", self._state.value)

            session_id = self._session_id
            self._transition(PipelineState.GENERATING_FEEDBACK)
            self._task = asyncio.create_task(
                self._generate_feedback(session_id, self._transcript, question, profile)
            )

    async def join(self) -> PipelineSnapshot:
        """Waits for the current background step and returns the snapshot."""
        task = self._task
        if task is not None:
            await asyncio.wait([task])
        return self.snapshot

    async def shutdown(self) -> None:
        """Cancels everything, releases the microphone and returns to idle."""
        async with self._lock:
            await self._teardown()
            self._reset(None)
            self._transition(PipelineState.IDLE)

    async def _teardown(self) -> None:
        # invalidates callbacks still in flight for the previous session
        self._session_id = None

        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            await asyncio.wait([task])
            logger.info("Cancelled in-flight pipeline work")

        await self._capture.abort()

    def _reset(self, session_id: str | None) -> None:
        self._session_id = session_id
        self._elapsed_seconds = 0
        self._artifact: AudioArtifact | None = None
        self._transcript: TranscriptResult | None = None
        self._verdict: ValidationVerdict | None = None
        self._report: FeedbackReport | None = None
        self._failure: PipelineFailure | None = None

    def _is_current(self, session_id: str | None) -> bool:
        return session_id is not None and session_id == self._session_id

    def _begin_transcription(self, session_id: str, artifact: AudioArtifact) -> None:
        self._artifact = artifact
        self._transition(PipelineState.TRANSCRIBING)
        self._task = asyncio.create_task(self._transcribe(session_id, artifact))

    async def _transcribe(self, session_id: str, artifact: AudioArtifact) -> None:
        try:
            transcript = await self._transcription.transcribe(
                artifact, on_retry=partial(self._on_retry, session_id)
            )
        except Exception as e:
            if self._is_current(session_id):
                self._fail(PipelineState.TRANSCRIBING, e)
            return

        if not self._is_current(session_id):
            return

        self._transcript = transcript
        self._transition(PipelineState.VALIDATING)
        verdict = self._validator.validate(transcript.text)
        self._verdict = verdict

        if verdict.passed:
            self._transition(PipelineState.READY_FOR_FEEDBACK)
        else:
            logger.info(
                "Answer rejected",
                extra={
                    "session_id": session_id,
                    "word_count": verdict.word_count,
                    "unique_word_count": verdict.unique_word_count,
                },
            )
            self._transition(PipelineState.REJECTED)

    async def _generate_feedback(
        self,
        session_id: str,
        transcript: TranscriptResult,
        question: str,
        profile: str | None,
    ) -> None:
        try:
            report = await self._feedback.request_feedback(transcript, question, profile)
        except Exception as e:
            if self._is_current(session_id):
                self._fail(PipelineState.GENERATING_FEEDBACK, e)
            return

        if self._is_current(session_id):
            self._report = report
            self._transition(PipelineState.COMPLETE)

    def _on_tick(self, session_id: str, elapsed_seconds: int) -> None:
        if self._is_current(session_id):
            self._elapsed_seconds = elapsed_seconds
            self._emit(ElapsedTick(session_id=session_id, elapsed_seconds=elapsed_seconds))

    def _on_limit(self, session_id: str, notice: DurationLimitReached) -> None:
        if not self._is_current(session_id) or self._state is not PipelineState.RECORDING:
            return
        self._elapsed_seconds = notice.elapsed_seconds
        self._emit(notice)
        self._transition(PipelineState.FINALIZING)
        self._begin_transcription(session_id, notice.artifact)

    def _on_capture_error(self, session_id: str, error: Exception) -> None:
        if self._is_current(session_id) and self._state is PipelineState.RECORDING:
            self._fail(PipelineState.FINALIZING, error)

    def _on_retry(self, session_id: str, attempt: RetryAttempt) -> None:
        if self._is_current(session_id):
            self._emit(RetryScheduled(session_id=session_id, attempt=attempt))

    def _fail(self, stage: PipelineState, cause: Exception) -> None:
        self._failure = PipelineFailure(stage=stage, cause=cause)
        logger.error(
            "Pipeline failed",
            extra={
                "session_id": self._session_id,
                "stage": stage.value,
                "error_type": type(cause).__name__,
                "error": str(cause),
            },
        )
        self._transition(PipelineState.FAILED)

    def _transition(self, state: PipelineState) -> None:
        previous, self._state = self._state, state
        if previous is not state:
            self._emit(StateChanged(session_id=self._session_id, previous=previous, current=state))

    def _emit(self, event: PipelineEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Pipeline listener failed", extra={"event": type(event).__name__})

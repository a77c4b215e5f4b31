"""Shared fakes and fixtures for the recorder and proxy tests."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from answer_recorder.domain.audio_capture import AudioCapture
from answer_recorder.domain.models import TranscriptResult, FeedbackReport
from answer_recorder.infrastructure.audio_encoder import WAV
from answer_recorder.infrastructure.interfaces import (
    AudioEncoder,
    FeedbackService,
    Microphone,
    MicrophoneStream,
    TranscriptionService,
)
from feedback_proxy.app import create_app

GOOD_ANSWER = (
    "In my last role I owned the checkout roadmap. Conversion dropped four "
    "percent after a redesign, so I pulled funnel data, interviewed ten "
    "customers, and found the new address form confused mobile users. We "
    "shipped a fix within two weeks and recovered the loss."
)

CHUNK = b"\x01\x00" * 1600


class FakeStream(MicrophoneStream):
    def __init__(self, sample_rate: int = 16000, channels: int = 1):
        self.sample_rate = sample_rate
        self.channels = channels
        self.close_count = 0

    @property
    def closed(self) -> bool:
        return self.close_count > 0

    def close(self) -> None:
        self.close_count += 1


class FakeMicrophone(Microphone):
    """Delivers one chunk on open, or raises the configured error."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.streams: list[FakeStream] = []
        self.on_chunk = None

    async def open(self, on_chunk):
        if self.error is not None:
            raise self.error
        self.on_chunk = on_chunk
        on_chunk(CHUNK)
        stream = FakeStream()
        self.streams.append(stream)
        return stream


class FakeEncoder(AudioEncoder):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.negotiations = 0
        self.encodings = 0

    def negotiate(self):
        self.negotiations += 1
        return WAV

    def encode(self, pcm, option, sample_rate, channels, sample_width):
        self.encodings += 1
        if self.error is not None:
            raise self.error
        return b"ENCODED" + pcm


class FakeTranscriptionService(TranscriptionService):
    def __init__(self, text: str = GOOD_ANSWER, error: Exception | None = None, retries: list | None = None):
        self.text = text
        self.error = error
        self.retries = retries or []
        self.calls = []

    async def transcribe(self, artifact, on_retry=None):
        self.calls.append(artifact)
        for attempt in self.retries:
            if on_retry is not None:
                on_retry(attempt)
        if self.error is not None:
            raise self.error
        return TranscriptResult(text=self.text, source_artifact_id=artifact.id)


class FakeFeedbackService(FeedbackService):
    def __init__(self, content: str = "## Summary\nSolid answer.", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls = []

    async def request_feedback(self, transcript, question, profile=None):
        self.calls.append((transcript, question, profile))
        if self.error is not None:
            raise self.error
        return FeedbackReport(
            raw_markup_text=self.content,
            source_transcript_id=transcript.id,
            question=question,
            profile=profile,
        )


class BlockingFeedbackService(FeedbackService):
    """Never answers; records whether it was cancelled."""

    def __init__(self):
        self.started = asyncio.Event()
        self.cancelled = False

    async def request_feedback(self, transcript, question, profile=None):
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.cancelled = True
            raise


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Polls until predicate() is true or fails the test."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            pytest.fail("condition not reached in time")
        await asyncio.sleep(0.005)


def make_capture(
    microphone: Microphone | None = None,
    encoder: AudioEncoder | None = None,
    max_duration_seconds: int = 300,
    tick_seconds: float = 10.0,
) -> AudioCapture:
    return AudioCapture(
        microphone or FakeMicrophone(),
        encoder or FakeEncoder(),
        max_duration_seconds=max_duration_seconds,
        tick_seconds=tick_seconds,
    )


@pytest.fixture
def proxy_app():
    """Proxy application with dependency overrides cleared afterwards."""
    app = create_app()
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def proxy_client(proxy_app):
    return TestClient(proxy_app)


class StubbornFeedbackService(FeedbackService):
    """Ignores cancellation and answers anyway."""

    def __init__(self):
        self.started = asyncio.Event()
        self.swallowed_cancel = False

    async def request_feedback(self, transcript, question, profile=None):
        self.started.set()
        try:
            await asyncio.sleep(3600)
        except asyncio.CancelledError:
            self.swallowed_cancel = True
        return FeedbackReport(
            raw_markup_text="## Summary\nStale answer.",
            source_transcript_id=transcript.id,
            question=question,
        )

"""Client and proxy exercised together over an in-process ASGI transport."""

import asyncio

import httpx
import pytest
from interview_common import AnswerValidator, ReportSection

from answer_recorder.config import RetryPolicy
from answer_recorder.domain import PipelineState
from answer_recorder.domain.pipeline_controller import PipelineController
from answer_recorder.exceptions import UpstreamRateLimited
from answer_recorder.infrastructure import FeedbackClient, TranscriptionClient
from answer_recorder.domain.models import TranscriptResult
from feedback_proxy.config import FeedbackConfig
from feedback_proxy.dependencies import get_feedback_handler, get_transcription_handler
from feedback_proxy.domain import PromptBuilder, load_profiles
from feedback_proxy.exceptions import UpstreamRateLimitError
from feedback_proxy.handlers import FeedbackHandler, TranscriptionHandler
from feedback_proxy.infrastructure import MockFeedbackGenerator, MockTranscriptionService
from feedback_proxy.infrastructure.interfaces import FeedbackGenerator

from conftest import GOOD_ANSWER, FakeMicrophone, make_capture


class RateLimitedGenerator(FeedbackGenerator):
    def generate(self, prompt):
        raise UpstreamRateLimitError("Gemini", "Resource has been exhausted", 429)


@pytest.fixture
def mock_proxy(proxy_app):
    """Proxy wired to the labeled mock providers."""

    def install(generator=None):
        builder = PromptBuilder(load_profiles(FeedbackConfig().prompts_dir), "amazon_pm")
        transcription = TranscriptionHandler(MockTranscriptionService())
        feedback = FeedbackHandler(generator or MockFeedbackGenerator(), builder, AnswerValidator())
        proxy_app.dependency_overrides[get_transcription_handler] = lambda: transcription
        proxy_app.dependency_overrides[get_feedback_handler] = lambda: feedback
        return proxy_app

    return install


def asgi_client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://proxy")


class TestEndToEnd:
    def test_rate_limited_feedback_reaches_the_client(self, mock_proxy):
        app = mock_proxy(RateLimitedGenerator())
        transcript = TranscriptResult(text=GOOD_ANSWER, source_artifact_id="a1")

        async def scenario():
            async with asgi_client(app) as http_client:
                await FeedbackClient(http_client).request_feedback(transcript, "Q")

        with pytest.raises(UpstreamRateLimited) as exc_info:
            asyncio.run(scenario())

        assert exc_info.value.http_status == 429

    def test_mock_mode_runs_the_whole_pipeline(self, mock_proxy):
        app = mock_proxy()

        async def scenario():
            async with asgi_client(app) as http_client:
                controller = PipelineController(
                    make_capture(FakeMicrophone()),
                    TranscriptionClient(http_client, retry_policy=RetryPolicy(delay_seconds=0)),
                    FeedbackClient(http_client, default_profile="amazon_pm"),
                )
                await controller.start()
                await controller.stop()
                ready = await controller.join()
                await controller.request_feedback("Tell me about a launch.")
                done = await controller.join()
                return ready, done

        ready, done = asyncio.run(scenario())

        assert ready.state is PipelineState.READY_FOR_FEEDBACK
        assert ready.transcript.text.startswith("[MOCK TRANSCRIPTION]")
        assert done.state is PipelineState.COMPLETE
        assert done.report.mock is True
        assert set(done.report.sections()) == set(ReportSection)

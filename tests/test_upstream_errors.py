"""Tests for upstream failure classification and provider adapters."""

from pathlib import Path
from types import SimpleNamespace

import assemblyai as aai
import pytest
from google.genai import errors as genai_errors

from feedback_proxy.domain import BuiltPrompt, classify_upstream_failure
from feedback_proxy.exceptions import (
    UpstreamAuthError,
    UpstreamRateLimitError,
    UpstreamServiceError,
)
from feedback_proxy.infrastructure import AssemblyAITranscriber, GeminiFeedbackGenerator

PROMPT = BuiltPrompt(profile="generic", system_instruction="Coach.", user_prompt="Answer.")


class TestClassifyUpstreamFailure:
    @pytest.mark.parametrize(
        "status_code, message, expected",
        [
            (401, "Unauthorized", UpstreamAuthError),
            (403, "Forbidden", UpstreamAuthError),
            (None, "Invalid API key provided", UpstreamAuthError),
            (400, "API_KEY_INVALID: API key not valid", UpstreamAuthError),
            (429, "Too Many Requests", UpstreamRateLimitError),
            (429, "Rate limit exceeded for this API key", UpstreamRateLimitError),
            (403, "Quota check denied", UpstreamAuthError),
            (None, "You exceeded your current quota", UpstreamRateLimitError),
            (None, "RESOURCE_EXHAUSTED", UpstreamRateLimitError),
            (500, "Internal error", UpstreamServiceError),
            (None, "Audio file could not be decoded", UpstreamServiceError),
        ],
    )
    def test_classification(self, status_code, message, expected):
        error = classify_upstream_failure("Provider", message, status_code)

        assert type(error) is expected
        assert error.status_code == status_code
        assert message in str(error)

    def test_keeps_cause(self):
        cause = RuntimeError("boom")

        error = classify_upstream_failure("Provider", "boom", cause=cause)

        assert error.cause is cause


class FakeTranscriber:
    def __init__(self, transcript=None, error=None):
        self.transcript = transcript
        self.error = error
        self.paths = []

    def transcribe(self, path):
        self.paths.append(path)
        if self.error is not None:
            raise self.error
        return self.transcript


class TestAssemblyAITranscriber:
    def test_returns_text(self):
        transcript = SimpleNamespace(
            id="t1", status=aai.TranscriptStatus.completed, text="Hello there.", error=None
        )
        transcriber = FakeTranscriber(transcript)

        outcome = AssemblyAITranscriber(transcriber).transcribe(Path("/tmp/a.webm"))

        assert outcome.text == "Hello there."
        assert outcome.mock is False
        assert transcriber.paths == ["/tmp/a.webm"]

    def test_error_status_is_classified(self):
        transcript = SimpleNamespace(
            id="t1", status=aai.TranscriptStatus.error, text=None, error="Invalid API key"
        )

        with pytest.raises(UpstreamAuthError):
            AssemblyAITranscriber(FakeTranscriber(transcript)).transcribe(Path("/tmp/a.webm"))

    def test_empty_text_is_a_service_error(self):
        transcript = SimpleNamespace(
            id="t1", status=aai.TranscriptStatus.completed, text="", error=None
        )

        with pytest.raises(UpstreamServiceError):
            AssemblyAITranscriber(FakeTranscriber(transcript)).transcribe(Path("/tmp/a.webm"))

    def test_raised_exception_is_classified(self):
        transcriber = FakeTranscriber(error=RuntimeError("rate limit exceeded"))

        with pytest.raises(UpstreamRateLimitError) as exc_info:
            AssemblyAITranscriber(transcriber).transcribe(Path("/tmp/a.webm"))

        assert isinstance(exc_info.value.cause, RuntimeError)


class FakeModels:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


def make_generator(models: FakeModels) -> GeminiFeedbackGenerator:
    return GeminiFeedbackGenerator(
        SimpleNamespace(models=models), "gemini-2.5-flash", 0.2, 4000
    )


class TestGeminiFeedbackGenerator:
    def test_sends_prompt_and_settings(self):
        response = SimpleNamespace(
            text="## Summary\nGood.",
            candidates=[SimpleNamespace(finish_reason=SimpleNamespace(name="STOP"))],
        )
        models = FakeModels(response)

        feedback = make_generator(models).generate(PROMPT)

        assert feedback.content == "## Summary\nGood."
        assert feedback.model == "gemini-2.5-flash"
        assert feedback.finish_reason == "stop"
        call = models.calls[0]
        assert call["contents"] == "Answer."
        assert call["config"]["system_instruction"] == "Coach."
        assert call["config"]["temperature"] == 0.2
        assert call["config"]["max_output_tokens"] == 4000

    def test_rate_limit(self):
        error = genai_errors.ClientError(
            429,
            {"error": {"code": 429, "message": "Resource has been exhausted", "status": "RESOURCE_EXHAUSTED"}},
        )

        with pytest.raises(UpstreamRateLimitError):
            make_generator(FakeModels(error=error)).generate(PROMPT)

    def test_invalid_key(self):
        error = genai_errors.ClientError(
            400,
            {"error": {"code": 400, "message": "API key not valid. Please pass a valid API key.", "status": "INVALID_ARGUMENT"}},
        )

        with pytest.raises(UpstreamAuthError):
            make_generator(FakeModels(error=error)).generate(PROMPT)

    def test_empty_response(self):
        response = SimpleNamespace(text="", candidates=[])

        with pytest.raises(UpstreamServiceError):
            make_generator(FakeModels(response)).generate(PROMPT)

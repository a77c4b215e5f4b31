"""Tests for the feedback client and its failure classification."""

import asyncio
import json

import httpx
import pytest

from answer_recorder.domain.models import TranscriptResult
from answer_recorder.exceptions import UpstreamAuthError, UpstreamOther, UpstreamRateLimited
from answer_recorder.infrastructure import FeedbackClient

TRANSCRIPT = TranscriptResult(text="I led the checkout redesign.", source_artifact_id="a1")


def chat_completion(content: str, mock: bool = False) -> dict:
    return {
        "id": "feedback-1",
        "object": "chat.completion",
        "model": "mock" if mock else "gemini-2.5-flash",
        "mock": mock,
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
        ],
    }


def run_request(handler, default_profile=None, profile=None):
    async def scenario():
        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, base_url="http://proxy") as http_client:
            client = FeedbackClient(http_client, default_profile=default_profile)
            return await client.request_feedback(TRANSCRIPT, "Tell me about a launch.", profile)

    return asyncio.run(scenario())


class TestFeedbackClient:
    def test_success(self):
        payloads = []

        def handler(request):
            payloads.append(json.loads(request.content))
            return httpx.Response(200, json=chat_completion("## Summary\nGood.", mock=True))

        report = run_request(handler, default_profile="amazon_pm")

        assert report.raw_markup_text == "## Summary\nGood."
        assert report.source_transcript_id == TRANSCRIPT.id
        assert report.mock is True
        assert report.profile == "amazon_pm"
        assert payloads == [
            {
                "transcription": "I led the checkout redesign.",
                "question": "Tell me about a launch.",
                "feedbackType": "amazon_pm",
            }
        ]

    def test_profile_omitted_when_unset(self):
        payloads = []

        def handler(request):
            payloads.append(json.loads(request.content))
            return httpx.Response(200, json=chat_completion("## Summary\nGood."))

        run_request(handler)

        assert "feedbackType" not in payloads[0]

    @pytest.mark.parametrize(
        "status, body, expected",
        [
            (429, {"error": "AI provider rate limit exceeded.", "code": "upstream_rate_limited"}, UpstreamRateLimited),
            (429, {}, UpstreamRateLimited),
            (500, {"error": "Authentication error with AI provider.", "code": "upstream_auth"}, UpstreamAuthError),
            (401, {}, UpstreamAuthError),
            (502, {"error": "Failed to generate feedback", "code": "upstream_error"}, UpstreamOther),
            (500, {"error": "Failed to generate feedback", "code": "internal_error"}, UpstreamOther),
            (400, {"error": "Transcription too short or repetitive", "code": "answer_rejected"}, UpstreamOther),
        ],
    )
    def test_failure_classification(self, status, body, expected):
        def handler(request):
            return httpx.Response(status, json=body)

        with pytest.raises(expected) as exc_info:
            run_request(handler)

        assert exc_info.value.http_status == status

    def test_other_failure_passes_message_through(self):
        def handler(request):
            return httpx.Response(502, json={"error": "Failed to generate feedback", "details": "Gemini: boom"})

        with pytest.raises(UpstreamOther, match="Gemini: boom"):
            run_request(handler)

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UpstreamOther) as exc_info:
            run_request(handler)

        assert exc_info.value.http_status is None

    def test_malformed_success_body(self):
        def handler(request):
            return httpx.Response(200, json={"choices": []})

        with pytest.raises(UpstreamOther):
            run_request(handler)

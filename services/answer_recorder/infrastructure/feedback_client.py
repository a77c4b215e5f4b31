"""httpx client for the proxy's feedback endpoint."""

import httpx
from interview_common.logging import setup_logging

from answer_recorder.domain.models import FeedbackReport, TranscriptResult
from answer_recorder.exceptions import (
    FeedbackFailed,
    UpstreamAuthError,
    UpstreamOther,
    UpstreamRateLimited,
)

from .interfaces import FeedbackService

logger = setup_logging()


class FeedbackClient(FeedbackService):
    """Requests feedback once, with no retry, and classifies failures."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        path: str = "/api/feedback",
        timeout_seconds: float = 120.0,
        default_profile: str | None = None,
    ):
        self._client = http_client
        self._path = path
        self._timeout = timeout_seconds
        self._default_profile = default_profile

    async def request_feedback(
        self,
        transcript: TranscriptResult,
        question: str,
        profile: str | None = None,
    ) -> FeedbackReport:
        profile = profile or self._default_profile
        payload = {"transcription": transcript.text, "question": question}
        if profile:
            payload["feedbackType"] = profile

        try:
            response = await self._client.post(self._path, json=payload, timeout=self._timeout)
        except httpx.HTTPError as e:
            logger.exception("Feedback request failed", extra={"transcript_id": transcript.id})
            raise UpstreamOther(None, f"Could not reach feedback service: {e}") from e

        if not response.is_success:
            error = classify_feedback_failure(response)
            logger.error(
                "Feedback request rejected",
                extra={"status_code": response.status_code, "error_type": type(error).__name__},
            )
            raise error

        body = _json_body(response)
        content = _extract_content(body)
        if not content:
            raise UpstreamOther(response.status_code, "Feedback response contained no content")

        logger.info(
            "Feedback received",
            extra={"transcript_id": transcript.id, "model": body.get("model"), "mock": bool(body.get("mock"))},
        )
        return FeedbackReport(
            raw_markup_text=content,
            source_transcript_id=transcript.id,
            question=question,
            profile=profile,
            mock=bool(body.get("mock")),
        )


def classify_feedback_failure(response: httpx.Response) -> FeedbackFailed:
    """Maps a failed feedback response to auth, rate-limit or other."""
    body = _json_body(response)
    code = body.get("code")
    message = body.get("error") or response.text or response.reason_phrase
    status = response.status_code

    if code == "upstream_auth" or status in (401, 403):
        return UpstreamAuthError(status, message)
    if code == "upstream_rate_limited" or status == 429:
        return UpstreamRateLimited(status, message)
    if body.get("details"):
        message = f"{message}: {body['details']}"
    return UpstreamOther(status, message)


def _json_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _extract_content(body: dict) -> str | None:
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) and content.strip() else None

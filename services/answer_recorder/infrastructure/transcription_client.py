"""httpx client for the proxy's transcription endpoint."""

import asyncio
from dataclasses import dataclass
from typing import Callable

import httpx
from interview_common.logging import setup_logging

from answer_recorder.config import RetryPolicy
from answer_recorder.domain.models import AudioArtifact, RetryAttempt, TranscriptResult
from answer_recorder.exceptions import TranscriptionFailed, TranscriptionFailureCause

from .interfaces import TranscriptionService

logger = setup_logging()


@dataclass
class _CallProgress:
    attempts: int = 0


class TranscriptionClient(TranscriptionService):
    """
    Uploads an artifact to the proxy under a bounded retry policy.

    Transport errors and non-2xx responses consume an attempt and are retried
    after a fixed delay. A 2xx response without text fails immediately. The
    whole call, delays included, is bounded by the policy's deadline.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        path: str = "/api/transcribe",
        retry_policy: RetryPolicy | None = None,
    ):
        self._client = http_client
        self._path = path
        self._policy = retry_policy or RetryPolicy()

    async def transcribe(
        self,
        artifact: AudioArtifact,
        on_retry: Callable[[RetryAttempt], None] | None = None,
    ) -> TranscriptResult:
        progress = _CallProgress()
        try:
            return await asyncio.wait_for(
                self._attempt_all(artifact, progress, on_retry),
                timeout=self._policy.deadline_seconds,
            )
        except asyncio.TimeoutError as e:
            logger.error(
                "Transcription deadline exceeded",
                extra={"artifact_id": artifact.id, "attempts": progress.attempts},
            )
            raise TranscriptionFailed(
                TranscriptionFailureCause.DEADLINE_EXCEEDED,
                f"No transcript within {self._policy.deadline_seconds:g}s",
                attempts=progress.attempts,
            ) from e

    async def _attempt_all(
        self,
        artifact: AudioArtifact,
        progress: _CallProgress,
        on_retry: Callable[[RetryAttempt], None] | None,
    ) -> TranscriptResult:
        failure: TranscriptionFailed | None = None

        for attempt in range(1, self._policy.max_attempts + 1):
            progress.attempts = attempt
            try:
                response = await self._client.post(
                    self._path,
                    files={"file": (artifact.file_name, artifact.data, artifact.mime_type)},
                )
            except httpx.HTTPError as e:
                logger.warning(
                    "Transcription request failed",
                    extra={"attempt": attempt, "error": str(e) or type(e).__name__},
                )
                failure = TranscriptionFailed(
                    TranscriptionFailureCause.TRANSPORT,
                    str(e) or type(e).__name__,
                    attempts=attempt,
                )
            else:
                if response.is_success:
                    text = _extract_text(response)
                    if not text:
                        logger.error("Transcription returned no text", extra={"attempt": attempt})
                        raise TranscriptionFailed(
                            TranscriptionFailureCause.EMPTY_RESULT,
                            "Response contained no text",
                            http_status=response.status_code,
                            attempts=attempt,
                        )
                    logger.info(
                        "Transcription received",
                        extra={"artifact_id": artifact.id, "attempt": attempt, "characters": len(text)},
                    )
                    return TranscriptResult(text=text, source_artifact_id=artifact.id)

                logger.warning(
                    "Transcription request rejected",
                    extra={"attempt": attempt, "status_code": response.status_code},
                )
                failure = TranscriptionFailed(
                    TranscriptionFailureCause.HTTP_STATUS,
                    _error_message(response),
                    http_status=response.status_code,
                    attempts=attempt,
                )

            if attempt < self._policy.max_attempts:
                retry = RetryAttempt(
                    attempt_number=attempt,
                    cause=str(failure),
                    next_delay_ms=int(self._policy.delay_seconds * 1000),
                )
                logger.info("Retrying transcription", extra=retry.model_dump())
                if on_retry is not None:
                    on_retry(retry)
                await asyncio.sleep(self._policy.delay_seconds)

        raise failure


def _json_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _extract_text(response: httpx.Response) -> str | None:
    text = _json_body(response).get("text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return None


def _error_message(response: httpx.Response) -> str:
    body = _json_body(response)
    message = body.get("error") or response.text[:200] or response.reason_phrase
    if body.get("details"):
        message = f"{message}: {body['details']}"
    return f"HTTP {response.status_code}: {message}"

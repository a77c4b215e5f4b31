"""AssemblyAI implementation of the TranscriptionService interface."""

from pathlib import Path

import assemblyai as aai
from interview_common.logging import setup_logging

from feedback_proxy.domain.models import TranscriptionOutcome
from feedback_proxy.domain.upstream_errors import classify_upstream_failure
from feedback_proxy.exceptions import UpstreamError, UpstreamServiceError

from .interfaces import TranscriptionService

logger = setup_logging()

PROVIDER = "AssemblyAI"


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    def transcribe(self, audio_path: Path) -> TranscriptionOutcome:
        """
        Uploads the file to AssemblyAI and waits for the finished transcript.

        Provider errors are classified into auth, rate-limit and other
        failures so the route can answer with a distinct status for each.
        """
        try:
            transcript = self._transcriber.transcribe(str(audio_path))

            if transcript.status == aai.TranscriptStatus.error:
                raise classify_upstream_failure(
                    PROVIDER, transcript.error or "Transcription failed"
                )

            if not transcript.text:
                raise UpstreamServiceError(PROVIDER, "Transcription returned no text")

            logger.info(
                "Audio transcription successful",
                extra={"transcript_id": transcript.id, "characters": len(transcript.text)},
            )
            return TranscriptionOutcome(text=transcript.text)

        except UpstreamError:
            logger.exception("AssemblyAI transcription failed")
            raise
        except Exception as e:
            logger.exception("AssemblyAI transcription failed")
            raise classify_upstream_failure(
                PROVIDER, str(e), getattr(e, "status_code", None), e
            ) from e

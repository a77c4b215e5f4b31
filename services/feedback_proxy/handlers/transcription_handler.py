"""Handler for proxying audio transcription requests."""

import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from interview_common.logging import setup_logging

from feedback_proxy.domain import TranscriptionOutcome
from feedback_proxy.exceptions import UpstreamError
from feedback_proxy.infrastructure.interfaces import TranscriptionService

logger = setup_logging()

DEFAULT_SUFFIX = ".webm"


class TranscriptionHandler:
    """Stages an uploaded file on disk and forwards it for transcription."""

    def __init__(
        self,
        transcription_service: TranscriptionService,
        fallback_service: TranscriptionService | None = None,
    ):
        self._transcription_service = transcription_service
        self._fallback_service = fallback_service

    def process(self, file_name: str | None, data: BinaryIO) -> TranscriptionOutcome:
        """
        Transcribes an uploaded audio stream.

        The upload is copied into a named temporary file which is removed
        when the ``with`` block exits, on success, upstream error and any
        other exception alike.

        Args:
            file_name: Client-supplied file name, used only for its suffix.
            data: The uploaded file stream.

        Returns:
            TranscriptionOutcome from the provider, or from the fallback
            service when one is configured and the provider fails.

        Raises:
            UpstreamError: If the provider fails and no fallback is set.
        """
        suffix = Path(file_name or "").suffix or DEFAULT_SUFFIX

        with tempfile.NamedTemporaryFile(suffix=suffix, delete=True) as temp_file:
            shutil.copyfileobj(data, temp_file)
            temp_file.flush()
            audio_path = Path(temp_file.name)

            logger.info(
                "Audio staged for transcription",
                extra={"file_name": file_name, "bytes": temp_file.tell()},
            )

            try:
                return self._transcription_service.transcribe(audio_path)
            except UpstreamError as e:
                if self._fallback_service is None:
                    raise
                logger.warning(
                    "Transcription failed, falling back to mock response",
                    extra={"error": str(e)},
                )
                return self._fallback_service.transcribe(audio_path)

"""Audio transcription endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile
from interview_common.logging import setup_logging

from feedback_proxy.dependencies import get_transcription_handler
from feedback_proxy.exceptions import UpstreamError
from feedback_proxy.handlers import TranscriptionHandler
from feedback_proxy.response_models import ErrorResponse, TranscriptionResponse

from .errors import error_response, upstream_error_response

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["transcription"])

TranscriptionHandlerDep = Annotated[
    TranscriptionHandler, Depends(get_transcription_handler)
]

FAILURE_MESSAGE = "Failed to transcribe audio"


@router.post(
    "/transcribe",
    response_model=TranscriptionResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def transcribe_audio(
    handler: TranscriptionHandlerDep,
    file: UploadFile | None = File(None),
):
    """
    Transcribes one uploaded audio file.

    The upload is staged in a temporary file that is deleted before the
    response is sent.
    """
    logger.info("Transcribe request received")

    if file is None:
        logger.info("No file received")
        return error_response(400, "No audio file provided")

    logger.info(
        "File received",
        extra={"file_name": file.filename, "content_type": file.content_type},
    )

    try:
        outcome = handler.process(file.filename, file.file)
    except UpstreamError as e:
        return upstream_error_response(e, FAILURE_MESSAGE)
    except Exception as e:
        logger.exception("Transcription error")
        return error_response(500, FAILURE_MESSAGE, code="internal_error", details=str(e))

    return TranscriptionResponse(text=outcome.text, mock=outcome.mock)

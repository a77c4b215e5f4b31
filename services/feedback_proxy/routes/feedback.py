"""Interview feedback endpoint."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends
from interview_common import ValidationRejected
from interview_common.logging import setup_logging

from feedback_proxy.dependencies import get_feedback_handler
from feedback_proxy.domain import FeedbackRequest
from feedback_proxy.exceptions import UnknownFeedbackProfileError, UpstreamError
from feedback_proxy.handlers import FeedbackHandler
from feedback_proxy.response_models import (
    ChatChoice,
    ChatMessage,
    ErrorResponse,
    FeedbackResponse,
)

from .errors import error_response, upstream_error_response

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["feedback"])

FeedbackHandlerDep = Annotated[FeedbackHandler, Depends(get_feedback_handler)]

FAILURE_MESSAGE = "Failed to generate feedback"


@router.post(
    "/feedback",
    response_model=FeedbackResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
def generate_feedback(request: FeedbackRequest, handler: FeedbackHandlerDep):
    """
    Generates a structured critique of a transcribed answer.

    Trivial or repetitive answers are rejected before any upstream call.
    """
    logger.info("Feedback request received")

    if not request.transcription:
        logger.info("No transcription provided")
        return error_response(400, "No transcription provided")

    try:
        feedback = handler.process(
            request.transcription, request.question, request.feedback_type
        )
    except ValidationRejected as e:
        logger.info("Transcription too short or not diverse enough")
        return error_response(400, e.verdict.reason, code="answer_rejected")
    except UnknownFeedbackProfileError as e:
        return error_response(400, str(e), code="unknown_profile")
    except UpstreamError as e:
        return upstream_error_response(e, FAILURE_MESSAGE)
    except Exception as e:
        logger.exception("Feedback error")
        return error_response(500, FAILURE_MESSAGE, code="internal_error", details=str(e))

    return FeedbackResponse(
        id=f"feedback-{uuid.uuid4().hex}",
        model=feedback.model,
        mock=feedback.mock,
        choices=[
            ChatChoice(
                message=ChatMessage(content=feedback.content),
                finish_reason=feedback.finish_reason,
            )
        ],
    )

"""Abstract interface for remote feedback generation."""

from abc import ABC, abstractmethod

from answer_recorder.domain.models import FeedbackReport, TranscriptResult


class FeedbackService(ABC):
    @abstractmethod
    async def request_feedback(
        self,
        transcript: TranscriptResult,
        question: str,
        profile: str | None = None,
    ) -> FeedbackReport:
        """
        Requests a structured critique of a transcript.

        Raises:
            FeedbackFailed: If the endpoint answers with a failure.
        """
        pass

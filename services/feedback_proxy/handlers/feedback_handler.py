"""Handler for proxying feedback generation requests."""

from interview_common import AnswerValidator, ValidationRejected
from interview_common.logging import setup_logging

from feedback_proxy.domain import GeneratedFeedback, PromptBuilder
from feedback_proxy.infrastructure.interfaces import FeedbackGenerator

logger = setup_logging()


class FeedbackHandler:
    """Gates, builds and forwards a feedback request."""

    def __init__(
        self,
        generator: FeedbackGenerator,
        prompt_builder: PromptBuilder,
        validator: AnswerValidator | None = None,
    ):
        self._generator = generator
        self._prompt_builder = prompt_builder
        self._validator = validator

    def process(
        self, transcription: str, question: str | None, profile: str | None
    ) -> GeneratedFeedback:
        """
        Generates feedback for a transcript.

        Args:
            transcription: The candidate's transcribed answer.
            question: The interview question being answered.
            profile: Prompt profile key; the configured default when None.

        Returns:
            GeneratedFeedback from the language model.

        Raises:
            ValidationRejected: If the answer gate is enforced and fails.
            UnknownFeedbackProfileError: If the profile is not loaded.
            UpstreamError: If the language model call fails.
        """
        if self._validator is not None:
            verdict = self._validator.validate(transcription)
            logger.info(
                "Answer gate evaluated",
                extra={
                    "passed": verdict.passed,
                    "word_count": verdict.word_count,
                    "unique_word_count": verdict.unique_word_count,
                },
            )
            if not verdict.passed:
                raise ValidationRejected(verdict)

        prompt = self._prompt_builder.build(transcription, question, profile)

        logger.info(
            "Processing feedback",
            extra={"profile": prompt.profile, "question": question},
        )
        return self._generator.generate(prompt)

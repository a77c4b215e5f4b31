"""Answer-quality gate applied before spending a feedback request."""

import re

from interview_common.config import AnswerGateConfig
from interview_common.models import ValidationVerdict

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


class AnswerValidator:
    """Decides whether a transcript is substantial enough for feedback."""

    def __init__(self, config: AnswerGateConfig | None = None):
        self._config = config or AnswerGateConfig()

    def validate(self, text: str) -> ValidationVerdict:
        """
        Measures a transcript and returns the gate verdict.

        Tokens are whitespace-separated words. Unique words are counted after
        lower-casing and stripping every character outside ``[a-z0-9]``.

        Args:
            text: The transcript to measure.

        Returns:
            ValidationVerdict with both counts and, on failure, a reason that
            embeds them.
        """
        words = (text or "").split()
        word_count = len(words)
        unique_word_count = len(
            {_NON_ALPHANUMERIC.sub("", word.lower()) for word in words}
        )

        passed = (
            word_count >= self._config.min_words
            and unique_word_count >= self._config.min_unique_words
        )
        if passed:
            return ValidationVerdict(
                passed=True,
                word_count=word_count,
                unique_word_count=unique_word_count,
            )

        return ValidationVerdict(
            passed=False,
            word_count=word_count,
            unique_word_count=unique_word_count,
            reason=(
                f"Transcription too short or repetitive ({word_count} words, "
                f"{unique_word_count} unique). "
                "Please provide a more detailed response."
            ),
        )


def validate_answer(text: str) -> ValidationVerdict:
    """Validates a transcript against the default thresholds."""
    return AnswerValidator().validate(text)

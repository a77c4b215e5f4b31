"""Gemini implementation of the FeedbackGenerator interface."""

from google import genai
from google.genai import errors as genai_errors
from interview_common.logging import setup_logging

from feedback_proxy.domain.models import BuiltPrompt, GeneratedFeedback
from feedback_proxy.domain.upstream_errors import classify_upstream_failure
from feedback_proxy.exceptions import UpstreamServiceError

from .interfaces import FeedbackGenerator

logger = setup_logging()

PROVIDER = "Gemini"


class GeminiFeedbackGenerator(FeedbackGenerator):
    """Feedback generation using Google Gemini."""

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        temperature: float,
        max_output_tokens: int,
    ):
        self._client = client
        self._model_name = model_name
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens

    def generate(self, prompt: BuiltPrompt) -> GeneratedFeedback:
        """
        Sends the prompt to Gemini and returns the generated critique.

        Raises:
            UpstreamAuthError: If the API key is rejected.
            UpstreamRateLimitError: If Gemini throttles the request.
            UpstreamServiceError: For any other failure or an empty reply.
        """
        logger.info(
            "Requesting feedback",
            extra={
                "model": self._model_name,
                "profile": prompt.profile,
                "prompt_characters": len(prompt.user_prompt),
            },
        )
        try:
            response = self._client.models.generate_content(
                model=self._model_name,
                contents=prompt.user_prompt,
                config={
                    "system_instruction": prompt.system_instruction,
                    "temperature": self._temperature,
                    "max_output_tokens": self._max_output_tokens,
                },
            )
        except genai_errors.APIError as e:
            logger.exception(
                "Gemini API call failed",
                extra={"status_code": e.code, "status": e.status},
            )
            raise classify_upstream_failure(
                PROVIDER, e.message or str(e), e.code, e
            ) from e
        except Exception as e:
            logger.exception("Gemini API call failed")
            raise classify_upstream_failure(PROVIDER, str(e), None, e) from e

        if not response.text:
            logger.error("Gemini returned empty response")
            raise UpstreamServiceError(PROVIDER, "Gemini returned empty response")

        logger.info("Feedback generated", extra={"characters": len(response.text)})
        return GeneratedFeedback(
            content=response.text,
            model=self._model_name,
            finish_reason=_finish_reason(response),
        )


def _finish_reason(response) -> str:
    candidates = getattr(response, "candidates", None) or []
    reason = getattr(candidates[0], "finish_reason", None) if candidates else None
    if reason is None:
        return "stop"
    return str(getattr(reason, "name", reason)).lower()

"""Abstract interface for feedback generation."""

from abc import ABC, abstractmethod

from feedback_proxy.domain.models import BuiltPrompt, GeneratedFeedback


class FeedbackGenerator(ABC):
    """Abstract base class for language-model backends."""

    @abstractmethod
    def generate(self, prompt: BuiltPrompt) -> GeneratedFeedback:
        """
        Sends a built prompt to the model and returns its critique.

        Raises:
            UpstreamError: If the provider call fails.
        """
        pass

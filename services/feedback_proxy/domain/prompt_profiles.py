"""Prompt profiles that select the rubric used for feedback generation."""

from pathlib import Path
from string import Template

from interview_common import missing_sections
from interview_common.logging import setup_logging
from pydantic import BaseModel

from feedback_proxy.exceptions import PromptProfileError, UnknownFeedbackProfileError

from .models import BuiltPrompt

logger = setup_logging()

SYSTEM_SUFFIX = "_system.txt"
RUBRIC_SUFFIX = "_rubric.txt"
NO_QUESTION_PLACEHOLDER = "(no question provided)"


class PromptProfile(BaseModel, frozen=True):
    """A named system instruction and rubric template pair."""

    key: str
    system_instruction: str
    rubric_template: str


def load_profiles(prompts_dir: Path) -> dict[str, PromptProfile]:
    """
    Loads every profile found in a prompts directory.

    A profile is a ``<key>_system.txt`` file paired with a
    ``<key>_rubric.txt`` file. Rubrics must mention every report section
    marker so the model output stays machine-splittable.

    Raises:
        PromptProfileError: If a rubric lacks its system file or a marker.
    """
    profiles: dict[str, PromptProfile] = {}

    for rubric_path in sorted(prompts_dir.glob(f"*{RUBRIC_SUFFIX}")):
        key = rubric_path.name[: -len(RUBRIC_SUFFIX)]
        system_path = prompts_dir / f"{key}{SYSTEM_SUFFIX}"
        if not system_path.exists():
            raise PromptProfileError(key, f"missing {system_path.name}")

        rubric = rubric_path.read_text(encoding="utf-8")
        missing = missing_sections(rubric)
        if missing:
            raise PromptProfileError(
                key,
                "rubric lacks section markers: "
                + ", ".join(section.value for section in missing),
            )

        profiles[key] = PromptProfile(
            key=key,
            system_instruction=system_path.read_text(encoding="utf-8").strip(),
            rubric_template=rubric,
        )

    logger.info("Prompt profiles loaded", extra={"profiles": sorted(profiles)})
    return profiles


class PromptBuilder:
    """Builds the profile-specific prompt for a question and transcript."""

    def __init__(self, profiles: dict[str, PromptProfile], default_profile: str):
        if default_profile not in profiles:
            raise UnknownFeedbackProfileError(default_profile, list(profiles))
        self._profiles = profiles
        self._default_profile = default_profile

    @property
    def profiles(self) -> list[str]:
        return sorted(self._profiles)

    def build(
        self, transcription: str, question: str | None, profile: str | None = None
    ) -> BuiltPrompt:
        """
        Embeds the question and transcript verbatim into the profile rubric.

        Raises:
            UnknownFeedbackProfileError: If the profile is not loaded.
        """
        key = profile or self._default_profile
        selected = self._profiles.get(key)
        if selected is None:
            raise UnknownFeedbackProfileError(key, list(self._profiles))

        user_prompt = Template(selected.rubric_template).safe_substitute(
            question=question or NO_QUESTION_PLACEHOLDER,
            transcription=transcription,
        )
        return BuiltPrompt(
            profile=key,
            system_instruction=selected.system_instruction,
            user_prompt=user_prompt,
        )

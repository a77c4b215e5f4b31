"""Value types shared by the recorder and the proxy."""

from pydantic import BaseModel


class ValidationVerdict(BaseModel, frozen=True):
    """Outcome of running a transcript through the answer gate."""

    passed: bool
    word_count: int
    unique_word_count: int
    reason: str | None = None

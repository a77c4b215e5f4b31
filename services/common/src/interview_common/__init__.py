from interview_common.config import AnswerGateConfig, load_answer_gate_config
from interview_common.exceptions import ValidationRejected
from interview_common.logging import setup_logging
from interview_common.models import ValidationVerdict
from interview_common.report_sections import (
    ReportSection,
    missing_sections,
    split_sections,
)
from interview_common.validation import AnswerValidator, validate_answer

__all__ = [
    "setup_logging",
    "AnswerGateConfig",
    "load_answer_gate_config",
    "AnswerValidator",
    "validate_answer",
    "ValidationVerdict",
    "ValidationRejected",
    "ReportSection",
    "split_sections",
    "missing_sections",
]

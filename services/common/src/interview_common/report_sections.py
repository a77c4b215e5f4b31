"""Section markers every feedback report must carry."""

from enum import Enum


class ReportSection(str, Enum):
    """Level-2 headings that delimit the sections of a feedback report."""

    OVERALL_SCORE = "## Overall Score"
    STAR_ANALYSIS = "## STAR Analysis"
    PRINCIPLES_AND_SKILLS = "## Principles & Skills"
    IMPROVEMENT_SUGGESTIONS = "## Improvement Suggestions"
    SUMMARY = "## Summary"


def _marker_at(line: str) -> ReportSection | None:
    stripped = line.strip()
    for section in ReportSection:
        if stripped == section.value or stripped.startswith(section.value + " "):
            return section
    return None


def split_sections(markup: str) -> dict[ReportSection, str]:
    """
    Splits report markup into the body found under each known marker.

    Text before the first marker is ignored. A section runs until the next
    known marker, so nested headings stay inside their section.
    """
    sections: dict[ReportSection, list[str]] = {}
    current: ReportSection | None = None

    for line in markup.splitlines():
        marker = _marker_at(line)
        if marker is not None:
            current = marker
            sections.setdefault(current, [])
            continue
        if current is not None:
            sections[current].append(line)

    return {
        section: "\n".join(lines).strip("\n").strip()
        for section, lines in sections.items()
    }


def missing_sections(markup: str) -> list[ReportSection]:
    """Lists the markers absent from the markup, in contract order."""
    found = {_marker_at(line) for line in markup.splitlines()}
    return [section for section in ReportSection if section not in found]

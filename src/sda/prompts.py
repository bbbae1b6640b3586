"""Instruction templates for the four analysis types."""

from __future__ import annotations

from sda.errors import InvalidRequest
from sda.schemas.analysis import AnalysisType

REVIEW_PROMPT = """\
You are a senior software engineer. Perform a thorough code review of the \
following {language} code. Point out bugs, security issues, readability \
problems and deviations from idiomatic {language} style, and suggest a \
concrete fix for each finding."""

EXPLAIN_PROMPT = """\
You are a patient senior engineer mentoring a junior developer. Give a \
beginner-friendly walkthrough of the following {language} code: what it does, \
how the pieces fit together, and any {language} concepts a newcomer would need \
to follow it."""

OPTIMIZE_PROMPT = """\
You are a senior engineer specializing in performance. Suggest performance \
optimizations for the following {language} code. Call out algorithmic \
complexity, unnecessary allocations and I/O hot spots, and show the improved \
code where it helps."""

REFACTOR_PROMPT = """\
You are a senior engineer focused on maintainability. Produce a refactored \
version of the following {language} code that is cleaner and easier to test \
while keeping its behavior identical. Briefly list the changes you made."""

TEMPLATES: dict[AnalysisType, str] = {
    AnalysisType.REVIEW: REVIEW_PROMPT,
    AnalysisType.EXPLAIN: EXPLAIN_PROMPT,
    AnalysisType.OPTIMIZE: OPTIMIZE_PROMPT,
    AnalysisType.REFACTOR: REFACTOR_PROMPT,
}


def parse_analysis_type(value: AnalysisType | str) -> AnalysisType:
    """Coerce ``value`` into an ``AnalysisType`` or raise ``InvalidRequest``."""
    if isinstance(value, AnalysisType):
        return value
    try:
        return AnalysisType(value)
    except ValueError:
        allowed = ", ".join(t.value for t in AnalysisType)
        raise InvalidRequest(
            f"Unknown analysis type {value!r} (expected one of: {allowed})"
        ) from None


def build_prompt(analysis_type: AnalysisType | str, language: str, code: str) -> str:
    """Render the instruction for ``analysis_type`` followed by ``code`` verbatim.

    ``code`` is appended rather than formatted in, so braces in user code are
    never interpreted.
    """
    kind = parse_analysis_type(analysis_type)
    instruction = TEMPLATES[kind].format(language=language)
    return f"{instruction}\n\n{code}"

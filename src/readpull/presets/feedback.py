"""Plain-text feedback for whoever is authoring presets.

An iterative author (a person or an LLM tool loop) submits a preset, reads
this feedback, and tries again.
"""

from __future__ import annotations

from typing import Optional

from ..models.results import (
    ApplyOk,
    ApplyResult,
    ContainsPseudoSelectorDetected,
    FiltersOutsideMainContent,
    InvalidSelectorsDetected,
    InvalidSelectorsFailed,
    MainContentSelectorsFailed,
    MainContentSelectorsMissed,
    NestedMainContentSelectors,
    NthChildSelectorsDetected,
    PresetMatchDetectorsFailed,
    PresetMatchDetectorsMissed,
    ValidationProblem,
    ValidationReport,
)

ISSUES_PREAMBLE = "Please fix the following issues in your next attempt:"
PREVIEW_PREAMBLE = "Extraction preview (markdown):"


def render_problem(problem: ValidationProblem) -> str:
    """Render one problem as a bullet line with a hint on how to fix it."""
    selectors = ", ".join(problem.selectors)

    if isinstance(problem, InvalidSelectorsDetected):
        return (
            f"- These selectors are syntactically invalid or unsupported: {selectors}. "
            "Fix unmatched parentheses, typos, or remove unsupported pseudo-selectors."
        )
    if isinstance(problem, PresetMatchDetectorsMissed):
        return (
            f"- These preset match selectors matched nothing: {selectors}. "
            "Choose stable site-wide elements (e.g., header, nav, footer) that exist across pages."
        )
    if isinstance(problem, MainContentSelectorsMissed):
        return (
            f"- These main content selectors matched nothing: {selectors}. "
            "Target the container that holds the readable article or body content."
        )
    if isinstance(problem, FiltersOutsideMainContent):
        return (
            f"- These filters do not match within the selected main content: {selectors}. "
            "Remove them or scope them to elements inside the main content."
        )
    if isinstance(problem, NthChildSelectorsDetected):
        return (
            f"- Avoid nth-child/of-type in these selectors: {selectors}. "
            "The DOM structure can change; prefer stable attributes or classes."
        )
    if isinstance(problem, ContainsPseudoSelectorDetected):
        return (
            f"- Avoid :contains(...) in these selectors: {selectors}. "
            "Prefer structural or attribute-based targeting."
        )
    if isinstance(problem, NestedMainContentSelectors):
        relations = "; ".join(f"{r.outer} → {r.inner}" for r in problem.relations)
        return (
            f"- Some main content selectors are nested within others: {relations}. "
            "Use a single parent-level selector to avoid duplication and brittleness."
        )
    raise TypeError(f"Unknown validation problem: {problem!r}")


def render_problems(problems: list) -> str:
    return "\n".join(render_problem(p) for p in problems)


def render_failure(result: ApplyResult) -> str:
    """One line describing a failed apply result; empty for success."""
    selectors = ", ".join(getattr(result, "selectors", ()))

    if isinstance(result, ApplyOk):
        return ""
    if isinstance(result, InvalidSelectorsFailed):
        return f"Some selectors are invalid and must be corrected: {selectors}"
    if isinstance(result, PresetMatchDetectorsFailed):
        return f"Preset match selectors matched nothing: {selectors}"
    if isinstance(result, MainContentSelectorsFailed):
        return f"Main content selectors matched nothing: {selectors}"
    raise TypeError(f"Unknown apply result: {result!r}")


def render_feedback(
    report: ValidationReport,
    result: ApplyResult,
    markdown: Optional[str] = None,
) -> str:
    """
    Combine validation problems and the apply outcome into one message.

    Advisory problems are left out while invalid selectors exist, since
    the advisory checks skip selectors that cannot be evaluated.

    Args:
        report: Validation report for the attempted preset
        result: Outcome of applying the preset
        markdown: Rendered main content, shown as a preview on success

    Returns:
        Feedback text; empty when there is nothing to report
    """
    problems: list[ValidationProblem] = list(report.critical)
    if not any(isinstance(p, InvalidSelectorsDetected) for p in report.critical):
        problems.extend(report.non_critical)

    sections: list[str] = []
    if problems:
        sections.append(ISSUES_PREAMBLE)
        sections.append(render_problems(problems))

    failure = render_failure(result)
    if failure:
        sections.append(failure)
    elif markdown and markdown.strip():
        sections.append(f"\n\n{PREVIEW_PREAMBLE}\n{markdown}")

    return "\n".join(sections)

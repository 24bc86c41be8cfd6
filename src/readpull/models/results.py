"""Validation problems and apply results.

Both are closed sets of tagged variants. Consumers dispatch on the variant
class (or its ``type`` tag) instead of catching exceptions.

Example:
    result = engine.apply(document, preset)
    if isinstance(result, ApplyOk):
        print(result.markup)
    else:
        print(result.type.value, result.selectors)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


class ProblemType(str, Enum):
    """Tags of validation problems."""

    # Critical: extraction is blocked
    INVALID_SELECTORS_DETECTED = "invalid_selectors_detected"
    PRESET_MATCH_DETECTORS_DID_NOT_HIT_ANY_NODE = "preset_match_detectors_did_not_hit_any_node"
    MAIN_CONTENT_SELECTORS_FAILED = "main_content_selectors_failed"

    # Advisory: extraction proceeds
    MAIN_CONTENT_FILTERS_DO_NOT_APPLY = "main_content_filters_do_not_apply_to_main_content"
    NTH_CHILD_SELECTORS_DETECTED = "nth_child_selectors_detected"
    CONTAINS_PSEUDO_SELECTOR_DETECTED = "contains_pseudo_selector_detected"
    NESTED_MAIN_CONTENT_SELECTORS = "nested_selectors_detected_in_main_content_selectors"


class ApplyResultType(str, Enum):
    """Tags of apply results."""

    OK = "ok"
    INVALID_SELECTORS_FAILED = "invalid_selectors_failed"
    PRESET_MATCH_DETECTORS_FAILED = "preset_match_detectors_failed"
    MAIN_CONTENT_SELECTORS_FAILED = "main_content_selectors_failed"


@dataclass(frozen=True)
class ValidationProblem:
    """Base class of every validation problem."""

    type: ClassVar[ProblemType]
    critical: ClassVar[bool] = False

    selectors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "selectors": list(self.selectors)}


@dataclass(frozen=True)
class CriticalProblem(ValidationProblem):
    """A problem that blocks extraction."""

    critical: ClassVar[bool] = True


@dataclass(frozen=True)
class AdvisoryProblem(ValidationProblem):
    """A problem worth fixing that does not block extraction."""


@dataclass(frozen=True)
class InvalidSelectorsDetected(CriticalProblem):
    type: ClassVar[ProblemType] = ProblemType.INVALID_SELECTORS_DETECTED


@dataclass(frozen=True)
class PresetMatchDetectorsMissed(CriticalProblem):
    type: ClassVar[ProblemType] = ProblemType.PRESET_MATCH_DETECTORS_DID_NOT_HIT_ANY_NODE


@dataclass(frozen=True)
class MainContentSelectorsMissed(CriticalProblem):
    type: ClassVar[ProblemType] = ProblemType.MAIN_CONTENT_SELECTORS_FAILED


@dataclass(frozen=True)
class FiltersOutsideMainContent(AdvisoryProblem):
    type: ClassVar[ProblemType] = ProblemType.MAIN_CONTENT_FILTERS_DO_NOT_APPLY


@dataclass(frozen=True)
class NthChildSelectorsDetected(AdvisoryProblem):
    type: ClassVar[ProblemType] = ProblemType.NTH_CHILD_SELECTORS_DETECTED


@dataclass(frozen=True)
class ContainsPseudoSelectorDetected(AdvisoryProblem):
    type: ClassVar[ProblemType] = ProblemType.CONTAINS_PSEUDO_SELECTOR_DETECTED


@dataclass(frozen=True)
class NestedRelation:
    """``inner`` matches a node at or below a node matched by ``outer``."""

    outer: str
    inner: str
    transitive: bool = False

    def to_dict(self) -> dict[str, str]:
        return {"outer": self.outer, "inner": self.inner}


@dataclass(frozen=True)
class NestedMainContentSelectors(AdvisoryProblem):
    """Main content selectors that select overlapping subtrees.

    Direct relations come first, transitive ones (implied by two direct
    relations through a third selector) after them.
    """

    type: ClassVar[ProblemType] = ProblemType.NESTED_MAIN_CONTENT_SELECTORS

    relations: tuple[NestedRelation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "relations": [r.to_dict() for r in self.relations]}


@dataclass(frozen=True)
class ValidationReport:
    """Critical and advisory problems found for one (document, preset) pair."""

    critical: list[CriticalProblem] = field(default_factory=list)
    non_critical: list[AdvisoryProblem] = field(default_factory=list)

    @property
    def is_blocking(self) -> bool:
        """True when extraction must not proceed."""
        return bool(self.critical)

    @property
    def problems(self) -> list[ValidationProblem]:
        return [*self.critical, *self.non_critical]

    def find(self, problem_type: ProblemType) -> ValidationProblem | None:
        """Return the first problem with the given tag, if any."""
        for problem in self.problems:
            if problem.type == problem_type:
                return problem
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "critical": [p.to_dict() for p in self.critical],
            "non_critical": [p.to_dict() for p in self.non_critical],
        }


@dataclass(frozen=True)
class ApplyOk:
    """Extraction succeeded; ``markup`` may be empty."""

    type: ClassVar[ApplyResultType] = ApplyResultType.OK
    ok: ClassVar[bool] = True

    markup: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "markup": self.markup}


@dataclass(frozen=True)
class ApplyFailure:
    """Base class of the failed apply results."""

    type: ClassVar[ApplyResultType]
    ok: ClassVar[bool] = False

    selectors: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "selectors": list(self.selectors)}


@dataclass(frozen=True)
class InvalidSelectorsFailed(ApplyFailure):
    type: ClassVar[ApplyResultType] = ApplyResultType.INVALID_SELECTORS_FAILED


@dataclass(frozen=True)
class PresetMatchDetectorsFailed(ApplyFailure):
    type: ClassVar[ApplyResultType] = ApplyResultType.PRESET_MATCH_DETECTORS_FAILED


@dataclass(frozen=True)
class MainContentSelectorsFailed(ApplyFailure):
    type: ClassVar[ApplyResultType] = ApplyResultType.MAIN_CONTENT_SELECTORS_FAILED


ApplyResult = Union[ApplyOk, InvalidSelectorsFailed, PresetMatchDetectorsFailed, MainContentSelectorsFailed]

# Terminal failure for each critical problem, in reporting priority order
FAILURE_FOR_PROBLEM: dict[type[CriticalProblem], type[ApplyFailure]] = {
    InvalidSelectorsDetected: InvalidSelectorsFailed,
    PresetMatchDetectorsMissed: PresetMatchDetectorsFailed,
    MainContentSelectorsMissed: MainContentSelectorsFailed,
}

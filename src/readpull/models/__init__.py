"""Readpull configuration, preset and result models."""

from .config import ClassifierConfig, NormalizerConfig, ReadpullConfig
from .preset import Fixture, Preset, PresetLoadError, load_fixture, load_preset
from .results import (
    AdvisoryProblem,
    ApplyFailure,
    ApplyOk,
    ApplyResult,
    ApplyResultType,
    ContainsPseudoSelectorDetected,
    CriticalProblem,
    FiltersOutsideMainContent,
    InvalidSelectorsDetected,
    InvalidSelectorsFailed,
    MainContentSelectorsFailed,
    MainContentSelectorsMissed,
    NestedMainContentSelectors,
    NestedRelation,
    NthChildSelectorsDetected,
    PresetMatchDetectorsFailed,
    PresetMatchDetectorsMissed,
    ProblemType,
    ValidationProblem,
    ValidationReport,
)

__all__ = [
    # Config
    "ClassifierConfig",
    "NormalizerConfig",
    "ReadpullConfig",
    # Presets
    "Fixture",
    "Preset",
    "PresetLoadError",
    "load_fixture",
    "load_preset",
    # Validation problems
    "ProblemType",
    "ValidationProblem",
    "CriticalProblem",
    "AdvisoryProblem",
    "InvalidSelectorsDetected",
    "PresetMatchDetectorsMissed",
    "MainContentSelectorsMissed",
    "FiltersOutsideMainContent",
    "NthChildSelectorsDetected",
    "ContainsPseudoSelectorDetected",
    "NestedMainContentSelectors",
    "NestedRelation",
    "ValidationReport",
    # Apply results
    "ApplyResultType",
    "ApplyResult",
    "ApplyOk",
    "ApplyFailure",
    "InvalidSelectorsFailed",
    "PresetMatchDetectorsFailed",
    "MainContentSelectorsFailed",
]

"""
readpull - Extract the readable main content of web pages with site presets.

Usage:
    from readpull import Preset, PresetEngine

    engine = PresetEngine()
    preset = Preset(
        preset_match_detectors=[".main"],
        main_content_selectors=["#p"],
        main_content_filters=[".sponsored"],
    )

    result = engine.extract(html, preset, url="https://example.com/post")
    if result.ok:
        print(result.markup)
"""

__version__ = "1.0.0"

from .engine import PresetEngine
from .models.config import ClassifierConfig, NormalizerConfig, ReadpullConfig
from .models.preset import Preset, PresetLoadError, load_preset
from .models.results import (
    ApplyOk,
    ApplyResult,
    ApplyResultType,
    ProblemType,
    ValidationReport,
)

__all__ = [
    "__version__",
    # Core
    "PresetEngine",
    # Config
    "ReadpullConfig",
    "NormalizerConfig",
    "ClassifierConfig",
    # Presets
    "Preset",
    "PresetLoadError",
    "load_preset",
    # Results
    "ApplyOk",
    "ApplyResult",
    "ApplyResultType",
    "ProblemType",
    "ValidationReport",
]

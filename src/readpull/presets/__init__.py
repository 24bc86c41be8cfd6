"""Preset validation, application and feedback."""

from .applicator import PresetApplicator
from .feedback import render_feedback, render_problem, render_problems
from .validator import PresetValidator

__all__ = [
    "PresetApplicator",
    "PresetValidator",
    "render_feedback",
    "render_problem",
    "render_problems",
]

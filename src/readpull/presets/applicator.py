"""Turning a preset into extracted main content."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup

from ..dom.normalizer import parse_markup
from ..dom.selectors import compile_selector, invalid_selectors, select_all
from ..models.preset import Preset
from ..models.results import (
    FAILURE_FOR_PROBLEM,
    ApplyOk,
    ApplyResult,
    InvalidSelectorsFailed,
)
from .validator import PresetValidator

logger = logging.getLogger(__name__)


class PresetApplicator:
    """
    Applies presets to documents.

    Neither entry point mutates the document it is given, so the same
    document can be reused across many candidate presets.

    Example:
        applicator = PresetApplicator()
        result = applicator.apply(document, preset)
        if result.ok:
            print(result.markup)
    """

    def __init__(self, validator: Optional[PresetValidator] = None):
        self._validator = validator or PresetValidator()

    def apply(self, document: BeautifulSoup, preset: Preset) -> ApplyResult:
        """
        Validate, then extract.

        When several critical problems exist, the reported failure is the
        first of: invalid selectors, missed match detectors, missed main
        content selectors.
        """
        critical = self._validator.validate_critical(document, preset)
        for problem_type, failure_type in FAILURE_FOR_PROBLEM.items():
            for problem in critical:
                if isinstance(problem, problem_type):
                    logger.debug(f"Preset rejected: {problem.type.value} {list(problem.selectors)}")
                    return failure_type(selectors=problem.selectors)

        return self.apply_unchecked(document, preset)

    def apply_unchecked(self, document: BeautifulSoup, preset: Preset) -> ApplyResult:
        """
        Extract without checking that detectors and main content selectors hit.

        Main content fragments are gathered per selector, in preset order,
        then filters are removed from the combined fragments.
        """
        invalid = invalid_selectors([*preset.main_content_selectors, *preset.main_content_filters])
        if invalid:
            return InvalidSelectorsFailed(selectors=tuple(invalid))

        fragments: list[str] = []
        for selector in preset.main_content_selectors:
            sieve = compile_selector(selector)
            fragments.extend(str(node) for node in select_all(document, sieve))

        working = parse_markup("\n".join(fragments))
        for selector in preset.main_content_filters:
            sieve = compile_selector(selector)
            for node in select_all(working, sieve):
                # Nodes nested in an earlier match are already gone
                if not node.decomposed:
                    node.decompose()

        markup = str(working)
        logger.debug(f"Extracted {len(markup)} characters from {len(fragments)} fragments")
        if not markup.strip():
            return ApplyOk(markup="")
        return ApplyOk(markup=markup)

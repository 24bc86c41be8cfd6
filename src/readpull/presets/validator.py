"""Validation of candidate presets against a normalized document."""

from __future__ import annotations

import logging
import re
from typing import Optional

import soupsieve
from bs4 import BeautifulSoup, Tag

from ..dom.selectors import compile_selector, matches_within, select_all
from ..models.preset import Preset
from ..models.results import (
    AdvisoryProblem,
    ContainsPseudoSelectorDetected,
    CriticalProblem,
    FiltersOutsideMainContent,
    InvalidSelectorsDetected,
    MainContentSelectorsMissed,
    NestedMainContentSelectors,
    NestedRelation,
    NthChildSelectorsDetected,
    PresetMatchDetectorsMissed,
    ValidationReport,
)

logger = logging.getLogger(__name__)

NTH_PATTERN = re.compile(r":(?:nth-child|nth-last-child|nth-of-type|nth-last-of-type)\s*\(", re.IGNORECASE)
CONTAINS_PATTERN = re.compile(r":(?:-soup-)?contains(?:-own)?\s*\(", re.IGNORECASE)


class PresetValidator:
    """
    Decides whether a preset can be trusted on a document.

    Critical problems block extraction:
        - selectors the engine cannot compile
        - match detectors that hit nothing
        - main content selectors that hit nothing

    Advisory problems point at brittle presets:
        - filters that never touch the main content
        - positional (nth-*) pseudo-classes
        - text-content (:contains) pseudo-classes
        - main content selectors nested inside one another

    Example:
        validator = PresetValidator()
        report = validator.validate(document, preset)
        if report.is_blocking:
            print(report.critical)
    """

    def validate(self, document: BeautifulSoup, preset: Preset) -> ValidationReport:
        """Run all checks."""
        compiled = self._compile(preset)
        return ValidationReport(
            critical=self._critical(document, preset, compiled),
            non_critical=self._non_critical(document, preset, compiled),
        )

    def validate_critical(self, document: BeautifulSoup, preset: Preset) -> list[CriticalProblem]:
        return self._critical(document, preset, self._compile(preset))

    def validate_non_critical(self, document: BeautifulSoup, preset: Preset) -> list[AdvisoryProblem]:
        return self._non_critical(document, preset, self._compile(preset))

    @staticmethod
    def _compile(preset: Preset) -> dict[str, Optional[soupsieve.SoupSieve]]:
        compiled: dict[str, Optional[soupsieve.SoupSieve]] = {}
        for selector in preset.all_selectors:
            if selector not in compiled:
                compiled[selector] = compile_selector(selector)
        return compiled

    def _critical(
        self,
        document: BeautifulSoup,
        preset: Preset,
        compiled: dict[str, Optional[soupsieve.SoupSieve]],
    ) -> list[CriticalProblem]:
        problems: list[CriticalProblem] = []

        invalid = [selector for selector, sieve in compiled.items() if sieve is None]
        if invalid:
            problems.append(InvalidSelectorsDetected(selectors=tuple(invalid)))

        missed_detectors = self._unmatched(document, preset.preset_match_detectors, compiled)
        if missed_detectors:
            problems.append(PresetMatchDetectorsMissed(selectors=tuple(missed_detectors)))

        missed_main = self._unmatched(document, preset.main_content_selectors, compiled)
        if missed_main:
            problems.append(MainContentSelectorsMissed(selectors=tuple(missed_main)))

        return problems

    @staticmethod
    def _unmatched(
        document: BeautifulSoup,
        selectors: tuple[str, ...],
        compiled: dict[str, Optional[soupsieve.SoupSieve]],
    ) -> list[str]:
        unmatched: list[str] = []
        for selector in selectors:
            sieve = compiled[selector]
            # Invalid selectors are reported once, as invalid
            if sieve is None:
                continue
            if sieve.select_one(document) is None and selector not in unmatched:
                unmatched.append(selector)
        return unmatched

    def _non_critical(
        self,
        document: BeautifulSoup,
        preset: Preset,
        compiled: dict[str, Optional[soupsieve.SoupSieve]],
    ) -> list[AdvisoryProblem]:
        problems: list[AdvisoryProblem] = []

        main_nodes: list[Tag] = []
        for selector in preset.main_content_selectors:
            sieve = compiled[selector]
            if sieve is not None:
                main_nodes.extend(select_all(document, sieve))

        ineffective: list[str] = []
        for selector in preset.main_content_filters:
            sieve = compiled[selector]
            if sieve is None:
                continue
            if not any(matches_within(node, sieve) for node in main_nodes):
                ineffective.append(selector)
        if ineffective:
            problems.append(FiltersOutsideMainContent(selectors=tuple(ineffective)))

        nth_like = [s for s in preset.all_selectors if NTH_PATTERN.search(s)]
        if nth_like:
            problems.append(NthChildSelectorsDetected(selectors=tuple(nth_like)))

        contains_like = [s for s in preset.all_selectors if CONTAINS_PATTERN.search(s)]
        if contains_like:
            problems.append(ContainsPseudoSelectorDetected(selectors=tuple(contains_like)))

        relations = self.nested_relations(document, preset.main_content_selectors, compiled)
        if relations:
            problems.append(NestedMainContentSelectors(relations=tuple(relations)))

        return problems

    @staticmethod
    def nested_relations(
        document: BeautifulSoup,
        selectors: tuple[str, ...],
        compiled: dict[str, Optional[soupsieve.SoupSieve]],
    ) -> list[NestedRelation]:
        """
        Find ordered pairs of selectors where the second matches inside the first.

        Returns:
            Direct relations in discovery order, followed by transitive ones
        """
        found: list[tuple[str, str]] = []
        for outer in selectors:
            outer_sieve = compiled[outer]
            if outer_sieve is None:
                continue
            outer_nodes = select_all(document, outer_sieve)
            for inner in selectors:
                inner_sieve = compiled[inner]
                if inner == outer or inner_sieve is None or (outer, inner) in found:
                    continue
                if any(matches_within(node, inner_sieve) for node in outer_nodes):
                    found.append((outer, inner))

        edges = set(found)
        direct: list[NestedRelation] = []
        transitive: list[NestedRelation] = []
        for outer, inner in found:
            is_transitive = any(
                mid not in (outer, inner) and (outer, mid) in edges and (mid, inner) in edges for mid in selectors
            )
            if is_transitive:
                transitive.append(NestedRelation(outer=outer, inner=inner, transitive=True))
            else:
                direct.append(NestedRelation(outer=outer, inner=inner))

        if found:
            logger.debug(f"Nested main content selectors: {len(direct)} direct, {len(transitive)} transitive")
        return direct + transitive

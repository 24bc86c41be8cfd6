"""Facade tying normalization, validation and application together."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup

from .dom.identifiers import IdentifierClassifier
from .dom.normalizer import MarkupNormalizer
from .models.config import ReadpullConfig
from .models.preset import Preset
from .models.results import ApplyResult, ValidationReport
from .presets.applicator import PresetApplicator
from .presets.validator import PresetValidator

logger = logging.getLogger(__name__)


class PresetEngine:
    """
    Extracts main content from pages using site presets.

    The engine holds configuration only. Every call builds its own
    document, so one engine can serve concurrent requests.

    Example:
        engine = PresetEngine()
        document = engine.normalize(html, "https://example.com/post/1")
        report = engine.validate(document, preset)
        result = engine.apply(document, preset)
    """

    def __init__(self, config: Optional[ReadpullConfig] = None):
        self.config = config or ReadpullConfig()
        self.classifier = IdentifierClassifier(self.config.classifier)
        self.normalizer = MarkupNormalizer(self.config.normalizer, self.classifier)
        self.validator = PresetValidator()
        self.applicator = PresetApplicator(self.validator)

    def normalize(self, markup: str, url: Optional[str] = None) -> BeautifulSoup:
        """Parse and normalize raw markup."""
        return self.normalizer.normalize(markup, url)

    def validate(self, document: BeautifulSoup, preset: Preset) -> ValidationReport:
        return self.validator.validate(document, preset)

    def apply(self, document: BeautifulSoup, preset: Preset) -> ApplyResult:
        """Apply a preset, refusing when critical problems exist."""
        return self.applicator.apply(document, preset)

    def apply_unchecked(self, document: BeautifulSoup, preset: Preset) -> ApplyResult:
        return self.applicator.apply_unchecked(document, preset)

    def extract(self, markup: str, preset: Preset, url: Optional[str] = None) -> ApplyResult:
        """Normalize raw markup and apply a preset to it."""
        result = self.apply(self.normalize(markup, url), preset)
        logger.debug(f"Extraction for {url or '<no url>'}: {result.type.value}")
        return result

    @staticmethod
    def serialize(document: BeautifulSoup, pretty: bool = False) -> str:
        """Serialize a document back to markup."""
        if pretty:
            return document.prettify()
        return str(document)

"""Detection of machine-generated identifiers.

Build tools emit class names and ids such as ``css-1x2y3z`` or
``53b1224c-588a-439a-8495-772814379478``. These change between deploys, so
they are stripped before any selector is written against the page. A token is
scored by the character-class transitions it contains: word-like names move
between lowercase letters and separators cheaply, hashes jump between digits
and letters.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Optional

from ..models.config import CharClass, ClassifierConfig

_UPPER = frozenset(string.ascii_uppercase)
_LOWER = frozenset(string.ascii_lowercase)
_DIGIT = frozenset(string.digits)
_SYMBOL = frozenset("-_")


def classify_char(char: str) -> CharClass:
    """Map a single character to its class."""
    if char in _UPPER:
        return "Upper"
    if char in _LOWER:
        return "Lower"
    if char in _DIGIT:
        return "Digit"
    if char in _SYMBOL:
        return "Symbol"
    return "Other"


@dataclass(frozen=True)
class GibberishScore:
    """Summed transition cost and its per-transition average."""

    absolute: float
    normalized: float


class IdentifierClassifier:
    """
    Scores identifiers and flags the machine-generated ones.

    Example:
        classifier = IdentifierClassifier()
        classifier.is_gibberish("btn-primary")      # False
        classifier.is_gibberish("TccjmKV6RraCaCw5")  # True
    """

    def __init__(self, config: Optional[ClassifierConfig] = None):
        self._config = config or ClassifierConfig()

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def measure(self, token: str) -> GibberishScore:
        """Compute the absolute and normalized transition cost of a token."""
        if len(token) < 2:
            return GibberishScore(absolute=0.0, normalized=0.0)

        classes = [classify_char(c) for c in token]
        absolute = sum(self._config.cost(a, b) for a, b in zip(classes, classes[1:]))
        return GibberishScore(absolute=absolute, normalized=absolute / max(1, len(token) - 1))

    def score(self, token: str) -> float:
        """Normalized transition cost of a token."""
        return self.measure(token).normalized

    def is_gibberish(self, token: str) -> bool:
        """Check whether a token looks machine-generated."""
        if len(token) < self._config.min_length:
            return False
        return self.score(token) >= self._config.threshold


_default_classifier = IdentifierClassifier()


def gibberish_score(token: str) -> float:
    """Normalized score of ``token`` using the default classifier."""
    return _default_classifier.score(token)


def is_gibberish_identifier(token: str) -> bool:
    """Check ``token`` against the default classifier."""
    return _default_classifier.is_gibberish(token)

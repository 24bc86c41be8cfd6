"""Document normalization and identifier classification."""

from .identifiers import IdentifierClassifier, gibberish_score, is_gibberish_identifier
from .normalizer import Document, MarkupNormalizer, parse_markup

__all__ = [
    "Document",
    "IdentifierClassifier",
    "MarkupNormalizer",
    "gibberish_score",
    "is_gibberish_identifier",
    "parse_markup",
]

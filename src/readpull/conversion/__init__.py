"""Markdown conversion of extracted main content."""

from .markdown import HtmlToMarkdown
from .protocols import MarkdownConverter

__all__ = [
    # Protocols
    "MarkdownConverter",
    # Implementations
    "HtmlToMarkdown",
]

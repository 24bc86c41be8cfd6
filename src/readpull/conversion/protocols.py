"""Protocols for collaborators that consume extracted markup."""

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class MarkdownConverter(Protocol):
    """
    Protocol for converting extracted markup to Markdown.

    Implementations receive the ``markup`` payload of a successful apply
    result; they never see documents or presets.
    """

    def convert(self, html: str, url: Optional[str] = None) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: Extracted HTML markup
            url: Source URL (for resolving host-relative links)

        Returns:
            Markdown string
        """
        ...

"""HTML to Markdown conversion for extraction previews."""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

import html2text
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


class HtmlToMarkdown:
    """
    Converts extracted main content to Markdown.

    Normalized pages carry host-relative links; given the page URL they are
    made absolute again so the preview stays clickable.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(result.markup, "https://example.com/page")
    """

    def __init__(
        self,
        body_width: int = 0,
        inline_links: bool = True,
        ignore_images: bool = False,
        ignore_tables: bool = False,
        unicode_snob: bool = True,
        mark_code: bool = True,
    ):
        """
        Initialize the Markdown converter.

        Args:
            body_width: Max line width (0 = no wrapping)
            inline_links: Use inline [text](url) vs reference style
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
            unicode_snob: Use Unicode chars where possible
            mark_code: Mark code blocks with backticks
        """
        self._converter = html2text.HTML2Text()
        self._converter.body_width = body_width
        self._converter.inline_links = inline_links
        self._converter.protect_links = False
        self._converter.wrap_links = False
        self._converter.ignore_images = ignore_images
        self._converter.ignore_tables = ignore_tables
        self._converter.unicode_snob = unicode_snob
        self._converter.mark_code = mark_code
        self._converter.default_image_alt = ""

    def _clean_output(self, markdown: str) -> str:
        # Strip trailing spaces first so <br> lines ("  \n") count as blank
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)
        if not markdown.strip():
            return ""
        return markdown.strip() + "\n"

    def _absolutize_links(self, markdown: str, base_url: str) -> str:
        def replace_link(match: re.Match[str]) -> str:
            text, url = match.group(1), match.group(2)
            if not url.startswith("/") or url.startswith("//"):
                result: str = match.group(0)
                return result
            return f"[{text}]({urljoin(base_url, url)})"

        return re.sub(r"\[([^\]]*)\]\(([^)\s]+)\)", replace_link, markdown)

    def convert(self, html: str, url: str | None = None) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: Extracted HTML markup
            url: Page URL for resolving host-relative links

        Returns:
            Markdown string, empty for empty markup
        """
        if not html.strip():
            return ""
        try:
            self._converter.baseurl = url or ""
            markdown = self._clean_output(self._converter.handle(html))
            if url:
                markdown = self._absolutize_links(markdown, url)
            return markdown

        except Exception as e:
            logger.error(f"Failed to convert HTML to Markdown: {e}")
            # Return plain text as fallback
            soup = BeautifulSoup(html, "html.parser")
            text: str = soup.get_text(separator="\n")
            return text.strip() + "\n"

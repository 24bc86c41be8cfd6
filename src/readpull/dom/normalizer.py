"""Markup normalization applied before any preset selector sees a page."""

from __future__ import annotations

import html
import logging
from typing import Optional
from urllib.parse import SplitResult, urljoin, urlsplit

from bs4 import BeautifulSoup, Comment, NavigableString, Tag
from bs4.element import PreformattedString

from ..models.config import NormalizerConfig
from .identifiers import IdentifierClassifier

logger = logging.getLogger(__name__)

PARSER = "html.parser"

Document = BeautifulSoup


def parse_markup(markup: str) -> Document:
    """Parse markup into a document without any cleanup."""
    return BeautifulSoup(markup, PARSER)


class MarkupNormalizer:
    """
    Strips noise and volatile identifiers from a page.

    The resulting document keeps the structure and stable identifiers a
    human would write selectors against, and little else: no scripts or
    media, no comments, no presentational attributes, no hashed class
    names, and no empty wrapper elements.

    Example:
        normalizer = MarkupNormalizer()
        document = normalizer.normalize(raw_html, "https://example.com/page")
        print(str(document))
    """

    def __init__(
        self,
        config: Optional[NormalizerConfig] = None,
        classifier: Optional[IdentifierClassifier] = None,
    ):
        self._config = config or NormalizerConfig()
        self._classifier = classifier or IdentifierClassifier()

    def normalize(self, markup: str, base_url: Optional[str] = None) -> Document:
        """
        Build a normalized document from raw markup.

        Args:
            markup: Raw HTML, possibly malformed or entity-encoded
            base_url: Page URL; same-host absolute links become host-relative

        Returns:
            A fresh document owned by the caller
        """
        # Unescaping the whole input also decodes &quot; inside attribute values,
        # so an escaped quote ends the value early
        document = self._scope_to_body(parse_markup(html.unescape(markup)))

        self._remove_non_visual(document)
        self._remove_comments(document)
        self._truncate_text(document)
        self._filter_attributes(document)
        if self._config.drop_gibberish_identifiers:
            self._drop_gibberish(document)
        self.prune_empty_elements(document)

        if base_url:
            base = self._parse_base_url(base_url)
            if base is not None:
                self._relativize_urls(document, base)

        self._truncate_attributes(document)

        logger.debug(f"Normalized markup from {len(markup)} to {len(str(document))} characters")
        return document

    def _scope_to_body(self, document: Document) -> Document:
        body = document.find("body")
        if isinstance(body, Tag):
            return parse_markup(body.decode_contents())
        return document

    def _remove_non_visual(self, document: Document) -> None:
        if not self._config.removed_selectors:
            return
        for element in document.select(", ".join(self._config.removed_selectors)):
            # Descendants of an already removed element are gone with it
            if not element.decomposed:
                element.decompose()

    def _remove_comments(self, document: Document) -> None:
        for comment in document.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()

    def _truncate_text(self, document: Document) -> None:
        limit = self._config.max_text_length
        for text in document.find_all(string=True):
            if isinstance(text, PreformattedString):
                continue
            if len(text) > limit:
                text.replace_with(NavigableString(text[:limit] + self._config.truncation_suffix))

    def _filter_attributes(self, document: Document) -> None:
        for tag in document.find_all(True):
            # Get list of attrs to remove (can't modify during iteration)
            attrs_to_remove = [attr for attr in tag.attrs if not self._config.is_allowed_attribute(attr)]
            for attr in attrs_to_remove:
                del tag[attr]

    def _drop_gibberish(self, document: Document) -> None:
        is_gibberish = self._classifier.is_gibberish

        for tag in document.find_all(True):
            if "id" in tag.attrs and is_gibberish(_as_text(tag["id"])):
                del tag["id"]

            if "class" in tag.attrs:
                classes = tag["class"]
                tokens = classes.split() if isinstance(classes, str) else list(classes)
                survivors = [token for token in tokens if not is_gibberish(token)]
                if survivors:
                    tag["class"] = survivors
                else:
                    del tag["class"]

            data_attrs = [attr for attr in tag.attrs if attr.startswith("data-")]
            for attr in data_attrs:
                if is_gibberish(_as_text(tag[attr])):
                    del tag[attr]

    @staticmethod
    def prune_empty_elements(document: Document) -> None:
        """Remove elements without attributes or children until none are left."""
        while True:
            empties = [tag for tag in document.find_all(True) if not tag.attrs and not tag.contents]
            if not empties:
                break
            for tag in empties:
                tag.decompose()

    def _parse_base_url(self, base_url: str) -> Optional[SplitResult]:
        try:
            base = urlsplit(base_url)
            hostname = base.hostname
        except ValueError as e:
            logger.warning(f"Skipping URL rewriting, cannot parse page URL {base_url!r}: {e}")
            return None
        if base.scheme not in ("http", "https") or not hostname:
            logger.warning(f"Skipping URL rewriting, page URL is not absolute: {base_url!r}")
            return None
        return base

    def _relativize_urls(self, document: Document, base: SplitResult) -> None:
        base_url = base.geturl()
        for attr in self._config.url_attributes:
            for tag in document.find_all(attrs={attr: True}):
                value = _as_text(tag[attr])
                if not value.lower().startswith(("http://", "https://", "//")):
                    continue
                try:
                    target = urlsplit(urljoin(base_url, value))
                    same_host = target.hostname == base.hostname
                except ValueError:
                    continue
                if not same_host:
                    continue

                relative = target.path
                if target.query:
                    relative += f"?{target.query}"
                if target.fragment:
                    relative += f"#{target.fragment}"
                tag[attr] = relative or "/"

    def _truncate_attributes(self, document: Document) -> None:
        limit = self._config.max_attribute_length
        suffix = self._config.truncation_suffix
        keep = max(0, limit - len(suffix))
        for tag in document.find_all(True):
            for attr, value in list(tag.attrs.items()):
                if attr in self._config.untruncated_attributes:
                    continue
                text = _as_text(value)
                if len(text) > limit:
                    tag[attr] = text[:keep] + suffix


def _as_text(value: object) -> str:
    """Attribute values are strings, or lists for multi-valued attributes."""
    if isinstance(value, (list, tuple)):
        return " ".join(value)
    return str(value)

"""Selector matching over BeautifulSoup documents via soupsieve."""

from __future__ import annotations

import logging
from typing import Optional

import soupsieve
from bs4 import Tag
from soupsieve import SelectorSyntaxError

logger = logging.getLogger(__name__)


def compile_selector(selector: str) -> Optional[soupsieve.SoupSieve]:
    """
    Compile a CSS selector.

    Returns:
        The compiled selector, or None if the engine rejects it
    """
    try:
        return soupsieve.compile(selector)
    except (SelectorSyntaxError, NotImplementedError) as e:
        logger.warning(f"Invalid selector {selector!r}: {e}")
        return None


def is_valid_selector(selector: str) -> bool:
    return compile_selector(selector) is not None


def invalid_selectors(selectors: list[str]) -> list[str]:
    """Return the selectors the engine rejects, in input order, without duplicates."""
    invalid: list[str] = []
    for selector in selectors:
        if selector not in invalid and not is_valid_selector(selector):
            invalid.append(selector)
    return invalid


def select_all(root: Tag, selector: soupsieve.SoupSieve) -> list[Tag]:
    """All descendants of ``root`` matched by ``selector``, in document order."""
    return selector.select(root)


def matches_within(node: Tag, selector: soupsieve.SoupSieve) -> bool:
    """True if ``selector`` matches ``node`` itself or any of its descendants."""
    return selector.match(node) or selector.select_one(node) is not None

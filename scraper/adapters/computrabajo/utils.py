"""
Small helper functions used across the Computrabajo adapter.
No extraction policy here, only text processing and DOM lookups.
"""

import re
from typing import List, Optional, Pattern

from bs4 import BeautifulSoup, Tag

from scraper.adapters.computrabajo.config import MAX_LABELED_CHIP_CHARS
from scraper.adapters.computrabajo.selectors import LABELED_CHIP_SELECTOR


_WHITESPACE = re.compile(r"\s+")


def norm_text(value: Optional[str]) -> str:
    """Replace non-breaking spaces, collapse whitespace runs and trim."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value.replace("\u00a0", " ")).strip()


def truncate(value: str, limit: int) -> str:
    """Cap a string at ``limit`` characters, trimming any exposed whitespace."""
    if len(value) > limit:
        return value[:limit].strip()
    return value


def parse_html(markup: str) -> BeautifulSoup:
    """Parse a document or fragment with the stdlib-backed parser."""
    return BeautifulSoup(markup or "", "html.parser")


def select_text(soup: BeautifulSoup, selector: str) -> Optional[str]:
    """Text of the first element matching ``selector``, or None."""
    element = soup.select_one(selector)
    if element is None:
        return None
    return element.get_text()


def extract_labeled_value(soup: BeautifulSoup, patterns: List[Pattern]) -> Optional[str]:
    """
    Find a value shown next to a label such as "Salario" or "Ubicación".

    Looks at attribute chips first ("Label: value", or two spans), then at
    ``dt``/``dd`` pairs. Returns the normalized value or None.
    """
    for chip in soup.select(LABELED_CHIP_SELECTOR):
        text = norm_text(chip.get_text())
        if not text or len(text) > MAX_LABELED_CHIP_CHARS:
            continue
        for pattern in patterns:
            if not pattern.search(text):
                continue
            value = _value_from_chip(chip, text, pattern)
            if value:
                return value

    for dt in soup.find_all("dt"):
        label = norm_text(dt.get_text())
        if not any(pattern.search(label) for pattern in patterns):
            continue
        dd = dt.find_next_sibling()
        if isinstance(dd, Tag) and dd.name == "dd":
            value = norm_text(dd.get_text())
            if value:
                return value

    return None


def _value_from_chip(chip: Tag, text: str, pattern: Pattern) -> str:
    if ":" in text:
        return norm_text(text.split(":", 1)[1])
    spans = chip.find_all("span")
    if len(spans) >= 2:
        return norm_text(spans[1].get_text())
    return norm_text(pattern.sub("", text, count=1))

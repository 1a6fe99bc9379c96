"""
HTML sanitization for job descriptions.

Reduces an embedded fragment to a small set of content tags and renders a
plain-text projection alongside it. Non-content nodes (scripts, styles, forms,
hidden elements, complaint/popup overlays) are removed outright; every other
disallowed element is unwrapped so its inline text survives.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup, Comment, NavigableString

from scraper.adapters.computrabajo.selectors import (
    ALLOWED_TAGS,
    BRACE_BLOCK_PATTERN,
    CONTENT_TAG_PATTERN,
    HIDDEN_STYLE_PATTERN,
    STRIP_SELECTORS,
)
from scraper.adapters.computrabajo.utils import norm_text, parse_html

logger = logging.getLogger(__name__)

# Elements that separate words when rendered. Unwrapping one of these leaves a
# space behind so "<div>Ventas</div><div>Zona</div>" never fuses into one word.
BLOCK_TAGS = {
    "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
    "fieldset", "figcaption", "figure", "footer", "h1", "h2", "h3", "h4", "h5",
    "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
    "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
}

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Description:
    html: str
    text: str


def _remove_non_content(soup: BeautifulSoup) -> BeautifulSoup:
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for selector in STRIP_SELECTORS:
        for element in soup.select(selector):
            # Nested matches die with their ancestor
            if not element.decomposed:
                element.decompose()
    for element in soup.find_all(style=HIDDEN_STYLE_PATTERN):
        if not element.decomposed:
            element.decompose()
    return soup


def _pad_block(element) -> None:
    if element.name in BLOCK_TAGS and element.parent is not None:
        element.insert_before(" ")
        element.insert_after(" ")


def _plain_text(soup: BeautifulSoup) -> str:
    for element in soup.find_all(True):
        _pad_block(element)
    return norm_text(soup.get_text())


def _reduce(soup: BeautifulSoup) -> str:
    for element in soup.find_all(True):
        if element.name not in ALLOWED_TAGS:
            _pad_block(element)
            element.unwrap()
            continue
        href = element.get("href") if element.name == "a" else None
        element.attrs = {"href": href} if href else {}

    soup.smooth()
    for string in soup.find_all(string=True):
        if isinstance(string, NavigableString):
            collapsed = _WHITESPACE.sub(" ", string.replace("\u00a0", " "))
            if collapsed != string:
                string.replace_with(collapsed)

    return soup.decode().strip()


def html_to_text(fragment: Optional[str]) -> str:
    """Whitespace-collapsed text of a fragment, with scripts and styles removed."""
    if not fragment:
        return ""
    return _plain_text(_remove_non_content(parse_html(fragment)))


def sanitize_html(fragment: Optional[str]) -> str:
    """Reduce a fragment to the allowed tag set; attributes kept only for links."""
    if not fragment:
        return ""
    return _reduce(_remove_non_content(parse_html(fragment)))


def looks_like_style_leak(html: str) -> bool:
    """A brace block with no prose tags is stylesheet or script text, not content."""
    return bool(BRACE_BLOCK_PATTERN.search(html)) and not CONTENT_TAG_PATTERN.search(html)


def sanitize_description(fragment: Optional[str]) -> Optional[Description]:
    """
    Produce the description pair, or None when nothing usable remains.

    The text is rendered from a copy of the cleaned fragment before tags are
    reduced, so it never depends on which wrappers were unwrapped.
    """
    if not fragment or not fragment.strip():
        return None

    cleaned = _remove_non_content(parse_html(fragment))
    text = _plain_text(parse_html(cleaned.decode()))
    html = _reduce(cleaned)

    if not html or not text:
        return None
    if looks_like_style_leak(html):
        logger.debug("Description rejected: looks like style/script leakage")
        return None
    return Description(html=html, text=text)

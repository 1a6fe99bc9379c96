"""
Job discovery from Computrabajo listing pages.
Handles start URL parsing, detail/pagination link collection and URL cleanup.
"""

import logging
import re
from typing import Any, List, Optional
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

from scraper.core.models import ListingResult, PageStatus, RawDocument
from scraper.adapters.computrabajo.config import (
    BASE_URL,
    DETAIL_URL_PATTERN,
    TRACKING_PARAMS,
)
from scraper.adapters.computrabajo.selectors import (
    DETAIL_LINK_SELECTORS,
    PAGINATION_SELECTORS,
)
from scraper.adapters.computrabajo.utils import parse_html
from scraper.adapters.computrabajo.validity import classify_page

logger = logging.getLogger(__name__)

START_URL_KEYS = ["startUrls", "startUrl", "urls", "requests", "sources"]
_URL_SEPARATORS = re.compile(r"\r?\n|,")


def is_detail_url(url: str) -> bool:
    return bool(DETAIL_URL_PATTERN.search(url))


def normalize_url(href: str, base_url: str = BASE_URL) -> Optional[str]:
    """
    Absolutize a link and drop its fragment and tracking parameters.
    Returns None for non-http(s) links (mailto:, javascript:, ...).
    """
    href = (href or "").strip()
    if not href:
        return None

    parts = urlsplit(urljoin(base_url, href))
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return None

    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in TRACKING_PARAMS
    ]
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(query), ""))


def _collect_links(soup, selectors: List[str], base_url: str) -> List[str]:
    links: List[str] = []
    for element in soup.select(", ".join(selectors)):
        url = normalize_url(element.get("href"), base_url)
        if url and url not in links:
            links.append(url)
    return links


def extract_listing_links(document: RawDocument) -> ListingResult:
    """
    Collect detail and pagination links from a listing page.
    Interstitial pages yield no links and a retry signal instead.
    """
    soup = parse_html(document.content)

    status = classify_page(soup, is_detail=False)
    if status is not PageStatus.VALID:
        logger.warning(f"Listing page {document.url} classified as {status.value}")
        return ListingResult(url=document.url, status=status)

    detail_urls = _collect_links(soup, DETAIL_LINK_SELECTORS, document.url)
    next_page_urls = [
        url
        for url in _collect_links(soup, PAGINATION_SELECTORS, document.url)
        if url not in detail_urls and url != document.url
    ]

    logger.info(
        f"Found {len(detail_urls)} detail links and {len(next_page_urls)} pagination links on {document.url}"
    )
    return ListingResult(
        url=document.url,
        status=status,
        detail_urls=detail_urls,
        next_page_urls=next_page_urls,
    )


# --- Start URLs ---


def _is_valid_url(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme in ("http", "https") and bool(parts.netloc)


def _gather_urls(value: Any, out: List[str]) -> None:
    if not value:
        return
    if isinstance(value, str):
        candidates = _URL_SEPARATORS.split(value)
    elif isinstance(value, (list, tuple)):
        candidates = []
        for item in value:
            if isinstance(item, str):
                candidates.append(item)
            elif isinstance(item, dict) and item.get("url"):
                candidates.append(item["url"])
    elif isinstance(value, dict) and value.get("url"):
        candidates = [value["url"]]
    else:
        return

    for candidate in candidates:
        url = str(candidate or "").strip()
        if not url:
            continue
        if _is_valid_url(url):
            out.append(url)
        else:
            logger.warning(f"Ignoring invalid start URL: {url!r}")


def normalize_start_urls(value: Any) -> List[str]:
    """
    Accept start URLs in the shapes users actually provide them:

    - a string, with URLs separated by newlines or commas
    - a list of strings or of ``{"url": ...}`` objects
    - an input mapping with any of ``startUrls``, ``startUrl``, ``urls``,
      ``requests`` or ``sources``

    Raises ValueError if no valid URL remains.
    """
    urls: List[str] = []
    if isinstance(value, dict) and not value.get("url"):
        for key in START_URL_KEYS:
            _gather_urls(value.get(key), urls)
    else:
        _gather_urls(value, urls)

    unique = list(dict.fromkeys(urls))
    if not unique:
        raise ValueError(
            "No valid start URLs found. Provide startUrls (list of {url} or strings), "
            "or startUrl/urls/requests."
        )
    logger.info(f"Loaded {len(unique)} start URL(s).")
    return unique

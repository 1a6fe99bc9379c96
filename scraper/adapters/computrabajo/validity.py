"""
Page validity classification: tells genuine listing/detail content apart from
login walls, CAPTCHA challenges and block pages served by the site's defenses.
"""

import logging

from bs4 import BeautifulSoup

from scraper.core.models import PageStatus
from scraper.adapters.computrabajo.selectors import (
    BLOCKING_PATTERN,
    CAPTCHA_SELECTORS,
    JSON_LD_SELECTOR,
    LOGIN_FORM_ACTION_PATTERN,
    LOGIN_PATTERN,
    PASSWORD_INPUT_SELECTOR,
    TITLE_TEMPLATE_SELECTOR,
)
from scraper.adapters.computrabajo.utils import norm_text

logger = logging.getLogger(__name__)


def has_job_evidence(soup: BeautifulSoup) -> bool:
    """A heading, the template's title element, or a JSON-LD block."""
    return (
        soup.find("h1") is not None
        or soup.select_one(TITLE_TEMPLATE_SELECTOR) is not None
        or soup.select_one(JSON_LD_SELECTOR) is not None
    )


def detect_login_wall(soup: BeautifulSoup) -> bool:
    """Sign-in page signals: title/heading phrasing, password input, login form."""
    title = soup.find("title")
    if title and LOGIN_PATTERN.search(norm_text(title.get_text())):
        logger.warning("Login wall detected: page title")
        return True

    # Only headings: the site header links to "Iniciar sesión" on every page
    for heading in soup.find_all(["h1", "h2"]):
        if LOGIN_PATTERN.search(norm_text(heading.get_text())):
            logger.warning("Login wall detected: heading")
            return True

    if soup.select_one(PASSWORD_INPUT_SELECTOR) is not None:
        logger.warning("Login wall detected: password input")
        return True

    for form in soup.find_all("form"):
        action = form.get("action") or ""
        if LOGIN_FORM_ACTION_PATTERN.search(action):
            logger.warning(f"Login wall detected: form action '{action}'")
            return True

    return False


def detect_bot_challenge(soup: BeautifulSoup) -> bool:
    """
    Detect a CAPTCHA or block page. Pages that show job content never count,
    even when an apply or report form embeds a reCAPTCHA widget.
    """
    if has_job_evidence(soup):
        return False

    for selector in CAPTCHA_SELECTORS:
        if soup.select_one(selector) is not None:
            logger.warning(f"CAPTCHA detected: {selector}")
            return True

    if BLOCKING_PATTERN.search(norm_text(soup.get_text(" "))):
        logger.warning("Possible bot challenge page detected")
        return True

    return False


def classify_page(soup: BeautifulSoup, is_detail: bool = True) -> PageStatus:
    """
    Classify a parsed document. Detail pages must also show positive evidence
    of a job posting; listing pages only need to pass the interstitial checks.
    """
    if detect_login_wall(soup) or detect_bot_challenge(soup):
        return PageStatus.INVALID_INTERSTITIAL
    if is_detail and not has_job_evidence(soup):
        logger.warning("No job content found on detail page")
        return PageStatus.INVALID_NO_CONTENT
    return PageStatus.VALID

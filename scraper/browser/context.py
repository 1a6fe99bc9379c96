"""
Browser context creation. One context is one crawl session: its own user
agent, proxy session and cookie jar.
"""

import logging
from typing import Any, Dict, Optional

from playwright.async_api import Browser, BrowserContext

from scraper.browser.proxy import get_proxy_config
from scraper.config.settings import settings

logger = logging.getLogger(__name__)


def context_options(user_agent: Optional[str] = None, session: int = 0) -> Dict[str, Any]:
    """
    Keyword arguments for ``Browser.new_context``.

    Chrome keeps its native viewport and fingerprint; only the locale, the
    Spanish Accept-Language header, the proxy and (optionally) the user agent
    are overridden.
    """
    options: Dict[str, Any] = {
        "viewport": None,
        "locale": settings.LOCALE,
        "extra_http_headers": {"Accept-Language": settings.ACCEPT_LANGUAGE},
        "ignore_https_errors": settings.IGNORE_HTTPS_ERRORS,
    }
    proxy = get_proxy_config(session)
    if proxy:
        options["proxy"] = proxy
    if user_agent:
        options["user_agent"] = user_agent
    return options


async def create_context(
    browser: Browser,
    user_agent: Optional[str] = None,
    session: int = 0,
) -> BrowserContext:
    context = await browser.new_context(**context_options(user_agent, session))
    logger.info(f"Browser context created for session {session} ({settings.LOCALE})")
    return context

"""
Browser Launch Module

Browser initialization using real Chrome for consistent fingerprinting.
"""

import logging
from playwright.async_api import Browser, Playwright

from scraper.config.settings import settings

logger = logging.getLogger(__name__)


async def create_browser(playwright: Playwright) -> Browser:
    """
    Launch a real Chrome browser instance.

    channel="chrome" uses system Chrome with its native fingerprint instead of
    the bundled Chromium. The browser outlives context rotations; only
    contexts are replaced when a session gets blocked.

    Args:
        playwright: Playwright instance

    Returns:
        Browser instance
    """
    browser = await playwright.chromium.launch(
        channel=settings.BROWSER_CHANNEL or None,
        headless=settings.HEADLESS,
    )

    logger.info(
        f"Browser launched (channel: {settings.BROWSER_CHANNEL or 'chromium'}, Headless: {settings.HEADLESS})"
    )
    return browser

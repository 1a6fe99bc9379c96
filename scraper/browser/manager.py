"""
Process-wide Playwright browser with one active context at a time.
"""

import logging
from typing import Optional

from playwright.async_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    async_playwright,
)

from scraper.browser.context import create_context
from scraper.browser.launch import create_browser
from scraper.browser.tabs import create_tab
from scraper.browser.user_agent import UserAgentProvider

logger = logging.getLogger(__name__)


class BrowserManager:
    """
    Owns the Playwright driver, the browser and the current context.

    The context is the crawl's "session": when a site starts serving login
    walls or CAPTCHAs, ``rotate_context`` drops it (cookies included) and opens
    a new one with another user agent and proxy session. The browser itself
    stays up for the whole run.
    """

    _playwright: Optional[Playwright] = None
    _browser: Optional[Browser] = None
    _context: Optional[BrowserContext] = None
    _user_agent: Optional[str] = None
    _session: int = 0

    @classmethod
    async def initialize(cls):
        """Start whatever is not running yet: driver, browser, context."""
        UserAgentProvider.initialize()

        if cls._playwright is None:
            cls._playwright = await async_playwright().start()
            logger.info("Playwright started.")

        if cls._browser is None:
            cls._browser = await create_browser(cls._playwright)

        if cls._context is None:
            await cls._open_context()

    @classmethod
    async def _open_context(cls):
        cls._user_agent = UserAgentProvider.get_random(exclude=cls._user_agent)
        logger.info(f"Session {cls._session} user agent: {cls._user_agent}")
        cls._context = await create_context(cls._browser, cls._user_agent, session=cls._session)

    @classmethod
    async def new_page(cls) -> Page:
        """Open a tab in the current context, starting the browser if needed."""
        if cls._context is None:
            await cls.initialize()
        return await create_tab(cls._context)

    @classmethod
    async def rotate_context(cls):
        """Replace the current context with a fresh session."""
        await cls._close_context()
        cls._session += 1
        logger.warning(f"Rotating browser context, now on session {cls._session}")
        await cls.initialize()

    @classmethod
    async def _close_context(cls):
        if cls._context is not None:
            await cls._context.close()
            cls._context = None

    @classmethod
    async def close(cls):
        """Tear everything down; the next ``initialize`` starts from session 0."""
        await cls._close_context()

        if cls._browser is not None:
            await cls._browser.close()
            cls._browser = None

        if cls._playwright is not None:
            await cls._playwright.stop()
            cls._playwright = None

        cls._session = 0
        logger.info("Browser closed and Playwright stopped.")

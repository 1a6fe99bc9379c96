"""
Page fetching over the shared Playwright browser.
"""

import logging

from scraper.config.settings import settings
from scraper.core.models import RawDocument
from scraper.core.rate_limit import page_limiter, with_retry
from scraper.browser.manager import BrowserManager

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Fetches documents through BrowserManager, one tab per request.
    """

    async def start(self) -> None:
        await BrowserManager.initialize()

    @with_retry()
    async def fetch(self, url: str) -> RawDocument:
        async with page_limiter:
            page = await BrowserManager.new_page()
            try:
                logger.info(f"Fetching {url}")
                await page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=settings.NAVIGATION_TIMEOUT,
                )
                content = await page.content()
                return RawDocument(url=url, content=content)
            finally:
                await page.close()

    async def rotate(self) -> None:
        """Start a fresh session: new context, user agent and proxy session."""
        await BrowserManager.rotate_context()

    async def close(self) -> None:
        await BrowserManager.close()

import logging
from playwright.async_api import BrowserContext, Page

from scraper.config.settings import settings

logger = logging.getLogger(__name__)


async def create_tab(context: BrowserContext) -> Page:
    """
    Creates a new page (tab) in the given browser context, with the
    configured navigation timeout applied.
    """
    page = await context.new_page()
    page.set_default_navigation_timeout(settings.NAVIGATION_TIMEOUT)
    return page

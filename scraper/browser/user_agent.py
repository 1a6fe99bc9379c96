"""
Random desktop Chrome user agents, one per browser context.
"""

import logging
from typing import Optional

from fake_useragent import UserAgent

logger = logging.getLogger(__name__)

FALLBACK_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)

# Draws allowed when trying to get a string different from the previous one
MAX_DRAWS = 5


class UserAgentProvider:
    """
    Lazily built fake_useragent source. Only Chrome strings are handed out,
    since the launched browser is Chrome.
    """

    _ua: Optional[UserAgent] = None

    @classmethod
    def initialize(cls):
        if cls._ua is not None:
            return
        try:
            cls._ua = UserAgent(fallback=FALLBACK_UA)
        except Exception as e:
            logger.warning(f"fake_useragent unavailable, every session uses the fallback: {e}")

    @classmethod
    def get_random(cls, exclude: Optional[str] = None) -> str:
        """A random Chrome user agent, different from ``exclude`` when possible."""
        if cls._ua is None:
            return FALLBACK_UA

        for _ in range(MAX_DRAWS):
            candidate = cls._ua.chrome
            if candidate != exclude:
                return candidate
        return candidate

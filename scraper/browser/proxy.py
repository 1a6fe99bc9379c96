"""
Proxy providers for browser contexts.

PROXY_PROVIDER selects one of the registered providers. Each context is
created with a session number that starts at 0 and increases every time the
runner rotates away from a blocked session. Providers that support sticky
sessions turn that number into a new exit IP.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from scraper.config.settings import settings

logger = logging.getLogger(__name__)

ProxyConfig = Dict[str, str]


class ProxyProvider(ABC):
    """Builds the Playwright ``proxy`` option for one session."""

    name: str = ""

    @abstractmethod
    def get_config(self, session: int = 0) -> Optional[ProxyConfig]:
        """Return ``server``/``username``/``password``, or None to go direct."""
        pass


class NoProxyProvider(ProxyProvider):
    name = "No Proxy"

    def get_config(self, session: int = 0) -> Optional[ProxyConfig]:
        return None


class ApiKeyProxyProvider(ProxyProvider):
    """
    Hosted proxy services authenticated by a single API key setting.
    Subclasses say where the key lives and how a session maps to credentials.
    """

    server: str = ""
    api_key_setting: str = ""

    def get_config(self, session: int = 0) -> Optional[ProxyConfig]:
        api_key = getattr(settings, self.api_key_setting)
        if not api_key:
            logger.warning(f"{self.api_key_setting} not found. Cannot use {self.name} proxy.")
            return None

        username, password = self.credentials(api_key, session)
        logger.info(f"Using {self.name} proxy (session {session})")
        return {"server": self.server, "username": username, "password": password}

    @abstractmethod
    def credentials(self, api_key: str, session: int) -> tuple:
        pass


class ScrapeOpsProvider(ApiKeyProxyProvider):
    """Rotates the exit IP on every request by itself; sessions are ignored."""

    name = "ScrapeOps"
    server = "http://proxy.scrapeops.io:5353"
    api_key_setting = "SCRAPEOPS_API_KEY"

    def credentials(self, api_key: str, session: int) -> tuple:
        return "scrapeops", api_key


class ScraperAPIProvider(ApiKeyProxyProvider):
    name = "ScraperAPI"
    server = "http://proxy-server.scraperapi.com:8001"
    api_key_setting = "SCRAPERAPI_API_KEY"

    def credentials(self, api_key: str, session: int) -> tuple:
        return f"scraperapi.session_number={session}", api_key


class ZenRowsProvider(ApiKeyProxyProvider):
    name = "ZenRows"
    server = "http://api.zenrows.com:8001"
    api_key_setting = "ZENROWS_API_KEY"

    def credentials(self, api_key: str, session: int) -> tuple:
        # Playwright renders pages itself, so js_render stays off
        params = "premium_proxy=true&antibot=true"
        if session:
            params += f"&session_id={session}"
        return api_key, params


class GenericProxyProvider(ProxyProvider):
    """
    Any HTTP/SOCKS proxy. PROXY_SERVER may list several servers separated by
    commas; sessions cycle through them in order.
    """

    name = "Generic Proxy"

    @staticmethod
    def servers() -> List[str]:
        return [s.strip() for s in (settings.PROXY_SERVER or "").split(",") if s.strip()]

    def get_config(self, session: int = 0) -> Optional[ProxyConfig]:
        servers = self.servers()
        if not servers:
            logger.warning("PROXY_SERVER not found. Cannot use generic proxy.")
            return None

        config = {"server": servers[session % len(servers)]}
        if settings.PROXY_USERNAME:
            config["username"] = settings.PROXY_USERNAME
        if settings.PROXY_PASSWORD:
            config["password"] = settings.PROXY_PASSWORD

        logger.info(f"Using generic proxy {config['server']} (session {session})")
        return config


PROXY_PROVIDERS: Dict[str, type] = {
    "none": NoProxyProvider,
    "scrapeops": ScrapeOpsProvider,
    "scraperapi": ScraperAPIProvider,
    "generic": GenericProxyProvider,
    "zenrows": ZenRowsProvider,
}


def get_proxy_config(session: int = 0) -> Optional[ProxyConfig]:
    """Proxy option for a new context, or None for a direct connection."""
    provider_name = settings.PROXY_PROVIDER.lower()
    provider_class = PROXY_PROVIDERS.get(provider_name)

    if provider_class is None:
        logger.error(
            f"Unknown proxy provider '{provider_name}' "
            f"(available: {', '.join(PROXY_PROVIDERS)}); connecting directly."
        )
        return None

    return provider_class().get_config(session)

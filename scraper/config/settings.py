from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    """
    Configuration settings for the scraper.
    """

    # Browser settings
    HEADLESS: bool = True
    # "chrome" uses the system Chrome; empty uses the bundled Chromium
    BROWSER_CHANNEL: str = "chrome"
    # Some proxy networks cause TLS verification failures
    # (e.g., net::ERR_CERT_AUTHORITY_INVALID).
    IGNORE_HTTPS_ERRORS: bool = True
    LOCALE: str = "es-MX"
    ACCEPT_LANGUAGE: str = "es-ES,es;q=0.9,en;q=0.8"

    # Rate limiting & Concurrency
    MAX_CONCURRENT_PAGES: int = 5

    # Retries
    MAX_RETRIES: int = 2
    RETRY_BASE_DELAY: float = 5.0  # seconds
    RETRY_MAX_DELAY: float = 10.0  # seconds
    # How many times a blocked document may be refetched with a fresh context
    MAX_SESSION_ROTATIONS: int = 2

    # Timeouts
    NAVIGATION_TIMEOUT: int = 45000  # ms

    # Proxies
    PROXY_PROVIDER: str = "none"
    SCRAPEOPS_API_KEY: Optional[str] = None
    SCRAPERAPI_API_KEY: Optional[str] = None
    ZENROWS_API_KEY: Optional[str] = None
    PROXY_SERVER: Optional[str] = None
    PROXY_USERNAME: Optional[str] = None
    PROXY_PASSWORD: Optional[str] = None

    # Crawl
    START_URLS: str = "https://www.computrabajo.com.mx/empleos-en-mexico"
    RESULTS_WANTED: int = 50
    MAX_REQUESTS_PER_CRAWL: int = 1000

    # Output
    OUTPUT_PATH: Path = BASE_DIR / "storage" / "jobs.jsonl"

settings = Settings()

"""
ComputrabajoAdapter - Job portal adapter for computrabajo.com

Implements JobPortalAdapter interface. Delegates all work to submodules:
- discovery.py for listing links and pagination
- scraping.py for individual job detail extraction
"""

import logging

from scraper.adapters.base import JobPortalAdapter
from scraper.core.models import ExtractionResult, ListingResult, RawDocument
from scraper.adapters.computrabajo.config import BASE_URL, SOURCE
from scraper.adapters.computrabajo import discovery as discovery_module
from scraper.adapters.computrabajo import scraping as scraping_module

logger = logging.getLogger(__name__)


class ComputrabajoAdapter(JobPortalAdapter):
    """
    Computrabajo adapter preferring embedded JSON-LD, with template and
    generic markup fallbacks for every field.
    """

    name = "computrabajo"
    BASE_URL = BASE_URL
    SOURCE = SOURCE

    def is_detail_url(self, url: str) -> bool:
        return discovery_module.is_detail_url(url)

    def extract_job(self, document: RawDocument) -> ExtractionResult:
        return scraping_module.extract_job_detail(document)

    def discover_links(self, document: RawDocument) -> ListingResult:
        return discovery_module.extract_listing_links(document)

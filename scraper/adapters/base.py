from abc import ABC, abstractmethod

from scraper.core.models import ExtractionResult, ListingResult, RawDocument


class JobPortalAdapter(ABC):
    """
    Abstract base class for all job portal adapters.

    Adapters never fetch: the runner hands them already fetched documents and
    acts on the results they return.
    """

    name: str = ""

    @abstractmethod
    def is_detail_url(self, url: str) -> bool:
        """
        Decide from the URL alone whether it points at a job detail page.
        """
        pass

    @abstractmethod
    def extract_job(self, document: RawDocument) -> ExtractionResult:
        """
        Extract a single job detail page.
        Args:
            document (RawDocument): The fetched detail page.
        Returns:
            ExtractionResult: A record, a rejection, or a retry signal.
        """
        pass

    @abstractmethod
    def discover_links(self, document: RawDocument) -> ListingResult:
        """
        Discover detail and pagination URLs on a listing page.
        Args:
            document (RawDocument): The fetched listing page.
        Returns:
            ListingResult: The links found, or a retry signal.
        """
        pass

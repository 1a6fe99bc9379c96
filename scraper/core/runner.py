import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Deque, Dict, List, Optional, Protocol, Type

from scraper.config.settings import settings
from scraper.adapters.base import JobPortalAdapter
from scraper.adapters.computrabajo.adapter import ComputrabajoAdapter
from scraper.adapters.computrabajo.discovery import normalize_start_urls
from scraper.browser.fetcher import PageFetcher
from scraper.core.models import RawDocument
from scraper.core.state import CrawlState
from scraper.core.storage import DatasetWriter

logger = logging.getLogger(__name__)

ADAPTERS: Dict[str, Type[JobPortalAdapter]] = {
    "computrabajo": ComputrabajoAdapter,
}


class Fetcher(Protocol):
    async def fetch(self, url: str) -> RawDocument: ...

    async def rotate(self) -> None: ...


class Sink(Protocol):
    def write(self, item: Dict[str, Any]) -> None: ...


@dataclass
class CrawlRequest:
    url: str
    is_detail: bool
    rotations: int = 0


class Runner:
    """
    Orchestrates a crawl: fetches queued URLs in batches, hands documents to the
    adapter and acts on what it returns (save, enqueue, or rotate and refetch).
    """

    def __init__(
        self,
        adapter: JobPortalAdapter,
        fetcher: Fetcher,
        sink: Sink,
        state: CrawlState,
        batch_size: int = settings.MAX_CONCURRENT_PAGES,
        max_rotations: int = settings.MAX_SESSION_ROTATIONS,
    ):
        self.adapter = adapter
        self.fetcher = fetcher
        self.sink = sink
        self.state = state
        self.batch_size = max(1, batch_size)
        self.max_rotations = max_rotations
        self.queue: Deque[CrawlRequest] = deque()
        self.failed: List[str] = []

    def enqueue(self, url: str, is_detail: Optional[bool] = None) -> bool:
        if not self.state.mark_seen(url):
            return False
        if is_detail is None:
            is_detail = self.adapter.is_detail_url(url)
        self.queue.append(CrawlRequest(url=url, is_detail=is_detail))
        return True

    async def crawl(self, start_urls: List[str]) -> CrawlState:
        for url in start_urls:
            self.enqueue(url)

        logger.info(f"Target: {self.state.results_wanted} jobs")

        while self.queue:
            if self.state.target_reached:
                logger.info(
                    f"Limit reached ({self.state.saved}/{self.state.results_wanted}), stopping"
                )
                break
            if not self.state.can_fetch:
                logger.warning(f"Request budget of {self.state.max_requests} exhausted")
                break

            batch = self._next_batch()
            results = await asyncio.gather(
                *[self._process(request) for request in batch], return_exceptions=True
            )

            retries: List[CrawlRequest] = []
            for request, result in zip(batch, results):
                if isinstance(result, Exception):
                    logger.error(f"Request failed: {request.url} :: {result}")
                    self.failed.append(request.url)
                elif result is not None:
                    retries.append(result)

            if retries:
                await self._retry_with_new_session(retries)

        logger.info(
            f"✓ Crawl finished. Saved {self.state.saved}/{self.state.results_wanted} jobs "
            f"({self.state.requests_made} requests, {len(self.failed)} failed)."
        )
        return self.state

    def _next_batch(self) -> List[CrawlRequest]:
        batch = []
        budget = self.state.max_requests - self.state.requests_made
        while self.queue and len(batch) < min(self.batch_size, budget):
            batch.append(self.queue.popleft())
        return batch

    async def _retry_with_new_session(self, retries: List[CrawlRequest]) -> None:
        requeue = []
        for request in retries:
            if request.rotations >= self.max_rotations:
                logger.error(
                    f"Request failed: {request.url} :: still blocked after {request.rotations} session rotations"
                )
                self.failed.append(request.url)
            else:
                request.rotations += 1
                requeue.append(request)

        if not requeue:
            return

        await self.fetcher.rotate()
        for request in reversed(requeue):
            self.queue.appendleft(request)

    async def _process(self, request: CrawlRequest) -> Optional[CrawlRequest]:
        """
        Fetch and handle one request. Returns the request itself when the
        document asked for a retry.
        """
        if request.is_detail and self.state.target_reached:
            logger.info(f"Limit reached, skipping {request.url}")
            return None

        self.state.record_request()
        document = await self.fetcher.fetch(request.url)

        if request.is_detail:
            return self._handle_detail(request, document)
        return self._handle_listing(request, document)

    def _handle_detail(self, request: CrawlRequest, document: RawDocument) -> Optional[CrawlRequest]:
        result = self.adapter.extract_job(document)
        if result.should_retry:
            return request
        if not result.has_record:
            return None
        if self.state.target_reached:
            logger.info(f"Limit reached, dropping {request.url}")
            return None

        self.sink.write(result.record.to_dict())
        saved = self.state.record_saved()
        logger.info(f"[{saved}/{self.state.results_wanted}] Saved: {result.record.title}")
        return None

    def _handle_listing(self, request: CrawlRequest, document: RawDocument) -> Optional[CrawlRequest]:
        logger.info(
            f"Listing page: {request.url} ({self.state.saved}/{self.state.results_wanted} saved)"
        )
        result = self.adapter.discover_links(document)
        if result.should_retry:
            return request
        if self.state.target_reached:
            return None

        added = sum(self.enqueue(url, is_detail=True) for url in result.detail_urls)
        added += sum(self.enqueue(url) for url in result.next_page_urls)
        logger.info(f"Enqueued {added} new URLs from {request.url}")
        return None


async def run(
    portal: str,
    start_urls: Any,
    results_wanted: int = settings.RESULTS_WANTED,
    output_path: Path = settings.OUTPUT_PATH,
) -> CrawlState:
    """
    Run a full crawl for a portal with the Playwright fetcher and a JSON Lines
    dataset.
    """
    adapter_cls = ADAPTERS.get(portal.lower())
    if not adapter_cls:
        raise ValueError(
            f"Portal '{portal}' not supported. Available portals: {list(ADAPTERS.keys())}"
        )

    urls = normalize_start_urls(start_urls)
    state = CrawlState(
        results_wanted=results_wanted,
        max_requests=settings.MAX_REQUESTS_PER_CRAWL,
    )
    fetcher = PageFetcher()
    runner = Runner(adapter_cls(), fetcher, DatasetWriter(output_path), state)

    try:
        await fetcher.start()
        await runner.crawl(urls)
    finally:
        await fetcher.close()

    logger.info(f"Dataset written to {output_path}")
    return state

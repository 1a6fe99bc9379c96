"""
Run-wide crawl bookkeeping, owned by the Runner and passed in explicitly.
"""

import logging
from dataclasses import dataclass, field
from typing import Set

logger = logging.getLogger(__name__)


@dataclass
class CrawlState:
    """
    Counters and the seen-URL set for one crawl.
    """

    results_wanted: int = 50
    max_requests: int = 1000
    saved: int = 0
    requests_made: int = 0
    seen_urls: Set[str] = field(default_factory=set)

    def __post_init__(self):
        self.results_wanted = max(1, int(self.results_wanted))

    @property
    def target_reached(self) -> bool:
        return self.saved >= self.results_wanted

    @property
    def can_fetch(self) -> bool:
        return self.requests_made < self.max_requests

    def mark_seen(self, url: str) -> bool:
        """Record a URL; False if it was already enqueued once."""
        if url in self.seen_urls:
            return False
        self.seen_urls.add(url)
        return True

    def record_request(self) -> None:
        self.requests_made += 1

    def record_saved(self) -> int:
        self.saved += 1
        return self.saved

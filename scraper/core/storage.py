"""
Record sinks. The crawl appends one dict per accepted job.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class DatasetWriter:
    """
    Appends records to a JSON Lines file, one object per line.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def write(self, item: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(item, ensure_ascii=False) + "\n")


class MemorySink:
    """Keeps records in a list; used for dry runs and tests."""

    def __init__(self):
        self.items: List[Dict[str, Any]] = []

    def write(self, item: Dict[str, Any]) -> None:
        self.items.append(item)

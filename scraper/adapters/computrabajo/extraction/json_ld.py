"""
JSON-LD extraction: finds the schema.org JobPosting embedded in a document and
projects it onto a StructuredJobRecord.
"""

import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup

from scraper.core.models import StructuredJobRecord
from scraper.adapters.computrabajo.selectors import JSON_LD_SELECTOR, JOB_POSTING_TYPE
from scraper.adapters.computrabajo.extraction.salary import normalize_salary
from scraper.adapters.computrabajo.utils import norm_text

logger = logging.getLogger(__name__)


def _flatten(data: Any) -> List[Dict[str, Any]]:
    """A block may hold one object, an array of objects, or an @graph wrapper."""
    if isinstance(data, list):
        items = data
    elif isinstance(data, dict) and isinstance(data.get("@graph"), list):
        items = data["@graph"]
    else:
        items = [data]
    return [item for item in items if isinstance(item, dict)]


def is_job_posting(item: Dict[str, Any]) -> bool:
    item_type = item.get("@type") or item.get("type")
    if isinstance(item_type, list):
        return JOB_POSTING_TYPE in item_type
    return item_type == JOB_POSTING_TYPE


def find_job_postings(soup: BeautifulSoup) -> List[Dict[str, Any]]:
    """
    Collect every JobPosting item from all JSON-LD blocks, in document order.
    A block that fails to parse is skipped; the rest are still scanned.
    """
    postings = []
    for script in soup.select(JSON_LD_SELECTOR):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.debug(f"Skipping malformed JSON-LD block: {e}")
            continue
        postings.extend(item for item in _flatten(data) if is_job_posting(item))
    return postings


def _location_from_job_location(job_location: Any) -> Optional[str]:
    entries = job_location if isinstance(job_location, list) else [job_location]
    pieces = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        address = entry.get("address") or {}
        if not isinstance(address, dict):
            continue
        parts = [
            _address_part(address.get("addressLocality")),
            _address_part(address.get("addressRegion")),
            _address_part(address.get("addressCountry")),
        ]
        piece = ", ".join(part for part in parts if part)
        if piece:
            pieces.append(piece)
    return " | ".join(pieces) or None


def _address_part(value: Any) -> str:
    # addressCountry is sometimes a Country object rather than a string
    if isinstance(value, dict):
        value = value.get("name")
    return norm_text(value) if isinstance(value, str) else ""


def _organization_name(organization: Any) -> Optional[str]:
    if isinstance(organization, dict):
        name = organization.get("name")
        return name if isinstance(name, str) else None
    if isinstance(organization, str):
        return organization
    return None


def _employment_types(value: Any) -> Optional[List[str]]:
    if not value:
        return None
    values: Iterable[Any] = value if isinstance(value, list) else [value]
    types = [norm_text(v) for v in values if isinstance(v, str)]
    types = [t for t in types if t]
    return types or None


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def to_structured_record(item: Dict[str, Any]) -> StructuredJobRecord:
    return StructuredJobRecord(
        title=_text(item.get("title")) or _text(item.get("name")),
        company=_organization_name(item.get("hiringOrganization")),
        date_posted=_text(item.get("datePosted")),
        description_raw=_text(item.get("description")),
        location=_location_from_job_location(item.get("jobLocation")),
        salary=normalize_salary(item.get("baseSalary")),
        employment_type=_employment_types(item.get("employmentType")),
    )


def read_structured_job(soup: BeautifulSoup) -> Optional[StructuredJobRecord]:
    """Structured view of the first embedded JobPosting, or None if there is none."""
    postings = find_job_postings(soup)
    if not postings:
        return None
    if len(postings) > 1:
        logger.debug(f"Found {len(postings)} JobPosting items, using the first")
    return to_structured_record(postings[0])

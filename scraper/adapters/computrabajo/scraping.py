"""
Job detail extraction: classifies a fetched detail document, resolves every
field through its probe table and assembles the final JobRecord.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from scraper.core.models import (
    ExtractionResult,
    JobRecord,
    PageStatus,
    RawDocument,
    Salary,
)
from scraper.adapters.computrabajo.config import (
    MAX_TITLE_CHARS,
    SHORT_DESCRIPTION_CHARS,
    SOURCE,
)
from scraper.adapters.computrabajo.selectors import INTERSTITIAL_PATTERN
from scraper.adapters.computrabajo.utils import parse_html
from scraper.adapters.computrabajo.validity import classify_page
from scraper.adapters.computrabajo.extraction.fields import resolve_all
from scraper.adapters.computrabajo.extraction.json_ld import read_structured_job
from scraper.adapters.computrabajo.extraction.probes import ProbeContext
from scraper.adapters.computrabajo.extraction.sanitizer import looks_like_style_leak

logger = logging.getLogger(__name__)


def _matches_interstitial(text: Optional[str]) -> bool:
    return bool(text) and INTERSTITIAL_PATTERN.search(text) is not None


def _rejection_reason(title: Optional[str], description_text: Optional[str]) -> Optional[str]:
    if not title:
        return "missing title"
    if len(title) > MAX_TITLE_CHARS:
        return f"title longer than {MAX_TITLE_CHARS} characters"
    if _matches_interstitial(title):
        return "title matches interstitial phrasing"
    if (
        description_text
        and len(description_text) < SHORT_DESCRIPTION_CHARS
        and _matches_interstitial(description_text)
    ):
        return "description matches interstitial phrasing"
    return None


def assemble_record(url: str, fields: Dict[str, Any]) -> ExtractionResult:
    """
    Build the JobRecord from resolved fields, applying the cross-field guards.

    Returns a result without a record (and with ``rejection_reason``) when the
    title is missing, implausibly long, or the content reads like a block page.
    """
    title: Optional[str] = fields.get("title")
    description = fields.get("description")
    description_html = description.html if description else None
    description_text = description.text if description else None

    reason = _rejection_reason(title, description_text)
    if reason:
        logger.warning(f"No record for {url}: {reason}")
        return ExtractionResult(url=url, status=PageStatus.VALID, rejection_reason=reason)

    # Description fields are produced together or cleared together
    if not description_html or not description_text or looks_like_style_leak(description_html):
        description_html = description_text = None

    salary_value: Union[Salary, str, None] = fields.get("salary")
    salary = salary_value if isinstance(salary_value, Salary) else None
    salary_text = salary_value if isinstance(salary_value, str) and salary is None else None

    employment_type: Union[str, List[str], None] = fields.get("employment_type")

    record = JobRecord(
        url=url,
        source=SOURCE,
        title=title,
        company=fields.get("company"),
        location=fields.get("location"),
        date_posted=fields.get("date_posted"),
        description_html=description_html,
        description_text=description_text,
        employment_type=employment_type,
        salary=salary,
        salary_text=salary_text,
    )
    return ExtractionResult(url=url, status=PageStatus.VALID, record=record)


def extract_job_detail(document: RawDocument) -> ExtractionResult:
    """
    Turn one detail document into a record, a "no record" outcome, or a
    retry signal. Never fetches; never raises for blocked pages.
    """
    soup = parse_html(document.content)

    status = classify_page(soup, is_detail=True)
    if status is not PageStatus.VALID:
        logger.warning(f"Detail page {document.url} classified as {status.value}")
        return ExtractionResult(url=document.url, status=status)

    structured = read_structured_job(soup)
    if structured:
        logger.info("Successfully extracted JSON-LD data")

    fields = resolve_all(ProbeContext(soup=soup, structured=structured))
    return assemble_record(document.url, fields)

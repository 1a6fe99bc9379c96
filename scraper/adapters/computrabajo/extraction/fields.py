"""
Per-field probe tables for Computrabajo detail pages.

Every table is tried top to bottom: the JSON-LD value first, then exact
template hooks, then a broad generic probe with the laxest predicate.
"""

import html
import re
from typing import Any, Dict, List, Optional

from scraper.adapters.computrabajo.config import (
    MAX_LOCATION_CHARS,
    MIN_BROAD_DESCRIPTION_CHARS,
    MIN_DESCRIPTION_CHARS,
    MIN_TITLE_CHARS,
)
from scraper.adapters.computrabajo.selectors import (
    COMPANY_GENERIC_SELECTOR,
    COMPANY_HEADER_SELECTOR,
    COMPANY_MICRODATA_SELECTORS,
    COMPANY_PROFILE_SELECTORS,
    COMPANY_TEMPLATE_SELECTOR,
    CONTRACT_LABELS,
    DATE_LABELS,
    DATE_TEMPLATE_SELECTOR,
    DESCRIPTION_GENERIC_SELECTOR,
    DESCRIPTION_SELECTORS,
    DESCRIPTION_TEMPLATE_SELECTOR,
    EMPLOYMENT_TEMPLATE_SELECTOR,
    LOCATION_GENERIC_SELECTOR,
    LOCATION_LABELS,
    LOCATION_MICRODATA_SELECTORS,
    LOCATION_TAIL_PATTERNS,
    LOCATION_TEMPLATE_SELECTOR,
    SALARY_LABELS,
    SCHEDULE_LABELS,
    TITLE_GENERIC_SELECTOR,
    TITLE_TEMPLATE_SELECTOR,
)
from scraper.adapters.computrabajo.utils import norm_text, truncate
from scraper.adapters.computrabajo.extraction.company import clean_company_name
from scraper.adapters.computrabajo.extraction.dates import interpret_date
from scraper.adapters.computrabajo.extraction.sanitizer import (
    Description,
    sanitize_description,
)
from scraper.adapters.computrabajo.extraction.probes import (
    CssHtml,
    CssText,
    FieldProbe,
    JoinedParts,
    LabeledGroup,
    LabeledValue,
    ProbeContext,
    StructuredField,
    min_length,
    min_text_length,
    resolve,
)

_SEGMENT_BREAK = re.compile(r"[|·]")
_TRAILING_SEPARATORS = re.compile(r"[\s,;:|·\-–]+$")
_ESCAPED_MARKUP = re.compile(r"&lt;\s*/?\s*[a-z][a-z0-9]*", re.IGNORECASE)


# --- Cleaners ---


def clean_location(raw: Optional[str]) -> Optional[str]:
    """Drop "Publicado hace...", apply-button and legal tails; cap the length."""
    text = norm_text(raw)
    for pattern in LOCATION_TAIL_PATTERNS:
        text = pattern.sub("", text)
    text = _TRAILING_SEPARATORS.sub("", norm_text(text))
    text = truncate(text, MAX_LOCATION_CHARS)
    return text or None


def clean_markup_location(raw: Optional[str]) -> Optional[str]:
    """Template text often trails the place with "| date" or "· company"."""
    if not raw:
        return None
    return clean_location(_SEGMENT_BREAK.split(norm_text(raw), maxsplit=1)[0])


def clean_structured_description(raw: Optional[str]) -> Optional[Description]:
    """JSON-LD descriptions are markup, plain text, or entity-escaped markup."""
    if not raw:
        return None
    if "<" not in raw and _ESCAPED_MARKUP.search(raw):
        raw = html.unescape(raw)
    return sanitize_description(raw)


# --- Probe tables ---

TITLE_PROBES = [
    FieldProbe("json_ld.title", StructuredField("title"), min_length(MIN_TITLE_CHARS)),
    FieldProbe("template.title_offer", CssText(TITLE_TEMPLATE_SELECTOR), min_length(MIN_TITLE_CHARS)),
    FieldProbe("generic.heading", CssText(TITLE_GENERIC_SELECTOR)),
]

COMPANY_PROBES = [
    FieldProbe("json_ld.hiringOrganization", StructuredField("company"), clean=clean_company_name),
    FieldProbe("template.company_link", CssText(COMPANY_TEMPLATE_SELECTOR), clean=clean_company_name),
    *[
        FieldProbe(f"microdata.{i}", CssText(selector), clean=clean_company_name)
        for i, selector in enumerate(COMPANY_MICRODATA_SELECTORS)
    ],
    *[
        FieldProbe(f"profile_link.{i}", CssText(selector), clean=clean_company_name)
        for i, selector in enumerate(COMPANY_PROFILE_SELECTORS)
    ],
    FieldProbe("template.header_rating", CssText(COMPANY_HEADER_SELECTOR), clean=clean_company_name),
    FieldProbe("generic.company_link", CssText(COMPANY_GENERIC_SELECTOR), clean=clean_company_name),
]

LOCATION_PROBES = [
    FieldProbe("json_ld.jobLocation", StructuredField("location"), clean=clean_location),
    FieldProbe("microdata.jobLocation", JoinedParts(LOCATION_MICRODATA_SELECTORS), clean=clean_location),
    FieldProbe("labeled.location", LabeledValue(LOCATION_LABELS), clean=clean_markup_location),
    FieldProbe("template.location", CssText(LOCATION_TEMPLATE_SELECTOR), clean=clean_markup_location),
    FieldProbe("generic.location", CssText(LOCATION_GENERIC_SELECTOR), clean=clean_markup_location),
]

# JSON-LD dates are already ISO and pass through untouched
DATE_PROBES = [
    FieldProbe("json_ld.datePosted", StructuredField("date_posted")),
    FieldProbe("template.date", CssText(DATE_TEMPLATE_SELECTOR), clean=interpret_date),
    FieldProbe("labeled.date", LabeledValue(DATE_LABELS), clean=interpret_date),
]

EMPLOYMENT_TYPE_PROBES = [
    FieldProbe("json_ld.employmentType", StructuredField("employment_type")),
    FieldProbe("template.employment", CssText(EMPLOYMENT_TEMPLATE_SELECTOR)),
    FieldProbe("labeled.contract_schedule", LabeledGroup([CONTRACT_LABELS, SCHEDULE_LABELS])),
]

# A Salary from JSON-LD, else the labeled text; never both
SALARY_PROBES = [
    FieldProbe("json_ld.baseSalary", StructuredField("salary")),
    FieldProbe("labeled.salary", LabeledValue(SALARY_LABELS)),
]

DESCRIPTION_PROBES = [
    FieldProbe(
        "json_ld.description",
        StructuredField("description_raw"),
        min_text_length(MIN_DESCRIPTION_CHARS),
        clean=clean_structured_description,
    ),
    FieldProbe(
        "template.description",
        CssHtml(DESCRIPTION_TEMPLATE_SELECTOR),
        min_text_length(MIN_DESCRIPTION_CHARS),
        clean=sanitize_description,
    ),
    *[
        FieldProbe(
            f"container.{i}",
            CssHtml(selector),
            min_text_length(MIN_DESCRIPTION_CHARS),
            clean=sanitize_description,
        )
        for i, selector in enumerate(DESCRIPTION_SELECTORS)
    ],
    FieldProbe(
        "generic.description",
        CssHtml(DESCRIPTION_GENERIC_SELECTOR),
        min_text_length(MIN_BROAD_DESCRIPTION_CHARS),
        clean=sanitize_description,
    ),
]

FIELD_PROBES: Dict[str, List[FieldProbe]] = {
    "title": TITLE_PROBES,
    "company": COMPANY_PROBES,
    "location": LOCATION_PROBES,
    "date_posted": DATE_PROBES,
    "employment_type": EMPLOYMENT_TYPE_PROBES,
    "salary": SALARY_PROBES,
    "description": DESCRIPTION_PROBES,
}


def resolve_field(field_name: str, ctx: ProbeContext) -> Any:
    return resolve(field_name, FIELD_PROBES[field_name], ctx)


def resolve_all(ctx: ProbeContext) -> Dict[str, Any]:
    """Resolve every field of a detail page against the same context."""
    return {name: resolve(name, probes, ctx) for name, probes in FIELD_PROBES.items()}

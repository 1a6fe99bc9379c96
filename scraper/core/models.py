from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class RawDocument:
    """
    A fetched page: its canonical URL and the raw markup body.
    """

    url: str
    content: str


@dataclass(frozen=True)
class Salary:
    """
    Structured compensation. A min/max range and a bare amount are never both set.
    """

    currency: Optional[str] = None
    period: Optional[str] = None
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    amount: Optional[Union[int, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.currency:
            out["salary_currency"] = self.currency
        if self.period:
            out["salary_period"] = self.period
        if self.min is not None:
            out["salary_min"] = self.min
        if self.max is not None:
            out["salary_max"] = self.max
        if self.amount is not None:
            out["salary_amount"] = self.amount
        return out


@dataclass(frozen=True)
class StructuredJobRecord:
    """
    Projection of the first schema.org JobPosting embedded in a document.
    """

    title: Optional[str] = None
    company: Optional[str] = None
    date_posted: Optional[str] = None
    description_raw: Optional[str] = None
    location: Optional[str] = None
    salary: Optional[Salary] = None
    employment_type: Optional[List[str]] = None


@dataclass(frozen=True)
class JobRecord:
    """
    Canonical Job model representing a standardized job posting.
    """

    url: str
    source: str
    title: str
    company: Optional[str] = None
    location: Optional[str] = None
    date_posted: Optional[str] = None
    description_html: Optional[str] = None
    description_text: Optional[str] = None
    employment_type: Optional[Union[str, List[str]]] = None
    salary: Optional[Salary] = None
    salary_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the dataset's field names."""
        out: Dict[str, Any] = {
            "url": self.url,
            "source": self.source,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "datePosted": self.date_posted,
            "description_html": self.description_html,
            "description_text": self.description_text,
            "employmentType": (
                list(self.employment_type)
                if isinstance(self.employment_type, list)
                else self.employment_type
            ),
        }
        if self.salary:
            out.update(self.salary.to_dict())
        elif self.salary_text:
            out["salary_text"] = self.salary_text
        return out


class PageStatus(str, Enum):
    """Classification of a fetched document."""

    VALID = "valid"
    INVALID_INTERSTITIAL = "invalid-interstitial"
    INVALID_NO_CONTENT = "invalid-no-content"


@dataclass(frozen=True)
class ExtractionResult:
    """
    Outcome of processing one detail document.

    Exactly one of three things happened: a record was assembled, the document
    was read but yielded no record (``rejection_reason``), or the document was
    not genuine content and should be fetched again (``should_retry``).
    """

    url: str
    status: PageStatus
    record: Optional[JobRecord] = None
    rejection_reason: Optional[str] = None

    @property
    def should_retry(self) -> bool:
        return self.status is not PageStatus.VALID

    @property
    def has_record(self) -> bool:
        return self.record is not None


@dataclass(frozen=True)
class ListingResult:
    """Links discovered on a listing page, or a retry signal."""

    url: str
    status: PageStatus
    detail_urls: List[str] = field(default_factory=list)
    next_page_urls: List[str] = field(default_factory=list)

    @property
    def should_retry(self) -> bool:
        return self.status is not PageStatus.VALID

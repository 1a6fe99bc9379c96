"""
Field probes and the generic resolver that evaluates them.

A probe pairs a locator (where a candidate value comes from) with a predicate
(whether the candidate is acceptable). Each field declares an ordered table of
probes; ``resolve`` returns the first accepted candidate. Order is the only
tie-break: an earlier probe always wins, however rich a later one looks.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Pattern, Sequence

from bs4 import BeautifulSoup

from scraper.core.models import StructuredJobRecord
from scraper.adapters.computrabajo.utils import (
    extract_labeled_value,
    norm_text,
    select_text,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProbeContext:
    """Everything a locator may read: the parsed page and its JSON-LD view."""

    soup: BeautifulSoup
    structured: Optional[StructuredJobRecord] = None


# --- Locators ---


@dataclass(frozen=True)
class StructuredField:
    """Reads an attribute of the StructuredJobRecord, if one was found."""

    attribute: str

    def __call__(self, ctx: ProbeContext) -> Any:
        if ctx.structured is None:
            return None
        return getattr(ctx.structured, self.attribute)


@dataclass(frozen=True)
class CssText:
    """Raw text of the first element matching a selector."""

    selector: str

    def __call__(self, ctx: ProbeContext) -> Optional[str]:
        return select_text(ctx.soup, self.selector)


@dataclass(frozen=True)
class CssHtml:
    """Inner markup of the first element matching a selector."""

    selector: str

    def __call__(self, ctx: ProbeContext) -> Optional[str]:
        element = ctx.soup.select_one(self.selector)
        if element is None:
            return None
        return element.decode_contents()


@dataclass(frozen=True)
class LabeledValue:
    """Value shown beside one of the given labels (chips or dt/dd pairs)."""

    labels: Sequence[Pattern]

    def __call__(self, ctx: ProbeContext) -> Optional[str]:
        return extract_labeled_value(ctx.soup, list(self.labels))


@dataclass(frozen=True)
class LabeledGroup:
    """One labeled value per label set, collected into a list."""

    label_sets: Sequence[Sequence[Pattern]]

    def __call__(self, ctx: ProbeContext) -> List[str]:
        values = []
        for labels in self.label_sets:
            value = extract_labeled_value(ctx.soup, list(labels))
            if value:
                values.append(value)
        return values


@dataclass(frozen=True)
class JoinedParts:
    """Text of several selectors joined in order, skipping the empty ones."""

    selectors: Sequence[str]
    separator: str = ", "

    def __call__(self, ctx: ProbeContext) -> Optional[str]:
        parts = [norm_text(select_text(ctx.soup, selector)) for selector in self.selectors]
        return self.separator.join(part for part in parts if part) or None


# --- Predicates ---


def has_value(value: Any) -> bool:
    return value is not None and value != "" and value != []


def min_length(chars: int) -> Callable[[Any], bool]:
    def predicate(value: Any) -> bool:
        return isinstance(value, str) and len(value) >= chars

    return predicate


def min_text_length(chars: int) -> Callable[[Any], bool]:
    """For values carrying a ``text`` projection (sanitized descriptions)."""

    def predicate(value: Any) -> bool:
        return len(getattr(value, "text", "") or "") > chars

    return predicate


@dataclass(frozen=True)
class FieldProbe:
    """
    One extraction strategy for a field.

    ``clean`` receives the raw located value and returns the final value, or
    None to reject it; without one, the value is whitespace-normalized.
    """

    name: str
    locator: Callable[[ProbeContext], Any]
    predicate: Callable[[Any], bool] = has_value
    clean: Optional[Callable[[Any], Any]] = None


def normalize_candidate(value: Any) -> Any:
    """Normalize strings and string lists; other structured values pass through."""
    if value is None:
        return None
    if isinstance(value, str):
        return norm_text(value) or None
    if isinstance(value, (list, tuple)):
        seen = []
        for item in value:
            text = norm_text(item) if isinstance(item, str) else ""
            if text and text not in seen:
                seen.append(text)
        return seen or None
    return value


def resolve(field_name: str, probes: Sequence[FieldProbe], ctx: ProbeContext) -> Any:
    """
    Return the first candidate, in probe order, that survives normalization,
    cleanup and its probe's predicate. None when every probe misses.
    """
    for probe in probes:
        raw = probe.locator(ctx)
        normalized = normalize_candidate(raw)
        if normalized is None:
            continue

        value = probe.clean(raw) if probe.clean else normalized
        if value is None or not probe.predicate(value):
            logger.debug(f"{field_name}: probe '{probe.name}' rejected its candidate")
            continue

        logger.debug(f"{field_name}: resolved by '{probe.name}'")
        return value

    logger.debug(f"{field_name}: no probe produced a value")
    return None

"""
Posted-date interpretation for absolute and Spanish relative expressions.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

ABSOLUTE_DATE_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})(?:[ t](\d{2}):(\d{2})(?::(\d{2}))?)?"
)

# "hace 3 días", "hace una hora", "publicado hace 15 minutos"
RELATIVE_DATE_PATTERN = re.compile(
    r"hace\s+(\d+|una|un|uno)\s+"
    r"(minutos?|horas?|d[ií]as?|semanas?|mes(?:es)?|a[ñn]os?)\b"
)

WORD_QUANTITIES = {"un": 1, "una": 1, "uno": 1}

# Unit stem -> relativedelta keyword
UNIT_KEYWORDS = [
    ("minuto", "minutes"),
    ("hora", "hours"),
    ("día", "days"),
    ("dia", "days"),
    ("semana", "weeks"),
    ("mes", "months"),
    ("año", "years"),
    ("ano", "years"),
]


def to_iso(moment: datetime) -> str:
    """Render a timestamp as ISO-8601 UTC with a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def parse_absolute_date(text: str) -> Optional[datetime]:
    """Find a ``YYYY-MM-DD`` date (optionally with time) anywhere in ``text``."""
    match = ABSOLUTE_DATE_PATTERN.search(text)
    if not match:
        return None
    year, month, day, hour, minute, second = match.groups()
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour or 0),
            int(minute or 0),
            int(second or 0),
            tzinfo=timezone.utc,
        )
    except ValueError:
        logger.debug(f"Ignoring impossible date: {match.group(0)}")
        return None


def parse_relative_date(text: str, now: Optional[datetime] = None) -> Optional[datetime]:
    """Resolve "hace <n> <unidad>" against ``now`` using calendar arithmetic."""
    match = RELATIVE_DATE_PATTERN.search(text)
    if not match:
        return None

    quantity_raw, unit = match.groups()
    quantity = WORD_QUANTITIES.get(quantity_raw)
    if quantity is None:
        quantity = int(quantity_raw)

    keyword = next((kw for stem, kw in UNIT_KEYWORDS if unit.startswith(stem)), None)
    if keyword is None:
        return None

    now = now or datetime.now(timezone.utc)
    return now - relativedelta(**{keyword: quantity})


def interpret_date(raw: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
    """
    Convert a posted-date expression into an ISO-8601 timestamp.

    An absolute date wins over any relative phrasing in the same string.
    Text matching neither form yields None; the literal is never returned.
    """
    text = (raw or "").lower().strip()
    if not text:
        return None

    absolute = parse_absolute_date(text)
    if absolute:
        return to_iso(absolute)

    relative = parse_relative_date(text, now)
    if relative:
        return to_iso(relative)

    return None

"""
Company name cleanup: keep only the name, drop ratings, popups and legalese.
"""

import re
from typing import Optional

from scraper.adapters.computrabajo.config import MAX_COMPANY_CHARS
from scraper.adapters.computrabajo.selectors import COMPANY_STOP_TOKENS
from scraper.adapters.computrabajo.utils import norm_text, truncate

# Line breaks, pipes and mid-dots precede rating/legal tails on this template
_SEGMENT_BREAK = re.compile(r"[\r\n|·]")
_RATING_TOKEN = re.compile(r"\b\d[\d.,]{0,3}\b")
_TRAILING_JUNK = re.compile(r"[\s•·|,;:\-–]+$")


def clean_company_name(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None

    text = raw.replace("\u00a0", " ").strip()
    text = _SEGMENT_BREAK.split(text, maxsplit=1)[0]
    text = norm_text(_RATING_TOKEN.sub("", text))

    lowered = text.lower()
    for token in COMPANY_STOP_TOKENS:
        idx = lowered.find(token)
        if idx > 0:
            text = text[:idx]
            lowered = lowered[:idx]

    text = _TRAILING_JUNK.sub("", norm_text(text))
    text = truncate(text, MAX_COMPANY_CHARS)
    return text or None

"""
Salary normalization from JSON-LD ``baseSalary`` objects.
"""

import logging
import re
from typing import Any, Optional, Union

from scraper.core.models import Salary

logger = logging.getLogger(__name__)

Number = Union[int, float]

_NUMERIC = re.compile(r"^-?\d+(?:\.\d+)?$")


def _to_number(value: Any) -> Optional[Number]:
    """Numbers pass through; numeric strings ("12000", "12,000.50") are coerced."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        cleaned = value.strip().replace(",", "")
        if _NUMERIC.match(cleaned):
            number = float(cleaned)
            return int(number) if number.is_integer() else number
    return None


def _to_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def normalize_salary(base_salary: Any) -> Optional[Salary]:
    """
    Convert a schema.org compensation value into a Salary.

    Accepts a bare number, a ``MonetaryAmount`` whose ``value`` is a number or a
    ``QuantitativeValue``, or a flat object carrying ``minValue``/``maxValue``.
    A min/max pair always wins over a bare amount. Returns None when nothing
    usable is present so the caller can fall back to the page text.
    """
    if base_salary is None or base_salary == "":
        return None

    if not isinstance(base_salary, dict):
        amount = _to_number(base_salary)
        return Salary(amount=amount) if amount is not None else None

    is_monetary = base_salary.get("@type") == "MonetaryAmount"
    if is_monetary:
        value = base_salary.get("value")
    else:
        value = base_salary.get("value") or base_salary
    currency = _to_text(base_salary.get("currency"))

    min_value = max_value = amount = None
    unit_text = None

    if isinstance(value, dict):
        min_value = _to_number(value.get("minValue"))
        max_value = _to_number(value.get("maxValue"))
        amount = _to_number(value.get("value"))
        unit_text = _to_text(value.get("unitText")) or _to_text(base_salary.get("unitText"))
        currency = currency or _to_text(value.get("currency"))
    else:
        amount = _to_number(value)
        unit_text = _to_text(base_salary.get("unitText"))

    if min_value is not None or max_value is not None:
        amount = None

    salary = Salary(
        currency=currency,
        period=unit_text,
        min=min_value,
        max=max_value,
        amount=amount,
    )
    if not salary.to_dict():
        logger.debug("baseSalary present but carried no usable values")
        return None
    return salary

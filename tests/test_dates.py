"""Tests for posted-date interpretation."""

import os
import sys
from datetime import datetime, timedelta, timezone

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from scraper.adapters.computrabajo.extraction.dates import interpret_date, to_iso

NOW = datetime(2025, 10, 20, 15, 30, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "raw",
    [
        "2025-10-18",
        "Publicado el 2025-10-18 en Ciudad de México",
        "2025-10-18T09:15:00",
    ],
)
def test_absolute_date_anywhere_in_text(raw):
    result = interpret_date(raw, now=NOW)

    assert result is not None
    assert result.startswith("2025-10-18"), f"Expected 2025-10-18, got {result}"
    assert result.endswith("Z")


def test_absolute_date_wins_over_relative():
    assert interpret_date("hace 3 días (2025-10-18)", now=NOW).startswith("2025-10-18")


@pytest.mark.parametrize("days", [1, 2, 15, 30])
def test_relative_days(days):
    result = interpret_date(f"Publicado hace {days} días", now=NOW)

    assert result == to_iso(NOW - timedelta(days=days))


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Hace una hora", NOW - timedelta(hours=1)),
        ("hace 15 minutos", NOW - timedelta(minutes=15)),
        ("hace 1 día", NOW - timedelta(days=1)),
        ("hace 2 semanas", NOW - timedelta(weeks=2)),
        ("hace 1 mes", datetime(2025, 9, 20, 15, 30, tzinfo=timezone.utc)),
        ("hace un año", datetime(2024, 10, 20, 15, 30, tzinfo=timezone.utc)),
    ],
)
def test_relative_units(raw, expected):
    assert interpret_date(raw, now=NOW) == to_iso(expected)


@pytest.mark.parametrize(
    "now,raw,expected",
    [
        (datetime(2025, 3, 31, 12, 0, tzinfo=timezone.utc), "hace 1 mes", "2025-02-28T12:00:00Z"),
        (datetime(2024, 3, 31, 12, 0, tzinfo=timezone.utc), "hace 1 mes", "2024-02-29T12:00:00Z"),
        (datetime(2024, 2, 29, 8, 0, tzinfo=timezone.utc), "hace un año", "2023-02-28T08:00:00Z"),
    ],
)
def test_month_and_year_subtraction_clamps_day(now, raw, expected):
    assert interpret_date(raw, now=now) == expected


@pytest.mark.parametrize("raw", [None, "", "Publicado hace días", "ayer", "Fecha no disponible", "2025-13-45"])
def test_unrecognized_text_yields_none(raw):
    assert interpret_date(raw, now=NOW) is None


def test_to_iso_uses_utc_suffix():
    assert to_iso(datetime(2025, 1, 2, 3, 4, 5)) == "2025-01-02T03:04:05Z"

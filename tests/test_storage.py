"""Tests for crawl state bookkeeping and the JSON Lines dataset writer."""

import json
import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from scraper.core.state import CrawlState
from scraper.core.storage import DatasetWriter


def test_dataset_writer_appends_json_lines(tmp_path):
    path = tmp_path / "out" / "jobs.jsonl"
    writer = DatasetWriter(path)

    writer.write({"title": "Asesor de Ventas", "location": "Ciudad de México"})
    writer.write({"title": "Cajero"})

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert json.loads(lines[0])["location"] == "Ciudad de México"
    assert "México" in lines[0], "non-ASCII text is written as-is"


def test_state_counters():
    state = CrawlState(results_wanted=2, max_requests=1)

    assert state.mark_seen("https://example.com/a")
    assert not state.mark_seen("https://example.com/a")

    assert state.can_fetch
    state.record_request()
    assert not state.can_fetch

    state.record_saved()
    assert not state.target_reached
    state.record_saved()
    assert state.target_reached


def test_results_wanted_has_a_floor_of_one():
    assert CrawlState(results_wanted=0).results_wanted == 1

"""Tests for listing link discovery and start URL parsing."""

import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from scraper.core.models import PageStatus, RawDocument
from scraper.adapters.computrabajo.discovery import (
    extract_listing_links,
    is_detail_url,
    normalize_start_urls,
    normalize_url,
)

LISTING_URL = "https://www.computrabajo.com.mx/empleos-en-mexico"

LISTING_PAGE = """
<html><body>
  <article class="box_offer">
    <h2><a class="js-o-link" href="/ofertas-de-trabajo/oferta-de-trabajo-de-cajero-AAA111#lc=ListOffers-Score">Cajero</a></h2>
  </article>
  <article class="box_offer">
    <h2><a class="js-o-link" href="/ofertas-de-trabajo/oferta-de-trabajo-de-chofer-BBB222?utm_source=listado&utm_medium=web">Chofer</a></h2>
  </article>
  <article class="box_offer">
    <h2><a href="https://www.computrabajo.com.mx/ofertas-de-trabajo/oferta-de-trabajo-de-cajero-AAA111">Cajero (repetido)</a></h2>
  </article>
  <a href="mailto:contacto@example.com">Contacto</a>
  <div class="pagination">
    <a href="/empleos-en-mexico">1</a>
    <a href="/empleos-en-mexico?page=2&gclid=xyz">2</a>
    <a rel="next" href="/empleos-en-mexico?page=2">Siguiente</a>
  </div>
</body></html>
"""


def test_normalize_url_strips_tracking_and_fragment():
    url = normalize_url(
        "/ofertas-de-trabajo/oferta-de-trabajo-de-cajero-AAA111?utm_source=x&p=3&fbclid=y#top",
        LISTING_URL,
    )

    assert url == "https://www.computrabajo.com.mx/ofertas-de-trabajo/oferta-de-trabajo-de-cajero-AAA111?p=3"


@pytest.mark.parametrize("href", [None, "", "mailto:rh@example.com", "javascript:void(0)"])
def test_normalize_url_rejects_non_http_links(href):
    assert normalize_url(href, LISTING_URL) is None


def test_is_detail_url():
    assert is_detail_url("https://www.computrabajo.com.mx/ofertas-de-trabajo/oferta-de-trabajo-de-cajero-AAA111")
    assert is_detail_url("https://www.computrabajo.com.mx/empleo/12345")
    assert not is_detail_url(LISTING_URL)
    assert not is_detail_url("https://www.computrabajo.com.mx/empleos-en-mexico?page=2")


def test_listing_links_are_cleaned_and_deduplicated():
    result = extract_listing_links(RawDocument(url=LISTING_URL, content=LISTING_PAGE))

    assert result.status is PageStatus.VALID
    assert result.detail_urls == [
        "https://www.computrabajo.com.mx/ofertas-de-trabajo/oferta-de-trabajo-de-cajero-AAA111",
        "https://www.computrabajo.com.mx/ofertas-de-trabajo/oferta-de-trabajo-de-chofer-BBB222",
    ]
    assert result.next_page_urls == ["https://www.computrabajo.com.mx/empleos-en-mexico?page=2"], (
        "current page and tracking variants should collapse"
    )


def test_blocked_listing_asks_for_retry():
    page = '<html><body><div class="g-recaptcha"></div></body></html>'

    result = extract_listing_links(RawDocument(url=LISTING_URL, content=page))

    assert result.should_retry
    assert result.detail_urls == [] and result.next_page_urls == []


def test_start_urls_from_string():
    value = "https://www.computrabajo.com.mx/empleos-en-jalisco\nhttps://www.computrabajo.com.mx/empleos-en-puebla, not-a-url"

    assert normalize_start_urls(value) == [
        "https://www.computrabajo.com.mx/empleos-en-jalisco",
        "https://www.computrabajo.com.mx/empleos-en-puebla",
    ]


def test_start_urls_from_list_of_objects_and_strings():
    value = [
        {"url": "https://www.computrabajo.com.mx/empleos-en-jalisco"},
        "https://www.computrabajo.com.mx/empleos-en-puebla",
        {"label": "sin url"},
        42,
    ]

    assert len(normalize_start_urls(value)) == 2


def test_start_urls_from_input_mapping():
    value = {
        "startUrls": [{"url": "https://www.computrabajo.com.mx/empleos-en-jalisco"}],
        "startUrl": "https://www.computrabajo.com.mx/empleos-en-jalisco",
        "urls": "https://www.computrabajo.com.mx/empleos-en-puebla",
    }

    assert normalize_start_urls(value) == [
        "https://www.computrabajo.com.mx/empleos-en-jalisco",
        "https://www.computrabajo.com.mx/empleos-en-puebla",
    ]


@pytest.mark.parametrize("value", [None, "", [], ["ftp://example.com", "nada"], {"startUrls": []}])
def test_no_valid_start_urls_raises(value):
    with pytest.raises(ValueError):
        normalize_start_urls(value)

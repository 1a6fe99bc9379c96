"""Tests for description sanitization and its plain-text projection."""

import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from scraper.adapters.computrabajo.extraction.sanitizer import (
    html_to_text,
    looks_like_style_leak,
    sanitize_description,
    sanitize_html,
)

FRAGMENTS = [
    '<div class="box"><p style="color:blue">Hola <span>mundo</span></p>'
    '<script>alert(1)</script><a href="/empresa/acme" class="lnk">Acme</a></div>',
    "<div><h2>Requisitos</h2><ul><li>Experiencia en ventas</li><li>Licencia</li></ul>"
    "<p>Ofrecemos <b>prestaciones</b> de ley</p></div>",
    "<div><p>Uno</p></div><div><p>Dos</p></div>",
    "<p>Texto&nbsp;con   espacios\n\n y saltos</p><br/><p>Fin</p>",
]


def test_disallowed_markup_is_removed():
    html = sanitize_html(FRAGMENTS[0])

    assert "<p>Hola mundo</p>" in html
    assert '<a href="/empresa/acme">Acme</a>' in html
    assert "script" not in html and "alert" not in html
    assert "class=" not in html and "style=" not in html
    assert "<div" not in html and "<span" not in html


def test_block_boundaries_keep_words_apart():
    text = html_to_text("<div>Ventas</div><div>Zona norte</div>")

    assert text == "Ventas Zona norte"


def test_hidden_comment_and_popup_content_is_dropped():
    fragment = (
        "<p>Visible</p><!-- nota interna -->"
        '<div style="display: none">Oculto</div>'
        '<div id="complaint-popup-container">Denunciar empleo</div>'
        "<form><input name='q'/>Buscar</form>"
    )

    html = sanitize_html(fragment)

    assert html == "<p>Visible</p>"


@pytest.mark.parametrize("fragment", FRAGMENTS)
def test_sanitizing_is_idempotent(fragment):
    once = sanitize_html(fragment)

    assert sanitize_html(once) == once


@pytest.mark.parametrize("fragment", FRAGMENTS)
def test_text_matches_rendered_html(fragment):
    description = sanitize_description(fragment)

    assert description is not None
    assert description.text == html_to_text(description.html)
    assert "  " not in description.text


def test_text_rendering_of_list():
    description = sanitize_description(FRAGMENTS[1])

    assert description.text == "Requisitos Experiencia en ventas Licencia Ofrecemos prestaciones de ley"
    assert "<ul><li>Experiencia en ventas</li><li>Licencia</li></ul>" in description.html


def test_style_only_fragment_yields_nothing():
    assert sanitize_description("<style>{color:red}</style>") is None


def test_bare_stylesheet_text_trips_the_leak_guard():
    assert looks_like_style_leak(".oferta{color:red;margin:0}")
    assert sanitize_description(".oferta{color:red;margin:0}") is None


def test_braces_inside_prose_are_kept():
    assert not looks_like_style_leak("<p>Sueldo {a convenir}</p>")
    assert sanitize_description("<p>Sueldo {a convenir}</p>") is not None


@pytest.mark.parametrize("fragment", [None, "", "   ", "<script>var a = 1;</script>"])
def test_empty_fragments_yield_none(fragment):
    assert sanitize_description(fragment) is None

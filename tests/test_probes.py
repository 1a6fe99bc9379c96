"""Tests for the field probe tables and the generic resolver."""

import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from scraper.core.models import StructuredJobRecord
from scraper.adapters.computrabajo.utils import extract_labeled_value, parse_html
from scraper.adapters.computrabajo.selectors import LOCATION_LABELS, SALARY_LABELS, SCHEDULE_LABELS
from scraper.adapters.computrabajo.extraction.fields import (
    clean_location,
    clean_markup_location,
    resolve_field,
)
from scraper.adapters.computrabajo.extraction.probes import (
    CssText,
    FieldProbe,
    ProbeContext,
    StructuredField,
    min_length,
    normalize_candidate,
    resolve,
)


def _ctx(body: str, structured: StructuredJobRecord = None) -> ProbeContext:
    return ProbeContext(soup=parse_html(f"<html><body>{body}</body></html>"), structured=structured)


TEMPLATE_TITLE = '<h1 class="title_offer fs21 fwB lh1_2">  Auxiliar   Contable </h1><h2 class="subtitle">Otro</h2>'


def test_structured_value_wins_over_markup():
    ctx = _ctx(TEMPLATE_TITLE, StructuredJobRecord(title="Asesor de Ventas"))

    assert resolve_field("title", ctx) == "Asesor de Ventas"


def test_template_value_is_normalized():
    assert resolve_field("title", _ctx(TEMPLATE_TITLE)) == "Auxiliar Contable"


def test_predicate_failure_falls_through():
    ctx = _ctx(TEMPLATE_TITLE, StructuredJobRecord(title="A"))

    assert resolve_field("title", ctx) == "Auxiliar Contable", "one-letter title should be rejected"


def test_every_probe_missing_yields_none():
    ctx = _ctx("<p>Nada aquí</p>")

    for field_name in ["title", "company", "date_posted", "employment_type", "salary"]:
        assert resolve_field(field_name, ctx) is None, f"{field_name} should be None"


def test_clean_returning_none_moves_to_next_probe():
    probes = [
        FieldProbe("first", CssText("h1"), clean=lambda raw: None),
        FieldProbe("second", CssText("h2")),
    ]
    ctx = _ctx("<h1>Primero</h1><h2>Segundo</h2>")

    assert resolve("demo", probes, ctx) == "Segundo"


def test_order_is_the_only_tie_break():
    probes = [
        FieldProbe("short", CssText("h2"), min_length(2)),
        FieldProbe("long", CssText("h1"), min_length(2)),
    ]
    ctx = _ctx("<h1>Un título mucho más largo y descriptivo</h1><h2>Corto</h2>")

    assert resolve("demo", probes, ctx) == "Corto"


def test_structured_field_without_record():
    assert StructuredField("title")(_ctx("<h1>x</h1>")) is None


def test_normalize_candidate():
    assert normalize_candidate("  a  b \n") == "a b"
    assert normalize_candidate("   ") is None
    assert normalize_candidate([" Tiempo completo", "Tiempo completo", "", "Indefinido"]) == [
        "Tiempo completo",
        "Indefinido",
    ]
    assert normalize_candidate([]) is None


def test_company_goes_through_cleaner():
    ctx = _ctx('<a class="dIB mr10" href="/empresas/xyz">Empresa XYZ\n 4.2 ★</a>')

    assert resolve_field("company", ctx) == "Empresa XYZ"


def test_company_from_profile_link():
    ctx = _ctx('<div><a href="/empresas/comercializadora-norte">Comercializadora Norte</a></div>')

    assert resolve_field("company", ctx) == "Comercializadora Norte"


def test_location_from_microdata_parts():
    body = (
        '<div itemprop="jobLocation">'
        '<span itemprop="addressLocality">Puebla</span>'
        '<span itemprop="addressRegion">Puebla</span>'
        "</div>"
    )

    assert resolve_field("location", _ctx(body)) == "Puebla, Puebla"


def test_location_template_drops_trailing_segments():
    body = '<p class="fs16 mb5">Guadalajara, Jalisco | Publicado hace 2 días</p>'

    assert resolve_field("location", _ctx(body)) == "Guadalajara, Jalisco"


def test_structured_location_keeps_multi_location_separator():
    ctx = _ctx("", StructuredJobRecord(location="Monterrey, Nuevo León | Saltillo"))

    assert resolve_field("location", ctx) == "Monterrey, Nuevo León | Saltillo"


def test_location_cleaners():
    assert clean_location("Querétaro, Querétaro Publicado hace 3 horas") == "Querétaro, Querétaro"
    assert clean_location("León, Guanajuato Postularme") == "León, Guanajuato"
    assert clean_markup_location("Toluca · Empresa XYZ") == "Toluca"
    assert len(clean_location("X" * 500)) == 120


def test_labeled_values():
    soup = parse_html(
        "<ul class='box_attributes'>"
        "<li>Salario: $12,000 mensual</li>"
        "<li><span>Jornada</span><span>Tiempo completo</span></li>"
        "</ul>"
        "<dl><dt>Ubicación</dt><dd>Monterrey, Nuevo León</dd></dl>"
    )

    assert extract_labeled_value(soup, SALARY_LABELS) == "$12,000 mensual"
    assert extract_labeled_value(soup, SCHEDULE_LABELS) == "Tiempo completo"
    assert extract_labeled_value(soup, LOCATION_LABELS) == "Monterrey, Nuevo León"


def test_employment_type_from_labeled_chips():
    body = "<ul><li>Tipo de contrato: Indefinido</li><li>Jornada: Tiempo completo</li></ul>"

    assert resolve_field("employment_type", _ctx(body)) == ["Indefinido", "Tiempo completo"]


def test_date_from_template_is_interpreted():
    value = resolve_field("date_posted", _ctx('<p class="fc_aux fs13 mtB">Publicado el 2025-10-18</p>'))

    assert value == "2025-10-18T00:00:00Z"


def test_uninterpretable_date_is_none():
    assert resolve_field("date_posted", _ctx('<p class="fc_aux fs13 mtB">Actualizada recientemente</p>')) is None


def test_structured_date_passes_through():
    ctx = _ctx("", StructuredJobRecord(date_posted="2025-10-18T08:00:00-06:00"))

    assert resolve_field("date_posted", ctx) == "2025-10-18T08:00:00-06:00"


def test_short_description_falls_to_next_container():
    body = (
        '<div class="fs16 t_word_wrap"><p>Muy corto</p></div>'
        '<div itemprop="description"><p>Buscamos personal para atención a clientes en sucursal.</p></div>'
    )

    description = resolve_field("description", _ctx(body))

    assert description is not None
    assert description.text == "Buscamos personal para atención a clientes en sucursal."


def test_structured_escaped_description_is_unescaped():
    raw = "&lt;p&gt;Responsabilidades: atención a clientes y seguimiento de ventas.&lt;/p&gt;"
    ctx = _ctx("", StructuredJobRecord(description_raw=raw))

    description = resolve_field("description", ctx)

    assert description.html == "<p>Responsabilidades: atención a clientes y seguimiento de ventas.</p>"

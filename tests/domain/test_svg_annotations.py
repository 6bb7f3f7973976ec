from __future__ import annotations

import pytest

from adapters.layout.template_layout import TemplateLayoutEngine
from domain.default_template import default_template
from domain.models import CardData, Selection
from domain.services.render_card_svg import CardSvgRenderer
from domain.services.svg_annotations import annotate_items, inject_debug_label
from domain.services.svg_markup import (
    format_number,
    sanitize_identifier,
    svg_element,
    unique_identifier,
)
from domain.theme import DEFAULT_THEME
from tests.helpers.template_fixtures import make_attach, make_item, make_section, make_template


def _line_with(svg: str, needle: str) -> str:
    matches = [line for line in svg.splitlines() if needle in line]
    assert len(matches) == 1, matches
    return matches[0]


def test_debug_render_draws_banner_over_content(renderer: CardSvgRenderer) -> None:
    svg = renderer.render_card(CardData(name="Ember Smith"), default_template(), debug=True)

    assert ">DEBUG RENDER</text>" in svg
    assert svg.index(">Ember Smith</text>") < svg.index("DEBUG RENDER")
    assert 'data-item-id="title"' in svg
    assert "data-section-id" not in svg


def test_debug_render_draws_anchor_grid_per_item(renderer: CardSvgRenderer) -> None:
    template = make_template(
        make_section(
            "root",
            items=[make_item("one"), make_item("two", target=make_attach("one", "item", x=1, y=1))],
        )
    )
    svg = renderer.render_card(CardData(name="Moss"), template, debug=True)

    assert svg.count('r="3"') == 18
    assert svg.count('r="6"') == 2
    assert svg.count("<line ") == 2


def test_missing_target_is_labelled_without_connector(renderer: CardSvgRenderer) -> None:
    template = make_template(
        make_section("root", items=[make_item("lost", target=make_attach("nowhere"))])
    )
    svg = renderer.render_card(CardData(name="Moss"), template, debug=True)

    label = _line_with(svg, "missing section:nowhere")
    assert 'x="8" y="4"' in label
    assert 'fill="#d64545"' in label
    assert "<line " not in svg


def test_cycle_items_get_connector_and_label(renderer: CardSvgRenderer) -> None:
    template = make_template(
        make_section(
            "root",
            items=[
                make_item("a", target=make_attach("b", "item")),
                make_item("b", target=make_attach("a", "item")),
            ],
        )
    )
    svg = renderer.render_card(CardData(name="Moss"), template, debug=True)

    assert ">cycle item:a</text>" in svg
    assert "cycle item:b" not in svg
    assert svg.count("<line ") == 2
    assert 'stroke-dasharray="4 3"' in svg


def test_preview_outlines_sections_and_items(renderer: CardSvgRenderer) -> None:
    svg = renderer.render_template_preview(default_template())

    for section_id in ("root", "header", "body"):
        assert f'data-section-id="{section_id}"' in svg
    assert svg.count('r="3"') == 27
    assert svg.count('r="2.5"') == 9
    assert ">Header</text>" in svg
    assert ">Title</text>" in svg
    assert "fill-opacity" not in svg
    assert "DEBUG RENDER" not in svg


@pytest.mark.parametrize(
    ("selection", "needle", "opacity"),
    [
        (Selection(type="section", id="header"), 'data-section-id="header"', "0.08"),
        (Selection(type="item", id="title"), 'data-item-id="title"', "0.15"),
    ],
)
def test_preview_highlights_selection(
    renderer: CardSvgRenderer, selection: Selection, needle: str, opacity: str
) -> None:
    svg = renderer.render_template_preview(default_template(), selection)

    outline = _line_with(svg, needle)
    assert f'fill="#c65a32" fill-opacity="{opacity}"' in outline
    assert 'stroke-width="2.5"' in outline
    assert svg.count("fill-opacity") == 1


def test_selection_of_unknown_node_highlights_nothing(renderer: CardSvgRenderer) -> None:
    svg = renderer.render_template_preview(
        default_template(), Selection(type="item", id="ghost")
    )

    assert "fill-opacity" not in svg


def test_duplicate_item_ids_are_annotated_once() -> None:
    template = make_template(
        make_section(
            "root",
            layout="row",
            children=[
                make_section("left", size_pct=50, items=[make_item("twin")]),
                make_section("right", size_pct=50, items=[make_item("twin")]),
            ],
        )
    )
    plan = TemplateLayoutEngine().build_plan(template)
    elements = annotate_items(template, plan, DEFAULT_THEME, preview=True)

    assert sum('data-item-id="twin"' in element for element in elements) == 1


def test_inject_debug_label_before_closing_tag() -> None:
    svg = '<svg xmlns="http://www.w3.org/2000/svg">\n</svg>\n'
    injected = inject_debug_label(svg, {"targetId": "portrait", "anchor": [1, 0]})

    assert injected.endswith("</svg>\n")
    assert (
        ">ATTACH {&quot;targetId&quot;: &quot;portrait&quot;, &quot;anchor&quot;: [1, 0]}</text>"
        in injected
    )
    assert injected.index("ATTACH") < injected.rindex("</svg>")


def test_inject_debug_label_appends_to_fragment() -> None:
    injected = inject_debug_label("<g />", "raw")

    assert injected.startswith("<g /><text")
    assert ">ATTACH &quot;raw&quot;</text>" in injected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1.0, "1"), (199.2, "199.2"), (1 / 3, "0.333"), (2.5, "2.5"), (-0.0001, "0"), (0, "0"), (-12.5, "-12.5")],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_svg_element_skips_none_and_escapes() -> None:
    element = svg_element("text", {"x": 1.25, "clip-path": None, "data-id": 'a"b'}, text="x<y")

    assert element == '<text x="1.25" data-id="a&quot;b">x&lt;y</text>'


def test_sanitize_identifier_keeps_safe_characters() -> None:
    assert sanitize_identifier("portrait art!#1_x-y") == "portraitart1_x-y"


def test_unique_identifier_suffixes_repeats() -> None:
    used: set[str] = set()

    ids = [unique_identifier(base, used) for base in ("clip-a", "clip-a", "clip-a-1", "clip-a")]

    assert ids == ["clip-a", "clip-a-1", "clip-a-1-1", "clip-a-2"]

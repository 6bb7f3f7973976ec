from __future__ import annotations

import json
from typing import Any

from domain.models import (
    ANCHOR_GRID,
    CardTemplate,
    ItemPlacement,
    LayoutPlan,
    Point,
    Rect,
    Selection,
    TemplateItem,
)
from domain.services.svg_markup import svg_element
from domain.theme import DEFAULT_THEME, Theme

SELECTION_STROKE_WIDTH = 2.5
SECTION_SELECTION_OPACITY = 0.08
ITEM_SELECTION_OPACITY = 0.15
SECTION_CORNER_RADIUS = 12
ITEM_CORNER_RADIUS = 10
LABEL_FONT_SIZE = 12


def debug_banner(theme: Theme) -> str:
    return svg_element(
        "text",
        {
            "x": 24,
            "y": 36,
            "font-size": 20,
            "fill": theme.palette.alert,
            "font-family": theme.typography.body,
        },
        text="DEBUG RENDER",
    )


def annotate_sections(
    template: CardTemplate,
    plan: LayoutPlan,
    theme: Theme,
    *,
    selection: Selection | None = None,
) -> list[str]:
    elements: list[str] = []
    for section_id, rect in plan.sections.items():
        selected = selection is not None and selection.matches("section", section_id)
        section = template.find_section(section_id)
        elements.append(
            svg_element(
                "rect",
                {
                    **_rect_attrs(rect),
                    "rx": SECTION_CORNER_RADIUS,
                    **_outline_attrs(theme, theme.palette.muted, selected, SECTION_SELECTION_OPACITY),
                    "stroke-dasharray": "6 6",
                    "data-section-id": section_id,
                },
            )
        )
        elements.append(
            svg_element(
                "text",
                {
                    "x": rect.x + 8,
                    "y": rect.y + 18,
                    "font-size": LABEL_FONT_SIZE,
                    "fill": theme.palette.selection if selected else theme.palette.muted,
                    "font-family": theme.typography.body,
                },
                text=section.label if section else section_id,
            )
        )
        elements.extend(_anchor_grid(rect, radius=3, color=theme.palette.muted))
    return elements


def annotate_items(
    template: CardTemplate,
    plan: LayoutPlan,
    theme: Theme,
    *,
    selection: Selection | None = None,
    preview: bool = False,
) -> list[str]:
    elements: list[str] = []
    seen: set[str] = set()
    for item, _ in template.iter_items():
        placement = plan.items.get(item.id)
        if placement is None or item.id in seen:
            continue
        seen.add(item.id)
        rect = placement.rect
        if preview:
            selected = selection is not None and selection.matches("item", item.id)
            outline = _outline_attrs(theme, theme.palette.ink, selected, ITEM_SELECTION_OPACITY)
            grid_color = theme.palette.ink
            grid_radius = 2.5
        else:
            outline = {"fill": "none", "stroke": theme.palette.muted, "stroke-width": 1}
            grid_color = theme.palette.muted
            grid_radius = 3
        elements.append(
            svg_element(
                "rect",
                {**_rect_attrs(rect), "rx": ITEM_CORNER_RADIUS, **outline, "data-item-id": item.id},
            )
        )
        if preview:
            elements.append(
                svg_element(
                    "text",
                    {
                        "x": rect.x + 6,
                        "y": rect.y + 16,
                        "font-size": 11,
                        "fill": theme.palette.ink,
                        "font-family": theme.typography.body,
                    },
                    text=item.label,
                )
            )
        elements.extend(_anchor_grid(rect, radius=grid_radius, color=grid_color))
        elements.extend(_attach_connector(item, placement, theme))
    return elements


def inject_debug_label(svg: str, payload: Any, theme: Theme = DEFAULT_THEME) -> str:
    label = svg_element(
        "text",
        {
            "x": 24,
            "y": 70,
            "font-size": LABEL_FONT_SIZE,
            "fill": theme.palette.alert,
            "font-family": theme.typography.body,
        },
        text=f"ATTACH {json.dumps(payload, ensure_ascii=False, default=str)}",
    )
    head, sep, tail = svg.rpartition("</svg>")
    if not sep:
        return svg + label
    return f"{head}  {label}\n{sep}{tail}"


def _attach_connector(item: TemplateItem, placement: ItemPlacement, theme: Theme) -> list[str]:
    attach = item.attach
    item_point = placement.rect.anchor_point(item.anchor)
    elements: list[str] = []
    if placement.fallback == "missing":
        elements.append(
            _alert_label(item_point, f"missing {attach.target_type}:{attach.target_id}", theme)
        )
    else:
        elements.extend(_connector(item_point, placement.target_point, theme))
        if placement.fallback == "cycle":
            elements.append(
                _alert_label(item_point, f"cycle {attach.target_type}:{attach.target_id}", theme)
            )
    elements.append(
        svg_element(
            "circle",
            {
                "cx": item_point.x,
                "cy": item_point.y,
                "r": 6,
                "fill": theme.palette.anchor,
                "stroke": "#ffffff",
                "stroke-width": 1,
            },
        )
    )
    return elements


def _connector(start: Point, end: Point, theme: Theme) -> list[str]:
    return [
        svg_element(
            "line",
            {
                "x1": start.x,
                "y1": start.y,
                "x2": end.x,
                "y2": end.y,
                "stroke": theme.palette.alert,
                "stroke-width": 1.5,
                "stroke-dasharray": "4 3",
            },
        ),
        svg_element(
            "circle",
            {
                "cx": end.x,
                "cy": end.y,
                "r": 8,
                "fill": "none",
                "stroke": theme.palette.alert,
                "stroke-width": 3,
            },
        ),
    ]


def _alert_label(point: Point, text: str, theme: Theme) -> str:
    return svg_element(
        "text",
        {
            "x": point.x + 8,
            "y": point.y + 4,
            "font-size": LABEL_FONT_SIZE,
            "fill": theme.palette.alert,
            "font-family": theme.typography.body,
        },
        text=text,
    )


def _anchor_grid(rect: Rect, *, radius: float, color: str) -> list[str]:
    return [
        svg_element("circle", {"cx": point.x, "cy": point.y, "r": radius, "fill": color})
        for point in (rect.anchor_point(anchor) for anchor in ANCHOR_GRID)
    ]


def _rect_attrs(rect: Rect) -> dict[str, float]:
    return {"x": rect.x, "y": rect.y, "width": rect.width, "height": rect.height}


def _outline_attrs(
    theme: Theme, neutral: str, selected: bool, opacity: float
) -> dict[str, object]:
    if not selected:
        return {"fill": "none", "stroke": neutral, "stroke-width": 1}
    return {
        "fill": theme.palette.selection,
        "fill-opacity": opacity,
        "stroke": theme.palette.selection,
        "stroke-width": SELECTION_STROKE_WIDTH,
    }

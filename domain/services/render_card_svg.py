from __future__ import annotations

from domain.models import (
    CardData,
    CardTemplate,
    FrameItem,
    ImageItem,
    Rect,
    Selection,
    TemplateItem,
    TextItem,
)
from domain.ports.layout import LayoutEngine
from domain.services.svg_annotations import annotate_items, annotate_sections, debug_banner
from domain.services.svg_markup import (
    sanitize_identifier,
    svg_container,
    svg_document,
    svg_element,
    unique_identifier,
)
from domain.theme import DEFAULT_THEME, Theme

TEXT_ANCHORS = {"left": "start", "center": "middle", "right": "end"}
BASELINES = {0.0: "hanging", 0.5: "middle", 1.0: "baseline"}
ASPECT_RATIO_MODES = {"cover": "xMidYMid slice", "contain": "xMidYMid meet", "fill": "none"}


class CardSvgRenderer:
    def __init__(self, layout_engine: LayoutEngine, theme: Theme = DEFAULT_THEME) -> None:
        self.layout_engine = layout_engine
        self.theme = theme

    def render_card(self, card: CardData, template: CardTemplate, *, debug: bool = False) -> str:
        plan = self.layout_engine.build_plan(template)
        elements = [self._background(template)]
        clip_ids: set[str] = set()
        for item, _ in template.iter_items():
            rect = plan.item_rect(item.id)
            if rect is None:
                continue
            elements.extend(self._render_item(item, rect, card, clip_ids))
        if debug:
            elements.append(debug_banner(self.theme))
            elements.extend(annotate_items(template, plan, self.theme))
        return svg_document(template.width, template.height, elements)

    def render_template_preview(
        self, template: CardTemplate, selection: Selection | None = None
    ) -> str:
        plan = self.layout_engine.build_plan(template)
        elements = [self._background(template)]
        elements.extend(annotate_sections(template, plan, self.theme, selection=selection))
        elements.extend(
            annotate_items(template, plan, self.theme, selection=selection, preview=True)
        )
        return svg_document(template.width, template.height, elements)

    def _background(self, template: CardTemplate) -> str:
        return svg_element(
            "rect",
            {
                "x": 0,
                "y": 0,
                "width": template.width,
                "height": template.height,
                "rx": template.corner_radius,
                "fill": self.theme.palette.paper,
            },
        )

    def _render_item(
        self, item: TemplateItem, rect: Rect, card: CardData, clip_ids: set[str]
    ) -> list[str]:
        if isinstance(item, FrameItem):
            return [self._render_frame(item, rect)]
        if isinstance(item, ImageItem):
            return self._render_image(item, rect, card, clip_ids)
        if isinstance(item, TextItem):
            return self._render_text(item, rect, card)
        return []

    def _render_text(self, item: TextItem, rect: Rect, card: CardData) -> list[str]:
        value = card.resolve_field(item.field_id)
        if not value:
            return []
        point = rect.anchor_point(item.anchor)
        return [
            svg_element(
                "text",
                {
                    "x": point.x,
                    "y": point.y,
                    "text-anchor": TEXT_ANCHORS.get(item.align, "start"),
                    "dominant-baseline": BASELINES.get(item.anchor.y, "baseline"),
                    "font-family": self.theme.font_family(item.font),
                    "font-size": item.font_size,
                    "fill": item.color or self.theme.palette.ink,
                },
                text=value,
            )
        ]

    def _render_frame(self, item: FrameItem, rect: Rect) -> str:
        return svg_element(
            "rect",
            {
                "x": rect.x,
                "y": rect.y,
                "width": rect.width,
                "height": rect.height,
                "rx": item.corner_radius,
                "fill": item.fill_color or "none",
                "stroke": item.stroke_color or self.theme.palette.ink,
                "stroke-width": item.stroke_width,
            },
        )

    def _render_image(
        self, item: ImageItem, rect: Rect, card: CardData, clip_ids: set[str]
    ) -> list[str]:
        href = card.resolve_field(item.field_id)
        if not href:
            return []
        elements: list[str] = []
        clip_ref: str | None = None
        if item.corner_radius > 0:
            clip_id = unique_identifier(f"clip-{sanitize_identifier(item.id)}", clip_ids)
            clip_ref = f"url(#{clip_id})"
            elements.append(
                svg_container(
                    "clipPath",
                    {"id": clip_id},
                    [
                        svg_element(
                            "rect",
                            {
                                "x": rect.x,
                                "y": rect.y,
                                "width": rect.width,
                                "height": rect.height,
                                "rx": item.corner_radius,
                            },
                        )
                    ],
                )
            )
        elements.append(
            svg_element(
                "image",
                {
                    "x": rect.x,
                    "y": rect.y,
                    "width": rect.width,
                    "height": rect.height,
                    "href": href,
                    "preserveAspectRatio": ASPECT_RATIO_MODES.get(item.fit, "xMidYMid slice"),
                    "clip-path": clip_ref,
                },
            )
        )
        return elements

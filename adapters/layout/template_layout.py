from __future__ import annotations

from adapters.layout.item_placement import resolve_items
from adapters.layout.section_layout import resolve_sections
from domain.models import CardTemplate, LayoutPlan, Rect, Size
from domain.ports.layout import LayoutEngine


class TemplateLayoutEngine(LayoutEngine):
    def build_plan(self, template: CardTemplate) -> LayoutPlan:
        canvas = Rect(0.0, 0.0, template.width, template.height)
        sections = resolve_sections(template.root, canvas.inset(template.bleed))
        items = resolve_items(template, sections)
        return LayoutPlan(
            canvas=Size(template.width, template.height),
            sections=sections,
            items=items,
        )

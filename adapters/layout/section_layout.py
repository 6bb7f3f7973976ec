from __future__ import annotations

from collections.abc import Sequence

from domain.models import Rect, SectionLayout, TemplateSection

DEFAULT_TOTAL_WEIGHT = 100.0


def resolve_sections(root: TemplateSection, bounds: Rect) -> dict[str, Rect]:
    rects: dict[str, Rect] = {}
    _layout_section(root, bounds, rects)
    return rects


def split_main_axis(
    rect: Rect, layout: SectionLayout, weights: Sequence[float], gap: float
) -> list[Rect]:
    if layout == "stack":
        return [rect for _ in weights]

    count = len(weights)
    gap = max(gap, 0.0)
    cleaned = [max(weight, 0.0) for weight in weights]
    total = sum(cleaned)
    if total <= 0:
        # All-zero weights share the space evenly.
        cleaned = [DEFAULT_TOTAL_WEIGHT / count for _ in cleaned] if count else []
        total = DEFAULT_TOTAL_WEIGHT
    main_size = rect.width if layout == "row" else rect.height
    available = max(main_size - max(count - 1, 0) * gap, 0.0)

    rects: list[Rect] = []
    offset = 0.0
    for index, weight in enumerate(cleaned):
        extent = weight / total * available
        if layout == "row":
            rects.append(Rect(rect.x + offset, rect.y, extent, rect.height))
        else:
            rects.append(Rect(rect.x, rect.y + offset, rect.width, extent))
        offset += extent
        if index < count - 1:
            offset += gap
    return rects


def _layout_section(section: TemplateSection, rect: Rect, rects: dict[str, Rect]) -> None:
    # First occurrence wins for duplicate ids.
    rects.setdefault(section.id, rect)
    if not section.children:
        return
    child_rects = split_main_axis(
        rect,
        section.layout,
        [child.size_pct for child in section.children],
        section.gap,
    )
    for child, child_rect in zip(section.children, child_rects):
        _layout_section(child, child_rect, rects)

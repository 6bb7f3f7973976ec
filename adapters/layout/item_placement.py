from __future__ import annotations

import logging
from dataclasses import dataclass

from domain.models import (
    CardTemplate,
    FallbackReason,
    ItemPlacement,
    Point,
    Rect,
    TemplateItem,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemEntry:
    item: TemplateItem
    section_id: str


def place_item(item: TemplateItem, home: Rect, target: Rect) -> tuple[Rect, Point]:
    width = home.width * item.width_pct / 100
    height = home.height * item.height_pct / 100
    target_point = target.anchor_point(item.attach.anchor)
    rect = Rect(
        target_point.x - width * item.anchor.x,
        target_point.y - height * item.anchor.y,
        width,
        height,
    )
    return rect, target_point


class ItemPlacementResolver:
    def __init__(self, template: CardTemplate, section_rects: dict[str, Rect]) -> None:
        self.section_rects = section_rects
        self.entries: dict[str, ItemEntry] = {}
        for item, section in template.iter_items():
            self.entries.setdefault(item.id, ItemEntry(item=item, section_id=section.id))
        self.placements: dict[str, ItemPlacement] = {}
        self.in_progress: set[str] = set()

    def resolve_all(self) -> dict[str, ItemPlacement]:
        for item_id in self.entries:
            self.resolve(item_id)
        return dict(self.placements)

    def resolve(self, item_id: str) -> ItemPlacement | None:
        cached = self.placements.get(item_id)
        if cached is not None or item_id not in self.entries or item_id in self.in_progress:
            return cached
        path = self._attach_path(item_id)
        try:
            # Each item is placed after the item it attaches to.
            for pending_id in reversed(path):
                self._place(pending_id)
                self.in_progress.discard(pending_id)
        finally:
            self.in_progress.difference_update(path)
        return self.placements.get(item_id)

    def _attach_path(self, item_id: str) -> list[str]:
        path: list[str] = []
        current = item_id
        while True:
            path.append(current)
            self.in_progress.add(current)
            attach = self.entries[current].item.attach
            target_id = attach.target_id
            if (
                attach.target_type != "item"
                or target_id in self.placements
                or target_id not in self.entries
                or target_id in self.in_progress
            ):
                return path
            current = target_id

    def _place(self, item_id: str) -> None:
        entry = self.entries[item_id]
        home = self.section_rects.get(entry.section_id)
        if home is None:
            return
        target, fallback = self._resolve_target(entry, home)
        rect, target_point = place_item(entry.item, home, target)
        self.placements[item_id] = ItemPlacement(
            item_id=item_id,
            section_id=entry.section_id,
            rect=rect,
            target_point=target_point,
            fallback=fallback,
        )

    def _resolve_target(self, entry: ItemEntry, home: Rect) -> tuple[Rect, FallbackReason | None]:
        attach = entry.item.attach
        if attach.target_type == "item":
            resolved = self.placements.get(attach.target_id)
            if resolved is not None:
                return resolved.rect, None
            # Still on the current path means the attach chain loops back.
            reason: FallbackReason = "cycle" if attach.target_id in self.in_progress else "missing"
            self._log_fallback(entry, reason)
            return home, reason

        section_rect = self.section_rects.get(attach.target_id)
        if section_rect is None:
            self._log_fallback(entry, "missing")
            return home, "missing"
        return section_rect, None

    def _log_fallback(self, entry: ItemEntry, reason: FallbackReason) -> None:
        attach = entry.item.attach
        logger.debug(
            "Item %s attach target %s:%s unresolved (%s); using home section %s",
            entry.item.id,
            attach.target_type,
            attach.target_id,
            reason,
            entry.section_id,
        )


def resolve_items(template: CardTemplate, section_rects: dict[str, Rect]) -> dict[str, ItemPlacement]:
    return ItemPlacementResolver(template, section_rects).resolve_all()

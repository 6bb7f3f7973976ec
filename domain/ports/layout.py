from __future__ import annotations

from typing import Protocol

from domain.models import CardTemplate, LayoutPlan


class LayoutEngine(Protocol):
    def build_plan(self, template: CardTemplate) -> LayoutPlan:
        ...

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from domain.models import CardData, CardTemplate
from domain.ports.repositories import SvgRepository
from domain.services.render_card_svg import CardSvgRenderer
from domain.services.svg_markup import unique_identifier

logger = logging.getLogger(__name__)

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class ExportedCard:
    card_id: str
    name: str
    file_name: str
    path: Path


def slugify(value: str) -> str:
    return _SLUG_PATTERN.sub("-", value.lower()).strip("-")


class ExportCardBatch:
    def __init__(self, renderer: CardSvgRenderer, svg_repo: SvgRepository) -> None:
        self.renderer = renderer
        self.svg_repo = svg_repo

    def export(
        self,
        cards: Iterable[CardData],
        template: CardTemplate,
        output_dir: Path,
        *,
        debug: bool = False,
    ) -> list[ExportedCard]:
        exported: list[ExportedCard] = []
        used_stems: set[str] = set()
        for index, card in enumerate(cards, start=1):
            stem = self._unique_stem(card, index, used_stems)
            file_name = f"{stem}.svg"
            path = output_dir / file_name
            self.svg_repo.save(self.renderer.render_card(card, template, debug=debug), path)
            logger.info("Rendered card %s to %s", card.id or stem, path)
            exported.append(
                ExportedCard(card_id=card.id or stem, name=card.name, file_name=file_name, path=path)
            )
        return exported

    def _unique_stem(self, card: CardData, index: int, used: set[str]) -> str:
        return unique_identifier(slugify(card.id) or slugify(card.name) or f"card-{index}", used)

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from adapters.filesystem.json_utils import load_json_value
from domain.models import CardData
from domain.ports.repositories import CardRepository


class FileSystemCardRepository(CardRepository):
    def load_all(self, path: Path) -> list[CardData]:
        return [card for _, card in self.load_all_with_paths(path)]

    def load_all_with_paths(self, path: Path) -> list[tuple[Path, CardData]]:
        cards: list[tuple[Path, CardData]] = []
        for file_path in self._iter_paths(path):
            for payload in self._iter_payloads(load_json_value(file_path)):
                cards.append((file_path, CardData.model_validate(payload)))
        return cards

    def _iter_paths(self, path: Path) -> Iterable[Path]:
        if path.is_dir():
            yield from sorted(path.glob("*.json"))
        else:
            yield path

    def _iter_payloads(self, data: Any) -> Iterable[dict[str, Any]]:
        if isinstance(data, list):
            yield from (entry for entry in data if isinstance(entry, dict))
        elif isinstance(data, dict):
            cards = data.get("cards")
            if isinstance(cards, list):
                yield from (entry for entry in cards if isinstance(entry, dict))
            else:
                yield data

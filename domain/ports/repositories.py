from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import CardData, CardTemplate


class TemplateRepository(Protocol):
    def load(self, path: Path) -> CardTemplate: ...


class CardRepository(Protocol):
    def load_all(self, path: Path) -> Sequence[CardData]: ...

    def load_all_with_paths(self, path: Path) -> Sequence[tuple[Path, CardData]]: ...


class SvgRepository(Protocol):
    def save(self, markup: str, path: Path) -> None: ...

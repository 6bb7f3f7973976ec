from __future__ import annotations

from pathlib import Path

from adapters.filesystem.json_utils import load_json
from domain.models import CardTemplate
from domain.ports.repositories import TemplateRepository


class FileSystemTemplateRepository(TemplateRepository):
    def load(self, path: Path) -> CardTemplate:
        payload = load_json(path)
        # Editor exports wrap the template next to game metadata.
        if isinstance(payload.get("template"), dict):
            payload = payload["template"]
        return CardTemplate.model_validate(payload)

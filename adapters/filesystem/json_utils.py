from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import orjson


def load_json_value(path: Path) -> Any:
    raw = path.read_bytes()
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError:
        return json.loads(raw.decode("utf-8-sig"))


def load_json(path: Path) -> dict[str, Any]:
    data = load_json_value(path)
    return data if isinstance(data, dict) else {}


def write_text_atomic(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    tmp_path.write_text(content, encoding="utf-8")
    tmp_path.replace(path)

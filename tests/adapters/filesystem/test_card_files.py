from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from adapters.filesystem.card_repository import FileSystemCardRepository
from adapters.filesystem.json_utils import load_json, load_json_value, write_text_atomic
from adapters.filesystem.svg_repository import FileSystemSvgRepository
from adapters.filesystem.template_repository import FileSystemTemplateRepository
from tests.helpers.template_fixtures import fixture_path, load_template_payload


def _write_json(path: Path, payload: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_card_repository_reads_list_file() -> None:
    cards = FileSystemCardRepository().load_all(fixture_path("cards", "deck.json"))

    assert [card.id for card in cards] == ["ember-smith", "seedwarden"]
    assert cards[1].fields["power"] == "2"
    assert "art" not in cards[1].fields


@pytest.mark.parametrize(
    "payload",
    [
        {"cards": [{"id": "a", "name": "A"}, {"id": "b", "name": "B"}]},
        [{"id": "a", "name": "A"}, "junk", {"id": "b", "name": "B"}],
    ],
)
def test_card_repository_accepts_wrapped_lists(tmp_path: Path, payload: object) -> None:
    path = _write_json(tmp_path / "deck.json", payload)

    assert [card.name for card in FileSystemCardRepository().load_all(path)] == ["A", "B"]


def test_card_repository_reads_directory_in_name_order(tmp_path: Path) -> None:
    _write_json(tmp_path / "cards" / "b.json", {"id": "second", "name": "Second"})
    _write_json(tmp_path / "cards" / "a.json", [{"id": "first", "name": "First"}])
    (tmp_path / "cards" / "notes.txt").write_text("ignored", encoding="utf-8")

    loaded = FileSystemCardRepository().load_all_with_paths(tmp_path / "cards")

    assert [(path.name, card.id) for path, card in loaded] == [
        ("a.json", "first"),
        ("b.json", "second"),
    ]


def test_card_repository_rejects_bad_card(tmp_path: Path) -> None:
    path = _write_json(tmp_path / "deck.json", [{"id": ["not", "a", "string"]}])

    with pytest.raises(ValidationError):
        FileSystemCardRepository().load_all(path)


def test_template_repository_unwraps_editor_export(tmp_path: Path) -> None:
    payload = {"game": "demo", "template": load_template_payload("hero.json")}
    path = _write_json(tmp_path / "export.json", payload)

    template = FileSystemTemplateRepository().load(path)

    assert template.id == "hero"
    assert template.corner_radius == 28
    assert template.find_item("caption") is not None


def test_load_json_accepts_byte_order_mark(tmp_path: Path) -> None:
    path = tmp_path / "bom.json"
    path.write_bytes(b"\xef\xbb\xbf" + json.dumps({"id": "bom"}).encode("utf-8"))

    assert load_json_value(path) == {"id": "bom"}


def test_load_json_ignores_non_object_payload(tmp_path: Path) -> None:
    path = _write_json(tmp_path / "list.json", [1, 2, 3])

    assert load_json(path) == {}


def test_svg_repository_writes_atomically(tmp_path: Path) -> None:
    target = tmp_path / "out" / "nested" / "card.svg"

    FileSystemSvgRepository().save("<svg />", target)
    FileSystemSvgRepository().save("<svg>v2</svg>", target)

    assert target.read_text(encoding="utf-8") == "<svg>v2</svg>"
    assert not target.with_suffix(".svg.tmp").exists()


def test_write_text_atomic_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "index.html"

    write_text_atomic(target, "<html></html>")

    assert target.read_text(encoding="utf-8") == "<html></html>"

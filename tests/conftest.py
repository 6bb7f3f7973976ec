from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from adapters.layout.template_layout import TemplateLayoutEngine
from app.config import AppSettings, RenderSettings
from domain.services.render_card_svg import CardSvgRenderer


def _clear_cards_env() -> None:
    for key in list(os.environ):
        if key.startswith("CARDS_"):
            os.environ.pop(key, None)


_clear_cards_env()


@pytest.fixture(autouse=True)
def clear_cards_env() -> Generator[None, None, None]:
    _clear_cards_env()
    yield
    _clear_cards_env()


@pytest.fixture
def renderer() -> CardSvgRenderer:
    return CardSvgRenderer(TemplateLayoutEngine())


@pytest.fixture
def render_settings(tmp_path: Path) -> RenderSettings:
    return RenderSettings(
        debug=False,
        output_dir=tmp_path / "output",
        template_path=None,
        gallery_title="Test Deck",
    )


@pytest.fixture
def render_settings_factory(render_settings: RenderSettings) -> Callable[..., RenderSettings]:
    def _factory(**overrides: object) -> RenderSettings:
        return render_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(render_settings: RenderSettings) -> AppSettings:
    return AppSettings(render=render_settings)


@pytest.fixture
def app_settings_factory(
    render_settings_factory: Callable[..., RenderSettings],
) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(render=render_settings_factory(**overrides))

    return _factory

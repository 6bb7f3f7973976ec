from __future__ import annotations

import os
from pathlib import Path
from typing import ClassVar

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.theme import Palette, Theme, Typography

DEFAULT_CONFIG_PATH = Path("config/render.yaml")


class ThemeSettings(BaseModel):
    paper: str = "#f6f1e9"
    ink: str = "#1b1a17"
    muted: str = "#5f5a53"
    alert: str = "#d64545"
    anchor: str = "#2f6f4e"
    selection: str = "#c65a32"
    title_font: str = "'Fraunces', serif"
    body_font: str = "'Space Grotesk', sans-serif"

    def to_theme(self) -> Theme:
        return Theme(
            palette=Palette(
                paper=self.paper,
                ink=self.ink,
                muted=self.muted,
                alert=self.alert,
                anchor=self.anchor,
                selection=self.selection,
            ),
            typography=Typography(title=self.title_font, body=self.body_font),
        )


class RenderSettings(BaseModel):
    theme: ThemeSettings = ThemeSettings()
    debug: bool = False
    output_dir: Path = Path("output")
    template_path: Path | None = None
    gallery_title: str = "Card Assets"

    @field_validator("template_path", mode="before")
    @classmethod
    def empty_template_path(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CARDS_", env_nested_delimiter="__")

    render: RenderSettings = RenderSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def resolve_config_path(config_path: Path | None = None) -> Path | None:
    if config_path is None:
        env_path = os.getenv("CARDS_CONFIG_PATH")
        if env_path:
            config_path = Path(env_path)
        elif DEFAULT_CONFIG_PATH.exists():
            return DEFAULT_CONFIG_PATH
        else:
            return None
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)
    return config_path


def load_settings(config_path: Path | None = None) -> AppSettings:
    yaml_path = resolve_config_path(config_path)
    # The YAML source applies to this construction only.
    previous = AppSettings._yaml_path
    AppSettings._yaml_path = yaml_path
    try:
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous

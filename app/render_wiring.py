from __future__ import annotations

from adapters.filesystem.template_repository import FileSystemTemplateRepository
from adapters.layout.template_layout import TemplateLayoutEngine
from app.config import AppSettings
from domain.default_template import default_template
from domain.models import CardTemplate
from domain.services.render_card_svg import CardSvgRenderer


def build_card_renderer(settings: AppSettings) -> CardSvgRenderer:
    return CardSvgRenderer(TemplateLayoutEngine(), theme=settings.render.theme.to_theme())


def load_default_template(settings: AppSettings) -> CardTemplate:
    template_path = settings.render.template_path
    if template_path is None:
        return default_template()
    if not template_path.exists():
        msg = f"Template file not found: {template_path}"
        raise FileNotFoundError(msg)
    return FileSystemTemplateRepository().load(template_path)

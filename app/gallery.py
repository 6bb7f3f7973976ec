from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from domain.models import CardTemplate
from domain.services.export_card_batch import ExportedCard
from domain.theme import Theme

TEMPLATES_DIR = Path(__file__).parent / "web" / "templates"

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "j2"]),
)


def render_gallery(
    title: str,
    cards: Sequence[ExportedCard],
    template: CardTemplate,
    theme: Theme,
) -> str:
    page = _environment.get_template("gallery.html.j2")
    return page.render(
        title=title,
        cards=cards,
        theme=theme,
        width=f"{template.width:g}",
        height=f"{template.height:g}",
    )

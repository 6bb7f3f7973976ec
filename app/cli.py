from __future__ import annotations

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.filesystem.card_repository import FileSystemCardRepository
from adapters.filesystem.json_utils import load_json_value, write_text_atomic
from adapters.filesystem.svg_repository import FileSystemSvgRepository
from adapters.filesystem.template_repository import FileSystemTemplateRepository
from app.config import AppSettings, load_settings
from app.gallery import render_gallery
from app.render_wiring import build_card_renderer, load_default_template
from domain.models import CardTemplate, Selection
from domain.services.export_card_batch import ExportCardBatch

app = typer.Typer(no_args_is_help=True)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _settings(config_path: Path | None) -> AppSettings:
    try:
        return load_settings(config_path)
    except FileNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc


def _template(settings: AppSettings, template_path: Path | None) -> CardTemplate:
    try:
        if template_path is None:
            return load_default_template(settings)
        if not template_path.exists():
            console.print(f"[red]Template not found:[/] {template_path}")
            raise typer.Exit(code=1)
        return FileSystemTemplateRepository().load(template_path)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid template:[/] {exc}")
        raise typer.Exit(code=1) from exc


def parse_selection(value: str | None) -> Selection | None:
    if not value:
        return None
    node_type, sep, node_id = value.partition(":")
    if not sep or node_type not in {"section", "item"} or not node_id:
        msg = "Selection must look like section:<id> or item:<id>"
        raise typer.BadParameter(msg)
    return Selection(type=node_type, id=node_id)


@app.command("render")
def render_cards(
    cards_path: Path = typer.Option(
        Path("data/cards"), "--cards", help="Card JSON file or directory of card files.",
    ),
    template_path: Path | None = typer.Option(
        None, "--template", help="Template JSON file (defaults to the configured template).",
    ),
    output_dir: Path | None = typer.Option(
        None, "--output-dir", help="Directory to write SVG files and index.html.",
    ),
    debug: bool = typer.Option(False, "--debug", help="Draw layout debug overlays."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    settings = _settings(config_path)
    template = _template(settings, template_path)
    if not cards_path.exists():
        console.print(f"[red]Cards not found:[/] {cards_path}")
        raise typer.Exit(code=1)
    try:
        cards = FileSystemCardRepository().load_all(cards_path)
    except ValidationError as exc:
        console.print(f"[red]Invalid card data:[/] {exc}")
        raise typer.Exit(code=1) from exc
    if not cards:
        console.print(f"[yellow]No cards found in {cards_path}[/]")
        raise typer.Exit(code=0)

    target_dir = output_dir or settings.render.output_dir
    renderer = build_card_renderer(settings)
    exporter = ExportCardBatch(renderer, FileSystemSvgRepository())
    exported = exporter.export(
        cards, template, target_dir, debug=debug or settings.render.debug
    )
    for entry in exported:
        console.print(f"[green]Wrote[/] {entry.path}")

    gallery_path = target_dir / "index.html"
    write_text_atomic(
        gallery_path,
        render_gallery(settings.render.gallery_title, exported, template, renderer.theme),
    )
    console.print(f"[green]Rendered {len(exported)} cards to[/] {target_dir}")


@app.command("preview")
def preview_template(
    template_path: Path | None = typer.Option(None, "--template", help="Template JSON file."),
    output_path: Path = typer.Option(
        Path("output/template.svg"), "--output", help="Preview SVG destination.",
    ),
    select: str | None = typer.Option(
        None, "--select", help="Highlight a node, e.g. section:header or item:title.",
    ),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    selection = parse_selection(select)
    settings = _settings(config_path)
    template = _template(settings, template_path)
    markup = build_card_renderer(settings).render_template_preview(template, selection)
    FileSystemSvgRepository().save(markup, output_path)
    console.print(f"[green]Wrote[/] {output_path}")


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Template or card file to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        data = load_json_value(input_path)
        if isinstance(data, dict) and ("root" in data or isinstance(data.get("template"), dict)):
            FileSystemTemplateRepository().load(input_path)
            console.print(f"[green]Valid template:[/] {input_path}")
        else:
            cards = FileSystemCardRepository().load_all(input_path)
            console.print(f"[green]Valid card data ({len(cards)} cards):[/] {input_path}")
    except (ValueError, ValidationError) as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address."),
    port: int = typer.Option(8080, help="Bind port."),
    config_path: Path | None = typer.Option(None, "--config", help="YAML settings file."),
) -> None:
    import uvicorn

    from app.web_main import create_app

    uvicorn.run(create_app(_settings(config_path)), host=host, port=port)


if __name__ == "__main__":
    app()

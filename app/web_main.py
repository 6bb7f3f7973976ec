from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, cast

import orjson
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from app.config import AppSettings, load_settings
from app.render_wiring import build_card_renderer, load_default_template
from domain.models import CardData, CardTemplate, Selection
from domain.services.render_card_svg import CardSvgRenderer
from domain.services.svg_annotations import inject_debug_label

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"


class RenderRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    card: CardData = Field(default_factory=CardData)
    template: CardTemplate | None = None
    debug: bool = False
    debug_attach: dict[str, Any] | None = None


class PreviewRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    template: CardTemplate
    selection: Selection | None = None


@dataclass(frozen=True)
class RenderContext:
    settings: AppSettings
    renderer: CardSvgRenderer
    default_template: CardTemplate


def create_app(settings: AppSettings) -> FastAPI:
    app = FastAPI(title="Card Template Renderer")
    app.state.context = RenderContext(
        settings=settings,
        renderer=build_card_renderer(settings),
        default_template=load_default_template(settings),
    )

    @app.get("/health")
    def health() -> ORJSONResponse:
        return ORJSONResponse({"status": "ok"})

    @app.get("/api/template/default")
    def api_default_template(context: RenderContext = Depends(get_context)) -> ORJSONResponse:
        return ORJSONResponse(context.default_template.model_dump(mode="json", by_alias=True))

    @app.post("/api/render")
    async def api_render(
        request: Request, context: RenderContext = Depends(get_context)
    ) -> Response:
        payload = parse_json_body(await request.body())
        if "card" in payload or "template" in payload:
            body = validate_payload(RenderRequest, payload)
        else:
            body = RenderRequest(card=validate_payload(CardData, payload))
        template = body.template or context.default_template
        debug = body.debug or context.settings.render.debug
        try:
            svg = context.renderer.render_card(body.card, template, debug=debug)
        except Exception as exc:
            logger.exception("Card render failed for %s", body.card.id or body.card.name)
            raise HTTPException(status_code=500, detail="Render failed") from exc
        if body.debug_attach:
            svg = inject_debug_label(svg, body.debug_attach, context.renderer.theme)
        return Response(content=svg, media_type=SVG_MEDIA_TYPE)

    @app.post("/api/template/preview")
    async def api_template_preview(
        request: Request, context: RenderContext = Depends(get_context)
    ) -> Response:
        payload = parse_json_body(await request.body())
        if isinstance(payload.get("template"), dict):
            body = validate_payload(PreviewRequest, payload)
        else:
            body = PreviewRequest(template=validate_payload(CardTemplate, payload))
        try:
            svg = context.renderer.render_template_preview(body.template, body.selection)
        except Exception as exc:
            logger.exception("Template preview failed for %s", body.template.id)
            raise HTTPException(status_code=500, detail="Render failed") from exc
        return Response(content=svg, media_type=SVG_MEDIA_TYPE)

    return app


def get_context(request: Request) -> RenderContext:
    return cast(RenderContext, request.app.state.context)


def parse_json_body(raw_bytes: bytes) -> dict[str, Any]:
    if not raw_bytes.strip():
        return {}
    try:
        payload = orjson.loads(raw_bytes)
    except orjson.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="Request body must be JSON") from exc
    if not isinstance(payload, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object")
    return payload


def validate_payload(model: type[Any], payload: dict[str, Any]) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc


app = create_app(load_settings())

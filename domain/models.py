from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic.alias_generators import to_camel

NAME_FIELD_ID = "name"
ITEM_TYPES = ("text", "frame", "image")

SectionLayout = Literal["row", "column", "stack"]
TargetType = Literal["section", "item"]
FallbackReason = Literal["missing", "cycle"]


class TemplateModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


def snap_anchor_coordinate(value: object) -> float:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if number >= 0.75:
        return 1.0
    if number >= 0.25:
        return 0.5
    return 0.0


class AnchorPoint(TemplateModel):
    x: float = 0.0
    y: float = 0.0

    @field_validator("x", "y", mode="before")
    @classmethod
    def snap_to_grid(cls, value: object) -> float:
        return snap_anchor_coordinate(value)


# Row-major: top-left, top-center, ..., bottom-right.
ANCHOR_GRID: tuple[AnchorPoint, ...] = tuple(
    AnchorPoint(x=x, y=y) for y in (0.0, 0.5, 1.0) for x in (0.0, 0.5, 1.0)
)


class Attachment(TemplateModel):
    target_type: TargetType = "section"
    target_id: str = "root"
    anchor: AnchorPoint = AnchorPoint()


class TemplateItemBase(TemplateModel):
    id: str
    name: str = ""
    anchor: AnchorPoint = AnchorPoint()
    attach: Attachment = Attachment()
    width_pct: float = 50.0
    height_pct: float = 50.0

    @property
    def label(self) -> str:
        return self.name or self.id


class TextItem(TemplateItemBase):
    type: Literal["text"] = "text"
    field_id: str = NAME_FIELD_ID
    font_size: float = 20.0
    align: Literal["left", "center", "right"] = "left"
    font: Literal["title", "body"] | None = None
    color: str | None = None


class FrameItem(TemplateItemBase):
    type: Literal["frame"] = "frame"
    stroke_width: float = 2.0
    stroke_color: str | None = None
    fill_color: str = "none"
    corner_radius: float = 8.0


class ImageItem(TemplateItemBase):
    type: Literal["image"] = "image"
    field_id: str = "image"
    fit: Literal["cover", "contain", "fill"] = "cover"
    corner_radius: float = 0.0


def tag_legacy_item(value: Any) -> Any:
    if isinstance(value, dict) and value.get("type") not in ITEM_TYPES:
        return {**value, "type": "text"}
    return value


TaggedItem = Annotated[Union[TextItem, FrameItem, ImageItem], Field(discriminator="type")]
TemplateItem = Annotated[TaggedItem, BeforeValidator(tag_legacy_item)]


class TemplateSection(TemplateModel):
    id: str
    name: str = ""
    layout: SectionLayout = "stack"
    size_pct: float = 100.0
    gap: float = 0.0
    children: list[TemplateSection] = Field(default_factory=list)
    items: list[TemplateItem] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.name or self.id

    def walk(self) -> Iterator[TemplateSection]:
        yield self
        for child in self.children:
            yield from child.walk()


class CardTemplate(TemplateModel):
    id: str = "default"
    name: str = "Default"
    width: float = 750.0
    height: float = 1050.0
    corner_radius: float = Field(
        default=28.0,
        validation_alias=AliasChoices("cornerRadius", "radius", "corner_radius"),
        serialization_alias="cornerRadius",
    )
    bleed: float = 18.0
    root: TemplateSection = Field(
        default_factory=lambda: TemplateSection(id="root", name="Root")
    )

    def find_section(self, section_id: str) -> TemplateSection | None:
        for section in self.root.walk():
            if section.id == section_id:
                return section
        return None

    def find_item(self, item_id: str) -> TemplateItem | None:
        for section in self.root.walk():
            for item in section.items:
                if item.id == item_id:
                    return item
        return None

    def iter_items(self) -> Iterator[tuple[TemplateItem, TemplateSection]]:
        for section in self.root.walk():
            for item in section.items:
                yield item, section


class CardData(TemplateModel):
    id: str = ""
    name: str = ""
    fields: dict[str, str] = Field(default_factory=dict)

    @field_validator("fields", mode="before")
    @classmethod
    def stringify_values(cls, value: object) -> dict[str, str]:
        if not isinstance(value, dict):
            return {}
        return {str(key): "" if item is None else str(item) for key, item in value.items()}

    def resolve_field(self, field_id: str) -> str:
        if field_id == NAME_FIELD_ID:
            return self.name
        return self.fields.get(field_id, "")


class Selection(TemplateModel):
    type: TargetType
    id: str

    def matches(self, node_type: TargetType, node_id: str) -> bool:
        return self.type == node_type and self.id == node_id


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    def anchor_point(self, anchor: AnchorPoint) -> Point:
        return Point(self.x + self.width * anchor.x, self.y + self.height * anchor.y)

    def inset(self, amount: float) -> Rect:
        return Rect(
            self.x + amount,
            self.y + amount,
            max(self.width - amount * 2, 0.0),
            max(self.height - amount * 2, 0.0),
        )


@dataclass(frozen=True)
class ItemPlacement:
    item_id: str
    section_id: str
    rect: Rect
    target_point: Point
    fallback: FallbackReason | None = None


@dataclass(frozen=True)
class LayoutPlan:
    canvas: Size
    sections: dict[str, Rect]
    items: dict[str, ItemPlacement]

    def item_rect(self, item_id: str) -> Rect | None:
        placement = self.items.get(item_id)
        return placement.rect if placement else None

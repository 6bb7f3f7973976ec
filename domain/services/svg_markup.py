from __future__ import annotations

import html
import re
from collections.abc import Iterable, Mapping

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

_UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")

Attributes = Mapping[str, object]


def escape_markup(value: object) -> str:
    return html.escape(str(value), quote=True)


def format_number(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in {"-0", ""} else text


def sanitize_identifier(value: str) -> str:
    return _UNSAFE_ID_CHARS.sub("", value)


def _attribute_value(value: object) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return format_number(float(value))
    return escape_markup(value)


def _attributes(attrs: Attributes) -> str:
    return " ".join(
        f'{name}="{_attribute_value(value)}"' for name, value in attrs.items() if value is not None
    )


def svg_element(tag: str, attrs: Attributes, text: str | None = None) -> str:
    if text is None:
        return f"<{tag} {_attributes(attrs)} />"
    return f"<{tag} {_attributes(attrs)}>{escape_markup(text)}</{tag}>"


def svg_container(tag: str, attrs: Attributes, children: Iterable[str]) -> str:
    opening = f"<{tag} {_attributes(attrs)}>" if attrs else f"<{tag}>"
    return f"{opening}{''.join(children)}</{tag}>"


def svg_document(width: float, height: float, body: Iterable[str]) -> str:
    header = (
        f'<svg width="{format_number(width)}" height="{format_number(height)}" '
        f'viewBox="0 0 {format_number(width)} {format_number(height)}" '
        f'fill="none" xmlns="{SVG_NAMESPACE}">'
    )
    lines = [XML_DECLARATION, header]
    lines.extend(f"  {element}" for element in body if element)
    lines.append("</svg>")
    return "\n".join(lines)


def unique_identifier(base: str, used: set[str]) -> str:
    candidate = base
    suffix = 1
    while candidate in used:
        candidate = f"{base}-{suffix}"
        suffix += 1
    used.add(candidate)
    return candidate

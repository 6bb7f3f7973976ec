from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Palette:
    paper: str = "#f6f1e9"
    ink: str = "#1b1a17"
    muted: str = "#5f5a53"
    alert: str = "#d64545"
    anchor: str = "#2f6f4e"
    selection: str = "#c65a32"


@dataclass(frozen=True)
class Typography:
    title: str = "'Fraunces', serif"
    body: str = "'Space Grotesk', sans-serif"


@dataclass(frozen=True)
class Theme:
    palette: Palette = field(default_factory=Palette)
    typography: Typography = field(default_factory=Typography)

    def font_family(self, font: str | None) -> str:
        return self.typography.title if font == "title" else self.typography.body


DEFAULT_THEME = Theme()

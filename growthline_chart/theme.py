from __future__ import annotations

from dataclasses import asdict, dataclass
import re
from typing import Any, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

# d3.schemeCategory10
CATEGORY10: tuple[str, ...] = (
    "#1F77B4",
    "#FF7F0E",
    "#2CA02C",
    "#D62728",
    "#9467BD",
    "#8C564B",
    "#E377C2",
    "#7F7F7F",
    "#BCBD22",
    "#17BECF",
)

_COLOR_TOKENS = ("hover_color", "background", "axis_color", "text_color", "tooltip_background")


@dataclass(frozen=True)
class ChartTheme:
    """Colors and stroke widths the renderer applies to chart geometry."""

    palette: tuple[str, ...] = CATEGORY10
    hover_color: str = "#FFA500"
    background: str = "#FFFFFF"
    axis_color: str = "#000000"
    text_color: str = "#000000"
    tooltip_background: str = "#FFFFFFE6"
    line_width: float = 1.5
    emphasis_width: float = 3.0
    font_size_px: float = 11.0

    def color_for(self, index: int) -> str:
        return self.palette[index % len(self.palette)]


DEFAULT_THEME = ChartTheme()


def validate_theme_tokens(overrides: Mapping[str, Any] | None = None) -> ChartTheme:
    """Merge theme overrides onto the defaults, rejecting unknown or malformed tokens."""

    raw: dict[str, Any] = asdict(DEFAULT_THEME)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not isinstance(raw[key], str) or not _HEX_COLOR.match(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")

    palette = raw["palette"]
    if isinstance(palette, str) or not isinstance(palette, (list, tuple)) or not palette:
        raise ValueError("Token `palette` must be a non-empty list of hex colors")
    for color in palette:
        if not isinstance(color, str) or not _HEX_COLOR.match(color):
            raise ValueError(f"Token `palette` contains an invalid color: {color!r}")

    for key in ("line_width", "emphasis_width", "font_size_px"):
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")

    return ChartTheme(
        palette=tuple(str(c) for c in palette),
        hover_color=str(raw["hover_color"]),
        background=str(raw["background"]),
        axis_color=str(raw["axis_color"]),
        text_color=str(raw["text_color"]),
        tooltip_background=str(raw["tooltip_background"]),
        line_width=float(raw["line_width"]),
        emphasis_width=float(raw["emphasis_width"]),
        font_size_px=float(raw["font_size_px"]),
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

from .controller import HighlightState, Tooltip
from .projection import AxisSpec, PixelPath, RenderGeometry
from .theme import DEFAULT_THEME, ChartTheme


@dataclass(frozen=True)
class PathStyle:
    stroke: str
    stroke_width: float
    opacity: float = 1.0


class ChartCanvas(Protocol):
    """Drawing surface driven by ``ChartRenderer``; never read back."""

    def draw_axis(self, axis: AxisSpec) -> None:
        ...

    def draw_path(self, path_id: str, points: PixelPath, style: PathStyle) -> None:
        ...

    def set_style(self, path_id: str, style: PathStyle) -> None:
        ...

    def remove_path(self, path_id: str) -> None:
        ...


@runtime_checkable
class TooltipSurface(Protocol):
    def show_tooltip(self, tooltip: Tooltip | None, anchor: tuple[float, float] | None) -> None:
        ...


class ChartRenderer:
    """Translates geometry plus highlight state into canvas calls.

    Colors are assigned by position in ``series_order`` so a country keeps its
    color when others are hidden. Only paths whose points or style changed are
    touched on redraw.
    """

    def __init__(self, canvas: ChartCanvas, series_order: Sequence[str], theme: ChartTheme = DEFAULT_THEME) -> None:
        self._canvas = canvas
        self._theme = theme
        self._color_index = {country: i for i, country in enumerate(series_order)}
        self._drawn: dict[str, tuple[PixelPath, PathStyle]] = {}

    @property
    def canvas(self) -> ChartCanvas:
        return self._canvas

    def drawn_paths(self) -> tuple[str, ...]:
        return tuple(self._drawn)

    def base_color(self, country: str) -> str:
        index = self._color_index.get(country)
        if index is None:
            index = len(self._color_index)
            self._color_index[country] = index
        return self._theme.color_for(index)

    def style_for(self, country: str, highlight: HighlightState) -> PathStyle:
        if country == highlight.hovered:
            return PathStyle(stroke=self._theme.hover_color, stroke_width=self._theme.emphasis_width)
        if country in highlight.pinned:
            return PathStyle(stroke=self.base_color(country), stroke_width=self._theme.emphasis_width)
        return PathStyle(stroke=self.base_color(country), stroke_width=self._theme.line_width)

    def render(self, geometry: RenderGeometry, highlight: HighlightState) -> None:
        self._canvas.draw_axis(geometry.x_axis)
        self._canvas.draw_axis(geometry.y_axis)

        for path_id in [p for p in self._drawn if p not in geometry.paths]:
            self._canvas.remove_path(path_id)
            del self._drawn[path_id]

        for country, points in geometry.paths.items():
            style = self.style_for(country, highlight)
            previous = self._drawn.get(country)
            if previous is None or previous[0] != points:
                self._canvas.draw_path(country, points, style)
            elif previous[1] != style:
                self._canvas.set_style(country, style)
            self._drawn[country] = (points, style)

        self.update_highlight(geometry, highlight)

    def update_highlight(self, geometry: RenderGeometry, highlight: HighlightState) -> None:
        """Restyle drawn paths and refresh the tooltip without re-sending points."""
        for country, (points, style) in list(self._drawn.items()):
            next_style = self.style_for(country, highlight)
            if next_style != style:
                self._canvas.set_style(country, next_style)
                self._drawn[country] = (points, next_style)
        if isinstance(self._canvas, TooltipSurface):
            self._canvas.show_tooltip(highlight.tooltip, _tooltip_anchor(geometry, highlight.tooltip))


def _tooltip_anchor(geometry: RenderGeometry, tooltip: Tooltip | None) -> tuple[float, float] | None:
    if tooltip is None:
        return None
    path = geometry.paths.get(tooltip.country, ())
    if not path:
        return None
    points = geometry.points.get(tooltip.country, ())
    if tooltip.year is not None:
        for (year, _), pixel in zip(points, path, strict=False):
            if year == tooltip.year:
                return pixel
    return path[-1]


class RetainedCanvas:
    """Keeps the latest axis specs, paths and tooltip until serialized.

    Concrete canvases turn this retained scene into SVG markup or pixels.
    """

    def __init__(self) -> None:
        self.axes: dict[str, AxisSpec] = {}
        self.paths: dict[str, tuple[PixelPath, PathStyle]] = {}
        self.tooltip: Tooltip | None = None
        self.tooltip_anchor: tuple[float, float] | None = None

    def draw_axis(self, axis: AxisSpec) -> None:
        self.axes[axis.orientation] = axis

    def draw_path(self, path_id: str, points: PixelPath, style: PathStyle) -> None:
        self.paths[path_id] = (tuple(points), style)

    def set_style(self, path_id: str, style: PathStyle) -> None:
        if path_id not in self.paths:
            raise KeyError(f"no path drawn with id `{path_id}`")
        points, _ = self.paths[path_id]
        self.paths[path_id] = (points, style)

    def remove_path(self, path_id: str) -> None:
        self.paths.pop(path_id, None)

    def show_tooltip(self, tooltip: Tooltip | None, anchor: tuple[float, float] | None) -> None:
        self.tooltip = tooltip
        self.tooltip_anchor = anchor

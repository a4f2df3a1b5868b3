from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from growthline_plot.raster import (
    ClipRect,
    draw_hline,
    draw_polyline,
    draw_text,
    draw_vline,
    fill_rect,
    hex_to_rgba,
    new_canvas,
    text_size,
)

from .projection import AxisSpec, Viewport
from .renderer import RetainedCanvas
from .theme import DEFAULT_THEME, ChartTheme

TICK_SIZE = 6


class RasterCanvas(RetainedCanvas):
    """Retained scene rasterized to an RGBA array, lines clipped to the plot area."""

    def __init__(self, viewport: Viewport, theme: ChartTheme = DEFAULT_THEME, *, title: str | None = None) -> None:
        super().__init__()
        self.viewport = viewport
        self.theme = theme
        self.title = title

    @property
    def plot_rect(self) -> ClipRect:
        vp = self.viewport
        return ClipRect(x=vp.margin_left, y=vp.margin_top, width=vp.plot_width, height=vp.plot_height)

    def to_rgba(self) -> np.ndarray:
        vp = self.viewport
        canvas = new_canvas(vp.width, vp.height, color=hex_to_rgba(self.theme.background))
        text_color = hex_to_rgba(self.theme.text_color)
        if self.title:
            draw_text(
                canvas,
                vp.width // 2,
                vp.margin_top // 2,
                self.title,
                text_color,
                font_size_px=self.theme.font_size_px * 1.4,
                anchor="mm",
            )
        for orientation in ("bottom", "left"):
            if orientation in self.axes:
                self._draw_axis(canvas, self.axes[orientation])

        clip = self.plot_rect
        for points, style in self.paths.values():
            draw_polyline(
                canvas,
                points,
                hex_to_rgba(style.stroke, alpha=style.opacity),
                width=style.stroke_width,
                offset=(clip.x, clip.y),
                clip=clip,
            )

        if self.tooltip is not None and self.tooltip_anchor is not None:
            self._draw_tooltip(canvas)
        return canvas

    def save_png(self, path: Path | str) -> None:
        Image.fromarray(self.to_rgba()).save(path, format="PNG")

    def _draw_axis(self, canvas: np.ndarray, axis: AxisSpec) -> None:
        rect = self.plot_rect
        color = hex_to_rgba(self.theme.axis_color)
        text_color = hex_to_rgba(self.theme.text_color)
        font_px = self.theme.font_size_px
        if axis.orientation == "bottom":
            base_y = rect.y + rect.height
            draw_hline(canvas, rect.x, rect.x + rect.width, base_y, color)
            for tick in axis.ticks:
                x = rect.x + int(round(tick.position))
                draw_vline(canvas, x, base_y, base_y + TICK_SIZE, color)
                draw_text(canvas, x, base_y + TICK_SIZE + 3, tick.label, text_color, font_size_px=font_px, anchor="ma")
            return
        draw_vline(canvas, rect.x, rect.y, rect.y + rect.height, color)
        for tick in axis.ticks:
            y = rect.y + int(round(tick.position))
            draw_hline(canvas, rect.x - TICK_SIZE, rect.x, y, color)
            draw_text(canvas, rect.x - TICK_SIZE - 3, y, tick.label, text_color, font_size_px=font_px, anchor="rm")

    def _draw_tooltip(self, canvas: np.ndarray) -> None:
        assert self.tooltip is not None and self.tooltip_anchor is not None
        rect = self.plot_rect
        text = self.tooltip.text()
        w, h = text_size(text, font_size_px=self.theme.font_size_px)
        x = rect.x + int(round(self.tooltip_anchor[0])) + 10
        y = rect.y + int(round(self.tooltip_anchor[1])) - 10 - (h + 8)
        x = max(0, min(x, canvas.shape[1] - (w + 12)))
        y = max(0, y)
        box = ClipRect(x=x, y=y, width=w + 12, height=h + 8)
        fill_rect(canvas, box, hex_to_rgba(self.theme.tooltip_background))
        border = hex_to_rgba(self.theme.axis_color)
        draw_hline(canvas, box.x, box.x + box.width - 1, box.y, border)
        draw_hline(canvas, box.x, box.x + box.width - 1, box.y + box.height - 1, border)
        draw_vline(canvas, box.x, box.y, box.y + box.height - 1, border)
        draw_vline(canvas, box.x + box.width - 1, box.y, box.y + box.height - 1, border)
        draw_text(canvas, box.x + 6, box.y + 4, text, hex_to_rgba(self.theme.text_color), font_size_px=self.theme.font_size_px)

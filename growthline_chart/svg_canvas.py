from __future__ import annotations

from pathlib import Path
import xml.etree.ElementTree as ET

from .projection import AxisSpec, PixelPath, Viewport
from .renderer import RetainedCanvas
from .theme import DEFAULT_THEME, ChartTheme

SVG_NS = "http://www.w3.org/2000/svg"
TICK_SIZE = 6
CLIP_ID = "plot-clip"


class SvgCanvas(RetainedCanvas):
    """Retained SVG scene: margins group, clipped line layer, two axes."""

    def __init__(self, viewport: Viewport, theme: ChartTheme = DEFAULT_THEME, *, title: str | None = None) -> None:
        super().__init__()
        self.viewport = viewport
        self.theme = theme
        self.title = title

    def to_element(self) -> ET.Element:
        vp = self.viewport
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": str(vp.width),
                "height": str(vp.height),
                "viewBox": f"0 0 {vp.width} {vp.height}",
            },
        )
        ET.SubElement(root, "rect", {"width": "100%", "height": "100%", "fill": self.theme.background})
        if self.title:
            title = ET.SubElement(
                root,
                "text",
                {
                    "x": _num(vp.width / 2),
                    "y": _num(vp.margin_top / 2),
                    "text-anchor": "middle",
                    "fill": self.theme.text_color,
                    "font-size": _num(self.theme.font_size_px * 1.4),
                },
            )
            title.text = self.title

        plot = ET.SubElement(root, "g", {"transform": f"translate({vp.margin_left},{vp.margin_top})"})
        clip = ET.SubElement(ET.SubElement(plot, "defs"), "clipPath", {"id": CLIP_ID})
        ET.SubElement(clip, "rect", {"width": str(vp.plot_width), "height": str(vp.plot_height)})

        if "bottom" in self.axes:
            self._axis_element(plot, self.axes["bottom"])
        if "left" in self.axes:
            self._axis_element(plot, self.axes["left"])

        lines = ET.SubElement(plot, "g", {"class": "lines", "clip-path": f"url(#{CLIP_ID})"})
        for path_id, (points, style) in self.paths.items():
            ET.SubElement(
                lines,
                "path",
                {
                    "class": "line",
                    "data-series": path_id,
                    "d": path_data(points),
                    "fill": "none",
                    "stroke": style.stroke,
                    "stroke-width": _num(style.stroke_width),
                    "stroke-opacity": _num(style.opacity),
                },
            )

        if self.tooltip is not None and self.tooltip_anchor is not None:
            self._tooltip_element(plot)
        return root

    def to_markup(self) -> str:
        return ET.tostring(self.to_element(), encoding="unicode")

    def write(self, path: Path | str) -> None:
        Path(path).write_text(self.to_markup(), encoding="utf-8")

    def _axis_element(self, parent: ET.Element, axis: AxisSpec) -> None:
        vp = self.viewport
        color = self.theme.axis_color
        if axis.orientation == "bottom":
            group = ET.SubElement(
                parent, "g", {"class": "axis axis-bottom", "transform": f"translate(0,{vp.plot_height})"}
            )
            ET.SubElement(group, "line", {"x1": "0", "x2": str(vp.plot_width), "stroke": color})
        else:
            group = ET.SubElement(parent, "g", {"class": "axis axis-left"})
            ET.SubElement(group, "line", {"y1": "0", "y2": str(vp.plot_height), "stroke": color})

        for tick in axis.ticks:
            pos = _num(tick.position)
            if axis.orientation == "bottom":
                tick_group = ET.SubElement(group, "g", {"class": "tick", "transform": f"translate({pos},0)"})
                ET.SubElement(tick_group, "line", {"y2": str(TICK_SIZE), "stroke": color})
                label = ET.SubElement(
                    tick_group,
                    "text",
                    {"y": str(TICK_SIZE + 3), "dy": "0.71em", "text-anchor": "middle", "fill": self.theme.text_color},
                )
            else:
                tick_group = ET.SubElement(group, "g", {"class": "tick", "transform": f"translate(0,{pos})"})
                ET.SubElement(tick_group, "line", {"x2": str(-TICK_SIZE), "stroke": color})
                label = ET.SubElement(
                    tick_group,
                    "text",
                    {"x": str(-(TICK_SIZE + 3)), "dy": "0.32em", "text-anchor": "end", "fill": self.theme.text_color},
                )
            label.set("font-size", _num(self.theme.font_size_px))
            label.text = tick.label

    def _tooltip_element(self, parent: ET.Element) -> None:
        assert self.tooltip is not None and self.tooltip_anchor is not None
        x, y = self.tooltip_anchor
        group = ET.SubElement(
            parent, "g", {"class": "tooltip", "transform": f"translate({_num(x + 10)},{_num(y - 10)})"}
        )
        text = self.tooltip.text()
        width = max(40.0, len(text) * self.theme.font_size_px * 0.6 + 12)
        height = self.theme.font_size_px + 10
        ET.SubElement(
            group,
            "rect",
            {
                "y": _num(-height),
                "width": _num(width),
                "height": _num(height),
                "fill": self.theme.tooltip_background,
                "stroke": self.theme.axis_color,
            },
        )
        label = ET.SubElement(
            group,
            "text",
            {"x": "6", "y": "-5", "fill": self.theme.text_color, "font-size": _num(self.theme.font_size_px)},
        )
        label.text = text


def path_data(points: PixelPath) -> str:
    if not points:
        return ""
    head, *rest = points
    return f"M{_num(head[0])},{_num(head[1])}" + "".join(f"L{_num(x)},{_num(y)}" for x, y in rest)


def _num(value: float) -> str:
    out = f"{float(value):.2f}".rstrip("0").rstrip(".")
    return "0" if out == "-0" else out

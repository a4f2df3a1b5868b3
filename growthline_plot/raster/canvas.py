from __future__ import annotations

from dataclasses import dataclass

import numpy as np


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class ClipRect:
    x: int
    y: int
    width: int
    height: int

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def hex_to_rgba(value: str, alpha: float = 1.0) -> RGBA:
    raw = value.lstrip("#")
    if len(raw) not in (6, 8):
        raise ValueError(f"expected #RRGGBB or #RRGGBBAA color, got {value!r}")
    r, g, b = (int(raw[i : i + 2], 16) for i in (0, 2, 4))
    a = int(raw[6:8], 16) if len(raw) == 8 else 255
    a = int(round(max(0.0, min(1.0, alpha)) * a))
    return (r, g, b, a)


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA, clip: ClipRect | None = None) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    if clip is not None and not clip.contains(x, y):
        return
    a = color[3] / 255.0
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, :3] = (np.asarray(color[:3], dtype=np.float32) * a + current * (1.0 - a)).astype(np.uint8)
    dst[y, x, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    _blend_segment(dst[y, xa : xb + 1], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    _blend_segment(dst[ya : yb + 1, x], color)


def fill_rect(dst: np.ndarray, rect: ClipRect, color: RGBA) -> None:
    for yy in range(rect.y, rect.y + rect.height):
        draw_hline(dst, rect.x, rect.x + rect.width - 1, yy, color)


def _blend_segment(segment: np.ndarray, color: RGBA) -> None:
    a = color[3] / 255.0
    src = np.asarray(color[:3], dtype=np.float32) * a
    segment[:, :3] = (src + segment[:, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    segment[:, 3] = 255

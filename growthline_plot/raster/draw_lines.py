from __future__ import annotations

from typing import Sequence

import numpy as np

from growthline_plot.raster.canvas import RGBA, ClipRect, draw_pixel


def draw_polyline(
    dst: np.ndarray,
    points: Sequence[tuple[float, float]],
    color: RGBA,
    width: float = 1.0,
    *,
    offset: tuple[int, int] = (0, 0),
    clip: ClipRect | None = None,
) -> None:
    """Rasterize a float-coordinate polyline with a square brush."""
    if len(points) < 2:
        return
    arr = np.rint(np.asarray(points, dtype=np.float64)).astype(np.int64)
    arr[:, 0] += offset[0]
    arr[:, 1] += offset[1]
    brush = max(1, int(round(width)))
    for i in range(arr.shape[0] - 1):
        x0, y0 = (int(v) for v in arr[i])
        x1, y1 = (int(v) for v in arr[i + 1])
        _draw_line_segment(dst, x0, y0, x1, y1, color=color, width=brush, clip=clip)


def _draw_line_segment(
    dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, *, color: RGBA, width: int, clip: ClipRect | None
) -> None:
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width, clip=clip)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst: np.ndarray, x: int, y: int, *, color: RGBA, width: int, clip: ClipRect | None) -> None:
    radius = max(0, width // 2)
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color, clip)

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Literal

import numpy as np

from growthline_plot.errors import PlotDataError
from growthline_plot.scales import LinearScale, axis_ticks

from .repository import DataPoint, Series, SeriesRepository
from .view_state import ViewState


X_TICK_TARGET = 10
Y_TICK_TARGET = 8
VALUE_SUFFIX = "%"
EMPTY_VALUE_DOMAIN = (-1.0, 1.0)

PixelPath = tuple[tuple[float, float], ...]
DataPath = tuple[tuple[int, float], ...]


@dataclass(frozen=True)
class Viewport:
    """Outer drawing size plus the margins around the plot area."""

    width: int = 800
    height: int = 400
    margin_top: int = 50
    margin_right: int = 150
    margin_bottom: int = 100
    margin_left: int = 100

    def __post_init__(self) -> None:
        if min(self.margin_top, self.margin_right, self.margin_bottom, self.margin_left) < 0:
            raise PlotDataError("viewport margins must be >= 0")
        if self.plot_width <= 1 or self.plot_height <= 1:
            raise PlotDataError("viewport too small for plotting area")

    @property
    def plot_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom


@dataclass(frozen=True)
class Tick:
    value: float
    position: float
    label: str


@dataclass(frozen=True)
class AxisSpec:
    orientation: Literal["bottom", "left"]
    domain: tuple[float, float]
    ticks: tuple[Tick, ...]


@dataclass(frozen=True)
class RenderGeometry:
    """Drawable output of one projection; rebuilt, never edited."""

    x_domain: tuple[float, float]
    y_domain: tuple[float, float]
    x_axis: AxisSpec
    y_axis: AxisSpec
    points: dict[str, DataPath] = field(default_factory=dict)
    paths: dict[str, PixelPath] = field(default_factory=dict)

    def countries(self) -> tuple[str, ...]:
        return tuple(self.paths)


def effective_anchor_year(state: ViewState) -> int:
    """Anchor year used for rebasing, moved to the nearest year inside the year window."""
    return min(max(state.anchor_year, state.year_min), state.year_max)


def rebase_series(series: Series, anchor_year: int) -> Series:
    offset = series.value_at(anchor_year)
    if offset is None:
        offset = 0.0
    return Series(
        country=series.country,
        points=tuple(DataPoint(p.year, p.value - offset) for p in series.points),
    )


def derive_value_domain(series: Iterable[Series]) -> tuple[float, float]:
    values = [p.value for s in series for p in s.points]
    if not values:
        return EMPTY_VALUE_DOMAIN
    lo = min(values)
    hi = max(values)
    if lo == hi:
        delta = max(1.0, abs(lo) * 0.05)
        return (lo - delta, hi + delta)
    return (lo, hi)


def x_scale(geometry: RenderGeometry, viewport: Viewport) -> LinearScale:
    return LinearScale(domain=geometry.x_domain, range=(0.0, float(viewport.plot_width)))


def y_scale(geometry: RenderGeometry, viewport: Viewport) -> LinearScale:
    return LinearScale(domain=geometry.y_domain, range=(float(viewport.plot_height), 0.0))


def project(repository: SeriesRepository, state: ViewState, viewport: Viewport) -> RenderGeometry:
    selected = [repository[c] for c in repository.countries() if c in state.visible]
    if state.normalize:
        anchor = effective_anchor_year(state)
        selected = [rebase_series(s, anchor) for s in selected]

    x_domain = (float(state.year_min), float(state.year_max))
    if state.value_min is not None and state.value_max is not None:
        y_domain = (float(state.value_min), float(state.value_max))
    else:
        y_domain = derive_value_domain(selected)

    xs = LinearScale(domain=x_domain, range=(0.0, float(viewport.plot_width)))
    ys = LinearScale(domain=y_domain, range=(float(viewport.plot_height), 0.0))

    points: dict[str, DataPath] = {}
    paths: dict[str, PixelPath] = {}
    for series in selected:
        in_window = [p for p in series.points if state.year_min <= p.year <= state.year_max]
        points[series.country] = tuple((p.year, p.value) for p in in_window)
        if not in_window:
            paths[series.country] = ()
            continue
        px = xs(np.asarray([p.year for p in in_window], dtype=np.float64))
        py = ys(np.asarray([p.value for p in in_window], dtype=np.float64))
        paths[series.country] = tuple(zip(px.tolist(), py.tolist()))

    return RenderGeometry(
        x_domain=x_domain,
        y_domain=y_domain,
        x_axis=_axis("bottom", x_domain, xs, integer=True),
        y_axis=_axis("left", y_domain, ys, integer=False),
        points=points,
        paths=paths,
    )


def _axis(orientation: Literal["bottom", "left"], domain: tuple[float, float], scale: LinearScale, *, integer: bool) -> AxisSpec:
    target = X_TICK_TARGET if orientation == "bottom" else Y_TICK_TARGET
    suffix = "" if integer else VALUE_SUFFIX
    values, labels = axis_ticks(domain[0], domain[1], target=target, integer=integer, suffix=suffix)
    ticks = tuple(
        Tick(value=float(v), position=scale(float(v)), label=label)
        for v, label in zip(values.tolist(), labels, strict=True)
    )
    return AxisSpec(orientation=orientation, domain=domain, ticks=ticks)

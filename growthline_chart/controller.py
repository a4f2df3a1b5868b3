from __future__ import annotations

import dataclasses
from dataclasses import dataclass
import logging
import math

from .config import ChartConfig
from .errors import InvalidRangeError
from .events import ChartEvent
from .projection import RenderGeometry, Viewport, effective_anchor_year, project, rebase_series, x_scale, y_scale
from .repository import SeriesRepository
from .view_state import ViewState, initial_view_state

LOGGER = logging.getLogger(__name__)

PixelRange = tuple[float, float]


@dataclass(frozen=True)
class TransitionResult:
    previous: ViewState
    state: ViewState
    error: InvalidRangeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def changed(self) -> bool:
        return self.state != self.previous


@dataclass(frozen=True)
class Tooltip:
    country: str
    year: int | None = None
    value: float | None = None

    def text(self) -> str:
        out = f"Country: {self.country}"
        if self.year is not None:
            out += f" | {self.year}"
            if self.value is not None:
                out += f": {self.value:.2f}%"
        return out


@dataclass(frozen=True)
class HighlightState:
    """Transient emphasis the renderer reads next to the geometry."""

    hovered: str | None = None
    pinned: frozenset[str] = frozenset()
    tooltip: Tooltip | None = None

    def is_emphasized(self, country: str) -> bool:
        return country == self.hovered or country in self.pinned


def _accept(state: ViewState, **changes: object) -> TransitionResult:
    return TransitionResult(previous=state, state=dataclasses.replace(state, **changes))


def _unchanged(state: ViewState) -> TransitionResult:
    return TransitionResult(previous=state, state=state)


def _is_window(lo: float, hi: float) -> bool:
    return math.isfinite(lo) and math.isfinite(hi) and lo <= hi


def set_year_window(state: ViewState, lo: int, hi: int) -> TransitionResult:
    if not _is_window(lo, hi):
        return TransitionResult(previous=state, state=state, error=InvalidRangeError("year", lo, hi))
    return _accept(state, year_min=int(lo), year_max=int(hi))


def set_value_window(state: ViewState, lo: float, hi: float) -> TransitionResult:
    if not _is_window(lo, hi):
        return TransitionResult(previous=state, state=state, error=InvalidRangeError("value", lo, hi))
    return _accept(state, value_min=float(lo), value_max=float(hi))


def brush_year(
    state: ViewState, geometry: RenderGeometry, viewport: Viewport, selection: PixelRange | None
) -> TransitionResult:
    if _is_empty_brush(selection):
        return _unchanged(state)
    scale = x_scale(geometry, viewport)
    years = sorted(_round_half_up(scale.invert(p)) for p in selection)
    return set_year_window(state, years[0], years[1])


def brush_value(
    state: ViewState, geometry: RenderGeometry, viewport: Viewport, selection: PixelRange | None
) -> TransitionResult:
    if _is_empty_brush(selection):
        return _unchanged(state)
    scale = y_scale(geometry, viewport)
    # Pixel y grows downward, so the inverted pair arrives high-to-low.
    values = sorted(scale.invert(p) for p in selection)
    return set_value_window(state, values[0], values[1])


def toggle_visible(state: ViewState, country: str) -> TransitionResult:
    return _accept(state, visible=state.visible ^ {country})


def toggle_pin(state: ViewState, country: str) -> TransitionResult:
    return _accept(state, pinned=state.pinned ^ {country})


def reset(state: ViewState, config: ChartConfig, repository: SeriesRepository) -> TransitionResult:
    restored = dataclasses.replace(
        state,
        year_min=config.year_min,
        year_max=config.year_max,
        value_min=None,
        value_max=None,
        pinned=frozenset(),
    )
    extent = _displayed_extent(restored, repository)
    if extent is not None:
        restored = dataclasses.replace(restored, value_min=extent[0], value_max=extent[1])
    return TransitionResult(previous=state, state=restored)


def set_normalize(state: ViewState, enabled: bool, anchor_year: int | None = None) -> TransitionResult:
    anchor = state.year_min if anchor_year is None else int(anchor_year)
    return _accept(state, normalize=bool(enabled), anchor_year=anchor)


def _displayed_extent(state: ViewState, repository: SeriesRepository) -> tuple[float, float] | None:
    """Min/max over every repository series, rebased when ``state`` normalizes."""
    if not state.normalize:
        return repository.value_extent()
    anchor = effective_anchor_year(state)
    values = [p.value for c in repository.countries() for p in rebase_series(repository[c], anchor).points]
    if not values:
        return None
    return (min(values), max(values))


def _is_empty_brush(selection: PixelRange | None) -> bool:
    return selection is None or selection[0] == selection[1]


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class InteractionController:
    """Owns the chart's single ``ViewState`` and applies widget events to it."""

    def __init__(
        self,
        repository: SeriesRepository,
        config: ChartConfig,
        viewport: Viewport | None = None,
        *,
        state: ViewState | None = None,
    ) -> None:
        self._repository = repository
        self._config = config
        self._viewport = viewport if viewport is not None else config.viewport
        self._state = state if state is not None else initial_view_state(repository, config)
        self._hovered: str | None = None
        self._hover_year: int | None = None
        self._last_error: InvalidRangeError | None = None
        self._geometry: RenderGeometry | None = None
        self._geometry_state: ViewState | None = None

    @property
    def repository(self) -> SeriesRepository:
        return self._repository

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def last_error(self) -> InvalidRangeError | None:
        return self._last_error

    def get_view_state(self) -> ViewState:
        return self._state

    def get_geometry(self) -> RenderGeometry:
        if self._geometry is None or self._geometry_state != self._state:
            self._geometry = project(self._repository, self._state, self.viewport)
            self._geometry_state = self._state
        return self._geometry

    def highlight(self) -> HighlightState:
        tooltip = None
        if self._hovered is not None:
            tooltip = Tooltip(
                country=self._hovered,
                year=self._hover_year,
                value=self._hover_value(self._hovered, self._hover_year),
            )
        return HighlightState(hovered=self._hovered, pinned=self._state.pinned, tooltip=tooltip)

    def dispatch(self, event: ChartEvent) -> TransitionResult:
        result = self._transition(event)
        self._last_error = result.error
        if result.error is not None:
            LOGGER.info("rejected %s event: %s", event.kind, result.error)
            return result
        self._state = result.state
        if self._hovered is not None and self._hovered not in self._state.visible:
            self._hovered = None
            self._hover_year = None
        return result

    def _transition(self, event: ChartEvent) -> TransitionResult:
        state = self._state
        payload = event.payload
        if event.kind == "yearWindow":
            return set_year_window(state, int(payload["min"]), int(payload["max"]))
        if event.kind == "valueWindow":
            return set_value_window(state, float(payload["min"]), float(payload["max"]))
        if event.kind == "brush":
            selection = payload.get("selection")
            if payload.get("axis") == "y":
                return brush_value(state, self.get_geometry(), self.viewport, selection)
            return brush_year(state, self.get_geometry(), self.viewport, selection)
        if event.kind in ("toggleVisible", "togglePin"):
            country = str(payload["country"])
            if country not in self._repository:
                LOGGER.warning("ignoring %s for unknown country `%s`", event.kind, country)
                return _unchanged(state)
            if event.kind == "toggleVisible":
                return toggle_visible(state, country)
            return toggle_pin(state, country)
        if event.kind == "hover":
            self._apply_hover(payload.get("country"), payload.get("year"))
            return _unchanged(state)
        if event.kind == "reset":
            return reset(state, self._config, self._repository)
        if event.kind == "normalize":
            return set_normalize(state, bool(payload["enabled"]), payload.get("anchor_year"))
        raise ValueError(f"unsupported chart event kind: {event.kind}")

    def _apply_hover(self, country: str | None, year: int | None) -> None:
        if country is None or country not in self._repository or country not in self._state.visible:
            self._hovered = None
            self._hover_year = None
            return
        self._hovered = country
        self._hover_year = year

    def _hover_value(self, country: str, year: int | None) -> float | None:
        if year is None:
            return None
        for point_year, value in self.get_geometry().points.get(country, ()):
            if point_year == year:
                return value
        return None

"""Reactive multi-series line chart engine: series, view state, projection, interaction."""

from .config import TOP10_ECONOMIES, ChartConfig, chart_config_from_dict, load_chart_config
from .controller import (
    HighlightState,
    InteractionController,
    Tooltip,
    TransitionResult,
    brush_value,
    brush_year,
    reset,
    set_normalize,
    set_value_window,
    set_year_window,
    toggle_pin,
    toggle_visible,
)
from .errors import ChartError, DataSourceError, InvalidRangeError
from .events import ChartEvent, parse_chart_event
from .projection import (
    AxisSpec,
    RenderGeometry,
    Tick,
    Viewport,
    derive_value_domain,
    effective_anchor_year,
    project,
    rebase_series,
)
from .raster_canvas import RasterCanvas
from .renderer import ChartCanvas, ChartRenderer, PathStyle, RetainedCanvas
from .repository import DataPoint, Series, SeriesRepository, build_repository, load_repository, load_rows
from .session import ChartSession
from .svg_canvas import SvgCanvas
from .theme import CATEGORY10, ChartTheme, validate_theme_tokens
from .view_state import ViewState, initial_view_state

__all__ = [
    "AxisSpec",
    "CATEGORY10",
    "ChartCanvas",
    "ChartConfig",
    "ChartError",
    "ChartEvent",
    "ChartRenderer",
    "ChartSession",
    "ChartTheme",
    "DataPoint",
    "DataSourceError",
    "HighlightState",
    "InteractionController",
    "InvalidRangeError",
    "PathStyle",
    "RasterCanvas",
    "RenderGeometry",
    "RetainedCanvas",
    "Series",
    "SeriesRepository",
    "SvgCanvas",
    "TOP10_ECONOMIES",
    "Tick",
    "Tooltip",
    "TransitionResult",
    "ViewState",
    "Viewport",
    "brush_value",
    "brush_year",
    "build_repository",
    "chart_config_from_dict",
    "derive_value_domain",
    "effective_anchor_year",
    "initial_view_state",
    "load_chart_config",
    "load_repository",
    "load_rows",
    "parse_chart_event",
    "project",
    "rebase_series",
    "reset",
    "set_normalize",
    "set_value_window",
    "set_year_window",
    "toggle_pin",
    "toggle_visible",
    "validate_theme_tokens",
]

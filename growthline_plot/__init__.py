from growthline_plot.errors import PlotDataError
from growthline_plot.scales import (
    LinearScale,
    axis_ticks,
    format_tick,
    format_ticks_for_axis,
    generate_nice_ticks,
    ticks_within_range,
)

__all__ = [
    "LinearScale",
    "PlotDataError",
    "axis_ticks",
    "format_tick",
    "format_ticks_for_axis",
    "generate_nice_ticks",
    "ticks_within_range",
]

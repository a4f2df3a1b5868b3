from __future__ import annotations

import math


class ChartError(Exception):
    """Base class for chart engine failures."""


class DataSourceError(ChartError):
    """The tabular source could not be read; nothing may be rendered."""


class InvalidRangeError(ChartError, ValueError):
    """A window request with ``min > max`` or a non-finite bound.

    Returned inside a transition result rather than raised, so callers can show
    it as a hint while the view state stays untouched.
    """

    def __init__(self, axis: str, lo: float, hi: float) -> None:
        if math.isfinite(lo) and math.isfinite(hi):
            message = f"{axis} window is inverted: min {lo} > max {hi}"
        else:
            message = f"{axis} window bounds must be finite: min {lo}, max {hi}"
        super().__init__(message)
        self.axis = axis
        self.lo = lo
        self.hi = hi

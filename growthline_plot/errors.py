from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when plotting primitives receive unusable input."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .repository import SeriesRepository

if TYPE_CHECKING:
    from .config import ChartConfig


@dataclass(frozen=True)
class ViewState:
    """Everything that decides what the chart currently shows.

    ``value_min``/``value_max`` stay ``None`` until the controller sets a value
    window; projection then derives the y-domain from the data.
    """

    year_min: int
    year_max: int
    value_min: float | None = None
    value_max: float | None = None
    visible: frozenset[str] = frozenset()
    pinned: frozenset[str] = frozenset()
    normalize: bool = False
    anchor_year: int = 0

    def __post_init__(self) -> None:
        if self.year_min > self.year_max:
            raise ValueError("ViewState.year_min must be <= year_max")
        if (self.value_min is None) != (self.value_max is None):
            raise ValueError("ViewState value window must set both bounds or neither")
        if self.value_min is not None and self.value_max is not None and self.value_min > self.value_max:
            raise ValueError("ViewState.value_min must be <= value_max")

    @property
    def has_value_window(self) -> bool:
        return self.value_min is not None

    def is_visible(self, country: str) -> bool:
        return country in self.visible

    def is_pinned(self, country: str) -> bool:
        return country in self.pinned


def initial_view_state(repository: SeriesRepository, config: "ChartConfig") -> ViewState:
    return ViewState(
        year_min=config.year_min,
        year_max=config.year_max,
        visible=frozenset(repository.countries()),
        anchor_year=config.year_min,
    )

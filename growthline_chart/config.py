from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib
from typing import Any, Mapping

from .projection import Viewport
from .repository import DEFAULT_COUNTRY_FIELD
from .theme import DEFAULT_THEME, ChartTheme, validate_theme_tokens

TOP10_ECONOMIES: tuple[str, ...] = (
    "United States",
    "China",
    "Japan",
    "Germany",
    "India",
    "United Kingdom",
    "France",
    "Italy",
    "Canada",
    "South Korea",
)

DEFAULT_HOVER_INTERVAL_NS = int(1_000_000_000 / 45)

_TOP_LEVEL_KEYS = {"csv_path", "country_field", "countries", "year_range", "hover_interval_ms", "viewport", "theme"}
_VIEWPORT_KEYS = {"width", "height", "margin_top", "margin_right", "margin_bottom", "margin_left"}


@dataclass(frozen=True)
class ChartConfig:
    csv_path: Path | None = None
    country_field: str = DEFAULT_COUNTRY_FIELD
    countries: tuple[str, ...] = TOP10_ECONOMIES
    year_min: int = 2000
    year_max: int = 2020
    viewport: Viewport = field(default_factory=Viewport)
    theme: ChartTheme = DEFAULT_THEME
    hover_interval_ns: int = DEFAULT_HOVER_INTERVAL_NS

    def __post_init__(self) -> None:
        if not self.countries:
            raise ValueError("ChartConfig.countries must not be empty")
        if len(set(self.countries)) != len(self.countries):
            raise ValueError("ChartConfig.countries must be unique")
        if self.year_min > self.year_max:
            raise ValueError("ChartConfig.year_min must be <= year_max")
        if not self.country_field.strip():
            raise ValueError("ChartConfig.country_field must be non-empty")
        if self.hover_interval_ns < 0:
            raise ValueError("ChartConfig.hover_interval_ns must be >= 0")

    @property
    def year_range(self) -> tuple[int, int]:
        return (self.year_min, self.year_max)


def load_chart_config(path: Path | str) -> ChartConfig:
    config_path = Path(path)
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    return chart_config_from_dict(raw, base_dir=config_path.parent)


def chart_config_from_dict(raw: Mapping[str, Any], *, base_dir: Path | None = None) -> ChartConfig:
    unknown = sorted(set(raw) - _TOP_LEVEL_KEYS)
    if unknown:
        raise ValueError(f"unknown config keys: {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    if "csv_path" in raw:
        csv_path = Path(_coerce_str(raw["csv_path"], "csv_path"))
        if base_dir is not None and not csv_path.is_absolute():
            csv_path = base_dir / csv_path
        kwargs["csv_path"] = csv_path
    if "country_field" in raw:
        kwargs["country_field"] = _coerce_str(raw["country_field"], "country_field")
    if "countries" in raw:
        kwargs["countries"] = _coerce_string_list(raw["countries"], "countries")
    if "year_range" in raw:
        year_range = raw["year_range"]
        if not isinstance(year_range, list) or len(year_range) != 2:
            raise ValueError("config field `year_range` must be a [start, end] pair")
        kwargs["year_min"] = _coerce_int(year_range[0], "year_range")
        kwargs["year_max"] = _coerce_int(year_range[1], "year_range")
    if "hover_interval_ms" in raw:
        interval = raw["hover_interval_ms"]
        if isinstance(interval, bool) or not isinstance(interval, (int, float)):
            raise ValueError("config field `hover_interval_ms` must be a number")
        kwargs["hover_interval_ns"] = int(float(interval) * 1_000_000)
    if "viewport" in raw:
        kwargs["viewport"] = _viewport_from_dict(raw["viewport"])
    if "theme" in raw:
        theme = raw["theme"]
        if not isinstance(theme, Mapping):
            raise ValueError("config field `theme` must be a table")
        kwargs["theme"] = validate_theme_tokens(theme)
    return ChartConfig(**kwargs)


def _viewport_from_dict(raw: Any) -> Viewport:
    if not isinstance(raw, Mapping):
        raise ValueError("config field `viewport` must be a table")
    unknown = sorted(set(raw) - _VIEWPORT_KEYS)
    if unknown:
        raise ValueError(f"unknown viewport keys: {', '.join(unknown)}")
    return Viewport(**{key: _coerce_int(value, f"viewport.{key}") for key, value in raw.items()})


def _coerce_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"config field `{field_name}` must be a non-empty string")
    return value


def _coerce_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"config field `{field_name}` must be an integer")
    return value


def _coerce_string_list(value: Any, field_name: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"config field `{field_name}` must be a list of strings")
    return tuple(value)

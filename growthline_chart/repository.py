from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping, Sequence

import pandas as pd

from .errors import DataSourceError

if TYPE_CHECKING:
    from .config import ChartConfig

LOGGER = logging.getLogger(__name__)

DEFAULT_COUNTRY_FIELD = "Country Name"


@dataclass(frozen=True)
class DataPoint:
    year: int
    value: float


@dataclass(frozen=True)
class Series:
    """One country's observations, sorted by year with unique years."""

    country: str
    points: tuple[DataPoint, ...] = ()

    def __post_init__(self) -> None:
        if not self.country.strip():
            raise ValueError("Series.country must be non-empty")
        years = [p.year for p in self.points]
        if any(b <= a for a, b in zip(years, years[1:])):
            raise ValueError(f"Series `{self.country}` points must be strictly ascending by year")

    def years(self) -> tuple[int, ...]:
        return tuple(p.year for p in self.points)

    def value_at(self, year: int) -> float | None:
        for point in self.points:
            if point.year == year:
                return point.value
        return None

    def extent(self) -> tuple[float, float] | None:
        if not self.points:
            return None
        values = [p.value for p in self.points]
        return (min(values), max(values))


class SeriesRepository(Mapping[str, Series]):
    """Read-only country -> Series mapping, iterated in allow-list order."""

    def __init__(self, series: Iterable[Series] = ()) -> None:
        table: dict[str, Series] = {}
        for item in series:
            if item.country in table:
                raise ValueError(f"duplicate series for country `{item.country}`")
            table[item.country] = item
        self._series = table

    def __getitem__(self, country: str) -> Series:
        return self._series[country]

    def __iter__(self) -> Iterator[str]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def __repr__(self) -> str:
        return f"SeriesRepository({list(self._series)!r})"

    def countries(self) -> tuple[str, ...]:
        return tuple(self._series)

    def point_count(self) -> int:
        return sum(len(s.points) for s in self._series.values())

    def value_extent(self) -> tuple[float, float] | None:
        extents = [e for e in (s.extent() for s in self._series.values()) if e is not None]
        if not extents:
            return None
        return (min(lo for lo, _ in extents), max(hi for _, hi in extents))


def parse_cell(raw: Any) -> float | None:
    """Parse a table cell into a finite float; blanks and junk are ``None``."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return value


def build_repository(
    rows: Iterable[Mapping[str, Any]],
    allowed_countries: Sequence[str],
    year_range: tuple[int, int],
    *,
    country_field: str = DEFAULT_COUNTRY_FIELD,
) -> SeriesRepository:
    if not allowed_countries:
        raise ValueError("allowed_countries must not be empty")
    start, end = year_range
    if start > end:
        raise ValueError(f"year_range is inverted: {start} > {end}")

    allowed = set(allowed_countries)
    grouped: dict[str, dict[int, float]] = {}
    skipped = 0
    for row in rows:
        country = row.get(country_field)
        if not isinstance(country, str) or country not in allowed:
            continue
        points = grouped.setdefault(country, {})
        for year in range(start, end + 1):
            value = parse_cell(row.get(str(year)))
            if value is None:
                skipped += 1
                continue
            if year in points:
                LOGGER.warning("ignoring duplicate %s observation for %s", year, country)
                continue
            points[year] = value

    series = [
        Series(country=country, points=tuple(DataPoint(year, grouped[country][year]) for year in sorted(grouped[country])))
        for country in allowed_countries
        if country in grouped
    ]
    missing = [c for c in allowed_countries if c not in grouped]
    if missing:
        LOGGER.info("countries absent from source: %s", ", ".join(missing))
    if skipped:
        LOGGER.debug("skipped %d empty or non-numeric cells", skipped)
    return SeriesRepository(series)


def load_rows(path: Path | str, *, country_field: str = DEFAULT_COUNTRY_FIELD) -> list[dict[str, Any]]:
    """Read a wide CSV (one row per country, one column per year) as string cells."""
    try:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise DataSourceError(f"cannot read data source {path}: {exc}") from exc
    frame.columns = [str(c).strip() for c in frame.columns]
    if country_field not in frame.columns:
        raise DataSourceError(f"data source {path} has no `{country_field}` column")
    return frame.to_dict(orient="records")


def load_repository(path: Path | str, config: "ChartConfig") -> SeriesRepository:
    rows = load_rows(path, country_field=config.country_field)
    repository = build_repository(
        rows,
        config.countries,
        (config.year_min, config.year_max),
        country_field=config.country_field,
    )
    LOGGER.info("loaded %d series (%d points) from %s", len(repository), repository.point_count(), path)
    return repository

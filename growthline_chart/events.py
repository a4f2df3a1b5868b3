from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Literal, Mapping

EventKind = Literal[
    "yearWindow",
    "valueWindow",
    "brush",
    "toggleVisible",
    "hover",
    "togglePin",
    "reset",
    "normalize",
]

EVENT_KINDS: frozenset[str] = frozenset(
    {"yearWindow", "valueWindow", "brush", "toggleVisible", "hover", "togglePin", "reset", "normalize"}
)


@dataclass(frozen=True)
class ChartEvent:
    """Normalized widget output consumed by the interaction controller."""

    kind: EventKind
    payload: Mapping[str, Any] = field(default_factory=dict)


def year_window(lo: int, hi: int) -> ChartEvent:
    return ChartEvent("yearWindow", {"min": int(lo), "max": int(hi)})


def value_window(lo: float, hi: float) -> ChartEvent:
    return ChartEvent("valueWindow", {"min": float(lo), "max": float(hi)})


def brush(axis: Literal["x", "y"], selection: tuple[float, float] | None) -> ChartEvent:
    return ChartEvent("brush", {"axis": axis, "selection": selection})


def toggle_visible(country: str) -> ChartEvent:
    return ChartEvent("toggleVisible", {"country": country})


def hover(country: str | None, year: int | None = None) -> ChartEvent:
    return ChartEvent("hover", {"country": country, "year": year})


def toggle_pin(country: str) -> ChartEvent:
    return ChartEvent("togglePin", {"country": country})


def reset() -> ChartEvent:
    return ChartEvent("reset", {})


def normalize(enabled: bool, anchor_year: int | None = None) -> ChartEvent:
    return ChartEvent("normalize", {"enabled": bool(enabled), "anchor_year": anchor_year})


def parse_chart_event(kind: str, payload: object) -> ChartEvent | None:
    """Parse untyped widget output into a ``ChartEvent``.

    Malformed payloads yield ``None`` so noisy input widgets cannot break the
    dispatch loop.
    """

    if kind not in EVENT_KINDS:
        return None
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        return None

    if kind == "yearWindow":
        lo = _as_int(payload.get("min"))
        hi = _as_int(payload.get("max"))
        if lo is None or hi is None:
            return None
        return year_window(lo, hi)
    if kind == "valueWindow":
        lo_f = _as_float(payload.get("min"))
        hi_f = _as_float(payload.get("max"))
        if lo_f is None or hi_f is None:
            return None
        return value_window(lo_f, hi_f)
    if kind == "brush":
        axis = payload.get("axis")
        if axis not in ("x", "y"):
            return None
        raw_selection = payload.get("selection")
        if raw_selection is None:
            return brush(axis, None)
        if not isinstance(raw_selection, (list, tuple)) or len(raw_selection) != 2:
            return None
        p0 = _as_float(raw_selection[0])
        p1 = _as_float(raw_selection[1])
        if p0 is None or p1 is None:
            return None
        return brush(axis, (p0, p1))
    if kind in ("toggleVisible", "togglePin"):
        country = payload.get("country")
        if not isinstance(country, str) or not country:
            return None
        return toggle_visible(country) if kind == "toggleVisible" else toggle_pin(country)
    if kind == "hover":
        country = payload.get("country")
        if country is not None and not isinstance(country, str):
            return None
        raw_year = payload.get("year")
        year = _as_int(raw_year) if raw_year is not None else None
        if raw_year is not None and year is None:
            return None
        return hover(country or None, year)
    if kind == "reset":
        return reset()

    enabled = payload.get("enabled")
    if not isinstance(enabled, bool):
        return None
    raw_anchor = payload.get("anchor_year")
    anchor = _as_int(raw_anchor) if raw_anchor is not None else None
    if raw_anchor is not None and anchor is None:
        return None
    return normalize(enabled, anchor)


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    return out if math.isfinite(out) else None


def _as_int(value: Any) -> int | None:
    out = _as_float(value)
    if out is None or out != int(out):
        return None
    return int(out)

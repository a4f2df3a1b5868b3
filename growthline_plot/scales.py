from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import overload

import numpy as np


@dataclass(frozen=True)
class LinearScale:
    """Affine map from a data domain onto a pixel range.

    A zero-span domain maps every value onto the middle of the range so a
    single-year window still draws.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    def __post_init__(self) -> None:
        d0, d1 = self.domain
        r0, r1 = self.range
        if not all(np.isfinite(v) for v in (d0, d1, r0, r1)):
            raise ValueError("scale domain/range must be finite")

    @property
    def span(self) -> float:
        return float(self.domain[1] - self.domain[0])

    @overload
    def __call__(self, value: float) -> float: ...

    @overload
    def __call__(self, value: np.ndarray) -> np.ndarray: ...

    def __call__(self, value):
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            mid = (r0 + r1) * 0.5
            if isinstance(value, np.ndarray):
                return np.full(value.shape, mid, dtype=np.float64)
            return float(mid)
        k = (r1 - r0) / (d1 - d0)
        if isinstance(value, np.ndarray):
            return r0 + (value.astype(np.float64, copy=False) - d0) * k
        return float(r0 + (float(value) - d0) * k)

    def invert(self, pixel: float) -> float:
        d0, d1 = self.domain
        r0, r1 = self.range
        if r1 == r0 or d1 == d0:
            return float(d0)
        return float(d0 + (float(pixel) - r0) * (d1 - d0) / (r1 - r0))


def generate_nice_ticks(vmin: float, vmax: float, target: int, *, min_step: float | None = None) -> np.ndarray:
    """Evenly spaced round values covering ``[vmin, vmax]`` at roughly ``target`` ticks."""
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, rounded=False)
    step = _nice_number(span / max(target - 1, 1), rounded=True)
    if min_step is not None:
        step = max(step, float(min_step))
    first = np.floor(vmin / step)
    last = np.ceil(vmax / step)
    ticks = np.arange(first, last + 1.0, dtype=np.float64) * step
    # snap values like -4.44e-16 onto zero
    ticks[np.abs(ticks) <= step * 1e-9] = 0.0
    return ticks


def ticks_within_range(ticks: np.ndarray, *, vmin: float, vmax: float) -> np.ndarray:
    if ticks.size == 0:
        return ticks
    step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else max(1e-12, abs(vmax - vmin))
    eps = max(1e-12, step * 1e-6)
    mask = (ticks >= (vmin - eps)) & (ticks <= (vmax + eps))
    out = ticks[mask]
    if out.size == 0:
        if abs(vmax - vmin) > 1e-12:
            return np.asarray([vmin, vmax], dtype=np.float64)
        return np.asarray([vmin], dtype=np.float64)
    return out


def format_tick(value: float, *, step: float | None = None, suffix: str = "") -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    magnitude = abs(value)
    if magnitude and (magnitude >= 1e6 or magnitude < 1e-6 or (step is not None and abs(step) < 1e-4)):
        return f"{value:.4e}{suffix}"
    decimals = 6 if step is None else _decimals_from_step(step)
    text = f"{value:.{decimals}f}"
    # keep integer zeros such as 30 or 40
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return ("0" if text == "-0" else text) + suffix


def format_ticks_for_axis(ticks: np.ndarray, *, suffix: str = "") -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]), suffix=suffix)]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step, suffix=suffix) for v in ticks]


def axis_ticks(
    vmin: float,
    vmax: float,
    *,
    target: int,
    integer: bool = False,
    suffix: str = "",
) -> tuple[np.ndarray, list[str]]:
    """Tick values clipped to ``[vmin, vmax]`` together with their labels."""
    raw = generate_nice_ticks(vmin, vmax, target, min_step=1.0 if integer else None)
    ticks = ticks_within_range(raw, vmin=vmin, vmax=vmax)
    if integer:
        ticks = np.unique(np.rint(ticks))
        labels = [str(int(v)) + suffix for v in ticks.tolist()]
        return ticks, labels
    return ticks, format_ticks_for_axis(ticks, suffix=suffix)


_ROUNDED_MANTISSAS: tuple[tuple[float, float], ...] = ((1.5, 1.0), (3.0, 2.0), (7.0, 5.0), (np.inf, 10.0))


def _nice_number(value: float, *, rounded: bool) -> float:
    magnitude = 10.0 ** np.floor(np.log10(value))
    mantissa = value / magnitude
    if rounded:
        nice = next(n for bound, n in _ROUNDED_MANTISSAS if mantissa < bound)
    else:
        nice = next((n for n in (1.0, 2.0, 5.0) if mantissa <= n), 10.0)
    return float(nice * magnitude)


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    exponent = Decimal(repr(float(step))).normalize().as_tuple().exponent
    return min(12, max(0, -int(exponent)))

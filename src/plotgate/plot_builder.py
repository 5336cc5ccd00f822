"""Ordered plot builder — clean/dirty ordering and volume-axis scaling.

Clean (tick-aligned) prices are kept ahead of dirty (sub-pip) ones so the
synthetic values never interleave with the anchor points on the price axis.
Every function here is pure and total: degenerate input falls back to a
documented default instead of raising.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import pandas as pd

from plotgate.classifier import is_clean, to_number
from plotgate.models.point import PriceField, SeriesPoint
from plotgate.models.scale import ScaleParams

DEFAULT_CEILING = 1_000_000
OUTLIERS_DROPPED = 2
PERCENTILE = 0.90
HEADROOM = 1.2
LOG_SCALE_RATIO = 10


@dataclass(frozen=True)
class PlotData:
    """Ordered series plus its volume-axis parameters.

    Attributes:
        price_field: Price field on the x axis.
        points: Clean points first, then dirty, each group sorted by price.
        clean_count: Number of leading points in the clean group.
        scale: Volume-axis parameters.
    """

    price_field: PriceField
    points: tuple[SeriesPoint, ...]
    clean_count: int
    scale: ScaleParams

    @property
    def clean(self) -> tuple[SeriesPoint, ...]:
        return self.points[: self.clean_count]

    @property
    def dirty(self) -> tuple[SeriesPoint, ...]:
        return self.points[self.clean_count:]

    def to_frame(self) -> pd.DataFrame:
        """One row per point in plot order, with a ``group`` column."""
        rows = []
        for i, p in enumerate(self.points):
            row: dict[str, Any] = dict(p.extra)
            row["time"] = p.time
            row["price"] = p.numeric_price(self.price_field)
            row["volume"] = p.volume
            row["group"] = "clean" if i < self.clean_count else "dirty"
            rows.append(row)
        if not rows:
            return pd.DataFrame(columns=["time", "price", "volume", "group"])
        return pd.DataFrame(rows)


# ---- Ordering ----

def _price_key(price_field: PriceField):
    def key(point: SeriesPoint) -> tuple[bool, float]:
        value = point.numeric_price(price_field)
        # NaN does not order; park it after every real number.
        if math.isnan(value):
            return (True, 0.0)
        return (False, value)
    return key


def partition(
    series: Iterable[SeriesPoint], price_field: PriceField | str,
) -> tuple[list[SeriesPoint], list[SeriesPoint]]:
    """Split a series into (clean, dirty) keeping input order."""
    pf = PriceField.coerce(price_field)
    clean: list[SeriesPoint] = []
    dirty: list[SeriesPoint] = []
    for point in series:
        (clean if is_clean(point.price(pf)) else dirty).append(point)
    return clean, dirty


def _ordered_groups(
    series: Iterable[SeriesPoint], price_field: PriceField,
) -> tuple[list[SeriesPoint], list[SeriesPoint]]:
    clean, dirty = partition(series, price_field)
    key = _price_key(price_field)
    return sorted(clean, key=key), sorted(dirty, key=key)


def build_ordered(
    series: Iterable[SeriesPoint], price_field: PriceField | str,
) -> list[SeriesPoint]:
    """Return a new list: sorted clean points followed by sorted dirty points.

    Both groups are sorted ascending by numeric price; the sort is stable so
    ties keep their input order.
    """
    clean, dirty = _ordered_groups(series, PriceField.coerce(price_field))
    return clean + dirty


# ---- Volume axis ----

def _finite_sorted(volumes: Iterable[Any]) -> list[float]:
    values = [to_number(v) for v in volumes]
    return sorted(v for v in values if math.isfinite(v))


def _percentile_index(n: int) -> int:
    return math.floor(PERCENTILE * (n - 1))


def compute_trimmed_ceiling(volumes: Iterable[Any]) -> int:
    """Axis maximum: 90th percentile after dropping the top two, plus 20%.

    Returns ``DEFAULT_CEILING`` when fewer than two usable values remain,
    or when trimming leaves nothing to take a percentile of.
    """
    values = _finite_sorted(volumes)
    if len(values) < 2:
        return DEFAULT_CEILING
    trimmed = values[:-OUTLIERS_DROPPED]
    if not trimmed:
        return DEFAULT_CEILING
    value = trimmed[_percentile_index(len(trimmed))]
    return math.ceil(value * HEADROOM)


def should_use_log_scale(volumes: Iterable[Any]) -> bool:
    """True when the maximum exceeds 10x the 90th percentile of all values."""
    values = _finite_sorted(volumes)
    if len(values) < 2:
        return False
    p90 = values[_percentile_index(len(values))]
    return values[-1] > LOG_SCALE_RATIO * p90


def compute_scale(volumes: Iterable[Any]) -> ScaleParams:
    values = list(volumes)
    if should_use_log_scale(values):
        return ScaleParams(use_log_scale=True, suggested_max=None)
    return ScaleParams(use_log_scale=False, suggested_max=compute_trimmed_ceiling(values))


def format_volume(value: Any) -> Any:
    """Tick label: ``2500000 -> "2.5M"``, ``3400 -> "3.4K"``, else unchanged."""
    number = to_number(value)
    if number >= 1e6:
        return f"{number / 1e6:.1f}M"
    if number >= 1e3:
        return f"{number / 1e3:.1f}K"
    return value


def build_plot(series: Sequence[SeriesPoint], price_field: PriceField | str) -> PlotData:
    """Order a series and derive its volume-axis parameters."""
    pf = PriceField.coerce(price_field)
    clean, dirty = _ordered_groups(series, pf)
    return PlotData(
        price_field=pf,
        points=tuple(clean + dirty),
        clean_count=len(clean),
        scale=compute_scale(p.volume for p in series),
    )

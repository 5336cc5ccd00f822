"""Upload-result ingestion — turn ``volume_vs_*`` series into plot data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import pandas as pd
from loguru import logger

from plotgate.errors import PlotGateError, PlotGateErrorCode
from plotgate.models.point import PriceField, SeriesPoint
from plotgate.plot_builder import PlotData, build_plot
from plotgate.validation import validate_upload_result


@dataclass(frozen=True)
class ChartSet:
    """The four price-vs-volume charts built from one upload."""

    open: PlotData
    close: PlotData
    high: PlotData
    low: PlotData

    def get(self, price_field: PriceField | str) -> PlotData:
        return getattr(self, PriceField.coerce(price_field).value)

    def __iter__(self):
        return iter((self.open, self.close, self.high, self.low))

    def to_frame(self) -> pd.DataFrame:
        """All four charts stacked, with a ``price_field`` column."""
        frames = []
        for plot in self:
            frame = plot.to_frame()
            frame.insert(0, "price_field", plot.price_field.value)
            frames.append(frame)
        return pd.concat(frames, ignore_index=True)


def parse_upload_result(result_data: Any) -> dict[PriceField, list[SeriesPoint]]:
    """Parse the upload processor's response into series points.

    Raises:
        PlotGateError: ``INGESTION_MALFORMED`` if any of the four series is
            missing or not a sequence. No partial result is returned.
    """
    check = validate_upload_result(result_data)
    if not check.passed:
        raise PlotGateError(
            f"Malformed upload result: {check.summary}",
            code=PlotGateErrorCode.INGESTION_MALFORMED,
        )
    return {
        pf: [SeriesPoint.from_dict(raw) for raw in result_data[pf.series_key]]
        for pf in PriceField
    }


def build_charts(result_data: Any) -> ChartSet:
    """Build all four ordered, scaled charts from an upload result."""
    series = parse_upload_result(result_data)
    plots = {pf.value: build_plot(points, pf) for pf, points in series.items()}
    logger.debug(
        "Built charts: "
        + ", ".join(f"{name}={len(plot.points)} ({plot.clean_count} clean)" for name, plot in plots.items())
    )
    return ChartSet(**plots)

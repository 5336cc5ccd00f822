"""Tests for ordering and volume-axis scaling."""

import math

import pytest

from plotgate.classifier import is_clean
from plotgate.models.point import PriceField, SeriesPoint
from plotgate.plot_builder import (
    DEFAULT_CEILING,
    build_ordered,
    build_plot,
    compute_scale,
    compute_trimmed_ceiling,
    format_volume,
    should_use_log_scale,
)


def _points(field: str, prices: list, volumes: list | None = None) -> list[SeriesPoint]:
    volumes = volumes or [100] * len(prices)
    return [
        SeriesPoint.from_dict({"time": f"t{i}", field: p, "volume": v})
        for i, (p, v) in enumerate(zip(prices, volumes))
    ]


class TestBuildOrdered:
    def test_clean_before_dirty_regardless_of_value(self):
        series = _points("close", [5.0, 0.0000001, 3.0, 9.12345678, 1.0])
        ordered = build_ordered(series, PriceField.CLOSE)
        prices = [p.price("close") for p in ordered]
        assert prices == [1.0, 3.0, 5.0, 0.0000001, 9.12345678]

    def test_is_permutation(self):
        series = _points("open", [2.0, "1.1234567", 1.5, 3.333333333, 0.5])
        ordered = build_ordered(series, "open")
        assert len(ordered) == len(series)
        assert sorted(map(id, ordered)) == sorted(map(id, series))

    def test_groups_non_decreasing(self):
        series = _points("high", [4, "2.10000001", 1, 3, "0.30000001", 2, 2])
        ordered = build_ordered(series, "high")
        flags = [is_clean(p.price("high")) for p in ordered]
        boundary = flags.index(False)
        assert all(flags[:boundary]) and not any(flags[boundary:])
        for group in (ordered[:boundary], ordered[boundary:]):
            values = [p.numeric_price("high") for p in group]
            assert values == sorted(values)

    def test_ties_keep_input_order(self):
        series = _points("low", [2, 1, 2, 1])
        ordered = build_ordered(series, "low")
        assert [p.time for p in ordered] == ["t1", "t3", "t0", "t2"]

    def test_nan_prices_go_last_in_dirty_group(self):
        series = _points("close", ["bad", "1.12345678", None, "0.12345678"])
        ordered = build_ordered(series, "close")
        assert [p.time for p in ordered] == ["t3", "t1", "t0", "t2"]

    def test_returns_fresh_list(self):
        series = _points("close", [2, 1])
        ordered = build_ordered(series, "close")
        assert ordered is not series
        assert [p.time for p in series] == ["t0", "t1"]

    def test_empty(self):
        assert build_ordered([], "close") == []


class TestTrimmedCeiling:
    def test_degenerate_inputs_use_default(self):
        assert compute_trimmed_ceiling([]) == DEFAULT_CEILING
        assert compute_trimmed_ceiling([42]) == DEFAULT_CEILING
        assert compute_trimmed_ceiling([1, 2]) == DEFAULT_CEILING

    def test_drops_top_two_then_p90_with_headroom(self):
        assert compute_trimmed_ceiling([1, 2, 3, 4, 5, 100, 200]) == 5

    def test_unsorted_input(self):
        assert compute_trimmed_ceiling([200, 5, 1, 100, 3, 4, 2]) == 5

    def test_single_value_after_trim(self):
        assert compute_trimmed_ceiling([9, 5, 7]) == 6

    def test_non_finite_values_ignored(self):
        assert compute_trimmed_ceiling([math.nan, "x", None]) == DEFAULT_CEILING
        assert compute_trimmed_ceiling([1, 2, 3, 4, 5, 100, 200, math.nan]) == 5


class TestLogScale:
    def test_heavy_tail(self):
        assert should_use_log_scale(list(range(1, 11)) + [1000])

    def test_equal_values(self):
        assert not should_use_log_scale([5, 5])

    def test_degenerate(self):
        assert not should_use_log_scale([])
        assert not should_use_log_scale([1_000_000])

    def test_exactly_ten_times_is_linear(self):
        assert not should_use_log_scale([1, 10])


class TestComputeScale:
    def test_linear_gets_ceiling(self):
        scale = compute_scale([1, 2, 3, 4, 5, 100, 200])
        assert not scale.use_log_scale
        assert scale.suggested_max == 5

    def test_log_has_no_suggested_max(self):
        scale = compute_scale(list(range(1, 11)) + [1000])
        assert scale.use_log_scale
        assert scale.suggested_max is None

    def test_to_dict(self):
        assert compute_scale([]).to_dict() == {
            "useLogScale": False,
            "suggestedMax": DEFAULT_CEILING,
        }


class TestFormatVolume:
    def test_millions(self):
        assert format_volume(2_500_000) == "2.5M"
        assert format_volume(1_000_000) == "1.0M"

    def test_thousands(self):
        assert format_volume(3400) == "3.4K"

    def test_small_values_unchanged(self):
        assert format_volume(500) == 500
        assert format_volume(0) == 0


class TestBuildPlot:
    def test_counts_and_scale(self):
        series = _points("open", [3, "1.1234567", 1], volumes=[5, 20, 30])
        plot = build_plot(series, "open")
        assert plot.price_field is PriceField.OPEN
        assert plot.clean_count == 2
        assert [p.time for p in plot.clean] == ["t2", "t0"]
        assert [p.time for p in plot.dirty] == ["t1"]
        assert plot.scale.suggested_max == 6

    def test_points_match_build_ordered(self):
        series = _points("close", ["1.1234567", 3, float("nan"), 1, "2.0000001", 3])
        plot = build_plot(series, "close")
        assert [p.time for p in plot.points] == [p.time for p in build_ordered(series, "close")]
        assert plot.clean_count == 3

    def test_to_frame(self):
        series = _points("open", [3, "1.1234567", 1], volumes=[10, 20, 30])
        frame = build_plot(series, "open").to_frame()
        assert list(frame["time"]) == ["t2", "t0", "t1"]
        assert list(frame["group"]) == ["clean", "clean", "dirty"]
        assert frame["price"].iloc[2] == pytest.approx(1.1234567)

    def test_to_frame_empty(self):
        frame = build_plot([], "open").to_frame()
        assert frame.empty
        assert "group" in frame.columns

"""测试时间窗口过滤."""

from pricechart.core.models import Sample
from pricechart.core.pipeline import AnchorPolicy, tail, windowed


def _series(*timestamps: int) -> list[Sample]:
    return [Sample(timestamp=ts, price=float(i)) for i, ts in enumerate(timestamps)]


def test_unbounded_window_returns_copy():
    series = _series(0, 1000, 2000)

    result = windowed(series, None, anchor=AnchorPolicy.DATASET)

    assert result == series
    assert result is not series


def test_dataset_anchor_uses_last_sample():
    series = _series(0, 1000, 2000, 3000)

    assert windowed(series, 1500, anchor=AnchorPolicy.DATASET, now=10**12) == series[2:]


def test_cutoff_is_inclusive():
    series = _series(0, 1000, 2000, 3000)

    assert windowed(series, 1000, anchor=AnchorPolicy.DATASET) == series[2:]


def test_wall_clock_anchor_ignores_series():
    series = _series(0, 1000, 2000, 3000)

    assert windowed(series, 8500, anchor=AnchorPolicy.WALL_CLOCK, now=10_000) == series[2:]
    assert windowed(series, 1000, anchor=AnchorPolicy.WALL_CLOCK, now=10_000) == []


def test_empty_series_with_dataset_anchor():
    assert windowed([], 1000, anchor=AnchorPolicy.DATASET, now=5000) == []


def test_tail():
    series = _series(0, 1000, 2000)

    assert tail(series, 2) == series[1:]
    assert tail(series, 10) == series
    assert tail(series, 0) == []

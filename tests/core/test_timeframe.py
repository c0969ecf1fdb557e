"""测试时间框架注册表."""

import pytest

from pricechart.core.exceptions import UnsupportedTimeframeError, ValidationError
from pricechart.core.models import (
    DAY_MS,
    HOUR_MS,
    TIMEFRAMES,
    SourceKind,
    normalize_timeframe_key,
    resolve_timeframe,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, "all"), ("", "all"), ("   ", "all"), (" 24H ", "24h"), ("MAX", "max"), ("1Y+", "1y+")],
)
def test_normalize_key(raw, expected):
    assert normalize_timeframe_key(raw) == expected


def test_resolve_known_key():
    spec = resolve_timeframe(" 6H")

    assert spec.key == "6h"
    assert spec.source is SourceKind.REALTIME


def test_resolve_unknown_key():
    with pytest.raises(UnsupportedTimeframeError) as exc_info:
        resolve_timeframe("bogus")

    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.message == "Unsupported timeframe"
    assert exc_info.value.details["timeframe"] == "bogus"


def test_cache_timeframes():
    for key in ("all", "max", "long", "1y+"):
        spec = TIMEFRAMES[key]
        assert spec.source is SourceKind.CACHE
        assert not spec.is_bounded
        assert spec.limit == 500

    assert TIMEFRAMES["1y"].window_ms == 365 * DAY_MS
    assert TIMEFRAMES["1y"].source is SourceKind.CACHE


def test_realtime_timeframes():
    expected = {
        "1h": ("1m", 90, HOUR_MS),
        "6h": ("5m", 90, 6 * HOUR_MS),
        "24h": ("15m", 96, DAY_MS),
    }
    for key, (granularity, limit, window_ms) in expected.items():
        spec = TIMEFRAMES[key]
        assert spec.source is SourceKind.REALTIME
        assert (spec.granularity, spec.limit, spec.window_ms) == (granularity, limit, window_ms)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        TIMEFRAMES["5m"] = TIMEFRAMES["1h"]

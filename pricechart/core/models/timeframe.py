"""Timeframe configuration and registry."""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

from pricechart.core.exceptions import UnsupportedTimeframeError

HOUR_MS = 60 * 60 * 1000
DAY_MS = 24 * HOUR_MS

DEFAULT_TIMEFRAME = "all"


class SourceKind(str, Enum):
    """数据源类型枚举."""

    CACHE = "cache"
    REALTIME = "realtime"


class TimeframeSpec(BaseModel):
    """单个时间框架的静态配置.

    ``window_ms`` 为 None 表示不限时间窗口。
    """

    model_config = ConfigDict(frozen=True)

    key: str
    source: SourceKind
    limit: int = Field(gt=0)
    window_ms: int | None = Field(default=None, gt=0)
    granularity: str | None = None

    @property
    def is_bounded(self) -> bool:
        return self.window_ms is not None


def _cache(key: str, window_ms: int | None = None, limit: int = 500) -> TimeframeSpec:
    return TimeframeSpec(key=key, source=SourceKind.CACHE, window_ms=window_ms, limit=limit)


def _realtime(key: str, granularity: str, limit: int, window_ms: int) -> TimeframeSpec:
    return TimeframeSpec(
        key=key,
        source=SourceKind.REALTIME,
        granularity=granularity,
        limit=limit,
        window_ms=window_ms,
    )


TIMEFRAMES: Mapping[str, TimeframeSpec] = MappingProxyType(
    {
        "all": _cache("all"),
        "max": _cache("max"),
        "long": _cache("long"),
        "1y+": _cache("1y+"),
        "1y": _cache("1y", window_ms=365 * DAY_MS),
        "1h": _realtime("1h", "1m", 90, HOUR_MS),
        "6h": _realtime("6h", "5m", 90, 6 * HOUR_MS),
        "24h": _realtime("24h", "15m", 96, DAY_MS),
    }
)


def normalize_timeframe_key(raw: str | None) -> str:
    """去除空白并转为小写，缺省时返回 ``all``."""
    if not isinstance(raw, str):
        return DEFAULT_TIMEFRAME
    return raw.strip().lower() or DEFAULT_TIMEFRAME


def resolve_timeframe(
    raw: str | None,
    registry: Mapping[str, TimeframeSpec] = TIMEFRAMES,
) -> TimeframeSpec:
    """根据请求参数查找时间框架配置.

    Raises:
        UnsupportedTimeframeError: 未知的时间框架
    """
    key = normalize_timeframe_key(raw)
    spec = registry.get(key)
    if spec is None:
        raise UnsupportedTimeframeError(key)
    return spec

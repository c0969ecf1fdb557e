"""
Chart data orchestration.

Selects the cache-backed or real-time-backed path per timeframe, recovers
from upstream failure by windowing the cached dataset, and reports the
outcome as a tagged :class:`~pricechart.core.models.SeriesResult`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

import httpx
from loguru import logger

from pricechart.core.config import ChartConfig
from pricechart.core.data import HistoricalCacheLoader, RealtimeFetcher
from pricechart.core.exceptions import CacheLoadError, SourceError
from pricechart.core.logging import log_context
from pricechart.core.models import (
    TIMEFRAMES,
    Sample,
    SeriesResult,
    SourceKind,
    TimeframeSpec,
    resolve_timeframe,
)
from pricechart.core.monitoring import MetricsCollector
from pricechart.core.pipeline import (
    AnchorPolicy,
    downsample,
    normalize_series,
    now_ms,
    tail,
    windowed,
)


class ChartDataService:
    """图表数据编排服务.

    缓存时间框架: 读取缓存 -> 规范化 -> 以数据集最后样本为锚点截取窗口 -> 降采样。
    实时时间框架: 请求上游；失败时读取缓存并以当前时间为锚点截取窗口。
    """

    def __init__(
        self,
        cache_loader: HistoricalCacheLoader,
        realtime_fetcher: RealtimeFetcher,
        *,
        timeframes: Mapping[str, TimeframeSpec] = TIMEFRAMES,
        clock: Callable[[], int] = now_ms,
        metrics: MetricsCollector | None = None,
    ):
        """初始化编排服务.

        Args:
            cache_loader: 历史缓存加载器
            realtime_fetcher: 实时数据客户端
            timeframes: 时间框架注册表
            clock: 返回当前毫秒时间的函数
            metrics: 指标收集器 (可选)
        """
        self.cache_loader = cache_loader
        self.realtime_fetcher = realtime_fetcher
        self.timeframes = timeframes
        self._clock = clock
        self._metrics = metrics

    @classmethod
    def from_config(
        cls,
        config: ChartConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: MetricsCollector | None = None,
    ) -> "ChartDataService":
        """根据配置创建服务及其数据源."""
        return cls(
            HistoricalCacheLoader(config.cache.path, metrics=metrics),
            RealtimeFetcher(config.realtime, transport=transport, metrics=metrics),
            metrics=metrics,
        )

    async def close(self) -> None:
        await self.realtime_fetcher.close()

    def resolve(self, timeframe: str | None) -> TimeframeSpec:
        """解析时间框架参数.

        Raises:
            UnsupportedTimeframeError: 未知的时间框架
        """
        return resolve_timeframe(timeframe, self.timeframes)

    async def get_series(self, timeframe: str | None) -> SeriesResult:
        """获取图表序列.

        未知时间框架抛出 :class:`UnsupportedTimeframeError`；
        数据源失败不抛出异常，而是返回 ``FAILED`` 结果。
        """
        spec = self.resolve(timeframe)
        with log_context(timeframe=spec.key):
            if spec.source is SourceKind.REALTIME:
                result = await self._realtime_series(spec)
            else:
                result = await self._cached_series(spec)

        if self._metrics is not None:
            self._metrics.record_request(spec.key, result.kind.value)
        return result

    def cached_window(self, normalized: list[Sample], spec: TimeframeSpec) -> list[Sample]:
        """以数据集为锚点截取窗口，样本不足 2 个时退回到最近的 ``limit`` 个样本."""
        recent = windowed(normalized, spec.window_ms, anchor=AnchorPolicy.DATASET, now=self._clock())
        if len(recent) < 2:
            recent = tail(normalized, spec.limit)
        return downsample(recent, spec.limit)

    def fallback_window(self, normalized: list[Sample], spec: TimeframeSpec) -> list[Sample]:
        """以当前时间为锚点截取窗口并降采样到实时点数上限."""
        recent = windowed(normalized, spec.window_ms, anchor=AnchorPolicy.WALL_CLOCK, now=self._clock())
        return downsample(recent, self.realtime_fetcher.point_limit(spec))

    async def _cached_series(self, spec: TimeframeSpec) -> SeriesResult:
        try:
            normalized = await self._load_normalized()
        except CacheLoadError as e:
            logger.error(f"Failed to build chart data for {spec.key}: {e.message}")
            return SeriesResult.failed(spec.key, e)
        return SeriesResult.primary(spec.key, self.cached_window(normalized, spec))

    async def _realtime_series(self, spec: TimeframeSpec) -> SeriesResult:
        try:
            series = await self.realtime_fetcher.fetch(spec)
        except SourceError as e:
            logger.bind(error_code=e.error_code.value, source="realtime").warning(
                f"Real-time API failed for {spec.key}, falling back to cached data: {e.message}"
            )
            return await self._realtime_fallback(spec, e)
        return SeriesResult.primary(spec.key, series)

    async def _realtime_fallback(self, spec: TimeframeSpec, cause: SourceError) -> SeriesResult:
        try:
            normalized = await self._load_normalized()
        except CacheLoadError as e:
            logger.error(f"Cache fallback failed for {spec.key}: {e.message}")
            return SeriesResult.failed(spec.key, e, cause=cause)
        return SeriesResult.fallback(spec.key, self.fallback_window(normalized, spec), cause)

    async def _load_normalized(self) -> list[Sample]:
        return normalize_series(await self.cache_loader.load())

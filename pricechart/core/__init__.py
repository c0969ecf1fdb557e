"""pricechart 核心模块"""

from pricechart.core.config import ChartConfig, ConfigManager
from pricechart.core.data import HistoricalCacheLoader, RealtimeFetcher
from pricechart.core.models import Sample, SeriesResult, TimeframeSpec
from pricechart.core.services import ChartDataService

__all__ = [
    "ChartConfig",
    "ConfigManager",
    "HistoricalCacheLoader",
    "RealtimeFetcher",
    "Sample",
    "SeriesResult",
    "TimeframeSpec",
    "ChartDataService",
]

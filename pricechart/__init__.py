"""pricechart - 图表价格序列服务

从本地历史缓存或上游实时接口提供有界、可直接绘图的价格序列，
实时接口失败时自动回退到缓存数据。
"""

from pricechart.core.models import Sample, SeriesResult, TimeframeSpec
from pricechart.core.pipeline import downsample, normalize_series, windowed
from pricechart.core.services import ChartDataService

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ChartDataService",
    "Sample",
    "SeriesResult",
    "TimeframeSpec",
    "downsample",
    "normalize_series",
    "windowed",
]

"""Series transformation pipeline."""

from pricechart.core.pipeline.downsample import downsample
from pricechart.core.pipeline.normalize import (
    MILLISECOND_THRESHOLD,
    coerce_price,
    coerce_timestamp,
    normalize_point,
    normalize_series,
)
from pricechart.core.pipeline.window import AnchorPolicy, now_ms, tail, windowed

__all__ = [
    "normalize_series",
    "normalize_point",
    "coerce_timestamp",
    "coerce_price",
    "MILLISECOND_THRESHOLD",
    "AnchorPolicy",
    "windowed",
    "tail",
    "now_ms",
    "downsample",
]

"""Exception handling module."""

from pricechart.core.exceptions.base import (
    CacheLoadError,
    ChartDataError,
    SourceError,
    UnsupportedTimeframeError,
    UpstreamError,
    UpstreamNetworkError,
    UpstreamNotConfiguredError,
    UpstreamPayloadError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    ValidationError,
)
from pricechart.core.exceptions.codes import ErrorCode

__all__ = [
    "ChartDataError",
    "ValidationError",
    "UnsupportedTimeframeError",
    "SourceError",
    "CacheLoadError",
    "UpstreamError",
    "UpstreamNotConfiguredError",
    "UpstreamStatusError",
    "UpstreamTimeoutError",
    "UpstreamPayloadError",
    "UpstreamNetworkError",
    "ErrorCode",
]

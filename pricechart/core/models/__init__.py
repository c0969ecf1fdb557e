"""Data models."""

from .records import (
    PRICE_ALIASES,
    TIMESTAMP_ALIASES,
    AliasedRecord,
    PairRecord,
    RawRecord,
    parse_record,
)
from .result import ResultKind, SeriesResult
from .sample import Sample, Series
from .timeframe import (
    DAY_MS,
    DEFAULT_TIMEFRAME,
    HOUR_MS,
    TIMEFRAMES,
    SourceKind,
    TimeframeSpec,
    normalize_timeframe_key,
    resolve_timeframe,
)

__all__ = [
    "Sample",
    "Series",
    "PairRecord",
    "AliasedRecord",
    "RawRecord",
    "parse_record",
    "TIMESTAMP_ALIASES",
    "PRICE_ALIASES",
    "SourceKind",
    "TimeframeSpec",
    "TIMEFRAMES",
    "DEFAULT_TIMEFRAME",
    "HOUR_MS",
    "DAY_MS",
    "normalize_timeframe_key",
    "resolve_timeframe",
    "ResultKind",
    "SeriesResult",
]

"""Data source adapters."""

from pricechart.core.data.cache_loader import HistoricalCacheLoader, read_text
from pricechart.core.data.realtime import RealtimeFetcher, extract_records

__all__ = ["HistoricalCacheLoader", "RealtimeFetcher", "extract_records", "read_text"]

"""Point and series normalization.

Turns loosely shaped raw records into a sorted, de-duplicated list of
:class:`~pricechart.core.models.Sample`. Records that cannot be coerced are
dropped without raising.
"""

from __future__ import annotations

import math
import numbers
import warnings
from datetime import date, datetime, timezone
from decimal import Decimal
from operator import attrgetter
from typing import Any

import pandas as pd

from pricechart.core.models import AliasedRecord, Sample, parse_record

# 大于该值视为毫秒，否则视为秒
MILLISECOND_THRESHOLD = 1e10

# pandas 会把这些关键字解析为当前时间
_RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def _round_half_up(value: float) -> int | None:
    # 缩放后可能溢出为 inf
    if not math.isfinite(value):
        return None
    return int(math.floor(value + 0.5))


def _to_float(value: Any) -> float | None:
    try:
        numeric = float(value)
    except (OverflowError, TypeError, ValueError):
        return None
    return numeric if math.isfinite(numeric) else None


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


def _parse_date_string(text: str) -> int | None:
    if text.lower() in _RELATIVE_DATE_WORDS:
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        try:
            parsed = pd.to_datetime(text, utc=True)
        except (OverflowError, TypeError, ValueError):
            return None
    if pd.isna(parsed):
        return None
    return int(parsed.value // 1_000_000)


def coerce_timestamp(value: Any) -> int | None:
    """将时间戳类输入转换为毫秒级 epoch，无法解析时返回 None.

    - ``datetime``/``date``: 取其 epoch 毫秒，无时区时按 UTC 处理
    - 数值: 大于 1e10 视为毫秒，否则视为秒并乘以 1000
    - 字符串: 先尝试按数值解析，失败后按日期字符串解析
    """
    if value is None or isinstance(value, bool) or value is pd.NaT:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return _round_half_up(value.timestamp() * 1000)
    if isinstance(value, date):
        midnight = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        return _round_half_up(midnight.timestamp() * 1000)
    if _is_numeric(value):
        numeric = _to_float(value)
        if numeric is None:
            return None
        if numeric > MILLISECOND_THRESHOLD:
            return _round_half_up(numeric)
        return _round_half_up(numeric * 1000)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        numeric = _to_float(text)
        if numeric is not None:
            return coerce_timestamp(numeric)
        return _parse_date_string(text)
    return None


def coerce_price(value: Any) -> float | None:
    """将价格类输入转换为有限实数，无法解析时返回 None."""
    if _is_numeric(value):
        return _to_float(value)
    if isinstance(value, str):
        text = value.strip()
        return _to_float(text) if text else None
    return None


def normalize_point(raw: Any) -> Sample | None:
    """规范化单条原始记录."""
    if isinstance(raw, Sample):
        return raw

    record = parse_record(raw)
    if record is None:
        return None

    timestamp = coerce_timestamp(record.timestamp)
    price = coerce_price(record.price)
    if timestamp is not None and price is not None:
        return Sample(timestamp=timestamp, price=price)

    if isinstance(record, AliasedRecord) and timestamp is not None:
        nested = record.nested
        if isinstance(nested, (list, tuple)):
            return normalize_point(nested)
    return None


def normalize_series(raw: Any) -> list[Sample]:
    """规范化原始记录集合.

    结果按时间戳升序排列；相同时间戳只保留输入中最后出现的一条。
    非列表输入返回空列表。
    """
    if not isinstance(raw, (list, tuple)):
        return []

    samples = [sample for sample in map(normalize_point, raw) if sample is not None]
    # 稳定排序保证相同时间戳保持输入顺序
    samples.sort(key=attrgetter("timestamp"))

    deduped: list[Sample] = []
    for sample in samples:
        if deduped and deduped[-1].timestamp == sample.timestamp:
            deduped[-1] = sample
        else:
            deduped.append(sample)
    return deduped

"""Trailing time-window filtering."""

from __future__ import annotations

import time
from collections.abc import Sequence
from enum import Enum

from pricechart.core.models import Sample


class AnchorPolicy(str, Enum):
    """窗口锚点策略.

    ``DATASET`` 以序列最后一个样本为锚点，``WALL_CLOCK`` 以当前时间为锚点。
    """

    DATASET = "dataset"
    WALL_CLOCK = "wall_clock"


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def windowed(
    series: Sequence[Sample],
    window_ms: int | None,
    *,
    anchor: AnchorPolicy,
    now: int | None = None,
) -> list[Sample]:
    """保留锚点之前 ``window_ms`` 毫秒内的样本.

    Args:
        series: 已排序的样本序列
        window_ms: 窗口长度，None 表示不限
        anchor: 锚点策略，调用方必须显式指定
        now: 当前时间 (毫秒)，默认读取系统时钟

    Returns:
        新的样本列表，顺序不变
    """
    if window_ms is None:
        return list(series)

    if anchor is AnchorPolicy.DATASET and series:
        reference = series[-1].timestamp
    else:
        reference = now if now is not None else now_ms()

    cutoff = reference - window_ms
    return [sample for sample in series if sample.timestamp >= cutoff]


def tail(series: Sequence[Sample], limit: int) -> list[Sample]:
    """返回最近的 ``limit`` 个样本."""
    if limit < 1:
        return []
    return list(series[-limit:])

"""Extreme-preserving stride downsampling."""

from __future__ import annotations

from collections.abc import Sequence
from operator import attrgetter

from pricechart.core.models import Sample


def downsample(series: Sequence[Sample], limit: int) -> list[Sample]:
    """将序列压缩到约 ``limit`` 个点.

    按步长 ``ceil(len / limit)`` 取样，并强制保留最后一个样本以及整个输入中
    价格最低、最高的样本，因此结果最多比 ``limit`` 多 3 个点。
    长度不超过 ``limit`` 时原样返回。
    """
    if limit < 1:
        raise ValueError("limit must be positive")

    total = len(series)
    if total <= limit:
        return list(series)

    stride = -(-total // limit)
    picked = list(range(0, total, stride))
    if picked[-1] != total - 1:
        picked.append(total - 1)
    sampled = [series[index] for index in picked]

    lowest = min(series, key=attrgetter("price"))
    highest = max(series, key=attrgetter("price"))
    for extreme in (lowest, highest):
        if not any(s.timestamp == extreme.timestamp and s.price == extreme.price for s in sampled):
            sampled.append(extreme)

    sampled.sort(key=attrgetter("timestamp"))
    return sampled

"""Raw input record shapes accepted by the normalizer."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .sample import Sample

# 别名按优先级排列，整数表示位置索引
TIMESTAMP_ALIASES: tuple[str | int, ...] = ("timestamp", "time", "t", "date", 0)
PRICE_ALIASES: tuple[str | int, ...] = ("price_usd", "price", "value", "usd", "p", "close", 1)


@dataclass(frozen=True, slots=True)
class PairRecord:
    """有序二元组 ``[timestamp, price]``."""

    timestamp: Any
    price: Any


@dataclass(frozen=True, slots=True)
class AliasedRecord:
    """键值记录，时间戳和价格可能出现在任一别名下."""

    fields: Mapping[Any, Any]

    @property
    def timestamp(self) -> Any:
        return self.resolve(TIMESTAMP_ALIASES)

    @property
    def price(self) -> Any:
        return self.resolve(PRICE_ALIASES)

    @property
    def nested(self) -> Any:
        """``value`` 字段本身可能是一个二元组."""
        return self.fields.get("value")

    def resolve(self, aliases: Sequence[str | int]) -> Any:
        """返回第一个存在 (非 None) 的别名对应的值.

        存在但无效的值不会让位给后面的别名。
        """
        for alias in aliases:
            value = self._lookup(alias)
            if value is not None:
                return value
        return None

    def _lookup(self, alias: str | int) -> Any:
        if isinstance(alias, int):
            # JSON 对象的位置键是字符串
            value = self.fields.get(alias)
            return value if value is not None else self.fields.get(str(alias))
        return self.fields.get(alias)


RawRecord = PairRecord | AliasedRecord


def parse_record(raw: Any) -> RawRecord | None:
    """将任意输入分类为 :data:`RawRecord`，无法识别时返回 None."""
    if isinstance(raw, Sample):
        return PairRecord(raw.timestamp, raw.price)
    if not raw:
        return None
    if isinstance(raw, (list, tuple)):
        timestamp = raw[0] if len(raw) > 0 else None
        price = raw[1] if len(raw) > 1 else None
        return PairRecord(timestamp, price)
    if isinstance(raw, Mapping):
        return AliasedRecord(raw)
    return None

"""Canonical price sample model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Sample(BaseModel):
    """规范化后的单个价格样本.

    ``timestamp`` 为毫秒级 epoch 时间，``price`` 为有限实数。
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, populate_by_name=True)

    timestamp: int
    price: float = Field(serialization_alias="price_usd")

    def to_payload(self) -> dict[str, Any]:
        """转换为图表接口的输出格式."""
        return {"timestamp": self.timestamp, "price_usd": self.price}


Series = list[Sample]

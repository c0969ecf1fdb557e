"""
Web API 响应模型
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """错误响应"""

    error: str


class PricePoint(BaseModel):
    """图表数据点"""

    timestamp: int = Field(description="毫秒级 epoch 时间戳")
    price_usd: float


class HealthResponse(BaseModel):
    """健康检查响应"""

    status: str
    version: str
    uptime_seconds: float
    checks: dict[str, Any] = Field(default_factory=dict)

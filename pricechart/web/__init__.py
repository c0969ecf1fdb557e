"""
Web API 模块 - FastAPI 网络服务实现
"""

from pricechart.web.app import create_app
from pricechart.web.models import ErrorResponse, HealthResponse, PricePoint
from pricechart.web.routes import chart_router, health_router, metrics_router

__all__ = [
    "create_app",
    "chart_router",
    "health_router",
    "metrics_router",
    "ErrorResponse",
    "HealthResponse",
    "PricePoint",
]

"""
Web API 路由模块
"""

from pricechart.web.metrics import router as metrics_router
from pricechart.web.routes.chart_routes import router as chart_router
from pricechart.web.routes.health_routes import router as health_router

__all__ = ["chart_router", "health_router", "metrics_router"]

"""
健康检查和系统状态路由
"""

import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from pricechart import __version__
from pricechart.core.services import ChartDataService
from pricechart.web.models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """
    基础健康检查

    报告运行时间、历史缓存是否已加载以及实时接口是否已配置
    """
    service: ChartDataService = request.app.state.chart_service
    return HealthResponse(
        status="ok",
        version=__version__,
        uptime_seconds=round(time.monotonic() - request.app.state.started_at, 3),
        checks={
            "cache_loaded": service.cache_loader.loaded,
            "cache_path": str(service.cache_loader.path),
            "realtime_configured": service.realtime_fetcher.configured,
        },
    )


@router.get("/health/live")
async def liveness_check() -> dict[str, bool]:
    """存活检查"""
    return {"alive": True}


@router.get("/health/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """
    就绪检查

    历史缓存已加载或缓存文件存在时视为就绪
    """
    loader = request.app.state.chart_service.cache_loader
    ready = loader.loaded or loader.path.is_file()
    return JSONResponse(status_code=200 if ready else 503, content={"ready": ready})

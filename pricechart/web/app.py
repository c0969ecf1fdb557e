"""
FastAPI 应用工厂和配置
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from pricechart import __version__
from pricechart.core.config import ChartConfig, ConfigManager
from pricechart.core.exceptions import SourceError, ValidationError
from pricechart.core.logging import configure_logging, log_context
from pricechart.core.monitoring import MetricsCollector, get_metrics_collector
from pricechart.core.services import ChartDataService
from pricechart.web.models import ErrorResponse
from pricechart.web.routes import chart_router, health_router, metrics_router
from pricechart.web.routes.chart_routes import FAILED_MESSAGE
from pricechart.web.utils import get_request_id


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理"""
    config: ChartConfig = app.state.config
    configure_logging(
        level=config.logging.level,
        file_output=bool(config.logging.file),
        file_path=config.logging.file,
    )
    logger.info(f"Chart data service listening on port {config.server.port}")

    yield

    await app.state.chart_service.close()


def create_app(
    config: ChartConfig | None = None,
    *,
    service: ChartDataService | None = None,
    metrics: MetricsCollector | None = None,
) -> FastAPI:
    """创建 FastAPI 应用实例

    Args:
        config: 服务配置，默认从配置文件和环境变量读取
        service: 编排服务，默认根据配置创建
        metrics: 指标收集器，默认使用全局实例
    """
    config = config or ConfigManager().get_config()
    metrics = metrics or get_metrics_collector()

    app = FastAPI(
        title="pricechart - 图表价格序列服务",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.metrics = metrics
    app.state.chart_service = service or ChartDataService.from_config(config, metrics=metrics)
    app.state.started_at = time.monotonic()

    _setup_middleware(app)
    _setup_routes(app)
    _setup_exception_handlers(app)

    return app


def _setup_middleware(app: FastAPI) -> None:
    """配置中间件"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    # 长序列响应压缩
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        with log_context(trace_id=get_request_id(request), path=request.url.path) as trace_id:
            response = await call_next(request)
        response.headers["X-Request-ID"] = trace_id
        return response


def _setup_routes(app: FastAPI) -> None:
    """注册路由"""
    app.include_router(chart_router, prefix="/api", tags=["chart"])
    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(metrics_router)


def _setup_exception_handlers(app: FastAPI) -> None:
    """配置异常处理器"""

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """客户端参数错误"""
        return JSONResponse(status_code=400, content=ErrorResponse(error=exc.message).model_dump())

    @app.exception_handler(SourceError)
    async def source_exception_handler(request: Request, exc: SourceError) -> JSONResponse:
        """数据源错误"""
        logger.bind(error_code=exc.error_code.value).error(f"Failed to build chart data: {exc.message}")
        return JSONResponse(status_code=502, content=ErrorResponse(error=FAILED_MESSAGE).model_dump())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """处理未捕获的异常"""
        logger.opt(exception=exc).error("Unhandled error while serving request")
        return JSONResponse(status_code=500, content=ErrorResponse(error="Internal server error").model_dump())

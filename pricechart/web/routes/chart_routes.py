"""
图表数据 API 路由
"""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from pricechart.core.services import ChartDataService
from pricechart.web.models import ErrorResponse, PricePoint

router = APIRouter()

FAILED_MESSAGE = "Failed to load chart data"


@router.get(
    "/chart-data",
    response_model=list[PricePoint],
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_chart_data(
    request: Request,
    timeframe: str | None = Query(None, description="时间框架 (all, 1y, 1h, 6h, 24h ...)，不区分大小写"),
) -> JSONResponse:
    """
    获取图表价格序列

    - **timeframe**: 缓存时间框架 all/1y/1y+/long/max，实时时间框架 1h/6h/24h

    响应头 ``X-Data-Source`` 标明数据来自主数据源 (primary) 还是缓存回退 (fallback)。
    """
    service: ChartDataService = request.app.state.chart_service

    # 未知时间框架抛出 ValidationError，由异常处理器返回 400
    result = await service.get_series(timeframe)

    if not result.ok:
        return JSONResponse(status_code=502, content=ErrorResponse(error=FAILED_MESSAGE).model_dump())

    return JSONResponse(
        content=[sample.to_payload() for sample in result.series],
        headers={"X-Data-Source": result.kind.value},
    )

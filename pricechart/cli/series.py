"""Series command implementations for the pricechart CLI."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import typer

from pricechart.core.config import ConfigManager
from pricechart.core.exceptions import ValidationError
from pricechart.core.models import TIMEFRAMES, SeriesResult
from pricechart.core.services import ChartDataService

from .constants import SOURCE_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import emit_error, prepare_output

SERIES_COLUMNS = ["timestamp", "datetime", "price_usd"]
TIMEFRAME_COLUMNS = ["key", "source", "window_ms", "limit", "granularity"]


def register(app: typer.Typer) -> None:
    """Register series commands on the provided application."""

    app.command("series")(series_command)
    app.command("timeframes")(timeframes_command)


def get_chart_service() -> ChartDataService:
    """Factory hook for obtaining a :class:`ChartDataService` instance."""

    return ChartDataService.from_config(ConfigManager().get_config())


async def _resolve(service: ChartDataService, timeframe: str) -> SeriesResult:
    try:
        return await service.get_series(timeframe)
    finally:
        await service.close()


def series_command(
    ctx: typer.Context,
    timeframe: str = typer.Option("all", "--timeframe", "-t", help="Timeframe key (all, 1y, 1h, 6h, 24h ...)."),
) -> None:
    """Resolve a chart series and render it with the configured formatter."""

    service = get_chart_service()
    try:
        result = asyncio.run(_resolve(service, timeframe))
    except ValidationError as error:
        emit_error(error.message, error.error_code.value, details=error.details)
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error

    if not result.ok:
        error = result.error
        emit_error(error.message, error.error_code.value, details=error.details)
        raise typer.Exit(code=SOURCE_EXIT_CODE)

    if result.degraded:
        cause = result.cause
        emit_error(f"Served cached fallback: {cause.message}", cause.error_code.value)

    rows = [
        {
            "timestamp": sample.timestamp,
            "datetime": datetime.fromtimestamp(sample.timestamp / 1000, tz=timezone.utc).isoformat(),
            "price_usd": sample.price,
        }
        for sample in result.series
    ]
    formatter, stream, stack = prepare_output(ctx)
    try:
        formatter.render(rows, stream=stream, columns=SERIES_COLUMNS)
    finally:
        stack.close()


def timeframes_command(ctx: typer.Context) -> None:
    """List the supported timeframe keys."""

    rows = [
        {
            "key": spec.key,
            "source": spec.source.value,
            "window_ms": spec.window_ms,
            "limit": spec.limit,
            "granularity": spec.granularity,
        }
        for spec in TIMEFRAMES.values()
    ]
    formatter, stream, stack = prepare_output(ctx)
    try:
        formatter.render(rows, stream=stream, columns=TIMEFRAME_COLUMNS)
    finally:
        stack.close()

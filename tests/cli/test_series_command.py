from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from pricechart.cli import series as series_module
from pricechart.cli.main import create_app
from pricechart.core.exceptions import CacheLoadError, UnsupportedTimeframeError, UpstreamTimeoutError
from pricechart.core.models import Sample, SeriesResult


class StubChartService:
    def __init__(self, result: SeriesResult | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[str] = []
        self.closed = False

    async def get_series(self, timeframe: str) -> SeriesResult:
        self.calls.append(timeframe)
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _samples() -> list[Sample]:
    return [
        Sample(timestamp=1_704_067_200_000, price=42_000.5),
        Sample(timestamp=1_704_070_800_000, price=42_100.0),
    ]


def _install(monkeypatch: pytest.MonkeyPatch, service: StubChartService) -> None:
    monkeypatch.setattr(series_module, "get_chart_service", lambda: service)


def test_series_jsonl_output(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    service = StubChartService(SeriesResult.primary("all", _samples()))
    _install(monkeypatch, service)
    output = tmp_path / "series.jsonl"

    result = runner.invoke(create_app(), ["--format", "jsonl", "--output", str(output), "series"])

    assert result.exit_code == 0, result.output
    rows = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
    assert rows[0] == {
        "timestamp": 1_704_067_200_000,
        "datetime": "2024-01-01T00:00:00+00:00",
        "price_usd": 42_000.5,
    }
    assert len(rows) == 2
    assert service.calls == ["all"]
    assert service.closed


def test_series_table_output(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    service = StubChartService(SeriesResult.primary("24h", _samples()))
    _install(monkeypatch, service)

    result = runner.invoke(create_app(), ["--no-color", "series", "--timeframe", "24h"])

    assert result.exit_code == 0, result.output
    assert "price_usd" in result.output
    assert "42000.5" in result.output
    assert service.calls == ["24h"]


def test_series_unknown_timeframe(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    service = StubChartService(error=UnsupportedTimeframeError("5y"))
    _install(monkeypatch, service)

    result = runner.invoke(create_app(), ["series", "-t", "5y"])

    assert result.exit_code == 2
    assert "UNSUPPORTED_TIMEFRAME" in result.output
    assert service.closed


def test_series_source_failure(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    error = CacheLoadError("Failed to load historical cache: missing", path="/tmp/missing.json")
    _install(monkeypatch, StubChartService(SeriesResult.failed("all", error)))

    result = runner.invoke(create_app(), ["series"])

    assert result.exit_code == 3
    assert "CACHE_LOAD_ERROR" in result.output


def test_series_fallback_notice(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    cause = UpstreamTimeoutError(10.0)
    _install(monkeypatch, StubChartService(SeriesResult.fallback("1h", _samples(), cause)))
    output = tmp_path / "series.jsonl"

    result = runner.invoke(create_app(), ["-f", "jsonl", "-o", str(output), "series", "-t", "1h"])

    assert result.exit_code == 0, result.output
    assert "UPSTREAM_TIMEOUT" in result.output
    assert len(output.read_text(encoding="utf-8").splitlines()) == 2


def test_timeframes_command(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--format", "jsonl", "timeframes"])

    assert result.exit_code == 0, result.output
    rows = [json.loads(line) for line in result.output.splitlines()]
    assert [row["key"] for row in rows] == ["all", "max", "long", "1y+", "1y", "1h", "6h", "24h"]
    assert rows[-1] == {"key": "24h", "source": "realtime", "window_ms": 86_400_000, "limit": 96, "granularity": "15m"}


def test_invalid_format(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "timeframes"])

    assert result.exit_code == 2

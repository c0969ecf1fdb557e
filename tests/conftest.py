"""Pytest configuration for pricechart test suite."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from loguru import logger
from prometheus_client import CollectorRegistry

from pricechart.core.config import CacheConfig, ChartConfig, RealtimeConfig
from pricechart.core.monitoring import MetricsCollector

UPSTREAM_URL = "http://upstream.test/prices"


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register command-line options for controlling integration tests."""

    parser.addoption(
        "--pricechart-run-integration",
        action="store_true",
        default=False,
        help="Run pricechart integration tests that require external services.",
    )


def pytest_configure(config: pytest.Config) -> None:
    """Register the integration marker for pricechart tests."""

    config.addinivalue_line(
        "markers",
        "integration: marks pricechart tests requiring network or external services",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests unless explicitly requested."""

    if config.getoption("--pricechart-run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="integration tests require --pricechart-run-integration",
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop sinks configured during a test so later tests do not write to closed streams."""

    yield
    logger.remove()


@pytest.fixture
def write_cache(tmp_path: Path):
    """Write raw records to a cache file and return its path."""

    def _write(records: Any, name: str = "historical_data_cache.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def make_config(tmp_path: Path):
    """Build a config pointing at ``tmp_path`` and a fake upstream."""

    def _make(cache_path: Path | None = None, endpoint: str = UPSTREAM_URL, timeout: float = 10.0) -> ChartConfig:
        return ChartConfig(
            cache=CacheConfig(path=str(cache_path or tmp_path / "missing.json")),
            realtime=RealtimeConfig(endpoint=endpoint, timeout=timeout),
        )

    return _make

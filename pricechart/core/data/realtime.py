"""
Real-time upstream feed client.

Issues a single time-bounded request per call and turns the payload into a
normalized series capped at the timeframe's point limit.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx
from loguru import logger

from pricechart.core.config import RealtimeConfig
from pricechart.core.exceptions import (
    UpstreamError,
    UpstreamNetworkError,
    UpstreamNotConfiguredError,
    UpstreamPayloadError,
    UpstreamStatusError,
    UpstreamTimeoutError,
)
from pricechart.core.models import Sample, TimeframeSpec
from pricechart.core.monitoring import MetricsCollector
from pricechart.core.pipeline import normalize_series, tail


def extract_records(payload: Any) -> list[Any]:
    """
    Locate the data array in an upstream payload.

    Accepts a top-level array, or an object carrying the array under
    ``data`` or, when ``data`` is absent, ``result``.

    Raises:
        UpstreamPayloadError: No array could be located
    """
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        located = payload.get("data")
        if located is None:
            located = payload.get("result")
        if isinstance(located, list):
            return located
        raise UpstreamPayloadError(
            "Real-time API payload has no data array",
            details={"keys": sorted(str(key) for key in payload)[:10]},
        )
    raise UpstreamPayloadError(
        "Real-time API payload is not an array or object",
        details={"type": type(payload).__name__},
    )


class RealtimeFetcher:
    """Async client for the configured real-time price endpoint."""

    def __init__(
        self,
        config: RealtimeConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self.config = config
        self._transport = transport
        self._metrics = metrics
        self._client: httpx.AsyncClient | None = None

    @property
    def configured(self) -> bool:
        return self.config.configured

    async def __aenter__(self) -> "RealtimeFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                transport=self._transport,
                timeout=httpx.Timeout(self.config.timeout),
                headers={"Accept": "application/json"},
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client and cleanup resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def point_limit(self, spec: TimeframeSpec) -> int:
        """Upstream page size, capped by ``max_points``."""
        return max(1, min(spec.limit, self.config.max_points))

    def build_url(self, spec: TimeframeSpec) -> httpx.URL:
        """
        Build the request URL, keeping query parameters already on the endpoint.

        Raises:
            UpstreamNotConfiguredError: No endpoint is configured
        """
        if not self.config.endpoint:
            raise UpstreamNotConfiguredError()
        try:
            base = httpx.URL(self.config.endpoint)
        except httpx.InvalidURL as e:
            raise UpstreamNotConfiguredError(f"Invalid REAL_TIME_API_ENDPOINT: {e}") from e

        params: dict[str, str] = {"timeframe": spec.key}
        if spec.granularity:
            params["granularity"] = spec.granularity
        params["limit"] = str(self.point_limit(spec))
        return base.copy_merge_params(params)

    async def fetch_raw(self, spec: TimeframeSpec) -> list[Any]:
        """
        Request the upstream feed and return its raw records.

        Raises:
            UpstreamError: The endpoint is unconfigured, the request timed out
                or failed, the status was not 2xx, or the payload was malformed
        """
        url = self.build_url(spec)
        client = self._ensure_client()

        try:
            response = await asyncio.wait_for(client.get(url), timeout=self.config.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise UpstreamTimeoutError(self.config.timeout) from e
        except httpx.HTTPError as e:
            raise UpstreamNetworkError(f"Real-time API request failed: {e}") from e

        if not response.is_success:
            raise UpstreamStatusError(response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamPayloadError("Real-time API returned invalid JSON") from e

        return extract_records(payload)

    async def fetch(self, spec: TimeframeSpec) -> list[Sample]:
        """Fetch, normalize and keep the most recent ``point_limit`` samples."""
        started = time.perf_counter()
        try:
            raw = await self.fetch_raw(spec)
        except UpstreamError as e:
            self._observe(started, e.error_code.value)
            raise
        self._observe(started, None)

        series = tail(normalize_series(raw), self.point_limit(spec))
        logger.bind(timeframe=spec.key, source="realtime").debug(f"Fetched {len(series)} real-time samples")
        return series

    def _observe(self, started: float, error_code: str | None) -> None:
        if self._metrics is not None:
            self._metrics.observe_upstream(time.perf_counter() - started, error_code=error_code)

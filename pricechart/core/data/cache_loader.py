"""Single-flight loader for the historical price cache file."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

from loguru import logger

from pricechart.core.exceptions import CacheLoadError
from pricechart.core.monitoring import MetricsCollector

TextReader = Callable[[Path], Awaitable[str]]


async def read_text(path: Path) -> str:
    """在线程池中读取文件，避免阻塞事件循环."""
    return await asyncio.to_thread(path.read_text, encoding="utf-8")


class HistoricalCacheLoader:
    """
    Lazily loads and memoizes the historical dataset.

    The first caller starts the read; concurrent callers await the same
    in-flight task instead of issuing duplicate reads. A successful parse is
    kept for the lifetime of the loader. A failed read clears the memo so the
    next call retries, and the failure is raised to every caller awaiting
    that attempt.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        reader: TextReader = read_text,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the loader.

        Args:
            path: Location of the JSON document
            reader: Coroutine function returning the file contents
            metrics: Optional metrics collector for load outcomes
        """
        self.path = Path(path)
        self._reader = reader
        self._metrics = metrics
        self._data: list[Any] | None = None
        self._pending: asyncio.Task[list[Any]] | None = None

    @property
    def loaded(self) -> bool:
        return self._data is not None

    async def load(self) -> list[Any]:
        """
        Return the cached raw records, reading the file on first use.

        Raises:
            CacheLoadError: The file is missing or is not valid JSON
        """
        if self._data is not None:
            return self._data

        if self._pending is None:
            self._pending = asyncio.create_task(self._read())

        # 单个调用方被取消时不影响共享的读取任务
        return await asyncio.shield(self._pending)

    def reset(self) -> None:
        """Drop the memoized dataset so the next call reloads it."""
        self._data = None
        self._pending = None

    async def _read(self) -> list[Any]:
        try:
            text = await self._reader(self.path)
            parsed = json.loads(text)
        except (OSError, RecursionError, ValueError) as e:
            self._record("failure")
            logger.bind(source="cache").error(f"Failed to load historical cache from {self.path}: {e}")
            raise CacheLoadError(f"Failed to load historical cache: {e}", path=str(self.path)) from e
        finally:
            # 失败后下次调用重新读取
            self._pending = None

        self._data = parsed if isinstance(parsed, list) else []
        self._record("success")
        logger.bind(source="cache").info(f"Loaded {len(self._data)} historical records from {self.path}")
        return self._data

    def _record(self, status: str) -> None:
        if self._metrics is not None:
            self._metrics.record_cache_load(status)

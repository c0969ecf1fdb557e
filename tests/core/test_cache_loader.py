"""测试历史缓存的单次加载语义."""

import asyncio
import json

import pytest

from pricechart.core.data import HistoricalCacheLoader
from pricechart.core.exceptions import CacheLoadError


class CountingReader:
    """可控的读取函数，记录调用次数并在 gate 打开前阻塞."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0
        self.gate = asyncio.Event()
        self.gate.set()

    async def __call__(self, path):
        self.calls += 1
        await self.gate.wait()
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.mark.asyncio
async def test_loads_file_once(write_cache):
    path = write_cache([[1700000000000, 1.0], [1700000060000, 2.0]])
    loader = HistoricalCacheLoader(path)

    first = await loader.load()
    path.write_text("[]", encoding="utf-8")
    second = await loader.load()

    assert first == [[1700000000000, 1.0], [1700000060000, 2.0]]
    assert second is first
    assert loader.loaded


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_read(tmp_path):
    reader = CountingReader(json.dumps([[1, 2]]))
    reader.gate.clear()
    loader = HistoricalCacheLoader(tmp_path / "cache.json", reader=reader)

    waiters = [asyncio.create_task(loader.load()) for _ in range(5)]
    await asyncio.sleep(0)
    reader.gate.set()
    results = await asyncio.gather(*waiters)

    assert reader.calls == 1
    assert all(result == [[1, 2]] for result in results)


@pytest.mark.asyncio
async def test_failure_reaches_every_waiter(tmp_path):
    reader = CountingReader(FileNotFoundError("missing"))
    reader.gate.clear()
    loader = HistoricalCacheLoader(tmp_path / "cache.json", reader=reader)

    waiters = [asyncio.create_task(loader.load()) for _ in range(3)]
    await asyncio.sleep(0)
    reader.gate.set()
    results = await asyncio.gather(*waiters, return_exceptions=True)

    assert reader.calls == 1
    assert all(isinstance(result, CacheLoadError) for result in results)


@pytest.mark.asyncio
async def test_failure_is_not_memoized(tmp_path):
    reader = CountingReader(FileNotFoundError("missing"), json.dumps([[1, 2]]))
    loader = HistoricalCacheLoader(tmp_path / "cache.json", reader=reader)

    with pytest.raises(CacheLoadError):
        await loader.load()
    assert not loader.loaded

    assert await loader.load() == [[1, 2]]
    assert reader.calls == 2


@pytest.mark.asyncio
async def test_deeply_nested_document_is_retried(tmp_path):
    nested = "[" * 200_000 + "]" * 200_000
    reader = CountingReader(nested, json.dumps([[1, 2]]))
    loader = HistoricalCacheLoader(tmp_path / "cache.json", reader=reader)

    with pytest.raises(CacheLoadError):
        await loader.load()

    assert await loader.load() == [[1, 2]]
    assert reader.calls == 2


@pytest.mark.asyncio
async def test_unexpected_reader_error_is_retried(tmp_path):
    reader = CountingReader(RuntimeError("disk driver"), json.dumps([]))
    loader = HistoricalCacheLoader(tmp_path / "cache.json", reader=reader)

    with pytest.raises(RuntimeError):
        await loader.load()

    assert await loader.load() == []
    assert reader.calls == 2


@pytest.mark.asyncio
async def test_cancelled_waiter_does_not_cancel_load(tmp_path):
    reader = CountingReader(json.dumps([[1, 2]]))
    reader.gate.clear()
    loader = HistoricalCacheLoader(tmp_path / "cache.json", reader=reader)

    cancelled = asyncio.create_task(loader.load())
    survivor = asyncio.create_task(loader.load())
    await asyncio.sleep(0)
    cancelled.cancel()
    await asyncio.sleep(0)
    reader.gate.set()

    assert await survivor == [[1, 2]]
    with pytest.raises(asyncio.CancelledError):
        await cancelled
    assert reader.calls == 1


@pytest.mark.asyncio
async def test_missing_file(tmp_path):
    path = tmp_path / "nope.json"
    loader = HistoricalCacheLoader(path)

    with pytest.raises(CacheLoadError) as exc_info:
        await loader.load()

    assert exc_info.value.details["path"] == str(path)
    assert exc_info.value.details["source"] == "cache"


@pytest.mark.asyncio
async def test_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CacheLoadError):
        await HistoricalCacheLoader(path).load()


@pytest.mark.asyncio
async def test_non_array_document_loads_as_empty(write_cache):
    loader = HistoricalCacheLoader(write_cache({"data": [[1, 2]]}))

    assert await loader.load() == []
    assert loader.loaded


@pytest.mark.asyncio
async def test_reset_forces_reload(write_cache):
    path = write_cache([[1, 2]])
    loader = HistoricalCacheLoader(path)
    await loader.load()

    path.write_text(json.dumps([[3, 4]]), encoding="utf-8")
    loader.reset()

    assert await loader.load() == [[3, 4]]


@pytest.mark.asyncio
async def test_records_load_metrics(tmp_path, write_cache, metrics):
    failing = HistoricalCacheLoader(tmp_path / "missing.json", metrics=metrics)
    with pytest.raises(CacheLoadError):
        await failing.load()
    await HistoricalCacheLoader(write_cache([]), metrics=metrics).load()

    assert metrics.registry.get_sample_value("pricechart_cache_loads_total", {"status": "failure"}) == 1.0
    assert metrics.registry.get_sample_value("pricechart_cache_loads_total", {"status": "success"}) == 1.0

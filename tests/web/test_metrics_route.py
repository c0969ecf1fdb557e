"""
指标接口测试
"""

from fastapi.testclient import TestClient

from pricechart.web.app import create_app


def test_metrics_endpoint(make_config, write_cache, metrics):
    config = make_config(cache_path=write_cache([[1_700_000_000_000, 1.0]]))
    client = TestClient(create_app(config, metrics=metrics))

    client.get("/api/chart-data", params={"timeframe": "all"})
    response = client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "pricechart_chart_requests_total" in response.text
    assert (
        metrics.registry.get_sample_value(
            "pricechart_chart_requests_total", {"timeframe": "all", "outcome": "primary"}
        )
        == 1.0
    )
    assert metrics.registry.get_sample_value("pricechart_cache_loads_total", {"status": "success"}) == 1.0

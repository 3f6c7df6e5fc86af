"""
Route-level tests for the analysis endpoints, calling handlers directly.
"""

from __future__ import annotations

import pytest
from fastapi import HTTPException

from api.requests import (
    AggregateRequest,
    AnalyzeRequest,
    AnomalyRequest,
    SmoothRequest,
    TrendRequest,
    ValuesRequest,
)
from api.routes import analyze as analyze_route
from api.routes import common
from config import settings
from conftest import ms


def _analyze_request(values, **state):
    return AnalyzeRequest(
        variable={"name": "level", "units": "m"},
        series=[{"timestamp": i * 1000, "value": v} for i, v in enumerate(values)],
        state=state,
    )


@pytest.mark.asyncio
async def test_analyze_returns_processed_result():
    req = _analyze_request(
        [1, 2, 3, 4, 5],
        value_range={"min": 2},
        smoothing={"kind": "sma", "window": 2},
        trend={"enabled": True},
    )
    out = await analyze_route.analyze(req)
    payload = out.model_dump(mode="json")

    assert [p["value"] for p in payload["filtered"]] == [2.0, 3.0, 4.0, 5.0]
    assert payload["smoothed"] == [2.0, 2.5, 3.5, 4.5]
    assert payload["trend"]["slope"] == pytest.approx(0.001)
    assert payload["trend"]["r2"] == pytest.approx(1.0)
    assert payload["stages"]["any"] is True
    assert payload["annotations"]["moving_average"] == "SMA window=2"
    assert payload["notes"] == []


@pytest.mark.asyncio
async def test_analyze_memoizes_per_variable():
    req = _analyze_request([1, 2, 3], trend={"enabled": True})
    await analyze_route.analyze(req)
    pipeline = common.get_pipeline("level")
    first = pipeline.last_result
    await analyze_route.analyze(req)
    assert pipeline.last_result is first
    assert common.pipeline_count() == 1


@pytest.mark.asyncio
async def test_analyze_reports_stage_notes_instead_of_failing():
    req = _analyze_request([1.0], trend={"enabled": True}, smoothing={"kind": "sma", "window": 3})
    payload = (await analyze_route.analyze(req)).model_dump(mode="json")
    stages = {n["stage"] for n in payload["notes"]}
    assert stages == {"moving_average", "trend_line"}
    assert payload["trend"] is None


@pytest.mark.asyncio
async def test_oversized_series_is_rejected(monkeypatch):
    monkeypatch.setattr(settings, "max_series_points", 3)
    with pytest.raises(HTTPException) as exc:
        await analyze_route.analyze(_analyze_request([1, 2, 3, 4]))
    assert exc.value.status_code == 413


@pytest.mark.asyncio
async def test_statistics_and_outliers():
    stats = await analyze_route.statistics(ValuesRequest(values=[1, 2, 3, 4, None]))
    assert stats.count == 4
    assert stats.missing == 1

    out = await analyze_route.outliers(ValuesRequest(values=list(range(20)) + [1000]))
    assert out.outlier_indices == [20]
    assert out.lower_bound == -10.0
    assert out.upper_bound == 30.0


@pytest.mark.asyncio
async def test_smooth_invalid_parameter_maps_to_422():
    with pytest.raises(HTTPException) as exc:
        await analyze_route.smooth_values(SmoothRequest(values=[1, 2, 3], kind="ema", alpha=1.5))
    assert exc.value.status_code == 422

    ok = await analyze_route.smooth_values(SmoothRequest(values=[1, 2, 3], kind="sma", window=3))
    assert ok.values == pytest.approx([1.0, 1.5, 2.0])


@pytest.mark.asyncio
async def test_trend_length_mismatch_is_422():
    with pytest.raises(HTTPException) as exc:
        await analyze_route.trend(TrendRequest(x=[1, 2], y=[1]))
    assert exc.value.status_code == 422

    out = await analyze_route.trend(TrendRequest(x=[0, 1, 2], y=[1, 3, 5]))
    assert out.slope == pytest.approx(2.0)
    assert out.intercept == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_anomalies_endpoint():
    out = await analyze_route.anomalies(AnomalyRequest(values=[1, 1, 1, 1, 100], threshold=1.5))
    assert out.indices == [4]
    assert out.z_scores == [pytest.approx(2.0)]


@pytest.mark.asyncio
async def test_aggregate_endpoint():
    req = AggregateRequest(
        series=[
            {"timestamp": ms(2024, 3, 5, 1), "value": 2.0},
            {"timestamp": ms(2024, 3, 4, 9), "value": 4.0},
            {"timestamp": ms(2024, 3, 4, 23), "value": None},
        ],
        period="daily",
        reducer="count",
    )
    out = await analyze_route.aggregate_series(req)
    assert [(p.timestamp, p.value) for p in out] == [(ms(2024, 3, 4), 2.0), (ms(2024, 3, 5), 1.0)]


@pytest.mark.asyncio
async def test_unexpected_error_maps_to_500(monkeypatch):
    def boom(values):
        raise RuntimeError("boom")

    monkeypatch.setattr(analyze_route, "summarize", boom)
    with pytest.raises(HTTPException) as exc:
        await analyze_route.statistics(ValuesRequest(values=[1.0]))
    assert exc.value.status_code == 500


@pytest.mark.asyncio
async def test_trend_size_limit_checks_both_axes(monkeypatch):
    monkeypatch.setattr(settings, "max_series_points", 3)
    with pytest.raises(HTTPException) as exc:
        await analyze_route.trend(TrendRequest(x=[1, 2], y=[1, 2, 3, 4]))
    assert exc.value.status_code == 413


@pytest.mark.asyncio
async def test_analyze_reports_excluded_outliers_and_echoes_state():
    req = _analyze_request(list(range(20)) + [1000], value_range={"exclude_outliers": True})
    payload = (await analyze_route.analyze(req)).model_dump(mode="json")
    assert payload["counts"]["outliers"] == 1
    assert payload["counts"]["filtered"] == 20
    assert payload["state"]["value_range"] == {"min": None, "max": None, "exclude_outliers": True}


@pytest.mark.asyncio
async def test_least_recently_used_pipeline_is_evicted(monkeypatch):
    monkeypatch.setattr(settings, "max_pipelines", 2)
    first = common.get_pipeline("a")
    common.get_pipeline("b")
    # touching "a" makes "b" the oldest
    assert common.get_pipeline("a") is first
    common.get_pipeline("c")
    assert common.pipeline_count() == 2
    assert set(common._pipelines) == {"a", "c"}

    for name in ("x", "y", "z"):
        await analyze_route.analyze(AnalyzeRequest(variable={"name": name}, series=[{"timestamp": 0, "value": 1}]))
    assert common.pipeline_count() == 2
    assert set(common._pipelines) == {"y", "z"}

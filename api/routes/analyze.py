"""
Analysis routes: full pipeline recomputation for a variable selection, plus direct access to each engine for collaborators that need a single statistic.

Copyright (c) 2026 Stefan Kumarasinghe
Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import logging
from typing import List

from fastapi import APIRouter

from api.requests import (
    AggregateRequest,
    AnalyzeRequest,
    AnomalyRequest,
    SmoothRequest,
    TrendRequest,
    ValuesRequest,
)
from api.responses import (
    AnalyzeResponse,
    AnomaliesOut,
    OutliersOut,
    PointOut,
    SmoothOut,
    StatisticsOut,
    TrendOut,
)
from api.routes.common import ensure_size, get_pipeline
from api.routes.exception import handle_exceptions
from engine.aggregation import aggregate
from engine.anomaly import detect_anomalies, z_scores
from engine.quantile import compute_iqr
from engine.smoothing import smooth
from engine.stats import summarize
from engine.trend import linear_trend

log = logging.getLogger(__name__)

router = APIRouter(tags=["Analysis"])


@router.post("/analyze", response_model=AnalyzeResponse, summary="Filter, aggregate and analyze a variable's series")
@handle_exceptions
async def analyze(req: AnalyzeRequest) -> AnalyzeResponse:
    ensure_size(len(req.series))
    state = req.state.to_state()
    result = get_pipeline(req.variable.name).recompute(req.to_series(), state)
    log.info(
        "analyze %s: raw=%d filtered=%d stages=%s",
        req.variable.name, result.raw_count, result.filtered_count, result.stages.labels(),
    )
    return AnalyzeResponse.build(req.variable.to_info(), state, result)


@router.post("/statistics", response_model=StatisticsOut, summary="Descriptive statistics of a value array")
@handle_exceptions
async def statistics(req: ValuesRequest) -> StatisticsOut:
    ensure_size(len(req.values))
    return StatisticsOut.from_stats(summarize(req.floats()))


@router.post("/outliers", response_model=OutliersOut, summary="IQR outlier envelope of a value array")
@handle_exceptions
async def outliers(req: ValuesRequest) -> OutliersOut:
    ensure_size(len(req.values))
    return OutliersOut.from_result(compute_iqr(req.floats()))


@router.post("/smooth", response_model=SmoothOut, summary="Simple or exponential moving average")
@handle_exceptions
async def smooth_values(req: SmoothRequest) -> SmoothOut:
    ensure_size(len(req.values))
    smoothed = smooth(req.floats(), req.kind, window=req.window, alpha=req.alpha)
    return SmoothOut(values=[] if smoothed is None else list(smoothed))


@router.post("/trend", response_model=TrendOut, summary="Least-squares trend with R²")
@handle_exceptions
async def trend(req: TrendRequest) -> TrendOut:
    ensure_size(max(len(req.x), len(req.y)))
    return TrendOut.from_result(linear_trend(req.x, req.y))


@router.post("/anomalies", response_model=AnomaliesOut, summary="Z-score anomaly indices")
@handle_exceptions
async def anomalies(req: AnomalyRequest) -> AnomaliesOut:
    ensure_size(len(req.values))
    values = req.floats()
    indices = detect_anomalies(values, req.threshold)
    scores = z_scores(values)
    return AnomaliesOut(indices=indices, z_scores=[float(scores[i]) for i in indices])


@router.post("/aggregate", response_model=List[PointOut], summary="Calendar bucket aggregation")
@handle_exceptions
async def aggregate_series(req: AggregateRequest) -> List[PointOut]:
    ensure_size(len(req.series))
    return [PointOut.from_point(p) for p in aggregate(req.to_series(), req.period, req.reducer)]

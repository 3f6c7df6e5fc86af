"""
Response models for API endpoints and conversion from engine results.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from pydantic import BaseModel, Field, model_serializer

from api.requests import AnalysisStateIn
from engine.anomaly import Anomaly
from engine.enums import Stage
from engine.pipeline import ActiveStages, AnalysisState, ProcessedResult, describe_state
from engine.quantile import IQRResult
from engine.series import DataPoint, VariableInfo, timestamps_of
from engine.stats import SeriesStatistics
from engine.trend import TrendResult, trend_line


def _coerce(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _coerce(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_coerce(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        # JSON has no NaN, missing values travel as null
        return float(obj) if math.isfinite(obj) else None
    if isinstance(obj, np.ndarray):
        return _coerce(obj.tolist())
    return obj


class NpModel(BaseModel):

    @model_serializer(mode="wrap")
    def _serialize(self, handler: Any) -> Any:
        return _coerce(handler(self))


class PointOut(NpModel):

    timestamp: int
    value: Optional[float]

    @classmethod
    def from_point(cls, p: DataPoint) -> "PointOut":
        return cls(timestamp=p.timestamp, value=p.value if math.isfinite(p.value) else None)


def _points(series: Optional[Sequence[DataPoint]]) -> Optional[List[PointOut]]:
    if series is None:
        return None
    return [PointOut.from_point(p) for p in series]


class TrendOut(NpModel):

    slope: float
    intercept: float
    r2: float

    @classmethod
    def from_result(cls, t: TrendResult) -> "TrendOut":
        return cls(slope=t.slope, intercept=t.intercept, r2=t.r2)


class AnomalyOut(NpModel):

    index: int
    timestamp: int
    value: float
    z_score: float

    @classmethod
    def from_anomaly(cls, a: Anomaly) -> "AnomalyOut":
        return cls(index=a.index, timestamp=a.timestamp, value=a.value, z_score=a.z_score)


class StageNoteOut(BaseModel):

    stage: Stage
    message: str


class StagesOut(BaseModel):

    date_filter: bool
    value_filter: bool
    moving_average: bool
    trend_line: bool
    aggregation: bool
    anomaly_detection: bool
    any: bool
    labels: List[str]

    @classmethod
    def from_stages(cls, s: ActiveStages) -> "StagesOut":
        return cls(
            date_filter=s.date_filter,
            value_filter=s.value_filter,
            moving_average=s.moving_average,
            trend_line=s.trend_line,
            aggregation=s.aggregation,
            anomaly_detection=s.anomaly_detection,
            any=s.any,
            labels=s.labels(),
        )


class CountsOut(BaseModel):

    raw: int
    missing: int
    filtered: int
    aggregated: Optional[int] = None
    outliers: int = 0


class VariableOut(BaseModel):

    name: str
    units: str
    missing_count: int


class AnalyzeResponse(NpModel):

    variable: VariableOut
    filtered: List[PointOut]
    aggregated: Optional[List[PointOut]] = None
    smoothed: Optional[List[Optional[float]]] = None
    trend: Optional[TrendOut] = None
    trend_values: Optional[List[float]] = None
    anomalies: List[AnomalyOut] = Field(default_factory=list)
    stages: StagesOut
    counts: CountsOut
    notes: List[StageNoteOut] = Field(default_factory=list)
    state: AnalysisStateIn
    annotations: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def build(
        cls,
        variable: VariableInfo,
        state: AnalysisState,
        result: ProcessedResult,
    ) -> "AnalyzeResponse":
        return cls(
            variable=VariableOut(
                name=variable.name,
                units=variable.units,
                missing_count=variable.missing_count,
            ),
            filtered=_points(result.filtered) or [],
            aggregated=_points(result.aggregated),
            smoothed=None if result.smoothed is None else list(result.smoothed),
            trend=None if result.trend is None else TrendOut.from_result(result.trend),
            trend_values=None if result.trend is None else trend_line(timestamps_of(result.analyzed), result.trend),
            anomalies=[AnomalyOut.from_anomaly(a) for a in result.anomalies],
            stages=StagesOut.from_stages(result.stages),
            counts=CountsOut(
                raw=result.raw_count,
                missing=result.missing_count,
                filtered=result.filtered_count,
                aggregated=result.aggregated_count,
                outliers=result.outlier_count,
            ),
            notes=[StageNoteOut(stage=n.stage, message=n.message) for n in result.notes],
            state=AnalysisStateIn.from_state(state),
            annotations=describe_state(state),
        )


class StatisticsOut(NpModel):

    count: int
    missing: int
    min: Optional[float]
    max: Optional[float]
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    p25: Optional[float]
    p75: Optional[float]
    iqr: Optional[float]

    @classmethod
    def from_stats(cls, s: SeriesStatistics) -> "StatisticsOut":
        return cls(
            count=s.count,
            missing=s.missing,
            min=s.min,
            max=s.max,
            mean=s.mean,
            median=s.median,
            std=s.std,
            p25=s.p25,
            p75=s.p75,
            iqr=s.iqr,
        )


class OutliersOut(NpModel):

    q1: float
    q3: float
    iqr: float
    lower_bound: float
    upper_bound: float
    outlier_indices: List[int]

    @classmethod
    def from_result(cls, r: IQRResult) -> "OutliersOut":
        return cls(
            q1=r.q1,
            q3=r.q3,
            iqr=r.iqr,
            lower_bound=r.lower_bound,
            upper_bound=r.upper_bound,
            outlier_indices=list(r.outlier_indices),
        )


class SmoothOut(NpModel):

    values: List[Optional[float]]


class AnomaliesOut(NpModel):

    indices: List[int]
    z_scores: List[float]

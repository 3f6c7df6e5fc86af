from __future__ import annotations

import math
from typing import List, Optional

from pydantic import BaseModel, Field

from config import settings
from engine.enums import AggregationPeriod, Reducer, SmoothingKind
from engine.pipeline import (
    AggregationSpec,
    AnalysisState,
    AnomalySpec,
    DateRange,
    SmoothingSpec,
    TrendSpec,
    ValueRange,
)
from engine.series import Series, VariableInfo, from_pairs


def _value(v: Optional[float]) -> float:
    return math.nan if v is None else float(v)


class PointIn(BaseModel):
    timestamp: int
    value: Optional[float] = None


class VariableIn(BaseModel):
    name: str = Field(min_length=1)
    units: str = ""
    missing_count: int = Field(default=0, ge=0)

    def to_info(self) -> VariableInfo:
        return VariableInfo(name=self.name, units=self.units, missing_count=self.missing_count)


class DateRangeIn(BaseModel):
    start: Optional[int] = None
    end: Optional[int] = None


class ValueRangeIn(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None
    exclude_outliers: bool = False


class SmoothingIn(BaseModel):
    kind: SmoothingKind = SmoothingKind.none
    window: int = Field(default_factory=lambda: settings.default_sma_window)
    alpha: float = Field(default_factory=lambda: settings.default_ema_alpha)
    visible: bool = True


class TrendIn(BaseModel):
    enabled: bool = False


class AggregationIn(BaseModel):
    enabled: bool = False
    period: AggregationPeriod = Field(
        default_factory=lambda: AggregationPeriod(settings.default_aggregation_period)
    )
    reducer: Reducer = Field(default_factory=lambda: Reducer(settings.default_aggregation_reducer))


class AnomalyIn(BaseModel):
    enabled: bool = False
    threshold: float = Field(default_factory=lambda: settings.default_anomaly_threshold)


class AnalysisStateIn(BaseModel):
    date_range: DateRangeIn = Field(default_factory=DateRangeIn)
    value_range: ValueRangeIn = Field(default_factory=ValueRangeIn)
    smoothing: SmoothingIn = Field(default_factory=SmoothingIn)
    trend: TrendIn = Field(default_factory=TrendIn)
    aggregation: AggregationIn = Field(default_factory=AggregationIn)
    anomaly: AnomalyIn = Field(default_factory=AnomalyIn)

    def to_state(self) -> AnalysisState:
        return AnalysisState(
            date_range=DateRange(start=self.date_range.start, end=self.date_range.end),
            value_range=ValueRange(
                min_value=self.value_range.min,
                max_value=self.value_range.max,
                exclude_outliers=self.value_range.exclude_outliers,
            ),
            smoothing=SmoothingSpec(
                kind=self.smoothing.kind,
                window=self.smoothing.window,
                alpha=self.smoothing.alpha,
                visible=self.smoothing.visible,
            ),
            trend=TrendSpec(enabled=self.trend.enabled),
            aggregation=AggregationSpec(
                enabled=self.aggregation.enabled,
                period=self.aggregation.period,
                reducer=self.aggregation.reducer,
            ),
            anomaly=AnomalySpec(enabled=self.anomaly.enabled, threshold_sigma=self.anomaly.threshold),
        )

    @classmethod
    def from_state(cls, state: AnalysisState) -> "AnalysisStateIn":
        return cls(
            date_range=DateRangeIn(start=state.date_range.start, end=state.date_range.end),
            value_range=ValueRangeIn(
                min=state.value_range.min_value,
                max=state.value_range.max_value,
                exclude_outliers=state.value_range.exclude_outliers,
            ),
            smoothing=SmoothingIn(
                kind=state.smoothing.kind,
                window=state.smoothing.window,
                alpha=state.smoothing.alpha,
                visible=state.smoothing.visible,
            ),
            trend=TrendIn(enabled=state.trend.enabled),
            aggregation=AggregationIn(
                enabled=state.aggregation.enabled,
                period=state.aggregation.period,
                reducer=state.aggregation.reducer,
            ),
            anomaly=AnomalyIn(enabled=state.anomaly.enabled, threshold=state.anomaly.threshold_sigma),
        )


class AnalyzeRequest(BaseModel):
    variable: VariableIn
    series: List[PointIn] = Field(default_factory=list)
    state: AnalysisStateIn = Field(default_factory=AnalysisStateIn)

    def to_series(self) -> Series:
        return from_pairs((p.timestamp, p.value) for p in self.series)


class ValuesRequest(BaseModel):
    values: List[Optional[float]] = Field(default_factory=list)

    def floats(self) -> List[float]:
        return [_value(v) for v in self.values]


class SmoothRequest(ValuesRequest):
    kind: SmoothingKind = SmoothingKind.sma
    window: int = Field(default_factory=lambda: settings.default_sma_window)
    alpha: float = Field(default_factory=lambda: settings.default_ema_alpha)


class AnomalyRequest(ValuesRequest):
    threshold: float = Field(default_factory=lambda: settings.default_anomaly_threshold)


class TrendRequest(BaseModel):
    x: List[float]
    y: List[float]


class AggregateRequest(BaseModel):
    series: List[PointIn] = Field(default_factory=list)
    period: AggregationPeriod = AggregationPeriod.daily
    reducer: Reducer = Reducer.mean

    def to_series(self) -> Series:
        return from_pairs((p.timestamp, p.value) for p in self.series)

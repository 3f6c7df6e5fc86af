"""
Analysis parameter snapshot for the processing pipeline: date and value ranges, smoothing, trend, aggregation and anomaly settings, held as frozen values so that a complete parameter set can key the pipeline memo and be echoed to export collaborators.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from config import settings
from engine.enums import AggregationPeriod, Reducer, SmoothingKind, Stage


@dataclass(frozen=True)
class DateRange:
    start: Optional[int] = None
    end: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.start is not None or self.end is not None


@dataclass(frozen=True)
class ValueRange:
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    exclude_outliers: bool = False

    @property
    def active(self) -> bool:
        return self.min_value is not None or self.max_value is not None or self.exclude_outliers


@dataclass(frozen=True)
class SmoothingSpec:
    kind: SmoothingKind = SmoothingKind.none
    window: int = field(default_factory=lambda: settings.default_sma_window)
    alpha: float = field(default_factory=lambda: settings.default_ema_alpha)
    visible: bool = True

    @property
    def active(self) -> bool:
        return self.kind != SmoothingKind.none


@dataclass(frozen=True)
class TrendSpec:
    enabled: bool = False


@dataclass(frozen=True)
class AggregationSpec:
    enabled: bool = False
    period: AggregationPeriod = field(
        default_factory=lambda: AggregationPeriod(settings.default_aggregation_period)
    )
    reducer: Reducer = field(default_factory=lambda: Reducer(settings.default_aggregation_reducer))


@dataclass(frozen=True)
class AnomalySpec:
    enabled: bool = False
    threshold_sigma: float = field(default_factory=lambda: settings.default_anomaly_threshold)


@dataclass(frozen=True)
class ActiveStages:
    date_filter: bool = False
    value_filter: bool = False
    moving_average: bool = False
    trend_line: bool = False
    aggregation: bool = False
    anomaly_detection: bool = False

    @property
    def any(self) -> bool:
        return any(getattr(self, s.value) for s in Stage)

    def active(self) -> List[Stage]:
        return [s for s in Stage if getattr(self, s.value)]

    def labels(self) -> List[str]:
        return [s.label() for s in self.active()]


@dataclass(frozen=True)
class AnalysisState:
    date_range: DateRange = field(default_factory=DateRange)
    value_range: ValueRange = field(default_factory=ValueRange)
    smoothing: SmoothingSpec = field(default_factory=SmoothingSpec)
    trend: TrendSpec = field(default_factory=TrendSpec)
    aggregation: AggregationSpec = field(default_factory=AggregationSpec)
    anomaly: AnomalySpec = field(default_factory=AnomalySpec)

    def stages(self) -> ActiveStages:
        return ActiveStages(
            date_filter=self.date_range.active,
            value_filter=self.value_range.active,
            moving_average=self.smoothing.active,
            trend_line=self.trend.enabled,
            aggregation=self.aggregation.enabled,
            anomaly_detection=self.anomaly.enabled,
        )


def _iso(ts: Optional[int]) -> str:
    if ts is None:
        return "unbounded"
    return datetime.fromtimestamp(ts / 1000.0, tz=timezone.utc).isoformat()


def describe_state(state: AnalysisState) -> Dict[str, str]:
    """Flatten the active parts of ``state`` into export header annotations.

    Inactive stages are omitted so an export of an untouched series carries
    no analysis annotations at all.
    """
    notes: Dict[str, str] = {}
    if state.date_range.active:
        notes["date_range"] = f"{_iso(state.date_range.start)} .. {_iso(state.date_range.end)}"
    vr = state.value_range
    if vr.active:
        lo = "unbounded" if vr.min_value is None else repr(vr.min_value)
        hi = "unbounded" if vr.max_value is None else repr(vr.max_value)
        notes["value_range"] = f"{lo} .. {hi}"
        if vr.exclude_outliers:
            notes["exclude_outliers"] = f"IQR x {settings.iqr_multiplier}"
    sm = state.smoothing
    if sm.kind == SmoothingKind.sma:
        notes["moving_average"] = f"SMA window={sm.window}"
    elif sm.kind == SmoothingKind.ema:
        notes["moving_average"] = f"EMA alpha={sm.alpha}"
    if state.trend.enabled:
        notes["trend_line"] = "least squares"
    if state.aggregation.enabled:
        notes["aggregation"] = f"{state.aggregation.period.value} {state.aggregation.reducer.value}"
    if state.anomaly.enabled:
        notes["anomaly_detection"] = f"|z| > {state.anomaly.threshold_sigma}"
    return notes

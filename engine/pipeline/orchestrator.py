"""
Pipeline orchestration for time series analysis, applying date and value filters, optional calendar aggregation, and smoothing, trend and anomaly detection in a fixed order, and memoizing the most recent result so that unchanged parameters never trigger a second computation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from config import settings
from engine.aggregation import aggregate
from engine.anomaly import Anomaly, annotate, detect_anomalies
from engine.enums import Stage
from engine.exceptions import InvalidParameter
from engine.filters import effective_value_bounds, filter_by_date_range, filter_by_value_range
from engine.pipeline.result import ProcessedResult, StageNote
from engine.pipeline.state import AnalysisState
from engine.quantile import compute_iqr
from engine.series import (
    DataPoint,
    Series,
    drop_missing,
    is_missing,
    missing_count,
    timestamps_of,
    values_of,
)
from engine.smoothing import smooth
from engine.trend import TrendResult, linear_trend

log = logging.getLogger(__name__)

Envelope = Optional[Tuple[float, float]]

_NO_DATA = "insufficient data: no points left after filtering"


def outlier_envelope(series: Sequence[DataPoint]) -> Envelope:
    return compute_iqr(values_of(series)).envelope()


def _outlier_count(series: Series, envelope: Envelope) -> int:
    if envelope is None:
        return 0
    lower, upper = envelope
    return sum(1 for p in series if not is_missing(p.value) and not lower <= p.value <= upper)


def _apply_filters(series: Series, state: AnalysisState, envelope: Envelope) -> Series:
    dr = state.date_range
    filtered = filter_by_date_range(series, dr.start, dr.end) if dr.active else series
    filtered = drop_missing(filtered)

    vr = state.value_range
    if not vr.active:
        return filtered
    lo, hi = effective_value_bounds(
        vr.min_value, vr.max_value, envelope if vr.exclude_outliers else None
    )
    if lo is None and hi is None:
        return filtered
    return filter_by_value_range(filtered, lo, hi)


def _smoothing(data: Series, state: AnalysisState, notes: List[StageNote]):
    spec = state.smoothing
    if not spec.active or not spec.visible:
        return None
    if not data:
        notes.append(StageNote(Stage.moving_average, _NO_DATA))
        return None
    try:
        smoothed = smooth(values_of(data), spec.kind, window=spec.window, alpha=spec.alpha)
    except InvalidParameter as exc:
        log.info("smoothing skipped: %s", exc)
        notes.append(StageNote(Stage.moving_average, str(exc)))
        return None
    return None if smoothed is None else tuple(smoothed)


def _trend(data: Series, state: AnalysisState, notes: List[StageNote]) -> Optional[TrendResult]:
    if not state.trend.enabled:
        return None
    if len(data) < settings.min_trend_points:
        notes.append(StageNote(
            Stage.trend_line,
            f"insufficient data: trend needs at least {settings.min_trend_points} points, got {len(data)}",
        ))
        return None
    return linear_trend(timestamps_of(data), values_of(data))


def _anomalies(data: Series, state: AnalysisState, notes: List[StageNote]) -> Tuple[Anomaly, ...]:
    spec = state.anomaly
    if not spec.enabled:
        return ()
    if not data:
        notes.append(StageNote(Stage.anomaly_detection, _NO_DATA))
        return ()
    if not spec.threshold_sigma > 0:
        notes.append(StageNote(Stage.anomaly_detection, "threshold must be positive"))
        return ()
    return annotate(data, detect_anomalies(values_of(data), spec.threshold_sigma))


def recompute(
    series: Sequence[DataPoint],
    state: AnalysisState,
    envelope: Envelope = None,
) -> ProcessedResult:
    """Derive a complete :class:`ProcessedResult` from ``series`` and ``state``.

    Stages run in a fixed order: date filter, missing-sample removal, value
    filter, optional aggregation, then smoothing, trend and anomaly detection
    over the aggregated series when aggregation is on, else over the filtered
    series. A stage whose preconditions are not met leaves its field absent
    and records a :class:`StageNote` instead of raising.

    ``envelope`` is the outlier envelope of the full unfiltered series; it is
    computed here when outliers are excluded and none is supplied.
    """
    series = tuple(series)
    stages = state.stages()
    notes: List[StageNote] = []

    if state.value_range.exclude_outliers and envelope is None:
        envelope = outlier_envelope(series)

    filtered = _apply_filters(series, state, envelope)

    aggregated: Optional[Series] = None
    if state.aggregation.enabled and filtered:
        try:
            aggregated = aggregate(filtered, state.aggregation.period, state.aggregation.reducer)
        except InvalidParameter as exc:
            log.info("aggregation skipped: %s", exc)
            notes.append(StageNote(Stage.aggregation, str(exc)))
    data = aggregated if aggregated is not None else filtered

    return ProcessedResult(
        filtered=filtered,
        aggregated=aggregated,
        smoothed=_smoothing(data, state, notes),
        trend=_trend(data, state, notes),
        anomalies=_anomalies(data, state, notes),
        stages=stages,
        raw_count=len(series),
        missing_count=missing_count(series),
        outlier_count=_outlier_count(series, envelope) if state.value_range.exclude_outliers else 0,
        notes=tuple(notes),
    )


class Pipeline:
    """Single-slot memo around :func:`recompute` for one variable selection."""

    def __init__(self) -> None:
        self._series: Optional[Series] = None
        self._state: Optional[AnalysisState] = None
        self._result: Optional[ProcessedResult] = None
        self._envelope: Envelope = None

    def _same_series(self, series: Series) -> bool:
        if self._series is None:
            return False
        return series is self._series or series == self._series

    def recompute(self, series: Sequence[DataPoint], state: AnalysisState) -> ProcessedResult:
        series = series if isinstance(series, tuple) else tuple(series)
        same_series = self._same_series(series)
        if same_series and state == self._state and self._result is not None:
            log.debug("pipeline memo hit (%d points)", len(series))
            return self._result

        envelope = self._envelope if same_series else None
        if state.value_range.exclude_outliers and envelope is None:
            envelope = outlier_envelope(series)

        result = recompute(series, state, envelope=envelope)
        self._series, self._state, self._result = series, state, result
        self._envelope = envelope
        log.debug(
            "pipeline recomputed: raw=%d filtered=%d aggregated=%s",
            result.raw_count, result.filtered_count, result.aggregated_count,
        )
        return result

    @property
    def last_result(self) -> Optional[ProcessedResult]:
        return self._result

    def clear(self) -> None:
        self._series = self._state = self._result = None
        self._envelope = None

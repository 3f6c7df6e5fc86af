"""
Pipeline orchestration for time series analysis, composing filters, aggregation, smoothing, trend fitting and anomaly detection into an immutable processed result keyed by the series and the full parameter snapshot.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.pipeline.orchestrator import Pipeline, outlier_envelope, recompute
from engine.pipeline.result import ProcessedResult, StageNote
from engine.pipeline.state import (
    ActiveStages,
    AggregationSpec,
    AnalysisState,
    AnomalySpec,
    DateRange,
    SmoothingSpec,
    TrendSpec,
    ValueRange,
    describe_state,
)

__all__ = [
    "Pipeline",
    "outlier_envelope",
    "recompute",
    "ProcessedResult",
    "StageNote",
    "ActiveStages",
    "AggregationSpec",
    "AnalysisState",
    "AnomalySpec",
    "DateRange",
    "SmoothingSpec",
    "TrendSpec",
    "ValueRange",
    "describe_state",
]

"""
Enumerations for Aggregation Periods, Reducers, Smoothing Kinds and Pipeline Stages

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from enum import Enum

from config import STAGE_LABELS


class AggregationPeriod(str, Enum):
    hourly = "hourly"
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"
    yearly = "yearly"


class Reducer(str, Enum):
    mean = "mean"
    sum = "sum"
    min = "min"
    max = "max"
    count = "count"
    median = "median"


class SmoothingKind(str, Enum):
    none = "none"
    sma = "sma"
    ema = "ema"


class Stage(str, Enum):
    date_filter = "date_filter"
    value_filter = "value_filter"
    moving_average = "moving_average"
    trend_line = "trend_line"
    aggregation = "aggregation"
    anomaly_detection = "anomaly_detection"

    def label(self) -> str:
        return STAGE_LABELS[self.value]

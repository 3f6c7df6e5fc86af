"""
Constants and configuration for SeriesLens.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import os
from typing import Dict

from pydantic_settings import BaseSettings


SERIESLENS_CALENDAR_TIMEZONE = os.getenv("SERIESLENS_CALENDAR_TIMEZONE", "UTC")
SERIESLENS_LOG_LEVEL = os.getenv("SERIESLENS_LOG_LEVEL", "INFO").upper()
SERIESLENS_HOST = os.getenv("SERIESLENS_HOST", "0.0.0.0")
SERIESLENS_PORT = int(os.getenv("SERIESLENS_PORT", "4322"))
SERIESLENS_MAX_SERIES_POINTS = int(os.getenv("SERIESLENS_MAX_SERIES_POINTS", "500000"))
SERIESLENS_MAX_PIPELINES = int(os.getenv("SERIESLENS_MAX_PIPELINES", "64"))

# labels shown by the presentation layer for each active pipeline stage
STAGE_LABELS: Dict[str, str] = {
    "date_filter": "Date Filter",
    "value_filter": "Value Filter",
    "moving_average": "Moving Average",
    "trend_line": "Trend Line",
    "aggregation": "Aggregation",
    "anomaly_detection": "Anomaly Detection",
}


class Settings(BaseSettings):
    # quartile positions on the sorted copy, floor-indexed
    q1_fraction: float = 0.25
    q3_fraction: float = 0.75
    iqr_multiplier: float = 1.5

    # local calendar used to align aggregation buckets
    calendar_timezone: str = SERIESLENS_CALENDAR_TIMEZONE

    # a fitted line needs at least this many points
    min_trend_points: int = 2

    # defaults mirrored by the UI controls
    default_sma_window: int = 7
    default_ema_alpha: float = 0.3
    default_anomaly_threshold: float = 2.0
    default_aggregation_period: str = "daily"
    default_aggregation_reducer: str = "mean"

    # upper bound on points accepted over HTTP
    max_series_points: int = SERIESLENS_MAX_SERIES_POINTS

    # memoizing pipelines kept, least recently used evicted first
    max_pipelines: int = SERIESLENS_MAX_PIPELINES

    log_level: str = SERIESLENS_LOG_LEVEL
    host: str = SERIESLENS_HOST
    port: int = SERIESLENS_PORT

    model_config = {
        "env_prefix": "SERIESLENS_",
        "extra": "ignore",
    }


settings = Settings()

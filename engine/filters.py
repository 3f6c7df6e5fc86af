"""
Date and value filters for time series, keeping points whose timestamp or value lies inside inclusive, optionally open-ended bounds, and resolving value bounds against an interquartile outlier envelope when outliers are excluded.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from engine.series import DataPoint, Series


def filter_by_date_range(
    series: Sequence[DataPoint],
    start: Optional[int] = None,
    end: Optional[int] = None,
) -> Series:
    # inverted bounds are not an error, they simply match nothing
    return tuple(
        p for p in series
        if (start is None or p.timestamp >= start) and (end is None or p.timestamp <= end)
    )


def filter_by_value_range(
    series: Sequence[DataPoint],
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
) -> Series:
    return tuple(
        p for p in series
        if (min_value is None or p.value >= min_value) and (max_value is None or p.value <= max_value)
    )


def effective_value_bounds(
    min_value: Optional[float],
    max_value: Optional[float],
    envelope: Optional[Tuple[float, float]] = None,
) -> Tuple[Optional[float], Optional[float]]:
    if envelope is None:
        return min_value, max_value
    lower, upper = envelope
    lo = lower if min_value is None else max(min_value, lower)
    hi = upper if max_value is None else min(max_value, upper)
    return lo, hi

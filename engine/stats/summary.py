"""
Descriptive statistics for a variable's values (count, missing, extremes, mean, median, population standard deviation and floor-indexed quartiles), treating non-finite entries as missing samples, to give the presentation layer a summary of the raw data alongside the processed series.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from config import settings
from engine.quantile import floor_quantile


@dataclass(frozen=True)
class SeriesStatistics:
    count: int
    missing: int
    min: float
    max: float
    mean: float
    median: float
    std: float
    p25: float
    p75: float

    @property
    def iqr(self) -> float:
        return self.p75 - self.p25


def summarize(values: Sequence[float]) -> SeriesStatistics:
    arr = np.asarray(values, dtype=float)
    finite = arr[np.isfinite(arr)]
    n = int(finite.size)
    missing = int(arr.size) - n

    if n == 0:
        nan = math.nan
        return SeriesStatistics(
            count=0, missing=missing, min=nan, max=nan, mean=nan,
            median=nan, std=nan, p25=nan, p75=nan,
        )

    ordered = np.sort(finite)
    return SeriesStatistics(
        count=n,
        missing=missing,
        min=float(ordered[0]),
        max=float(ordered[-1]),
        mean=float(np.mean(finite)),
        median=float(np.median(ordered)),
        std=float(np.std(finite)),
        p25=floor_quantile(ordered, settings.q1_fraction),
        p75=floor_quantile(ordered, settings.q3_fraction),
    )

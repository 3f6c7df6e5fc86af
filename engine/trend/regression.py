"""
Trend fitting logic for time series, using centered ordinary least squares to estimate slope and intercept together with the coefficient of determination, and evaluating the fitted line for rendering.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from engine.exceptions import InvalidParameter


@dataclass(frozen=True)
class TrendResult:
    slope: float
    intercept: float
    r2: float

    def predict(self, x):
        return self.slope * x + self.intercept


def _linear_fit(x: np.ndarray, y: np.ndarray) -> tuple[float, float]:
    x_mean = float(np.mean(x))
    y_mean = float(np.mean(y))
    dx = x - x_mean
    denominator = float(np.sum(dx * dx))
    if denominator == 0:
        # all x identical: flat line through the mean
        return 0.0, y_mean
    slope = float(np.sum(dx * (y - y_mean))) / denominator
    return slope, y_mean - slope * x_mean


def _r_squared(x: np.ndarray, y: np.ndarray, slope: float, intercept: float) -> float:
    predicted = slope * x + intercept
    ss_res = float(np.sum((y - predicted) ** 2))
    ss_tot = float(np.sum((y - np.mean(y)) ** 2))
    return 1.0 - ss_res / ss_tot if ss_tot != 0 else 0.0


def linear_trend(x: Sequence[float], y: Sequence[float]) -> TrendResult:
    if len(x) != len(y) or len(x) == 0:
        raise InvalidParameter(
            f"x and y must have the same non-zero length ({len(x)} vs {len(y)})"
        )
    xa = np.asarray(x, dtype=float)
    ya = np.asarray(y, dtype=float)
    slope, intercept = _linear_fit(xa, ya)
    return TrendResult(slope=slope, intercept=intercept, r2=_r_squared(xa, ya, slope, intercept))


def trend_line(x: Sequence[float], trend: TrendResult) -> List[float]:
    return [float(v) for v in trend.predict(np.asarray(x, dtype=float))]

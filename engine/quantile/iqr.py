"""
Interquartile range computation and the 1.5 x IQR outlier envelope, using floor-indexed quartiles on the ascending-sorted copy of the input, to bound the non-outlier values of a series for value filtering and outlier reporting.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from config import settings


@dataclass(frozen=True)
class IQRResult:
    q1: float
    q3: float
    iqr: float
    lower_bound: float
    upper_bound: float
    outlier_indices: Tuple[int, ...] = ()
    sample_count: int = 0

    def envelope(self) -> Optional[Tuple[float, float]]:
        if self.sample_count == 0:
            return None
        return self.lower_bound, self.upper_bound


_EMPTY = IQRResult(q1=0.0, q3=0.0, iqr=0.0, lower_bound=0.0, upper_bound=0.0)


def floor_quantile(sorted_vals: np.ndarray, fraction: float) -> float:
    # lower-value-biased rank, no interpolation between neighbours
    n = len(sorted_vals)
    idx = min(n - 1, max(0, int(math.floor(n * fraction))))
    return float(sorted_vals[idx])


def compute_iqr(values: Sequence[float], multiplier: float | None = None) -> IQRResult:
    if multiplier is None:
        multiplier = settings.iqr_multiplier

    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return _EMPTY
    finite = np.isfinite(arr)
    if not finite.any():
        return _EMPTY

    ordered = np.sort(arr[finite])
    q1 = floor_quantile(ordered, settings.q1_fraction)
    q3 = floor_quantile(ordered, settings.q3_fraction)
    iqr = q3 - q1
    lower = q1 - multiplier * iqr
    upper = q3 + multiplier * iqr

    outside = finite & ((arr < lower) | (arr > upper))
    return IQRResult(
        q1=q1,
        q3=q3,
        iqr=iqr,
        lower_bound=lower,
        upper_bound=upper,
        outlier_indices=tuple(int(i) for i in np.flatnonzero(outside)),
        sample_count=int(finite.sum()),
    )

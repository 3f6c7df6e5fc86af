from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from engine.enums import Reducer
from engine.exceptions import InvalidParameter


def reduce_bucket(values: Sequence[float], reducer: Reducer) -> float:
    if reducer == Reducer.count:
        return float(len(values))

    arr = np.asarray(values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return math.nan

    if reducer == Reducer.mean:
        return float(np.mean(arr))
    if reducer == Reducer.sum:
        return float(np.sum(arr))
    if reducer == Reducer.min:
        return float(np.min(arr))
    if reducer == Reducer.max:
        return float(np.max(arr))
    if reducer == Reducer.median:
        return float(np.median(arr))
    raise InvalidParameter(f"unknown reducer: {reducer!r}")

"""
Moving average smoothing for numeric series: a simple moving average with a partial-window boundary policy at the start of the series, and an exponential moving average seeded with the first observation.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from config import settings
from engine.enums import SmoothingKind
from engine.exceptions import InvalidParameter


def _to_optional(arr: np.ndarray) -> List[Optional[float]]:
    return [float(v) if math.isfinite(v) else None for v in arr]


def sma(values: Sequence[float], window: int) -> List[Optional[float]]:
    n = len(values)
    if window <= 0 or window > n:
        raise InvalidParameter(f"window must be in [1, {n}], got {window}")

    arr = np.asarray(values, dtype=float)
    head = np.cumsum(arr[: window - 1]) / np.arange(1, window)
    full = np.convolve(arr, np.ones(window), mode="valid") / window
    return _to_optional(np.concatenate([head, full]))


def ema(values: Sequence[float], alpha: float) -> List[float]:
    if not (0.0 < alpha <= 1.0):
        raise InvalidParameter(f"alpha must be in (0, 1], got {alpha}")
    if len(values) == 0:
        return []

    result = np.zeros(len(values))
    result[0] = values[0]
    for i in range(1, len(values)):
        result[i] = alpha * values[i] + (1 - alpha) * result[i - 1]
    return [float(v) for v in result]


def smooth(
    values: Sequence[float],
    kind: SmoothingKind,
    window: int | None = None,
    alpha: float | None = None,
) -> Optional[List[Optional[float]]]:
    if kind == SmoothingKind.sma:
        return sma(values, settings.default_sma_window if window is None else window)
    if kind == SmoothingKind.ema:
        return list(ema(values, settings.default_ema_alpha if alpha is None else alpha))
    return None

"""
Detection logic for identifying anomalies in time series values using population z-scores, flagging points whose distance from the mean exceeds a configurable number of standard deviations, and annotating flagged positions with their timestamp, value and signed z-score.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
from scipy.stats import zscore

from engine.series import DataPoint


@dataclass(frozen=True)
class Anomaly:
    index: int
    timestamp: int
    value: float
    z_score: float


def _moments(arr: np.ndarray) -> Tuple[float, float]:
    finite = arr[np.isfinite(arr)]
    if finite.size == 0:
        return 0.0, 0.0
    if finite.min() == finite.max():
        # constant input, rounding in the mean must not produce a tiny std
        return float(finite[0]), 0.0
    # population moments, divisor n
    return float(finite.mean()), float(finite.std(ddof=0))


def z_scores(values: Sequence[float]) -> np.ndarray:
    arr = np.asarray(values, dtype=float)
    scores = np.zeros(arr.shape, dtype=float)
    finite = np.isfinite(arr)
    _, std = _moments(arr)
    if std == 0:
        return scores
    scores[finite] = zscore(arr[finite], ddof=0)
    return scores


def detect_anomalies(values: Sequence[float], threshold_sigma: float) -> List[int]:
    if len(values) == 0 or not threshold_sigma > 0:
        return []

    arr = np.asarray(values, dtype=float)
    _, std = _moments(arr)
    if std == 0:
        return []

    flagged = np.isfinite(arr) & (np.abs(z_scores(arr)) > threshold_sigma)
    return [int(i) for i in np.flatnonzero(flagged)]


def annotate(series: Sequence[DataPoint], indices: Sequence[int]) -> Tuple[Anomaly, ...]:
    if not indices:
        return ()
    scores = z_scores([p.value for p in series])
    return tuple(
        Anomaly(
            index=i,
            timestamp=series[i].timestamp,
            value=series[i].value,
            z_score=float(scores[i]),
        )
        for i in indices
    )

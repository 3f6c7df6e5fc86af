"""
Series construction for points handed over by the data-access collaborator, coercing timestamp/value pairs into an immutable tuple of data points, together with small accessors used by every analysis stage.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Sequence, Tuple

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataPoint:
    timestamp: int
    value: float


Series = Tuple[DataPoint, ...]


@dataclass(frozen=True)
class VariableInfo:
    name: str
    units: str = ""
    missing_count: int = 0


def _coerce_value(raw: Any) -> float:
    if raw is None:
        return math.nan
    return float(raw)


def from_pairs(pairs: Iterable[Any]) -> Series:
    points: List[DataPoint] = []
    skipped = 0
    for p in pairs:
        try:
            points.append(DataPoint(timestamp=int(p[0]), value=_coerce_value(p[1])))
        except (ValueError, TypeError, IndexError, OverflowError):
            skipped += 1
            continue
    if skipped:
        log.warning("from_pairs skipped %d malformed rows", skipped)
    return tuple(points)


def values_of(series: Sequence[DataPoint]) -> List[float]:
    return [p.value for p in series]


def timestamps_of(series: Sequence[DataPoint]) -> List[int]:
    return [p.timestamp for p in series]


def is_missing(value: float) -> bool:
    return not math.isfinite(value)


def drop_missing(series: Sequence[DataPoint]) -> Series:
    return tuple(p for p in series if not is_missing(p.value))


def missing_count(series: Sequence[DataPoint]) -> int:
    return sum(1 for p in series if is_missing(p.value))

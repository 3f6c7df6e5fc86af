"""
Calendar bucketing logic for time series aggregation, aligning each epoch-millisecond timestamp to the start of its hour, day, ISO week, month or year in a configured local calendar and reducing every bucket to a single point.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from functools import lru_cache
from typing import Dict, List, Sequence
from zoneinfo import ZoneInfo

from config import settings
from engine.aggregation.reducers import reduce_bucket
from engine.enums import AggregationPeriod, Reducer
from engine.exceptions import InvalidParameter
from engine.series import DataPoint, Series

log = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def _zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (KeyError, ValueError) as exc:
        raise InvalidParameter(f"unknown calendar timezone: {name!r}") from exc


def _midnight(day: datetime, tz: tzinfo) -> datetime:
    return datetime(day.year, day.month, day.day, tzinfo=tz)


def _bucket_start(local: datetime, period: AggregationPeriod, tz: tzinfo) -> datetime:
    if period == AggregationPeriod.hourly:
        return local.replace(minute=0, second=0, microsecond=0)
    elif period == AggregationPeriod.daily:
        return _midnight(local, tz)
    elif period == AggregationPeriod.weekly:
        # weeks start on Monday
        return _midnight(local.date() - timedelta(days=local.weekday()), tz)
    elif period == AggregationPeriod.monthly:
        return datetime(local.year, local.month, 1, tzinfo=tz)
    elif period == AggregationPeriod.yearly:
        return datetime(local.year, 1, 1, tzinfo=tz)
    raise InvalidParameter(f"unknown aggregation period: {period!r}")


def period_start(timestamp: int, period: AggregationPeriod, tz: tzinfo | None = None) -> int:
    if tz is None:
        tz = _zone(settings.calendar_timezone)
    try:
        local = datetime.fromtimestamp(timestamp / 1000.0, tz=tz)
        start = _bucket_start(local, period, tz)
        return int(round(start.timestamp() * 1000))
    except InvalidParameter:
        raise
    except (ValueError, OverflowError, OSError) as exc:
        raise InvalidParameter(f"timestamp {timestamp} is outside the calendar range") from exc


def aggregate(
    series: Sequence[DataPoint],
    period: AggregationPeriod,
    reducer: Reducer,
    tz: tzinfo | None = None,
) -> Series:
    if not series:
        return ()
    if tz is None:
        tz = _zone(settings.calendar_timezone)
    period = AggregationPeriod(period)
    reducer = Reducer(reducer)

    groups: Dict[int, List[float]] = {}
    for point in series:
        groups.setdefault(period_start(point.timestamp, period, tz), []).append(point.value)

    log.debug("aggregate: %d points into %d %s buckets", len(series), len(groups), period.value)
    return tuple(
        DataPoint(timestamp=start, value=reduce_bucket(groups[start], reducer))
        for start in sorted(groups)
    )

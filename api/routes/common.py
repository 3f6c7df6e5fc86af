"""
Shared utilities for API route modules.

Provides a centralized place for the per-variable pipelines that memoize the
most recent analysis of each variable selection, and for request-size checks
used across multiple routers. This keeps individual route files thin and avoids
repeating boilerplate logic.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from fastapi import HTTPException

from config import settings
from engine.pipeline import Pipeline

log = logging.getLogger(__name__)


_pipelines: OrderedDict[str, Pipeline] = OrderedDict()


def get_pipeline(variable: str) -> Pipeline:
    pipeline = _pipelines.get(variable)
    if pipeline is not None:
        _pipelines.move_to_end(variable)
        return pipeline

    pipeline = Pipeline()
    _pipelines[variable] = pipeline
    while len(_pipelines) > max(1, settings.max_pipelines):
        evicted, old = _pipelines.popitem(last=False)
        old.clear()
        log.debug("evicted pipeline for %s", evicted)
    return pipeline


def close_pipelines() -> None:
    pipelines = list(_pipelines.values())
    _pipelines.clear()
    for pipeline in pipelines:
        pipeline.clear()


def pipeline_count() -> int:
    return len(_pipelines)


def ensure_size(n: int) -> None:
    if n > settings.max_series_points:
        raise HTTPException(
            status_code=413,
            detail=f"series has {n} points, limit is {settings.max_series_points}",
        )

"""
Aggregation logic for time series, grouping points into calendar-aligned buckets and reducing each bucket with a selectable function, producing a series sorted by bucket start.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.aggregation.buckets import aggregate, period_start
from engine.aggregation.reducers import reduce_bucket

__all__ = ["aggregate", "period_start", "reduce_bucket"]

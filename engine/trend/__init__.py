"""
Trend analysis logic, fitting a least-squares line with its coefficient of determination to a series so that renderers can draw it and exporters can annotate it.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.trend.regression import TrendResult, linear_trend, trend_line

__all__ = ["TrendResult", "linear_trend", "trend_line"]

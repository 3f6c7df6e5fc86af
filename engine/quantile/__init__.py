"""
Quantile and outlier envelope logic for numeric series, computing floor-indexed quartiles and the interquartile range bounds used to exclude outliers from value filters and to report outlier positions.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.quantile.iqr import IQRResult, compute_iqr, floor_quantile

__all__ = ["IQRResult", "compute_iqr", "floor_quantile"]

"""
Smoothing logic for numeric series, providing simple and exponential moving averages whose outputs align index-for-index with the series they were computed from.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.smoothing.moving import ema, sma, smooth

__all__ = ["ema", "sma", "smooth"]

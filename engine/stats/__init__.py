"""
Descriptive statistics over a variable's values, used by the statistics panel and by export annotations.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.stats.summary import SeriesStatistics, summarize

__all__ = ["SeriesStatistics", "summarize"]

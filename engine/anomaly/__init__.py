"""
Anomaly detection logic for time series values, flagging points whose population z-score exceeds a threshold and describing each flagged point for presentation and export.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

from engine.anomaly.detection import Anomaly, annotate, detect_anomalies, z_scores

__all__ = ["Anomaly", "annotate", "detect_anomalies", "z_scores"]

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from engine.anomaly import Anomaly
from engine.enums import Stage
from engine.pipeline.state import ActiveStages
from engine.series import Series
from engine.trend import TrendResult


@dataclass(frozen=True)
class StageNote:
    stage: Stage
    message: str


@dataclass(frozen=True)
class ProcessedResult:
    filtered: Series
    aggregated: Optional[Series]
    smoothed: Optional[Tuple[Optional[float], ...]]
    trend: Optional[TrendResult]
    anomalies: Tuple[Anomaly, ...]
    stages: ActiveStages
    raw_count: int = 0
    missing_count: int = 0
    outlier_count: int = 0
    notes: Tuple[StageNote, ...] = ()

    @property
    def filtered_count(self) -> int:
        return len(self.filtered)

    @property
    def aggregated_count(self) -> Optional[int]:
        return None if self.aggregated is None else len(self.aggregated)

    @property
    def analyzed(self) -> Series:
        """The series smoothing, trend and anomalies were computed on."""
        return self.aggregated if self.aggregated is not None else self.filtered

    def note_for(self, stage: Stage) -> Optional[str]:
        for note in self.notes:
            if note.stage == stage:
                return note.message
        return None

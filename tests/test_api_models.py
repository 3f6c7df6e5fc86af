import math

import pytest
from pydantic import ValidationError

from api.requests import AnalysisStateIn, AnalyzeRequest, SmoothRequest, ValuesRequest
from api.responses import PointOut, StatisticsOut
from engine.enums import AggregationPeriod, Reducer, SmoothingKind
from engine.pipeline import AnalysisState
from engine.series import DataPoint
from engine.stats import summarize


def test_analyze_request_requires_variable_name():
    req = AnalyzeRequest(variable={"name": "temp"}, series=[{"timestamp": 1, "value": 2.5}])
    assert req.variable.name == "temp"
    with pytest.raises(ValidationError):
        AnalyzeRequest(variable={"name": ""})
    with pytest.raises(ValidationError):
        AnalyzeRequest(series=[])


def test_analyze_request_null_values_become_missing():
    req = AnalyzeRequest(variable={"name": "v"}, series=[{"timestamp": 1}, {"timestamp": 2, "value": 3}])
    series = req.to_series()
    assert math.isnan(series[0].value)
    assert series[1] == DataPoint(2, 3.0)


def test_default_state_matches_engine_default():
    req = AnalyzeRequest(variable={"name": "v"})
    assert req.state.to_state() == AnalysisState()


def test_state_conversion():
    req = AnalyzeRequest(
        variable={"name": "v"},
        state={
            "date_range": {"start": 10},
            "value_range": {"max": 4.0, "exclude_outliers": True},
            "smoothing": {"kind": "ema", "alpha": 0.5},
            "aggregation": {"enabled": True, "period": "monthly", "reducer": "max"},
            "anomaly": {"enabled": True, "threshold": 3},
        },
    )
    state = req.state.to_state()
    assert state.date_range.start == 10 and state.date_range.end is None
    assert state.value_range.max_value == 4.0
    assert state.value_range.exclude_outliers
    assert state.smoothing.kind is SmoothingKind.ema
    assert state.smoothing.alpha == 0.5
    assert state.aggregation.period is AggregationPeriod.monthly
    assert state.aggregation.reducer is Reducer.max
    assert state.anomaly.threshold_sigma == 3.0


def test_unknown_enum_is_rejected():
    with pytest.raises(ValidationError):
        SmoothRequest(values=[1.0], kind="wma")


def test_values_request_floats():
    assert ValuesRequest(values=[1, None]).floats()[0] == 1.0
    assert math.isnan(ValuesRequest(values=[1, None]).floats()[1])


def test_non_finite_values_serialize_as_null():
    assert PointOut.from_point(DataPoint(1, math.nan)).model_dump() == {"timestamp": 1, "value": None}
    dumped = StatisticsOut.from_stats(summarize([])).model_dump()
    assert dumped["count"] == 0
    assert dumped["mean"] is None
    assert dumped["iqr"] is None


def test_state_snapshot_round_trips():
    req = AnalyzeRequest(
        variable={"name": "v"},
        state={
            "date_range": {"start": 5, "end": 9},
            "smoothing": {"kind": "sma", "window": 4, "visible": False},
            "anomaly": {"threshold": 3.5},
        },
    )
    state = req.state.to_state()
    echoed = AnalysisStateIn.from_state(state)
    assert echoed.model_dump() == req.state.model_dump()
    assert echoed.to_state() == state

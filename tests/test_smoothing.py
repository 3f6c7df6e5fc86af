"""
Test cases for moving average smoothing, covering the partial-window boundary of the simple moving average, the seeded exponential moving average, parameter validation and empty input.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import math

import pytest

from config import settings
from engine.enums import SmoothingKind
from engine.exceptions import InvalidParameter
from engine.smoothing import ema, sma, smooth


def test_sma_partial_window_at_start():
    assert sma([1, 2, 3, 4, 5], 3) == pytest.approx([1, 1.5, 2, 3, 4])


def test_sma_window_one_is_identity():
    assert sma([4.0, -1.0, 2.5], 1) == [4.0, -1.0, 2.5]


def test_sma_window_equal_to_length():
    out = sma([2, 4, 6, 8], 4)
    assert out == pytest.approx([2, 3, 4, 5])
    assert len(out) == 4


@pytest.mark.parametrize("window", [0, -1, 6])
def test_sma_rejects_bad_window(window):
    with pytest.raises(InvalidParameter):
        sma([1, 2, 3, 4, 5], window)


def test_sma_empty_input_is_invalid_window():
    # any window is larger than an empty series
    with pytest.raises(InvalidParameter):
        sma([], 1)


def test_sma_missing_value_becomes_absent():
    out = sma([1.0, math.nan, 3.0, 4.0], 2)
    assert out[0] == 1.0
    assert out[1] is None
    assert out[2] is None
    assert out[3] == pytest.approx(3.5)


def test_ema_seed_and_recurrence():
    assert ema([10, 20, 30], 0.5) == pytest.approx([10, 15, 22.5])


def test_ema_alpha_one_tracks_input():
    assert ema([3, 1, 4, 1, 5], 1.0) == [3, 1, 4, 1, 5]


def test_ema_empty_input():
    assert ema([], 0.3) == []


@pytest.mark.parametrize("alpha", [0.0, -0.2, 1.01])
def test_ema_rejects_bad_alpha(alpha):
    with pytest.raises(InvalidParameter):
        ema([1, 2, 3], alpha)


def test_ema_is_deterministic():
    vals = [0.1 * i for i in range(50)]
    assert ema(vals, 0.3) == ema(vals, 0.3)


def test_smooth_dispatch(monkeypatch):
    assert smooth([1, 2, 3], SmoothingKind.none) is None
    assert smooth([1, 2, 3], SmoothingKind.sma, window=2) == pytest.approx([1, 1.5, 2.5])
    assert smooth([10, 20, 30], SmoothingKind.ema, alpha=0.5) == pytest.approx([10, 15, 22.5])

    monkeypatch.setattr(settings, "default_sma_window", 3)
    assert smooth([1, 2, 3, 4, 5], SmoothingKind.sma) == pytest.approx([1, 1.5, 2, 3, 4])

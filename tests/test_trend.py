"""
Test cases for least-squares trend fitting, including exact fits, degenerate x and y, length validation and evaluation of the fitted line.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""

import pytest

from engine.exceptions import InvalidParameter
from engine.trend import TrendResult, linear_trend, trend_line


def test_linear_trend_exact_fit():
    res = linear_trend([0, 1, 2, 3], [0, 2, 4, 6])
    assert res.slope == pytest.approx(2.0)
    assert res.intercept == pytest.approx(0.0)
    assert res.r2 == pytest.approx(1.0)


def test_linear_trend_noisy_fit_has_partial_r2():
    x = list(range(10))
    y = [i + (3 if i == 5 else 0) for i in x]
    res = linear_trend(x, y)
    assert res.slope > 0
    assert 0.0 < res.r2 < 1.0


def test_linear_trend_on_epoch_millisecond_axis():
    base = 1_700_000_000_000
    x = [base + i * 60_000 for i in range(5)]
    y = [1.0, 2.0, 3.0, 4.0, 5.0]
    res = linear_trend(x, y)
    assert res.slope == pytest.approx(1 / 60_000)
    assert res.predict(x[-1]) == pytest.approx(5.0)
    assert res.r2 == pytest.approx(1.0)


def test_linear_trend_identical_x_is_flat_through_mean():
    res = linear_trend([5, 5, 5], [1, 2, 6])
    assert res.slope == 0.0
    assert res.intercept == pytest.approx(3.0)


def test_linear_trend_constant_y_has_zero_r2():
    res = linear_trend([0, 1, 2], [4, 4, 4])
    assert res.slope == 0.0
    assert res.intercept == pytest.approx(4.0)
    assert res.r2 == 0.0


def test_linear_trend_single_point():
    res = linear_trend([3], [7])
    assert res == TrendResult(slope=0.0, intercept=7.0, r2=0.0)


@pytest.mark.parametrize("x, y", [([], []), ([1, 2], [1]), ([1], [1, 2])])
def test_linear_trend_rejects_bad_lengths(x, y):
    with pytest.raises(InvalidParameter):
        linear_trend(x, y)


def test_linear_trend_is_idempotent():
    x = [0.5 * i for i in range(30)]
    y = [(i * 7) % 11 for i in range(30)]
    assert linear_trend(x, y) == linear_trend(x, y)


def test_trend_line_evaluates_fit():
    res = TrendResult(slope=2.0, intercept=1.0, r2=1.0)
    assert trend_line([0, 1, 2], res) == [1.0, 3.0, 5.0]

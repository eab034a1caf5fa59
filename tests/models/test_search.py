# SPDX-FileCopyrightText: 2023 Phenocore authors
#
# SPDX-License-Identifier: Apache-2.0
import numpy as np
import pytest
from numpy.testing import assert_array_equal

from phenocore.models.phenology_models.search import (
    NO_EVENT,
    cumulative_threshold,
    first_true,
    first_window_exceedance,
    no_event,
    pulse_gate,
    sign_change,
    smoothed_threshold,
    to_doy,
    window_sums,
)
from phenocore.utils import ContractViolation


def test_cumulative_threshold_example():
    S = np.array([[0, 0, 3, 3, 7, 10]]).T
    # the 5th row (value 7) is the first one to reach 5
    assert_array_equal(cumulative_threshold(S, 5), [4])


def test_cumulative_threshold_independent_of_later_values():
    S = np.array([[0, 0, 3, 3, 7, 10], [0, 0, 3, 3, 7, 2]]).T
    assert_array_equal(cumulative_threshold(S, 5), [4, 4])


def test_cumulative_threshold_below():
    S = np.array([0, -5, -10, -15])[:, np.newaxis]
    assert_array_equal(cumulative_threshold(S, -10, below=True), [2])


def test_cumulative_threshold_never_met():
    S = np.zeros((10, 3))
    assert_array_equal(cumulative_threshold(S, 1), [-1, -1, -1])


def test_nan_is_a_contract_violation():
    S = np.array([[0.0], [np.nan]])
    with pytest.raises(ContractViolation):
        cumulative_threshold(S, 1)
    with pytest.raises(ContractViolation):
        sign_change(S)


def test_sign_change_is_strict():
    residual = np.array([[-2, -1, 0, 1, -1]]).T
    assert_array_equal(sign_change(residual), [3])


def test_first_true_empty_series():
    assert_array_equal(first_true(np.zeros((0, 2), dtype=bool)), [-1, -1])


def test_smoothed_threshold():
    index = np.array([[0, 0, 3, 3, 3, 0]], dtype=float).T
    # centred means: [nan, 1, 2, 3, 2, nan]
    assert_array_equal(smoothed_threshold(index, 2, window=3), [2])


def test_smoothed_threshold_edges_never_trigger():
    # a partial window at row 0 would average 4.5, but it is padded
    index = np.array([[9, 0, 0, 0, 0]], dtype=float).T
    assert_array_equal(smoothed_threshold(index, 3.5, window=3), [-1])
    # series shorter than the window
    assert_array_equal(smoothed_threshold(np.ones((10, 1)), 0, window=21), [-1])


def test_window_sums():
    values = np.arange(10, dtype=float)[:, np.newaxis]
    sums = window_sums(values, 8)
    assert_array_equal(sums[:, 0], [28, 36, 44])
    assert window_sums(values[:5], 8).shape == (0, 1)


def reference_trigger(series, threshold, window=8):
    """Full rolling sum, then the first sum reaching threshold."""
    sums = [sum(series[i : i + window]) for i in range(len(series) - window + 1)]
    for row, total in enumerate(sums):
        if total >= threshold:
            return row
    return -1


def test_early_exit_matches_full_rolling_sum():
    rng = np.random.default_rng(1234)
    for _ in range(120):
        n_rows = int(rng.integers(1, 80))
        n_cols = int(rng.integers(1, 5))
        # whole mm so that sums are exact
        rain = rng.integers(0, 6, size=(n_rows, n_cols)) * (rng.random((n_rows, n_cols)) < 0.3)
        rain = rain.astype(float)
        threshold = float(rng.integers(1, 25))
        block_rows = int(rng.integers(1, 40))

        result = first_window_exceedance(rain, threshold, window=8, block_rows=block_rows)
        expected = [reference_trigger(list(rain[:, c]), threshold) for c in range(n_cols)]
        assert_array_equal(result, expected)


def test_early_exit_short_series():
    rain = np.full((7, 2), 100.0)
    assert_array_equal(first_window_exceedance(rain, 1, window=8), [-1, -1])


def test_early_exit_last_complete_window():
    rain = np.zeros((20, 1))
    rain[-1] = 10
    assert_array_equal(first_window_exceedance(rain, 10, window=8, block_rows=5), [12])


def test_early_exit_uses_config(temporary_config):
    rain = np.zeros((50, 1))
    rain[30] = 10
    with temporary_config(search_block_rows=3):
        assert_array_equal(first_window_exceedance(rain, 10), [23])


def test_pulse_gate_stays_open():
    rain = np.zeros((30, 2))
    rain[10, 0] = 20
    gate = pulse_gate(rain, 20, window=8)
    assert_array_equal(gate[:, 0], (np.arange(30) >= 3).astype(float))
    assert_array_equal(gate[:, 1], 0)


def test_to_doy():
    doy = np.arange(-10, 10)
    assert_array_equal(to_doy(np.array([0, 10, -1]), doy), [-10, 0, NO_EVENT])


def test_no_event():
    assert_array_equal(no_event(3), [NO_EVENT] * 3)


def test_to_doy_empty_series():
    rows = first_true(np.zeros((0, 3), dtype=bool))
    assert_array_equal(to_doy(rows, np.arange(0)), [NO_EVENT] * 3)

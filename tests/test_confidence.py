# tests/test_confidence.py

import math

import numpy as np
import pytest

from retailpulse.optimization.confidence import (
    BootstrapEstimator, compute_confidence_intervals, percentile_interval
)
from tests.conftest import make_frame

N = 500


def test_deterministic_for_same_seed(two_group_df):
    first = compute_confidence_intervals(two_group_df, seed=7, n_bootstrap=N)
    second = compute_confidence_intervals(two_group_df, seed=7, n_bootstrap=N)
    assert first == second


def test_different_seed_changes_resamples(two_group_df):
    a = compute_confidence_intervals(two_group_df, seed=1, n_bootstrap=N)
    b = compute_confidence_intervals(two_group_df, seed=2, n_bootstrap=N)
    assert a['financial_ci'] != b['financial_ci']


def test_financial_interval_independent_of_table(two_group_df, constant_df):
    a = compute_confidence_intervals(two_group_df, n_bootstrap=N)
    b = compute_confidence_intervals(constant_df, n_bootstrap=N)
    assert a['financial_ci'] == b['financial_ci']


def test_constant_table_collapses_interval(constant_df):
    ci = compute_confidence_intervals(constant_df, n_bootstrap=N)
    assert ci['turnover_ci'] == pytest.approx((2.0, 2.0))
    assert ci['sales_ci'] == pytest.approx((50.0, 50.0))


def test_bounds_ordered(two_group_df):
    ci = compute_confidence_intervals(two_group_df, n_bootstrap=N)
    for low, high in ci.values():
        assert low <= high


def test_empty_table_gives_nan():
    ci = compute_confidence_intervals(make_frame([]), n_bootstrap=N)
    assert all(math.isnan(v) for v in ci['turnover_ci'])
    assert all(math.isnan(v) for v in ci['sales_ci'])
    assert all(np.isfinite(ci['financial_ci']))


def test_zero_inventory_turnover_is_nan():
    df = make_frame([('S', 'A', 'Jan', 0, 5, 1, 2), ('S', 'A', 'Feb', 0, 6, 1, 2)])
    ci = compute_confidence_intervals(df, n_bootstrap=N)
    assert all(math.isnan(v) for v in ci['turnover_ci'])
    assert ci['sales_ci'][0] >= 5 and ci['sales_ci'][1] <= 6


def test_financial_interval_matches_normal_quantiles():
    ci = compute_confidence_intervals(make_frame([]), n_bootstrap=10000)
    low, high = ci['financial_ci']
    assert low == pytest.approx(6030 - 1.96 * 1206, abs=150)
    assert high == pytest.approx(6030 + 1.96 * 1206, abs=150)


def test_chunked_resampling_matches_shape(monkeypatch, two_group_df):
    import retailpulse.optimization.confidence as confidence
    monkeypatch.setattr(confidence, '_MAX_CHUNK_CELLS', 7)
    ci = BootstrapEstimator(n_bootstrap=50, seed=3).compute(two_group_df)
    assert set(ci) == {'turnover_ci', 'sales_ci', 'financial_ci'}
    assert 100 <= ci['sales_ci'][0] <= ci['sales_ci'][1] <= 670


def test_percentile_interval_ignores_nan():
    assert percentile_interval(np.array([np.nan, 1.0, 1.0])) == (1.0, 1.0)

# tests/test_metrics.py

import math

import pytest

from retailpulse.analytics.metrics import compute_metrics, safe_ratio
from tests.conftest import make_frame


def test_headline_metrics(two_group_df):
    m = compute_metrics(two_group_df)
    assert m['sales_volume'] == 2280
    assert m['avg_inventory'] == pytest.approx(600)
    assert m['inv_turnover'] == pytest.approx(3.8)
    assert m['holding_period'] == pytest.approx(365 / 3.8)
    assert m['gross_profit_margin'] == pytest.approx(900 / 1350)
    assert m['total_revenue'] == 1350
    assert m['total_cost'] == 450
    assert len(m['cleaned_table']) == 6


def test_zero_inventory_gives_nan_ratios():
    df = make_frame([
        ('S1', 'A', 'Jan', 0, 10, 5, 20),
        ('S1', 'A', 'Feb', 0, 12, 5, 20),
    ])
    m = compute_metrics(df)
    assert math.isnan(m['inv_turnover'])
    assert math.isnan(m['holding_period'])
    assert m['sales_volume'] == 22


def test_zero_revenue_margin_is_nan():
    df = make_frame([('S1', 'A', 'Jan', 10, 5, 5, 0)])
    assert math.isnan(compute_metrics(df)['gross_profit_margin'])


def test_no_sales_holding_period_is_nan():
    df = make_frame([('S1', 'A', 'Jan', 10, 0, 5, 20)])
    m = compute_metrics(df)
    assert m['inv_turnover'] == 0
    assert math.isnan(m['holding_period'])


def test_bad_cost_excludes_row_from_sales_volume(messy_df):
    # Only rows 0 and 5 are finite in all four columns
    assert compute_metrics(messy_df)['sales_volume'] == 54


def test_empty_after_cleaning():
    df = make_frame([('S1', 'A', 'Jan', 'x', 'y', 'z', 'w')])
    m = compute_metrics(df)
    assert m['sales_volume'] == 0
    assert math.isnan(m['avg_inventory'])
    assert math.isnan(m['inv_turnover'])


def test_safe_ratio():
    assert safe_ratio(10, 4) == 2.5
    assert math.isnan(safe_ratio(10, 0))
    assert math.isnan(safe_ratio(10, float('nan')))

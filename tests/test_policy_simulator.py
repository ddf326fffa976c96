# tests/test_policy_simulator.py

import pytest

from retailpulse.optimization.policy_simulator import PolicySimulator, simulate
from retailpulse.schema import ITEM
from tests.conftest import make_frame


@pytest.fixture
def policy_df():
    return make_frame([
        ('S1', 'A', 'Jan', 200, 200, 1, 2),
        ('S1', 'B', 'Jan', 100, 201, 1, 2),
        ('S1', 'C', 'Jan', 'bad', 10, 1, 2),
    ])


def test_row_rules(policy_df):
    rows = simulate(policy_df, reorder_point=150, lead_time_days=7, safety_stock=50)['rows']
    assert len(rows) == 2
    assert rows['holding_cost'].tolist() == [25.0, 0.0]
    assert rows['stockout_risk'].tolist() == [False, True]
    assert rows['adjusted_capacity'].tolist() == [200, 200]
    # Strict comparison: 200 fits the capacity, 201 does not
    assert rows['potential_stockout'].tolist() == [False, True]


def test_summary(policy_df):
    summary = simulate(policy_df, 150, 7, 50)['summary']
    assert summary['total_potential_stockouts'] == 1
    assert summary['average_holding_cost'] == 12.5
    assert summary['total_holding_cost'] == 25.0
    assert summary['stockout_risk_rate_pct'] == 50.0
    assert summary['rows_simulated'] == 2
    assert summary['lead_time_days'] == 7


def test_lead_time_has_no_effect(policy_df):
    a = simulate(policy_df, 150, 1, 50)['summary']
    b = simulate(policy_df, 150, 30, 50)['summary']
    a.pop('lead_time_days'), b.pop('lead_time_days')
    assert a == b


def test_top_items_sorted_and_capped():
    df = make_frame([
        ('S1', f'Item {i:02d}', 'Jan', 150 + i, 1, 1, 2) for i in range(15)
    ])
    per_item = simulate(df, 150, 7, 50)['per_item_holding_cost']
    assert len(per_item) == 10
    assert per_item[ITEM].iloc[0] == 'Item 14'
    assert per_item['avg_holding_cost'].is_monotonic_decreasing


def test_custom_holding_rate(policy_df):
    result = PolicySimulator(holding_cost_per_unit=1.0).simulate(policy_df, 150, 7, 0)
    assert result['summary']['total_holding_cost'] == 50.0


def test_missing_item_name_kept_as_own_group():
    df = make_frame([
        ('S1', 'A', 'Jan', 160, 1, 1, 2),
        ('S1', None, 'Jan', 250, 1, 1, 2),
    ])
    per_item = simulate(df, 150, 7, 50)['per_item_holding_cost']
    assert len(per_item) == 2
    assert per_item['avg_holding_cost'].tolist() == [50.0, 5.0]
    assert per_item[ITEM].isna().iloc[0]

# tests/test_charts.py

import pandas as pd

from retailpulse.analytics import monthly_turnover, monthly_sales_totals, financial_impact
from retailpulse.dashboard.components.charts import (
    create_baseline_vs_forecast, create_turnover_line, create_holding_cost_bar,
    create_interval_chart, create_monthly_trend_line, create_financial_impact_bar
)
from retailpulse.optimization import simulate


def test_baseline_vs_forecast_bars():
    fig = create_baseline_vs_forecast(2280, 765)
    assert list(fig.data[0].y) == [2280, 765]


def test_turnover_line_has_reference_lines(two_group_df):
    fig = create_turnover_line(monthly_turnover(two_group_df))
    assert list(fig.data[0].x) == ['Jan', 'Feb', 'Mar']
    assert len(fig.layout.shapes) == 2


def test_empty_inputs_give_placeholder():
    empty = pd.DataFrame(columns=['Month', 'turnover'])
    assert len(create_turnover_line(empty).data) == 0
    assert len(create_interval_chart('X', float('nan'), (1.0, 2.0)).data) == 0


def test_holding_cost_bar_orders_ascending(two_group_df):
    per_item = simulate(two_group_df, 150, 7, 50)['per_item_holding_cost']
    fig = create_holding_cost_bar(per_item)
    assert list(fig.data[0].y) == ['Item Y', 'Item X']


def test_monthly_trend_line(two_group_df):
    fig = create_monthly_trend_line(monthly_sales_totals(two_group_df))
    assert [trace.name for trace in fig.data] == ['Units Sold', 'Linear Trend']
    assert list(fig.data[0].y) == [750, 760, 770]


def test_monthly_trend_line_single_month_has_no_trend_trace():
    monthly = pd.DataFrame({'Month': ['Jan'], 'total_sold': [10.0],
                            'trend': [float('nan')]})
    assert len(create_monthly_trend_line(monthly).data) == 1


def test_financial_impact_error_bars():
    fig = create_financial_impact_bar(financial_impact((4000.0, 8000.0)))
    bar = fig.data[0]
    assert list(bar.y) == [17478, 11448, 6030]
    assert list(bar.error_y.array) == [2022, 1552, 1970]
    assert list(bar.error_y.arrayminus) == [1978, 1548, 2030]


def test_financial_impact_missing_interval_draws_flat_bar():
    fig = create_financial_impact_bar(financial_impact())
    assert list(fig.data[0].error_y.array)[2] == 0

# src/retailpulse/dashboard/components/__init__.py

"""Dashboard components package."""

from retailpulse.dashboard.components.charts import (
    create_baseline_vs_forecast,
    create_monthly_sales_bar,
    create_turnover_line,
    create_holding_cost_bar,
    create_interval_chart,
    create_monthly_trend_line,
    create_financial_impact_bar,
)

from retailpulse.dashboard.components.metrics import render_kpi_row, render_value_box

__all__ = [
    'create_baseline_vs_forecast',
    'create_monthly_sales_bar',
    'create_turnover_line',
    'create_holding_cost_bar',
    'create_interval_chart',
    'create_monthly_trend_line',
    'create_financial_impact_bar',
    'render_kpi_row',
    'render_value_box',
]

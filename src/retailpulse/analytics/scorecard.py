# src/retailpulse/analytics/scorecard.py

"""
Performance scorecard tables.

1. Metrics table: point estimate, normal-approximation 95% CI, target
   and status for monthly unit sales, turnover and gross margin.
2. Quantities of interest: the six headline figures with their
   bootstrap intervals.
"""

import numpy as np
import pandas as pd
import logging
from typing import Dict, Optional, Tuple, Any

from retailpulse.analytics.metrics import compute_metrics, safe_ratio
from retailpulse.data.cleaning import clean
from retailpulse.forecasting.wma import compute_wma
from retailpulse.optimization.confidence import (
    compute_confidence_intervals, MEAN_ANNUAL_SAVINGS
)
from retailpulse.schema import (
    INVENTORY, SOLD, COST, REVENUE, NUMERIC_COLUMNS,
    TARGETS, DAYS_PER_YEAR, OBSERVED_MONTHS
)

logger = logging.getLogger(__name__)

Z_95 = 1.96


def normal_ci(values: np.ndarray) -> Tuple[float, float]:
    """mean ± 1.96 × standard error over finite values; NaN if fewer than 2."""
    values = values[np.isfinite(values)]
    if len(values) < 2:
        return (float('nan'), float('nan'))
    mean = values.mean()
    se = values.std(ddof=1) / np.sqrt(len(values))
    return (float(mean - Z_95 * se), float(mean + Z_95 * se))


def _per_row_ratio(numerator: pd.Series, denominator: pd.Series) -> np.ndarray:
    denominator = denominator.where(denominator > 0)
    return (numerator / denominator).to_numpy(dtype='float64')


def build_metrics_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    Metrics table with per-row normal CIs and target status.

    Args:
        df: Raw dataset

    Returns:
        DataFrame [Metric, Value, 95% CI, Target Goal, Status]
    """
    data = clean(df, NUMERIC_COLUMNS)

    if len(data) == 0:
        return pd.DataFrame([{
            'Metric': 'No valid data available',
            'Value': 'N/A',
            '95% CI': 'N/A',
            'Target Goal': 'N/A',
            'Status': 'N/A',
        }])

    sales_mean = float(data[SOLD].mean())
    sales_ci = normal_ci(data[SOLD].to_numpy(dtype='float64'))

    turnover = safe_ratio(data[SOLD].sum(), data[INVENTORY].mean())
    turnover_ci = normal_ci(_per_row_ratio(data[SOLD], data[INVENTORY]))

    margin = safe_ratio(
        data[REVENUE].sum() - data[COST].sum(), data[REVENUE].sum()
    )
    margin_ci = normal_ci(
        _per_row_ratio(data[REVENUE] - data[COST], data[REVENUE])
    )

    sales_ok = np.isfinite(sales_mean) and sales_mean >= TARGETS['monthly_sales_floor']
    turnover_ok = np.isfinite(turnover) and turnover >= TARGETS['inventory_turnover']
    margin_ok = np.isfinite(margin) and margin >= TARGETS['gross_profit_margin']

    return pd.DataFrame([
        {
            'Metric': 'Monthly Unit Sales (Mean)',
            'Value': f"{sales_mean:.1f} units",
            '95% CI': f"[{sales_ci[0]:.1f}, {sales_ci[1]:.1f}]",
            'Target Goal': f"{TARGETS['monthly_sales_target']} units",
            'Status': '✅ On Track' if sales_ok else '⚠️ Below Target',
        },
        {
            'Metric': 'Inventory Turnover',
            'Value': f"{turnover:.2f}",
            '95% CI': f"[{turnover_ci[0]:.2f}, {turnover_ci[1]:.2f}]",
            'Target Goal': f"{TARGETS['inventory_turnover']:.2f}",
            'Status': '✅ Achieved' if turnover_ok else '⚠️ Needs Improvement',
        },
        {
            'Metric': 'Gross Profit Margin',
            'Value': f"{margin * 100:.2f}%",
            '95% CI': f"[{margin_ci[0] * 100:.2f}%, {margin_ci[1] * 100:.2f}%]",
            'Target Goal': f"{TARGETS['gross_profit_margin'] * 100:.2f}%",
            'Status': '✅ Maintained' if margin_ok else '❌ At Risk',
        },
    ])


def _money(value: float) -> str:
    return f"₱{value:,.0f}" if np.isfinite(value) else "₱nan"


def build_qoi_summary(
    df: pd.DataFrame,
    metrics: Optional[Dict[str, Any]] = None,
    forecast: Optional[Dict[str, Any]] = None,
    intervals: Optional[Dict[str, Tuple[float, float]]] = None
) -> pd.DataFrame:
    """
    Quantities-of-interest summary.

    Precomputed results may be passed in to avoid recomputing the
    bootstrap; anything missing is computed from `df`.

    Returns:
        DataFrame [Quantity of Interest, Point Estimate, 95% Confidence Interval]
    """
    metrics = metrics or compute_metrics(df)
    forecast = forecast or compute_wma(df)
    intervals = intervals or compute_confidence_intervals(df)

    t_low, t_high = intervals['turnover_ci']
    s_low, s_high = intervals['sales_ci']
    f_low, f_high = intervals['financial_ci']
    margin = metrics['gross_profit_margin']

    with np.errstate(divide='ignore'):
        hp_low = DAYS_PER_YEAR / np.float64(t_high)
        hp_high = DAYS_PER_YEAR / np.float64(t_low)

    rows = [
        ('1. Inventory Turnover Rate',
         f"{metrics['inv_turnover']:.2f}",
         f"[{t_low:.2f}, {t_high:.2f}]"),
        ('2. Average Holding Period (days)',
         f"{metrics['holding_period']:.0f}",
         f"[{hp_low:.0f}, {hp_high:.0f}]"),
        ('3. Monthly Sales Volume (units)',
         f"{metrics['sales_volume'] / OBSERVED_MONTHS:.1f}",
         f"[{s_low:.1f}, {s_high:.1f}]"),
        ('4. Projected Sales Growth (%)',
         f"{forecast['growth_pct']:.1f}%",
         'N/A (derived metric)'),
        ('5. Annual Cost Savings (PHP)',
         f"{MEAN_ANNUAL_SAVINGS:,.0f}",
         f"[{_money(f_low)}, {_money(f_high)}]"),
        ('6. Gross Profit Margin (%)',
         f"{100 * margin:.2f}%",
         f"[{100 * margin * 0.95:.2f}%, {100 * margin * 1.05:.2f}%]"),
    ]
    return pd.DataFrame(rows, columns=[
        'Quantity of Interest', 'Point Estimate', '95% Confidence Interval'
    ])

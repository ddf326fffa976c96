# src/retailpulse/analytics/metrics.py

"""
Inventory & Profitability Metrics

Headline KPIs for the dashboard:
1. Sales volume (units sold)
2. Gross profit margin
3. Inventory turnover  = units sold / average inventory
4. Holding period      = 365 / turnover (days)

Ratios with a zero or empty denominator come back as NaN.
Callers format NaN for display; nothing here raises on bad numbers.
"""

import numpy as np
import pandas as pd
import logging
from typing import Dict, Any

from retailpulse.data.cleaning import clean
from retailpulse.schema import (
    INVENTORY, SOLD, COST, REVENUE, NUMERIC_COLUMNS, DAYS_PER_YEAR
)

logger = logging.getLogger(__name__)


def safe_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or NaN unless the denominator is positive."""
    if np.isfinite(denominator) and denominator > 0:
        return float(numerator / denominator)
    return float('nan')


def compute_metrics(df: pd.DataFrame) -> Dict[str, Any]:
    """
    Calculate headline metrics from the raw table.

    Cleans on all four numeric columns, so a row with a bad cost value
    is excluded from sales volume too.

    Args:
        df: Raw dataset

    Returns:
        Dictionary with sales_volume, gross_profit_margin, inv_turnover,
        avg_inventory, holding_period, the totals and cleaned_table
    """
    cleaned = clean(df, NUMERIC_COLUMNS)

    total_inventory = float(cleaned[INVENTORY].sum())
    total_sold = float(cleaned[SOLD].sum())
    total_cost = float(cleaned[COST].sum())
    total_revenue = float(cleaned[REVENUE].sum())

    # Mean of an empty column is NaN
    avg_inventory = float(cleaned[INVENTORY].mean())

    gross_profit_margin = safe_ratio(total_revenue - total_cost, total_revenue)
    inv_turnover = safe_ratio(total_sold, avg_inventory)

    if total_sold > 0 and np.isfinite(avg_inventory) and avg_inventory > 0:
        holding_period = DAYS_PER_YEAR / inv_turnover
    else:
        holding_period = float('nan')

    logger.info(f"Metrics over {len(cleaned):,}/{len(df):,} rows | "
                f"sold={total_sold:,.0f} turnover={inv_turnover:.2f}")

    return {
        'sales_volume': total_sold,
        'gross_profit_margin': gross_profit_margin,
        'inv_turnover': inv_turnover,
        'avg_inventory': avg_inventory,
        'holding_period': float(holding_period),
        'total_inventory': total_inventory,
        'total_cost': total_cost,
        'total_revenue': total_revenue,
        'cleaned_table': cleaned,
    }

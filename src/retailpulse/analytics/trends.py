# src/retailpulse/analytics/trends.py

"""Month-by-month series for the turnover and sales charts."""

import numpy as np
import pandas as pd
import logging

from retailpulse.data.cleaning import clean
from retailpulse.forecasting.wma import order_months
from retailpulse.schema import INVENTORY, SOLD, MONTH

logger = logging.getLogger(__name__)

PROJECTED_GROWTH = 0.05


def monthly_turnover(df: pd.DataFrame) -> pd.DataFrame:
    """
    Inventory turnover per calendar month.

    Turnover = units sold in the month / mean inventory in the month.
    Months with non-positive mean inventory and rows with an
    unrecognised month are dropped.

    Returns:
        DataFrame [Month, total_sold, avg_inventory, turnover] in calendar order
    """
    data = clean(df, [INVENTORY, SOLD])
    data[MONTH] = order_months(data[MONTH])

    monthly = (
        data.dropna(subset=[MONTH])
        .groupby(MONTH, observed=True)
        .agg(total_sold=(SOLD, 'sum'), avg_inventory=(INVENTORY, 'mean'))
        .sort_index()
        .reset_index()
    )
    monthly['turnover'] = monthly['total_sold'] / monthly['avg_inventory'].where(
        monthly['avg_inventory'] > 0
    )
    monthly = monthly[np.isfinite(monthly['turnover'])].reset_index(drop=True)
    monthly[MONTH] = monthly[MONTH].astype(str)
    return monthly


def monthly_sales_projection(
    df: pd.DataFrame,
    growth: float = PROJECTED_GROWTH
) -> pd.DataFrame:
    """
    Mean units sold per calendar month and a flat growth projection.

    Returns:
        DataFrame [Month, actual, forecast] in calendar order
    """
    data = clean(df, [SOLD])
    data[MONTH] = order_months(data[MONTH])

    monthly = (
        data.dropna(subset=[MONTH])
        .groupby(MONTH, observed=True)[SOLD]
        .mean()
        .rename('actual')
        .sort_index()
        .reset_index()
    )
    monthly['forecast'] = monthly['actual'] * (1 + growth)
    monthly[MONTH] = monthly[MONTH].astype(str)
    return monthly


def monthly_sales_totals(df: pd.DataFrame) -> pd.DataFrame:
    """
    Total units sold per calendar month with a least-squares trend line.

    The trend is fitted on month position (0, 1, 2, ...) over the months
    present; with fewer than two months it is NaN.

    Returns:
        DataFrame [Month, total_sold, trend] in calendar order
    """
    data = clean(df, [SOLD])
    data[MONTH] = order_months(data[MONTH])

    monthly = (
        data.dropna(subset=[MONTH])
        .groupby(MONTH, observed=True)[SOLD]
        .sum()
        .rename('total_sold')
        .sort_index()
        .reset_index()
    )

    if len(monthly) >= 2:
        x = np.arange(len(monthly), dtype='float64')
        slope, intercept = np.polyfit(x, monthly['total_sold'].to_numpy(), 1)
        monthly['trend'] = intercept + slope * x
    else:
        monthly['trend'] = np.nan

    monthly[MONTH] = monthly[MONTH].astype(str)
    logger.debug(f"Monthly sales totals over {len(monthly)} months")
    return monthly

# src/retailpulse/forecasting/wma.py

"""
Weighted Moving Average (WMA) Demand Forecast

Forecasts next-month units sold per (store, item) with a fixed
60-30-10 weighting: the most recent month carries 60% of the weight.

    WMA_t = 0.6 × D_t + 0.3 × D_t-1 + 0.1 × D_t-2

Windows at the start of a series are shorter than the weight vector.
A window of j points uses the last j weights, reversed, applied from
oldest to newest, and is NOT renormalised:

    1 point : 0.1 × D_t
    2 points: 0.1 × D_t-1 + 0.3 × D_t

The next-month forecast of a group is the PEAK WMA value across its
whole series, not the latest window. Groups without any finite WMA
value forecast 0.
"""

import numpy as np
import pandas as pd
import logging
from typing import Dict, List, Optional, Sequence, Any

from retailpulse.data.cleaning import clean
from retailpulse.schema import STORE, ITEM, MONTH, SOLD, MONTH_ORDER

logger = logging.getLogger(__name__)

DEFAULT_WEIGHTS: List[float] = [0.6, 0.3, 0.1]

WMA_COL = 'wma_sold'
FORECAST_COL = 'forecast_next_month_sold'


def order_months(months: pd.Series) -> pd.Categorical:
    """Map exact month abbreviations to an ordered categorical; anything else → NaN."""
    return pd.Categorical(
        months.astype('string'), categories=MONTH_ORDER, ordered=True
    )


class WMAForecaster:
    """
    Fixed-weight moving-average forecaster.

    The weighting scheme is fixed at construction; there is no model
    selection or fitting.
    """

    def __init__(self, weights: Optional[Sequence[float]] = None):
        """
        Args:
            weights: Weights from most recent to oldest month.
                     Defaults to [0.6, 0.3, 0.1].
        """
        self.weights = np.asarray(
            DEFAULT_WEIGHTS if weights is None else list(weights), dtype='float64'
        )
        if self.weights.size == 0:
            raise ValueError("weights must not be empty")
        self.window = len(self.weights)
        # Applied oldest → newest, truncated for partial windows
        self._applied = self.weights[::-1]

    def _weighted(self, values: np.ndarray) -> float:
        return float(np.dot(values, self._applied[:len(values)]))

    def rolling_wma(self, sold: pd.Series) -> pd.Series:
        """Trailing WMA of one time-ordered series (right-aligned, partial)."""
        return sold.rolling(self.window, min_periods=1).apply(
            self._weighted, raw=True
        )

    def compute(self, df: pd.DataFrame) -> Dict[str, Any]:
        """
        Compute the WMA series and per-group forecasts.

        Only units sold is cleaned; rows with an unrecognised month are
        kept in the series (and in total_actual) but get no WMA value.

        Args:
            df: Raw dataset

        Returns:
            Dictionary with series, forecasts, total_actual,
            total_forecast and growth_pct
        """
        data = clean(df, [SOLD])
        data[MONTH] = order_months(data[MONTH])
        data = data.sort_values(
            [STORE, ITEM, MONTH], kind='mergesort', na_position='last'
        ).reset_index(drop=True)

        data[WMA_COL] = np.nan
        known = data[MONTH].notna()
        if known.any():
            dated = data[known]
            data.loc[known, WMA_COL] = dated.groupby(
                [STORE, ITEM], dropna=False, sort=False
            )[SOLD].transform(self.rolling_wma)

        if len(data):
            forecasts = (
                data.groupby([STORE, ITEM], dropna=False)[WMA_COL]
                .max()
                .rename(FORECAST_COL)
                .reset_index()
            )
        else:
            forecasts = pd.DataFrame(columns=[STORE, ITEM, FORECAST_COL])

        peak = forecasts[FORECAST_COL].astype('float64')
        forecasts[FORECAST_COL] = peak.where(np.isfinite(peak), 0.0)

        total_actual = float(data[SOLD].sum())
        total_forecast = float(forecasts[FORECAST_COL].sum())
        growth_pct = (
            100 * (total_forecast - total_actual) / total_actual
            if total_actual != 0 else float('nan')
        )

        logger.info(f"WMA over {len(forecasts)} store/item groups | "
                    f"actual={total_actual:,.0f} forecast={total_forecast:,.0f}")

        return {
            'series': data,
            'forecasts': forecasts,
            'total_actual': total_actual,
            'total_forecast': total_forecast,
            'growth_pct': float(growth_pct),
        }


def compute_wma(
    df: pd.DataFrame,
    weights: Optional[Sequence[float]] = None
) -> Dict[str, Any]:
    """Functional shortcut for WMAForecaster(weights).compute(df)."""
    return WMAForecaster(weights).compute(df)

# src/retailpulse/insights/assistant.py

"""
Keyword Chat Assistant

Answers short stakeholder questions about the uploaded dataset by
matching keywords, in a fixed order, and filling a template with the
current metrics. The first matching rule wins.

  turnover / "it"                → inventory turnover vs target
  holding / period / days        → holding period vs target
  wma / forecast / predict       → WMA forecast totals
  saving / cost / financial      → projected annual savings
  sales / sold / volume          → units sold
  margin / profit / gpm          → gross profit margin
  confidence / ci / bootstrap    → bootstrap intervals
"""

import re
import logging
from typing import Callable, List, Optional, Tuple

import pandas as pd

from retailpulse.analytics.financial import PILOT_STORES, CHAIN_STORES
from retailpulse.analytics.metrics import compute_metrics
from retailpulse.config import DEFAULT_BOOTSTRAP_SAMPLES, DEFAULT_SEED
from retailpulse.forecasting.wma import compute_wma
from retailpulse.optimization.confidence import (
    compute_confidence_intervals, MEAN_ANNUAL_SAVINGS
)
from retailpulse.schema import TARGETS, OBSERVED_MONTHS

logger = logging.getLogger(__name__)

# Savings headline for the 5-store pilot, scaled to the full chain
SAVINGS_CI_DISPLAY = (4258, 7802)

HELP_TEXT = (
    "I can answer: 'current IT rate', 'WMA forecast', 'savings', "
    "'holding period', 'confidence intervals', 'sales volume', or 'profit margin'"
)
EMPTY_QUESTION = "Please type a question!"
NO_DATA = "⚠️ No data loaded yet. Please upload your CSV file first."


class KeywordAssistant:
    """Rule-based question router over the current dataset."""

    def __init__(
        self,
        n_bootstrap: int = DEFAULT_BOOTSTRAP_SAMPLES,
        seed: int = DEFAULT_SEED
    ):
        self.n_bootstrap = n_bootstrap
        self.seed = seed
        self.rules: List[Tuple[re.Pattern, Callable[[pd.DataFrame], str]]] = [
            (re.compile(r"turnover|\bit\b"), self._turnover),
            (re.compile(r"holding|period|days"), self._holding_period),
            (re.compile(r"wma|forecast|predict"), self._forecast),
            (re.compile(r"saving|cost|financial"), self._savings),
            (re.compile(r"sales|sold|volume"), self._sales),
            (re.compile(r"margin|profit|gpm"), self._margin),
            (re.compile(r"confidence|ci|bootstrap"), self._intervals),
        ]

    def answer(self, question: Optional[str], df: Optional[pd.DataFrame]) -> str:
        """
        Answer a question about `df`.

        Args:
            question: Free text from the chat box
            df: Current dataset, or None when nothing is uploaded

        Returns:
            Response text
        """
        text = (question or '').strip()
        if not text:
            return EMPTY_QUESTION
        if df is None or len(df) == 0:
            return NO_DATA

        lowered = text.lower()
        for pattern, handler in self.rules:
            if pattern.search(lowered):
                logger.info(f"Chat rule '{pattern.pattern}' matched")
                return handler(df)
        return HELP_TEXT

    def _turnover(self, df: pd.DataFrame) -> str:
        turnover = compute_metrics(df)['inv_turnover']
        target = TARGETS['inventory_turnover']
        return (
            f"Current Inventory Turnover Rate: {turnover:.2f} (Target: {target:.2f}). "
            f"This represents a {100 * (target - turnover) / target:.1f}% gap from target."
        )

    def _holding_period(self, df: pd.DataFrame) -> str:
        days = compute_metrics(df)['holding_period']
        target = TARGETS['holding_period_days']
        return (
            f"Average holding period: {days:.0f} days (Target: {target} days). "
            f"Reduction needed: {days - target:.0f} days "
            f"({100 * (days - target) / days:.1f}%)."
        )

    def _forecast(self, df: pd.DataFrame) -> str:
        wma = compute_wma(df)
        return (
            f"WMA forecasts {wma['total_forecast']:,.0f} units "
            f"({wma['growth_pct']:.1f}% growth from baseline "
            f"{wma['total_actual']:,.0f} units)."
        )

    def _savings(self, df: pd.DataFrame) -> str:
        low, high = SAVINGS_CI_DISPLAY
        scaled = MEAN_ANNUAL_SAVINGS * CHAIN_STORES / PILOT_STORES
        return (
            f"Projected annual savings: ₱{MEAN_ANNUAL_SAVINGS:,.0f} for "
            f"{PILOT_STORES}-store subset (95% CI: ₱{low:,}-₱{high:,}). "
            f"Scaled to {CHAIN_STORES} stores: ₱{scaled:,.0f}."
        )

    def _sales(self, df: pd.DataFrame) -> str:
        volume = compute_metrics(df)['sales_volume']
        return (
            f"Total units sold: {volume:,.0f} | "
            f"Average monthly: {volume / OBSERVED_MONTHS:.1f} units | "
            f"Target growth: +5% month-over-month"
        )

    def _margin(self, df: pd.DataFrame) -> str:
        margin = compute_metrics(df)['gross_profit_margin']
        return (
            f"Current Gross Profit Margin: {100 * margin:.2f}% "
            f"(Target: maintain at {100 * TARGETS['gross_profit_margin']:.2f}%)"
        )

    def _intervals(self, df: pd.DataFrame) -> str:
        cis = compute_confidence_intervals(
            df, seed=self.seed, n_bootstrap=self.n_bootstrap
        )
        t_low, t_high = cis['turnover_ci']
        s_low, s_high = cis['sales_ci']
        f_low, f_high = cis['financial_ci']
        return (
            f"95% Confidence Intervals: IT Rate [{t_low:.2f}, {t_high:.2f}] | "
            f"Sales Volume [{s_low:.1f}, {s_high:.1f}] | "
            f"Savings [₱{f_low:,.0f}, ₱{f_high:,.0f}]"
        )

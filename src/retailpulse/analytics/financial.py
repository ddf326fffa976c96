# src/retailpulse/analytics/financial.py

"""
Financial Impact of the turnover improvement

Annual holding-cost comparison for the 5-store pilot:

    inventory value = annualized COGS / inventory turnover
    holding cost    = inventory value × 20%

Raising turnover from the 2.62 baseline to the 4.00 target shrinks the
inventory value, releasing capital and cutting the holding cost.

These figures are assumption-driven. They come from the pilot's
annualized COGS, not from the uploaded table; only the savings error
bar uses the bootstrap financial interval.
"""

import numpy as np
import pandas as pd
import logging
from typing import Dict, Optional, Tuple

from retailpulse.optimization.confidence import MEAN_ANNUAL_SAVINGS
from retailpulse.schema import TARGETS

logger = logging.getLogger(__name__)

ANNUALIZED_COGS = 228_960.0
HOLDING_COST_RATE = 0.20
PILOT_STORES = 5
CHAIN_STORES = 21

# Fixed 95% bands for the cost bars
BASELINE_COST_CI = (15_500.0, 19_500.0)
TARGET_COST_CI = (9_900.0, 13_000.0)


def _php(value: float) -> str:
    return f"₱{value:,.0f}"


def inventory_economics() -> Dict[str, float]:
    """
    Inventory value and holding cost at baseline and target turnover.

    Returns:
        Dictionary with annualized_cogs, baseline/target inventory value,
        capital_released, baseline/target holding cost, annual_savings
        and scaled_savings
    """
    baseline_value = ANNUALIZED_COGS / TARGETS['baseline_turnover']
    target_value = ANNUALIZED_COGS / TARGETS['inventory_turnover']

    return {
        'annualized_cogs': ANNUALIZED_COGS,
        'baseline_inventory_value': baseline_value,
        'target_inventory_value': target_value,
        'capital_released': baseline_value - target_value,
        'baseline_holding_cost': baseline_value * HOLDING_COST_RATE,
        'target_holding_cost': target_value * HOLDING_COST_RATE,
        'annual_savings': MEAN_ANNUAL_SAVINGS,
        'scaled_savings': MEAN_ANNUAL_SAVINGS * CHAIN_STORES / PILOT_STORES,
    }


def financial_comparison_table() -> pd.DataFrame:
    """
    Eight-row comparison from annualized COGS to chain-wide savings.

    Returns:
        DataFrame [Metric, Value, Description]
    """
    e = inventory_economics()
    baseline = TARGETS['baseline_turnover']
    target = TARGETS['inventory_turnover']
    rate = f"{HOLDING_COST_RATE:.0%}"

    rows = [
        ('Annualized COGS (12 Months)', e['annualized_cogs'],
         'Projected from 6-month data (Jan-Jun 2024)'),
        (f'Baseline Inventory Value (IT={baseline:.2f})', e['baseline_inventory_value'],
         'Stock held too long - inefficient'),
        (f'Target Inventory Value (IT={target:.2f})', e['target_inventory_value'],
         f'Optimized inventory level with IT={target:.2f}'),
        ('Reduction in Inventory Value', e['capital_released'],
         'Capital released for other investments'),
        (f'Baseline Annual Holding Cost ({rate})', e['baseline_holding_cost'],
         'High holding cost at low turnover'),
        (f'Target Annual Holding Cost ({rate})', e['target_holding_cost'],
         'Reduced holding cost at target turnover'),
        (f'Annual Savings ({PILOT_STORES} Stores)', e['annual_savings'],
         f'Annual savings for {PILOT_STORES}-store subset'),
        (f'Scaled Savings ({CHAIN_STORES} Stores)', e['scaled_savings'],
         f'Projected savings across all {CHAIN_STORES} stores'),
    ]
    return pd.DataFrame(
        [(metric, _php(value), note) for metric, value, note in rows],
        columns=['Metric', 'Value', 'Description']
    )


def financial_impact(
    financial_ci: Optional[Tuple[float, float]] = None
) -> pd.DataFrame:
    """
    Baseline cost, target cost and savings with their 95% intervals.

    Args:
        financial_ci: Bootstrap savings interval; NaN bounds when omitted

    Returns:
        DataFrame [Metric, Value, CI_Low, CI_High]
    """
    e = inventory_economics()
    low, high = financial_ci if financial_ci is not None else (np.nan, np.nan)

    impact = pd.DataFrame([
        ('Baseline Cost', round(e['baseline_holding_cost']), *BASELINE_COST_CI),
        ('Target Cost', round(e['target_holding_cost']), *TARGET_COST_CI),
        ('Annual Savings', e['annual_savings'], float(low), float(high)),
    ], columns=['Metric', 'Value', 'CI_Low', 'CI_High'])
    impact['Value'] = impact['Value'].astype('float64')

    logger.debug(f"Financial impact: savings {_php(e['annual_savings'])} "
                 f"CI [{low}, {high}]")
    return impact

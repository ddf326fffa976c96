# src/retailpulse/optimization/policy_simulator.py

"""
Reorder Policy Simulator

What-if analysis for a reorder point / safety stock policy.

Per row:
- stockout_risk      : inventory on hand is below the reorder point
- holding_cost       : max(inventory - reorder point, 0) × 0.5 PHP
- adjusted_capacity  : reorder point + safety stock
- potential_stockout : units sold exceed the adjusted capacity

The holding cost is a flat per-unit charge on stock above the reorder
point, not a time-weighted cost. Lead time is accepted and reported
but does not enter any formula.
"""

import pandas as pd
import logging
from typing import Dict, Any

from retailpulse.data.cleaning import clean
from retailpulse.schema import INVENTORY, SOLD, ITEM

logger = logging.getLogger(__name__)

HOLDING_COST_PER_UNIT = 0.5
TOP_ITEMS = 10


class PolicySimulator:
    """Applies a reorder policy to every cleaned row of the dataset."""

    def __init__(
        self,
        holding_cost_per_unit: float = HOLDING_COST_PER_UNIT,
        top_items: int = TOP_ITEMS
    ):
        self.holding_cost_per_unit = holding_cost_per_unit
        self.top_items = top_items

    def simulate(
        self,
        df: pd.DataFrame,
        reorder_point: float,
        lead_time_days: int,
        safety_stock: float
    ) -> Dict[str, Any]:
        """
        Run the policy simulation.

        Args:
            df: Raw dataset
            reorder_point: Inventory level that triggers an order (units)
            lead_time_days: Supplier lead time; display only
            safety_stock: Buffer added to the reorder point (units)

        Returns:
            Dictionary with summary, per_item_holding_cost (top items by
            mean holding cost) and the simulated rows
        """
        sim = clean(df, [INVENTORY, SOLD])

        sim['stockout_risk'] = sim[INVENTORY] < reorder_point
        sim['holding_cost'] = (
            (sim[INVENTORY] - reorder_point).clip(lower=0)
            * self.holding_cost_per_unit
        )
        sim['adjusted_capacity'] = reorder_point + safety_stock
        sim['potential_stockout'] = sim[SOLD] > sim['adjusted_capacity']

        summary = {
            'total_potential_stockouts': int(sim['potential_stockout'].sum()),
            'average_holding_cost': round(float(sim['holding_cost'].mean()), 2),
            'total_holding_cost': round(float(sim['holding_cost'].sum()), 2),
            'stockout_risk_rate_pct': round(
                100 * float(sim['stockout_risk'].mean()), 1
            ),
            'reorder_point': float(reorder_point),
            'lead_time_days': lead_time_days,
            'safety_stock': float(safety_stock),
            'rows_simulated': len(sim),
        }

        per_item = (
            sim.groupby(ITEM, dropna=False)['holding_cost']
            .mean()
            .rename('avg_holding_cost')
            .sort_values(ascending=False)
            .head(self.top_items)
            .reset_index()
        )

        logger.info(f"Policy ROP={reorder_point} SS={safety_stock} | "
                    f"stockouts={summary['total_potential_stockouts']} "
                    f"holding=₱{summary['total_holding_cost']:,.2f}")

        return {
            'summary': summary,
            'per_item_holding_cost': per_item,
            'rows': sim,
        }


def simulate(
    df: pd.DataFrame,
    reorder_point: float,
    lead_time_days: int,
    safety_stock: float
) -> Dict[str, Any]:
    """Functional shortcut for PolicySimulator().simulate(...)."""
    return PolicySimulator().simulate(
        df, reorder_point, lead_time_days, safety_stock
    )

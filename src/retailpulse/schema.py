# src/retailpulse/schema.py

"""
Dataset schema and business targets.

Column headers are the exact strings found in the uploaded CSV.
All core computations address columns through these constants.
"""

from typing import Dict, List

STORE = 'Store'
ITEM = 'Item Name'
MONTH = 'Month'
INVENTORY = 'Number Stored in Inventory'
SOLD = 'Number Sold'
COST = 'Cost (PHP)'
REVENUE = 'Revenue (PHP)'

NUMERIC_COLUMNS: List[str] = [INVENTORY, SOLD, COST, REVENUE]
REQUIRED_COLUMNS: List[str] = [STORE, ITEM, MONTH] + NUMERIC_COLUMNS

# Calendar order, not lexicographic
MONTH_ORDER: List[str] = [
    'Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
    'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec'
]

DAYS_PER_YEAR = 365

# Targets used by the status banners and scorecard
TARGETS: Dict[str, float] = {
    'inventory_turnover': 4.00,
    'turnover_warning': 3.00,
    'baseline_turnover': 2.62,
    'holding_period_days': 91,
    'sales_growth_pct': 5.0,
    'monthly_sales_target': 686.5,
    'monthly_sales_floor': 653.8,
    'gross_profit_margin': 0.6667,
}

# Months covered by the reference dataset (Jan-Jun)
OBSERVED_MONTHS = 6

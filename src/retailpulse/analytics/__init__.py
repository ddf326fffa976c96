from retailpulse.analytics.metrics import compute_metrics, safe_ratio
from retailpulse.analytics.trends import (
    monthly_turnover, monthly_sales_projection, monthly_sales_totals
)
from retailpulse.analytics.scorecard import build_metrics_table, build_qoi_summary
from retailpulse.analytics.financial import (
    inventory_economics, financial_comparison_table, financial_impact
)

__all__ = ['compute_metrics', 'safe_ratio', 'monthly_turnover',
           'monthly_sales_projection', 'monthly_sales_totals',
           'build_metrics_table', 'build_qoi_summary', 'inventory_economics',
           'financial_comparison_table', 'financial_impact']

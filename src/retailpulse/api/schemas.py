# src/retailpulse/api/schemas.py

"""
Pydantic schemas for request/response validation.

Undefined ratios (zero average inventory, zero revenue) are returned
as null rather than NaN, since JSON has no NaN.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Dict


class DatasetResponse(BaseModel):
    """Result of replacing the session dataset."""

    status: str
    records: int
    stores: int
    source: Optional[str] = None


class MetricsResponse(BaseModel):
    """Headline inventory and profitability metrics."""

    sales_volume: float
    gross_profit_margin: Optional[float] = None
    inv_turnover: Optional[float] = None
    avg_inventory: Optional[float] = None
    holding_period: Optional[float] = None
    total_inventory: float
    total_cost: float
    total_revenue: float
    rows_used: int


class ForecastResponse(BaseModel):
    """WMA forecast per store/item group."""

    weights: List[float]
    total_actual: float
    total_forecast: float
    growth_pct: Optional[float] = None
    forecasts: List[Dict]
    series: Optional[List[Dict]] = None


class IntervalResponse(BaseModel):
    """Bootstrap 95% confidence intervals as [low, high]."""

    seed: int
    n_bootstrap: int
    turnover_ci: List[Optional[float]]
    sales_ci: List[Optional[float]]
    financial_ci: List[Optional[float]]


class SimulationRequest(BaseModel):
    """Reorder policy to simulate."""

    reorder_point: float = Field(
        150,
        ge=0,
        description="Inventory level that triggers a reorder (units)"
    )
    lead_time_days: int = Field(
        7,
        ge=0,
        description="Supplier lead time in days (reported only)"
    )
    safety_stock: float = Field(
        50,
        ge=0,
        description="Buffer stock added to the reorder point (units)"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [{
                "reorder_point": 150,
                "lead_time_days": 7,
                "safety_stock": 50
            }]
        }
    }


class SimulationResponse(BaseModel):
    """Policy simulation summary and top items by holding cost."""

    summary: Dict
    per_item_holding_cost: List[Dict]


class TrendResponse(BaseModel):
    """Monthly turnover and sales projection series."""

    monthly_turnover: List[Dict]
    monthly_sales: List[Dict]
    monthly_totals: List[Dict]


class FinancialResponse(BaseModel):
    """Holding-cost economics, cost bars with CIs and the comparison table."""

    economics: Dict[str, float]
    impact: List[Dict]
    comparison_table: List[Dict]


class ScorecardResponse(BaseModel):
    """Metrics table and quantities-of-interest summary."""

    metrics_table: List[Dict]
    qoi_summary: List[Dict]


class StatusResponse(BaseModel):
    """Turnover banner and value-box colours."""

    level: str
    title: str
    lines: List[str]
    colors: Dict[str, str]


class ChatRequest(BaseModel):
    """A question for the keyword assistant."""

    question: str = Field(
        "",
        description="Free text, e.g. 'current IT rate' or 'WMA forecast'"
    )


class ChatResponse(BaseModel):
    question: str
    answer: str


class HealthResponse(BaseModel):
    """System health check response."""

    status: str
    version: str
    data_available: bool
    last_updated: str
    data_stats: Optional[Dict] = None

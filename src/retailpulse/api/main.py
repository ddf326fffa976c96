# src/retailpulse/api/main.py

"""
FastAPI Application — REST API for the RetailPulse dashboard core

Endpoints:
  GET  /                      → System info
  GET  /health                → Health check
  POST /dataset               → Upload CSV (replaces the session dataset)
  GET  /metrics               → Turnover, margin, holding period
  GET  /forecast              → WMA forecast per store/item
  GET  /confidence-intervals  → Bootstrap 95% intervals
  POST /simulate              → Reorder policy simulation
  GET  /trends                → Monthly turnover, sales & trend series
  GET  /financial             → Holding-cost savings with CIs
  GET  /scorecard             → Metrics table & quantities of interest
  GET  /status                → Turnover banner
  POST /chat                  → Keyword assistant

Run locally:
  uvicorn retailpulse.api.main:app --host 0.0.0.0 --port 8000 --reload
"""

import math
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from retailpulse import __version__
from retailpulse.analytics import (
    compute_metrics, monthly_turnover, monthly_sales_projection,
    monthly_sales_totals, build_metrics_table, build_qoi_summary,
    inventory_economics, financial_comparison_table, financial_impact
)
from retailpulse.config import Settings, configure_logging
from retailpulse.data.loader import DatasetSession
from retailpulse.exceptions import StructuralInputError
from retailpulse.forecasting import compute_wma, DEFAULT_WEIGHTS
from retailpulse.insights import (
    KeywordAssistant, turnover_status, holding_period_color,
    turnover_color, growth_color
)
from retailpulse.optimization import compute_confidence_intervals, simulate
from retailpulse.api.schemas import (
    DatasetResponse, MetricsResponse, ForecastResponse, IntervalResponse,
    SimulationRequest, SimulationResponse, TrendResponse, FinancialResponse,
    ScorecardResponse,
    StatusResponse, ChatRequest, ChatResponse, HealthResponse
)

logger = logging.getLogger(__name__)


# ===================================================================
# CREATE APP
# ===================================================================
app = FastAPI(
    title="RetailPulse Inventory Intelligence API",
    description=(
        "REST API for inventory turnover analytics.\n\n"
        "**Features:**\n"
        "- Turnover, margin and holding-period metrics\n"
        "- Weighted moving average (60-30-10) demand forecast\n"
        "- Bootstrap confidence intervals\n"
        "- Reorder policy simulation"
    ),
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ===================================================================
# APPLICATION STATE
# ===================================================================
class AppState:
    """Holds settings and the current session dataset."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings.from_env()
        self.session = DatasetSession()
        self.assistant = KeywordAssistant(
            n_bootstrap=self.settings.bootstrap_samples,
            seed=self.settings.seed
        )
        self.last_updated: Optional[str] = None

    def preload(self):
        """Load RETAILPULSE_DATA_PATH if configured."""
        path = self.settings.data_path
        if not path:
            logger.info("No preload dataset configured")
            return
        try:
            self.session.load(path, source_name=path)
            self.last_updated = datetime.now().isoformat()
        except StructuralInputError as e:
            logger.error(f"Preload failed for {path}: {e}")

    def require_data(self) -> pd.DataFrame:
        if not self.session.is_loaded:
            raise HTTPException(
                status_code=503,
                detail="No dataset loaded. Upload a CSV via POST /dataset."
            )
        return self.session.current


state = AppState()


# ===================================================================
# HELPERS
# ===================================================================
def _finite(value: Any) -> Optional[float]:
    """float, or None for NaN / inf."""
    if value is None:
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _records(df: pd.DataFrame) -> List[Dict]:
    """DataFrame → JSON-safe list of dicts."""
    records = []
    for row in df.to_dict('records'):
        rec = {}
        for col, val in row.items():
            if isinstance(val, (np.bool_, bool)):
                rec[col] = bool(val)
            elif isinstance(val, (np.integer, int)):
                rec[col] = int(val)
            elif isinstance(val, (np.floating, float)):
                rec[col] = _finite(val)
            elif val is None or (not isinstance(val, str) and pd.isna(val)):
                rec[col] = None
            else:
                rec[col] = str(val)
        records.append(rec)
    return records


def _interval(bounds) -> List[Optional[float]]:
    return [_finite(bounds[0]), _finite(bounds[1])]


# ===================================================================
# STARTUP
# ===================================================================
@app.on_event("startup")
async def startup():
    configure_logging(state.settings)
    logger.info("Starting API server...")
    state.preload()


# ===================================================================
# ENDPOINTS
# ===================================================================

# ---------- Root ----------
@app.get("/", tags=["System"])
async def root():
    """API root — system information."""
    return {
        "name": "RetailPulse Inventory Intelligence API",
        "version": __version__,
        "status": "ready" if state.session.is_loaded else "awaiting upload",
        "documentation": "/docs",
        "endpoints": {
            "POST /dataset": "Upload a CSV dataset",
            "GET /metrics": "Headline metrics",
            "GET /forecast": "WMA forecast",
            "GET /confidence-intervals": "Bootstrap intervals",
            "POST /simulate": "Reorder policy simulation",
            "GET /financial": "Financial impact",
            "POST /chat": "Keyword assistant"
        }
    }


# ---------- Health ----------
@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check system health and data availability."""
    loaded = state.session.is_loaded
    return HealthResponse(
        status="healthy" if loaded else "degraded",
        version=__version__,
        data_available=loaded,
        last_updated=state.last_updated or datetime.now().isoformat(),
        data_stats=state.session.summary() if loaded else None
    )


# ---------- Dataset ----------
@app.post("/dataset", response_model=DatasetResponse, tags=["Data"])
def upload_dataset(file: UploadFile = File(...)):
    """
    Upload a CSV. The previous dataset is replaced, never merged.

    Required headers: Store, Item Name, Month, Number Stored in Inventory,
    Number Sold, Cost (PHP), Revenue (PHP).
    """
    try:
        state.session.load(file.file, source_name=file.filename)
    except StructuralInputError as e:
        logger.warning(f"Rejected upload {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    state.last_updated = datetime.now().isoformat()
    summary = state.session.summary()
    return DatasetResponse(status="success", **summary)


# ---------- Metrics ----------
@app.get("/metrics", response_model=MetricsResponse, tags=["Analytics"])
def get_metrics():
    df = state.require_data()
    m = compute_metrics(df)
    return MetricsResponse(
        sales_volume=m['sales_volume'],
        gross_profit_margin=_finite(m['gross_profit_margin']),
        inv_turnover=_finite(m['inv_turnover']),
        avg_inventory=_finite(m['avg_inventory']),
        holding_period=_finite(m['holding_period']),
        total_inventory=m['total_inventory'],
        total_cost=m['total_cost'],
        total_revenue=m['total_revenue'],
        rows_used=len(m['cleaned_table'])
    )


# ---------- Forecast ----------
@app.get("/forecast", response_model=ForecastResponse, tags=["Forecasting"])
def get_forecast(
    weights: Optional[List[float]] = Query(
        None, description="Weights, most recent month first (default 0.6, 0.3, 0.1)"
    ),
    include_series: bool = False
):
    df = state.require_data()
    weights = weights or DEFAULT_WEIGHTS
    wma = compute_wma(df, weights)
    return ForecastResponse(
        weights=list(weights),
        total_actual=wma['total_actual'],
        total_forecast=wma['total_forecast'],
        growth_pct=_finite(wma['growth_pct']),
        forecasts=_records(wma['forecasts']),
        series=_records(wma['series']) if include_series else None
    )


# ---------- Confidence intervals ----------
@app.get(
    "/confidence-intervals",
    response_model=IntervalResponse,
    tags=["Analytics"]
)
def get_confidence_intervals(seed: Optional[int] = None):
    """
    Bootstrap intervals. CPU-bound; served from the worker threadpool.
    """
    df = state.require_data()
    seed = state.settings.seed if seed is None else seed
    n = state.settings.bootstrap_samples
    cis = compute_confidence_intervals(df, seed=seed, n_bootstrap=n)
    return IntervalResponse(
        seed=seed,
        n_bootstrap=n,
        turnover_ci=_interval(cis['turnover_ci']),
        sales_ci=_interval(cis['sales_ci']),
        financial_ci=_interval(cis['financial_ci'])
    )


# ---------- Simulator ----------
@app.post("/simulate", response_model=SimulationResponse, tags=["Inventory"])
def run_simulation(request: SimulationRequest):
    df = state.require_data()
    result = simulate(
        df,
        reorder_point=request.reorder_point,
        lead_time_days=request.lead_time_days,
        safety_stock=request.safety_stock
    )
    summary = {
        k: (_finite(v) if isinstance(v, float) else v)
        for k, v in result['summary'].items()
    }
    return SimulationResponse(
        summary=summary,
        per_item_holding_cost=_records(result['per_item_holding_cost'])
    )


# ---------- Trends ----------
@app.get("/trends", response_model=TrendResponse, tags=["Analytics"])
def get_trends():
    df = state.require_data()
    return TrendResponse(
        monthly_turnover=_records(monthly_turnover(df)),
        monthly_sales=_records(monthly_sales_projection(df)),
        monthly_totals=_records(monthly_sales_totals(df))
    )


# ---------- Financial impact ----------
@app.get("/financial", response_model=FinancialResponse, tags=["Analytics"])
def get_financial():
    """
    Holding-cost savings at target turnover. Only the savings error bar
    depends on the dataset (bootstrap financial interval).
    """
    df = state.require_data()
    cis = compute_confidence_intervals(
        df,
        seed=state.settings.seed,
        n_bootstrap=state.settings.bootstrap_samples
    )
    return FinancialResponse(
        economics=inventory_economics(),
        impact=_records(financial_impact(cis['financial_ci'])),
        comparison_table=_records(financial_comparison_table())
    )


# ---------- Scorecard ----------
@app.get("/scorecard", response_model=ScorecardResponse, tags=["Analytics"])
def get_scorecard():
    df = state.require_data()
    intervals = compute_confidence_intervals(
        df,
        seed=state.settings.seed,
        n_bootstrap=state.settings.bootstrap_samples
    )
    return ScorecardResponse(
        metrics_table=_records(build_metrics_table(df)),
        qoi_summary=_records(build_qoi_summary(df, intervals=intervals))
    )


# ---------- Status ----------
@app.get("/status", response_model=StatusResponse, tags=["Analytics"])
def get_status():
    df = state.require_data()
    metrics = compute_metrics(df)
    forecast = compute_wma(df)
    report = turnover_status(metrics, forecast)
    return StatusResponse(
        level=report.level,
        title=report.title,
        lines=report.lines,
        colors={
            'holding_period': holding_period_color(metrics['holding_period']),
            'turnover': turnover_color(metrics['inv_turnover']),
            'sales_growth': growth_color(forecast['growth_pct']),
        }
    )


# ---------- Chat ----------
@app.post("/chat", response_model=ChatResponse, tags=["Assistant"])
def chat(request: ChatRequest):
    """Keyword assistant. Works without data (returns an upload prompt)."""
    answer = state.assistant.answer(request.question, state.session.current)
    return ChatResponse(question=request.question, answer=answer)

# src/retailpulse/dashboard/app.py

"""
RetailPulse Inventory Turnover Dashboard
Run:  streamlit run src/retailpulse/dashboard/app.py
"""

import math
import logging

import streamlit as st
import pandas as pd

# ── Page config (MUST be first st call) ───────────────────────
st.set_page_config(
    page_title="RetailPulse Inventory Dashboard",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded"
)

from retailpulse.analytics import (
    compute_metrics, monthly_turnover, monthly_sales_projection,
    monthly_sales_totals, build_metrics_table, build_qoi_summary,
    inventory_economics, financial_comparison_table, financial_impact
)
from retailpulse.config import Settings, configure_logging
from retailpulse.data.loader import DatasetSession
from retailpulse.exceptions import StructuralInputError
from retailpulse.forecasting import compute_wma
from retailpulse.insights import (
    KeywordAssistant, turnover_status, holding_period_color,
    turnover_color, growth_color
)
from retailpulse.optimization import compute_confidence_intervals, simulate
from retailpulse.schema import STORE, SOLD, TARGETS

SETTINGS = Settings.from_env()
configure_logging(SETTINGS)
logger = logging.getLogger(__name__)


# ── Helpers ───────────────────────────────────────────────────
def _num(v, fmt='{:,.2f}'):
    """Format a number; NaN shows as N/A."""
    if v is None or (isinstance(v, float) and math.isnan(v)):
        return 'N/A'
    return fmt.format(v)


def _session() -> DatasetSession:
    if 'dataset' not in st.session_state:
        st.session_state['dataset'] = DatasetSession()
    return st.session_state['dataset']


# ── Cached computations (keyed on the uploaded snapshot) ─────
@st.cache_data(show_spinner=False)
def cached_metrics(df: pd.DataFrame):
    return compute_metrics(df)


@st.cache_data(show_spinner=False)
def cached_wma(df: pd.DataFrame):
    return compute_wma(df)


@st.cache_data(show_spinner="Running 10,000 bootstrap resamples ...")
def cached_intervals(df: pd.DataFrame, seed: int, n_bootstrap: int):
    return compute_confidence_intervals(df, seed=seed, n_bootstrap=n_bootstrap)


def _intervals(df):
    return cached_intervals(df, SETTINGS.seed, SETTINGS.bootstrap_samples)


# ╔══════════════════════════════════════════════════════════════╗
# ║  PAGE 1 — EXECUTIVE OVERVIEW                                ║
# ╚══════════════════════════════════════════════════════════════╝
def page_overview(df: pd.DataFrame):
    from retailpulse.dashboard.components import render_value_box

    st.title("Executive Overview")
    st.caption("Inventory turnover optimisation with WMA forecasting")
    st.markdown("---")

    metrics = cached_metrics(df)
    wma = cached_wma(df)

    b1, b2, b3, b4 = st.columns(4)
    with b1:
        render_value_box(
            "Avg Holding Period (Target: 91 days)",
            f"{_num(metrics['holding_period'], '{:.0f}')} → "
            f"{TARGETS['holding_period_days']} days",
            color=holding_period_color(metrics['holding_period']), icon="📅")
    with b2:
        render_value_box(
            "Inventory Turnover (Target: 4.00)",
            f"{_num(metrics['inv_turnover'])} → 4.00",
            color=turnover_color(metrics['inv_turnover']), icon="🔄")
    with b3:
        render_value_box(
            "Projected Sales Growth (Target: +5%)",
            _num(wma['growth_pct'], '{:+.1f}%'),
            color=growth_color(wma['growth_pct']), icon="📈")
    with b4:
        render_value_box(
            "Gross Profit Margin",
            _num(metrics['gross_profit_margin'] * 100, '{:.2f}%'),
            color='purple', icon="💰")

    if st.button("Refresh Metrics", type="primary"):
        report = turnover_status(metrics, wma)
        show = {'success': st.success, 'warning': st.warning,
                'error': st.error}[report.level]
        show(f"**{report.title}**\n\n" + "\n\n".join(report.lines))

    st.markdown("---")
    st.subheader("Quantities of Interest")
    with st.spinner("Computing confidence intervals ..."):
        qoi = build_qoi_summary(df, metrics=metrics, forecast=wma,
                                intervals=_intervals(df))
    st.table(qoi)


# ╔══════════════════════════════════════════════════════════════╗
# ║  PAGE 2 — FORECAST                                          ║
# ╚══════════════════════════════════════════════════════════════╝
def page_forecast(df: pd.DataFrame):
    from retailpulse.dashboard.components import (
        create_baseline_vs_forecast, create_monthly_sales_bar,
        create_monthly_trend_line, render_kpi_row
    )

    st.title("WMA Demand Forecast")
    st.markdown("WMA<sub>t</sub> = 0.6 × D<sub>t</sub> + 0.3 × D<sub>t-1</sub>"
                " + 0.1 × D<sub>t-2</sub>", unsafe_allow_html=True)
    st.markdown("---")

    wma = cached_wma(df)

    render_kpi_row([
        {"title": "Actual Units", "icon": "📦",
         "value": _num(wma["total_actual"], "{:,.0f}")},
        {"title": "Forecast Units", "icon": "🔮",
         "value": _num(wma["total_forecast"], "{:,.0f}"),
         "help": "Sum of each store/item peak WMA"},
        {"title": "Growth", "icon": "📈",
         "value": _num(wma["growth_pct"], "{:+.1f}%")},
    ])

    st.plotly_chart(
        create_baseline_vs_forecast(wma['total_actual'], wma['total_forecast']),
        use_container_width=True)
    st.plotly_chart(
        create_monthly_sales_bar(monthly_sales_projection(df)),
        use_container_width=True)
    st.plotly_chart(
        create_monthly_trend_line(monthly_sales_totals(df)),
        use_container_width=True)

    st.subheader("Next-Month Forecast per Store / Item")
    st.dataframe(wma['forecasts'], use_container_width=True, height=360)

    with st.expander("WMA Series"):
        st.dataframe(wma['series'], use_container_width=True, height=400)


# ╔══════════════════════════════════════════════════════════════╗
# ║  PAGE 3 — FINANCIAL IMPACT                                  ║
# ╚══════════════════════════════════════════════════════════════╝
def page_financial(df: pd.DataFrame):
    from retailpulse.dashboard.components import (
        create_financial_impact_bar, render_value_box
    )

    st.title("Financial Impact")
    st.caption("Holding-cost savings from raising turnover to the 4.00 target")
    st.markdown("---")

    economics = inventory_economics()
    b1, b2, b3 = st.columns(3)
    with b1:
        render_value_box(
            "Capital Released (5 stores)",
            _num(economics['capital_released'], '₱{:,.0f}'),
            color='purple', icon="💵")
    with b2:
        render_value_box(
            "Annual Savings (5 stores)",
            _num(economics['annual_savings'], '₱{:,.0f}'),
            color='green', icon="💰")
    with b3:
        render_value_box(
            "Scaled Savings (21 stores)",
            _num(economics['scaled_savings'], '₱{:,.0f}'),
            color='green', icon="🏬")

    with st.spinner("Computing confidence intervals ..."):
        impact = financial_impact(_intervals(df)['financial_ci'])
    st.plotly_chart(create_financial_impact_bar(impact),
                    use_container_width=True)
    st.caption("Error bars = 95% CI | Savings interval from the bootstrap "
               "(assumption-based, not derived from the uploaded data)")

    st.subheader("Financial Comparison")
    st.table(financial_comparison_table())


# ╔══════════════════════════════════════════════════════════════╗
# ║  PAGE 4 — TURNOVER & CONFIDENCE                             ║
# ╚══════════════════════════════════════════════════════════════╝
def page_analytics(df: pd.DataFrame):
    from retailpulse.dashboard.components import (
        create_turnover_line, create_interval_chart
    )

    st.title("Turnover & Confidence Intervals")
    st.markdown("---")

    st.plotly_chart(create_turnover_line(monthly_turnover(df)),
                    use_container_width=True)

    st.subheader("Performance Metrics")
    st.table(build_metrics_table(df))

    st.subheader("Bootstrap 95% Intervals (n = "
                 f"{SETTINGS.bootstrap_samples:,})")
    metrics = cached_metrics(df)
    cis = _intervals(df)
    sold = cached_wma(df)['series']
    c1, c2 = st.columns(2)
    with c1:
        st.plotly_chart(create_interval_chart(
            'Inventory Turnover', metrics['inv_turnover'], cis['turnover_ci'],
            target=TARGETS['inventory_turnover']), use_container_width=True)
    with c2:
        mean_sold = float(sold[SOLD].mean()) if len(sold) else float('nan')
        st.plotly_chart(create_interval_chart(
            'Mean Units Sold', mean_sold, cis['sales_ci']),
            use_container_width=True)

    low, high = cis['financial_ci']
    st.info(f"Annual savings 95% CI: ₱{_num(low, '{:,.0f}')} - "
            f"₱{_num(high, '{:,.0f}')} (assumption-based, not derived "
            "from the uploaded data)")


# ╔══════════════════════════════════════════════════════════════╗
# ║  PAGE 5 — POLICY SIMULATOR                                  ║
# ╚══════════════════════════════════════════════════════════════╝
def page_simulator(df: pd.DataFrame):
    from retailpulse.dashboard.components import create_holding_cost_bar

    st.title("Inventory Policy Simulator")
    st.caption("Adjust parameters to see the impact on holding costs "
               "and stockout risk")
    st.markdown("---")

    c1, c2, c3 = st.columns(3)
    reorder_point = c1.slider("Reorder Point (units):", 0, 500, 150, 10)
    lead_time = c2.slider("Lead Time (days):", 1, 30, 7)
    safety_stock = c3.slider("Safety Stock (units):", 0, 200, 50, 5)

    if st.button("Run Simulation", type="primary"):
        result = simulate(df, reorder_point, lead_time, safety_stock)
        s = result['summary']
        st.table(pd.DataFrame([{
            'Total Potential Stockouts': s['total_potential_stockouts'],
            'Average Holding Cost (PHP)': s['average_holding_cost'],
            'Total Holding Cost (PHP)': s['total_holding_cost'],
            'Stockout Risk Rate (%)': s['stockout_risk_rate_pct'],
        }]))
        st.plotly_chart(
            create_holding_cost_bar(result['per_item_holding_cost']),
            use_container_width=True)
        st.success("Simulation completed! Review results above.")


# ╔══════════════════════════════════════════════════════════════╗
# ║  PAGE 6 — ASSISTANT                                         ║
# ╚══════════════════════════════════════════════════════════════╝
def page_assistant(df: pd.DataFrame):
    st.title("Assistant")
    st.caption("Ask: current IT rate, WMA forecast, savings ...")
    st.markdown("---")

    assistant = KeywordAssistant(n_bootstrap=SETTINGS.bootstrap_samples,
                                 seed=SETTINGS.seed)
    question = st.text_input("Your question:",
                             placeholder="Ask: current IT rate, WMA forecast, savings...")
    if st.button("Send", type="primary"):
        with st.spinner("Thinking ..."):
            st.markdown(assistant.answer(question, df))


# ╔══════════════════════════════════════════════════════════════╗
# ║  PAGE 7 — DATA                                              ║
# ╚══════════════════════════════════════════════════════════════╝
def page_data(df: pd.DataFrame):
    st.title("Uploaded Data")
    st.markdown("---")
    st.dataframe(df.head(10), use_container_width=True)


# ╔══════════════════════════════════════════════════════════════╗
# ║  MAIN                                                       ║
# ╚══════════════════════════════════════════════════════════════╝
def main():
    session = _session()

    st.sidebar.markdown(
        "<h2 style='text-align:center; margin-bottom:0;'>📦 RetailPulse</h2>",
        unsafe_allow_html=True)
    st.sidebar.markdown("---")

    upload = st.sidebar.file_uploader("Upload CSV", type=['csv'])
    if upload is not None and session.needs_reload(upload.file_id):
        try:
            df = session.load(upload, source_name=upload.name,
                              upload_id=upload.file_id)
            st.sidebar.success(
                f"✅ Loaded {len(df):,} records from "
                f"{df[STORE].nunique()} stores!")
        except StructuralInputError as e:
            st.sidebar.error(f"❌ Error loading data: {e}\n\n"
                             "Please check CSV format.")

    page = st.sidebar.radio("Navigate", [
        "Executive Overview",
        "Forecast",
        "Financial Impact",
        "Turnover & Confidence",
        "Policy Simulator",
        "Assistant",
        "Data"],
        label_visibility='collapsed')

    if not session.is_loaded:
        st.title("RetailPulse Inventory Dashboard")
        st.info("Upload a CSV with columns: Store, Item Name, Month, "
                "Number Stored in Inventory, Number Sold, Cost (PHP), "
                "Revenue (PHP)")
        return

    pages = {
        "Executive Overview":    page_overview,
        "Forecast":              page_forecast,
        "Financial Impact":      page_financial,
        "Turnover & Confidence": page_analytics,
        "Policy Simulator":      page_simulator,
        "Assistant":             page_assistant,
        "Data":                  page_data,
    }
    pages[page](session.current)


if __name__ == "__main__":
    main()

# src/retailpulse/dashboard/components/charts.py

"""Reusable Plotly chart components with a dark theme."""

import math

import plotly.graph_objects as go
import pandas as pd
from typing import Optional, Tuple

from retailpulse.schema import MONTH, ITEM, TARGETS

COLORS = {
    'primary': '#00d4ff',
    'secondary': '#7c3aed',
    'success': '#10b981',
    'warning': '#f59e0b',
    'danger': '#ef4444',
    'actual': '#3b82f6',
    'forecast': '#10b981',
    'bar': '#667eea',
    'bg_dark': '#0d1117',
    'grid': 'rgba(255,255,255,0.06)',
    'text': '#e6edf3',
    'text_muted': '#8b949e',
}

FONT = dict(family='Inter, Segoe UI, sans-serif', color=COLORS['text'])

TEMPLATE = 'plotly_dark'


def _base_layout(title: str, height: int) -> dict:
    return dict(
        title=dict(
            text=title,
            font=dict(size=20, family='Inter, Segoe UI, sans-serif', color='white'),
            x=0.02, xanchor='left'
        ),
        template=TEMPLATE,
        height=height,
        font=FONT,
        plot_bgcolor='rgba(0,0,0,0)',
        paper_bgcolor='rgba(0,0,0,0)',
        margin=dict(l=60, r=30, t=70, b=50),
    )


def _empty_figure(message: str, height: int) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message, xref="paper", yref="paper", x=0.5, y=0.5,
        showarrow=False, font=dict(size=16, color=COLORS['danger'])
    )
    fig.update_layout(template=TEMPLATE, height=height,
                      paper_bgcolor='rgba(0,0,0,0)', font=FONT)
    return fig


def create_baseline_vs_forecast(
    total_actual: float,
    total_forecast: float,
    title: str = 'Sales Performance: Baseline vs. WMA Forecast',
    height: int = 420
) -> go.Figure:
    """Two bars: actual units sold vs summed next-month WMA forecasts."""
    growth = (100 * (total_forecast - total_actual) / total_actual
              if total_actual else float('nan'))

    fig = go.Figure(go.Bar(
        x=['Baseline (Actual)', 'Improved (WMA Forecast)'],
        y=[total_actual, total_forecast],
        marker=dict(color=[COLORS['actual'], COLORS['forecast']],
                    line=dict(color='rgba(255,255,255,0.6)', width=1)),
        text=[f'{total_actual:,.0f}', f'{total_forecast:,.0f}'],
        textposition='outside',
        textfont=dict(size=14, color='white')
    ))

    layout = _base_layout(f'{title}  ({growth:+.1f}%)', height)
    fig.update_layout(**layout, showlegend=False)
    fig.update_yaxes(showgrid=True, gridcolor=COLORS['grid'], title_text='Units')
    return fig


def create_monthly_sales_bar(
    monthly: pd.DataFrame,
    title: str = 'Monthly Sales: Actual vs. Forecasted',
    height: int = 420
) -> go.Figure:
    """Grouped bars of mean units sold per month and the +5% projection."""
    if monthly.empty:
        return _empty_figure('No valid monthly sales data available', height)

    fig = go.Figure()
    fig.add_trace(go.Bar(x=monthly[MONTH], y=monthly['actual'],
                         name='Actual', marker_color=COLORS['actual']))
    fig.add_trace(go.Bar(x=monthly[MONTH], y=monthly['forecast'],
                         name='Forecast', marker_color=COLORS['forecast']))

    layout = _base_layout(title, height)
    layout.update(barmode='group',
                  legend=dict(orientation='h', y=1.12, x=0.5, xanchor='center'))
    fig.update_layout(**layout)
    fig.update_xaxes(title_text='Month', tickangle=-45)
    fig.update_yaxes(showgrid=True, gridcolor=COLORS['grid'],
                     title_text='Average Units Sold')
    return fig


def create_turnover_line(
    turnover: pd.DataFrame,
    title: str = 'Inventory Turnover Rate - Monthly Progression',
    height: int = 440
) -> go.Figure:
    """Monthly turnover with target and baseline reference lines."""
    if turnover.empty:
        return _empty_figure('No valid turnover data available', height)

    target = TARGETS['inventory_turnover']
    baseline = TARGETS['baseline_turnover']

    fig = go.Figure(go.Scatter(
        x=turnover[MONTH], y=turnover['turnover'],
        mode='lines+markers', name='Turnover',
        line=dict(color=COLORS['bar'], width=3),
        marker=dict(size=10, color='#4c51bf')
    ))
    fig.add_hline(y=target, line_dash='dash', line_color=COLORS['success'],
                  annotation_text=f'Target: {target:.2f}',
                  annotation_position='top right')
    fig.add_hline(y=baseline, line_dash='dash', line_color=COLORS['danger'],
                  annotation_text=f'Baseline: {baseline:.2f}',
                  annotation_position='bottom right')

    layout = _base_layout(title, height)
    fig.update_layout(**layout, showlegend=False)
    fig.update_xaxes(title_text='Month', tickangle=-45)
    fig.update_yaxes(
        range=[0, max(float(turnover['turnover'].max()), 5) * 1.15],
        showgrid=True, gridcolor=COLORS['grid'],
        title_text='Turnover Ratio (Units Sold / Avg Inventory)'
    )
    return fig


def create_holding_cost_bar(
    per_item: pd.DataFrame,
    title: str = 'Top 10 Items by Simulated Holding Cost',
    height: int = 460
) -> go.Figure:
    """Horizontal bars of mean simulated holding cost per item."""
    if per_item.empty:
        return _empty_figure('No simulated rows', height)

    df = per_item.sort_values('avg_holding_cost', ascending=True)
    fig = go.Figure(go.Bar(
        y=df[ITEM].astype(str), x=df['avg_holding_cost'],
        orientation='h',
        marker=dict(color=COLORS['bar'], line=dict(color='white', width=1)),
        text=df['avg_holding_cost'].apply(lambda x: f'₱{x:,.2f}'),
        textposition='outside'
    ))

    layout = _base_layout(title, height)
    layout['margin'] = dict(l=160, r=60, t=70, b=40)
    fig.update_layout(**layout, showlegend=False)
    fig.update_xaxes(showgrid=True, gridcolor=COLORS['grid'],
                     title_text='Average Holding Cost (PHP)')
    return fig


def create_interval_chart(
    label: str,
    point: float,
    interval: Tuple[float, float],
    target: Optional[float] = None,
    height: int = 300
) -> go.Figure:
    """Point estimate with its 95% CI as an error bar."""
    low, high = interval
    if not all(math.isfinite(v) for v in (point, low, high)):
        return _empty_figure(f'{label}: interval unavailable', height)

    fig = go.Figure(go.Scatter(
        x=[point], y=[label], mode='markers',
        marker=dict(size=14, color=COLORS['primary']),
        error_x=dict(type='data', symmetric=False,
                     array=[high - point], arrayminus=[point - low],
                     color=COLORS['text_muted'], thickness=2, width=8)
    ))
    if target is not None:
        fig.add_vline(x=target, line_dash='dot', line_color=COLORS['success'])

    layout = _base_layout(f'{label}: 95% CI [{low:,.2f}, {high:,.2f}]', height)
    fig.update_layout(**layout, showlegend=False)
    fig.update_xaxes(showgrid=True, gridcolor=COLORS['grid'])
    return fig


def create_monthly_trend_line(
    monthly: pd.DataFrame,
    title: str = 'Monthly Sales Trend',
    height: int = 420
) -> go.Figure:
    """Total units sold per month with a dashed linear trend."""
    if monthly.empty:
        return _empty_figure('No valid monthly sales data available', height)

    fig = go.Figure(go.Scatter(
        x=monthly[MONTH], y=monthly['total_sold'],
        mode='lines+markers', name='Units Sold',
        line=dict(color=COLORS['actual'], width=3),
        marker=dict(size=10, color='#1e40af')
    ))
    if monthly['trend'].notna().any():
        fig.add_trace(go.Scatter(
            x=monthly[MONTH], y=monthly['trend'],
            mode='lines', name='Linear Trend',
            line=dict(color=COLORS['success'], width=2, dash='dash')
        ))

    layout = _base_layout(title, height)
    layout.update(legend=dict(orientation='h', y=1.12, x=0.5, xanchor='center'))
    fig.update_layout(**layout)
    fig.update_yaxes(showgrid=True, gridcolor=COLORS['grid'],
                     title_text='Units Sold', tickformat=',')
    return fig


def create_financial_impact_bar(
    impact: pd.DataFrame,
    title: str = 'Annual Financial Impact with 95% Confidence Intervals',
    height: int = 480
) -> go.Figure:
    """Baseline cost, target cost and savings bars with CI error bars."""
    bar_colors = [COLORS['danger'], COLORS['success'], COLORS['actual']]
    low = impact['CI_Low'].fillna(impact['Value'])
    high = impact['CI_High'].fillna(impact['Value'])

    fig = go.Figure(go.Bar(
        x=impact['Metric'], y=impact['Value'],
        marker=dict(color=bar_colors[:len(impact)],
                    line=dict(color='white', width=1)),
        error_y=dict(type='data', symmetric=False,
                     array=high - impact['Value'],
                     arrayminus=impact['Value'] - low,
                     color=COLORS['text'], thickness=2, width=10),
        text=[f'₱{v:,.0f}' for v in impact['Value']],
        textposition='inside'
    ))

    layout = _base_layout(title, height)
    fig.update_layout(**layout, showlegend=False)
    fig.update_yaxes(showgrid=True, gridcolor=COLORS['grid'],
                     title_text='Annual Holding Cost (PHP)', tickprefix='₱',
                     tickformat=',')
    return fig

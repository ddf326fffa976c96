# src/retailpulse/dashboard/components/metrics.py

"""KPI metric card components."""

import streamlit as st
from typing import Optional, List, Dict

VALUE_BOX_COLORS = {
    'green': '#10b981',
    'yellow': '#f59e0b',
    'red': '#ef4444',
    'purple': '#7c3aed',
}


def render_kpi_row(metrics: List[Dict]):
    """
    Render a row of KPI cards.

    Args:
        metrics: List of dicts with keys: title, value, delta, icon, help
    """
    if not metrics:
        return

    cols = st.columns(len(metrics))
    for col, m in zip(cols, metrics):
        with col:
            st.metric(
                label=f"{m.get('icon', '📊')} {m['title']}",
                value=m['value'],
                delta=m.get('delta', None),
                delta_color=m.get('delta_color', 'normal'),
                help=m.get('help', None)
            )


def render_value_box(
    title: str,
    value: str,
    color: str = 'purple',
    icon: str = "📊",
    subtitle: Optional[str] = None
):
    """
    Render a coloured value box (green / yellow / red / purple border).

    Args:
        title: Caption under the value
        value: Main value to display
        color: Band name from status colouring
        icon: Emoji icon
        subtitle: Optional subtitle text
    """
    accent = VALUE_BOX_COLORS.get(color, VALUE_BOX_COLORS['purple'])
    subtitle_html = (
        f'<p style="color: #9ca3af; font-size: 0.85rem; margin: 0;">{subtitle}</p>'
        if subtitle else ''
    )

    card_html = f"""
    <div style="
        background: linear-gradient(135deg, #1a1a2e 0%, #16213e 100%);
        border-radius: 16px;
        padding: 18px;
        border-left: 6px solid {accent};
        margin-bottom: 16px;
    ">
        <div style="display: flex; align-items: center; gap: 10px;">
            <span style="font-size: 1.8rem;">{icon}</span>
            <span style="font-size: 1.7rem; font-weight: 700; color: {accent};">{value}</span>
        </div>
        <div style="color: #e6edf3; font-size: 0.9rem; margin-top: 6px;">{title}</div>
        {subtitle_html}
    </div>
    """

    st.markdown(card_html, unsafe_allow_html=True)

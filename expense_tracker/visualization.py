"""Plotly visualisation helpers for the expense tracker.

Functions accept the data objects returned by :mod:`aggregator` and
produce interactive Plotly figures that Streamlit renders via
``st.plotly_chart``.
"""

from __future__ import annotations

from typing import List, Optional

import pandas as pd
import plotly.graph_objects as go

from .config import CURRENCY_SYMBOL

# One colour per category, in category order
CATEGORY_COLORS: List[str] = [
    'rgba(255, 99, 132, {a})',
    'rgba(54, 162, 235, {a})',
    'rgba(255, 206, 86, {a})',
    'rgba(75, 192, 192, {a})',
    'rgba(153, 102, 255, {a})',
    'rgba(255, 159, 64, {a})',
    'rgba(199, 199, 199, {a})',
    'rgba(83, 102, 255, {a})',
    'rgba(40, 102, 255, {a})',
    'rgba(255, 102, 102, {a})',
    'rgba(102, 255, 102, {a})',
    'rgba(255, 102, 255, {a})',
    'rgba(102, 255, 255, {a})',
    'rgba(255, 255, 102, {a})',
    'rgba(102, 102, 255, {a})',
    'rgba(255, 102, 102, {a})',
    'rgba(102, 255, 102, {a})',
    'rgba(255, 102, 255, {a})',
]


def _palette(count: int, alpha: float) -> List[str]:
    return [CATEGORY_COLORS[i % len(CATEGORY_COLORS)].format(a=alpha) for i in range(count)]


def create_monthly_category_chart(totals: pd.Series, title: Optional[str] = None) -> go.Figure:
    """Bar chart of this month's spending per category.

    Parameters
    ----------
    totals : pandas.Series
        Series indexed by category (in display order) with summed amounts,
        as returned by :func:`aggregator.monthly_category_totals`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Bar chart with one bar per category, including empty ones.
    """
    if totals.empty:
        fig = go.Figure()
        fig.update_layout(title="No data to display")
        return fig
    categories = [str(category) for category in totals.index]
    fig = go.Figure(
        go.Bar(
            x=categories,
            y=totals.values,
            name='Monthly Expenses by Category',
            marker=dict(
                color=_palette(len(categories), 0.6),
                line=dict(color=_palette(len(categories), 1.0), width=1),
            ),
        )
    )
    fig.update_layout(
        title=title or "Monthly Expenses by Category",
        xaxis_title="Category",
        yaxis_title="Amount",
        height=400,
        showlegend=True,
        legend=dict(orientation='h', yanchor='bottom', y=1.02),
    )
    fig.update_yaxes(rangemode='tozero', tickprefix=CURRENCY_SYMBOL)
    return fig

"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st


DEFAULT_TEMPLATE = "plotly_white"
DEFAULT_COLOR_SEQUENCE = [
    "#16a34a",  # green for completed
    "#2563eb",  # blue for ongoing
    "#dc2626",  # red for abandoned
    "#f59e0b",  # amber for yet to commence
    "#7c3aed",
    "#0891b2",
]
STATUS_COLORS = {
    "Completed": "#16a34a",
    "Ongoing": "#2563eb",
    "Abandoned": "#dc2626",
    "Yet to commence": "#f59e0b",
    "Unknown": "#9ca3af",
}


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_tickformat: Optional[str] = None,
    legend_title: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        colorway=DEFAULT_COLOR_SEQUENCE,
        title=title,
        legend_title=legend_title,
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    if yaxis_tickformat:
        fig.update_yaxes(tickformat=yaxis_tickformat)
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def numeric_frame(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Copy of df with the given Decimal/object columns cast to float for plotting."""
    working = df.copy()
    for column in columns:
        if column in working.columns:
            working[column] = pd.to_numeric(working[column].map(lambda v: None if v is None else float(v)))
    return working


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    barmode: str = "group",
    orientation: str = "v",
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_tickformat: Optional[str] = None,
    category_orders: Optional[Dict[str, List[str]]] = None,
    color_map: Optional[Dict[str, str]] = None,
    text_auto: bool = False,
) -> go.Figure:
    fig = px.bar(
        df,
        x=x,
        y=y,
        color=color,
        barmode=barmode,
        orientation=orientation,
        category_orders=category_orders,
        color_discrete_map=color_map,
        text_auto=text_auto,
    )
    fig = _configure_layout(fig, title, yaxis_title, yaxis_tickformat)
    if text_auto:
        fig.update_traces(textposition="outside", cliponaxis=False)
    return fig


def donut_chart(
    df: pd.DataFrame,
    names: str,
    values: str,
    title: Optional[str] = None,
    color_map: Optional[Dict[str, str]] = None,
) -> go.Figure:
    fig = px.pie(
        df,
        names=names,
        values=values,
        hole=0.45,
        color=names,
        color_discrete_map=color_map,
    )
    fig = _configure_layout(fig, title)
    fig.update_traces(textinfo="percent+label")
    return fig


def gauge_chart(value: float, title: str) -> go.Figure:
    """0-100 gauge for percentage indicators."""
    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=value,
            number={"suffix": "%"},
            gauge={"axis": {"range": [0, 100]}, "bar": {"color": DEFAULT_COLOR_SEQUENCE[1]}},
            title={"text": title},
        )
    )
    fig.update_layout(template=DEFAULT_TEMPLATE, margin=dict(l=20, r=20, t=60, b=20), height=240)
    return fig

"""
Reusable helpers for rendering data tables with consistent configuration.
"""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd
import streamlit as st

from nedc_dashboard.data.table_view import render_value
from nedc_dashboard.ui.components.formatting import format_naira, format_number, format_percent


def display_frame(df: pd.DataFrame, column_config: Optional[Dict[str, Dict[str, str]]] = None) -> pd.DataFrame:
    """Formatted copy of df: configured columns get naira/percent/number text, the rest render as plain text."""
    formatted_df = df.copy()
    column_config = column_config or {}
    for column in formatted_df.columns:
        config = column_config.get(column, {})
        fmt_type = config.get("type")
        decimals = int(config.get("decimals", 0))
        if fmt_type == "naira":
            compact = config.get("compact", "true") == "true"
            formatted_df[column] = formatted_df[column].map(
                lambda v: format_naira(v, decimals=decimals, compact=compact)
            )
        elif fmt_type == "percent":
            formatted_df[column] = formatted_df[column].map(lambda v: format_percent(v, decimals=decimals))
        elif fmt_type == "number":
            formatted_df[column] = formatted_df[column].map(lambda v: format_number(v, decimals=decimals))
        elif formatted_df[column].dtype == object:
            formatted_df[column] = formatted_df[column].map(lambda v: render_value(v) or "")
    return formatted_df


def export_csv(df: pd.DataFrame) -> bytes:
    return display_frame(df).to_csv(index=False).encode("utf-8")


def render_table(
    df: pd.DataFrame,
    column_config: Optional[Dict[str, Dict[str, str]]] = None,
    labels: Optional[Dict[str, str]] = None,
    height: int = 400,
    export_file_name: Optional[str] = "export.csv",
    key: Optional[str] = None,
) -> None:
    if df.empty:
        st.info("No data to display.")
        return

    formatted_df = display_frame(df, column_config)
    if labels:
        formatted_df = formatted_df.rename(columns=labels)

    st.dataframe(
        formatted_df,
        use_container_width=True,
        height=height,
        hide_index=True,
    )

    if export_file_name:
        st.download_button(
            "Download CSV",
            data=export_csv(df),
            file_name=export_file_name,
            mime="text/csv",
            key=key,
        )

from __future__ import annotations

from typing import List

import pandas as pd
import streamlit as st

from nedc_dashboard.data.aggregation import COMPLETED_CATEGORY
from nedc_dashboard.data.constants import STATUS_ABANDONED, STATUS_ONGOING
from nedc_dashboard.ui.components.charts import (
    STATUS_COLORS,
    bar_chart,
    donut_chart,
    numeric_frame,
    render_plotly,
)
from nedc_dashboard.ui.components.kpi import KpiCard, render_kpi_cards
from nedc_dashboard.ui.pages.context import PageContext


def _budget_by_status(context: PageContext) -> pd.DataFrame:
    order = [COMPLETED_CATEGORY, STATUS_ONGOING, STATUS_ABANDONED]
    rows = [
        {"Status": status, "Budget": float(context.stats.budget_by_status.get(status, 0))}
        for status in order
    ]
    return pd.DataFrame(rows)


def render(df: pd.DataFrame, context: PageContext) -> None:
    st.subheader("Overview")
    if df.empty:
        st.info("No projects match the current filter selection.")
        return

    stats = context.stats
    cards: List[KpiCard] = [
        KpiCard(label="Total Projects", value=stats.total),
        KpiCard(
            label="Completed",
            value=stats.completed,
            help_text=f"{stats.completion_rate}% completion rate",
        ),
        KpiCard(label="Ongoing", value=stats.ongoing),
        KpiCard(label="Abandoned", value=stats.abandoned),
        KpiCard(label="Total Budget", value=stats.total_contract, kind="naira"),
        KpiCard(
            label="Amount Disbursed",
            value=stats.total_disbursed,
            kind="naira",
            help_text=f"{stats.disbursement_rate}% of total budget",
        ),
    ]
    render_kpi_cards(cards, columns=3)

    col_status, col_state = st.columns(2)
    with col_status:
        status_df = stats.by_status.rename(columns={"status": "Status", "count": "Projects"})
        render_plotly(
            donut_chart(status_df, names="Status", values="Projects", title="Projects by Status", color_map=STATUS_COLORS)
        )
    with col_state:
        state_df = stats.by_state.rename(columns={"state": "State", "count": "Projects"})
        render_plotly(bar_chart(state_df, x="State", y="Projects", title="Projects by State", text_auto=True))

    st.markdown("### Budget by Status")
    budget_df = numeric_frame(_budget_by_status(context), ["Budget"])
    render_plotly(
        bar_chart(
            budget_df,
            x="Status",
            y="Budget",
            color="Status",
            color_map=STATUS_COLORS,
            yaxis_title="Contract amount (₦)",
        )
    )

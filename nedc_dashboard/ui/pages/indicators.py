from __future__ import annotations

import pandas as pd
import streamlit as st

from nedc_dashboard.data.aggregation import TIMELY_COMPLETION_MONTHS
from nedc_dashboard.ui.components.charts import gauge_chart, render_plotly
from nedc_dashboard.ui.components.kpi import KpiCard, render_kpi_cards
from nedc_dashboard.ui.pages.context import PageContext


def render(df: pd.DataFrame, context: PageContext) -> None:
    st.subheader("Key Performance Indicators")
    if df.empty:
        st.info("No projects match the current filter selection.")
        return

    indicators = context.stats.indicators
    gauges = [
        (indicators.completion_rate, "Completion Rate"),
        (indicators.budget_utilisation, "Budget Utilisation"),
        (indicators.timely_completion_rate, "Timely Completion"),
    ]
    for col, (value, title) in zip(st.columns(len(gauges)), gauges):
        with col:
            render_plotly(gauge_chart(value, title))

    render_kpi_cards(
        [
            KpiCard(label="States Covered", value=indicators.states_covered),
            KpiCard(label="LGAs Covered", value=indicators.lgas_covered),
            KpiCard(label="Average Budget per Project", value=context.stats.average_budget, kind="naira"),
        ],
        columns=3,
    )

    st.markdown("#### Definitions")
    st.write(
        f"""
        - **Completion Rate**: completed projects (handed over or not) as a share of all projects.
        - **Budget Utilisation**: amount disbursed as a share of total contract amount.
        - **Timely Completion**: completed projects finished within {TIMELY_COMPLETION_MONTHS} months of award,
          as a share of completed projects.
        - **Coverage**: distinct states and LGAs with at least one project.
        """
    )

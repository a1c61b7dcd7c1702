from __future__ import annotations

import pandas as pd
import streamlit as st

from nedc_dashboard.data.filters import available_lgas
from nedc_dashboard.ui.components.charts import bar_chart, render_plotly
from nedc_dashboard.ui.components.tables import render_table
from nedc_dashboard.ui.pages.context import PageContext

LGA_LABELS = {
    "state": "State",
    "lga": "LGA",
    "count": "Projects",
    "contract_total": "Budget",
    "completed": "Completed",
    "completion_rate": "Completion %",
}


def render(df: pd.DataFrame, context: PageContext) -> None:
    st.subheader("Geographic Distribution")
    if df.empty:
        st.info("No projects match the current filter selection.")
        return

    stats = context.stats
    state_df = stats.by_state.rename(columns={"state": "State", "completed": "Completed", "ongoing": "Ongoing"})
    state_long = state_df.melt(id_vars="State", value_vars=["Completed", "Ongoing"], var_name="Status", value_name="Projects")
    render_plotly(
        bar_chart(state_long, x="State", y="Projects", color="Status", barmode="stack", title="Completed and Ongoing by State")
    )

    states = stats.by_state["state"].tolist()
    selected = st.selectbox("State", options=["All"] + states, key="nedc_geo_state")
    lga_df = stats.by_lga if selected == "All" else stats.by_lga[stats.by_lga["state"] == selected]

    if selected != "All":
        known = available_lgas([selected])
        covered = set(lga_df["lga"])
        st.caption(f"{len(covered & set(known))} of {len(known)} LGAs in {selected} have projects.")

    top = lga_df.head(15).rename(columns={"lga": "LGA", "count": "Projects"})
    render_plotly(bar_chart(top, x="Projects", y="LGA", orientation="h", title="Top LGAs by Project Count", text_auto=True))
    render_table(
        lga_df,
        column_config={"contract_total": {"type": "naira"}, "completion_rate": {"type": "percent"}},
        labels=LGA_LABELS,
        export_file_name="nedc_lga_summary.csv",
        key="nedc_lga_csv",
    )

from __future__ import annotations

import pandas as pd
import streamlit as st

from nedc_dashboard.data.constants import SECTORS_BY_PILLAR
from nedc_dashboard.data.records import clean_text, coerce_pillars
from nedc_dashboard.ui.components.charts import bar_chart, numeric_frame, render_plotly
from nedc_dashboard.ui.components.tables import render_table
from nedc_dashboard.ui.pages.context import PageContext

STATE_LABELS = {
    "state": "State",
    "count": "Projects",
    "completed": "Completed",
    "ongoing": "Ongoing",
    "contract_total": "Budget",
    "disbursed_total": "Disbursed",
    "completion_rate": "Completion %",
    "utilisation_rate": "Utilisation %",
    "lga_count": "LGAs",
}
PILLAR_LABELS = {
    "pillar": "Pillar",
    "count": "Projects",
    "budget": "Budget",
    "disbursed": "Disbursed",
    "completed": "Completed",
    "completion_rate": "Completion %",
    "average_budget": "Average Budget",
}
AMOUNT_FORMAT = {"type": "naira"}
RATE_FORMAT = {"type": "percent"}


def sector_breakdown(df: pd.DataFrame, pillar: str) -> pd.DataFrame:
    """Project counts per sector within a pillar; known sectors come first, zero-filled."""
    if df.empty or "pillars" not in df.columns:
        sectors = pd.Series(dtype=object)
    else:
        in_pillar = df[df["pillars"].map(lambda v: pillar in coerce_pillars(v)).astype(bool)]
        sectors = in_pillar.get("sector", pd.Series(dtype=object)).map(lambda v: clean_text(v) or "Unspecified")
    counts = sectors.value_counts()
    known = SECTORS_BY_PILLAR.get(pillar, [])
    order = known + sorted(s for s in counts.index if s not in known)
    return pd.DataFrame({"Sector": order, "Projects": [int(counts.get(s, 0)) for s in order]})


def render(df: pd.DataFrame, context: PageContext) -> None:
    st.subheader("Analytics")
    if df.empty:
        st.info("No projects match the current filter selection.")
        return

    stats = context.stats

    st.markdown("### States")
    render_table(
        stats.by_state,
        column_config={
            "contract_total": AMOUNT_FORMAT,
            "disbursed_total": AMOUNT_FORMAT,
            "completion_rate": RATE_FORMAT,
            "utilisation_rate": RATE_FORMAT,
        },
        labels=STATE_LABELS,
        height=280,
        export_file_name="nedc_state_summary.csv",
        key="nedc_state_csv",
    )
    state_chart = numeric_frame(stats.by_state, ["contract_total", "disbursed_total"]).melt(
        id_vars="state",
        value_vars=["contract_total", "disbursed_total"],
        var_name="Measure",
        value_name="Amount",
    )
    state_chart["Measure"] = state_chart["Measure"].map({"contract_total": "Budget", "disbursed_total": "Disbursed"})
    render_plotly(
        bar_chart(state_chart, x="state", y="Amount", color="Measure", title="Budget vs Disbursed by State", yaxis_title="₦")
    )

    st.markdown("### Development Pillars")
    st.caption("Projects tagged with several pillars count towards each of them.")
    render_table(
        stats.by_pillar,
        column_config={
            "budget": AMOUNT_FORMAT,
            "disbursed": AMOUNT_FORMAT,
            "average_budget": AMOUNT_FORMAT,
            "completion_rate": RATE_FORMAT,
        },
        labels=PILLAR_LABELS,
        height=320,
        export_file_name="nedc_pillar_summary.csv",
        key="nedc_pillar_csv",
    )
    pillar_chart = stats.by_pillar.rename(columns={"pillar": "Pillar", "count": "Projects"})
    render_plotly(
        bar_chart(pillar_chart, x="Projects", y="Pillar", orientation="h", title="Projects by Pillar", text_auto=True)
    )

    if not stats.by_pillar.empty:
        pillar = st.selectbox("Sector breakdown for pillar", options=stats.by_pillar["pillar"].tolist(), key="nedc_sector_pillar")
        render_table(sector_breakdown(df, pillar), height=240, export_file_name=None)

from __future__ import annotations

import pandas as pd
import streamlit as st

from nedc_dashboard.data.records import EXPECTED_FIELDS, is_missing
from nedc_dashboard.ui.components.kpi import KpiCard, render_kpi_cards
from nedc_dashboard.ui.pages.context import PageContext


def _percentage_missing(series: pd.Series) -> float:
    total = len(series)
    if total == 0:
        return 0.0
    return float(series.map(is_missing).sum() / total * 100)


def _compute_quality_metrics(df: pd.DataFrame) -> list[KpiCard]:
    metrics = []
    for name in EXPECTED_FIELDS + ("contract_amount", "date_of_award"):
        missing = _percentage_missing(df.get(name, pd.Series(dtype=object)))
        metrics.append(
            KpiCard(
                label=f"Missing {name.replace('_', ' ').title()}",
                value=missing,
                value_display=f"{missing:.1f}%",
            )
        )
    return metrics


def render(df: pd.DataFrame, context: PageContext) -> None:
    st.subheader("Data Quality")
    raw_df = context.raw_df
    if raw_df.empty:
        st.info("No diagnostics available yet.")
        return

    render_kpi_cards(_compute_quality_metrics(raw_df), columns=3)

    st.markdown("#### Diagnostics Summary")
    diagnostics = raw_df.attrs.get("diagnostics", {})
    if diagnostics:
        issues = diagnostics.get("issues", {})
        for key, value in diagnostics.items():
            if key == "issues":
                continue
            st.write(f"- **{key.replace('_', ' ').title()}**: {value}")
        if diagnostics.get("distinct_ids", 0) < diagnostics.get("row_count", 0):
            st.warning("Some records share an id; they are all kept and shown.")
        if issues:
            st.markdown("#### Coercions at Ingestion")
            st.dataframe(
                pd.DataFrame({"Issue": list(issues.keys()), "Rows": list(issues.values())}),
                use_container_width=True,
                hide_index=True,
            )
    else:
        st.info("No diagnostics metadata available.")

    st.markdown("#### Definitions")
    st.write(
        """
        - **Completed** covers both "Completed (Handed over)" and "Completed (Not handed over)".
        - Amounts are summed exactly; missing amounts count as zero.
        - Unparseable amounts or dates are shown as blank and counted above.
        - Rates are whole percentages rounded half-up and are 0 when the base is 0.
        """
    )

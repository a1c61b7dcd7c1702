from __future__ import annotations

from urllib.parse import quote

import pandas as pd
import streamlit as st

from nedc_dashboard.data.filters import describe_filters
from nedc_dashboard.data.table_view import SortState, search_projects, sort_projects, view_projects
from nedc_dashboard.ui.components.tables import display_frame, export_csv
from nedc_dashboard.ui.pages.context import PageContext

SORT_STATE_KEY = "nedc_sort"
PAGE_KEY = "nedc_page"
VIEW_SIGNATURE_KEY = "nedc_view_signature"

SORTABLE_COLUMNS = {
    "sn": "S/N",
    "description": "Description",
    "state": "State",
    "lga": "LGA",
    "status": "Status",
    "contract_amount": "Contract Amount",
    "amount_disbursed": "Disbursed",
    "date_of_award": "Date of Award",
}

DISPLAY_COLUMNS = {
    "sn": "S/N",
    "pillars": "Pillars",
    "description": "Description",
    "state": "State",
    "lga": "LGA",
    "community": "Community",
    "status": "Status",
    "contract_amount": "Contract Amount",
    "amount_disbursed": "Disbursed",
    "date_of_award": "Date of Award",
    "contractor": "Contractor",
    "remarks": "Remarks",
}

COLUMN_FORMATS = {
    "contract_amount": {"type": "naira", "compact": "false"},
    "amount_disbursed": {"type": "naira", "compact": "false"},
}


def _sort_controls(sort: SortState) -> SortState:
    st.caption("Sort by (click again to reverse)")
    cols = st.columns(len(SORTABLE_COLUMNS))
    for col, (key, label) in zip(cols, SORTABLE_COLUMNS.items()):
        arrow = ""
        if key == sort.key:
            arrow = " ▼" if sort.descending else " ▲"
        if col.button(f"{label}{arrow}", key=f"nedc_sort_{key}", use_container_width=True):
            sort = sort.toggle(key)
            st.session_state[SORT_STATE_KEY] = sort
    return sort


def _mailto_link(context: PageContext, count: int) -> str:
    subject = quote("NEDC Projects Report")
    body = quote(
        "Projects report from the NEDC M&E dashboard.\n\n"
        f"Applied filters: {describe_filters(context.filters)}\n"
        f"Projects matching: {count}\n"
    )
    return f"mailto:?subject={subject}&body={body}"


def render(df: pd.DataFrame, context: PageContext) -> None:
    st.subheader("Projects")

    query = st.text_input("Search projects", key="nedc_search", placeholder="Search any field")
    sort = _sort_controls(st.session_state.get(SORT_STATE_KEY, SortState()))

    signature = (query.strip().lower(), context.filters.to_json())
    if st.session_state.get(VIEW_SIGNATURE_KEY) != signature:
        st.session_state[VIEW_SIGNATURE_KEY] = signature
        st.session_state[PAGE_KEY] = 1

    view = view_projects(
        df,
        query=query,
        sort=sort,
        page=st.session_state.get(PAGE_KEY, 1),
        page_size=context.settings.page_size,
    )
    st.session_state[PAGE_KEY] = view.page

    if view.total_matching == 0:
        st.info("No projects match the current search and filters.")
    else:
        columns = [c for c in DISPLAY_COLUMNS if c in view.items.columns]
        table = display_frame(view.items[columns], COLUMN_FORMATS).rename(columns=DISPLAY_COLUMNS)
        st.dataframe(table, use_container_width=True, hide_index=True, height=min(740, 38 + 35 * len(table)))

    col_prev, col_caption, col_next = st.columns([1, 4, 1])
    with col_prev:
        if st.button("Previous", key="nedc_page_prev", disabled=view.page <= 1):
            st.session_state[PAGE_KEY] = view.page - 1
            st.rerun()
    with col_caption:
        pages = f" (page {view.page} of {view.total_pages})" if view.total_pages else ""
        st.caption(view.caption() + pages)
    with col_next:
        if st.button("Next", key="nedc_page_next", disabled=view.page >= view.total_pages):
            st.session_state[PAGE_KEY] = view.page + 1
            st.rerun()

    matched = sort_projects(search_projects(df, query), sort)
    col_csv, col_mail = st.columns(2)
    with col_csv:
        st.download_button(
            "Download CSV",
            data=export_csv(matched),
            file_name="nedc_projects.csv",
            mime="text/csv",
            disabled=matched.empty,
        )
    with col_mail:
        st.link_button("Email report", _mailto_link(context, len(matched)))

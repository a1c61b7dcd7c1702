"""
Layout helpers for the Streamlit application (page setup and sidebar filters).
"""

from __future__ import annotations

from typing import Iterable, List

import pandas as pd
import streamlit as st

from nedc_dashboard.data.constants import PILLARS, STATES, STATUS_OPTIONS
from nedc_dashboard.data.filters import FilterSpec, available_lgas, value_set

PILLAR_KEY = "nedc_pillars"
STATE_KEY = "nedc_states"
LGA_KEY = "nedc_lgas"
STATUS_KEY = "nedc_statuses"
PENDING_KEY = "nedc_filters_pending"
FILTER_KEYS = [PILLAR_KEY, STATE_KEY, LGA_KEY, STATUS_KEY]


def setup_page() -> None:
    """Set Streamlit page configuration and top-level styling."""
    st.set_page_config(
        page_title="NEDC M&E Dashboard",
        layout="wide",
        page_icon=":bar_chart:",
    )
    _inject_sidebar_primary_button_red()


def _options(reference: Iterable[str], df: pd.DataFrame, column: str) -> List[str]:
    """Reference values first, then any other value observed in the records."""
    options = list(reference)
    if column not in df.columns:
        return options
    extra = set()
    for value in df[column]:
        extra |= value_set(value)
    options.extend(sorted(v for v in extra if v not in options))
    return options


def request_filters(spec: FilterSpec) -> None:
    """Queue a filter set to be applied to the sidebar on the next rerun."""
    st.session_state[PENDING_KEY] = spec.to_dict()


def _apply_pending() -> None:
    if PENDING_KEY not in st.session_state:
        return
    spec = FilterSpec.from_dict(st.session_state.pop(PENDING_KEY))
    st.session_state[PILLAR_KEY] = list(spec.pillars)
    st.session_state[STATE_KEY] = list(spec.states)
    st.session_state[LGA_KEY] = list(spec.lgas)
    st.session_state[STATUS_KEY] = list(spec.statuses)


def _clear_state(keys: List[str]) -> None:
    for key in keys:
        st.session_state.pop(key, None)


def sidebar_filters_ui(df: pd.DataFrame) -> FilterSpec:
    """
    Render the sidebar filter controls and return the selected values.
    """
    _apply_pending()
    st.sidebar.header("Filters")

    pillar_options = _options(PILLARS, df, "pillars")
    state_options = _options(STATES, df, "state")
    status_options = _options(STATUS_OPTIONS, df, "status")
    # Widget state may hold values queued before the options were known
    for key, options in ((PILLAR_KEY, pillar_options), (STATE_KEY, state_options), (STATUS_KEY, status_options)):
        if key in st.session_state:
            st.session_state[key] = [v for v in st.session_state[key] if v in options]

    pillars = st.sidebar.multiselect("Pillars", options=pillar_options, key=PILLAR_KEY)
    states = st.sidebar.multiselect("States", options=state_options, key=STATE_KEY)

    lga_options = available_lgas(states)
    if LGA_KEY in st.session_state:
        held = FilterSpec(states=tuple(state_options), lgas=tuple(st.session_state[LGA_KEY]))
        st.session_state[LGA_KEY] = list(held.with_states(states).lgas)
    lgas = st.sidebar.multiselect(
        "LGAs",
        options=lga_options,
        key=LGA_KEY,
        disabled=not lga_options,
        help="Select one or more states to choose LGAs.",
    )
    statuses = st.sidebar.multiselect("Status", options=status_options, key=STATUS_KEY)

    if st.sidebar.button("Reset Filters", key="nedc_reset_filters", type="primary"):
        _clear_state(FILTER_KEYS + [PENDING_KEY])
        st.rerun()

    return FilterSpec(pillars=tuple(pillars), states=tuple(states), lgas=tuple(lgas), statuses=tuple(statuses))


def _inject_sidebar_primary_button_red() -> None:
    """Style PRIMARY buttons in the sidebar as red so reset actions stand out."""
    st.sidebar.markdown(
        """
        <style>
        div[data-testid="stSidebar"] button[kind="primary"],
        div[data-testid="stSidebar"] button[data-testid="baseButton-primary"] {
            background-color: #e53935 !important;
            border-color: #e53935 !important;
            color: #ffffff !important;
        }
        div[data-testid="stSidebar"] button[kind="primary"]:hover,
        div[data-testid="stSidebar"] button[data-testid="baseButton-primary"]:hover {
            background-color: #c62828 !important;
            border-color: #c62828 !important;
            color: #ffffff !important;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )

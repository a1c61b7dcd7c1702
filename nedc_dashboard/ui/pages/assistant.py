from __future__ import annotations

import pandas as pd
import streamlit as st

from nedc_dashboard.data.assistant import HELP_TEXT, QueryResult, route
from nedc_dashboard.data.filters import describe_filters
from nedc_dashboard.ui.layout import request_filters
from nedc_dashboard.ui.pages.context import PageContext

HISTORY_KEY = "nedc_chat_history"
SUGGESTIONS = [
    "Show me ongoing projects",
    "Projects in Borno State",
    "How many projects in total?",
    "What is the total budget?",
]


def _ask(question: str, df: pd.DataFrame) -> None:
    result = route(question, df)
    history = st.session_state.setdefault(HISTORY_KEY, [])
    history.append(("user", question, None))
    history.append(("assistant", result.summary, result))


def _render_message(index: int, role: str, text: str, result: QueryResult | None) -> None:
    with st.chat_message(role):
        st.markdown(text.replace("\n", "  \n"))
        if result is not None and result.directive is not None:
            st.caption(describe_filters(result.directive))
            if st.button("Apply filters", key=f"nedc_chat_apply_{index}"):
                request_filters(result.directive)
                st.rerun()


def render(df: pd.DataFrame, context: PageContext) -> None:
    st.subheader("Project Assistant")
    st.caption("Answers are computed over all projects; apply a suggested filter to explore the results.")

    history = st.session_state.setdefault(HISTORY_KEY, [("assistant", HELP_TEXT, None)])

    cols = st.columns(len(SUGGESTIONS))
    for col, suggestion in zip(cols, SUGGESTIONS):
        if col.button(suggestion, key=f"nedc_chat_suggest_{suggestion}", use_container_width=True):
            _ask(suggestion, context.raw_df)

    question = st.chat_input("Ask about projects, states, pillars or budgets")
    if question:
        _ask(question, context.raw_df)

    for index, (role, text, result) in enumerate(history):
        _render_message(index, role, text, result)

    if len(history) > 1 and st.button("Clear conversation", key="nedc_chat_clear"):
        st.session_state.pop(HISTORY_KEY, None)
        st.rerun()

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import streamlit as st

from nedc_dashboard.ui.components.formatting import format_naira, format_number, format_percent


@dataclass
class KpiCard:
    label: str
    value: Any = None
    value_display: Optional[str] = None
    kind: str = "number"  # number | naira | percent
    decimals: int = 0
    compact: bool = True
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    if card.kind == "naira":
        return format_naira(card.value, decimals=card.decimals, compact=card.compact)
    if card.kind == "percent":
        return format_percent(card.value, decimals=card.decimals)
    return format_number(card.value, decimals=card.decimals)


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 3) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        st.info("No KPIs available for the current filters.")
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=_format_value(card))
                if card.help_text:
                    st.caption(card.help_text)

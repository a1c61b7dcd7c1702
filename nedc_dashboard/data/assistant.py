"""
Keyword-routed assistant that maps a free-text question onto a canned filter.

Routing is an ordered table of intents evaluated top to bottom against the
lower-cased question; the first intent whose keywords appear wins and later
intents are never consulted, so "completed agriculture projects in Borno" is
answered as a completed-status question only. Every filtering intent builds
its directive from the values it actually matched, so applying the directive
with `apply_filters` reproduces the subset the summary counted.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

import pandas as pd
import structlog

from nedc_dashboard.data.aggregation import percent, summarize
from nedc_dashboard.data.constants import (
    STATES,
    STATUS_ABANDONED,
    STATUS_COMPLETED_HANDED_OVER,
    STATUS_COMPLETED_NOT_HANDED_OVER,
    STATUS_ONGOING,
)
from nedc_dashboard.data.filters import FilterSpec, value_set
from nedc_dashboard.data.records import is_completed

LOGGER = structlog.get_logger(__name__)

HELP_TEXT = (
    "I can help you with:\n"
    "• Project status (ongoing, completed, abandoned)\n"
    "• State-specific projects (Adamawa, Bauchi, Borno, etc.)\n"
    "• Pillar-based projects (agriculture, education, health)\n"
    "• Project statistics and budgets\n\n"
    'Try asking: "Show me ongoing projects" or "Projects in Borno State"'
)


@dataclass(frozen=True)
class QueryResult:
    summary: str
    directive: Optional[FilterSpec] = None
    intent: str = "help"
    match_count: Optional[int] = None


Handler = Callable[[pd.DataFrame], QueryResult]


@dataclass(frozen=True)
class Intent:
    name: str
    keywords: Tuple[str, ...]
    handler: Handler

    def matches(self, text: str) -> bool:
        # An intent without keywords is the catch-all.
        if not self.keywords:
            return True
        return any(keyword in text for keyword in self.keywords)


def _match_values(
    df: pd.DataFrame,
    column: str,
    predicate: Callable[[str], bool],
) -> Tuple[pd.DataFrame, List[str]]:
    """Rows with at least one value satisfying predicate, plus every such value seen."""
    if df.empty or column not in df.columns:
        return df.iloc[0:0], []
    observed: List[str] = []

    def _check(value) -> bool:
        hits = sorted(item for item in value_set(value) if predicate(item))
        for hit in hits:
            if hit not in observed:
                observed.append(hit)
        return bool(hits)

    mask = df[column].map(_check).astype(bool)
    return df[mask], sorted(observed)


def _merge(canonical: Sequence[str], observed: Sequence[str]) -> Tuple[str, ...]:
    return tuple(canonical) + tuple(value for value in observed if value not in canonical)


def _status_intent(
    name: str,
    keywords: Tuple[str, ...],
    canonical: Tuple[str, ...],
    predicate: Callable[[str], bool],
    sentence: str,
) -> Intent:
    def handle(df: pd.DataFrame) -> QueryResult:
        matched, observed = _match_values(df, "status", predicate)
        return QueryResult(
            summary=sentence.format(count=len(matched)),
            directive=FilterSpec(statuses=_merge(canonical, observed)),
            intent=name,
            match_count=len(matched),
        )

    return Intent(name, keywords, handle)


def _state_intent(state: str) -> Intent:
    key = state.lower()

    def handle(df: pd.DataFrame) -> QueryResult:
        matched, observed = _match_values(df, "state", lambda value: value.strip().lower() == key)
        return QueryResult(
            summary=(
                f"Found {len(matched)} projects in {state} State. These projects span "
                "across various LGAs and development pillars."
            ),
            directive=FilterSpec(states=_merge((state,), observed)),
            intent=f"state:{key}",
            match_count=len(matched),
        )

    return Intent(f"state:{key}", (key,), handle)


def _pillar_intent(
    name: str,
    keywords: Tuple[str, ...],
    pillar: str,
    fragment: str,
    sentence: str,
) -> Intent:
    def handle(df: pd.DataFrame) -> QueryResult:
        matched, observed = _match_values(df, "pillars", lambda value: fragment in value.lower())
        return QueryResult(
            summary=sentence.format(count=len(matched)),
            directive=FilterSpec(pillars=_merge((pillar,), observed)),
            intent=name,
            match_count=len(matched),
        )

    return Intent(name, keywords, handle)


def _aggregate(df: pd.DataFrame) -> QueryResult:
    stats = summarize(df)
    return QueryResult(
        summary=(
            "Here are the project statistics:\n"
            f"• Total Projects: {stats.total}\n"
            f"• Completed: {stats.completed}\n"
            f"• Ongoing: {stats.ongoing}\n"
            f"• Abandoned: {stats.abandoned}"
        ),
        intent="aggregate",
        match_count=stats.total,
    )


def _naira(amount) -> str:
    return f"₦{amount:,.0f}"


def _financial(df: pd.DataFrame) -> QueryResult:
    stats = summarize(df)
    return QueryResult(
        summary=(
            "Financial Overview:\n"
            f"• Total Budget: {_naira(stats.total_contract)}\n"
            f"• Amount Disbursed: {_naira(stats.total_disbursed)}\n"
            f"• Disbursement Rate: {percent(stats.total_disbursed, stats.total_contract)}%"
        ),
        intent="financial",
        match_count=stats.total,
    )


def _help(df: pd.DataFrame) -> QueryResult:
    return QueryResult(summary=HELP_TEXT)


INTENTS: Tuple[Intent, ...] = (
    _status_intent(
        "status:ongoing",
        ("ongoing", "in progress"),
        (STATUS_ONGOING,),
        lambda value: value == STATUS_ONGOING,
        "Found {count} ongoing projects. These projects are currently in progress across the North East region.",
    ),
    _status_intent(
        "status:completed",
        ("completed",),
        (STATUS_COMPLETED_HANDED_OVER, STATUS_COMPLETED_NOT_HANDED_OVER),
        is_completed,
        "Found {count} completed projects. These projects have been successfully finished.",
    ),
    _status_intent(
        "status:abandoned",
        ("abandoned",),
        (STATUS_ABANDONED,),
        lambda value: value == STATUS_ABANDONED,
        "Found {count} abandoned projects. These projects were discontinued for various reasons.",
    ),
    *(_state_intent(state) for state in STATES),
    _pillar_intent(
        "pillar:agriculture",
        ("agriculture", "farming"),
        "Leadership in Agriculture",
        "agricultur",
        "Found {count} agricultural development projects focused on improving farming and food security.",
    ),
    _pillar_intent(
        "pillar:education",
        ("education", "school"),
        "Educated Populace",
        "educat",
        "Found {count} educational projects aimed at improving learning infrastructure and outcomes.",
    ),
    _pillar_intent(
        "pillar:health",
        ("health", "medical"),
        "Healthy Citizens",
        "health",
        "Found {count} healthcare projects focused on improving medical services and health outcomes.",
    ),
    Intent("aggregate", ("total", "how many"), _aggregate),
    Intent("financial", ("budget", "cost", "amount"), _financial),
    Intent("help", (), _help),
)


def route(text: Optional[str], df: pd.DataFrame, intents: Sequence[Intent] = INTENTS) -> QueryResult:
    """Answer `text` with the first intent whose keywords it contains."""
    lowered = (text or "").lower()
    if not lowered.strip():
        return QueryResult(summary=HELP_TEXT)
    for intent in intents:
        if intent.matches(lowered):
            result = intent.handler(df)
            LOGGER.info("assistant_routed", intent=intent.name, match_count=result.match_count)
            return result
    return QueryResult(summary=HELP_TEXT)

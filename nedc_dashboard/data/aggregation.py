"""
Grouped counts, sums and rates over the project record frame.

Amounts are accumulated as `Decimal` so portfolio totals in the billions do
not drift; rates are whole percentages rounded half-up and are zero whenever
the denominator is zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable

import pandas as pd

from nedc_dashboard.data.constants import (
    STATUS_ABANDONED,
    STATUS_ONGOING,
    STATUS_YET_TO_COMMENCE,
)
from nedc_dashboard.data.records import clean_text, coerce_amount, coerce_pillars, is_completed

ZERO = Decimal(0)
UNKNOWN = "Unknown"
COMPLETED_CATEGORY = "Completed"
STATUS_CATEGORY_ORDER = [COMPLETED_CATEGORY, STATUS_ONGOING, STATUS_ABANDONED, STATUS_YET_TO_COMMENCE]
TIMELY_COMPLETION_MONTHS = 12

STATUS_COLUMNS = ["status", "count", "percent"]
STATE_COLUMNS = [
    "state",
    "count",
    "completed",
    "ongoing",
    "contract_total",
    "disbursed_total",
    "completion_rate",
    "utilisation_rate",
    "lga_count",
]
PILLAR_COLUMNS = [
    "pillar",
    "count",
    "budget",
    "disbursed",
    "completed",
    "completion_rate",
    "average_budget",
]
LGA_COLUMNS = ["state", "lga", "count", "contract_total", "completed", "completion_rate"]


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    amount = coerce_amount(value)
    return amount if amount is not None else ZERO


def exact_sum(values: Iterable[Any]) -> Decimal:
    """Sum amounts exactly; missing or unparseable entries count as zero."""
    total = ZERO
    for value in values:
        total += _to_decimal(value)
    return total


def percent(part: Any, whole: Any) -> int:
    """Whole-number percentage of part over whole, rounded half-up; 0 when whole is 0."""
    denominator = _to_decimal(whole)
    if denominator == 0:
        return 0
    ratio = _to_decimal(part) * 100 / denominator
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def average(total: Any, count: int) -> Decimal:
    if not count:
        return ZERO
    return (_to_decimal(total) / count).quantize(Decimal(1), rounding=ROUND_HALF_UP)


def status_category(status: Any) -> str:
    if is_completed(status):
        return COMPLETED_CATEGORY
    return clean_text(status) or UNKNOWN


def _column(df: pd.DataFrame, name: str) -> pd.Series:
    if name in df.columns:
        return df[name]
    return pd.Series([None] * len(df), index=df.index, dtype=object)


def _is_status(value: Any, status: str) -> bool:
    return clean_text(value) == status


@dataclass
class Indicators:
    completion_rate: int = 0
    budget_utilisation: int = 0
    timely_completion_rate: int = 0
    states_covered: int = 0
    lgas_covered: int = 0


@dataclass
class ProjectStats:
    total: int = 0
    completed: int = 0
    ongoing: int = 0
    abandoned: int = 0
    completion_rate: int = 0
    total_contract: Decimal = ZERO
    total_disbursed: Decimal = ZERO
    disbursement_rate: int = 0
    average_budget: Decimal = ZERO
    budget_by_status: Dict[str, Decimal] = field(default_factory=dict)
    by_status: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=STATUS_COLUMNS))
    by_state: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=STATE_COLUMNS))
    by_pillar: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=PILLAR_COLUMNS))
    by_lga: pd.DataFrame = field(default_factory=lambda: pd.DataFrame(columns=LGA_COLUMNS))
    indicators: Indicators = field(default_factory=Indicators)


def status_breakdown(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=STATUS_COLUMNS)
    total = len(df)
    counts = _column(df, "status").map(status_category).value_counts()
    known = [c for c in STATUS_CATEGORY_ORDER if c in counts.index]
    others = sorted(c for c in counts.index if c not in STATUS_CATEGORY_ORDER and c != UNKNOWN)
    ordered = known + others + ([UNKNOWN] if UNKNOWN in counts.index else [])
    rows = [
        {"status": category, "count": int(counts[category]), "percent": percent(int(counts[category]), total)}
        for category in ordered
    ]
    return pd.DataFrame(rows, columns=STATUS_COLUMNS)


def state_summary(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=STATE_COLUMNS)
    statuses = _column(df, "status")
    working = pd.DataFrame(
        {
            "state": _column(df, "state").map(lambda v: clean_text(v) or UNKNOWN),
            "lga": _column(df, "lga").map(clean_text),
            "completed": statuses.map(is_completed).astype(bool),
            "ongoing": statuses.map(lambda v: _is_status(v, STATUS_ONGOING)).astype(bool),
            "contract_amount": _column(df, "contract_amount"),
            "amount_disbursed": _column(df, "amount_disbursed"),
        },
        index=df.index,
    )
    grouped = (
        working.groupby("state", sort=True)
        .agg(
            count=("completed", "size"),
            completed=("completed", "sum"),
            ongoing=("ongoing", "sum"),
            contract_total=("contract_amount", exact_sum),
            disbursed_total=("amount_disbursed", exact_sum),
            lga_count=("lga", lambda s: s.dropna().nunique()),
        )
        .reset_index()
    )
    for column in ("count", "completed", "ongoing", "lga_count"):
        grouped[column] = grouped[column].astype(int)
    grouped["completion_rate"] = [percent(c, n) for c, n in zip(grouped["completed"], grouped["count"])]
    grouped["utilisation_rate"] = [
        percent(d, b) for d, b in zip(grouped["disbursed_total"], grouped["contract_total"])
    ]
    grouped = grouped.sort_values("count", ascending=False, kind="stable")
    return grouped[STATE_COLUMNS].reset_index(drop=True)


def pillar_summary(df: pd.DataFrame) -> pd.DataFrame:
    """
    One row per pillar. A project tagged with several pillars counts, with its
    full budget, towards each of them, so the rows do not add up to the
    portfolio total.
    """
    if df.empty:
        return pd.DataFrame(columns=PILLAR_COLUMNS)
    working = pd.DataFrame(
        {
            "pillar": _column(df, "pillars").map(coerce_pillars),
            "completed": _column(df, "status").map(is_completed).astype(bool),
            "contract_amount": _column(df, "contract_amount"),
            "amount_disbursed": _column(df, "amount_disbursed"),
        },
        index=df.index,
    )
    exploded = working.explode("pillar")
    exploded = exploded[exploded["pillar"].notna()]
    if exploded.empty:
        return pd.DataFrame(columns=PILLAR_COLUMNS)

    grouped = (
        exploded.groupby("pillar", sort=True)
        .agg(
            count=("completed", "size"),
            budget=("contract_amount", exact_sum),
            disbursed=("amount_disbursed", exact_sum),
            completed=("completed", "sum"),
        )
        .reset_index()
    )
    grouped["count"] = grouped["count"].astype(int)
    grouped["completed"] = grouped["completed"].astype(int)
    grouped["completion_rate"] = [percent(c, n) for c, n in zip(grouped["completed"], grouped["count"])]
    grouped["average_budget"] = [average(b, n) for b, n in zip(grouped["budget"], grouped["count"])]
    grouped = grouped.sort_values("count", ascending=False, kind="stable")
    return grouped[PILLAR_COLUMNS].reset_index(drop=True)


def lga_summary(df: pd.DataFrame) -> pd.DataFrame:
    if df.empty:
        return pd.DataFrame(columns=LGA_COLUMNS)
    working = pd.DataFrame(
        {
            "state": _column(df, "state").map(lambda v: clean_text(v) or UNKNOWN),
            "lga": _column(df, "lga").map(lambda v: clean_text(v) or UNKNOWN),
            "completed": _column(df, "status").map(is_completed).astype(bool),
            "contract_amount": _column(df, "contract_amount"),
        },
        index=df.index,
    )
    grouped = (
        working.groupby(["state", "lga"], sort=True)
        .agg(
            count=("completed", "size"),
            contract_total=("contract_amount", exact_sum),
            completed=("completed", "sum"),
        )
        .reset_index()
    )
    grouped["count"] = grouped["count"].astype(int)
    grouped["completed"] = grouped["completed"].astype(int)
    grouped["completion_rate"] = [percent(c, n) for c, n in zip(grouped["completed"], grouped["count"])]
    grouped = grouped.sort_values("count", ascending=False, kind="stable")
    return grouped[LGA_COLUMNS].reset_index(drop=True)


def _timely_completion_rate(df: pd.DataFrame) -> int:
    completed = df[_column(df, "status").map(is_completed).astype(bool)] if not df.empty else df
    if completed.empty:
        return 0
    timely = 0
    for award, finish in zip(_column(completed, "date_of_award"), _column(completed, "date_of_completion")):
        if award is None or finish is None or pd.isna(award) or pd.isna(finish):
            continue
        deadline = (pd.Timestamp(award) + pd.DateOffset(months=TIMELY_COMPLETION_MONTHS)).date()
        if pd.Timestamp(finish).date() <= deadline:
            timely += 1
    return percent(timely, len(completed))


def _distinct_count(series: pd.Series) -> int:
    return int(series.map(clean_text).dropna().nunique())


def summarize(df: pd.DataFrame) -> ProjectStats:
    total = len(df)
    if total == 0:
        return ProjectStats()

    statuses = _column(df, "status")
    completed_mask = statuses.map(is_completed).astype(bool)
    ongoing_mask = statuses.map(lambda v: _is_status(v, STATUS_ONGOING)).astype(bool)
    abandoned_mask = statuses.map(lambda v: _is_status(v, STATUS_ABANDONED)).astype(bool)
    contract = _column(df, "contract_amount")
    disbursed = _column(df, "amount_disbursed")

    completed = int(completed_mask.sum())
    total_contract = exact_sum(contract)
    total_disbursed = exact_sum(disbursed)

    indicators = Indicators(
        completion_rate=percent(completed, total),
        budget_utilisation=percent(total_disbursed, total_contract),
        timely_completion_rate=_timely_completion_rate(df),
        states_covered=_distinct_count(_column(df, "state")),
        lgas_covered=_distinct_count(_column(df, "lga")),
    )

    return ProjectStats(
        total=total,
        completed=completed,
        ongoing=int(ongoing_mask.sum()),
        abandoned=int(abandoned_mask.sum()),
        completion_rate=indicators.completion_rate,
        total_contract=total_contract,
        total_disbursed=total_disbursed,
        disbursement_rate=indicators.budget_utilisation,
        average_budget=average(total_contract, total),
        budget_by_status={
            COMPLETED_CATEGORY: exact_sum(contract[completed_mask]),
            STATUS_ONGOING: exact_sum(contract[ongoing_mask]),
            STATUS_ABANDONED: exact_sum(contract[abandoned_mask]),
        },
        by_status=status_breakdown(df),
        by_state=state_summary(df),
        by_pillar=pillar_summary(df),
        by_lga=lga_summary(df),
        indicators=indicators,
    )

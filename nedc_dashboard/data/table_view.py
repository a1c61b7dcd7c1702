"""
Search, sort and pagination for the projects table.
"""

from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional, Tuple

import pandas as pd

from nedc_dashboard.data.records import is_missing

SORT_ASC = "asc"
SORT_DESC = "desc"
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class SortState:
    key: str = "sn"
    direction: str = SORT_ASC

    def __post_init__(self) -> None:
        direction = str(self.direction).lower()
        if direction not in (SORT_ASC, SORT_DESC):
            raise ValueError(f"Unknown sort direction: {self.direction!r}")
        object.__setattr__(self, "direction", direction)

    @property
    def descending(self) -> bool:
        return self.direction == SORT_DESC

    def toggle(self, key: str) -> "SortState":
        """Same column flips direction; a new column starts ascending."""
        if key == self.key:
            return SortState(key, SORT_ASC if self.descending else SORT_DESC)
        return SortState(key, SORT_ASC)


@dataclass
class TableView:
    items: pd.DataFrame
    total_matching: int
    total_pages: int
    page: int
    page_size: int

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.page_size

    def caption(self) -> str:
        if self.total_matching == 0:
            return "Showing 0 of 0 projects"
        first = self.start_index + 1
        last = self.start_index + len(self.items)
        return f"Showing {first} to {last} of {self.total_matching} projects"


def render_value(value: Any) -> Optional[str]:
    """String form of a record value as the search sees it; None when missing."""
    if is_missing(value):
        return None
    if isinstance(value, (tuple, list)):
        return ", ".join(str(item) for item in value)
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def search_projects(df: pd.DataFrame, query: Optional[str]) -> pd.DataFrame:
    needle = (query or "").strip().lower()
    if not needle or df.empty:
        return df

    def _matches(row: pd.Series) -> bool:
        for value in row:
            text = render_value(value)
            if text is not None and needle in text.lower():
                return True
        return False

    mask = df.apply(_matches, axis=1).astype(bool)
    return df[mask]


def _collation_key(text: str) -> Tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    # equal folds put lowercase first, as locale collation does
    return stripped.casefold(), text.swapcase()


def sort_value(value: Any) -> Tuple[Any, ...]:
    """Comparable key: numbers, then dates, then text."""
    if isinstance(value, bool):
        return (3, str(value))
    if isinstance(value, (int, float, Decimal)):
        return (0, value)
    if isinstance(value, (date, datetime)):
        return (1, value.isoformat())
    if isinstance(value, (tuple, list)):
        return (2, *_collation_key(", ".join(str(item) for item in value)))
    if isinstance(value, str):
        return (2, *_collation_key(value))
    return (3, str(value))


def sort_projects(df: pd.DataFrame, sort: SortState) -> pd.DataFrame:
    """
    Stable single-column sort. Missing values go last in both directions.
    """
    if df.empty or sort.key not in df.columns:
        return df

    missing = df[sort.key].map(is_missing).astype(bool)
    present = df[~missing]
    keys = [sort_value(value) for value in present[sort.key]]
    order = sorted(range(len(keys)), key=keys.__getitem__, reverse=sort.descending)
    return pd.concat([present.iloc[order], df[missing]])


def paginate(df: pd.DataFrame, page: Any = 1, page_size: int = DEFAULT_PAGE_SIZE) -> TableView:
    """Slice one 1-based page; out-of-range pages clamp to the nearest valid page."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    total = len(df)
    total_pages = math.ceil(total / page_size)
    try:
        requested = int(page)
    except (TypeError, ValueError):
        requested = 1
    current = min(max(1, requested), max(total_pages, 1))
    start = (current - 1) * page_size
    return TableView(
        items=df.iloc[start:start + page_size],
        total_matching=total,
        total_pages=total_pages,
        page=current,
        page_size=page_size,
    )


def view_projects(
    df: pd.DataFrame,
    query: Optional[str] = "",
    sort: Optional[SortState] = None,
    page: Any = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> TableView:
    matched = search_projects(df, query)
    ordered = sort_projects(matched, sort or SortState())
    return paginate(ordered, page=page, page_size=page_size)

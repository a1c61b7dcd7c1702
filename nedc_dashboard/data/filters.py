"""
Filter utilities that apply the dashboard's multi-select filters to the
project record frame.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

import pandas as pd
import structlog

from nedc_dashboard.data.constants import LGA_BY_STATE

LOGGER = structlog.get_logger(__name__)

_STATE_LOOKUP: Dict[str, str] = {state.lower(): state for state in LGA_BY_STATE}


def available_lgas(states: Iterable[str]) -> List[str]:
    """Ordered union of the LGAs belonging to the given states."""
    lgas: List[str] = []
    for state in states:
        canonical = _STATE_LOOKUP.get(str(state).strip().lower())
        for lga in LGA_BY_STATE.get(canonical or "", []):
            if lga not in lgas:
                lgas.append(lga)
    return lgas


def _unique(values: Any) -> Tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    unique: List[str] = []
    for value in values:
        if isinstance(value, str) and value not in unique:
            unique.append(value)
    return tuple(unique)


@dataclass(frozen=True)
class FilterSpec:
    """Accepted values per field; an empty field places no constraint.

    LGAs that no selected state can reach are dropped on construction, so a
    spec can never hold an LGA outside its states' areas.
    """

    pillars: Tuple[str, ...] = ()
    states: Tuple[str, ...] = ()
    lgas: Tuple[str, ...] = ()
    statuses: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "pillars", _unique(self.pillars))
        object.__setattr__(self, "states", _unique(self.states))
        object.__setattr__(self, "statuses", _unique(self.statuses))
        reachable = set(available_lgas(self.states))
        object.__setattr__(
            self,
            "lgas",
            tuple(lga for lga in _unique(self.lgas) if lga in reachable),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.pillars or self.states or self.lgas or self.statuses)

    def constraints(self) -> List[Tuple[str, Tuple[str, ...]]]:
        """(record column, accepted values) pairs in evaluation order."""
        return [
            ("pillars", self.pillars),
            ("state", self.states),
            ("lga", self.lgas),
            ("status", self.statuses),
        ]

    def with_states(self, states: Iterable[str]) -> "FilterSpec":
        updated = replace(self, states=tuple(states))
        removed = [lga for lga in self.lgas if lga not in updated.lgas]
        if removed:
            LOGGER.debug("filters_pruned_lgas", removed=removed)
        return updated

    def to_dict(self) -> Dict[str, List[str]]:
        return {
            "pillars": list(self.pillars),
            "states": list(self.states),
            "lgas": list(self.lgas),
            "statuses": list(self.statuses),
        }

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "FilterSpec":
        if not payload:
            return cls()
        statuses = payload.get("statuses")
        if statuses is None:
            statuses = payload.get("status")
        return cls(
            pillars=_unique(payload.get("pillars")),
            states=_unique(payload.get("states")),
            lgas=_unique(payload.get("lgas")),
            statuses=_unique(statuses),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, text: str) -> "FilterSpec":
        return cls.from_dict(json.loads(text))


DEFAULT_FILTERS = FilterSpec()


def value_set(value: Any) -> Set[str]:
    if isinstance(value, str):
        return {value}
    if isinstance(value, (tuple, list, set, frozenset)):
        return {item for item in value if isinstance(item, str)}
    return set()


def apply_filters(df: pd.DataFrame, spec: FilterSpec) -> pd.DataFrame:
    """
    Keep the rows that pass every constrained field.

    A row passes a field when any of its values for that field is in the
    accepted set. Rows keep their input order.
    """
    if df.empty or spec.is_empty:
        return df

    mask = pd.Series(True, index=df.index)
    for column, selected in spec.constraints():
        if not selected:
            continue
        if column not in df.columns:
            mask &= False
            continue
        accepted = set(selected)
        passes = df[column].map(lambda value: bool(value_set(value) & accepted))
        mask &= passes.astype(bool)
    return df[mask]


def active_filter_count(spec: FilterSpec) -> int:
    return len(spec.pillars) + len(spec.states) + len(spec.lgas) + len(spec.statuses)


def describe_filters(spec: FilterSpec) -> str:
    """Plain-text description of the active filters for export actions."""
    parts = [
        ("Pillars", spec.pillars),
        ("States", spec.states),
        ("LGAs", spec.lgas),
        ("Status", spec.statuses),
    ]
    return " | ".join(f"{label}: {', '.join(values) if values else 'All'}" for label, values in parts)

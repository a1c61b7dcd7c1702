"""
Project record model and the normalisation step applied once at ingestion.

Rows arrive from the backend with loosely-typed fields: pillars may be a list,
a JSON-encoded list or a bare string, amounts may be numbers or formatted text
and several columns have legacy or per-quarter aliases. `normalize_record`
collapses all of these into a `ProjectRecord`; everything downstream reads the
canonical shape only.
"""

from __future__ import annotations

import json
import math
import numbers
from dataclasses import astuple, dataclass, fields
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

import pandas as pd

from nedc_dashboard.data.constants import COMPLETED_MARKER

SENTINELS: Set[str] = {"", "none", "n/a", "na", "null", "nil", "-", "—"}
CURRENCY_TOKENS: Tuple[str, ...] = ("₦", "NGN", "N$", ",")

PILLAR_KEYS = ("pillars", "nesdmp_pillars", "pillar", "nesdmp_pillar")
STATUS_KEYS = (
    "status",
    "project_status",
    "project_status_q4",
    "project_status_q3",
    "project_status_q2",
    "project_status_q1",
)
REMARK_KEYS = ("remarks", "remarks_q4", "remarks_q3", "remarks_q2", "remarks_q1")
DESCRIPTION_KEYS = ("description", "project_description")
DISBURSED_KEYS = ("amount_disbursed", "total_amount_disbursed")

# Fields whose absence marks a row as malformed in the diagnostics.
EXPECTED_FIELDS = ("pillars", "state", "lga", "status")


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    sn: Optional[int] = None
    pillars: Tuple[str, ...] = ()
    sector: Optional[str] = None
    description: Optional[str] = None
    state: Optional[str] = None
    lga: Optional[str] = None
    community: Optional[str] = None
    status: Optional[str] = None
    remarks: Optional[str] = None
    contract_amount: Optional[Decimal] = None
    amount_disbursed: Optional[Decimal] = None
    retention: Optional[Decimal] = None
    date_of_award: Optional[date] = None
    date_of_completion: Optional[date] = None
    contractor: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return is_completed(self.status)


RECORD_FIELDS: List[str] = [f.name for f in fields(ProjectRecord)]
DATE_FIELDS = ("date_of_award", "date_of_completion")


def is_completed(status: Optional[str]) -> bool:
    """Both completed sub-states share the marker, so containment is the test.

    The test is case-sensitive: "Not completed" is not a completed status.
    """
    if not isinstance(status, str):
        return False
    return COMPLETED_MARKER in status


def is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (tuple, list, set, frozenset)):
        return len(value) == 0
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, Decimal):
        return value.is_nan()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _is_sentinel(value: Any) -> bool:
    return isinstance(value, str) and value.strip().lower() in SENTINELS


def clean_text(value: Any) -> Optional[str]:
    if is_missing(value) or isinstance(value, (tuple, list, dict)):
        return None
    text = str(value).strip()
    if text.lower() in SENTINELS:
        return None
    return text


def coerce_pillars(value: Any) -> Tuple[str, ...]:
    """Return the pillar tags as an ordered, de-duplicated tuple.

    A list keeps its order, a JSON array string is decoded, a `;`-separated
    string is split and any other string is a single tag. Values of other
    types are malformed and yield an empty tuple.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("[") and text.endswith("]"):
            try:
                decoded = json.loads(text)
            except ValueError:
                decoded = None
            if isinstance(decoded, list):
                return coerce_pillars(decoded)
        items: Iterable[Any] = text.split(";")
    elif isinstance(value, (set, frozenset)):
        items = sorted(value, key=str)
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return ()

    pillars: List[str] = []
    for item in items:
        if not isinstance(item, str):
            continue
        cleaned = clean_text(item)
        if cleaned and cleaned not in pillars:
            pillars.append(cleaned)
    return tuple(pillars)


def coerce_amount(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    # numbers.Integral and numbers.Real also cover numpy scalars from pandas
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    if isinstance(value, numbers.Real):
        number = float(value)
        if math.isnan(number) or math.isinf(number):
            return None
        # repr gives the shortest string that round-trips, i.e. what the source sent
        return Decimal(repr(number))
    if isinstance(value, str):
        text = value.strip()
        for token in CURRENCY_TOKENS:
            text = text.replace(token, "")
        text = text.strip()
        if text.lower() in SENTINELS:
            return None
        try:
            amount = Decimal(text)
        except InvalidOperation:
            return None
        return amount if amount.is_finite() else None
    return None


def coerce_date(value: Any) -> Optional[date]:
    if is_missing(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = clean_text(value)
    if text is None:
        return None
    parsed = pd.to_datetime(text, errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def coerce_sn(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = clean_text(value)
    if text is None:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


def _first_present(raw: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = raw.get(key)
        if is_missing(value) or _is_sentinel(value):
            continue
        return value
    return None


def _normalise_with_issues(raw: Mapping[str, Any], index: int) -> Tuple[ProjectRecord, List[str]]:
    issues: List[str] = []

    sn = coerce_sn(raw.get("sn"))
    record_id = clean_text(raw.get("id"))
    if record_id is None:
        record_id = f"sn-{sn}" if sn is not None else f"row-{index}"
        issues.append("missing_id")

    values: Dict[str, Any] = {
        "id": record_id,
        "sn": sn,
        "pillars": coerce_pillars(_first_present(raw, PILLAR_KEYS)),
        "sector": clean_text(raw.get("sector")),
        "description": clean_text(_first_present(raw, DESCRIPTION_KEYS)),
        "state": clean_text(raw.get("state")),
        "lga": clean_text(raw.get("lga")),
        "community": clean_text(raw.get("community")),
        "status": clean_text(_first_present(raw, STATUS_KEYS)),
        "remarks": clean_text(_first_present(raw, REMARK_KEYS)),
        "contractor": clean_text(raw.get("contractor")),
        "created_at": clean_text(raw.get("created_at")),
        "updated_at": clean_text(raw.get("updated_at")),
    }

    raw_amounts = {
        "contract_amount": raw.get("contract_amount"),
        "amount_disbursed": _first_present(raw, DISBURSED_KEYS),
        "retention": raw.get("retention"),
    }
    for name, raw_value in raw_amounts.items():
        values[name] = coerce_amount(raw_value)
        if values[name] is None and not is_missing(raw_value) and not _is_sentinel(raw_value):
            issues.append(f"unparsed_{name}")

    for name in DATE_FIELDS:
        raw_value = raw.get(name)
        values[name] = coerce_date(raw_value)
        if values[name] is None and not is_missing(raw_value) and not _is_sentinel(raw_value):
            issues.append(f"unparsed_{name}")

    for name in EXPECTED_FIELDS:
        if is_missing(values[name]):
            issues.append(f"missing_{name}")

    return ProjectRecord(**values), issues


def normalize_record(raw: Mapping[str, Any], index: int = 0) -> ProjectRecord:
    """Coerce one backend row into a `ProjectRecord`. Never raises on bad data."""
    record, _ = _normalise_with_issues(raw, index)
    return record


def normalize_records(rows: Iterable[Mapping[str, Any]]) -> Tuple[List[ProjectRecord], Dict[str, Any]]:
    """Normalise every row and collect ingestion diagnostics."""
    records: List[ProjectRecord] = []
    issue_counts: Dict[str, int] = {}
    malformed_rows = 0
    for index, raw in enumerate(rows):
        if not isinstance(raw, Mapping):
            raw = {}
        record, issues = _normalise_with_issues(raw, index)
        records.append(record)
        if issues:
            malformed_rows += 1
        for issue in issues:
            issue_counts[issue] = issue_counts.get(issue, 0) + 1

    diagnostics = {
        "row_count": len(records),
        "malformed_rows": malformed_rows,
        "issues": dict(sorted(issue_counts.items())),
        "distinct_ids": len({record.id for record in records}),
    }
    return records, diagnostics


def records_to_frame(records: Sequence[ProjectRecord]) -> pd.DataFrame:
    """Build the record frame; object dtype keeps Decimals, dates and None intact."""
    rows = [astuple(record) for record in records]
    return pd.DataFrame(rows, columns=RECORD_FIELDS, dtype=object)


def frame_to_records(frame: pd.DataFrame) -> List[ProjectRecord]:
    records: List[ProjectRecord] = []
    for row in frame.to_dict("records"):
        values = {}
        for name in RECORD_FIELDS:
            value = row.get(name)
            if name == "pillars":
                values[name] = coerce_pillars(value)
            else:
                values[name] = None if is_missing(value) else value
        if values["id"] is None:
            values["id"] = ""
        records.append(ProjectRecord(**values))
    return records


def ingest_rows(rows: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Normalise raw backend rows into the record frame used by every engine."""
    records, diagnostics = normalize_records(rows)
    frame = records_to_frame(records)
    frame.attrs["diagnostics"] = diagnostics
    return frame

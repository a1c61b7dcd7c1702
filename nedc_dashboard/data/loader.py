"""
Fetch the project table from the configured record source and normalise it
into the record frame.

Two sources are supported: the hosted Supabase table (default) and a Google
Sheets mirror of the same table read with gspread. Backend failures surface
as `RecordFetchError`; missing credentials as `ConfigError`.
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from typing import Any, Dict, List, Optional

import gspread
import pandas as pd
import structlog
from google.oauth2.service_account import Credentials
from supabase import Client, create_client

from nedc_dashboard.config import SOURCE_SHEETS, SOURCE_SUPABASE, Settings, get_settings
from nedc_dashboard.data.records import coerce_sn, ingest_rows

LOGGER = structlog.get_logger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]
SOURCES = (SOURCE_SUPABASE, SOURCE_SHEETS)


class ConfigError(RuntimeError):
    """Raised when the configured record source cannot be used as configured."""


class RecordFetchError(RuntimeError):
    """Raised when the record source fails to return the project table."""

    def __init__(self, message: str, source: str) -> None:
        super().__init__(message)
        self.source = source


def _repair_json_private_key(text: str) -> str:
    """Escape raw newlines inside a multi-line private_key value.
    This fixes the common case when TOML triple-quoted strings preserve newlines.
    """
    pattern = r'"private_key"\s*:\s*"(.*?)"'

    def _repl(m: re.Match) -> str:
        val = m.group(1).replace("\r\n", "\\n").replace("\n", "\\n")
        return f'"private_key": "{val}"'

    return re.sub(pattern, _repl, text, flags=re.DOTALL)


def _materialize_creds_if_inline(path_or_json: str) -> str:
    """If GOOGLE_APPLICATION_CREDENTIALS holds JSON content, write it to a temp file and return the path."""
    if os.path.exists(path_or_json):
        return path_or_json
    text = path_or_json.strip()
    if not (text.startswith("{") and text.endswith("}")):
        return path_or_json
    try:
        json.loads(text)
    except ValueError:
        text = _repair_json_private_key(text)
    tmp_path = os.path.join(tempfile.gettempdir(), "nedc-google-credentials.json")
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(text)
    return tmp_path


def create_supabase_client(settings: Settings) -> Client:
    if not settings.supabase_url or not settings.supabase_key:
        raise ConfigError("SUPABASE_URL and SUPABASE_ANON_KEY must be set (env or secrets).")
    return create_client(settings.supabase_url, settings.supabase_key)


def fetch_supabase_rows(client: Client, table: str) -> List[Dict[str, Any]]:
    """All columns of `table`, ordered by serial number ascending."""
    response = client.table(table).select("*").order("sn").execute()
    return list(response.data or [])


def create_sheets_client(settings: Settings) -> gspread.Client:
    if not settings.spreadsheet_id:
        raise ConfigError("SPREADSHEET_ID must be set (env or secrets) for the sheets record source.")
    service_account_file = _materialize_creds_if_inline(settings.google_credentials)
    if not os.path.exists(service_account_file):
        raise ConfigError(f"Service account file not found: {service_account_file}")
    credentials = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
    return gspread.authorize(credentials)


def fetch_sheet_rows(client: gspread.Client, spreadsheet_id: str, sheet_name: str) -> List[Dict[str, Any]]:
    """Rows of the worksheet keyed by header, ordered by serial number with blanks last."""
    worksheet = client.open_by_key(spreadsheet_id).worksheet(sheet_name)
    rows = worksheet.get_all_records()

    def _order(row: Dict[str, Any]):
        sn = coerce_sn(row.get("sn"))
        return (sn is None, sn if sn is not None else 0)

    return sorted(rows, key=_order)


def load_projects(settings: Optional[Settings] = None, client: Any = None) -> pd.DataFrame:
    """
    Fetch and normalise the full project table.

    `client` overrides the backend client built from settings (a supabase
    `Client` or a gspread `Client` depending on the source). The returned
    frame carries ingestion diagnostics in `frame.attrs["diagnostics"]`.
    """
    settings = settings or get_settings()
    source = settings.record_source
    if source not in SOURCES:
        raise ConfigError(f"Unknown RECORD_SOURCE {source!r}; expected one of {', '.join(SOURCES)}.")

    LOGGER.info("projects_fetch_started", source=source)
    try:
        if client is None:
            client = create_supabase_client(settings) if source == SOURCE_SUPABASE else create_sheets_client(settings)
        if source == SOURCE_SUPABASE:
            rows = fetch_supabase_rows(client, settings.projects_table)
        else:
            rows = fetch_sheet_rows(client, settings.spreadsheet_id or "", settings.sheet_name)
    except ConfigError:
        raise
    except Exception as exc:
        LOGGER.error("projects_fetch_failed", source=source, error=str(exc))
        raise RecordFetchError(f"Could not load projects from {source}: {exc}", source=source) from exc
    LOGGER.info("projects_fetch_succeeded", source=source, row_count=len(rows))

    frame = ingest_rows(rows)
    diagnostics = frame.attrs["diagnostics"]
    diagnostics["source"] = source
    LOGGER.info(
        "records_normalised",
        row_count=diagnostics["row_count"],
        malformed_count=diagnostics["malformed_rows"],
    )
    return frame

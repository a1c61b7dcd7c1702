"""
Application-wide configuration constants and helper utilities.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

import streamlit as st

SOURCE_SUPABASE = "supabase"
SOURCE_SHEETS = "sheets"
LOG_FORMATS = ("console", "json")


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("overview", "Overview"),
    TabConfig("projects", "Projects"),
    TabConfig("analytics", "Analytics"),
    TabConfig("geography", "Geography"),
    TabConfig("indicators", "Indicators"),
    TabConfig("assistant", "Assistant"),
    TabConfig("data_quality", "Data Quality"),
]


@dataclass(frozen=True)
class Settings:
    record_source: str = SOURCE_SUPABASE
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    projects_table: str = "projects"
    spreadsheet_id: Optional[str] = None
    sheet_name: str = "projects"
    google_credentials: str = "google-credentials.json"
    page_size: int = 20
    log_level: str = "INFO"
    log_format: str = "console"


def _get_secret(name: str, default: Optional[str] = None) -> Optional[str]:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists
        pass
    return default


def _get_int(name: str, default: int) -> int:
    raw = _get_secret(name)
    try:
        value = int(str(raw).strip()) if raw is not None else default
    except ValueError:
        return default
    return value if value > 0 else default


def get_settings() -> Settings:
    log_format = (_get_secret("LOG_FORMAT", "console") or "console").lower()
    return Settings(
        record_source=(_get_secret("RECORD_SOURCE", SOURCE_SUPABASE) or SOURCE_SUPABASE).strip().lower(),
        supabase_url=_get_secret("SUPABASE_URL"),
        supabase_key=_get_secret("SUPABASE_ANON_KEY") or _get_secret("SUPABASE_KEY"),
        projects_table=_get_secret("PROJECTS_TABLE", "projects") or "projects",
        spreadsheet_id=_get_secret("SPREADSHEET_ID"),
        sheet_name=_get_secret("SHEET_NAME", "projects") or "projects",
        google_credentials=_get_secret("GOOGLE_APPLICATION_CREDENTIALS", "google-credentials.json")
        or "google-credentials.json",
        page_size=_get_int("PAGE_SIZE", 20),
        log_level=(_get_secret("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_format=log_format if log_format in LOG_FORMATS else "console",
    )

"""
Bootstrap environment for Streamlit Cloud & local dev:
- Flatten st.secrets into uppercase os.environ keys (nested -> PREFIX_CHILD)
- When the sheets record source is configured and GOOGLE_CREDENTIALS_JSON is
  provided in secrets (dict or JSON string), write it to a temp file and set
  GOOGLE_APPLICATION_CREDENTIALS
- Finally, load .env (without overriding existing env vars)
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from typing import Any, Iterator, Mapping, Optional, Tuple

import streamlit as st
from dotenv import load_dotenv

CREDENTIALS_FILENAME = "nedc-google-credentials.json"


def _sanitize_key(key: str) -> str:
    # Uppercase and replace non-alphanumeric with underscores
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def _flatten_secrets(prefix: str, val: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(val, Mapping):
        for k, v in val.items():
            yield from _flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield _sanitize_key(prefix), str(val)


def _read_secrets() -> Optional[Mapping[str, Any]]:
    try:
        # st.secrets may not exist locally outside Streamlit runtime
        items = getattr(st, "secrets", None)
        if not items:
            return None
        return items.to_dict()  # type: ignore[attr-defined]
    except Exception:
        return None


def _bridge_secrets_to_env(secrets: Mapping[str, Any]) -> None:
    for key, value in secrets.items():
        if key == "GOOGLE_CREDENTIALS_JSON":
            continue
        for flat_k, flat_v in _flatten_secrets(key, value):
            os.environ.setdefault(flat_k, flat_v)


def _credentials_text(creds: Any) -> Optional[str]:
    if isinstance(creds, Mapping):
        return json.dumps(dict(creds))
    text = str(creds).strip()
    try:
        json.loads(text)
    except ValueError:
        return None
    return text


def _materialize_google_credentials(secrets: Mapping[str, Any]) -> None:
    """Create a temp service account file from secrets if needed.

    Only applies to the sheets record source. An existing
    GOOGLE_APPLICATION_CREDENTIALS that points at a file is kept.
    """
    if os.getenv("RECORD_SOURCE", "supabase").strip().lower() != "sheets":
        return
    existing_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if existing_path and os.path.exists(existing_path):
        return
    creds = secrets.get("GOOGLE_CREDENTIALS_JSON")
    if not creds:
        return
    json_text = _credentials_text(creds)
    if json_text is None:
        return
    tmp_path = os.path.join(tempfile.gettempdir(), CREDENTIALS_FILENAME)
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(json_text)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = tmp_path


def ensure_env() -> None:
    """Idempotent: make sure env vars and creds are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    """
    secrets = _read_secrets() or {}
    _bridge_secrets_to_env(secrets)
    _materialize_google_credentials(secrets)
    # load_dotenv will not override existing env vars by default
    load_dotenv()


# Execute on import for Streamlit main process, but also allow explicit calls elsewhere.
ensure_env()

"""Tests for fetching the project table from the record sources."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from nedc_dashboard.config import Settings
from nedc_dashboard.data.loader import ConfigError, RecordFetchError, load_projects


def _supabase_client(rows=None, error=None):
    client = MagicMock()
    query = client.table.return_value.select.return_value.order.return_value
    if error is not None:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=rows)
    return client


class TestSupabaseSource:
    def test_fetches_all_columns_ordered_by_sn(self, make_row):
        client = _supabase_client([make_row(), make_row(contract_amount="2,500")])
        frame = load_projects(Settings(projects_table="projects"), client=client)

        client.table.assert_called_once_with("projects")
        client.table.return_value.select.assert_called_once_with("*")
        client.table.return_value.select.return_value.order.assert_called_once_with("sn")
        assert frame["id"].tolist() == ["p-1", "p-2"]
        assert frame["contract_amount"].tolist()[1] == Decimal("2500")
        assert frame.attrs["diagnostics"]["source"] == "supabase"

    def test_empty_result_is_empty_frame(self):
        frame = load_projects(Settings(), client=_supabase_client(rows=None))
        assert frame.empty
        assert frame.attrs["diagnostics"]["row_count"] == 0

    def test_backend_error_surfaces_as_fetch_error(self):
        cause = ConnectionError("connection refused")
        client = _supabase_client(error=cause)

        with pytest.raises(RecordFetchError) as exc_info:
            load_projects(Settings(), client=client)

        assert exc_info.value.source == "supabase"
        assert exc_info.value.__cause__ is cause
        assert "connection refused" in str(exc_info.value)

    def test_missing_credentials(self):
        with pytest.raises(ConfigError):
            load_projects(Settings(supabase_url=None, supabase_key=None))

    @patch("nedc_dashboard.data.loader.create_client")
    def test_builds_client_from_settings(self, mock_create_client, make_row):
        mock_create_client.return_value = _supabase_client([make_row()])
        settings = Settings(supabase_url="https://example.supabase.co", supabase_key="anon")

        frame = load_projects(settings)

        mock_create_client.assert_called_once_with("https://example.supabase.co", "anon")
        assert len(frame) == 1

    @patch("nedc_dashboard.data.loader.create_client")
    def test_client_construction_failure_is_fetch_error(self, mock_create_client):
        mock_create_client.side_effect = ValueError("Invalid URL")
        settings = Settings(supabase_url="not-a-url", supabase_key="anon")

        with pytest.raises(RecordFetchError):
            load_projects(settings)


class TestSheetsSource:
    def test_rows_sorted_by_sn(self, make_row):
        client = MagicMock()
        worksheet = client.open_by_key.return_value.worksheet.return_value
        worksheet.get_all_records.return_value = [make_row(sn=3), make_row(sn=""), make_row(sn=1)]
        settings = Settings(record_source="sheets", spreadsheet_id="sheet-123", sheet_name="projects")

        frame = load_projects(settings, client=client)

        client.open_by_key.assert_called_once_with("sheet-123")
        client.open_by_key.return_value.worksheet.assert_called_once_with("projects")
        assert frame["sn"].tolist()[:2] == [1, 3]
        assert frame["sn"].tolist()[2] is None

    def test_missing_spreadsheet_id(self):
        with pytest.raises(ConfigError):
            load_projects(Settings(record_source="sheets", spreadsheet_id=None))

    def test_api_error_surfaces_as_fetch_error(self):
        client = MagicMock()
        client.open_by_key.side_effect = RuntimeError("quota exceeded")
        settings = Settings(record_source="sheets", spreadsheet_id="sheet-123")

        with pytest.raises(RecordFetchError) as exc_info:
            load_projects(settings, client=client)
        assert exc_info.value.source == "sheets"


def test_unknown_source():
    with pytest.raises(ConfigError):
        load_projects(Settings(record_source="mysql"), client=MagicMock())

"""Tests for record normalisation at ingestion."""

from datetime import date
from decimal import Decimal

import pandas as pd
import pytest

from nedc_dashboard.data.records import (
    RECORD_FIELDS,
    ProjectRecord,
    coerce_amount,
    coerce_date,
    coerce_pillars,
    coerce_sn,
    frame_to_records,
    ingest_rows,
    is_completed,
    normalize_record,
    normalize_records,
    records_to_frame,
)


class TestCoercePillars:
    """Pillar tags accept several shapes and always come back as a tuple."""

    def test_list_keeps_order_and_drops_blanks_and_duplicates(self):
        assert coerce_pillars(["Healthy Citizens", "", "Peaceful Society", "Healthy Citizens"]) == (
            "Healthy Citizens",
            "Peaceful Society",
        )

    def test_json_array_string_is_decoded(self):
        assert coerce_pillars('["Educated Populace", "Connected Region"]') == (
            "Educated Populace",
            "Connected Region",
        )

    def test_semicolon_string_is_split(self):
        assert coerce_pillars("Educated Populace; Connected Region") == ("Educated Populace", "Connected Region")

    def test_scalar_string_is_single_tag(self):
        assert coerce_pillars("Healthy Citizens") == ("Healthy Citizens",)

    @pytest.mark.parametrize("value", [None, 42, {"a": 1}, "", "N/A"])
    def test_malformed_values_are_empty(self, value):
        assert coerce_pillars(value) == ()


class TestCoerceScalars:
    def test_amount_strips_naira_and_separators(self):
        assert coerce_amount("₦1,234,567.50") == Decimal("1234567.50")

    def test_float_amount_keeps_its_decimal_form(self):
        assert coerce_amount(0.1) == Decimal("0.1")

    @pytest.mark.parametrize("value", [None, "", "n/a", "lots", float("nan"), True])
    def test_unusable_amounts_are_none(self, value):
        assert coerce_amount(value) is None

    def test_pandas_scalars_are_amounts(self):
        assert coerce_amount(pd.Series([5, 7]).iloc[0]) == Decimal(5)
        assert coerce_amount(pd.Series([2, 3]).sum()) == Decimal(5)
        assert coerce_amount(pd.Series([0.5]).iloc[0]) == Decimal("0.5")

    def test_dates(self):
        assert coerce_date("2023-01-15") == date(2023, 1, 15)
        assert coerce_date("not a date") is None
        assert coerce_date(None) is None
        assert coerce_date(pd.NaT) is None
        assert coerce_date(pd.Timestamp("2023-01-15")) == date(2023, 1, 15)

    def test_sn(self):
        assert coerce_sn("12") == 12
        assert coerce_sn(3.0) == 3
        assert coerce_sn("x") is None


class TestIsCompleted:
    @pytest.mark.parametrize(
        "status,expected",
        [
            ("Completed (Handed over)", True),
            ("Completed (Not handed over)", True),
            ("completed", False),
            ("Not completed", False),
            ("Ongoing", False),
            (None, False),
        ],
    )
    def test_substring_semantics(self, status, expected):
        assert is_completed(status) is expected


class TestNormalizeRecord:
    def test_aliases_are_resolved(self):
        record = normalize_record(
            {
                "id": "abc",
                "sn": "7",
                "nesdmp_pillars": "Healthy Citizens",
                "project_status_q2": "Ongoing",
                "project_status_q4": "Abandoned",
                "remarks_q1": "Site visited",
                "project_description": "Borehole",
                "total_amount_disbursed": "500,000",
            }
        )
        assert record.id == "abc"
        assert record.sn == 7
        assert record.pillars == ("Healthy Citizens",)
        assert record.status == "Abandoned"
        assert record.remarks == "Site visited"
        assert record.description == "Borehole"
        assert record.amount_disbursed == Decimal("500000")

    def test_sentinels_become_missing(self):
        record = normalize_record({"id": "x", "state": "N/A", "lga": " - ", "status": "null"})
        assert record.state is None
        assert record.lga is None
        assert record.status is None

    def test_missing_id_falls_back_to_sn(self):
        assert normalize_record({"sn": 4}).id == "sn-4"
        assert normalize_record({}, index=9).id == "row-9"

    def test_is_completed_property(self):
        assert ProjectRecord(id="1", status="Completed (Handed over)").is_completed


class TestNormalizeRecords:
    def test_diagnostics_count_coercions(self, make_row):
        rows = [
            make_row(),
            make_row(contract_amount="lots", date_of_award="someday"),
            make_row(id=None, state=None),
            None,
        ]
        records, diagnostics = normalize_records(rows)

        assert len(records) == 4
        assert diagnostics["row_count"] == 4
        assert diagnostics["malformed_rows"] == 3
        assert diagnostics["issues"]["unparsed_contract_amount"] == 1
        assert diagnostics["issues"]["unparsed_date_of_award"] == 1
        assert diagnostics["issues"]["missing_id"] == 2
        assert diagnostics["issues"]["missing_state"] == 2
        assert records[1].contract_amount is None

    def test_ingest_rows_attaches_diagnostics(self, make_row):
        frame = ingest_rows([make_row(), make_row()])
        assert list(frame.columns) == RECORD_FIELDS
        assert frame.attrs["diagnostics"]["row_count"] == 2

    def test_empty_input_gives_empty_frame(self):
        frame = ingest_rows([])
        assert frame.empty
        assert list(frame.columns) == RECORD_FIELDS

    def test_frame_round_trip(self, make_row):
        records, _ = normalize_records(
            [make_row(), make_row(pillars=[], contract_amount=None, date_of_award=None)]
        )
        assert frame_to_records(records_to_frame(records)) == records

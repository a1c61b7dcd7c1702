"""Shared fixtures: raw backend rows and the normalised record frame built from them."""

import itertools

import pytest

from nedc_dashboard.data.records import ingest_rows


@pytest.fixture
def make_row():
    """Factory for raw backend rows with sensible defaults and increasing sn/id."""
    counter = itertools.count(1)

    def _make(**overrides):
        sn = next(counter)
        row = {
            "id": f"p-{sn}",
            "sn": sn,
            "pillars": ["Healthy Citizens"],
            "sector": "Primary Healthcare",
            "description": f"Project {sn}",
            "state": "Borno",
            "lga": "Maiduguri",
            "community": "Bulumkutu",
            "status": "Ongoing",
            "remarks": None,
            "contract_amount": 1000000,
            "amount_disbursed": 250000,
            "date_of_award": "2023-01-15",
            "date_of_completion": None,
            "contractor": "Acme Ltd",
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def make_frame(make_row):
    """Build a record frame from a list of override dicts."""

    def _make(*overrides):
        return ingest_rows([make_row(**item) for item in overrides])

    return _make


@pytest.fixture
def portfolio(make_frame):
    return make_frame(
        {"status": "Ongoing", "state": "Borno", "lga": "Maiduguri", "pillars": ["Healthy Citizens"]},
        {
            "status": "Completed (Handed over)",
            "state": "Adamawa",
            "lga": "Yola North",
            "pillars": ["Leadership in Agriculture", "Healthy Citizens"],
            "contract_amount": 3000000,
            "amount_disbursed": 3000000,
            "date_of_award": "2022-03-01",
            "date_of_completion": "2022-12-01",
        },
        {
            "status": "Completed (Not handed over)",
            "state": "Borno",
            "lga": "Jere",
            "pillars": ["Educated Populace"],
            "contract_amount": 2000000,
            "amount_disbursed": 1500000,
            "date_of_award": "2021-01-01",
            "date_of_completion": "2023-06-30",
        },
        {"status": "Abandoned", "state": "Yobe", "lga": "Damaturu", "pillars": ["Leadership in Agriculture"]},
        {"status": "Ongoing", "state": "Borno", "lga": "Maiduguri", "pillars": ["Educated Populace"]},
    )

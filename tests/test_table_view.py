"""Tests for search, sort and pagination of the projects table."""

from decimal import Decimal

import pandas as pd
import pytest

from nedc_dashboard.data.table_view import (
    SortState,
    paginate,
    render_value,
    search_projects,
    sort_projects,
    view_projects,
)


def _frame(**columns):
    return pd.DataFrame(columns, dtype=object)


class TestSearch:
    def test_empty_query_matches_everything(self, portfolio):
        assert len(search_projects(portfolio, "   ")) == len(portfolio)

    def test_case_insensitive_substring_over_any_field(self, portfolio):
        assert search_projects(portfolio, "yola")["id"].tolist() == ["p-2"]
        assert search_projects(portfolio, "AGRICULTURE")["id"].tolist() == ["p-2", "p-4"]

    def test_matches_rendered_amounts_and_dates(self, portfolio):
        assert search_projects(portfolio, "3000000")["id"].tolist() == ["p-2"]
        assert search_projects(portfolio, "2021-01")["id"].tolist() == ["p-3"]

    def test_no_match(self, portfolio):
        assert search_projects(portfolio, "zzz").empty

    def test_render_value(self):
        assert render_value(("A", "B")) == "A, B"
        assert render_value(Decimal("1.50")) == "1.50"
        assert render_value(None) is None


class TestSort:
    def test_stable_for_ties(self):
        frame = _frame(id=["a", "b", "c", "d"], state=["Yobe", "Borno", "Yobe", "Borno"])
        result = sort_projects(frame, SortState("state", "asc"))
        assert result["id"].tolist() == ["b", "d", "a", "c"]

    def test_descending_keeps_ties_in_input_order(self):
        frame = _frame(id=["a", "b", "c"], sn=[1, 2, 1])
        result = sort_projects(frame, SortState("sn", "desc"))
        assert result["id"].tolist() == ["b", "a", "c"]

    @pytest.mark.parametrize("direction", ["asc", "desc"])
    def test_missing_values_go_last_in_both_directions(self, direction):
        frame = _frame(id=["a", "b", "c", "d"], contract_amount=[None, Decimal("5"), None, Decimal("2")])
        result = sort_projects(frame, SortState("contract_amount", direction))
        assert result["id"].tolist()[-2:] == ["a", "c"]

    def test_numbers_compare_numerically(self):
        frame = _frame(id=["a", "b", "c"], contract_amount=[Decimal("100"), Decimal("20"), Decimal("3")])
        result = sort_projects(frame, SortState("contract_amount", "asc"))
        assert result["id"].tolist() == ["c", "b", "a"]

    def test_strings_ignore_case_and_accents(self):
        frame = _frame(id=["a", "b", "c"], contractor=["beta", "Álpha", "alpha"])
        result = sort_projects(frame, SortState("contractor", "asc"))
        assert result["id"].tolist()[2] == "a"

    def test_lowercase_sorts_before_capitalised_duplicate(self):
        frame = _frame(id=["a", "b"], state=["Borno", "borno"])
        result = sort_projects(frame, SortState("state", "asc"))
        assert result["id"].tolist() == ["b", "a"]

    def test_unknown_key_leaves_order(self, portfolio):
        result = sort_projects(portfolio, SortState("nope", "asc"))
        assert result["id"].tolist() == portfolio["id"].tolist()

    def test_toggle(self):
        sort = SortState("state", "asc")
        assert sort.toggle("state") == SortState("state", "desc")
        assert sort.toggle("state").toggle("state") == SortState("state", "asc")
        assert SortState("state", "desc").toggle("lga") == SortState("lga", "asc")

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            SortState("sn", "sideways")


class TestPaginate:
    def test_45_rows_page_size_20(self):
        frame = _frame(id=[str(i) for i in range(45)])
        view = paginate(frame, page=3, page_size=20)
        assert view.total_pages == 3
        assert len(view.items) == 5
        assert view.caption() == "Showing 41 to 45 of 45 projects"

    def test_page_beyond_last_clamps(self):
        frame = _frame(id=[str(i) for i in range(45)])
        view = paginate(frame, page=99, page_size=20)
        assert view.page == 3
        assert len(view.items) == 5

    @pytest.mark.parametrize("page", [0, -4, None, "abc"])
    def test_invalid_pages_clamp_to_first(self, page):
        frame = _frame(id=[str(i) for i in range(45)])
        assert paginate(frame, page=page, page_size=20).page == 1

    def test_empty_result(self):
        view = paginate(_frame(id=[]), page=5, page_size=20)
        assert view.total_pages == 0
        assert view.page == 1
        assert view.items.empty
        assert view.caption() == "Showing 0 of 0 projects"

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValueError):
            paginate(_frame(id=["a"]), page_size=0)


class TestViewProjects:
    def test_search_sort_then_paginate(self, portfolio):
        view = view_projects(portfolio, query="borno", sort=SortState("sn", "desc"), page=1, page_size=2)
        assert view.total_matching == 3
        assert view.total_pages == 2
        assert view.items["id"].tolist() == ["p-5", "p-3"]

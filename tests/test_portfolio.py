"""Tests for the cross-project portfolio summary."""

from __future__ import annotations

import pytest

from parcelbook.core.types import TransactionType
from parcelbook.ledger.models import Transaction
from parcelbook.ledger.portfolio import select_all, summarize_portfolio, toggle_selection

from tests.conftest import make_project


@pytest.fixture
def projects():
    riverside = make_project("Riverside Lots")
    plaza = make_project(
        "Station Plaza",
        lands=[],
        transactions=[
            Transaction(type=TransactionType.EXPENSE, category="Taxes", amount=60000.5),
            Transaction(type=TransactionType.INCOME, category="Rental income", amount=0.25),
        ],
    )
    return [riverside, plaza]


def _totals(summary):
    return (
        summary.project_count,
        summary.total_income,
        summary.total_expense,
        summary.net_profit,
        summary.roi,
        summary.total_land_area_m2,
        summary.total_land_area_ping,
        summary.total_land_price,
        summary.total_building_price,
    )


class TestSelection:
    def test_select_all(self, projects):
        assert select_all(projects) == {p.id for p in projects}

    def test_toggle_adds_and_removes(self):
        selected = toggle_selection({"a"}, "b")
        assert selected == {"a", "b"}
        assert toggle_selection(selected, "a") == {"b"}


class TestSummarizePortfolio:
    def test_all_projects_by_default(self, projects):
        summary = summarize_portfolio(projects)
        assert summary.project_count == 2
        assert summary.total_income == 100000.25
        assert summary.total_expense == 100000.5
        assert summary.net_profit == pytest.approx(-0.25)
        assert summary.total_land_area_m2 == 50.0
        assert summary.total_land_area_ping == 15.125
        assert summary.total_land_price == 756250
        assert summary.total_building_price == 27_000_000

    def test_selected_subset(self, projects):
        riverside = projects[0]
        summary = summarize_portfolio(projects, {riverside.id})
        assert summary.project_count == 1
        assert summary.total_income == 100000
        assert summary.total_expense == 40000
        assert summary.roi == 150.0

    def test_empty_selection(self, projects):
        summary = summarize_portfolio(projects, set())
        assert summary.project_count == 0
        assert summary.roi == 0.0
        assert summary.buyers == []

    def test_unknown_ids_ignored(self, projects):
        summary = summarize_portfolio(projects, {"missing", projects[1].id})
        assert summary.project_count == 1

    def test_order_independent(self, projects):
        ids = [p.id for p in projects]
        forward = summarize_portfolio(projects, ids)
        backward = summarize_portfolio(list(reversed(projects)), list(reversed(ids)))
        assert _totals(forward) == _totals(backward)

    def test_rows_carry_project_name(self, projects):
        summary = summarize_portfolio(projects)
        assert [b.project_name for b in summary.buildings] == ["Riverside Lots", "Station Plaza"]
        assert [land.project_name for land in summary.lands] == ["Riverside Lots"]
        assert summary.buyers[0].name == "Harbor Logistics"

    def test_does_not_mutate_projects(self, projects):
        before = [p.model_copy(deep=True) for p in projects]
        summarize_portfolio(projects)
        assert [p.to_document() for p in projects] == [p.to_document() for p in before]

"""Aggregation across a selection of projects.

The summary is a pure function of the project collection and the selected
ids. Sums are exactly rounded, so the result does not depend on the order
projects are listed or selected in.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from parcelbook.core.types import TransactionType
from parcelbook.ledger.models import (
    BuildingRow,
    BuyerRow,
    LandRow,
    PortfolioSummary,
    Project,
)
from parcelbook.ledger.stats import compute_roi
from parcelbook.ledger.units import exact_sum, round_area, to_ping


def select_all(projects: Iterable[Project]) -> frozenset[str]:
    return frozenset(p.id for p in projects)


def toggle_selection(selected: Iterable[str], project_id: str) -> frozenset[str]:
    """Include ``project_id`` if it was excluded, exclude it otherwise."""
    current = frozenset(selected)
    if project_id in current:
        return current - {project_id}
    return current | {project_id}


def summarize_portfolio(
    projects: Sequence[Project],
    selected_ids: Iterable[str] | None = None,
) -> PortfolioSummary:
    """Roll up finances, land and buildings of the selected projects.

    ``selected_ids=None`` selects every project. Ids that match no project
    are ignored.
    """
    if selected_ids is None:
        chosen = list(projects)
    else:
        wanted = set(selected_ids)
        chosen = [p for p in projects if p.id in wanted]

    transactions = [t for p in chosen for t in p.transactions]
    lands = [land for p in chosen for land in p.lands]
    buildings = [b for p in chosen for b in p.buildings]

    total_income = exact_sum(t.amount for t in transactions if t.type == TransactionType.INCOME)
    total_expense = exact_sum(t.amount for t in transactions if t.type == TransactionType.EXPENSE)
    # Parcel figures are already derived at save time; only sum them here.
    total_land_m2 = exact_sum(land.holding_area_m2 for land in lands)

    return PortfolioSummary(
        project_count=len(chosen),
        total_income=total_income,
        total_expense=total_expense,
        net_profit=total_income - total_expense,
        roi=compute_roi(total_income, total_expense),
        total_land_area_m2=round_area(total_land_m2),
        total_land_area_ping=round_area(to_ping(total_land_m2)),
        total_land_price=exact_sum(land.total_price for land in lands),
        total_building_price=exact_sum(b.total_price for b in buildings),
        buyers=[
            BuyerRow(**b.model_dump(), project_name=p.name) for p in chosen for b in p.buyers
        ],
        lands=[
            LandRow(**land.model_dump(), project_name=p.name) for p in chosen for land in p.lands
        ],
        buildings=[
            BuildingRow(**b.model_dump(), project_name=p.name)
            for p in chosen
            for b in p.buildings
        ],
    )

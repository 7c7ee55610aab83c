"""Shared test fixtures and helpers."""

from __future__ import annotations

import datetime as dt

import pytest

from parcelbook.core.types import LinkedType, TransactionType
from parcelbook.ledger.holdings import finalize_parcel
from parcelbook.ledger.models import (
    Building,
    Buyer,
    LandLotItem,
    LandParcel,
    Project,
    Seller,
    Transaction,
)


def make_parcel(**overrides) -> LandParcel:
    """A finalized parcel holding half of a 100 m2 lot at 50000 per ping."""
    data = dict(
        section="Riverside Sec. 3",
        sellers=[Seller(name="A. Lin"), Seller(name="B. Chen")],
        items=[
            LandLotItem(
                lot_number="101",
                area_m2=100,
                share_num=1,
                share_denom=2,
                price_per_ping=50000,
                subtotal=756250,
            )
        ],
    )
    data.update(overrides)
    return finalize_parcel(LandParcel(**data))


def make_project(name: str = "Riverside Lots", **overrides) -> Project:
    """A project with one buyer, parcel, building and two transactions."""
    parcel = make_parcel()
    building = Building(
        permit_number="112-B-0456",
        address="88 Station Plaza, Unit 3F",
        area_m2=142.7,
        total_price=13_500_000,
        sellers=[Seller(name="C. Wu")],
    )
    data = dict(
        name=name,
        site="North bank",
        zone="Industrial",
        buyers=[Buyer(name="Harbor Logistics", phone="02-5550-1234", address="12 Quay Rd")],
        lands=[parcel],
        buildings=[building],
        transactions=[
            Transaction(
                date=dt.date(2026, 1, 5),
                type=TransactionType.INCOME,
                category="Sale deposit",
                amount=100000,
                linked_type=LinkedType.LAND,
                linked_id=parcel.id,
            ),
            Transaction(
                date=dt.date(2026, 1, 6),
                type=TransactionType.EXPENSE,
                category="Taxes",
                amount=40000,
            ),
        ],
    )
    data.update(overrides)
    return Project(**data)


@pytest.fixture
def project() -> Project:
    return make_project()

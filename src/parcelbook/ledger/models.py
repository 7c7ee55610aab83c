"""Ledger data models for projects, their assets and derived figures."""

from __future__ import annotations

import datetime as dt
import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from parcelbook.core.types import LinkedType, NoteStatus, TransactionType
from parcelbook.ledger.units import to_number, to_share_denominator


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class LedgerModel(BaseModel):
    """Base model: camelCase document keys, legacy numeric ids as strings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    def to_document(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ---------------------------------------------------------------------------
# People
# ---------------------------------------------------------------------------


class Seller(LedgerModel):
    """Seller or owner recorded against a land parcel or building."""

    id: str = Field(default_factory=_new_id)
    name: str = ""
    phone: str = ""
    address: str = ""


class Buyer(LedgerModel):
    """Buyer recorded on a project."""

    id: str = Field(default_factory=_new_id)
    name: str = ""
    phone: str = ""
    address: str = ""
    image: str | None = None


# ---------------------------------------------------------------------------
# Land
# ---------------------------------------------------------------------------


class LandLotItem(LedgerModel):
    """One cadastral lot, held in full or as a fractional share."""

    id: str = Field(default_factory=_new_id)
    lot_number: str = ""
    area_m2: float = 0.0
    share_num: float = 1.0
    share_denom: float = 1.0
    price_per_ping: float = 0.0
    subtotal: float = 0.0

    @field_validator("area_m2", "share_num", "price_per_ping", "subtotal", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("share_denom", mode="before")
    @classmethod
    def _coerce_denominator(cls, value: Any) -> float:
        return to_share_denominator(value)


class LandParcel(LedgerModel):
    """A group of lots acquired together.

    ``holding_area_m2``, ``holding_area_ping`` and ``total_price`` are cached
    figures, rewritten from ``items`` whenever the parcel is saved.
    """

    id: str = Field(default_factory=_new_id)
    section: str = ""
    sellers: list[Seller] = Field(default_factory=list)
    items: list[LandLotItem] = Field(default_factory=list)
    holding_area_m2: float = 0.0
    holding_area_ping: float = 0.0
    total_price: float = 0.0

    @field_validator("holding_area_m2", "holding_area_ping", "total_price", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("sellers", "items", mode="before")
    @classmethod
    def _default_list(cls, value: Any) -> Any:
        return [] if value is None else value


# ---------------------------------------------------------------------------
# Buildings
# ---------------------------------------------------------------------------


class Building(LedgerModel):
    """A building bought as a lump sum; ``total_price`` is entered, not derived."""

    id: str = Field(default_factory=_new_id)
    permit_number: str = ""
    address: str = ""
    license: str = ""
    build_number: str = ""
    area_m2: float = 0.0
    price_per_unit: float = 0.0
    total_price: float = 0.0
    sellers: list[Seller] = Field(default_factory=list)

    @field_validator("area_m2", "price_per_unit", "total_price", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("sellers", mode="before")
    @classmethod
    def _default_list(cls, value: Any) -> Any:
        return [] if value is None else value


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


class Transaction(LedgerModel):
    """A ledger entry, optionally attributed to a land parcel or building."""

    id: str = Field(default_factory=_new_id)
    date: dt.date = Field(default_factory=dt.date.today)
    type: TransactionType = TransactionType.EXPENSE
    category: str = ""
    amount: float = 0.0
    note: str = ""
    image: str | None = None
    linked_id: str | None = None
    linked_type: LinkedType = LinkedType.GENERAL

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("linked_type", mode="before")
    @classmethod
    def _coerce_linked_type(cls, value: Any) -> LinkedType:
        try:
            return LinkedType(value)
        except ValueError:
            return LinkedType.GENERAL

    @field_validator("linked_id", mode="before")
    @classmethod
    def _blank_link(cls, value: Any) -> Any:
        return None if value == "" else value


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


class Project(LedgerModel):
    """Root aggregate: a development case and everything recorded under it."""

    id: str = Field(default_factory=_new_id)
    name: str = ""
    site: str = ""
    zone: str = ""
    buyers: list[Buyer] = Field(default_factory=list)
    lands: list[LandParcel] = Field(default_factory=list)
    buildings: list[Building] = Field(default_factory=list)
    transactions: list[Transaction] = Field(default_factory=list)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("buyers", "lands", "buildings", "transactions", mode="before")
    @classmethod
    def _default_list(cls, value: Any) -> Any:
        return [] if value is None else value


class Note(LedgerModel):
    """A developer note: a bug report or feature request left in the app."""

    id: str = Field(default_factory=_new_id)
    content: str
    status: NoteStatus = NoteStatus.OPEN
    created_at: datetime = Field(default_factory=_utcnow)


# ---------------------------------------------------------------------------
# Derived figures
# ---------------------------------------------------------------------------


class HoldingFigures(LedgerModel):
    """Holding area and price totals of a parcel's lot items."""

    holding_area_m2: float = 0.0
    holding_area_ping: float = 0.0
    total_price: float = 0.0


class LinkageSubtotal(LedgerModel):
    income: float = 0.0
    expense: float = 0.0


def _empty_subtotals() -> dict[LinkedType, LinkageSubtotal]:
    return {linked_type: LinkageSubtotal() for linked_type in LinkedType}


class LedgerStats(LedgerModel):
    """Income, expense and profit rollup of one transaction list."""

    total_income: float = 0.0
    total_expense: float = 0.0
    net_profit: float = 0.0
    roi: float = 0.0
    sub_totals: dict[LinkedType, LinkageSubtotal] = Field(default_factory=_empty_subtotals)


class BuyerRow(Buyer):
    project_name: str = ""


class LandRow(LandParcel):
    project_name: str = ""


class BuildingRow(Building):
    project_name: str = ""


class PortfolioSummary(LedgerModel):
    """Totals and flattened asset tables across a selection of projects."""

    project_count: int = 0
    total_income: float = 0.0
    total_expense: float = 0.0
    net_profit: float = 0.0
    roi: float = 0.0
    total_land_area_m2: float = 0.0
    total_land_area_ping: float = 0.0
    total_land_price: float = 0.0
    total_building_price: float = 0.0
    buyers: list[BuyerRow] = Field(default_factory=list)
    lands: list[LandRow] = Field(default_factory=list)
    buildings: list[BuildingRow] = Field(default_factory=list)

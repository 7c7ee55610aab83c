"""Nested-entity CRUD over a project.

Every operation takes a ``Project`` and returns an updated deep copy with a
fresh ``updated_at``; the input is never mutated. Validation failures raise
``LedgerValidationError`` before anything changes.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Sequence, TypeVar

from parcelbook.core.types import LinkedType
from parcelbook.ledger.catalog import CategoryCatalog
from parcelbook.ledger.errors import EntityNotFoundError, LedgerValidationError
from parcelbook.ledger.holdings import finalize_parcel
from parcelbook.ledger.models import (
    Building,
    Buyer,
    LandParcel,
    Project,
    Seller,
    Transaction,
)

_E = TypeVar("_E", Buyer, LandParcel, Building, Transaction, Seller)
_Owner = TypeVar("_Owner", LandParcel, Building)


def _upsert(entities: Sequence[_E], entity: _E) -> list[_E]:
    """Replace the entity with the same id, or append it."""
    replaced = False
    result: list[_E] = []
    for existing in entities:
        if existing.id == entity.id:
            result.append(entity)
            replaced = True
        else:
            result.append(existing)
    if not replaced:
        result.append(entity)
    return result


def _without(entities: Sequence[_E], entity_id: str, kind: str) -> list[_E]:
    remaining = [e for e in entities if e.id != entity_id]
    if len(remaining) == len(entities):
        raise EntityNotFoundError(kind, entity_id)
    return remaining


def _updated(project: Project, **changes) -> Project:
    changes["updated_at"] = datetime.now(timezone.utc)
    return project.model_copy(update=changes).model_copy(deep=True)


def _require(value: str, field: str, message: str) -> None:
    if not value.strip():
        raise LedgerValidationError({field: [message]})


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------


def new_project(name: str | None = None, site: str = "", zone: str = "") -> Project:
    """A project with empty buyer, land, building and transaction lists."""
    if not name:
        name = f"New project {datetime.now(timezone.utc).date().isoformat()}"
    return Project(name=name, site=site, zone=zone)


def update_project_info(
    project: Project,
    *,
    name: str | None = None,
    site: str | None = None,
    zone: str | None = None,
) -> Project:
    changes = {
        key: value
        for key, value in (("name", name), ("site", site), ("zone", zone))
        if value is not None
    }
    if "name" in changes:
        _require(changes["name"], "name", "Project name is required")
    return _updated(project, **changes)


def rename_project(project: Project, name: str) -> Project:
    return update_project_info(project, name=name)


# ---------------------------------------------------------------------------
# Buyers
# ---------------------------------------------------------------------------


def save_buyer(project: Project, buyer: Buyer) -> Project:
    _require(buyer.name, "name", "Buyer name is required")
    return _updated(project, buyers=_upsert(project.buyers, buyer))


def delete_buyer(project: Project, buyer_id: str) -> Project:
    return _updated(project, buyers=_without(project.buyers, buyer_id, "Buyer"))


# ---------------------------------------------------------------------------
# Sellers (nested in a land parcel or building draft)
# ---------------------------------------------------------------------------


def add_seller(owner: _Owner, seller: Seller) -> _Owner:
    _require(seller.name, "name", "Seller name is required")
    sellers = _upsert(owner.sellers, seller)
    return owner.model_copy(update={"sellers": sellers}).model_copy(deep=True)


def remove_seller(owner: _Owner, seller_id: str) -> _Owner:
    sellers = _without(owner.sellers, seller_id, "Seller")
    return owner.model_copy(update={"sellers": sellers}).model_copy(deep=True)


# ---------------------------------------------------------------------------
# Land parcels
# ---------------------------------------------------------------------------


def find_land(project: Project, land_id: str) -> LandParcel:
    for parcel in project.lands:
        if parcel.id == land_id:
            return parcel
    raise EntityNotFoundError("Land parcel", land_id)


def save_land(project: Project, parcel: LandParcel) -> Project:
    """Validate the parcel, recompute its figures and store it."""
    finalized = finalize_parcel(parcel)
    return _updated(project, lands=_upsert(project.lands, finalized))


def delete_land(project: Project, land_id: str) -> Project:
    """Remove a parcel. Transactions linked to it are kept as they are."""
    return _updated(project, lands=_without(project.lands, land_id, "Land parcel"))


# ---------------------------------------------------------------------------
# Buildings
# ---------------------------------------------------------------------------


def find_building(project: Project, building_id: str) -> Building:
    for building in project.buildings:
        if building.id == building_id:
            return building
    raise EntityNotFoundError("Building", building_id)


def save_building(project: Project, building: Building) -> Project:
    _require(building.address, "address", "Building address is required")
    return _updated(project, buildings=_upsert(project.buildings, building))


def delete_building(project: Project, building_id: str) -> Project:
    """Remove a building. Transactions linked to it are kept as they are."""
    return _updated(project, buildings=_without(project.buildings, building_id, "Building"))


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def _link_errors(project: Project, tx: Transaction) -> list[str]:
    if tx.linked_type == LinkedType.GENERAL:
        if tx.linked_id is not None:
            return ["General transactions cannot reference a land parcel or building"]
        return []

    previous = next((t for t in project.transactions if t.id == tx.id), None)
    if (
        previous is not None
        and previous.linked_type == tx.linked_type
        and previous.linked_id == tx.linked_id
    ):
        # Unchanged links may dangle after their asset was deleted.
        return []

    if tx.linked_id is None:
        return [f"A {tx.linked_type.value} transaction needs a linked id"]
    targets = project.lands if tx.linked_type == LinkedType.LAND else project.buildings
    if not any(t.id == tx.linked_id for t in targets):
        kind = "land parcel" if tx.linked_type == LinkedType.LAND else "building"
        return [f"No {kind} {tx.linked_id!r} in this project"]
    return []


def save_transaction(
    project: Project,
    tx: Transaction,
    catalog: CategoryCatalog | None = None,
) -> Project:
    """Add or replace a transaction after checking amount, category and link."""
    if catalog is None:
        catalog = CategoryCatalog()

    if not tx.category:
        tx = tx.model_copy(update={"category": catalog.default_category(tx.type)})

    errors: dict[str, list[str]] = {}
    if tx.amount <= 0:
        errors["amount"] = ["Amount must be greater than zero"]
    if not catalog.is_valid(tx.type, tx.category):
        errors["category"] = [f"Unknown {tx.type.value} category {tx.category!r}"]
    link_errors = _link_errors(project, tx)
    if link_errors:
        errors["linkedId"] = link_errors
    if errors:
        raise LedgerValidationError(errors)

    return _updated(project, transactions=_upsert(project.transactions, tx))


def delete_transaction(project: Project, tx_id: str) -> Project:
    return _updated(
        project, transactions=_without(project.transactions, tx_id, "Transaction")
    )


def transactions_for(
    project: Project, linked_type: LinkedType | str, linked_id: str
) -> list[Transaction]:
    """The ledger of a single land parcel or building."""
    linked_type = LinkedType(linked_type)
    return [
        t for t in project.transactions
        if t.linked_type == linked_type and t.linked_id == linked_id
    ]

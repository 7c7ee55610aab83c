"""Deterministic land holding computation.

Held area is the lot area scaled by the ownership share. Parcel figures
(``holding_area_m2``, ``holding_area_ping``, ``total_price``) are always
recomputed from the lot items and never taken from the caller.
"""

from __future__ import annotations

from typing import Any, Sequence

from parcelbook.ledger.errors import LedgerValidationError
from parcelbook.ledger.models import HoldingFigures, LandLotItem, LandParcel
from parcelbook.ledger.units import (
    exact_sum,
    round_area,
    round_half_up,
    to_ping,
)

# Changing any of these re-derives a lot item's subtotal.
SUBTOTAL_TRIGGER_FIELDS = frozenset({"area_m2", "share_num", "share_denom", "price_per_ping"})


def effective_held_area(item: LandLotItem) -> float:
    """Square meters actually held: ``area * share_num / share_denom``."""
    return item.area_m2 * (item.share_num / item.share_denom)


def held_area_ping(item: LandLotItem) -> float:
    return to_ping(effective_held_area(item))


def compute_subtotal(item: LandLotItem) -> int:
    """Price of the held share, rounded half-up to a whole currency unit."""
    return int(round_half_up(held_area_ping(item) * item.price_per_ping))


def apply_lot_item_changes(item: LandLotItem, changes: dict[str, Any]) -> LandLotItem:
    """Return a copy of ``item`` with ``changes`` applied.

    The subtotal is re-derived when a trigger field actually changes value.
    An explicit ``subtotal`` in the same change set is a manual override and
    is kept as given.
    """
    data = item.model_dump()
    for key, value in changes.items():
        field = _field_name(key)
        if field is None or field == "id":
            continue
        data[field] = value
    updated = LandLotItem.model_validate(data)

    triggered = any(
        getattr(updated, field) != getattr(item, field) for field in SUBTOTAL_TRIGGER_FIELDS
    )
    manual = any(_field_name(key) == "subtotal" for key in changes)
    if triggered and not manual:
        updated.subtotal = float(compute_subtotal(updated))
    return updated


def compute_holdings(items: Sequence[LandLotItem]) -> HoldingFigures:
    """Sum held area and subtotals across a parcel's lot items."""
    total_m2 = exact_sum(effective_held_area(item) for item in items)
    return HoldingFigures(
        holding_area_m2=round_area(total_m2),
        holding_area_ping=round_area(to_ping(total_m2)),
        total_price=exact_sum(item.subtotal for item in items),
    )


def validate_parcel(parcel: LandParcel) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for index, item in enumerate(parcel.items):
        if not item.lot_number.strip():
            errors[f"items[{index}].lotNumber"] = ["Lot number is required"]
    return errors


def finalize_parcel(parcel: LandParcel) -> LandParcel:
    """Validate a parcel draft and overwrite its derived figures.

    Raises:
        LedgerValidationError: If any lot item has no lot number.
    """
    errors = validate_parcel(parcel)
    if errors:
        raise LedgerValidationError(errors)

    figures = compute_holdings(parcel.items)
    return parcel.model_copy(
        deep=True,
        update={
            "holding_area_m2": figures.holding_area_m2,
            "holding_area_ping": figures.holding_area_ping,
            "total_price": figures.total_price,
        },
    )


def new_lot_item() -> LandLotItem:
    """Blank lot item as shown in an empty parcel form (full 1/1 share)."""
    return LandLotItem()


def remove_lot_item(items: Sequence[LandLotItem], index: int) -> list[LandLotItem]:
    """Drop the item at ``index``; an emptied list gets one fresh blank item."""
    remaining = [item for i, item in enumerate(items) if i != index]
    return remaining or [new_lot_item()]


def _field_name(key: str) -> str | None:
    """Map a snake_case name or camelCase alias to a lot item field name."""
    if key in LandLotItem.model_fields:
        return key
    for name, info in LandLotItem.model_fields.items():
        if info.alias == key:
            return name
    return None

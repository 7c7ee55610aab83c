"""Human-readable labels for what a transaction is attributed to."""

from __future__ import annotations

from typing import Sequence

from parcelbook.core.types import LinkedType
from parcelbook.ledger.models import Building, LandParcel, Seller, Transaction

GENERAL_LABEL = "General"
UNKNOWN_LAND_LABEL = "Unknown land"
UNKNOWN_BUILDING_LABEL = "Unknown building"
# Existing assets with nothing to label them by.
UNLABELED_LAND_LABEL = "Unlabeled land"
UNLABELED_BUILDING_LABEL = "Unlabeled building"

# Building addresses are cut to this many characters in compact labels.
ADDRESS_LABEL_LENGTH = 8


def seller_names(sellers: Sequence[Seller], separator: str = "/") -> str:
    return separator.join(s.name for s in sellers if s.name)


def land_label(parcel: LandParcel) -> str:
    names = seller_names(parcel.sellers)
    if names:
        return names
    if parcel.section:
        return parcel.section
    for item in parcel.items:
        if item.lot_number:
            return item.lot_number
    return UNLABELED_LAND_LABEL


def building_label(building: Building) -> str:
    names = seller_names(building.sellers)
    if names:
        return names
    if building.address:
        return building.address[:ADDRESS_LABEL_LENGTH]
    return UNLABELED_BUILDING_LABEL


def resolve_linked_label(
    transaction: Transaction,
    lands: Sequence[LandParcel],
    buildings: Sequence[Building],
) -> str:
    """Label a transaction's linked asset, degrading to a marker when it is gone."""
    if transaction.linked_type == LinkedType.LAND:
        parcel = next((p for p in lands if p.id == transaction.linked_id), None)
        return land_label(parcel) if parcel else UNKNOWN_LAND_LABEL
    if transaction.linked_type == LinkedType.BUILDING:
        building = next((b for b in buildings if b.id == transaction.linked_id), None)
        return building_label(building) if building else UNKNOWN_BUILDING_LABEL
    return GENERAL_LABEL

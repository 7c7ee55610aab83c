"""Tests for linked-asset labels of transactions."""

from __future__ import annotations

from parcelbook.core.types import LinkedType
from parcelbook.ledger.linkage import (
    GENERAL_LABEL,
    UNKNOWN_BUILDING_LABEL,
    UNKNOWN_LAND_LABEL,
    UNLABELED_BUILDING_LABEL,
    UNLABELED_LAND_LABEL,
    building_label,
    land_label,
    resolve_linked_label,
)
from parcelbook.ledger.models import Building, LandLotItem, LandParcel, Seller, Transaction


class TestLandLabel:
    def test_joins_seller_names(self):
        parcel = LandParcel(sellers=[Seller(name="A. Lin"), Seller(name="B. Chen")])
        assert land_label(parcel) == "A. Lin/B. Chen"

    def test_falls_back_to_section_then_lot(self):
        assert land_label(LandParcel(section="Sec. 3")) == "Sec. 3"
        parcel = LandParcel(items=[LandLotItem(), LandLotItem(lot_number="101-1")])
        assert land_label(parcel) == "101-1"

    def test_unknown_when_blank(self):
        assert land_label(LandParcel()) == UNLABELED_LAND_LABEL


class TestBuildingLabel:
    def test_sellers_first(self):
        assert building_label(Building(address="x", sellers=[Seller(name="C. Wu")])) == "C. Wu"

    def test_address_truncated(self):
        assert building_label(Building(address="88 Station Plaza")) == "88 Stati"

    def test_unknown_when_blank(self):
        assert building_label(Building()) == UNLABELED_BUILDING_LABEL


class TestResolveLinkedLabel:
    def test_general(self):
        assert resolve_linked_label(Transaction(), [], []) == GENERAL_LABEL

    def test_resolves_existing_parcel(self, project):
        tx = project.transactions[0]
        assert resolve_linked_label(tx, project.lands, project.buildings) == "A. Lin/B. Chen"

    def test_orphaned_land_reference(self, project):
        tx = project.transactions[0]
        assert resolve_linked_label(tx, [], project.buildings) == UNKNOWN_LAND_LABEL

    def test_orphaned_building_reference(self):
        tx = Transaction(linked_type=LinkedType.BUILDING, linked_id="gone")
        assert resolve_linked_label(tx, [], []) == UNKNOWN_BUILDING_LABEL

    def test_unlabeled_asset_differs_from_orphan(self):
        parcel = LandParcel(items=[LandLotItem()])
        building = Building()
        land_tx = Transaction(linked_type=LinkedType.LAND, linked_id=parcel.id)
        building_tx = Transaction(linked_type=LinkedType.BUILDING, linked_id=building.id)
        assert resolve_linked_label(land_tx, [parcel], []) == UNLABELED_LAND_LABEL
        assert resolve_linked_label(land_tx, [], []) == UNKNOWN_LAND_LABEL
        assert resolve_linked_label(building_tx, [], [building]) == UNLABELED_BUILDING_LABEL
        assert UNLABELED_LAND_LABEL != UNKNOWN_LAND_LABEL

"""Tests for the transaction category catalog."""

from __future__ import annotations

import pytest

from parcelbook.core.types import TransactionType
from parcelbook.ledger.catalog import CategoryCatalog


class TestBundledCatalog:
    def test_default_category_is_first(self):
        catalog = CategoryCatalog()
        assert catalog.default_category(TransactionType.EXPENSE) == "Land cost"
        assert catalog.default_category("income") == "Sale deposit"

    def test_is_valid_per_type(self):
        catalog = CategoryCatalog()
        assert catalog.is_valid(TransactionType.INCOME, "Rental income")
        assert not catalog.is_valid(TransactionType.EXPENSE, "Rental income")

    def test_as_dict(self):
        data = CategoryCatalog().as_dict()
        assert set(data["categories"]) == {"income", "expense"}
        assert data["predefinedSellers"] == []


class TestCustomCatalog:
    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "ledger.yml"
        path.write_text(
            "categories:\n"
            "  income: [Lease]\n"
            "predefined_sellers: [A. Lin, B. Chen]\n",
            encoding="utf-8",
        )
        catalog = CategoryCatalog(path)
        assert catalog.categories(TransactionType.INCOME) == ["Lease"]
        # Types missing from the file keep the built-in list.
        assert catalog.default_category(TransactionType.EXPENSE) == "Land cost"
        assert catalog.predefined_sellers == ["A. Lin", "B. Chen"]

    def test_missing_file_uses_builtins(self, tmp_path):
        catalog = CategoryCatalog(tmp_path / "absent.yml")
        assert catalog.default_category(TransactionType.INCOME) == "Sale deposit"

    def test_empty_list_rejected(self, tmp_path):
        path = tmp_path / "ledger.yml"
        path.write_text("categories:\n  expense: []\n", encoding="utf-8")
        with pytest.raises(ValueError):
            CategoryCatalog(path)

    def test_returned_lists_are_copies(self):
        catalog = CategoryCatalog()
        catalog.categories(TransactionType.INCOME).append("Bogus")
        assert not catalog.is_valid(TransactionType.INCOME, "Bogus")

    def test_bare_categories_key_uses_builtins(self, tmp_path):
        path = tmp_path / "ledger.yml"
        path.write_text("categories:\npredefined_sellers:\n", encoding="utf-8")
        catalog = CategoryCatalog(path)
        assert catalog.default_category(TransactionType.EXPENSE) == "Land cost"
        assert catalog.predefined_sellers == []

    def test_unknown_type_names_config_file(self, tmp_path):
        path = tmp_path / "ledger.yml"
        path.write_text("categories:\n  refund: [Deposit back]\n", encoding="utf-8")
        with pytest.raises(ValueError, match="refund") as exc_info:
            CategoryCatalog(path)
        assert str(path) in str(exc_info.value)

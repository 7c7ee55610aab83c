"""Transaction category lists and predefined sellers, loaded from YAML."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from parcelbook.core.types import TransactionType

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[3] / "config" / "ledger.yml"

_DEFAULT_CATEGORIES: dict[TransactionType, list[str]] = {
    TransactionType.EXPENSE: [
        "Land cost",
        "Building cost",
        "Brokerage fee",
        "Scrivener and registration fees",
        "Site works",
        "Advertising",
        "Taxes",
        "Miscellaneous",
    ],
    TransactionType.INCOME: [
        "Sale deposit",
        "Contract payment",
        "Seal payment",
        "Tax clearance payment",
        "Final payment",
        "Rental income",
        "Tax refund / other",
    ],
}


class CategoryCatalog:
    """Fixed category lists keyed by transaction type."""

    def __init__(self, config_path: str | Path | None = None) -> None:
        self._config_path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH
        self._categories: dict[TransactionType, list[str]] = {
            tx_type: list(names) for tx_type, names in _DEFAULT_CATEGORIES.items()
        }
        self._sellers: list[str] = []
        self._load_config()

    def _load_config(self) -> None:
        if not self._config_path.exists():
            logger.info("No ledger catalog at %s; using built-in categories", self._config_path)
            return
        with open(self._config_path, encoding="utf-8") as fh:
            raw: dict[str, Any] = yaml.safe_load(fh) or {}

        for tx_type, names in (raw.get("categories") or {}).items():
            try:
                key = TransactionType(str(tx_type))
            except ValueError:
                raise ValueError(
                    f"Unknown transaction type {tx_type!r} in {self._config_path}"
                ) from None
            if not names:
                raise ValueError(f"Category list for {key.value!r} must not be empty")
            self._categories[key] = [str(name) for name in names]
        self._sellers = [str(name) for name in raw.get("predefined_sellers", []) or []]

    def categories(self, tx_type: TransactionType | str) -> list[str]:
        return list(self._categories[TransactionType(tx_type)])

    def default_category(self, tx_type: TransactionType | str) -> str:
        return self._categories[TransactionType(tx_type)][0]

    def is_valid(self, tx_type: TransactionType | str, category: str) -> bool:
        return category in self._categories[TransactionType(tx_type)]

    @property
    def predefined_sellers(self) -> list[str]:
        return list(self._sellers)

    def as_dict(self) -> dict[str, Any]:
        return {
            "categories": {t.value: list(names) for t, names in self._categories.items()},
            "predefinedSellers": list(self._sellers),
        }

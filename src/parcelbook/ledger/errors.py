"""Exceptions raised by ledger operations."""

from __future__ import annotations


class LedgerValidationError(ValueError):
    """A save was rejected; nothing was persisted.

    ``errors`` maps a field path (e.g. ``"items[2].lotNumber"``) to messages.
    """

    def __init__(self, errors: dict[str, list[str]]) -> None:
        self.errors = errors
        summary = "; ".join(f"{field}: {', '.join(msgs)}" for field, msgs in errors.items())
        super().__init__(f"Validation failed: {summary}")


class EntityNotFoundError(KeyError):
    """An id did not resolve to a project or a nested entity."""

    def __init__(self, kind: str, entity_id: str) -> None:
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id!r} not found")

    def __str__(self) -> str:
        return self.args[0]

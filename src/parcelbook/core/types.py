"""Core type definitions shared across all Parcelbook modules."""

from __future__ import annotations

from enum import StrEnum


# 1 ping = 3.305785 m². Historical records depend on this exact factor.
PING_PER_M2 = 0.3025

# Holding areas are stored, displayed and exported with this many decimals.
AREA_DECIMALS = 3

ROI_DECIMALS = 2


class TransactionType(StrEnum):
    """Direction of a ledger transaction."""

    INCOME = "income"
    EXPENSE = "expense"


class LinkedType(StrEnum):
    """What a ledger transaction is attributed to."""

    GENERAL = "general"
    LAND = "land"
    BUILDING = "building"


class NoteStatus(StrEnum):
    """Status of a developer note."""

    OPEN = "open"
    RESOLVED = "resolved"

"""Deterministic financial rollup of a project's transaction ledger."""

from __future__ import annotations

from typing import Iterable, Sequence

from parcelbook.core.types import ROI_DECIMALS, LinkedType, TransactionType
from parcelbook.ledger.models import LedgerStats, LinkageSubtotal, Transaction
from parcelbook.ledger.units import exact_sum, round_half_up


def compute_roi(total_income: float, total_expense: float) -> float:
    """Net profit as a percentage of expense; 0 when nothing was spent."""
    if total_expense == 0:
        return 0.0
    net_profit = total_income - total_expense
    return round_half_up(net_profit / total_expense * 100, ROI_DECIMALS)


def _amounts(transactions: Iterable[Transaction], tx_type: TransactionType) -> list[float]:
    return [t.amount for t in transactions if t.type == tx_type]


def compute_ledger_stats(transactions: Sequence[Transaction]) -> LedgerStats:
    """Totals, ROI and per-linkage subtotals for one transaction list.

    Totals are the sum of the linkage subtotals taken in ``LinkedType``
    order, so adding the subtotals back up reproduces them exactly.
    """
    sub_totals: dict[LinkedType, LinkageSubtotal] = {}
    for linked_type in LinkedType:
        linked = [t for t in transactions if t.linked_type == linked_type]
        sub_totals[linked_type] = LinkageSubtotal(
            income=exact_sum(_amounts(linked, TransactionType.INCOME)),
            expense=exact_sum(_amounts(linked, TransactionType.EXPENSE)),
        )

    total_income = sum(s.income for s in sub_totals.values())
    total_expense = sum(s.expense for s in sub_totals.values())

    return LedgerStats(
        total_income=total_income,
        total_expense=total_expense,
        net_profit=total_income - total_expense,
        roi=compute_roi(total_income, total_expense),
        sub_totals=sub_totals,
    )

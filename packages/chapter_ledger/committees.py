"""Committee budget tracking.

Spending is attributed to a committee through ``committee_id`` on approved
expense and reimbursement records. Income never counts against a budget.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from .models import Committee, TransactionRecord, TransactionStatus

_ZERO = Decimal("0")
WARNING_PERCENT = Decimal("80")
OVER_PERCENT = Decimal("100")


class BudgetLevel(StrEnum):
    NONE = "none"
    OK = "ok"
    WARNING = "warning"
    OVER = "over"


@dataclass(frozen=True, slots=True)
class BudgetStatus:
    committee: Committee
    spent: Decimal
    remaining: Decimal
    percent_used: Decimal | None
    level: BudgetLevel


@dataclass(frozen=True, slots=True)
class BudgetTotals:
    total_budget: Decimal
    total_spent: Decimal
    total_remaining: Decimal


def spent_by_committee(transactions: Iterable[TransactionRecord]) -> dict[str, Decimal]:
    spent: dict[str, Decimal] = {}
    for tx in transactions:
        if tx.committee_id is None or tx.status is not TransactionStatus.APPROVED:
            continue
        if not tx.is_debit:
            continue
        spent[tx.committee_id] = spent.get(tx.committee_id, _ZERO) + tx.amount
    return spent


def budget_level(spent: Decimal, budget: Decimal) -> tuple[Decimal | None, BudgetLevel]:
    """Return ``(percent_used, level)``; a zero budget has no percentage."""

    if budget <= 0:
        return None, BudgetLevel.NONE
    raw = spent / budget * 100
    percent = raw.quantize(Decimal("0.1"))
    if raw >= OVER_PERCENT:
        return percent, BudgetLevel.OVER
    if raw >= WARNING_PERCENT:
        return percent, BudgetLevel.WARNING
    return percent, BudgetLevel.OK


def budget_status(
    committee: Committee, transactions: Iterable[TransactionRecord]
) -> BudgetStatus:
    spent = spent_by_committee(transactions).get(committee.id, _ZERO)
    return _status(committee, spent)


def _status(committee: Committee, spent: Decimal) -> BudgetStatus:
    percent, level = budget_level(spent, committee.annual_budget)
    return BudgetStatus(
        committee=committee,
        spent=spent,
        remaining=committee.annual_budget - spent,
        percent_used=percent,
        level=level,
    )


def budget_statuses(
    committees: Sequence[Committee], transactions: Iterable[TransactionRecord]
) -> list[BudgetStatus]:
    spent = spent_by_committee(transactions)
    return [_status(c, spent.get(c.id, _ZERO)) for c in committees]


def summarize_budgets(
    committees: Sequence[Committee], transactions: Iterable[TransactionRecord]
) -> BudgetTotals:
    spent = spent_by_committee(transactions)
    total_budget = sum((c.annual_budget for c in committees), _ZERO)
    total_spent = sum((spent.get(c.id, _ZERO) for c in committees), _ZERO)
    return BudgetTotals(
        total_budget=total_budget,
        total_spent=total_spent,
        total_remaining=total_budget - total_spent,
    )


def find_committee(committees: Iterable[Committee], committee_id: str | None) -> Committee | None:
    if committee_id is None:
        return None
    for c in committees:
        if c.id == committee_id:
            return c
    return None


__all__ = [
    "BudgetLevel",
    "BudgetStatus",
    "BudgetTotals",
    "budget_level",
    "budget_status",
    "budget_statuses",
    "find_committee",
    "spent_by_committee",
    "summarize_budgets",
]

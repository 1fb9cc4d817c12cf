"""Dashboard and monthly-report aggregation over transaction records.

Everything here is pure: functions take the records (and the stored balance
where relevant) and return frozen summaries. Only ``APPROVED`` records count
towards totals; pending debits are reported separately because they reduce
the balance that is actually available to spend.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from .models import PaymentSource, TransactionRecord, TransactionStatus, TransactionType

_ZERO = Decimal("0")
_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    balance: Decimal
    pending: tuple[TransactionRecord, ...]
    total_income: Decimal
    total_expenses: Decimal
    pending_debits: Decimal
    available_balance: Decimal
    expenses_by_category: tuple[tuple[str, Decimal], ...]


@dataclass(frozen=True, slots=True)
class CategoryGroup:
    category: str
    total: Decimal
    transactions: tuple[TransactionRecord, ...]


@dataclass(frozen=True, slots=True)
class MonthlyReport:
    month: str
    total_income: Decimal
    total_expenses: Decimal
    net: Decimal
    income_by_category: tuple[CategoryGroup, ...]
    expenses_by_category: tuple[CategoryGroup, ...]
    income_by_source: tuple[tuple[str, Decimal], ...]
    expenses_by_source: tuple[tuple[str, Decimal], ...]

    @property
    def transaction_count(self) -> int:
        return sum(len(g.transactions) for g in self.income_by_category + self.expenses_by_category)


def _approved(transactions: Iterable[TransactionRecord]) -> list[TransactionRecord]:
    return [t for t in transactions if t.status is TransactionStatus.APPROVED]


def _total(transactions: Iterable[TransactionRecord]) -> Decimal:
    return sum((t.amount for t in transactions), _ZERO)


def _sorted_totals(totals: dict[str, Decimal]) -> tuple[tuple[str, Decimal], ...]:
    # Stable sort keeps first-seen order among equal totals.
    return tuple(sorted(totals.items(), key=lambda kv: kv[1], reverse=True))


def _group_by_category(transactions: Sequence[TransactionRecord]) -> tuple[CategoryGroup, ...]:
    grouped: dict[str, list[TransactionRecord]] = {}
    for tx in transactions:
        grouped.setdefault(str(tx.category), []).append(tx)
    groups = [CategoryGroup(name, _total(txs), tuple(txs)) for name, txs in grouped.items()]
    groups.sort(key=lambda g: g.total, reverse=True)
    return tuple(groups)


def _totals_by_source(transactions: Iterable[TransactionRecord]) -> tuple[tuple[str, Decimal], ...]:
    totals: dict[str, Decimal] = {}
    for tx in transactions:
        source = str(tx.payment_source or PaymentSource.OTHER)
        totals[source] = totals.get(source, _ZERO) + tx.amount
    return _sorted_totals(totals)


def summarize_dashboard(
    transactions: Iterable[TransactionRecord], balance: Decimal
) -> DashboardSummary:
    txs = list(transactions)
    pending = tuple(t for t in txs if t.status is TransactionStatus.PENDING)
    approved = _approved(txs)

    income = [t for t in approved if t.type is TransactionType.INCOME]
    expenses = [t for t in approved if t.is_debit]
    pending_debits = _total(t for t in pending if t.is_debit)

    by_category: dict[str, Decimal] = {}
    for tx in expenses:
        key = str(tx.category)
        by_category[key] = by_category.get(key, _ZERO) + tx.amount

    return DashboardSummary(
        balance=balance,
        pending=pending,
        total_income=_total(income),
        total_expenses=_total(expenses),
        pending_debits=pending_debits,
        available_balance=balance - pending_debits,
        expenses_by_category=_sorted_totals(by_category),
    )


def build_monthly_report(transactions: Iterable[TransactionRecord], month: str) -> MonthlyReport:
    """Aggregate approved records dated within ``month`` (``YYYY-MM``)."""

    if not _MONTH_RE.match(month):
        raise ValueError(f"month must be YYYY-MM, got {month!r}")

    in_month = [t for t in _approved(transactions) if t.month == month]
    income = [t for t in in_month if t.type is TransactionType.INCOME]
    expenses = [t for t in in_month if t.is_debit]
    total_income = _total(income)
    total_expenses = _total(expenses)

    return MonthlyReport(
        month=month,
        total_income=total_income,
        total_expenses=total_expenses,
        net=total_income - total_expenses,
        income_by_category=_group_by_category(income),
        expenses_by_category=_group_by_category(expenses),
        income_by_source=_totals_by_source(income),
        expenses_by_source=_totals_by_source(expenses),
    )


def search_transactions(
    transactions: Iterable[TransactionRecord], query: str | None
) -> list[TransactionRecord]:
    """Case-insensitive match on merchant, description, or category."""

    needle = (query or "").strip().lower()
    if not needle:
        return list(transactions)
    return [
        t
        for t in transactions
        if needle in t.merchant.lower()
        or needle in t.description.lower()
        or needle in str(t.category).lower()
    ]


__all__ = [
    "CategoryGroup",
    "DashboardSummary",
    "MonthlyReport",
    "build_monthly_report",
    "search_transactions",
    "summarize_dashboard",
]

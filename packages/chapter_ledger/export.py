"""CSV export of ledger transactions.

Columns: ``Date, Merchant, Category, Payment Source, Type, Status, Amount``.
Amounts are signed from the account's point of view (income positive,
expenses and reimbursements negative) and always carry two decimals.
"""

from __future__ import annotations

import csv
import datetime as dt
import io
from collections.abc import Iterable
from typing import TextIO

from .models import TransactionRecord, quantize_cents

EXPORT_HEADER = ("Date", "Merchant", "Category", "Payment Source", "Type", "Status", "Amount")


def _row(tx: TransactionRecord) -> list[str]:
    return [
        tx.date,
        tx.merchant,
        str(tx.category),
        str(tx.payment_source) if tx.payment_source is not None else "",
        str(tx.type),
        str(tx.status),
        f"{quantize_cents(tx.signed_amount):.2f}",
    ]


def write_transactions_csv(transactions: Iterable[TransactionRecord], stream: TextIO) -> int:
    """Write the header and one row per transaction; return the row count."""

    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    count = 0
    for tx in transactions:
        writer.writerow(_row(tx))
        count += 1
    return count


def transactions_to_csv_text(transactions: Iterable[TransactionRecord]) -> str:
    buf = io.StringIO()
    write_transactions_csv(transactions, buf)
    return buf.getvalue()


def default_export_filename(today: dt.date | None = None) -> str:
    day = today or dt.date.today()
    return f"chapter-transactions-{day.isoformat()}.csv"


__all__ = [
    "EXPORT_HEADER",
    "default_export_filename",
    "transactions_to_csv_text",
    "write_transactions_csv",
]

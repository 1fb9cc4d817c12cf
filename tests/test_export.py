import csv
import datetime as dt
import io
from decimal import Decimal

from chapter_ledger.categories import Category, UnlistedCategory
from chapter_ledger.export import (
    EXPORT_HEADER,
    default_export_filename,
    transactions_to_csv_text,
    write_transactions_csv,
)
from chapter_ledger.models import (
    PaymentSource,
    TransactionRecord,
    TransactionStatus,
    TransactionType,
)


def _tx(**overrides) -> TransactionRecord:
    base = dict(
        id="tx-1",
        date="2024-03-01",
        amount=Decimal("45"),
        merchant="JANE DOE",
        category=Category.MISC_INCOME,
        description="",
        type=TransactionType.INCOME,
        status=TransactionStatus.APPROVED,
        submitted_by="Bank Import",
        payment_source=PaymentSource.ZELLE,
    )
    base.update(overrides)
    return TransactionRecord(**base)


def _parse(text: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(text)))


def test_header_and_signed_amounts():
    rows = _parse(
        transactions_to_csv_text(
            [
                _tx(),
                _tx(
                    id="tx-2",
                    amount=Decimal("15.5"),
                    merchant="ZOOM",
                    category=Category.SUBSCRIPTIONS,
                    type=TransactionType.EXPENSE,
                    payment_source=PaymentSource.DEBIT_CARD,
                ),
                _tx(
                    id="tx-3",
                    amount=Decimal("20"),
                    type=TransactionType.REIMBURSEMENT,
                    status=TransactionStatus.PENDING,
                    category=Category.SPEAKER_GIFTS,
                    payment_source=None,
                ),
            ]
        )
    )
    assert tuple(rows[0]) == EXPORT_HEADER
    assert rows[1] == ["2024-03-01", "JANE DOE", "Misc Income", "Zelle", "INCOME", "APPROVED", "45.00"]
    assert rows[2][-1] == "-15.50"
    assert rows[3][3] == ""
    assert rows[3][-2:] == ["PENDING", "-20.00"]


def test_fields_with_commas_and_quotes_are_quoted():
    text = transactions_to_csv_text(
        [_tx(merchant='GOTPRINT.COM, INC "WEB"', category=UnlistedCategory("Rent, Office"))]
    )
    rows = _parse(text)
    assert rows[1][1] == 'GOTPRINT.COM, INC "WEB"'
    assert rows[1][2] == "Rent, Office"


def test_write_returns_row_count():
    buf = io.StringIO()
    assert write_transactions_csv([_tx(), _tx(id="tx-2")], buf) == 2
    assert write_transactions_csv([], io.StringIO()) == 0


def test_default_export_filename():
    assert default_export_filename(dt.date(2024, 3, 9)) == "chapter-transactions-2024-03-09.csv"

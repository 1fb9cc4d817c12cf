import datetime as dt
from decimal import Decimal
from pathlib import Path

import pytest

import chapter_ledger.ingest.statement as statement_mod
from chapter_ledger.categories import Category
from chapter_ledger.ingest import (
    NoValidTransactionsError,
    StatementParseError,
    import_statement,
    import_statement_file,
)
from chapter_ledger.ingest.errors import NO_VALID_TRANSACTIONS_MESSAGE, PARSE_FAILED_MESSAGE
from chapter_ledger.models import (
    BANK_IMPORT,
    PaymentSource,
    TransactionStatus,
    TransactionType,
)

HEADER = "Account,Date,Check,Description,Debit,Credit,Status,Balance,Classification"
DATA = Path(__file__).resolve().parent / "data" / "checking_statement.csv"


def _csv(*rows: str) -> str:
    return "\n".join([HEADER, *rows])


def test_single_credit_row_yields_income_and_balance():
    result = import_statement(_csv('1,03/01/2024,,"ZELLE JANE DOE 1234",,45.00,Posted,1000.00,'))
    assert len(result.transactions) == 1
    tx = result.transactions[0]
    assert tx.type is TransactionType.INCOME
    assert tx.amount == Decimal("45.00")
    assert result.balance == Decimal("1000.00")


def test_zero_amount_only_row_is_batch_empty():
    with pytest.raises(NoValidTransactionsError) as excinfo:
        import_statement(_csv("1,03/01/2024,,FEE WAIVED,0.00,0.00,Posted,10.00,"))
    assert str(excinfo.value) == NO_VALID_TRANSACTIONS_MESSAGE


def test_header_only_is_batch_empty():
    with pytest.raises(NoValidTransactionsError):
        import_statement(HEADER + "\n")


def test_header_is_dropped_even_when_it_looks_like_data():
    text = "\n".join(
        [
            "1,03/01/2024,,FIRST ROW,5.00,,Posted,1.00,",
            "1,03/02/2024,,SECOND ROW,6.00,,Posted,2.00,",
        ]
    )
    result = import_statement(text)
    assert [t.merchant for t in result.transactions] == ["SECOND ROW"]


def test_records_are_approved_bank_imports_with_unique_ids():
    result = import_statement(
        _csv(
            "1,03/01/2024,,VENDOR A,5.00,,Posted,,",
            "1,03/02/2024,,VENDOR B,6.00,,Posted,,",
        )
    )
    ids = {t.id for t in result.transactions}
    assert len(ids) == 2
    assert all(i.startswith("import-") for i in ids)
    for tx in result.transactions:
        assert tx.status is TransactionStatus.APPROVED
        assert tx.submitted_by == BANK_IMPORT
        assert tx.amount >= 0


def test_short_blank_and_zero_rows_are_skipped():
    result = import_statement(
        _csv(
            "",
            "1,03/01/2024,,TOO SHORT",
            "   ",
            "1,03/02/2024,,NOTHING,,,Posted,,",
            "1,03/03/2024,,REAL ONE,7.25,,Posted,,",
        )
    )
    assert len(result.transactions) == 1
    assert result.skipped_rows == 2
    assert result.balance is None


def test_latest_dated_row_wins_regardless_of_order():
    result = import_statement(
        _csv(
            "1,03/20/2024,,LATER,5.00,,Posted,900.00,",
            "1,03/01/2024,,EARLIER,5.00,,Posted,1000.00,",
        )
    )
    assert result.balance == Decimal("900.00")


def test_equal_dates_later_row_wins():
    result = import_statement(
        _csv(
            "1,03/20/2024,,A,5.00,,Posted,900.00,",
            "1,03/20/2024,,B,5.00,,Posted,895.00,",
        )
    )
    assert result.balance == Decimal("895.00")


def test_iso_datetime_rows_keep_their_date_and_win_balance():
    result = import_statement(
        _csv(
            "1,2024-03-20T10:42:00Z,,LATER,5.00,,Posted,900.00,",
            "1,03/01/2024,,EARLIER,5.00,,Posted,1000.00,",
        )
    )
    assert result.transactions[0].date == "2024-03-20"
    assert result.balance == Decimal("900.00")


def test_exponent_amount_counts_as_zero():
    with pytest.raises(NoValidTransactionsError):
        import_statement(_csv("1,03/01/2024,,DEPOSIT,,1E30,Posted,5.00,"))


def test_zero_amount_row_still_reports_balance():
    result = import_statement(
        _csv(
            "1,03/01/2024,,SPEND,5.00,,Posted,100.00,",
            "1,03/05/2024,,INTEREST 0,0.00,0.00,Posted,100.00,",
        )
    )
    assert result.balance == Decimal("100.00")
    assert len(result.transactions) == 1


def test_blank_description_gets_default_text():
    result = import_statement(_csv("1,03/01/2024,,,5.00,,Posted,,"))
    tx = result.transactions[0]
    assert tx.merchant == "Bank Transaction"
    assert tx.description == "Imported from Bank"


def test_unparseable_date_degrades_to_today():
    result = import_statement(
        _csv("1,sometime,,VENDOR,5.00,,Posted,,"), today=dt.date(2024, 7, 1)
    )
    assert result.transactions[0].date == "2024-07-01"


def test_unexpected_error_becomes_parse_failure(monkeypatch):
    def boom(_line):
        raise RuntimeError("tokenizer exploded")

    monkeypatch.setattr(statement_mod, "split_csv_line", boom)
    with pytest.raises(StatementParseError) as excinfo:
        import_statement(_csv("1,03/01/2024,,X,5.00,,Posted,,"))
    assert str(excinfo.value) == PARSE_FAILED_MESSAGE
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_missing_file_is_parse_failure(tmp_path):
    with pytest.raises(StatementParseError):
        import_statement_file(tmp_path / "missing.csv")


def test_file_with_bom_and_crlf(tmp_path):
    path = tmp_path / "stmt.csv"
    text = _csv('1,03/01/2024,,"WIX PAYOUT",,"1,200.00",Posted,"2,000.00",').replace("\n", "\r\n")
    path.write_bytes(b"\xef\xbb\xbf" + text.encode("utf-8"))
    result = import_statement_file(path)
    tx = result.transactions[0]
    assert tx.amount == Decimal("1200.00")
    assert tx.merchant == "Wix Payments"
    assert result.balance == Decimal("2000.00")


def test_sample_statement_end_to_end():
    result = import_statement_file(DATA)

    assert len(result.transactions) == 6
    assert result.skipped_rows == 1
    assert result.balance == Decimal("1855.31")

    by_merchant = {t.merchant: t for t in result.transactions}
    assert set(by_merchant) == {
        "JANE DOE",
        "ZOOM.US 888-799-9666 CA",
        "Wix Payments",
        "GOTPRINT.COM, INC",
        "PUBLIX #1234 TAMPA FL",
        "PayPal",
    }

    zelle = by_merchant["JANE DOE"]
    assert (zelle.type, zelle.category, zelle.payment_source) == (
        TransactionType.INCOME,
        Category.MISC_INCOME,
        PaymentSource.ZELLE,
    )
    assert zelle.description == "ZELLE JANE DOE 1234567"
    assert zelle.date == "2024-03-01"

    zoom = by_merchant["ZOOM.US 888-799-9666 CA"]
    assert zoom.category is Category.SUBSCRIPTIONS
    assert zoom.payment_source is PaymentSource.DEBIT_CARD
    assert zoom.amount == Decimal("15.99")

    assert by_merchant["Wix Payments"].category is Category.EVENT_REGISTRATION
    assert by_merchant["GOTPRINT.COM, INC"].category is Category.PRINTING_STATIONERY
    assert by_merchant["GOTPRINT.COM, INC"].payment_source is PaymentSource.BANK_TRANSFER
    assert by_merchant["PUBLIX #1234 TAMPA FL"].category is Category.CATERING_FOOD
    assert by_merchant["PayPal"].category is Category.OPERATIONS
    assert by_merchant["PayPal"].payment_source is PaymentSource.PAYPAL

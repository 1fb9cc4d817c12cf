"""Bank statement import: CSV text in, approved transaction records out.

The importer runs in phases (reading, parsing, aggregating) and either
returns a complete :class:`StatementImport` or raises a
:class:`~chapter_ledger.ingest.errors.StatementImportError`. It never writes
anywhere; persisting the batch and the balance is left to the caller.

Row handling:

- the first line is a header and is dropped without inspection;
- blank lines and rows shorter than the profile's ``min_fields`` are skipped;
- rows without a positive debit or credit are skipped;
- every mapped row with a parseable balance competes for the batch balance,
  which comes from the latest-dated row (on equal dates, the later line).
"""

from __future__ import annotations

import datetime as dt
import uuid
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path

from ..logging_setup import get_logger
from ..models import BANK_IMPORT, TransactionRecord, TransactionStatus
from .classifier import classify_category
from .errors import NoValidTransactionsError, StatementImportError, StatementParseError
from .fields import map_row
from .merchants import extract_merchant_name
from .payment_sources import detect_payment_source
from .profiles import BankFormatProfile, get_profile
from .tokenizer import split_csv_line

IMPORTED_DESCRIPTION = "Imported from Bank"

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class StatementImport:
    transactions: tuple[TransactionRecord, ...]
    balance: Decimal | None = None
    skipped_rows: int = 0

    def __len__(self) -> int:
        return len(self.transactions)


def _new_import_id() -> str:
    return f"import-{uuid.uuid4().hex}"


def _parse_rows(
    lines: list[str],
    profile: BankFormatProfile,
    today: dt.date | None,
) -> StatementImport:
    records: list[TransactionRecord] = []
    skipped = 0
    balance: Decimal | None = None
    latest_ts: int | None = None

    for line in lines:
        if not line.strip():
            continue
        mapped = map_row(split_csv_line(line), profile, today=today)
        if mapped is None:
            skipped += 1
            continue

        if mapped.balance is not None and (latest_ts is None or mapped.timestamp >= latest_ts):
            latest_ts = mapped.timestamp
            balance = mapped.balance

        if mapped.amount <= 0:
            skipped += 1
            continue

        records.append(
            TransactionRecord(
                id=_new_import_id(),
                date=mapped.date,
                amount=mapped.amount,
                merchant=extract_merchant_name(mapped.description),
                category=classify_category(
                    mapped.description, mapped.type, mapped.classification
                ),
                description=mapped.description.strip() or IMPORTED_DESCRIPTION,
                type=mapped.type,
                status=TransactionStatus.APPROVED,
                submitted_by=BANK_IMPORT,
                payment_source=detect_payment_source(mapped.description),
            )
        )

    return StatementImport(transactions=tuple(records), balance=balance, skipped_rows=skipped)


def import_statement(
    text: str,
    *,
    profile: BankFormatProfile | None = None,
    today: dt.date | None = None,
) -> StatementImport:
    """Parse one bank CSV export into approved ``Bank Import`` records.

    Raises
    ------
    NoValidTransactionsError
        When no row produced a record.
    StatementParseError
        When processing failed for any other reason; the cause is chained.
    """

    try:
        resolved = profile or get_profile()
        logger.debug("import: reading (%d chars, profile=%s)", len(text), resolved.name)
        lines = text.split("\n")[1:]

        logger.debug("import: parsing %d line(s)", len(lines))
        result = _parse_rows(lines, resolved, today)

        logger.debug(
            "import: aggregating %d record(s), %d skipped", len(result), result.skipped_rows
        )
    except StatementImportError:
        logger.debug("import: failed")
        raise
    except Exception as exc:
        logger.debug("import: failed (%s)", exc)
        raise StatementParseError() from exc

    if not result.transactions:
        logger.debug("import: failed (no valid transactions)")
        raise NoValidTransactionsError()

    logger.info(
        "Imported %d transaction(s); skipped %d row(s); balance=%s",
        len(result),
        result.skipped_rows,
        result.balance,
    )
    return result


def import_statement_file(
    path: str | Path,
    *,
    profile: BankFormatProfile | None = None,
    today: dt.date | None = None,
) -> StatementImport:
    """Read ``path`` (UTF-8, optional BOM) and import it."""

    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("import: failed reading %s (%s)", path, exc)
        raise StatementParseError() from exc
    # Normalize Windows line endings so the trailing "\r" never lands in a field.
    return import_statement(text.replace("\r\n", "\n"), profile=profile, today=today)


__all__ = [
    "IMPORTED_DESCRIPTION",
    "StatementImport",
    "import_statement",
    "import_statement_file",
]

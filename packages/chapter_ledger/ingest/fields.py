"""Map tokenized statement rows to typed values.

``map_row`` is deliberately forgiving: an unparseable date degrades to today's
date (timestamp ``0``) and unparseable amounts count as zero. Only rows that
are too short for the profile are rejected, by returning ``None``.
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ..models import TransactionType
from .profiles import BankFormatProfile

# Tried in order after ISO 8601 dates and datetimes; the first whitespace
# token is tried again as a last resort so "03/15/2024 10:42" still parses.
DATE_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%m/%d/%y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%b %d, %Y",
    "%d %b %Y",
    "%B %d, %Y",
)

_ZERO = Decimal("0")

# Plain digits with an optional fraction; no exponents or underscores.
_PLAIN_AMOUNT_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+", re.ASCII)


@dataclass(frozen=True, slots=True)
class MappedRow:
    date: str
    timestamp: int
    description: str
    amount: Decimal
    type: TransactionType
    balance: Decimal | None = None
    classification: str | None = None


def parse_amount(raw: str | None) -> Decimal | None:
    """Parse a bank amount cell; ``None`` when it is blank or not a number.

    Accepts a leading ``$``, thousands separators, and accounting-style
    parentheses (negative). Exponent notation and underscores are rejected.
    """

    if raw is None:
        return None
    s = raw.strip()
    if not s:
        return None
    negative = False
    if s.startswith("(") and s.endswith(")"):
        negative = True
        s = s[1:-1].strip()
    if s.startswith("-"):
        negative = True
        s = s[1:].lstrip()
    elif s.startswith("+"):
        s = s[1:].lstrip()
    if s.startswith("$"):
        s = s[1:].lstrip()
    s = s.replace(",", "")
    if not _PLAIN_AMOUNT_RE.fullmatch(s):
        return None
    d = Decimal(s)
    return -d if negative else d


def _epoch_seconds(day: dt.date) -> int:
    midnight = dt.datetime(day.year, day.month, day.day, tzinfo=dt.UTC)
    return int(midnight.timestamp())


def _try_formats(s: str) -> dt.date | None:
    try:
        return dt.datetime.fromisoformat(s).date()
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return dt.datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def parse_statement_date(raw: str | None, *, today: dt.date | None = None) -> tuple[str, int]:
    """Return ``(iso_date, timestamp)`` for a statement date cell.

    The timestamp is seconds since the epoch at UTC midnight and only serves
    recency comparison. Unparseable input yields ``(today, 0)``.
    """

    s = (raw or "").strip()
    parsed = _try_formats(s) if s else None
    if parsed is None and s:
        parsed = _try_formats(s.split()[0])
    if parsed is None:
        fallback = today or dt.date.today()
        return fallback.isoformat(), 0
    return parsed.isoformat(), _epoch_seconds(parsed)


def map_row(
    fields: Sequence[str],
    profile: BankFormatProfile,
    *,
    today: dt.date | None = None,
) -> MappedRow | None:
    if len(fields) < profile.min_fields:
        return None

    date, timestamp = parse_statement_date(profile.get(fields, "date"), today=today)
    debit = parse_amount(profile.get(fields, "debit"))
    credit = parse_amount(profile.get(fields, "credit"))

    if credit is not None and credit > 0:
        tx_type, amount = TransactionType.INCOME, credit
    elif debit is not None and debit > 0:
        tx_type, amount = TransactionType.EXPENSE, debit
    else:
        tx_type, amount = TransactionType.EXPENSE, _ZERO

    classification = profile.get(fields, "classification").strip() or None
    return MappedRow(
        date=date,
        timestamp=timestamp,
        description=profile.get(fields, "description"),
        amount=amount,
        type=tx_type,
        balance=parse_amount(profile.get(fields, "balance")),
        classification=classification,
    )


__all__ = ["DATE_FORMATS", "MappedRow", "map_row", "parse_amount", "parse_statement_date"]

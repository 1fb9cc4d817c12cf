# ruff: noqa: I001
"""Persistence integration for chapter_ledger.

Functions here read and write the shared database owned by ``libs/db``. They
rely on SQLAlchemy ORM models defined in ``ledger_db.models.ledger`` and a
session provided by ``ledger_db.client``; committing is the caller's job
(normally via ``session_scope``).

Domain records carry string ids. Database keys are integers, so an id that is
not a decimal number simply does not match any row.

Scope:
- Insert and read ledger transactions; update their approval status.
- The single scalar ``current_balance`` setting.
- Committee CRUD.
- Profile lookup and creation.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from ledger_db.models.ledger import LedgerCommittee, LedgerProfile, LedgerSetting, LedgerTransaction
from .categories import parse_category
from .logging_setup import get_logger
from .models import (
    Committee,
    CommitteeForm,
    PaymentSource,
    TransactionRecord,
    TransactionStatus,
    TransactionType,
    quantize_cents,
)
from .roles import Role, UserProfile

BALANCE_KEY = "current_balance"

logger = get_logger(__name__)


def _db_id(raw: str | int | None) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    s = raw.strip()
    return int(s) if s.isascii() and s.isdigit() else None


def _to_date(raw: str) -> date:
    return date.fromisoformat(raw)


# ---------------------------------------------------------------------------
# Row <-> record mapping
# ---------------------------------------------------------------------------


def _record_from_row(row: LedgerTransaction) -> TransactionRecord:
    return TransactionRecord(
        id=str(row.id),
        date=row.date.isoformat(),
        amount=quantize_cents(Decimal(row.amount)),
        merchant=row.merchant,
        category=parse_category(row.category),
        description=row.description or "",
        type=TransactionType(row.type),
        status=TransactionStatus(row.status),
        submitted_by=row.submitted_by,
        payment_source=PaymentSource(row.payment_source) if row.payment_source else None,
        committee_id=str(row.committee_id) if row.committee_id is not None else None,
        committee_name=row.committee_name,
    )


def _row_from_record(record: TransactionRecord) -> LedgerTransaction:
    return LedgerTransaction(
        date=_to_date(record.date),
        amount=quantize_cents(record.amount),
        merchant=record.merchant,
        category=str(record.category),
        description=record.description,
        type=record.type.value,
        status=record.status.value,
        submitted_by=record.submitted_by,
        payment_source=record.payment_source.value if record.payment_source else None,
        committee_id=_db_id(record.committee_id),
        committee_name=record.committee_name,
        source="import" if record.is_system_import else "manual",
        client_ref=record.id,
    )


def _committee_from_row(row: LedgerCommittee) -> Committee:
    return Committee(
        id=str(row.id),
        name=row.name,
        annual_budget=quantize_cents(Decimal(row.annual_budget)),
        description=row.description,
        chair_name=row.chair_name,
        is_active=bool(row.is_active),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _profile_from_row(row: LedgerProfile) -> UserProfile:
    return UserProfile(
        id=str(row.id),
        email=row.email,
        full_name=row.full_name,
        role=Role(row.role),
    )


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


def save_transactions(
    session: Session, records: Iterable[TransactionRecord]
) -> list[TransactionRecord]:
    """Insert ``records`` and return them re-keyed with their database ids.

    The caller's ids are kept in ``client_ref``.
    """

    rows = [_row_from_record(r) for r in records]
    if not rows:
        return []
    session.add_all(rows)
    session.flush()
    logger.info("Saved %d transaction(s)", len(rows))
    return [_record_from_row(r) for r in rows]


def list_transactions(
    session: Session,
    *,
    status: TransactionStatus | None = None,
) -> list[TransactionRecord]:
    """All transactions, newest first."""

    stmt = select(LedgerTransaction).order_by(
        LedgerTransaction.date.desc(), LedgerTransaction.id.desc()
    )
    if status is not None:
        stmt = stmt.where(LedgerTransaction.status == status.value)
    return [_record_from_row(r) for r in session.execute(stmt).scalars()]


def get_transaction(session: Session, tx_id: str) -> TransactionRecord | None:
    pk = _db_id(tx_id)
    if pk is None:
        return None
    row = session.get(LedgerTransaction, pk)
    return _record_from_row(row) if row is not None else None


def set_transaction_status(
    session: Session,
    tx_id: str,
    status: TransactionStatus,
    *,
    processed_by: str | None = None,
) -> TransactionRecord | None:
    pk = _db_id(tx_id)
    row = session.get(LedgerTransaction, pk) if pk is not None else None
    if row is None:
        return None
    row.status = status.value
    row.processed_by = processed_by
    row.processed_at = datetime.now(timezone.utc)
    row.updated_at = func.now()
    session.flush()
    session.refresh(row)
    logger.info("Transaction %s -> %s (by %s)", tx_id, status.value, processed_by)
    return _record_from_row(row)


# ---------------------------------------------------------------------------
# Balance
# ---------------------------------------------------------------------------


def get_balance(session: Session) -> Decimal:
    """Stored current balance; ``0.00`` when never set."""

    row = session.get(LedgerSetting, BALANCE_KEY)
    if row is None:
        return Decimal("0.00")
    try:
        return quantize_cents(Decimal(row.value))
    except InvalidOperation:
        logger.warning("Ignoring unparseable %s setting: %r", BALANCE_KEY, row.value)
        return Decimal("0.00")


def set_balance(session: Session, value: Decimal) -> Decimal:
    amount = quantize_cents(value)
    row = session.get(LedgerSetting, BALANCE_KEY)
    if row is None:
        session.add(LedgerSetting(key=BALANCE_KEY, value=f"{amount:.2f}"))
    else:
        row.value = f"{amount:.2f}"
        row.updated_at = func.now()
    session.flush()
    logger.info("Balance set to %s", amount)
    return amount


# ---------------------------------------------------------------------------
# Committees
# ---------------------------------------------------------------------------


def list_committees(session: Session, *, active_only: bool = False) -> list[Committee]:
    stmt = select(LedgerCommittee).order_by(LedgerCommittee.name)
    if active_only:
        stmt = stmt.where(LedgerCommittee.is_active.is_(True))
    return [_committee_from_row(r) for r in session.execute(stmt).scalars()]


def get_committee(session: Session, committee_id: str) -> Committee | None:
    pk = _db_id(committee_id)
    row = session.get(LedgerCommittee, pk) if pk is not None else None
    return _committee_from_row(row) if row is not None else None


def add_committee(session: Session, form: CommitteeForm) -> Committee:
    row = LedgerCommittee(
        name=form.name,
        annual_budget=form.annual_budget,
        description=form.description,
        chair_name=form.chair_name,
        is_active=form.is_active,
    )
    session.add(row)
    session.flush()
    session.refresh(row)
    logger.info("Added committee %r (budget %s)", row.name, form.annual_budget)
    return _committee_from_row(row)


def update_committee(session: Session, committee_id: str, form: CommitteeForm) -> Committee | None:
    pk = _db_id(committee_id)
    row = session.get(LedgerCommittee, pk) if pk is not None else None
    if row is None:
        return None
    row.name = form.name
    row.annual_budget = form.annual_budget
    row.description = form.description
    row.chair_name = form.chair_name
    row.is_active = form.is_active
    row.updated_at = func.now()
    session.flush()
    session.refresh(row)
    logger.info("Updated committee %s (%r)", committee_id, row.name)
    return _committee_from_row(row)


def delete_committee(session: Session, committee_id: str) -> Committee | None:
    """Delete a committee; its transactions keep their committee name snapshot."""

    pk = _db_id(committee_id)
    row = session.get(LedgerCommittee, pk) if pk is not None else None
    if row is None:
        return None
    deleted = _committee_from_row(row)
    # Clear explicitly; not every backend enforces ON DELETE SET NULL.
    session.execute(
        update(LedgerTransaction)
        .where(LedgerTransaction.committee_id == pk)
        .values(committee_id=None)
    )
    session.delete(row)
    session.flush()
    logger.info("Deleted committee %s (%r)", committee_id, deleted.name)
    return deleted


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------


def get_profile_by_email(session: Session, email: str) -> UserProfile | None:
    row = session.execute(
        select(LedgerProfile).where(func.lower(LedgerProfile.email) == email.strip().lower())
    ).scalar_one_or_none()
    return _profile_from_row(row) if row is not None else None


def add_profile(session: Session, *, email: str, full_name: str, role: Role) -> UserProfile:
    row = LedgerProfile(email=email.strip().lower(), full_name=full_name.strip(), role=role.value)
    session.add(row)
    session.flush()
    logger.info("Added profile %s (%s)", row.email, role.value)
    return _profile_from_row(row)


__all__ = [
    "BALANCE_KEY",
    "add_committee",
    "add_profile",
    "delete_committee",
    "get_balance",
    "get_committee",
    "get_profile_by_email",
    "get_transaction",
    "list_committees",
    "list_transactions",
    "save_transactions",
    "set_balance",
    "set_transaction_status",
    "update_committee",
]

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# BIGINT identity on Postgres; SQLite only autoincrements an INTEGER rowid key.
_PK = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    pass


# ---------------------------
# Reference: committees
# ---------------------------


class LedgerCommittee(Base):
    __tablename__ = "committees"

    id: Mapped[int] = mapped_column(_PK, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    annual_budget: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), nullable=False, server_default=text("0")
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    chair_name: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("annual_budget >= 0", name="ck_committees_budget_non_negative"),
    )


# ---------------------------
# Core: ledger_transactions
# ---------------------------


class LedgerTransaction(Base):
    __tablename__ = "ledger_transactions"

    id: Mapped[int] = mapped_column(_PK, primary_key=True, autoincrement=True)
    date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    merchant: Mapped[str] = mapped_column(Text, nullable=False)
    # Free text: bank-supplied classification labels outside the chapter's
    # category list are stored verbatim.
    category: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, server_default=text("''"))
    type: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'PENDING'"))
    submitted_by: Mapped[str] = mapped_column(String, nullable=False)
    payment_source: Mapped[str | None] = mapped_column(String, nullable=True)
    committee_id: Mapped[int | None] = mapped_column(
        _PK,
        ForeignKey("committees.id", ondelete="SET NULL"),
        nullable=True,
    )
    # Snapshot of the committee name at submission time; survives committee
    # deletion so history still reads correctly.
    committee_name: Mapped[str | None] = mapped_column(String, nullable=True)
    source: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'manual'"))
    # Client-side identifier assigned before the row existed (e.g. ``import-…``).
    client_ref: Mapped[str | None] = mapped_column(String, nullable=True)
    processed_by: Mapped[str | None] = mapped_column(String, nullable=True)
    processed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_ledger_tx_amount_non_negative"),
        CheckConstraint(
            "type in ('EXPENSE','INCOME','REIMBURSEMENT')",
            name="ck_ledger_tx_type",
        ),
        CheckConstraint(
            "status in ('PENDING','APPROVED','REJECTED')",
            name="ck_ledger_tx_status",
        ),
        CheckConstraint(
            "source in ('import','manual')",
            name="ck_ledger_tx_source",
        ),
        Index("ix_ledger_tx_status", "status"),
        Index("ix_ledger_tx_date", "date"),
        Index("ix_ledger_tx_committee", "committee_id"),
    )


# ---------------------------
# Identity: profiles
# ---------------------------


class LedgerProfile(Base):
    __tablename__ = "profiles"

    id: Mapped[int] = mapped_column(_PK, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False, server_default=text("'member'"))
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        CheckConstraint(
            "role in ('treasurer','president','vice_president','secretary','member')",
            name="ck_profiles_role",
        ),
    )


# ---------------------------
# Scalar settings (current balance)
# ---------------------------


class LedgerSetting(Base):
    __tablename__ = "ledger_settings"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


__all__ = [
    "Base",
    "LedgerCommittee",
    "LedgerProfile",
    "LedgerSetting",
    "LedgerTransaction",
]

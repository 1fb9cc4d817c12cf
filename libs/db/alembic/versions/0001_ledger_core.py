# ruff: noqa: I001
"""Ledger core tables: committees, transactions, profiles, settings.

Revision ID: 0001_ledger_core
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_ledger_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_PK = sa.BigInteger().with_variant(sa.Integer(), "sqlite")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    # committees
    op.create_table(
        "committees",
        sa.Column("id", _PK, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column(
            "annual_budget", sa.Numeric(12, 2), nullable=False, server_default=sa.text("0")
        ),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("chair_name", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        *_timestamps(),
        sa.CheckConstraint("annual_budget >= 0", name="ck_committees_budget_non_negative"),
    )

    # ledger_transactions
    op.create_table(
        "ledger_transactions",
        sa.Column("id", _PK, primary_key=True, autoincrement=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("merchant", sa.Text(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default=sa.text("'PENDING'")),
        sa.Column("submitted_by", sa.String(), nullable=False),
        sa.Column("payment_source", sa.String(), nullable=True),
        sa.Column(
            "committee_id",
            _PK,
            sa.ForeignKey("committees.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("committee_name", sa.String(), nullable=True),
        sa.Column("source", sa.String(), nullable=False, server_default=sa.text("'manual'")),
        sa.Column("client_ref", sa.String(), nullable=True),
        sa.Column("processed_by", sa.String(), nullable=True),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("amount >= 0", name="ck_ledger_tx_amount_non_negative"),
        sa.CheckConstraint(
            "type in ('EXPENSE','INCOME','REIMBURSEMENT')", name="ck_ledger_tx_type"
        ),
        sa.CheckConstraint(
            "status in ('PENDING','APPROVED','REJECTED')", name="ck_ledger_tx_status"
        ),
        sa.CheckConstraint("source in ('import','manual')", name="ck_ledger_tx_source"),
    )
    op.create_index("ix_ledger_tx_status", "ledger_transactions", ["status"])
    op.create_index("ix_ledger_tx_date", "ledger_transactions", ["date"])
    op.create_index("ix_ledger_tx_committee", "ledger_transactions", ["committee_id"])

    # profiles
    op.create_table(
        "profiles",
        sa.Column("id", _PK, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("role", sa.String(), nullable=False, server_default=sa.text("'member'")),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "role in ('treasurer','president','vice_president','secretary','member')",
            name="ck_profiles_role",
        ),
    )

    # ledger_settings (single scalar values such as current_balance)
    op.create_table(
        "ledger_settings",
        sa.Column("key", sa.String(), primary_key=True),
        sa.Column("value", sa.Text(), nullable=False),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )


def downgrade() -> None:
    op.drop_table("ledger_settings")
    op.drop_table("profiles")
    op.drop_index("ix_ledger_tx_committee", table_name="ledger_transactions")
    op.drop_index("ix_ledger_tx_date", table_name="ledger_transactions")
    op.drop_index("ix_ledger_tx_status", table_name="ledger_transactions")
    op.drop_table("ledger_transactions")
    op.drop_table("committees")

"""Request submission, approval, and statement import into the ledger.

Lifecycle of a manual request::

    submit -> PENDING -> approve -> APPROVED   (balance adjusted)
                      -> reject  -> REJECTED

Only the treasurer approves, rejects, or imports. Bank imports arrive already
``APPROVED`` and replace the stored balance with the statement's figure
instead of adjusting it.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from . import persistence
from .committees import find_committee
from .ingest.statement import StatementImport
from .logging_setup import get_logger
from .models import (
    Committee,
    RequestForm,
    TransactionRecord,
    TransactionStatus,
)
from .roles import UserProfile, require_treasurer

logger = get_logger(__name__)

_DECISIONS = (TransactionStatus.APPROVED, TransactionStatus.REJECTED)


class WorkflowError(Exception):
    """A request cannot move to the requested state."""


@dataclass(frozen=True, slots=True)
class ProcessOutcome:
    record: TransactionRecord
    balance: Decimal | None = None


def _new_request_id() -> str:
    return f"tx-{uuid.uuid4().hex}"


def build_request(
    form: RequestForm | Mapping[str, Any],
    submitted_by: str,
    committees: Sequence[Committee] = (),
) -> TransactionRecord:
    """Validate ``form`` and create a ``PENDING`` record.

    Raises ``pydantic.ValidationError`` for invalid input and
    ``WorkflowError`` for an unknown committee.
    """

    if not isinstance(form, RequestForm):
        form = RequestForm.model_validate(dict(form))
    if not submitted_by.strip():
        raise WorkflowError("submitted_by is required")

    committee = find_committee(committees, form.committee_id)
    if form.committee_id is not None and committee is None:
        raise WorkflowError(f"unknown committee: {form.committee_id!r}")

    return TransactionRecord(
        id=_new_request_id(),
        date=form.date.isoformat(),
        amount=form.amount,
        merchant=form.merchant,
        category=form.category,
        description=form.description,
        type=form.type,
        status=TransactionStatus.PENDING,
        submitted_by=submitted_by.strip(),
        payment_source=form.payment_source,
        committee_id=committee.id if committee else None,
        committee_name=committee.name if committee else None,
    )


def submit_request(
    session: Session,
    form: RequestForm | Mapping[str, Any],
    actor: UserProfile,
) -> TransactionRecord:
    """Any signed-in profile may submit; the request waits for the treasurer."""

    record = build_request(form, actor.full_name, persistence.list_committees(session))
    (saved,) = persistence.save_transactions(session, [record])
    logger.info(
        "Request %s submitted by %s: %s %s", saved.id, actor.email, saved.type, saved.amount
    )
    return saved


def balance_adjustment(record: TransactionRecord) -> Decimal:
    """Effect of approving ``record`` on the stored balance."""

    if record.is_system_import:
        return Decimal("0")
    return record.signed_amount


def process_transaction(
    session: Session,
    tx_id: str,
    status: TransactionStatus,
    actor: UserProfile | None,
) -> ProcessOutcome:
    """Approve or reject a pending request."""

    require_treasurer(actor, f"{status.value.lower()} transaction")
    if status not in _DECISIONS:
        raise WorkflowError(f"cannot move a transaction to {status.value}")

    current = persistence.get_transaction(session, tx_id)
    if current is None:
        raise WorkflowError(f"transaction not found: {tx_id}")
    if current.status is not TransactionStatus.PENDING:
        raise WorkflowError(
            f"transaction {tx_id} is already {current.status.value}; only PENDING can be processed"
        )

    updated = persistence.set_transaction_status(
        session, tx_id, status, processed_by=actor.email if actor else None
    )
    assert updated is not None

    new_balance: Decimal | None = None
    delta = balance_adjustment(updated)
    if status is TransactionStatus.APPROVED and delta:
        new_balance = persistence.set_balance(session, persistence.get_balance(session) + delta)
        logger.info("Balance adjusted by %s for %s", delta, tx_id)
    return ProcessOutcome(record=updated, balance=new_balance)


def import_into_ledger(
    session: Session,
    result: StatementImport,
    actor: UserProfile | None,
    *,
    update_balance: bool = True,
) -> list[TransactionRecord]:
    """Persist an import batch; the statement balance replaces the stored one."""

    require_treasurer(actor, "import statement")
    saved = persistence.save_transactions(session, result.transactions)
    if update_balance and result.balance is not None:
        persistence.set_balance(session, result.balance)
    return saved


__all__ = [
    "ProcessOutcome",
    "WorkflowError",
    "balance_adjustment",
    "build_request",
    "import_into_ledger",
    "process_transaction",
    "submit_request",
]

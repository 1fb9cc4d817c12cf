"""Data models and enumerations for ``chapter_ledger``.

Transactions and committees are plain frozen dataclasses so they can move
between the importer, the reports, and the persistence layer without any
framework attached. User input (request forms, committee forms) is validated
with Pydantic models before it becomes a record.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .categories import Category, CategoryLabel, categories_for

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class TransactionType(StrEnum):
    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    REIMBURSEMENT = "REIMBURSEMENT"

    @property
    def is_debit(self) -> bool:
        """Expenses and reimbursements both take money out of the account."""
        return self is not TransactionType.INCOME


class TransactionStatus(StrEnum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class PaymentSource(StrEnum):
    WIX_PAYMENTS = "Wix Payments"
    ZELLE = "Zelle"
    CASHAPP = "CashApp"
    PAYPAL = "PayPal"
    VENMO = "Venmo"
    CHECK = "Check"
    CASH = "Cash"
    BANK_TRANSFER = "Bank Transfer"
    CREDIT_CARD = "Credit Card"
    DEBIT_CARD = "Debit Card"
    OTHER = "Other"


# Submitter sentinels for records that did not come from a person.
BANK_IMPORT = "Bank Import"
SYSTEM_IMPORT = "System Import"

_CENTS = Decimal("0.01")


def quantize_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


# ---------------------------------------------------------------------------
# Core records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One financial event with its approval state.

    ``amount`` is always a non-negative magnitude; direction comes from
    ``type``. ``id`` is opaque: importer and request ids are replaced by the
    database key once the record is persisted.
    """

    id: str
    date: str
    amount: Decimal
    merchant: str
    category: CategoryLabel
    description: str
    type: TransactionType
    status: TransactionStatus
    submitted_by: str
    payment_source: PaymentSource | None = None
    committee_id: str | None = None
    committee_name: str | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"TransactionRecord.amount must be >= 0, got {self.amount}")

    @property
    def is_debit(self) -> bool:
        return self.type.is_debit

    @property
    def signed_amount(self) -> Decimal:
        """Income positive, expenses and reimbursements negative."""
        return -self.amount if self.is_debit else self.amount

    @property
    def is_system_import(self) -> bool:
        return self.submitted_by in (BANK_IMPORT, SYSTEM_IMPORT)

    @property
    def month(self) -> str:
        """``YYYY-MM`` bucket of the transaction date."""
        return self.date[:7]

    def with_status(self, status: TransactionStatus) -> TransactionRecord:
        return replace(self, status=status)


@dataclass(frozen=True, slots=True)
class Committee:
    """A budget-tracking entity that transactions can be charged against."""

    id: str
    name: str
    annual_budget: Decimal
    description: str | None = None
    chair_name: str | None = None
    is_active: bool = True
    created_at: dt.datetime | None = None
    updated_at: dt.datetime | None = None


# ---------------------------------------------------------------------------
# Validated user input
# ---------------------------------------------------------------------------


def _blank_to_none(v: str | None) -> str | None:
    if v is None:
        return None
    s = v.strip()
    return s or None


class RequestForm(BaseModel):
    """A reimbursement request, direct payment, or deposit entered by a user.

    The category must belong to the list offered for the chosen type: income
    categories for ``INCOME``, expense categories otherwise.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    amount: Decimal = Field(gt=0)
    merchant: str = Field(min_length=1)
    date: dt.date = Field(default_factory=dt.date.today)
    category: Category
    description: str = ""
    type: TransactionType = TransactionType.REIMBURSEMENT
    payment_source: PaymentSource = PaymentSource.OTHER
    committee_id: str | None = None

    @field_validator("amount")
    @classmethod
    def _round_to_cents(cls, v: Decimal) -> Decimal:
        return quantize_cents(v)

    @field_validator("committee_id", mode="before")
    @classmethod
    def _committee_blank(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @model_validator(mode="after")
    def _category_matches_type(self) -> RequestForm:
        if self.category not in categories_for(self.type):
            raise ValueError(
                f"category {self.category.value!r} is not offered for "
                f"{self.type.value} transactions"
            )
        return self


class CommitteeForm(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=64)
    annual_budget: Decimal = Field(default=Decimal("0"), ge=0)
    description: str | None = None
    chair_name: str | None = None
    is_active: bool = True

    @field_validator("description", "chair_name", mode="before")
    @classmethod
    def _optional_text(cls, v: str | None) -> str | None:
        return _blank_to_none(v)

    @field_validator("annual_budget")
    @classmethod
    def _round_budget(cls, v: Decimal) -> Decimal:
        return quantize_cents(v)


__all__ = [
    "BANK_IMPORT",
    "SYSTEM_IMPORT",
    "Committee",
    "CommitteeForm",
    "PaymentSource",
    "RequestForm",
    "TransactionRecord",
    "TransactionStatus",
    "TransactionType",
    "quantize_cents",
]

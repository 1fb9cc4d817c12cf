"""Category enumeration for chapter transactions.

The chapter books every transaction against one label from a closed list of
expense categories, income categories, and three bookkeeping literals
(``Transfer``, ``Uncategorized``, ``Misc``). Bank exports sometimes carry their
own classification label; when that label is not one of ours it is kept
verbatim as an :class:`UnlistedCategory` instead of widening the enum.

Exports
-------
- ``Category``: the closed enumeration (a ``StrEnum``; members compare equal
  to their display labels).
- ``EXPENSE_CATEGORIES`` / ``INCOME_CATEGORIES``: ordered subsets used by the
  request form and reports.
- ``UnlistedCategory`` and the ``CategoryLabel`` union.
- ``parse_category(...)`` and ``categories_for(...)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Category(StrEnum):
    # Expenses
    MEETING_EXPENSES = "Meeting Expenses"
    OPERATIONS = "Operations"
    MARKETING_PROMOTIONS = "Marketing & Promotions"
    SPEAKER_GIFTS = "Speaker Gifts"
    TRAVEL_CONFERENCES = "Travel/Conferences"
    SCHOLARSHIPS_AWARDS = "Scholarships & Awards"
    SUPPLIES_MATERIALS = "Supplies & Materials"
    VENUE_RENTAL = "Venue Rental"
    CATERING_FOOD = "Catering & Food"
    ELECTRONICS_SOFTWARE = "Electronics & Software"
    SUBSCRIPTIONS = "Subscriptions"
    PRINTING_STATIONERY = "Printing & Stationery"
    BANK_FEES = "Bank Fees"
    PROCESSING_FEES = "Processing Fees"
    INSURANCE = "Insurance"
    DONATIONS_GIVEN = "Donations Given"
    REFUNDS_ISSUED = "Refunds Issued"
    MISC_EXPENSE = "Misc Expense"
    # Income
    MEMBERSHIP_DUES = "Membership Dues"
    EVENT_REGISTRATION = "Event Registration"
    SPONSORSHIP = "Sponsorship"
    DONATIONS_RECEIVED = "Donations Received"
    FUNDRAISING = "Fundraising"
    MERCHANDISE_SALES = "Merchandise Sales"
    WORKSHOP_FEES = "Workshop Fees"
    ADVERTISING_REVENUE = "Advertising Revenue"
    INTEREST_INCOME = "Interest Income"
    REFUNDS_RECEIVED = "Refunds Received"
    MISC_INCOME = "Misc Income"
    # Bookkeeping literals
    TRANSFER = "Transfer"
    UNCATEGORIZED = "Uncategorized"
    MISC = "Misc"


EXPENSE_CATEGORIES: tuple[Category, ...] = (
    Category.MEETING_EXPENSES,
    Category.OPERATIONS,
    Category.MARKETING_PROMOTIONS,
    Category.SPEAKER_GIFTS,
    Category.TRAVEL_CONFERENCES,
    Category.SCHOLARSHIPS_AWARDS,
    Category.SUPPLIES_MATERIALS,
    Category.VENUE_RENTAL,
    Category.CATERING_FOOD,
    Category.ELECTRONICS_SOFTWARE,
    Category.SUBSCRIPTIONS,
    Category.PRINTING_STATIONERY,
    Category.BANK_FEES,
    Category.PROCESSING_FEES,
    Category.INSURANCE,
    Category.DONATIONS_GIVEN,
    Category.REFUNDS_ISSUED,
    Category.MISC_EXPENSE,
)

INCOME_CATEGORIES: tuple[Category, ...] = (
    Category.MEMBERSHIP_DUES,
    Category.EVENT_REGISTRATION,
    Category.SPONSORSHIP,
    Category.DONATIONS_RECEIVED,
    Category.FUNDRAISING,
    Category.MERCHANDISE_SALES,
    Category.WORKSHOP_FEES,
    Category.ADVERTISING_REVENUE,
    Category.INTEREST_INCOME,
    Category.REFUNDS_RECEIVED,
    Category.MISC_INCOME,
)


@dataclass(frozen=True, slots=True)
class UnlistedCategory:
    """A bank-supplied label that is not part of :class:`Category`.

    ``str()`` yields the label so callers can render either variant the same
    way.
    """

    label: str

    def __str__(self) -> str:
        return self.label


type CategoryLabel = Category | UnlistedCategory

_BY_LABEL: dict[str, Category] = {c.value: c for c in Category}


def parse_category(label: str) -> CategoryLabel:
    """Return the enum member named by ``label``, else an ``UnlistedCategory``."""

    member = _BY_LABEL.get(label)
    if member is not None:
        return member
    return UnlistedCategory(label)


def categories_for(tx_type: str) -> tuple[Category, ...]:
    """Categories offered for a transaction type (income vs. everything else)."""

    return INCOME_CATEGORIES if tx_type == "INCOME" else EXPENSE_CATEGORIES


__all__ = [
    "Category",
    "CategoryLabel",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "UnlistedCategory",
    "categories_for",
    "parse_category",
]

"""Category classification for imported rows.

A bank-supplied classification label takes precedence over keyword
heuristics. Labels outside :class:`Category` are preserved as
:class:`UnlistedCategory` rather than discarded.
"""

from __future__ import annotations

from ..categories import Category, CategoryLabel, parse_category
from ..models import TransactionType
from .rules import KeywordRule, first_match

INCOME_RULES: tuple[KeywordRule[Category], ...] = (
    KeywordRule(("DUES", "MEMBER"), Category.MEMBERSHIP_DUES),
    KeywordRule(("REGISTRATION", "TICKET"), Category.EVENT_REGISTRATION),
    KeywordRule(("SPONSOR",), Category.SPONSORSHIP),
    KeywordRule(("DONATION",), Category.DONATIONS_RECEIVED),
    KeywordRule(("FUNDRAIS",), Category.FUNDRAISING),
    KeywordRule(("WORKSHOP",), Category.WORKSHOP_FEES),
)

EXPENSE_RULES: tuple[KeywordRule[Category], ...] = (
    KeywordRule(("ZOOM", "SOFTWARE"), Category.SUBSCRIPTIONS),
    KeywordRule(("PRINT", "GOTPRINT"), Category.PRINTING_STATIONERY),
    KeywordRule(("FOOD", "PUBLIX", "CATERING"), Category.CATERING_FOOD),
    KeywordRule(("FEE", "MERCHANT"), Category.PROCESSING_FEES),
    KeywordRule(("GIFT", "SPEAKER"), Category.SPEAKER_GIFTS),
)

# Some exports use the generic "Income" label for operating deposits.
_GENERIC_INCOME_LABEL = "Income"


def normalize_label(label: str) -> str:
    return label.replace("&amp;", "&").strip()


def classify_category(
    description: str | None,
    tx_type: TransactionType,
    classification: str | None = None,
) -> CategoryLabel:
    """Pick a category for an imported row.

    >>> classify_category("ZOOM.US 888-799", TransactionType.EXPENSE)
    <Category.SUBSCRIPTIONS: 'Subscriptions'>
    """

    if classification and classification.strip():
        label = normalize_label(classification)
        if label == _GENERIC_INCOME_LABEL:
            return Category.OPERATIONS
        return parse_category(label)

    if tx_type is TransactionType.INCOME:
        return first_match(description, INCOME_RULES, Category.MISC_INCOME)
    return first_match(description, EXPENSE_RULES, Category.MISC_EXPENSE)


__all__ = ["EXPENSE_RULES", "INCOME_RULES", "classify_category", "normalize_label"]

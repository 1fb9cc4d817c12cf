"""Detect the payment rail of a bank description.

Descriptions often mention several rails ("ACH TRANSFER PAYPAL"), so the
rules are ordered and the first match wins.
"""

from __future__ import annotations

from ..models import PaymentSource
from .rules import KeywordRule, first_match

PAYMENT_SOURCE_RULES: tuple[KeywordRule[PaymentSource], ...] = (
    KeywordRule(("WIX",), PaymentSource.WIX_PAYMENTS),
    KeywordRule(("ZELLE",), PaymentSource.ZELLE),
    KeywordRule(("CASHAPP", "CASH APP", "SQUARE CASH"), PaymentSource.CASHAPP),
    KeywordRule(("PAYPAL",), PaymentSource.PAYPAL),
    KeywordRule(("VENMO",), PaymentSource.VENMO),
    KeywordRule(("CHECK", "CHK"), PaymentSource.CHECK),
    KeywordRule(("ACH", "TRANSFER", "XFER"), PaymentSource.BANK_TRANSFER),
    KeywordRule(("VISA", "MASTERCARD", "AMEX"), PaymentSource.CREDIT_CARD),
    KeywordRule(("DEBIT",), PaymentSource.DEBIT_CARD),
)


def detect_payment_source(description: str | None) -> PaymentSource:
    return first_match(description, PAYMENT_SOURCE_RULES, PaymentSource.OTHER)


__all__ = ["PAYMENT_SOURCE_RULES", "detect_payment_source"]

"""Turn raw bank descriptions into display merchant names."""

from __future__ import annotations

import re

BANK_TRANSACTION = "Bank Transaction"
ZELLE_TRANSFER = "Zelle Transfer"

_ZELLE_NAME_RE = re.compile(r"(?:DEBIT\s+)?ZELLE\s+([A-Za-z\s]+?)\s+\d", re.IGNORECASE)

# Rails whose own name is the most useful merchant label.
_RAIL_MERCHANTS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("WIX",), "Wix Payments"),
    (("PAYPAL",), "PayPal"),
    (("CASHAPP", "CASH APP"), "CashApp"),
)

# Any run of leading boilerplate, so a second pass finds nothing left to strip.
_BOILERPLATE_RE = re.compile(
    r"^(?:(?:DEBIT|CREDIT|ACH|PREAUTHORIZED|WD)\b\s*)+", re.IGNORECASE
)


def _zelle_counterparty(description: str) -> str:
    m = _ZELLE_NAME_RE.search(description)
    if m:
        name = m.group(1).strip()
        if name.lower() != "transfer" and len(name) > 1:
            return name
    return ZELLE_TRANSFER


def strip_boilerplate(text: str) -> str:
    return _BOILERPLATE_RE.sub("", text.strip()).strip()


def extract_merchant_name(description: str | None) -> str:
    """Best-effort counterparty name for a bank description.

    >>> extract_merchant_name("ZELLE JANE DOE 1234")
    'JANE DOE'
    >>> extract_merchant_name("DEBIT ACH OFFICE DEPOT #12")
    'OFFICE DEPOT #12'
    """

    s = (description or "").strip()
    if not s:
        return BANK_TRANSACTION

    upper = s.upper()
    if "ZELLE" in upper:
        return _zelle_counterparty(s)
    for markers, merchant in _RAIL_MERCHANTS:
        if any(m in upper for m in markers):
            return merchant

    return strip_boilerplate(s) or BANK_TRANSACTION


__all__ = ["BANK_TRANSACTION", "ZELLE_TRANSFER", "extract_merchant_name", "strip_boilerplate"]

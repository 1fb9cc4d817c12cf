"""Bank export layouts (column positions) for the statement importer.

Bank CSV exports are positional. Rather than scattering indices through the
importer, each known layout is described once as a ``BankFormatProfile`` and
rows are read through :meth:`BankFormatProfile.get` by field name.

The ``checking`` profile matches the chapter's bank export:

====================  =====
field                 index
====================  =====
date                  1
description           3
debit                 4
credit                5
balance (optional)    7
classification (opt)  8
====================  =====

Rows with fewer than ``min_fields`` columns are not transactions.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass

PROFILE_ENV = "LEDGER_BANK_PROFILE"
DEFAULT_PROFILE_NAME = "checking"

_REQUIRED = ("date", "description", "debit", "credit")


@dataclass(frozen=True, slots=True)
class BankFormatProfile:
    name: str
    date: int
    description: int
    debit: int
    credit: int
    balance: int | None = None
    classification: int | None = None
    min_fields: int = 6

    def __post_init__(self) -> None:
        highest = max(getattr(self, f) for f in _REQUIRED)
        if self.min_fields <= highest:
            raise ValueError(
                f"BankFormatProfile {self.name!r}: min_fields={self.min_fields} does not "
                f"cover required column index {highest}"
            )

    def get(self, fields: Sequence[str], name: str) -> str:
        """Return the named field from a tokenized row, or ``""`` when absent."""

        idx: int | None = getattr(self, name)
        if idx is None or idx >= len(fields):
            return ""
        return fields[idx]


CHECKING = BankFormatProfile(
    name="checking",
    date=1,
    description=3,
    debit=4,
    credit=5,
    balance=7,
    classification=8,
)

PROFILES: dict[str, BankFormatProfile] = {p.name: p for p in (CHECKING,)}


def get_profile(name: str | None = None) -> BankFormatProfile:
    """Resolve a profile by name, falling back to ``LEDGER_BANK_PROFILE``."""

    key = (name or os.getenv(PROFILE_ENV) or DEFAULT_PROFILE_NAME).strip().lower()
    try:
        return PROFILES[key]
    except KeyError:
        known = ", ".join(sorted(PROFILES))
        raise ValueError(f"unknown bank profile: {key!r} (known: {known})") from None


__all__ = [
    "CHECKING",
    "DEFAULT_PROFILE_NAME",
    "PROFILES",
    "PROFILE_ENV",
    "BankFormatProfile",
    "get_profile",
]

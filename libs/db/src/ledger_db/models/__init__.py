"""Shared SQLAlchemy models registry for the chapter ledger database.

Currently includes the ledger domain models used by ``chapter_ledger``.
"""

from .ledger import Base, LedgerCommittee, LedgerProfile, LedgerSetting, LedgerTransaction

__all__ = [
    "Base",
    "LedgerCommittee",
    "LedgerProfile",
    "LedgerSetting",
    "LedgerTransaction",
]

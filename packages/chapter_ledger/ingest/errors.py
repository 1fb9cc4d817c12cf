"""Errors raised by the bank statement importer.

Malformed or zero-amount rows are never errors; the importer counts and
skips them. Only two outcomes end an upload attempt:

- ``NoValidTransactionsError``: the file parsed but no row became a record.
- ``StatementParseError``: the file could not be read or processing raised.
  The original exception is chained as ``__cause__``.
"""

from __future__ import annotations

NO_VALID_TRANSACTIONS_MESSAGE = (
    "No valid transactions found. Please ensure the CSV format matches your bank statement."
)
PARSE_FAILED_MESSAGE = "Failed to parse CSV file. Please check the format."


class StatementImportError(Exception):
    """Base class for import failures; ``str(err)`` is safe to show to users."""


class NoValidTransactionsError(StatementImportError):
    def __init__(self, message: str = NO_VALID_TRANSACTIONS_MESSAGE) -> None:
        super().__init__(message)


class StatementParseError(StatementImportError):
    def __init__(self, message: str = PARSE_FAILED_MESSAGE) -> None:
        super().__init__(message)


__all__ = [
    "NO_VALID_TRANSACTIONS_MESSAGE",
    "PARSE_FAILED_MESSAGE",
    "NoValidTransactionsError",
    "StatementImportError",
    "StatementParseError",
]

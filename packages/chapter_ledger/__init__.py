"""chapter_ledger: bank statement import and approval workflow for a chapter treasury.

Public API re-exports the pieces most callers need; see the submodules for
the rest (``ingest``, ``reports``, ``committees``, ``workflow``,
``persistence``).
"""

from .categories import Category, UnlistedCategory
from .ingest import (
    NoValidTransactionsError,
    StatementImport,
    StatementImportError,
    StatementParseError,
    import_statement,
    import_statement_file,
)
from .models import (
    Committee,
    PaymentSource,
    TransactionRecord,
    TransactionStatus,
    TransactionType,
)

__all__ = [
    "Category",
    "Committee",
    "NoValidTransactionsError",
    "PaymentSource",
    "StatementImport",
    "StatementImportError",
    "StatementParseError",
    "TransactionRecord",
    "TransactionStatus",
    "TransactionType",
    "UnlistedCategory",
    "import_statement",
    "import_statement_file",
]

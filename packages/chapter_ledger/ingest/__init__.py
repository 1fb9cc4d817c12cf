"""Bank statement ingestion: tokenizer, field mapping, heuristics, importer."""

from .classifier import classify_category
from .errors import NoValidTransactionsError, StatementImportError, StatementParseError
from .fields import MappedRow, map_row, parse_amount, parse_statement_date
from .merchants import extract_merchant_name
from .payment_sources import detect_payment_source
from .profiles import CHECKING, BankFormatProfile, get_profile
from .statement import StatementImport, import_statement, import_statement_file
from .tokenizer import split_csv_line

__all__ = [
    "CHECKING",
    "BankFormatProfile",
    "MappedRow",
    "NoValidTransactionsError",
    "StatementImport",
    "StatementImportError",
    "StatementParseError",
    "classify_category",
    "detect_payment_source",
    "extract_merchant_name",
    "get_profile",
    "import_statement",
    "import_statement_file",
    "map_row",
    "parse_amount",
    "parse_statement_date",
    "split_csv_line",
]

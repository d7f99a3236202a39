"""
Statement parsers for SpendLens.

Supports:
- CSV exports with any column layout (header inference, sign inference)
- Text-based PDF statements (date-prefixed line extraction)
"""

from spendlens.parsers.statement.models import (
    Transaction,
    ParseResult,
    DEFAULT_CATEGORY,
    DEFAULT_DESCRIPTION,
)
from spendlens.parsers.statement.tabular import TabularData, parse_delimited, split_line
from spendlens.parsers.statement.columns import ColumnMapping, infer_columns, COLUMN_CANDIDATES
from spendlens.parsers.statement.amounts import (
    parse_amount,
    normalize_amount,
    resolve_sign_convention,
    amount_from_row,
)
from spendlens.parsers.statement.dates import parse_date, try_parse_date
from spendlens.parsers.statement.base import StatementParser
from spendlens.parsers.statement.csv_parser import CSVStatementParser
from spendlens.parsers.statement.pdf_parser import PDFStatementParser

__all__ = [
    "Transaction",
    "ParseResult",
    "DEFAULT_CATEGORY",
    "DEFAULT_DESCRIPTION",
    "TabularData",
    "parse_delimited",
    "split_line",
    "ColumnMapping",
    "infer_columns",
    "COLUMN_CANDIDATES",
    "parse_amount",
    "normalize_amount",
    "resolve_sign_convention",
    "amount_from_row",
    "parse_date",
    "try_parse_date",
    "StatementParser",
    "CSVStatementParser",
    "PDFStatementParser",
]

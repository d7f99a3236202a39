"""
CSV statement parser.

Parses card and bank CSV exports without assuming a fixed schema: columns
are inferred from header labels and the sign convention is inferred from
the data when only a unified amount column exists.
"""

import logging
from typing import Optional

from spendlens.core.exceptions import ParseFailureError
from spendlens.parsers.statement.amounts import (
    DEFAULT_SIGN_SAMPLE_SIZE,
    amount_from_row,
    resolve_sign_convention,
)
from spendlens.parsers.statement.base import StatementParser
from spendlens.parsers.statement.columns import ColumnMapping, infer_columns
from spendlens.parsers.statement.dates import parse_date, try_parse_date
from spendlens.parsers.statement.models import DEFAULT_DESCRIPTION, ParseResult, Transaction
from spendlens.parsers.statement.tabular import TabularData, parse_delimited

logger = logging.getLogger(__name__)

ENCODINGS = ["utf-8", "cp1252"]


def decode_text(content: bytes, source_file: str = "") -> str:
    """Decode CSV bytes, trying each known encoding in turn."""
    for encoding in ENCODINGS:
        try:
            return content.decode(encoding)
        except UnicodeDecodeError:
            continue

    raise ParseFailureError(
        f"Could not decode {source_file or 'file'} as text",
        source_file=source_file
    )


class CSVStatementParser(StatementParser):
    """Parser for delimited statement exports."""

    FORMAT_NAME = "CSV"
    EXTENSIONS = (".csv",)

    def __init__(
        self,
        categorizer=None,
        today=None,
        delimiter: str = ",",
        sign_sample_size: int = DEFAULT_SIGN_SAMPLE_SIZE
    ):
        super().__init__(categorizer=categorizer, today=today)
        self.delimiter = delimiter
        self.sign_sample_size = sign_sample_size

    def _parse_content(self, content: bytes, source_file: str) -> ParseResult:
        """Parse CSV content into transactions."""
        text = decode_text(content, source_file)
        table = parse_delimited(text, self.delimiter)
        return self.parse_table(table)

    def parse_table(self, table: TabularData) -> ParseResult:
        """Convert an already tokenized table into transactions."""
        result = ParseResult()
        if table.is_empty:
            return result

        columns = infer_columns(table.headers)
        positive_is_charge = self._resolve_sign_convention(table, columns)
        logger.debug(f"Columns {columns}, positive_is_charge={positive_is_charge}")

        defaulted_dates = 0
        for idx, row in enumerate(table.rows):
            txn = self._parse_row(row, columns, positive_is_charge)
            if txn is None:
                result.skipped_rows += 1
                logger.debug(f"Skipping row {idx + 1}: amount out of range")
                continue

            if try_parse_date(TabularData.cell(row, columns.date_index)) is None:
                defaulted_dates += 1

            result.transactions.append(txn)

        if defaulted_dates:
            result.add_warning(f"{defaulted_dates} row(s) had unparseable dates; used today's date")

        return result

    def _resolve_sign_convention(self, table: TabularData, columns: ColumnMapping) -> bool:
        """Sample the unified amount column; False when inference does not apply."""
        if not columns.uses_unified_amount:
            return False
        return resolve_sign_convention(table.rows, columns.amount, self.sign_sample_size)

    def _parse_row(self, row, columns: ColumnMapping, positive_is_charge: bool) -> Optional[Transaction]:
        """Build one transaction, or None if the amount is out of range."""
        txn_date = parse_date(TabularData.cell(row, columns.date_index), self.today)
        description = TabularData.cell(row, columns.description_index) or DEFAULT_DESCRIPTION

        amount = amount_from_row(
            debit_raw=TabularData.cell(row, columns.debit),
            credit_raw=TabularData.cell(row, columns.credit),
            amount_raw=TabularData.cell(row, columns.amount_index),
            positive_is_charge=positive_is_charge,
        )
        if amount is None:
            return None

        category = self.categorizer.categorize(description, TabularData.cell(row, columns.category))

        return Transaction(
            date=txn_date,
            description=description,
            amount=amount,
            category=category,
        )

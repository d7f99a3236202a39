"""
PDF statement parser.

Extracts page text in page order and recovers transactions from lines that
start with an ISO-style date. Lines are tokenized on runs of two or more
spaces (or comma + space); the last numeric token is the amount and the
tokens between the date and the amount form the description.
"""

import io
import logging
import re
from typing import Callable, List, Optional

import pdfplumber

from spendlens.core.exceptions import ParseFailureError
from spendlens.parsers.statement.amounts import parse_amount
from spendlens.parsers.statement.base import StatementParser
from spendlens.parsers.statement.dates import parse_date
from spendlens.parsers.statement.models import DEFAULT_DESCRIPTION, ParseResult, Transaction

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]

DATE_PREFIX_RE = re.compile(r"^(\d{4})[-/](\d{2})[-/](\d{2})")
TOKEN_SPLIT_RE = re.compile(r"\s{2,}|,\s+")
AMOUNT_TOKEN_RE = re.compile(r"[-+]?\(?[-+]?[$€£¥₹]?\s?\d[\d,]*(?:\.\d+)?\)?")

MIN_TOKENS = 3


def tokenize_line(line: str) -> List[str]:
    """Split a statement line into non-empty tokens."""
    return [token.strip() for token in TOKEN_SPLIT_RE.split(line) if token and token.strip()]


def find_amount_index(tokens: List[str]) -> Optional[int]:
    """Index of the last numeric token after the date token, or None."""
    for idx in range(len(tokens) - 1, 0, -1):
        if AMOUNT_TOKEN_RE.fullmatch(tokens[idx]):
            return idx
    return None


class PDFStatementParser(StatementParser):
    """Parser for text-based PDF statements."""

    FORMAT_NAME = "PDF"
    EXTENSIONS = (".pdf",)

    def __init__(
        self,
        categorizer=None,
        today=None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        """
        Initialize parser.

        Args:
            categorizer: Transaction categorizer
            today: Clock used for impossible dates
            progress_callback: Callback function(percent) called after each page
        """
        super().__init__(categorizer=categorizer, today=today)
        self.progress_callback = progress_callback

    def extract_text(self, content: bytes, password: Optional[str] = None) -> str:
        """
        Extract text from all pages, in page order, separated by newlines.

        Raises:
            ParseFailureError: If the document cannot be opened or read
        """
        page_texts = []

        try:
            pdf = pdfplumber.open(io.BytesIO(content), password=password)
            pages = pdf.pages
        except Exception as e:
            raise ParseFailureError(f"Could not read PDF: {e}") from e

        with pdf:
            total = len(pages)
            for page_num, page in enumerate(pages, start=1):
                try:
                    text = page.extract_text(layout=True)
                except Exception as e:
                    raise ParseFailureError(f"Could not read PDF page {page_num}: {e}") from e
                page_texts.append(text or "")

                # Callback errors propagate unchanged
                if self.progress_callback and total:
                    self.progress_callback(int(page_num * 100 / total))

        return "\n".join(page_texts)

    def _parse_content(self, content: bytes, source_file: str) -> ParseResult:
        """Parse PDF content into transactions."""
        try:
            text = self.extract_text(content)
        except ParseFailureError as e:
            e.source_file = source_file
            raise

        return self.parse_text(text)

    def parse_text(self, text: str) -> ParseResult:
        """Extract transactions from statement text."""
        result = ParseResult()

        lines = [line.strip() for line in text.splitlines()]
        for line in lines:
            if not line:
                continue

            match = DATE_PREFIX_RE.match(line)
            if not match:
                continue

            txn = self._parse_line(line, match)
            if txn is None:
                result.skipped_rows += 1
                logger.debug(f"Skipping line: {line!r}")
                continue

            result.transactions.append(txn)

        return result

    def _parse_line(self, line: str, date_match: "re.Match") -> Optional[Transaction]:
        """Build a transaction from a date-prefixed line, or None."""
        tokens = tokenize_line(line)
        if len(tokens) < MIN_TOKENS:
            return None

        amount_idx = find_amount_index(tokens)
        if amount_idx is None:
            return None

        amount = parse_amount(tokens[amount_idx])
        if amount is None:
            return None

        description = " ".join(tokens[1:amount_idx]) or DEFAULT_DESCRIPTION
        txn_date = parse_date("-".join(date_match.groups()), self.today)

        return Transaction(
            date=txn_date,
            description=description,
            amount=amount,
            category=self.categorizer.categorize(description),
        )

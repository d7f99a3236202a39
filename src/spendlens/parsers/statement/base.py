"""
Base class for statement parsers.

Provides common functionality for turning raw statement bytes into a
ParseResult of categorized transactions.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple

from spendlens.core.exceptions import NO_TRANSACTIONS_FOUND
from spendlens.parsers.statement.dates import Clock
from spendlens.parsers.statement.models import ParseResult
from spendlens.services.insights.category_rules import TransactionCategorizer

logger = logging.getLogger(__name__)


class StatementParser(ABC):
    """Abstract base class for statement parsers."""

    FORMAT_NAME: str = ""  # Override in subclass
    EXTENSIONS: Tuple[str, ...] = ()  # Override in subclass

    def __init__(
        self,
        categorizer: Optional[TransactionCategorizer] = None,
        today: Optional[Clock] = None
    ):
        """
        Initialize parser.

        Args:
            categorizer: Transaction categorizer (default rules if omitted)
            today: Clock used for unparseable dates; defaults to date.today
        """
        self.categorizer = categorizer or TransactionCategorizer()
        self.today = today

    def parse(self, content: bytes, source_file: str = "") -> ParseResult:
        """
        Parse statement content.

        Args:
            content: Raw file bytes
            source_file: Original filename, used for messages only

        Returns:
            ParseResult; an empty transaction list carries a
            NO_TRANSACTIONS_FOUND warning instead of raising

        Raises:
            ParseFailureError: If the content is structurally unreadable
        """
        result = self._parse_content(content, source_file)
        result.source_file = source_file

        if not result.transactions:
            result.add_warning(f"{NO_TRANSACTIONS_FOUND}: No transactions found in {source_file or 'statement'}")
            logger.warning(f"{self.FORMAT_NAME} {source_file}: no transactions found")
        else:
            logger.info(
                f"{self.FORMAT_NAME} {source_file}: {result.transaction_count} parsed, "
                f"{result.skipped_rows} skipped"
            )

        return result.finalize()

    def parse_file(self, file_path: Path) -> ParseResult:
        """Read a statement from disk and parse it."""
        file_path = Path(file_path)
        return self.parse(file_path.read_bytes(), file_path.name)

    @abstractmethod
    def _parse_content(self, content: bytes, source_file: str) -> ParseResult:
        """
        Parse raw content. Override in subclass.

        Args:
            content: Raw file bytes
            source_file: Source filename

        Returns:
            ParseResult
        """
        pass

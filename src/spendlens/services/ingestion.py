"""
Statement Ingestion Pipeline for SpendLens.

Selects a parser by file extension, parses the upload into normalized
transactions, then derives the summary, recurring charges, interest
projection and rewards estimate from the finished list.

Every invocation is a pure function of (filename, bytes): the analyzer holds
only read-only configuration, so one instance may serve concurrent uploads.

Usage:
    analyzer = StatementAnalyzer()
    result = analyzer.ingest("statement.csv", content)
    if result.error_message:
        print(result.error_message)
    else:
        print(result.status_message)
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from spendlens.core.exceptions import (
    ParseFailureError,
    SpendLensError,
    StoreError,
    UnsupportedFileTypeError,
)
from spendlens.core.preferences import AnalyzerPreferences
from spendlens.core.store import TransactionStore
from spendlens.parsers.statement.base import StatementParser
from spendlens.parsers.statement.csv_parser import CSVStatementParser
from spendlens.parsers.statement.dates import Clock
from spendlens.parsers.statement.models import ParseResult, Transaction
from spendlens.parsers.statement.pdf_parser import PDFStatementParser
from spendlens.services.insights.category_rules import TransactionCategorizer
from spendlens.services.insights.interest import estimate_monthly_interest
from spendlens.services.insights.models import RewardsOpportunity, SubscriptionCandidate, Summary
from spendlens.services.insights.rewards import estimate_rewards_opportunity
from spendlens.services.insights.subscriptions import SubscriptionDetector
from spendlens.services.insights.summary import SummaryAggregator

logger = logging.getLogger(__name__)

# User-facing messages
MSG_CSV_SUCCESS = "Parsed {count} transactions successfully."
MSG_PDF_SUCCESS = "Parsed {count} transactions from PDF."
MSG_CSV_EMPTY = "No transactions found. Ensure your CSV has columns like Date, Description, Amount."
MSG_PDF_EMPTY = "Could not detect transactions in the PDF. Try exporting as CSV for best results."
MSG_UNSUPPORTED = "Unsupported file type. Upload a CSV or PDF statement."
MSG_PARSE_FAILURE = "Failed to parse file. Try a CSV export for best results."


@dataclass
class AnalysisResult:
    """
    Complete result of analyzing one statement upload.

    Exactly one of status_message (success) or error_message (fatal error,
    or the non-fatal "no transactions" warning) is set by ingest().
    """

    source_file: str = ""
    file_type: str = ""
    transactions: List[Transaction] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)
    subscriptions: List[SubscriptionCandidate] = field(default_factory=list)
    apr: Decimal = Decimal("0")
    monthly_interest: Decimal = Decimal("0")
    rewards: RewardsOpportunity = field(default_factory=RewardsOpportunity)
    skipped_rows: int = 0
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    success: bool = True
    status_message: Optional[str] = None
    error_message: Optional[str] = None

    def add_error(self, error: str) -> None:
        """Add an error message."""
        self.errors.append(error)

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "source_file": self.source_file,
            "file_type": self.file_type,
            "success": self.success,
            "status_message": self.status_message,
            "error_message": self.error_message,
            "transactions": [t.to_dict() for t in self.transactions],
            "summary": self.summary.to_dict(),
            "subscriptions": [s.to_dict() for s in self.subscriptions],
            "apr": str(self.apr),
            "monthly_interest": str(self.monthly_interest),
            "rewards": self.rewards.to_dict(),
            "skipped_rows": self.skipped_rows,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
        }


class StatementAnalyzer:
    """
    Statement ingestion pipeline.

    analyze() raises on fatal errors; ingest() is the UI-facing wrapper that
    converts them into a result with a user-facing message.
    """

    def __init__(
        self,
        preferences: Optional[AnalyzerPreferences] = None,
        categorizer: Optional[TransactionCategorizer] = None,
        today: Optional[Clock] = None,
        progress_callback: Optional[Callable[[int], None]] = None
    ):
        """
        Initialize analyzer.

        Args:
            preferences: Pipeline configuration (defaults if omitted)
            categorizer: Transaction categorizer (default rules if omitted)
            today: Clock for unparseable dates; inject a fixed one in tests
            progress_callback: Callback function(percent) during PDF extraction
        """
        self.preferences = preferences or AnalyzerPreferences()
        self.categorizer = categorizer or TransactionCategorizer()
        self.today = today
        self.progress_callback = progress_callback
        self.aggregator = SummaryAggregator()

        subs = self.preferences.subscriptions
        self.subscription_detector = SubscriptionDetector(
            max_candidates=subs.max_candidates,
            variation_threshold=subs.variation_threshold,
            min_occurrences=subs.min_occurrences,
            min_distinct_months=subs.min_distinct_months,
        )

    def parser_for(self, filename: str) -> StatementParser:
        """
        Select a parser by file extension (case-insensitive).

        Raises:
            UnsupportedFileTypeError: For anything other than .csv or .pdf
        """
        suffix = Path(filename or "").suffix.lower()

        if suffix in CSVStatementParser.EXTENSIONS:
            return CSVStatementParser(
                categorizer=self.categorizer,
                today=self.today,
                delimiter=self.preferences.parsing.csv_delimiter,
                sign_sample_size=self.preferences.parsing.sign_sample_size,
            )
        if suffix in PDFStatementParser.EXTENSIONS:
            return PDFStatementParser(
                categorizer=self.categorizer,
                today=self.today,
                progress_callback=self.progress_callback,
            )

        raise UnsupportedFileTypeError(filename)

    def analyze(self, filename: str, content: bytes, apr=None) -> AnalysisResult:
        """
        Run the full pipeline on one upload.

        Args:
            filename: Original filename (extension selects the parser)
            content: Raw file bytes
            apr: Annual percentage rate for the interest projection;
                 defaults to the configured default APR

        Returns:
            AnalysisResult (not yet carrying user-facing messages)

        Raises:
            UnsupportedFileTypeError: Extension not recognized
            ParseFailureError: Content structurally unreadable
        """
        parser = self.parser_for(filename)
        logger.info(f"Analyzing {filename} with {parser.FORMAT_NAME} parser")

        parsed = parser.parse(content, filename)
        result = self.build_insights(parsed.transactions, apr=apr)
        result.source_file = filename
        result.file_type = parser.FORMAT_NAME
        result.skipped_rows = parsed.skipped_rows
        result.warnings = list(parsed.warnings)
        return result

    def build_insights(self, transactions: List[Transaction], apr=None) -> AnalysisResult:
        """Derive summary, subscriptions, interest and rewards from transactions."""
        apr = self.preferences.default_apr if apr is None else Decimal(str(apr))
        summary = self.aggregator.summarize(transactions)

        return AnalysisResult(
            transactions=list(transactions),
            summary=summary,
            subscriptions=self.subscription_detector.detect(transactions),
            apr=apr,
            monthly_interest=estimate_monthly_interest(summary.balance, apr),
            rewards=estimate_rewards_opportunity(
                summary,
                baseline_rate=self.preferences.rewards.baseline_rate,
                category_rates=self.preferences.rewards.category_rates,
            ),
        )

    def ingest(self, filename: str, content: bytes, apr=None) -> AnalysisResult:
        """
        UI-facing pipeline run; never raises SpendLensError.

        Fatal errors reset to an empty result with success=False. An empty
        but structurally valid statement keeps success=True and sets the
        "no transactions" warning as error_message.
        """
        try:
            result = self.analyze(filename, content, apr=apr)
        except UnsupportedFileTypeError as e:
            logger.error(f"{filename}: {e.message}")
            return self._failed(filename, e, MSG_UNSUPPORTED)
        except ParseFailureError as e:
            logger.error(f"{filename}: {e.message}")
            return self._failed(filename, e, MSG_PARSE_FAILURE)

        is_pdf = result.file_type == PDFStatementParser.FORMAT_NAME
        if result.transactions:
            template = MSG_PDF_SUCCESS if is_pdf else MSG_CSV_SUCCESS
            result.status_message = template.format(count=result.transaction_count)
        else:
            result.error_message = MSG_PDF_EMPTY if is_pdf else MSG_CSV_EMPTY

        return result

    def _failed(self, filename: str, error: SpendLensError, message: str) -> AnalysisResult:
        result = self.build_insights([])
        result.source_file = filename
        result.success = False
        result.error_message = message
        result.add_error(f"{error.code}: {error.message}")
        return result

    def persist(self, result: AnalysisResult, store: TransactionStore, key: Optional[str] = None) -> None:
        """Write the result's transaction list to an external store."""
        save_transactions(store, key or self.preferences.transactions_key, result.transactions)

    def reload(self, store: TransactionStore, key: Optional[str] = None, apr=None) -> AnalysisResult:
        """Rebuild insights from a previously persisted transaction list."""
        transactions = load_transactions(store, key or self.preferences.transactions_key)
        return self.build_insights(transactions, apr=apr)


def save_transactions(store: TransactionStore, key: str, transactions: List[Transaction]) -> None:
    """Serialize transactions into the store under key (last write wins)."""
    store.set(key, [t.to_dict() for t in transactions])
    logger.info(f"Stored {len(transactions)} transactions under '{key}'")


def load_transactions(store: TransactionStore, key: str) -> List[Transaction]:
    """
    Load transactions written by save_transactions; empty if absent.

    Raises:
        StoreError: If a stored entry is malformed
    """
    items = store.get(key, []) or []
    try:
        return [Transaction.from_dict(item) for item in items]
    except (KeyError, TypeError, ValueError, AttributeError, InvalidOperation) as e:
        raise StoreError(f"Malformed transaction under '{key}': {e!r}", key=key) from e

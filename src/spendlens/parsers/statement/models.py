"""
Statement transaction data models.

Dataclasses for representing parsed card and bank statements.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict, Any

DEFAULT_CATEGORY = "Other"
DEFAULT_DESCRIPTION = "Transaction"


@dataclass(frozen=True)
class Transaction:
    """
    A single normalized statement line.

    amount > 0 is a charge (spend), amount < 0 is a credit (payment or refund),
    whichever parsing path produced the record.
    """

    date: date
    description: str
    amount: Decimal
    category: str = DEFAULT_CATEGORY

    def __post_init__(self):
        """Convert numeric types to Decimal."""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

    @property
    def is_charge(self) -> bool:
        """Check if transaction increases the owed balance."""
        return self.amount > 0

    @property
    def is_credit(self) -> bool:
        """Check if transaction is a payment or refund."""
        return self.amount < 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": str(self.amount),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Restore a transaction written by to_dict()."""
        return cls(
            date=date.fromisoformat(data["date"]),
            description=data["description"],
            amount=Decimal(str(data["amount"])),
            category=data.get("category") or DEFAULT_CATEGORY,
        )


@dataclass
class ParseResult:
    """Result of parsing one statement file."""

    transactions: List[Transaction] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    skipped_rows: int = 0
    source_file: str = ""
    statement_period_start: Optional[date] = None
    statement_period_end: Optional[date] = None

    def add_warning(self, warning: str) -> None:
        """Add a warning message."""
        self.warnings.append(warning)

    def finalize(self) -> "ParseResult":
        """Set the statement period from the parsed transaction dates."""
        if self.transactions:
            dates = [t.date for t in self.transactions]
            self.statement_period_start = min(dates)
            self.statement_period_end = max(dates)
        return self

    @property
    def transaction_count(self) -> int:
        """Get number of transactions parsed."""
        return len(self.transactions)

    @property
    def total_charges(self) -> Decimal:
        """Sum of positive amounts."""
        return sum((t.amount for t in self.transactions if t.amount > 0), Decimal("0"))

    @property
    def total_credits(self) -> Decimal:
        """Sum of absolute negative amounts."""
        return sum((-t.amount for t in self.transactions if t.amount < 0), Decimal("0"))

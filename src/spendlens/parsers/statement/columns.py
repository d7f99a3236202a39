"""
Header-to-field mapping for statement exports.

Each semantic role has an ordered candidate vocabulary. The first header (in
file order) that contains any candidate as a substring wins the role.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

# Candidate vocabularies, matched as case-insensitive substrings
COLUMN_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "date": ("date", "transaction date", "posting date", "post date"),
    "description": ("description", "merchant", "details", "narration", "name", "memo"),
    "amount": ("amount", "value", "transaction amount", "amount ($)"),
    "debit": ("debit", "withdrawal", "withdrawals", "outflow", "debits"),
    "credit": ("credit", "deposit", "inflow", "credits", "payment"),
    "category": ("category", "type"),
}

# Positional fallbacks used when a role is unmapped
DEFAULT_DATE_INDEX = 0
DEFAULT_DESCRIPTION_INDEX = 1
DEFAULT_AMOUNT_INDEX = 2


@dataclass(frozen=True)
class ColumnMapping:
    """Semantic role -> column index; any role may be None."""

    date: Optional[int] = None
    description: Optional[int] = None
    amount: Optional[int] = None
    debit: Optional[int] = None
    credit: Optional[int] = None
    category: Optional[int] = None

    @property
    def date_index(self) -> int:
        return DEFAULT_DATE_INDEX if self.date is None else self.date

    @property
    def description_index(self) -> int:
        return DEFAULT_DESCRIPTION_INDEX if self.description is None else self.description

    @property
    def amount_index(self) -> int:
        return DEFAULT_AMOUNT_INDEX if self.amount is None else self.amount

    @property
    def has_debit_credit(self) -> bool:
        """True if either a debit or a credit column was found."""
        return self.debit is not None or self.credit is not None

    @property
    def uses_unified_amount(self) -> bool:
        """True when sign inference applies (amount mapped, no debit/credit)."""
        return self.amount is not None and not self.has_debit_credit

    def mapped_roles(self) -> List[str]:
        return [role for role in COLUMN_CANDIDATES if getattr(self, role) is not None]


def find_column(headers: Sequence[str], candidates: Sequence[str]) -> Optional[int]:
    """Return the index of the first header containing any candidate."""
    for idx, header in enumerate(headers):
        header_lower = str(header).lower()
        if any(candidate in header_lower for candidate in candidates):
            return idx
    return None


def infer_columns(headers: Sequence[str]) -> ColumnMapping:
    """
    Map header labels to semantic roles.

    Args:
        headers: Header labels in file order

    Returns:
        ColumnMapping with None for roles without a matching header
    """
    return ColumnMapping(**{
        role: find_column(headers, candidates)
        for role, candidates in COLUMN_CANDIDATES.items()
    })

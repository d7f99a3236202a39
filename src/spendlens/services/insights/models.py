"""
Data models for statement insights.

Contains dataclasses for spend summaries, recurring-charge candidates and
the rewards opportunity estimate.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Any

CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass
class Summary:
    """Spend totals derived from a transaction list."""
    total_spend: Decimal = Decimal("0")
    by_category: Dict[str, Decimal] = field(default_factory=dict)
    by_merchant: Dict[str, Decimal] = field(default_factory=dict)
    balance: Decimal = Decimal("0")

    def top_categories(self, limit: int = 5):
        """Categories ordered by spend, largest first."""
        return sorted(self.by_category.items(), key=lambda kv: kv[1], reverse=True)[:limit]

    def top_merchants(self, limit: int = 5):
        """Merchants ordered by spend, largest first."""
        return sorted(self.by_merchant.items(), key=lambda kv: kv[1], reverse=True)[:limit]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_spend": str(self.total_spend),
            "by_category": {k: str(v) for k, v in self.by_category.items()},
            "by_merchant": {k: str(v) for k, v in self.by_merchant.items()},
            "balance": str(self.balance),
        }


@dataclass(frozen=True)
class SubscriptionCandidate:
    """A merchant whose charges look recurring."""
    merchant: str
    occurrences: int
    average_amount: Decimal
    last_date: date

    def to_dict(self) -> Dict[str, Any]:
        return {
            "merchant": self.merchant,
            "occurrences": self.occurrences,
            "average_amount": str(self.average_amount),
            "last_date": self.last_date.isoformat(),
        }


@dataclass(frozen=True)
class RewardsOpportunity:
    """Extra cashback available over a flat baseline card."""
    extra_groceries: Decimal = Decimal("0")
    extra_dining: Decimal = Decimal("0")
    extra_gas: Decimal = Decimal("0")
    total: Decimal = Decimal("0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "extra_groceries": str(round2(self.extra_groceries)),
            "extra_dining": str(round2(self.extra_dining)),
            "extra_gas": str(round2(self.extra_gas)),
            "total": str(self.total),
        }

"""
Rewards opportunity estimate.

Compares spend in bonus categories against a flat-rate baseline card.
"""

from decimal import Decimal
from typing import Dict, Optional

from spendlens.services.insights.models import RewardsOpportunity, Summary, round2

ZERO = Decimal("0")

DEFAULT_BASELINE_RATE = Decimal("0.01")
DEFAULT_CATEGORY_RATES: Dict[str, Decimal] = {
    "Groceries": Decimal("0.05"),
    "Dining": Decimal("0.04"),
    "Gas": Decimal("0.03"),
}


def estimate_rewards_opportunity(
    summary: Summary,
    baseline_rate: Decimal = DEFAULT_BASELINE_RATE,
    category_rates: Optional[Dict[str, Decimal]] = None
) -> RewardsOpportunity:
    """Extra cashback from category cards over the baseline rate."""
    rates = DEFAULT_CATEGORY_RATES if category_rates is None else category_rates

    def extra(category: str) -> Decimal:
        rate = rates.get(category)
        if rate is None:
            return ZERO
        return summary.by_category.get(category, ZERO) * (Decimal(str(rate)) - baseline_rate)

    groceries = extra("Groceries")
    dining = extra("Dining")
    gas = extra("Gas")

    return RewardsOpportunity(
        extra_groceries=groceries,
        extra_dining=dining,
        extra_gas=gas,
        total=round2(groceries + dining + gas),
    )

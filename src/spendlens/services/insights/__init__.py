"""
Statement Insights Module.

Derives spend summaries, recurring charges, interest projections and
rewards opportunities from a normalized transaction list.
"""

from .models import Summary, SubscriptionCandidate, RewardsOpportunity, round2
from .category_rules import CategoryRule, TransactionCategorizer, DEFAULT_RULES
from .summary import SummaryAggregator, merchant_key
from .subscriptions import SubscriptionDetector
from .interest import estimate_monthly_interest
from .rewards import estimate_rewards_opportunity

__all__ = [
    "Summary",
    "SubscriptionCandidate",
    "RewardsOpportunity",
    "round2",
    "CategoryRule",
    "TransactionCategorizer",
    "DEFAULT_RULES",
    "SummaryAggregator",
    "merchant_key",
    "SubscriptionDetector",
    "estimate_monthly_interest",
    "estimate_rewards_opportunity",
]

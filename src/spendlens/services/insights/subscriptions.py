"""
Recurring charge detection.

Groups transactions by their lower-cased description and flags groups that
recur across calendar months with a stable amount.
"""

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Dict, Iterable, List

from spendlens.parsers.statement.models import Transaction
from spendlens.services.insights.models import SubscriptionCandidate, round2

logger = logging.getLogger(__name__)

ONE = Decimal("1")


def month_key(txn: Transaction) -> str:
    """Calendar year-month bucket, e.g. '2024-12'."""
    return f"{txn.date.year}-{txn.date.month:02d}"


def variation_ratio(amounts: List[Decimal]) -> Decimal:
    """
    Population variance divided by the mean.

    The mean is floored at 1 so sub-dollar groups do not divide by ~0.
    """
    mean = sum(amounts, Decimal("0")) / len(amounts)
    variance = sum(((a - mean) ** 2 for a in amounts), Decimal("0")) / len(amounts)
    return variance / max(ONE, mean)


class SubscriptionDetector:
    """
    Flags likely subscriptions in a transaction list.

    A group qualifies when it has at least min_occurrences transactions in at
    least min_distinct_months different months and its variation ratio is
    below variation_threshold.
    """

    def __init__(
        self,
        max_candidates: int = 6,
        variation_threshold: Decimal = Decimal("0.5"),
        min_occurrences: int = 2,
        min_distinct_months: int = 2
    ):
        self.max_candidates = max_candidates
        self.variation_threshold = Decimal(str(variation_threshold))
        self.min_occurrences = min_occurrences
        self.min_distinct_months = min_distinct_months

    def group_by_description(self, transactions: Iterable[Transaction]) -> Dict[str, List[Transaction]]:
        """Group transactions by lower-cased full description, first-seen order."""
        groups: Dict[str, List[Transaction]] = OrderedDict()
        for txn in transactions:
            groups.setdefault(txn.description.lower(), []).append(txn)
        return groups

    def detect(self, transactions: Iterable[Transaction]) -> List[SubscriptionCandidate]:
        """
        Detect recurring charges.

        Returns:
            Candidates sorted by average amount (largest first), capped at
            max_candidates
        """
        candidates = []

        for merchant, group in self.group_by_description(transactions).items():
            if len(group) < self.min_occurrences:
                continue

            months = {month_key(t) for t in group}
            if len(months) < self.min_distinct_months:
                continue

            amounts = [abs(t.amount) for t in group]
            if variation_ratio(amounts) >= self.variation_threshold:
                continue

            average = sum(amounts, Decimal("0")) / len(amounts)
            candidates.append(SubscriptionCandidate(
                merchant=merchant,
                occurrences=len(group),
                average_amount=round2(average),
                last_date=max(t.date for t in group),
            ))

        candidates.sort(key=lambda c: c.average_amount, reverse=True)

        if len(candidates) > self.max_candidates:
            logger.debug(f"Capping {len(candidates)} subscription candidates at {self.max_candidates}")

        return candidates[:self.max_candidates]

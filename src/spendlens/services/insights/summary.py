"""
Spend summary aggregation.

Computes total spend, per-category and per-merchant totals and the
outstanding balance in a single pass over the transaction list.
"""

import re
from decimal import Decimal
from typing import Iterable

from spendlens.parsers.statement.models import Transaction
from spendlens.services.insights.models import Summary

ZERO = Decimal("0")

# Dash, en dash, pipe or bullet ends the merchant part of a description
MERCHANT_SEPARATOR_RE = re.compile(r"[-–|•]")


def merchant_key(description: str) -> str:
    """Description truncated at the first separator, trimmed."""
    return MERCHANT_SEPARATOR_RE.split(description or "", maxsplit=1)[0].strip()


class SummaryAggregator:
    """Aggregates a finished transaction list into a Summary."""

    def summarize(self, transactions: Iterable[Transaction]) -> Summary:
        """
        Build the spend summary.

        Credits never reduce category or merchant totals; they only count
        against the balance.

        Args:
            transactions: Normalized transactions (charge > 0)

        Returns:
            Summary with balance = max(0, charges - credits)
        """
        summary = Summary()
        charges = ZERO
        credits = ZERO

        for txn in transactions:
            spend = max(ZERO, txn.amount)

            summary.by_category[txn.category] = summary.by_category.get(txn.category, ZERO) + spend

            key = merchant_key(txn.description)
            summary.by_merchant[key] = summary.by_merchant.get(key, ZERO) + spend

            if txn.amount >= 0:
                charges += txn.amount
            else:
                credits += abs(txn.amount)

        summary.total_spend = charges
        summary.balance = max(ZERO, charges - credits)
        return summary

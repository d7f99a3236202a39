"""
Category Classification Rules for Statement Transactions.

Provides ordered, rule-based classification of transaction descriptions into
spend categories. Rule order matters: a description can match several
patterns and the first matching rule wins.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

DEFAULT_CATEGORY = "Other"


@dataclass(frozen=True)
class CategoryRule:
    """A category paired with the description pattern that selects it."""
    category: str
    pattern: str
    _regex: "re.Pattern" = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_regex", re.compile(self.pattern, re.IGNORECASE))

    def matches(self, description: str) -> bool:
        return bool(self._regex.search(description))


# Canonical rule order
DEFAULT_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(
        category="Groceries",
        pattern=r"(whole foods|trader joe|kroger|safeway|aldi|costco|walmart).*|grocery",
    ),
    CategoryRule(
        category="Dining",
        pattern=r"mcdonald|starbucks|chipotle|restaurant|dining|ubereats|doordash",
    ),
    CategoryRule(
        category="Gas",
        pattern=r"shell|chevron|exxon|bp|gas|fuel",
    ),
    CategoryRule(
        category="Transport",
        pattern=r"uber|lyft|metro|transit",
    ),
    CategoryRule(
        category="Subscriptions",
        pattern=r"netflix|spotify|hulu|prime|icloud|google storage|subscription",
    ),
    CategoryRule(
        category="Shopping",
        pattern=r"amazon|target|best buy|shopping",
    ),
)


class TransactionCategorizer:
    """
    Classifies transactions into spend categories.

    Evaluates rules in order, then falls back to the category label the
    statement itself provided, then to "Other".
    """

    def __init__(self, rules: Optional[Sequence[CategoryRule]] = None, default_category: str = DEFAULT_CATEGORY):
        """
        Initialize categorizer.

        Args:
            rules: Ordered rules; defaults to DEFAULT_RULES
            default_category: Category used when nothing else applies
        """
        self.rules: List[CategoryRule] = list(DEFAULT_RULES if rules is None else rules)
        self.default_category = default_category

    def match_rule(self, description: str) -> Optional[CategoryRule]:
        """Return the first rule matching the description, if any."""
        text = description or ""
        for rule in self.rules:
            if rule.matches(text):
                return rule
        return None

    def categorize(self, description: str, fallback_category: Optional[str] = None) -> str:
        """
        Classify a transaction description.

        Args:
            description: Transaction description/merchant text
            fallback_category: Category label provided by the source file

        Returns:
            Category name
        """
        rule = self.match_rule(description)
        if rule is not None:
            return rule.category

        if fallback_category and fallback_category.strip():
            return fallback_category.strip()

        return self.default_category

    @property
    def categories(self) -> List[str]:
        """Rule categories in evaluation order."""
        return [rule.category for rule in self.rules]

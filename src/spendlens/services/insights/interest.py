"""
Card interest projection.

Projects the monthly interest charge on a carried balance from its APR.
"""

from decimal import Decimal

from spendlens.services.insights.models import round2

ZERO = Decimal("0")
MONTHS_PER_YEAR = Decimal("12")
HUNDRED = Decimal("100")


def estimate_monthly_interest(balance, apr) -> Decimal:
    """
    Monthly interest on a balance.

    Args:
        balance: Outstanding balance
        apr: Annual percentage rate in percent (18.99 means 18.99%);
             negative values are treated as 0

    Returns:
        round2(balance * max(0, apr) / 100 / 12)
    """
    rate = max(ZERO, Decimal(str(apr))) / HUNDRED / MONTHS_PER_YEAR
    return round2(Decimal(str(balance)) * rate)

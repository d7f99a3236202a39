"""
Amount normalization and sign-convention inference.

Statements disagree on how charges are signed. Debit/credit exports carry
the direction in the column; unified-amount exports are sampled to decide
whether positive raw values are charges.
"""

import re
from decimal import Decimal
from typing import Optional, Sequence

from spendlens.parsers.statement.tabular import TabularData

ZERO = Decimal("0")
DEFAULT_SIGN_SAMPLE_SIZE = 50

# Magnitudes at or above this are treated as corrupt cells, not amounts
MAX_AMOUNT = Decimal("1e15")

PARENS_RE = re.compile(r"\(.*\)")
STRIP_RE = re.compile(r"[$€£¥₹,()\s]")
PLAIN_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_amount(raw) -> Optional[Decimal]:
    """
    Convert a raw textual amount to a signed Decimal.

    "$1,234.56" -> 1234.56, "(45.00)" -> -45.00. Empty or non-numeric input
    (including exponents, underscores, NaN and Infinity) yields 0.

    Returns:
        The amount, or None when its magnitude is at least MAX_AMOUNT
    """
    if raw is None:
        return ZERO

    text = str(raw)
    is_negative = bool(PARENS_RE.search(text))
    cleaned = STRIP_RE.sub("", text)
    if not PLAIN_NUMBER_RE.fullmatch(cleaned):
        return ZERO

    value = Decimal(cleaned)
    if abs(value) >= MAX_AMOUNT:
        return None
    return -value if is_negative else value


def normalize_amount(raw) -> Decimal:
    """Like parse_amount(), but out-of-range amounts also yield 0."""
    value = parse_amount(raw)
    return ZERO if value is None else value


def _is_filled(raw: Optional[str]) -> bool:
    return raw is not None and str(raw).strip() != ""


def resolve_sign_convention(
    rows: Sequence[Sequence[str]],
    amount_index: int,
    sample_size: int = DEFAULT_SIGN_SAMPLE_SIZE
) -> bool:
    """
    Decide whether positive raw amounts are charges.

    Counts positive and negative normalized values over the first
    sample_size rows. Ties favour positive = charge.

    Args:
        rows: Data rows
        amount_index: Index of the unified amount column
        sample_size: Number of leading rows to sample

    Returns:
        True if positive raw values represent charges
    """
    positive = negative = 0

    for row in rows[:sample_size]:
        raw = TabularData.cell(row, amount_index)
        if raw is None:
            continue
        value = normalize_amount(raw)
        if value > 0:
            positive += 1
        elif value < 0:
            negative += 1

    return positive >= negative


def amount_from_row(
    debit_raw: Optional[str],
    credit_raw: Optional[str],
    amount_raw: Optional[str],
    positive_is_charge: bool
) -> Optional[Decimal]:
    """
    Compute the signed amount (charge > 0) for one row.

    A filled debit cell wins over a filled credit cell; otherwise the unified
    amount is oriented by the sign convention. Returns None when the chosen
    cell holds an out-of-range amount.
    """
    if _is_filled(debit_raw):
        value = parse_amount(debit_raw)
        return None if value is None else abs(value)
    if _is_filled(credit_raw):
        value = parse_amount(credit_raw)
        return None if value is None else -abs(value)

    value = parse_amount(amount_raw)
    if value is None or positive_is_charge or not value:
        return value
    return -value

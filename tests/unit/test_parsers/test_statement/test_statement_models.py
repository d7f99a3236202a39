"""Tests for statement transaction models."""

from datetime import date
from decimal import Decimal

import pytest

from spendlens.parsers.statement.models import ParseResult, Transaction


class TestTransaction:
    """Tests for Transaction dataclass."""

    def test_amount_converted_to_decimal(self):
        txn = Transaction(date=date(2024, 12, 1), description="Netflix", amount="15.99")
        assert txn.amount == Decimal("15.99")
        assert isinstance(txn.amount, Decimal)

    def test_default_category(self):
        txn = Transaction(date=date(2024, 12, 1), description="Thing", amount=Decimal("1"))
        assert txn.category == "Other"

    def test_charge_and_credit(self):
        charge = Transaction(date(2024, 12, 1), "Shop", Decimal("10"))
        credit = Transaction(date(2024, 12, 1), "Refund", Decimal("-10"))
        assert charge.is_charge and not charge.is_credit
        assert credit.is_credit and not credit.is_charge

    def test_frozen(self):
        txn = Transaction(date(2024, 12, 1), "Shop", Decimal("10"))
        with pytest.raises(AttributeError):
            txn.amount = Decimal("20")

    def test_dict_round_trip(self):
        txn = Transaction(date(2024, 12, 1), "Shell Gas Station", Decimal("45.23"), "Gas")
        data = txn.to_dict()
        assert data == {
            "date": "2024-12-01",
            "description": "Shell Gas Station",
            "amount": "45.23",
            "category": "Gas",
        }
        assert Transaction.from_dict(data) == txn

    def test_from_dict_missing_category(self):
        txn = Transaction.from_dict({"date": "2024-12-01", "description": "X", "amount": 5})
        assert txn.category == "Other"
        assert txn.amount == Decimal("5")


class TestParseResult:
    """Tests for ParseResult dataclass."""

    def test_empty_result(self):
        result = ParseResult()
        assert result.transaction_count == 0
        assert result.total_charges == Decimal("0")
        assert result.total_credits == Decimal("0")
        assert result.finalize().statement_period_start is None

    def test_totals_and_period(self):
        result = ParseResult(transactions=[
            Transaction(date(2024, 12, 5), "A", Decimal("100")),
            Transaction(date(2024, 12, 1), "B", Decimal("-30")),
            Transaction(date(2025, 1, 2), "C", Decimal("20")),
        ])
        result.finalize()
        assert result.total_charges == Decimal("120")
        assert result.total_credits == Decimal("30")
        assert result.statement_period_start == date(2024, 12, 1)
        assert result.statement_period_end == date(2025, 1, 2)

    def test_add_warning(self):
        result = ParseResult()
        result.add_warning("careful")
        assert result.warnings == ["careful"]

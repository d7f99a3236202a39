"""Tests for statement date parsing."""

from datetime import date

import pytest

from spendlens.parsers.statement.dates import parse_date, try_parse_date


class TestTryParseDate:
    """Tests for try_parse_date()."""

    @pytest.mark.parametrize("raw,expected", [
        ("2024-12-01", date(2024, 12, 1)),
        ("2024/12/01", date(2024, 12, 1)),
        ("2024-12-01T10:15:00", date(2024, 12, 1)),
        ("12/01/2024", date(2024, 12, 1)),
        ("01 Dec 2024", date(2024, 12, 1)),
        ("Dec 01, 2024", date(2024, 12, 1)),
        ("  2025-01-02  ", date(2025, 1, 2)),
    ])
    def test_known_formats(self, raw, expected):
        assert try_parse_date(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "yesterday", "2024-13-45"])
    def test_unparseable(self, raw):
        assert try_parse_date(raw) is None


class TestParseDate:
    """Tests for parse_date() clock fallback."""

    def test_valid_date_ignores_clock(self, fixed_today):
        assert parse_date("2024-12-01", fixed_today) == date(2024, 12, 1)

    def test_invalid_date_uses_clock(self, fixed_today):
        assert parse_date("not a date", fixed_today) == fixed_today()

    def test_default_clock_is_today(self):
        assert parse_date("garbage") == date.today()

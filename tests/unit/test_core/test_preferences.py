"""Tests for AnalyzerPreferences."""

import json
from decimal import Decimal

import pytest

from spendlens.core.preferences import (
    CONFIG_DIR_ENV,
    DEFAULT_PREFERENCES,
    AnalyzerPreferences,
    DisplayConfig,
)


class TestDefaults:
    """Tests for built-in defaults."""

    def test_default_values(self):
        prefs = AnalyzerPreferences()
        assert prefs.default_apr == Decimal("18.99")
        assert prefs.transactions_key == "transactions"
        assert prefs.parsing.sign_sample_size == 50
        assert prefs.parsing.csv_delimiter == ","
        assert prefs.subscriptions.max_candidates == 6
        assert prefs.subscriptions.variation_threshold == Decimal("0.5")
        assert prefs.rewards.baseline_rate == Decimal("0.01")
        assert prefs.rewards.category_rates["Groceries"] == Decimal("0.05")

    def test_defaults_not_mutated(self):
        prefs = AnalyzerPreferences()
        prefs._raw["interest"]["default_apr"] = 1
        assert DEFAULT_PREFERENCES["interest"]["default_apr"] == 18.99


class TestLoad:
    """Tests for AnalyzerPreferences.load()."""

    def test_missing_dir_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(CONFIG_DIR_ENV, raising=False)
        prefs = AnalyzerPreferences.load(tmp_path / "nope")
        assert prefs.default_apr == Decimal("18.99")

    def test_user_overrides_merge(self, tmp_path):
        (tmp_path / "preferences.json").write_text(json.dumps({
            "interest": {"default_apr": 24.99},
            "subscriptions": {"max_candidates": 3},
        }))
        prefs = AnalyzerPreferences.load(tmp_path)
        assert prefs.default_apr == Decimal("24.99")
        assert prefs.subscriptions.max_candidates == 3
        # Sibling keys keep their defaults
        assert prefs.subscriptions.min_distinct_months == 2

    def test_global_then_user(self, tmp_path):
        global_dir = tmp_path / "global"
        user_dir = tmp_path / "user"
        global_dir.mkdir()
        user_dir.mkdir()
        (global_dir / "defaults.json").write_text(json.dumps({
            "interest": {"default_apr": 21.0},
            "storage": {"transactions_key": "shared"},
        }))
        (user_dir / "preferences.json").write_text(json.dumps({
            "interest": {"default_apr": 15.5},
        }))

        prefs = AnalyzerPreferences.load(user_dir, global_config_dir=global_dir)
        assert prefs.default_apr == Decimal("15.5")
        assert prefs.transactions_key == "shared"

    def test_env_var_config_dir(self, tmp_path, monkeypatch):
        (tmp_path / "preferences.json").write_text(json.dumps({
            "parsing": {"csv_delimiter": ";"},
        }))
        monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
        assert AnalyzerPreferences.load().parsing.csv_delimiter == ";"

    def test_invalid_json_falls_back(self, tmp_path, caplog):
        (tmp_path / "preferences.json").write_text("{not json")
        prefs = AnalyzerPreferences.load(tmp_path)
        assert prefs.default_apr == Decimal("18.99")
        assert "Failed to load preferences" in caplog.text

    def test_save_round_trip(self, tmp_path):
        data = AnalyzerPreferences._deep_merge(DEFAULT_PREFERENCES, {"interest": {"default_apr": 9.5}})
        path = AnalyzerPreferences(data).save(tmp_path / "cfg")
        assert path.exists()
        assert AnalyzerPreferences.load(tmp_path / "cfg").default_apr == Decimal("9.5")


class TestDisplayConfig:
    """Tests for currency formatting."""

    def test_positive(self):
        assert DisplayConfig().format_currency(Decimal("1234.5")) == "$1,234.50"

    def test_negative(self):
        assert DisplayConfig().format_currency(Decimal("-20")) == "-$20.00"

    def test_negative_in_brackets(self):
        display = DisplayConfig(currency_symbol="€", negative_in_brackets=True)
        assert display.format_currency(Decimal("-20")) == "(€20.00)"

    @pytest.mark.parametrize("places,expected", [(0, "$16"), (3, "$15.990")])
    def test_decimal_places(self, places, expected):
        assert DisplayConfig(decimal_places=places).format_currency(Decimal("15.99")) == expected

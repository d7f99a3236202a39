"""Analyzer Preferences Management for SpendLens.

Provides data-driven configuration for the statement pipeline with sensible defaults.
"""

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Dict, Optional, Any

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "SPENDLENS_CONFIG_DIR"

# Default preferences (used when nothing is configured)
DEFAULT_PREFERENCES = {
    "$schema": "analyzer_preferences_v1",
    "version": "1.0",

    "parsing": {
        "sign_sample_size": 50,
        "csv_delimiter": ","
    },

    "subscriptions": {
        "max_candidates": 6,
        "variation_threshold": 0.5,
        "min_occurrences": 2,
        "min_distinct_months": 2
    },

    "interest": {
        "default_apr": 18.99
    },

    "rewards": {
        "baseline_rate": 0.01,
        "category_rates": {
            "Groceries": 0.05,
            "Dining": 0.04,
            "Gas": 0.03
        }
    },

    "storage": {
        "transactions_key": "transactions"
    },

    "display": {
        "currency_symbol": "$",
        "decimal_places": 2,
        "negative_in_brackets": False
    }
}


@dataclass
class ParsingConfig:
    """Configuration for statement parsing."""
    sign_sample_size: int = 50
    csv_delimiter: str = ","


@dataclass
class SubscriptionConfig:
    """Thresholds for recurring-charge detection."""
    max_candidates: int = 6
    variation_threshold: Decimal = Decimal("0.5")
    min_occurrences: int = 2
    min_distinct_months: int = 2


@dataclass
class RewardsConfig:
    """Cashback rates used for the rewards opportunity estimate."""
    baseline_rate: Decimal = Decimal("0.01")
    category_rates: Dict[str, Decimal] = field(default_factory=dict)


@dataclass
class DisplayConfig:
    """Configuration for display formatting."""
    currency_symbol: str = "$"
    decimal_places: int = 2
    negative_in_brackets: bool = False

    def format_currency(self, amount) -> str:
        """Format amount with currency symbol."""
        if amount < 0 and self.negative_in_brackets:
            return f"({self.currency_symbol}{abs(amount):,.{self.decimal_places}f})"
        if amount < 0:
            return f"-{self.currency_symbol}{abs(amount):,.{self.decimal_places}f}"
        return f"{self.currency_symbol}{amount:,.{self.decimal_places}f}"


def _to_decimal(value: Any) -> Decimal:
    return Decimal(str(value))


class AnalyzerPreferences:
    """
    Preferences for the statement analyzer.

    Loads from config/preferences.json with fallback to defaults.

    Usage:
        prefs = AnalyzerPreferences.load(config_dir)
        apr = prefs.default_apr
        formatted = prefs.display.format_currency(1234.56)
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        """Initialize from preference dictionary."""
        if data is None:
            data = copy.deepcopy(DEFAULT_PREFERENCES)
        self._raw = data

        parsing = data.get("parsing", {})
        self.parsing = ParsingConfig(
            sign_sample_size=int(parsing.get("sign_sample_size", 50)),
            csv_delimiter=parsing.get("csv_delimiter", ",")
        )

        subs = data.get("subscriptions", {})
        self.subscriptions = SubscriptionConfig(
            max_candidates=int(subs.get("max_candidates", 6)),
            variation_threshold=_to_decimal(subs.get("variation_threshold", 0.5)),
            min_occurrences=int(subs.get("min_occurrences", 2)),
            min_distinct_months=int(subs.get("min_distinct_months", 2))
        )

        rewards = data.get("rewards", {})
        self.rewards = RewardsConfig(
            baseline_rate=_to_decimal(rewards.get("baseline_rate", 0.01)),
            category_rates={
                category: _to_decimal(rate)
                for category, rate in rewards.get("category_rates", {}).items()
            }
        )

        display = data.get("display", {})
        self.display = DisplayConfig(
            currency_symbol=display.get("currency_symbol", "$"),
            decimal_places=display.get("decimal_places", 2),
            negative_in_brackets=display.get("negative_in_brackets", False)
        )

        self.default_apr = _to_decimal(data.get("interest", {}).get("default_apr", 18.99))
        self.transactions_key = data.get("storage", {}).get("transactions_key", "transactions")

    @classmethod
    def load(cls, config_dir: Optional[Path] = None, global_config_dir: Optional[Path] = None) -> "AnalyzerPreferences":
        """
        Load preferences with fallback to defaults.

        Args:
            config_dir: Directory holding preferences.json. Defaults to the
                        SPENDLENS_CONFIG_DIR environment variable when set.
            global_config_dir: Directory holding shared defaults.json - optional

        Returns:
            AnalyzerPreferences instance
        """
        data = copy.deepcopy(DEFAULT_PREFERENCES)

        if config_dir is None and CONFIG_DIR_ENV in os.environ:
            config_dir = Path(os.environ[CONFIG_DIR_ENV])

        if global_config_dir:
            global_defaults = Path(global_config_dir) / "defaults.json"
            if global_defaults.exists():
                try:
                    with open(global_defaults, encoding='utf-8') as f:
                        global_data = json.load(f)
                    data = cls._deep_merge(data, global_data)
                    logger.debug(f"Loaded global defaults from {global_defaults}")
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to load global defaults: {e}")

        if config_dir:
            prefs_file = Path(config_dir) / "preferences.json"
            if prefs_file.exists():
                try:
                    with open(prefs_file, encoding='utf-8') as f:
                        user_data = json.load(f)
                    data = cls._deep_merge(data, user_data)
                    logger.debug(f"Loaded preferences from {prefs_file}")
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to load preferences: {e}")

        return cls(data)

    @staticmethod
    def _deep_merge(base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries, override takes precedence."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = AnalyzerPreferences._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def save(self, config_dir: Path) -> Path:
        """Save current preferences to config_dir/preferences.json."""
        config_dir = Path(config_dir)
        config_dir.mkdir(parents=True, exist_ok=True)
        prefs_file = config_dir / "preferences.json"

        with open(prefs_file, 'w', encoding='utf-8') as f:
            json.dump(self._raw, f, indent=2)

        logger.info(f"Saved preferences to {prefs_file}")
        return prefs_file

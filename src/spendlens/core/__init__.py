"""
Core module - Foundation components for SpendLens.

Provides:
- Exceptions: SpendLensError hierarchy with machine-readable codes
- AnalyzerPreferences: JSON-backed configuration with defaults
- TransactionStore: Injected key-value cache for parsed transactions
"""

from spendlens.core.exceptions import (
    SpendLensError,
    UnsupportedFileTypeError,
    ParseFailureError,
    StoreError,
    NO_TRANSACTIONS_FOUND,
)
from spendlens.core.preferences import AnalyzerPreferences, DEFAULT_PREFERENCES
from spendlens.core.store import TransactionStore, InMemoryStore, JsonFileStore

__all__ = [
    "SpendLensError",
    "UnsupportedFileTypeError",
    "ParseFailureError",
    "StoreError",
    "NO_TRANSACTIONS_FOUND",
    "AnalyzerPreferences",
    "DEFAULT_PREFERENCES",
    "TransactionStore",
    "InMemoryStore",
    "JsonFileStore",
]

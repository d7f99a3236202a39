"""
Shared pytest fixtures for SpendLens tests.

Provides a fixed clock, sample statement bytes and a pdfplumber stub.
"""

import pytest
import sys
from pathlib import Path
from datetime import date

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from spendlens.core.preferences import AnalyzerPreferences
from spendlens.services.ingestion import StatementAnalyzer


FIXED_TODAY = date(2025, 3, 15)

SAMPLE_CSV = (
    "Date,Description,Amount\n"
    "2024-12-01,Shell Gas Station,45.23\n"
    "2024-12-02,Netflix,15.99\n"
    "2025-01-02,Netflix,15.99\n"
)


class FakePage:
    """Minimal stand-in for a pdfplumber page."""

    def __init__(self, text):
        self.text = text
        self.calls = []

    def extract_text(self, **kwargs):
        self.calls.append(kwargs)
        return self.text


class FakePDF:
    """Minimal stand-in for a pdfplumber document (context manager)."""

    def __init__(self, page_texts):
        self.pages = [FakePage(text) for text in page_texts]

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


@pytest.fixture
def fixed_today():
    """Clock returning a fixed date for unparseable-date fallbacks."""
    return lambda: FIXED_TODAY


@pytest.fixture
def preferences():
    """Default analyzer preferences."""
    return AnalyzerPreferences()


@pytest.fixture
def analyzer(preferences, fixed_today):
    """StatementAnalyzer with default preferences and a fixed clock."""
    return StatementAnalyzer(preferences=preferences, today=fixed_today)


@pytest.fixture
def sample_csv_bytes():
    """Three-row CSV export with a unified amount column."""
    return SAMPLE_CSV.encode("utf-8")


@pytest.fixture
def fake_pdf(monkeypatch):
    """
    Patch pdfplumber.open to return a FakePDF built from page texts.

    Usage:
        pdf = fake_pdf(["page one text", "page two text"])
    """
    state = {}

    def install(page_texts):
        document = FakePDF(page_texts)
        state["document"] = document

        def fake_open(stream, password=None):
            state["stream"] = stream
            state["password"] = password
            return document

        monkeypatch.setattr("spendlens.parsers.statement.pdf_parser.pdfplumber.open", fake_open)
        return document

    return install

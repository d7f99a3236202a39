"""Tests for statement report export."""

import pandas as pd
import pytest

from spendlens.reports.statement_report import StatementReportGenerator, transactions_frame


@pytest.fixture
def result(analyzer, sample_csv_bytes):
    return analyzer.ingest("statement.csv", sample_csv_bytes)


class TestTransactionsFrame:
    """Tests for transactions_frame()."""

    def test_columns_and_rows(self, result):
        df = transactions_frame(result)
        assert list(df.columns) == ["Date", "Description", "Amount", "Category"]
        assert len(df) == 3
        assert df["Amount"].sum() == pytest.approx(77.21)

    def test_empty_result(self, analyzer):
        df = transactions_frame(analyzer.ingest("empty.csv", b""))
        assert df.empty
        assert list(df.columns) == ["Date", "Description", "Amount", "Category"]


class TestStatementReportGenerator:
    """Tests for StatementReportGenerator.export()."""

    def test_csv_export(self, result, tmp_path):
        output = StatementReportGenerator(result).export(tmp_path / "out" / "report.csv")
        df = pd.read_csv(output)
        assert list(df["Description"]) == ["Shell Gas Station", "Netflix", "Netflix"]
        assert list(df["Category"]) == ["Gas", "Subscriptions", "Subscriptions"]

    def test_excel_export(self, result, tmp_path):
        output = StatementReportGenerator(result).export(tmp_path / "report.xlsx")

        sheets = pd.read_excel(output, sheet_name=None, engine="openpyxl")
        assert list(sheets) == ["Transactions", "Summary", "By Category", "By Merchant", "Subscriptions"]
        assert len(sheets["Transactions"]) == 3

        summary = dict(zip(sheets["Summary"]["Metric"], sheets["Summary"]["Value"]))
        assert summary["Total Spend"] == pytest.approx(77.21)
        assert summary["APR (%)"] == pytest.approx(18.99)

        subs = sheets["Subscriptions"]
        assert list(subs["Merchant"]) == ["netflix"]
        assert subs["Occurrences"].iloc[0] == 2

    def test_unsupported_format(self, result, tmp_path):
        with pytest.raises(ValueError, match="Unsupported export format"):
            StatementReportGenerator(result).export(tmp_path / "report.txt")

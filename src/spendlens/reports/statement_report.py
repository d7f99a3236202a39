"""Statement Analysis Report Generator.

Exports an AnalysisResult to Excel (one sheet per view) or to a flat CSV of
transactions.
"""

import logging
from pathlib import Path

import pandas as pd

from spendlens.services.ingestion import AnalysisResult

logger = logging.getLogger(__name__)

SUPPORTED_EXPORT_FORMATS = {".xlsx", ".csv"}


def transactions_frame(result: AnalysisResult) -> pd.DataFrame:
    """Transactions as a DataFrame (amounts as floats for spreadsheet use)."""
    rows = [
        {
            "Date": txn.date,
            "Description": txn.description,
            "Amount": float(txn.amount),
            "Category": txn.category,
        }
        for txn in result.transactions
    ]
    return pd.DataFrame(rows, columns=["Date", "Description", "Amount", "Category"])


class StatementReportGenerator:
    """Writes analysis results to disk."""

    def __init__(self, result: AnalysisResult):
        self.result = result

    def export(self, output_file: Path) -> Path:
        """
        Export to .xlsx or .csv based on the output file extension.

        Raises:
            ValueError: For any other extension
        """
        output_file = Path(output_file)
        suffix = output_file.suffix.lower()
        if suffix not in SUPPORTED_EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {suffix} (use .xlsx or .csv)")

        output_file.parent.mkdir(parents=True, exist_ok=True)
        if suffix == ".csv":
            transactions_frame(self.result).to_csv(output_file, index=False)
        else:
            self._generate_excel(output_file)

        logger.info(f"Exported {self.result.transaction_count} transactions to {output_file}")
        return output_file

    def _generate_excel(self, output_file: Path) -> None:
        summary = self.result.summary

        with pd.ExcelWriter(output_file, engine="openpyxl") as writer:
            # Sheet 1: Transactions
            transactions_frame(self.result).to_excel(writer, sheet_name="Transactions", index=False)

            # Sheet 2: Summary
            summary_data = [
                {"Metric": "Total Spend", "Value": float(summary.total_spend)},
                {"Metric": "Outstanding Balance", "Value": float(summary.balance)},
                {"Metric": "APR (%)", "Value": float(self.result.apr)},
                {"Metric": "Monthly Interest", "Value": float(self.result.monthly_interest)},
                {"Metric": "Extra Rewards Available", "Value": float(self.result.rewards.total)},
            ]
            pd.DataFrame(summary_data).to_excel(writer, sheet_name="Summary", index=False)

            # Sheet 3: Spend by category
            category_data = [
                {"Category": category, "Spend": float(amount)}
                for category, amount in summary.by_category.items()
            ]
            pd.DataFrame(category_data, columns=["Category", "Spend"]).to_excel(
                writer, sheet_name="By Category", index=False
            )

            # Sheet 4: Spend by merchant
            merchant_data = [
                {"Merchant": merchant, "Spend": float(amount)}
                for merchant, amount in summary.by_merchant.items()
            ]
            pd.DataFrame(merchant_data, columns=["Merchant", "Spend"]).to_excel(
                writer, sheet_name="By Merchant", index=False
            )

            # Sheet 5: Subscriptions
            subs_data = [
                {
                    "Merchant": sub.merchant,
                    "Occurrences": sub.occurrences,
                    "Average Amount": float(sub.average_amount),
                    "Last Charged": sub.last_date,
                }
                for sub in self.result.subscriptions
            ]
            pd.DataFrame(
                subs_data, columns=["Merchant", "Occurrences", "Average Amount", "Last Charged"]
            ).to_excel(writer, sheet_name="Subscriptions", index=False)

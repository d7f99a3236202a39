"""Reports module for exporting statement analysis results.

Provides:
- StatementReportGenerator: Excel workbook (transactions, summary, categories,
  merchants, subscriptions) or flat CSV export
"""

from .statement_report import StatementReportGenerator, transactions_frame, SUPPORTED_EXPORT_FORMATS

__all__ = ["StatementReportGenerator", "transactions_frame", "SUPPORTED_EXPORT_FORMATS"]

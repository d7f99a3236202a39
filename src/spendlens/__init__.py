"""
SpendLens - statement ingestion and spend insights.

Converts uploaded card or bank statements (CSV exports or text PDFs) into
normalized transactions, then derives spend summaries, an outstanding
balance, likely subscriptions and a monthly interest projection.
"""

__version__ = "0.1.0"

"""Services module for SpendLens business logic.

Provides services for:
- Insights: Spend summary, recurring charges, interest and rewards estimates
- Ingestion: StatementAnalyzer pipeline (spendlens.services.ingestion)
"""

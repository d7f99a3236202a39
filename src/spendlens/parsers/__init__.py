"""
SpendLens Parsers - Card and bank statement parsers.

Architecture:
- StatementParser: Abstract base class (bytes -> ParseResult)
- CSVStatementParser: Tokenizer, column inference, sign inference
- PDFStatementParser: Page text extraction, date-prefixed line recovery
"""

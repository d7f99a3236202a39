"""
Custom exceptions for the SpendLens core module.

All SpendLens-specific exceptions inherit from SpendLensError for easy catching.
"""

# Non-fatal warning codes (reported in ParseResult.warnings, never raised)
NO_TRANSACTIONS_FOUND = "NO_TRANSACTIONS_FOUND"


class SpendLensError(Exception):
    """Base exception for all SpendLens errors."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class UnsupportedFileTypeError(SpendLensError):
    """Raised when the uploaded file extension is not .csv or .pdf."""

    def __init__(self, filename: str, code: str = "UNSUPPORTED_FILE_TYPE"):
        super().__init__(f"Unsupported file type: {filename}", code)
        self.filename = filename


class ParseFailureError(SpendLensError):
    """
    Raised when a statement is structurally unreadable.

    Examples:
    - Binary garbage uploaded with a .csv extension
    - A .pdf file that pdfplumber cannot open
    """

    def __init__(self, message: str, source_file: str = None, code: str = "PARSE_FAILURE"):
        super().__init__(message, code)
        self.source_file = source_file


class StoreError(SpendLensError):
    """Transaction store read/write errors."""

    def __init__(self, message: str, key: str = None, code: str = "STORE_ERROR"):
        super().__init__(message, code)
        self.key = key

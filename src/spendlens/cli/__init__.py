"""SpendLens Command Line Interface tools.

Available CLI tools:
- main: analyze statements and reload stored transactions
"""

from .main import main

__all__ = ["main"]

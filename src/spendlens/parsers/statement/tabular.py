"""
Delimited-text tokenizer for statement exports.

Handles quoted fields, doubled quotes inside quoted fields, embedded
delimiters and a leading byte-order mark. Rows may be shorter than the
header; out-of-range access returns None.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from spendlens.core.exceptions import ParseFailureError

BOM = "\ufeff"
LINE_BREAK_RE = re.compile(r"\r?\n")


@dataclass
class TabularData:
    """Header labels (lower-cased) plus data rows."""

    headers: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @staticmethod
    def cell(row: Sequence[str], index: Optional[int]) -> Optional[str]:
        """Safe indexed lookup: None for a missing index or a short row."""
        if index is None or index < 0 or index >= len(row):
            return None
        return row[index]

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.rows


def split_line(line: str, delimiter: str = ",") -> List[str]:
    """
    Tokenize one line character by character.

    A double quote toggles quoted mode, except that two consecutive quotes
    inside quoted mode emit a literal quote. Fields are stripped.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0

    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1

    fields.append("".join(current))
    return [f.strip() for f in fields]


def parse_delimited(text: str, delimiter: str = ",") -> TabularData:
    """
    Parse delimited text into headers and rows.

    Args:
        text: Decoded file content
        delimiter: Field delimiter (single character)

    Returns:
        TabularData; empty headers and rows when the input has no content

    Raises:
        ParseFailureError: If the text contains NUL characters (binary input)
    """
    if "\x00" in text:
        raise ParseFailureError("Input contains binary data, not delimited text")

    lines = [line for line in LINE_BREAK_RE.split(text) if line.strip()]
    if not lines:
        return TabularData()

    if lines[0].startswith(BOM):
        lines[0] = lines[0][len(BOM):]

    headers = [h.lower() for h in split_line(lines[0], delimiter)]
    rows = [split_line(line, delimiter) for line in lines[1:]]

    return TabularData(headers=headers, rows=rows)

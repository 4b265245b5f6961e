"""Tab- or comma-delimited text readers."""

from __future__ import annotations

import csv
from typing import List, Sequence, Tuple


def detect_delimiter(header_line: str) -> str:
    return "\t" if "\t" in header_line else ","


def _fit(cells: Sequence[str], width: int) -> List[str]:
    """Pad short rows with blanks and truncate long ones."""
    fitted = [cell.strip() for cell in cells[:width]]
    fitted.extend([""] * (width - len(fitted)))
    return fitted


def parse_delimited(text: str) -> Tuple[List[str], List[List[str]]]:
    """Return the header and the data rows of delimited text.

    The header is the first non-blank line. Blank lines, including lines made
    only of delimiters, are skipped wherever they appear.
    """
    lines = [line.rstrip("\r") for line in text.split("\n")]
    lines = [line for line in lines if line.strip()]
    if not lines:
        return [], []

    delimiter = detect_delimiter(lines[0])
    if delimiter == "\t":
        reader = csv.reader(lines, delimiter="\t", quoting=csv.QUOTE_NONE)
    else:
        reader = csv.reader(lines, delimiter=",", skipinitialspace=True)

    header = [cell.strip() for cell in next(reader)]
    rows = []
    for cells in reader:
        row = _fit(cells, len(header))
        if any(row):
            rows.append(row)
    return header, rows

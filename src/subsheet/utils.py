"""Utility functions for spreadsheet addressing."""

import re
from typing import Iterator, List, Optional, Sequence, TypeVar

T = TypeVar("T")

_SHEET_URL_PATTERN = re.compile(r"/d/([a-zA-Z0-9_-]+)")
_SHEET_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")


def extract_sheet_id(url: str) -> Optional[str]:
    """Extract the document ID from a spreadsheet URL.

    Args:
        url: A URL of the form .../d/<id>/edit

    Returns:
        The document ID, or None if the URL has no /d/<id> segment
    """
    if not isinstance(url, str):
        return None
    match = _SHEET_URL_PATTERN.search(url)
    return match.group(1) if match else None


def parse_spreadsheet_id(sheet_str: str) -> str:
    """Extract spreadsheet ID from a Google Sheets URL or return the raw ID.

    Args:
        sheet_str: A Google Sheets URL or ID

    Returns:
        The spreadsheet ID

    Raises:
        ValueError if the input is not a valid spreadsheet URL or ID
    """
    sheet_str = (sheet_str or "").strip()

    sheet_id = extract_sheet_id(sheet_str)
    if sheet_id:
        return sheet_id

    if _SHEET_ID_PATTERN.match(sheet_str):
        return sheet_str

    raise ValueError(
        f"Invalid spreadsheet format: {sheet_str}. " "Must be a Google Sheets URL or ID"
    )


def column_letter(column: int) -> str:
    """Convert a 1-based column number to its A1 letters (1 -> A, 27 -> AA)."""
    if column < 1:
        raise ValueError(f"Column must be 1 or greater, got {column}")
    letters = ""
    while column:
        column, remainder = divmod(column - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def a1_range(sheet_title: str, start_row: int, start_col: int, rows: int, cols: int) -> str:
    """Build an A1 range covering a rows x cols block.

    Args:
        sheet_title: Worksheet title
        start_row: 1-based first row
        start_col: 1-based first column
        rows: Number of rows
        cols: Number of columns

    Returns:
        Range such as 'Sheet1'!A2:C101
    """
    first = f"{column_letter(start_col)}{start_row}"
    last = f"{column_letter(start_col + cols - 1)}{start_row + rows - 1}"
    return f"{quote_sheet_title(sheet_title)}!{first}:{last}"


def quote_sheet_title(sheet_title: str) -> str:
    """Quote a worksheet title for use in A1 notation."""
    return "'" + sheet_title.replace("'", "''") + "'"


def chunked(items: Sequence[T], size: int) -> Iterator[List[T]]:
    """Split a sequence into consecutive lists of at most size items."""
    if size < 1:
        raise ValueError(f"Chunk size must be 1 or greater, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start : start + size])

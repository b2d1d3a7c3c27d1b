"""Read channel IDs from a spreadsheet."""

from typing import Any, Iterable, List

from .errors import EmptySheetError, NoValidIdentifiersError
from .logging_config import get_logger
from .sheets import SheetStore

logger = get_logger(__name__)

CHANNEL_ID_PREFIXES = ("UC", "HC")


def is_channel_id(value: Any) -> bool:
    """Check whether a cell value looks like a channel ID."""
    if value is None:
        return False
    text = str(value).strip()
    return bool(text) and text.startswith(CHANNEL_ID_PREFIXES)


def filter_channel_ids(values: Iterable[Any]) -> List[str]:
    """Keep trimmed channel IDs from raw cell values, in order.

    >>> filter_channel_ids(["", "UCabc", "  UCxyz  ", "XYZ123"])
    ['UCabc', 'UCxyz']
    """
    return [str(value).strip() for value in values if is_channel_id(value)]


def first_column(grid: Iterable[List[Any]]) -> List[Any]:
    """Get column A from a grid, blank rows included as empty strings."""
    return [row[0] if row else "" for row in grid]


def read_channel_ids(store: SheetStore, spreadsheet_id: str) -> List[str]:
    """Read channel IDs from column A of a spreadsheet's first worksheet.

    Row 1 is treated as the header.

    Args:
        store: Sheet wrapper
        spreadsheet_id: ID of spreadsheet to read

    Returns:
        Channel IDs in row order

    Raises:
        EmptySheetError: If the sheet has no rows below the header
        NoValidIdentifiersError: If no cell in column A is a channel ID
        SubsheetError: If API request fails
    """
    handle = store.open(spreadsheet_id)
    last_row = store.last_row(handle)
    if last_row < 2:
        raise EmptySheetError("Sheet is empty or only has headers")

    values = first_column(store.read_range(handle, f"A2:A{last_row}"))
    channel_ids = filter_channel_ids(values)
    if not channel_ids:
        raise NoValidIdentifiersError("No valid channel IDs found in column A")

    logger.info("Read %d channel IDs from %s", len(channel_ids), spreadsheet_id)
    return channel_ids

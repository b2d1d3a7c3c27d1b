"""Export subscriptions to a spreadsheet."""

from datetime import date
from typing import List, Optional, Sequence, Set

from . import config
from .auth import Session
from .directory import SubscriptionDirectory
from .errors import EmptyResultError, best_effort
from .identifiers import first_column
from .logging_config import get_logger
from .models import ExportResult, SheetHandle, Subscription
from .sheets import SheetStore
from .utils import chunked, parse_spreadsheet_id

logger = get_logger(__name__)


def default_sheet_title(email: Optional[str], today: Optional[date] = None) -> str:
    """Build the title used for exported spreadsheets.

    Args:
        email: Account email, left out of the title when empty
        today: Date to stamp, defaults to today

    Returns:
        Title such as 'YouTube Subscriptions - me@example.com - 2024-05-01'
    """
    stamp = (today or date.today()).isoformat()
    if email:
        return f"{config.SHEET_TITLE_PREFIX} - {email} - {stamp}"
    return f"{config.SHEET_TITLE_PREFIX} - {stamp}"


def fetch_subscriptions(directory: SubscriptionDirectory) -> List[Subscription]:
    """Fetch the caller's subscriptions, failing when there are none.

    Raises:
        EmptyResultError: If no subscriptions were collected
    """
    subscriptions = directory.list_subscriptions()
    if not subscriptions:
        raise EmptyResultError("No subscriptions found")
    return subscriptions


def write_rows(
    store: SheetStore,
    handle: SheetHandle,
    rows: Sequence[Sequence[str]],
    start_row: int,
    batch_size: int = config.WRITE_BATCH_SIZE,
) -> int:
    """Write rows in consecutive batches starting at column A.

    Args:
        store: Sheet wrapper
        handle: Worksheet to write to
        rows: Rows to write
        start_row: 1-based row of the first batch
        batch_size: Maximum rows per write call

    Returns:
        Number of rows written
    """
    row = start_row
    for batch in chunked(rows, batch_size):
        store.write_range(handle, row, 1, batch)
        row += len(batch)
    return row - start_row


def _account_email(session: Session) -> Optional[str]:
    email, _ = best_effort("Look up account email", lambda: session.email)
    return email


def _share(store: SheetStore, result: ExportResult) -> None:
    _, diagnostic = best_effort("Share spreadsheet", store.set_sharing, result.sheet.id)
    if diagnostic:
        result.diagnostics.append(diagnostic)


def export_subscriptions(session: Session, title: Optional[str] = None) -> ExportResult:
    """Export the caller's subscriptions to a new spreadsheet.

    Args:
        session: Authenticated API clients
        title: Spreadsheet title, built from the account email if omitted

    Returns:
        ExportResult for the new spreadsheet; duplicates is always 0

    Raises:
        EmptyResultError: If the caller has no subscriptions
        SubsheetError: If creating or writing the spreadsheet fails
    """
    directory = SubscriptionDirectory(session.youtube)
    store = SheetStore(session.sheets, session.drive)

    subscriptions = fetch_subscriptions(directory)

    sheet = store.create(title or default_sheet_title(_account_email(session)))
    handle = store.open(sheet.id)

    store.write_range(handle, 1, 1, [config.HEADER_ROW])
    written = write_rows(store, handle, [sub.to_row() for sub in subscriptions], start_row=2)
    store.format_header(handle, len(config.HEADER_ROW))
    logger.info("Exported %d subscriptions to %s", written, sheet.url)

    result = ExportResult(sheet=sheet, count=len(subscriptions), duplicates=0)
    _share(store, result)
    return result


def existing_channel_ids(store: SheetStore, handle: SheetHandle, last_row: int) -> Set[str]:
    """Get the trimmed, non-empty column A values below the header."""
    if last_row < 2:
        return set()
    values = first_column(store.read_range(handle, f"A2:A{last_row}"))
    return {str(value).strip() for value in values if str(value).strip()}


def copy_and_append(
    session: Session, source_sheet_id: str, title: Optional[str] = None
) -> ExportResult:
    """Copy a spreadsheet and append the caller's subscriptions not already in it.

    Args:
        session: Authenticated API clients
        source_sheet_id: ID or URL of spreadsheet to copy
        title: Title of the copy, built from the account email if omitted

    Returns:
        ExportResult for the copy with new_count and duplicates set

    Raises:
        ValueError: If source_sheet_id is not a spreadsheet ID or URL
        EmptyResultError: If the caller has no subscriptions
        NotFoundError: If the source spreadsheet cannot be copied
        SubsheetError: If reading or writing the copy fails
    """
    source_sheet_id = parse_spreadsheet_id(source_sheet_id)
    directory = SubscriptionDirectory(session.youtube)
    store = SheetStore(session.sheets, session.drive)

    subscriptions = fetch_subscriptions(directory)

    sheet = store.copy(source_sheet_id, title or default_sheet_title(_account_email(session)))
    handle = store.open(sheet.id)

    last_row = store.last_row(handle)
    seen = existing_channel_ids(store, handle, last_row)

    new_subscriptions = []
    for sub in subscriptions:
        if sub.channel_id in seen:
            continue
        seen.add(sub.channel_id)
        new_subscriptions.append(sub)

    if last_row == 0:
        store.write_range(handle, 1, 1, [config.HEADER_ROW])
        store.format_header(handle, len(config.HEADER_ROW))
        last_row = 1

    appended = write_rows(
        store, handle, [sub.to_row() for sub in new_subscriptions], start_row=last_row + 1
    )
    logger.info(
        "Appended %d of %d subscriptions to %s", appended, len(subscriptions), sheet.url
    )

    result = ExportResult(
        sheet=sheet,
        count=len(subscriptions),
        new_count=appended,
        duplicates=len(subscriptions) - appended,
    )
    _share(store, result)
    return result

"""Google Sheets and Drive wrapper."""

from typing import Any, Dict, List, Sequence

from . import config
from .errors import NotFoundError, translate_error
from .logging_config import get_logger
from .models import SheetHandle, SheetRef
from .utils import a1_range, quote_sheet_title

logger = get_logger(__name__)


class SheetStore:
    """Wrapper for spreadsheet operations."""

    def __init__(self, sheets, drive):
        """Initialize sheet wrapper.

        Args:
            sheets: Google Sheets v4 API client
            drive: Google Drive v3 API client
        """
        self.sheets = sheets
        self.drive = drive

    def create(self, title: str) -> SheetRef:
        """Create a new spreadsheet owned by the caller.

        Args:
            title: Title of the new spreadsheet

        Returns:
            Reference to the created spreadsheet

        Raises:
            SubsheetError: If API request fails
        """
        try:
            response = (
                self.sheets.spreadsheets()
                .create(body={"properties": {"title": title}}, fields="spreadsheetId,spreadsheetUrl")
                .execute()
            )
        except Exception as e:
            raise translate_error(e) from e

        spreadsheet_id = response["spreadsheetId"]
        url = response.get("spreadsheetUrl") or config.SPREADSHEET_URL_TEMPLATE.format(
            spreadsheet_id=spreadsheet_id
        )
        logger.info("Created spreadsheet %s", spreadsheet_id)
        return SheetRef(id=spreadsheet_id, url=url)

    def copy(self, source_id: str, title: str) -> SheetRef:
        """Copy a spreadsheet into the caller's Drive.

        Args:
            source_id: ID of spreadsheet to copy
            title: Title of the copy

        Returns:
            Reference to the copy

        Raises:
            NotFoundError: If the source does not exist or is not readable
            SubsheetError: If API request fails
        """
        try:
            response = (
                self.drive.files()
                .copy(fileId=source_id, body={"name": title}, fields="id")
                .execute()
            )
        except Exception as e:
            raise translate_error(e) from e

        copy_id = response["id"]
        logger.info("Copied spreadsheet %s to %s", source_id, copy_id)
        return SheetRef(
            id=copy_id, url=config.SPREADSHEET_URL_TEMPLATE.format(spreadsheet_id=copy_id)
        )

    def open(self, spreadsheet_id: str) -> SheetHandle:
        """Open a spreadsheet and select its first worksheet.

        Args:
            spreadsheet_id: ID of spreadsheet to open

        Returns:
            Handle to the first worksheet

        Raises:
            NotFoundError: If the spreadsheet does not exist or has no worksheets
            SubsheetError: If API request fails
        """
        try:
            response = (
                self.sheets.spreadsheets()
                .get(spreadsheetId=spreadsheet_id, fields="properties.title,sheets.properties")
                .execute()
            )
        except Exception as e:
            raise translate_error(e) from e

        worksheets = response.get("sheets") or []
        if not worksheets:
            raise NotFoundError(f"Spreadsheet {spreadsheet_id} has no worksheets")

        properties = worksheets[0]["properties"]
        return SheetHandle(
            spreadsheet_id=spreadsheet_id,
            sheet_id=properties.get("sheetId", 0),
            title=response.get("properties", {}).get("title", ""),
            sheet_title=properties.get("title", "Sheet1"),
        )

    def read_range(self, handle: SheetHandle, a1: str) -> List[List[Any]]:
        """Read raw cell values from the worksheet.

        Args:
            handle: Worksheet to read from
            a1: Range relative to the worksheet, e.g. A2:A100

        Returns:
            Grid of values; trailing empty rows and cells are omitted by the API

        Raises:
            SubsheetError: If API request fails
        """
        try:
            response = (
                self.sheets.spreadsheets()
                .values()
                .get(
                    spreadsheetId=handle.spreadsheet_id,
                    range=f"{quote_sheet_title(handle.sheet_title)}!{a1}",
                )
                .execute()
            )
        except Exception as e:
            raise translate_error(e) from e
        return response.get("values", [])

    def last_row(self, handle: SheetHandle) -> int:
        """Get the 1-based number of the last row holding any value.

        Raises:
            SubsheetError: If API request fails
        """
        try:
            response = (
                self.sheets.spreadsheets()
                .values()
                .get(
                    spreadsheetId=handle.spreadsheet_id,
                    range=quote_sheet_title(handle.sheet_title),
                    majorDimension="ROWS",
                )
                .execute()
            )
        except Exception as e:
            raise translate_error(e) from e
        return len(response.get("values", []))

    def write_range(
        self, handle: SheetHandle, start_row: int, start_col: int, grid: Sequence[Sequence[Any]]
    ) -> None:
        """Write a block of values starting at the given cell.

        Args:
            handle: Worksheet to write to
            start_row: 1-based first row
            start_col: 1-based first column
            grid: Rows of values, all the same width

        Raises:
            SubsheetError: If API request fails
        """
        if not grid:
            return

        target = a1_range(handle.sheet_title, start_row, start_col, len(grid), len(grid[0]))
        try:
            self.sheets.spreadsheets().values().update(
                spreadsheetId=handle.spreadsheet_id,
                range=target,
                valueInputOption="RAW",
                body={"values": [list(row) for row in grid]},
            ).execute()
        except Exception as e:
            raise translate_error(e) from e
        logger.debug("Wrote %d rows to %s", len(grid), target)

    def format_header(self, handle: SheetHandle, columns: int) -> None:
        """Bold and colour the header row, freeze it and auto-size the columns.

        Args:
            handle: Worksheet to format
            columns: Number of header columns

        Raises:
            SubsheetError: If API request fails
        """
        requests: List[Dict[str, Any]] = [
            {
                "repeatCell": {
                    "range": {
                        "sheetId": handle.sheet_id,
                        "startRowIndex": 0,
                        "endRowIndex": 1,
                        "startColumnIndex": 0,
                        "endColumnIndex": columns,
                    },
                    "cell": {
                        "userEnteredFormat": {
                            "backgroundColor": config.HEADER_BACKGROUND,
                            "textFormat": {
                                "bold": True,
                                "foregroundColor": config.HEADER_FOREGROUND,
                            },
                        }
                    },
                    "fields": "userEnteredFormat(backgroundColor,textFormat)",
                }
            },
            {
                "updateSheetProperties": {
                    "properties": {
                        "sheetId": handle.sheet_id,
                        "gridProperties": {"frozenRowCount": 1},
                    },
                    "fields": "gridProperties.frozenRowCount",
                }
            },
            {
                "autoResizeDimensions": {
                    "dimensions": {
                        "sheetId": handle.sheet_id,
                        "dimension": "COLUMNS",
                        "startIndex": 0,
                        "endIndex": columns,
                    }
                }
            },
        ]
        try:
            self.sheets.spreadsheets().batchUpdate(
                spreadsheetId=handle.spreadsheet_id, body={"requests": requests}
            ).execute()
        except Exception as e:
            raise translate_error(e) from e

    def set_sharing(self, file_id: str, role: str = "reader", grantee: str = "anyone") -> None:
        """Grant link access to a file.

        Args:
            file_id: Drive file ID
            role: Permission role, reader for view-only
            grantee: Permission type, anyone for anyone with the link

        Raises:
            SubsheetError: If API request fails
        """
        try:
            self.drive.permissions().create(
                fileId=file_id,
                body={"type": grantee, "role": role},
                fields="id",
            ).execute()
        except Exception as e:
            raise translate_error(e) from e
        logger.info("Shared %s with %s as %s", file_id, grantee, role)

"""Export and copy-and-append commands."""

from ..logging_config import get_logger
from ..service import SubsheetService
from . import SubsheetCommand

# Get logger for this module
logger = get_logger(__name__)


class ExportCommand(SubsheetCommand):
    """Command for exporting subscriptions to a new spreadsheet."""

    def _run(self) -> bool:
        if not self._finish(self.service.export_subscriptions_to_sheet()):
            return False
        logger.info("Exported %d subscriptions", self.result["count"])
        logger.info("Sheet: %s", self.result["sheet_url"])
        return True


class CopyCommand(SubsheetCommand):
    """Command for copying a spreadsheet and appending new subscriptions."""

    def __init__(self, service: SubsheetService, source_sheet: str) -> None:
        """Initialize command.

        Args:
            service: Service bound to the signed-in user
            source_sheet: ID or URL of spreadsheet to copy
        """
        super().__init__(service)
        self.source_sheet = source_sheet

    def validate(self) -> None:
        """Validate command parameters."""
        if not self.source_sheet:
            raise ValueError("Source spreadsheet ID is required")
        super().validate()

    def _run(self) -> bool:
        if not self._finish(self.service.copy_and_append_to_sheet(self.source_sheet)):
            return False
        logger.info(
            "Appended %d new subscriptions (%d already in the sheet)",
            self.result["new_count"],
            self.result["duplicates"],
        )
        logger.info("Sheet: %s", self.result["sheet_url"])
        return True

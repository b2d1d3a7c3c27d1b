"""Commands for reading channel IDs from a sheet and subscribing to them."""

from ..errors import ErrorKind
from ..logging_config import get_logger
from ..service import SubsheetService
from . import SubsheetCommand

# Get logger for this module
logger = get_logger(__name__)


class FetchCommand(SubsheetCommand):
    """Command for listing the channel IDs in a spreadsheet."""

    def __init__(self, service: SubsheetService, sheet: str) -> None:
        """Initialize command.

        Args:
            service: Service bound to the signed-in user
            sheet: ID or URL of spreadsheet to read
        """
        super().__init__(service)
        self.sheet = sheet

    def validate(self) -> None:
        """Validate command parameters."""
        if not self.sheet:
            raise ValueError("Spreadsheet ID is required")
        super().validate()

    def _run(self) -> bool:
        if not self._finish(self.service.fetch_from_sheet(self.sheet)):
            return False
        for channel_id in self.result["channel_ids"]:
            logger.info("%s", channel_id)
        logger.info("Found %d channel IDs", self.result["count"])
        return True


class ImportCommand(FetchCommand):
    """Command for subscribing to every channel listed in a spreadsheet."""

    def __init__(self, service: SubsheetService, sheet: str, progress: bool = False) -> None:
        """Initialize command.

        Args:
            service: Service bound to the signed-in user
            sheet: ID or URL of spreadsheet to import from
            progress: Whether to show a progress bar
        """
        super().__init__(service, sheet)
        self.progress = progress

    def _run(self) -> bool:
        result = self.service.import_from_sheet(self.sheet, progress=self.progress)
        if "succeeded" not in result:
            return self._finish(result)

        self.result = result
        logger.info(
            "Subscribed to %d channels, %d already subscribed, %d failed",
            result["succeeded"],
            result["duplicates"],
            result["failed"],
        )
        missing = [
            failure["channel_id"]
            for failure in result["failures"]
            if failure["kind"] == ErrorKind.NOT_FOUND.value
        ]
        if missing:
            logger.info("Channels not found: %s", ", ".join(missing))
        if result["halted"]:
            logger.error("%s", result["error"])
            return False
        return True

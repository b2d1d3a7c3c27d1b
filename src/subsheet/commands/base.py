"""Base command class for subsheet operations."""

from typing import Any, Dict

from ..errors import SubsheetError
from ..logging_config import get_logger
from ..service import SubsheetService

# Get logger for this module
logger = get_logger(__name__)


class SubsheetCommand:
    """Base class for subsheet commands."""

    def __init__(self, service: SubsheetService):
        """Initialize command.

        Args:
            service: Service bound to the signed-in user
        """
        self.service = service
        self._logger = logger
        self.result: Dict[str, Any] = {}

    def validate(self) -> None:
        """Validate command parameters.

        Raises:
            ValueError: If parameters are invalid
        """
        if not self.service:
            raise ValueError("Subsheet service is required")

    def run(self) -> bool:
        """Run the command.

        Returns:
            bool: True if successful, False otherwise

        Raises:
            SubsheetError: If command fails
        """
        try:
            self.validate()
            return self._run()
        except Exception as e:
            raise SubsheetError(str(e)) from e

    def _run(self) -> bool:
        """Internal run implementation.

        Returns:
            bool: True if successful, False otherwise
        """
        return False

    def _finish(self, result: Dict[str, Any]) -> bool:
        """Store a service result and log its error, if any."""
        self.result = result
        if not result.get("success"):
            self._logger.error("%s", result.get("error", "Unknown error"))
            return False
        return True

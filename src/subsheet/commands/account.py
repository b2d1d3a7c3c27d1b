"""Account information commands."""

from ..logging_config import get_logger
from . import SubsheetCommand

logger = get_logger(__name__)


class WhoAmICommand(SubsheetCommand):
    """Command to show the signed-in account."""

    def _run(self) -> bool:
        if not self._finish(self.service.get_current_user()):
            return False
        logger.info("Signed in as %s", self.result["email"])
        channel = self.result.get("channel")
        if channel:
            logger.info("Channel: %s (%s)", channel["title"], channel["id"])
        return True


class CountCommand(SubsheetCommand):
    """Command to show how many channels the account subscribes to."""

    def _run(self) -> bool:
        if not self._finish(self.service.get_subscription_count()):
            return False
        logger.info("Subscriptions: %d", self.result["count"])
        return True

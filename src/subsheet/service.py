"""Public operations exposed to the CLI and web API.

Every operation returns a plain dict. Failures never propagate as
exceptions; they come back as ``{"success": False, "error": message}``.
"""

import functools
from typing import Any, Callable, Dict

from . import config, pipeline
from .auth import Session
from .directory import SubscriptionDirectory
from .errors import best_effort, error_message, log_error
from .identifiers import read_channel_ids
from .importer import import_channels, subscribe_to_channel
from .models import UserIdentity
from .sheets import SheetStore
from .utils import extract_sheet_id, parse_spreadsheet_id

SHARE_MESSAGE_TEMPLATE = (
    "I exported my {count} YouTube subscriptions to a Google Sheet: {url}\n"
    "To subscribe to the same channels, import it with the sheet ID: {sheet_id}"
)


def failure(error: Exception, context: str) -> Dict[str, Any]:
    """Build the failure result for an exception and log it."""
    log_error(error, context)
    return {"success": False, "error": error_message(error)}


def boundary(context: str) -> Callable:
    """Decorator converting any exception into a failure result.

    Args:
        context: Description of the operation, used in the log line
    """

    def decorator(func: Callable[..., Dict[str, Any]]) -> Callable[..., Dict[str, Any]]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Dict[str, Any]:
            try:
                return func(*args, **kwargs)
            except Exception as e:  # pylint: disable=broad-except
                return failure(e, context)

        return wrapper

    return decorator


def share_message(sheet_url: str, count: int) -> str:
    """Build the text a user can send along with an exported sheet.

    The sheet ID is taken from the /d/<id>/ part of the URL. A URL without
    one gets a placeholder instead.
    """
    sheet_id = extract_sheet_id(sheet_url) or config.SHARE_ID_PLACEHOLDER
    return SHARE_MESSAGE_TEMPLATE.format(count=count, url=sheet_url, sheet_id=sheet_id)


class SubsheetService:
    """Operations on behalf of one signed-in user."""

    def __init__(self, session: Session):
        """Initialize service.

        Args:
            session: Authenticated API clients
        """
        self.session = session
        self.directory = SubscriptionDirectory(session.youtube)
        self.store = SheetStore(session.sheets, session.drive)

    @boundary("Failed to get current user")
    def get_current_user(self) -> Dict[str, Any]:
        """Get the caller's email and, when available, channel profile."""
        channel, _ = best_effort("Look up channel profile", self.directory.get_channel_profile)
        identity = UserIdentity(email=self.session.email, channel=channel)
        return {"success": True, **identity.to_dict()}

    def get_user_email(self) -> str:
        """Get the caller's email, or an empty string if it cannot be looked up."""
        try:
            return self.session.email
        except Exception as e:  # pylint: disable=broad-except
            log_error(e, "Failed to get user email")
            return ""

    @boundary("Failed to export subscriptions")
    def export_subscriptions_to_sheet(self) -> Dict[str, Any]:
        return pipeline.export_subscriptions(self.session).to_dict()

    @boundary("Failed to copy and append subscriptions")
    def copy_and_append_to_sheet(self, source_sheet_id: str) -> Dict[str, Any]:
        return pipeline.copy_and_append(self.session, source_sheet_id).to_dict()

    @boundary("Failed to count subscriptions")
    def get_subscription_count(self) -> Dict[str, Any]:
        return {"success": True, "count": self.directory.count_subscriptions()}

    @boundary("Failed to read channel IDs from sheet")
    def fetch_from_sheet(self, spreadsheet_id: str) -> Dict[str, Any]:
        channel_ids = read_channel_ids(self.store, parse_spreadsheet_id(spreadsheet_id))
        return {"success": True, "channel_ids": channel_ids, "count": len(channel_ids)}

    @boundary("Failed to subscribe")
    def subscribe_to_channel(self, channel_id: str) -> Dict[str, Any]:
        return subscribe_to_channel(self.directory, channel_id.strip()).to_dict()

    @boundary("Failed to import subscriptions from sheet")
    def import_from_sheet(self, spreadsheet_id: str, progress: bool = False) -> Dict[str, Any]:
        """Read channel IDs from a sheet and subscribe to each of them."""
        channel_ids = read_channel_ids(self.store, parse_spreadsheet_id(spreadsheet_id))
        result = import_channels(self.directory, channel_ids, progress=progress)
        response = result.to_dict()
        response["count"] = len(channel_ids)
        if result.halted:
            response["error"] = "YouTube API quota exceeded. Import stopped early."
        return response

    @boundary("Failed to open spreadsheet")
    def validate_spreadsheet(self, spreadsheet_id: str) -> Dict[str, Any]:
        handle = self.store.open(parse_spreadsheet_id(spreadsheet_id))
        return {"success": True, "title": handle.title, "sheet_url": handle.url}

    @staticmethod
    def get_share_message(sheet_url: str, count: int) -> str:
        return share_message(sheet_url, count)

"""Export YouTube subscriptions to Google Sheets and import them back."""

__version__ = "0.1.0"

# Import all public components
from .auth import Session, build_session
from .cli import main
from .commands import SubsheetCommand
from .directory import SubscriptionDirectory
from .errors import ErrorKind, SubsheetError
from .identifiers import read_channel_ids
from .importer import import_channels, subscribe_to_channel
from .logging_config import configure_logging, get_logger
from .pipeline import copy_and_append, export_subscriptions
from .service import SubsheetService, share_message
from .sheets import SheetStore

# Import config variables
from .config import (  # noqa: F401
    SCOPES,
    CLIENT_SECRETS_FILE,
    CREDENTIALS_DIR,
    TOKEN_FILE,
    PAGE_SIZE,
    MAX_PAGES,
    WRITE_BATCH_SIZE,
)

# Configure logging
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

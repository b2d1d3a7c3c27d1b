"""Google API authentication and per-invocation session context."""

import os
import pickle
from dataclasses import dataclass, field
from typing import Any, Optional

from google.auth.transport.requests import Request
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from . import config
from .errors import AuthorizationError, translate_error
from .logging_config import get_logger

logger = get_logger(__name__)


def get_credentials():
    """Get OAuth credentials for the configured scopes.

    Loads the pickled token if one exists, refreshes it when expired and
    otherwise runs the installed-app flow. The token is saved for the next run.

    Returns:
        Google credentials object

    Raises:
        AuthorizationError: If no client secrets are configured or the flow fails
    """
    if not config.CLIENT_SECRETS_FILE:
        raise AuthorizationError("GOOGLE_CLIENT_SECRETS_FILE environment variable not set")

    creds = None

    # Load existing credentials if available
    if os.path.exists(config.TOKEN_FILE):
        with open(config.TOKEN_FILE, "rb") as token:
            creds = pickle.load(token)

    # If there are no (valid) credentials available, let the user log in
    if not creds or not creds.valid:
        try:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                flow = InstalledAppFlow.from_client_secrets_file(
                    config.CLIENT_SECRETS_FILE, config.SCOPES
                )
                creds = flow.run_local_server(port=0)
        except Exception as e:
            raise AuthorizationError(f"Authentication failed: {str(e)}") from e

        # Save the credentials for the next run
        os.makedirs(os.path.dirname(config.TOKEN_FILE), exist_ok=True)
        with open(config.TOKEN_FILE, "wb") as token:
            pickle.dump(creds, token)

    return creds


@dataclass
class Session:
    """Authenticated API clients for one invocation.

    Passed explicitly into every operation so nothing depends on module
    level state.
    """

    youtube: Any
    sheets: Any
    drive: Any
    _email: Optional[str] = field(default=None, repr=False)

    @property
    def email(self) -> str:
        """Email address of the signed-in account, looked up once."""
        if self._email is None:
            try:
                about = self.drive.about().get(fields="user(emailAddress)").execute()
            except Exception as e:
                raise translate_error(e) from e
            self._email = about.get("user", {}).get("emailAddress", "")
        return self._email


def build_session(credentials=None) -> Session:
    """Build the YouTube, Sheets and Drive clients.

    Args:
        credentials: Optional credentials, fetched with get_credentials() if omitted

    Returns:
        Session holding the three clients

    Raises:
        AuthorizationError: If authentication or client construction fails
    """
    if credentials is None:
        credentials = get_credentials()

    try:
        session = Session(
            youtube=build("youtube", "v3", credentials=credentials),
            sheets=build("sheets", "v4", credentials=credentials),
            drive=build("drive", "v3", credentials=credentials),
        )
    except Exception as e:
        raise AuthorizationError(f"Failed to build Google API clients: {str(e)}") from e

    logger.debug("Built YouTube, Sheets and Drive clients")
    return session

"""Common test fixtures and utilities."""

from unittest.mock import MagicMock

import pytest

from google_fakes import subscription_page
from src.subsheet.auth import Session


@pytest.fixture
def youtube_client() -> MagicMock:
    """Create a mock YouTube API client.

    Returns:
        MagicMock: Mock YouTube client with one page of two subscriptions
    """
    mock = MagicMock()
    mock.subscriptions.return_value.list.return_value.execute.return_value = subscription_page(
        ["UC1", "UC2"]
    )
    mock.subscriptions.return_value.insert.return_value.execute.return_value = {"id": "sub1"}
    mock.channels.return_value.list.return_value.execute.return_value = {
        "items": [
            {
                "id": "UCme",
                "snippet": {
                    "title": "My Channel",
                    "thumbnails": {"default": {"url": "https://example.com/me.jpg"}},
                },
                "statistics": {"subscriberCount": "42"},
            }
        ]
    }
    return mock


@pytest.fixture
def sheets_client() -> MagicMock:
    """Create a mock Google Sheets API client.

    Returns:
        MagicMock: Mock Sheets client for a spreadsheet with a single worksheet
    """
    mock = MagicMock()
    spreadsheets = mock.spreadsheets.return_value
    spreadsheets.create.return_value.execute.return_value = {
        "spreadsheetId": "new-sheet",
        "spreadsheetUrl": "https://docs.google.com/spreadsheets/d/new-sheet/edit",
    }
    spreadsheets.get.return_value.execute.return_value = {
        "properties": {"title": "Subscriptions"},
        "sheets": [{"properties": {"sheetId": 0, "title": "Sheet1"}}],
    }
    spreadsheets.values.return_value.get.return_value.execute.return_value = {"values": []}
    spreadsheets.values.return_value.update.return_value.execute.return_value = {}
    spreadsheets.batchUpdate.return_value.execute.return_value = {}
    return mock


@pytest.fixture
def drive_client() -> MagicMock:
    """Create a mock Google Drive API client.

    Returns:
        MagicMock: Mock Drive client
    """
    mock = MagicMock()
    mock.files.return_value.copy.return_value.execute.return_value = {"id": "copied-sheet"}
    mock.permissions.return_value.create.return_value.execute.return_value = {"id": "perm1"}
    mock.about.return_value.get.return_value.execute.return_value = {
        "user": {"emailAddress": "me@example.com"}
    }
    return mock


@pytest.fixture
def session(youtube_client, sheets_client, drive_client) -> Session:
    """Create a session around the mock clients."""
    return Session(youtube=youtube_client, sheets=sheets_client, drive=drive_client)

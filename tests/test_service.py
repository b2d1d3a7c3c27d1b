"""Tests for the public service operations."""

from unittest.mock import patch

import pytest

from google_fakes import make_http_error, subscription_page
from src.subsheet.service import SubsheetService, boundary, share_message


@pytest.fixture
def service(session):
    """Create a SubsheetService around the mock session."""
    return SubsheetService(session)


def _sheet_values(sheets_client, *responses):
    sheets_client.spreadsheets.return_value.values.return_value.get.return_value.execute.side_effect = list(
        responses
    )


class TestShareMessage:
    def test_extracts_sheet_id(self):
        message = share_message("https://docs.google.com/spreadsheets/d/ABC123/edit", 42)

        assert "ABC123" in message
        assert "42" in message
        assert "https://docs.google.com/spreadsheets/d/ABC123/edit" in message

    def test_malformed_url_uses_placeholder(self):
        assert "YOUR_SHEET_ID" in share_message("not a url", 3)

    def test_service_passthrough(self, service):
        assert service.get_share_message("https://x/d/ABC123/edit", 1) == share_message(
            "https://x/d/ABC123/edit", 1
        )


def test_boundary_converts_exceptions():
    @boundary("Failed to do thing")
    def operation():
        raise make_http_error(403, "quotaExceeded")

    result = operation()

    assert result["success"] is False
    assert "quota" in result["error"].lower()


class TestCurrentUser:
    def test_with_channel(self, service):
        assert service.get_current_user() == {
            "success": True,
            "email": "me@example.com",
            "channel": {
                "id": "UCme",
                "title": "My Channel",
                "subscriber_count": 42,
                "thumbnail_url": "https://example.com/me.jpg",
            },
        }

    def test_channel_lookup_failure_degrades(self, service, youtube_client):
        youtube_client.channels.return_value.list.return_value.execute.side_effect = (
            make_http_error(500, message="Backend Error")
        )

        assert service.get_current_user() == {
            "success": True,
            "email": "me@example.com",
            "channel": None,
        }

    def test_email_failure(self, service, drive_client):
        drive_client.about.return_value.get.return_value.execute.side_effect = make_http_error(
            401
        )

        result = service.get_current_user()

        assert result["success"] is False

    def test_get_user_email(self, service):
        assert service.get_user_email() == "me@example.com"

    def test_get_user_email_failure(self, service, drive_client):
        drive_client.about.return_value.get.return_value.execute.side_effect = Exception("boom")

        assert service.get_user_email() == ""


class TestExport:
    def test_export(self, service):
        result = service.export_subscriptions_to_sheet()

        assert result["success"] is True
        assert result["count"] == 2
        assert result["duplicates"] == 0
        assert result["sheet_id"] == "new-sheet"

    def test_export_no_subscriptions(self, service, youtube_client, sheets_client):
        youtube_client.subscriptions.return_value.list.return_value.execute.return_value = (
            subscription_page([])
        )

        assert service.export_subscriptions_to_sheet() == {
            "success": False,
            "error": "No subscriptions found",
        }
        sheets_client.spreadsheets.return_value.create.assert_not_called()

    def test_export_create_failure(self, service, sheets_client):
        sheets_client.spreadsheets.return_value.create.return_value.execute.side_effect = (
            make_http_error(500, message="Backend Error")
        )

        assert service.export_subscriptions_to_sheet() == {
            "success": False,
            "error": "Backend Error",
        }


class TestCopyAndAppend:
    def test_copy_and_append(self, service, youtube_client, sheets_client):
        youtube_client.subscriptions.return_value.list.return_value.execute.return_value = (
            subscription_page(["UC1", "UC3"])
        )
        _sheet_values(
            sheets_client,
            {"values": [["Channel ID"], ["UC1"], ["UC2"]]},
            {"values": [["UC1"], ["UC2"]]},
        )

        result = service.copy_and_append_to_sheet("source-sheet")

        assert result["success"] is True
        assert result["count"] == 2
        assert result["new_count"] == 1
        assert result["duplicates"] == 1
        assert result["sheet_id"] == "copied-sheet"

    def test_copy_missing_source(self, service, drive_client):
        drive_client.files.return_value.copy.return_value.execute.side_effect = make_http_error(
            404, "notFound", "File not found"
        )

        result = service.copy_and_append_to_sheet("missing")

        assert result["success"] is False
        assert "not found" in result["error"].lower()


class TestCount:
    def test_count(self, service, youtube_client):
        youtube_client.subscriptions.return_value.list.return_value.execute.return_value = {
            "pageInfo": {"totalResults": 77}
        }

        assert service.get_subscription_count() == {"success": True, "count": 77}

    def test_count_failure(self, service, youtube_client):
        youtube_client.subscriptions.return_value.list.return_value.execute.side_effect = (
            make_http_error(403, "quotaExceeded")
        )

        assert service.get_subscription_count()["success"] is False


class TestFetchFromSheet:
    def test_fetch(self, service, sheets_client):
        _sheet_values(
            sheets_client,
            {"values": [["Channel ID"], [""], ["UCabc"], ["  UCxyz  "], ["XYZ123"]]},
            {"values": [[""], ["UCabc"], ["  UCxyz  "], ["XYZ123"]]},
        )

        assert service.fetch_from_sheet("sheet1") == {
            "success": True,
            "channel_ids": ["UCabc", "UCxyz"],
            "count": 2,
        }

    def test_fetch_accepts_url(self, service, sheets_client):
        _sheet_values(sheets_client, {"values": [["Channel ID"], ["UC1"]]}, {"values": [["UC1"]]})

        service.fetch_from_sheet("https://docs.google.com/spreadsheets/d/abc/edit")

        sheets_client.spreadsheets.return_value.get.assert_called_once_with(
            spreadsheetId="abc", fields="properties.title,sheets.properties"
        )

    def test_fetch_empty_sheet(self, service, sheets_client):
        _sheet_values(sheets_client, {"values": [["Channel ID"]]})

        assert service.fetch_from_sheet("sheet1") == {
            "success": False,
            "error": "Sheet is empty or only has headers",
        }

    def test_fetch_no_valid_ids(self, service, sheets_client):
        _sheet_values(sheets_client, {"values": [["Channel ID"], ["foo"]]}, {"values": [["foo"]]})

        assert service.fetch_from_sheet("sheet1") == {
            "success": False,
            "error": "No valid channel IDs found in column A",
        }


class TestSubscribe:
    def test_subscribe(self, service):
        assert service.subscribe_to_channel(" UCabc ") == {
            "success": True,
            "channel_id": "UCabc",
            "message": "Subscribed to UCabc",
        }

    def test_subscribe_duplicate(self, service, youtube_client):
        youtube_client.subscriptions.return_value.insert.return_value.execute.side_effect = (
            make_http_error(400, "subscriptionDuplicate")
        )

        result = service.subscribe_to_channel("UCabc")

        assert result["success"] is False
        assert result["skippable"] is True


class TestImportFromSheet:
    def test_import(self, service, sheets_client, youtube_client):
        _sheet_values(
            sheets_client,
            {"values": [["Channel ID"], ["UC1"], ["UC2"], ["UC3"]]},
            {"values": [["UC1"], ["UC2"], ["UC3"]]},
        )
        youtube_client.subscriptions.return_value.insert.return_value.execute.side_effect = [
            {"id": "s1"},
            make_http_error(400, "subscriptionDuplicate"),
            make_http_error(404, "channelNotFound"),
        ]

        result = service.import_from_sheet("sheet1")

        assert result["success"] is True
        assert result["count"] == 3
        assert result["succeeded"] == 1
        assert result["duplicates"] == 1
        assert result["failed"] == 1

    def test_import_halts_on_quota(self, service, sheets_client, youtube_client):
        _sheet_values(
            sheets_client,
            {"values": [["Channel ID"], ["UC1"], ["UC2"]]},
            {"values": [["UC1"], ["UC2"]]},
        )
        insert = youtube_client.subscriptions.return_value.insert
        insert.return_value.execute.side_effect = make_http_error(403, "quotaExceeded")

        result = service.import_from_sheet("sheet1")

        assert result["success"] is False
        assert result["halted"] is True
        assert "quota" in result["error"].lower()
        assert insert.call_count == 1


class TestValidateSpreadsheet:
    def test_valid(self, service):
        assert service.validate_spreadsheet("sheet1") == {
            "success": True,
            "title": "Subscriptions",
            "sheet_url": "https://docs.google.com/spreadsheets/d/sheet1/edit",
        }

    def test_missing(self, service, sheets_client):
        sheets_client.spreadsheets.return_value.get.return_value.execute.side_effect = (
            make_http_error(404, "notFound", "Requested entity was not found.")
        )

        assert service.validate_spreadsheet("sheet1")["success"] is False

    def test_invalid_id(self, service):
        with patch("src.subsheet.service.log_error") as mock_log_error:
            result = service.validate_spreadsheet("not a sheet!")

        assert result["success"] is False
        assert "Invalid spreadsheet format" in result["error"]
        mock_log_error.assert_called_once()

"""Tests for the import driver."""

from unittest.mock import MagicMock

import pytest

from google_fakes import make_http_error
from src.subsheet.directory import SubscriptionDirectory
from src.subsheet.errors import DuplicateSubscriptionError, ErrorKind, QuotaExceededError
from src.subsheet.importer import import_channels, subscribe_to_channel
from src.subsheet.models import TransferResult


@pytest.fixture
def directory(youtube_client):
    """Create a SubscriptionDirectory with mock client."""
    return SubscriptionDirectory(youtube_client)


def _insert(youtube_client):
    return youtube_client.subscriptions.return_value.insert


class TestSubscribeToChannel:
    def test_success(self, directory):
        outcome = subscribe_to_channel(directory, "UCabc")

        assert outcome.to_dict() == {
            "success": True,
            "channel_id": "UCabc",
            "message": "Subscribed to UCabc",
        }

    def test_duplicate_is_skippable(self, directory, youtube_client):
        _insert(youtube_client).return_value.execute.side_effect = make_http_error(
            400, "subscriptionDuplicate", "Already subscribed"
        )

        result = subscribe_to_channel(directory, "UCabc").to_dict()

        assert result["success"] is False
        assert result["skippable"] is True
        assert "critical" not in result

    def test_quota_is_critical(self, directory, youtube_client):
        _insert(youtube_client).return_value.execute.side_effect = make_http_error(
            403, "quotaExceeded"
        )

        outcome = subscribe_to_channel(directory, "UCabc")

        assert outcome.critical
        assert not outcome.skippable
        assert outcome.to_dict()["critical"] is True

    def test_channel_not_found_is_skippable(self, directory, youtube_client):
        _insert(youtube_client).return_value.execute.side_effect = make_http_error(
            404, "channelNotFound"
        )

        outcome = subscribe_to_channel(directory, "UCgone")

        assert outcome.skippable
        assert outcome.kind == ErrorKind.NOT_FOUND

    def test_forbidden_is_skippable(self, directory, youtube_client):
        _insert(youtube_client).return_value.execute.side_effect = make_http_error(
            403, "subscriptionForbidden"
        )

        assert subscribe_to_channel(directory, "UCabc").skippable

    def test_generic_failure(self, directory, youtube_client):
        _insert(youtube_client).return_value.execute.side_effect = make_http_error(
            500, message="Backend Error"
        )

        result = subscribe_to_channel(directory, "UCabc").to_dict()

        assert result == {"success": False, "channel_id": "UCabc", "error": "Backend Error"}

    def test_plain_exception_text(self):
        directory = MagicMock()
        directory.subscribe.side_effect = Exception("subscriptionDuplicate")

        assert subscribe_to_channel(directory, "UCabc").skippable


class TestImportChannels:
    def test_counts_outcomes(self):
        directory = MagicMock()
        directory.subscribe.side_effect = [
            {"id": "s1"},
            DuplicateSubscriptionError("Already subscribed"),
            make_http_error(404, "channelNotFound"),
            Exception("boom"),
            {"id": "s2"},
        ]

        result = import_channels(directory, ["UC1", "UC2", "UC3", "UC4", "UC5"])

        assert result.succeeded == 2
        assert result.duplicates == 1
        assert result.failures == [("UC3", ErrorKind.NOT_FOUND), ("UC4", ErrorKind.REMOTE)]
        assert not result.halted
        assert directory.subscribe.call_count == 5

    def test_stops_on_quota(self):
        directory = MagicMock()
        directory.subscribe.side_effect = [
            {"id": "s1"},
            QuotaExceededError("quota"),
            {"id": "s3"},
        ]

        result = import_channels(directory, ["UC1", "UC2", "UC3"])

        assert result.halted
        assert result.succeeded == 1
        assert result.failures == [("UC2", ErrorKind.QUOTA_EXCEEDED)]
        assert directory.subscribe.call_count == 2

    def test_stops_on_quota_from_api(self, directory, youtube_client):
        _insert(youtube_client).return_value.execute.side_effect = make_http_error(
            403, "quotaExceeded"
        )

        result = import_channels(directory, ["UC1", "UC2", "UC3"])

        assert result.halted
        assert _insert(youtube_client).call_count == 1

    def test_stops_on_quota_with_error_info_details(self, directory, youtube_client):
        _insert(youtube_client).return_value.execute.side_effect = make_http_error(
            403, "quotaExceeded", detail_reason="RATE_LIMIT_EXCEEDED"
        )

        result = import_channels(directory, ["UC1", "UC2", "UC3"])

        assert result.halted
        assert result.failures == [("UC1", ErrorKind.QUOTA_EXCEEDED)]
        assert _insert(youtube_client).call_count == 1

    def test_progress_bar(self):
        directory = MagicMock()

        result = import_channels(directory, ["UC1", "UC2"], progress=True)

        assert result.succeeded == 2

    def test_accumulates_into_existing_result(self):
        directory = MagicMock()
        result = TransferResult(succeeded=3)

        import_channels(directory, ["UC1"], result=result)

        assert result.succeeded == 4

    def test_to_dict(self):
        directory = MagicMock()
        directory.subscribe.side_effect = [QuotaExceededError("quota")]

        assert import_channels(directory, ["UC1", "UC2"]).to_dict() == {
            "success": False,
            "succeeded": 0,
            "duplicates": 0,
            "failed": 1,
            "halted": True,
            "failures": [{"channel_id": "UC1", "kind": "quota_exceeded"}],
        }

"""YouTube subscription directory wrapper."""

from typing import Dict, Iterator, List, Optional

from . import config
from .errors import error_message, translate_error
from .logging_config import get_logger
from .models import ChannelProfile, Subscription

logger = get_logger(__name__)


class SubscriptionDirectory:
    """Wrapper for the caller's YouTube subscriptions."""

    def __init__(self, youtube):
        """Initialize directory wrapper.

        Args:
            youtube: YouTube API client
        """
        self.youtube = youtube

    def iter_subscriptions(
        self, page_size: int = config.PAGE_SIZE, max_pages: int = config.MAX_PAGES
    ) -> Iterator[Subscription]:
        """Yield the caller's subscriptions, one page at a time.

        Produces at most page_size * max_pages items. A failed page ends the
        sequence early with what was already yielded instead of raising.

        Args:
            page_size: Results per page request
            max_pages: Maximum number of pages to request

        Yields:
            Subscription snapshots in the order the API returns them
        """
        page_token = None

        for page in range(max_pages):
            try:
                # pylint: disable=no-member
                request = self.youtube.subscriptions().list(
                    part="snippet",
                    mine=True,
                    maxResults=page_size,
                    pageToken=page_token,
                )
                # pylint: enable=no-member
                response = request.execute()
            except Exception as e:
                logger.warning(
                    "Stopped fetching subscriptions after %d page(s): %s", page, error_message(e)
                )
                return

            for item in response.get("items", []):
                snippet = item.get("snippet", {})
                channel_id = snippet.get("resourceId", {}).get("channelId")
                if not channel_id:
                    continue
                yield Subscription(channel_id=channel_id, title=snippet.get("title", ""))

            page_token = response.get("nextPageToken")
            if not page_token:
                return

        logger.info("Reached the %d page limit, remaining subscriptions were not fetched", max_pages)

    def list_subscriptions(
        self, page_size: int = config.PAGE_SIZE, max_pages: int = config.MAX_PAGES
    ) -> List[Subscription]:
        """Get the caller's subscriptions as a list.

        Args:
            page_size: Results per page request
            max_pages: Maximum number of pages to request

        Returns:
            List of subscriptions, possibly truncated by the page cap or an API error
        """
        subscriptions = list(self.iter_subscriptions(page_size=page_size, max_pages=max_pages))
        logger.info("Fetched %d subscriptions", len(subscriptions))
        return subscriptions

    def count_subscriptions(self) -> int:
        """Get the total number of subscriptions reported by the API.

        Raises:
            SubsheetError: If the API request fails
        """
        try:
            response = (
                self.youtube.subscriptions().list(part="id", mine=True, maxResults=1).execute()
            )
        except Exception as e:
            raise translate_error(e) from e
        return int(response.get("pageInfo", {}).get("totalResults", 0))

    def subscribe(self, channel_id: str) -> Dict:
        """Subscribe the caller to a channel.

        Args:
            channel_id: ID of channel to subscribe to

        Returns:
            The created subscription resource

        Raises:
            DuplicateSubscriptionError: If already subscribed
            QuotaExceededError: If the API quota is exhausted
            NotFoundError: If the channel does not exist or is forbidden
            SubsheetError: If the API request fails for another reason
        """
        try:
            request = self.youtube.subscriptions().insert(
                part="snippet",
                body={
                    "snippet": {
                        "resourceId": {"kind": "youtube#channel", "channelId": channel_id},
                    }
                },
            )
            return request.execute()
        except Exception as e:
            raise translate_error(e) from e

    def get_channel_profile(self) -> Optional[ChannelProfile]:
        """Get the caller's own channel, if the account has one.

        Raises:
            SubsheetError: If the API request fails
        """
        try:
            response = (
                self.youtube.channels().list(part="snippet,statistics", mine=True).execute()
            )
        except Exception as e:
            raise translate_error(e) from e

        items = response.get("items") or []
        if not items:
            return None

        channel = items[0]
        snippet = channel.get("snippet", {})
        statistics = channel.get("statistics", {})
        subscriber_count = statistics.get("subscriberCount")
        return ChannelProfile(
            id=channel["id"],
            title=snippet.get("title", ""),
            subscriber_count=int(subscriber_count) if subscriber_count is not None else None,
            thumbnail_url=snippet.get("thumbnails", {}).get("default", {}).get("url"),
        )

"""Subscribe the caller to a list of channels."""

from typing import Optional, Sequence

from tqdm import tqdm

from .directory import SubscriptionDirectory
from .errors import classify_error, error_message
from .logging_config import get_logger
from .models import SubscribeOutcome, TransferResult

logger = get_logger(__name__)


def subscribe_to_channel(directory: SubscriptionDirectory, channel_id: str) -> SubscribeOutcome:
    """Subscribe to one channel and classify the outcome.

    Never raises for remote failures: duplicates and missing channels come
    back skippable, quota exhaustion comes back critical.

    Args:
        directory: Subscription directory wrapper
        channel_id: ID of channel to subscribe to

    Returns:
        SubscribeOutcome describing the result
    """
    try:
        directory.subscribe(channel_id)
    except Exception as e:  # pylint: disable=broad-except
        outcome = SubscribeOutcome(
            channel_id=channel_id, success=False, error=error_message(e), kind=classify_error(e)
        )
        if outcome.critical:
            logger.error("Quota exhausted while subscribing to %s", channel_id)
        elif outcome.skippable:
            logger.info("Skipping %s: %s", channel_id, outcome.error)
        else:
            logger.error("Failed to subscribe to %s: %s", channel_id, outcome.error)
        return outcome

    logger.debug("Subscribed to %s", channel_id)
    return SubscribeOutcome(
        channel_id=channel_id, success=True, message=f"Subscribed to {channel_id}"
    )


def import_channels(
    directory: SubscriptionDirectory,
    channel_ids: Sequence[str],
    progress: bool = False,
    result: Optional[TransferResult] = None,
) -> TransferResult:
    """Subscribe to each channel in turn.

    Stops issuing calls at the first critical outcome; skippable and generic
    failures are counted and the loop continues.

    Args:
        directory: Subscription directory wrapper
        channel_ids: Channel IDs to subscribe to, in order
        progress: Whether to show a progress bar
        result: Optional result to accumulate into

    Returns:
        TransferResult with counts of successes, duplicates and failures
    """
    result = result or TransferResult()

    with tqdm(channel_ids, desc="Subscribing", unit="channel", disable=not progress) as bar:
        for channel_id in bar:
            outcome = subscribe_to_channel(directory, channel_id)
            result.record(outcome)
            if outcome.critical:
                result.halted = True
                break

    logger.info(
        "Import finished: %d subscribed, %d already subscribed, %d failed%s",
        result.succeeded,
        result.duplicates,
        result.failed,
        " (stopped early: quota exceeded)" if result.halted else "",
    )
    return result

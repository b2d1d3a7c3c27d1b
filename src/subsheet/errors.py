"""Error taxonomy and classification of remote API failures."""

import enum
import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar

from googleapiclient.errors import HttpError

from .logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ErrorKind(enum.Enum):
    """Kinds of failure surfaced by the client wrappers."""

    EMPTY_RESULT = "empty_result"
    NOT_FOUND = "not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    DUPLICATE = "duplicate"
    AUTHORIZATION = "authorization"
    REMOTE = "remote"


class SubsheetError(Exception):
    """Base class for subsheet errors."""

    kind = ErrorKind.REMOTE


class EmptyResultError(SubsheetError):
    """Error raised when there is no source data to transfer."""

    kind = ErrorKind.EMPTY_RESULT


class EmptySheetError(EmptyResultError):
    """Error raised when a sheet has no rows below the header."""

    pass


class NoValidIdentifiersError(EmptyResultError):
    """Error raised when a sheet holds no usable channel IDs."""

    pass


class NotFoundError(SubsheetError):
    """Error raised when a channel or document is missing or not accessible."""

    kind = ErrorKind.NOT_FOUND


class QuotaExceededError(SubsheetError):
    """Error raised when the remote API quota or rate limit is exhausted."""

    kind = ErrorKind.QUOTA_EXCEEDED


class DuplicateSubscriptionError(SubsheetError):
    """Error raised when the caller is already subscribed to a channel."""

    kind = ErrorKind.DUPLICATE


class AuthorizationError(SubsheetError):
    """Error raised when credentials are missing, invalid or insufficient."""

    kind = ErrorKind.AUTHORIZATION


class RemoteError(SubsheetError):
    """Error raised for uncategorized remote failures."""

    pass


_ERROR_CLASSES = {
    ErrorKind.EMPTY_RESULT: EmptyResultError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.QUOTA_EXCEEDED: QuotaExceededError,
    ErrorKind.DUPLICATE: DuplicateSubscriptionError,
    ErrorKind.AUTHORIZATION: AuthorizationError,
    ErrorKind.REMOTE: RemoteError,
}

# Remote reason codes, checked in this order
_REASONS = (
    (ErrorKind.DUPLICATE, {"subscriptionDuplicate"}),
    (
        ErrorKind.QUOTA_EXCEEDED,
        {
            "quotaExceeded",
            "rateLimitExceeded",
            "userRateLimitExceeded",
            "dailyLimitExceeded",
            "RATE_LIMIT_EXCEEDED",
            "RESOURCE_EXHAUSTED",
        },
    ),
    (
        ErrorKind.AUTHORIZATION,
        {"authError", "unauthorized", "invalidCredentials", "insufficientPermissions"},
    ),
    (
        ErrorKind.NOT_FOUND,
        {"notFound", "channelNotFound", "subscriptionForbidden", "forbidden"},
    ),
)

# Lower-case fragments for exceptions that carry no structured reason
_TEXT_PATTERNS = (
    (ErrorKind.DUPLICATE, ("subscriptionduplicate", "already subscribed")),
    (ErrorKind.QUOTA_EXCEEDED, ("quotaexceeded", "quota exceeded", "ratelimitexceeded")),
    (ErrorKind.AUTHORIZATION, ("autherror", "unauthorized", "invalid_grant", "invalidcredentials")),
    (ErrorKind.NOT_FOUND, ("notfound", "not found", "forbidden")),
)

_MESSAGES = {
    ErrorKind.DUPLICATE: "Already subscribed to this channel",
    ErrorKind.QUOTA_EXCEEDED: "YouTube API quota exceeded. Please try again tomorrow.",
    ErrorKind.NOT_FOUND: "Channel or document not found, or access is forbidden",
    ErrorKind.AUTHORIZATION: "Not authorized. Please sign in again.",
}


def _reasons_of(items: Any) -> List[str]:
    if not isinstance(items, list):
        return []
    return [item["reason"] for item in items if isinstance(item, dict) and item.get("reason")]


def _http_reasons(error: HttpError) -> List[str]:
    """Collect the reason codes attached to an HttpError.

    error_details holds either error.details or error.errors from the body,
    so both lists are read from the content as well.
    """
    reasons = _reasons_of(getattr(error, "error_details", None))

    if getattr(error, "content", None):
        try:
            payload = json.loads(error.content.decode("utf-8"))
        except (ValueError, UnicodeDecodeError, AttributeError):
            return reasons
        body = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(body, dict):
            reasons += _reasons_of(body.get("errors"))
            reasons += _reasons_of(body.get("details"))
    return reasons


def _kind_from_reasons(reasons: Iterable[str]) -> Optional[ErrorKind]:
    reasons = set(reasons)
    for kind, known in _REASONS:
        if reasons & known:
            return kind
    return None


def classify_error(error: Exception) -> ErrorKind:
    """Map an exception to an ErrorKind.

    HttpError instances are classified from their reason codes and HTTP
    status. Other exceptions fall back to matching known reason tokens in
    their text.

    Args:
        error: The exception to classify

    Returns:
        The matching ErrorKind, REMOTE when nothing matches
    """
    if isinstance(error, SubsheetError):
        return error.kind

    if isinstance(error, HttpError):
        kind = _kind_from_reasons(_http_reasons(error))
        if kind:
            return kind
        status = getattr(error.resp, "status", None)
        if status == 401:
            return ErrorKind.AUTHORIZATION
        if status in (403, 404):
            return ErrorKind.NOT_FOUND
        if status == 429:
            return ErrorKind.QUOTA_EXCEEDED

    text = str(error).lower()
    for kind, patterns in _TEXT_PATTERNS:
        if any(pattern in text for pattern in patterns):
            return kind
    return ErrorKind.REMOTE


def error_message(error: Exception) -> str:
    """Get a human readable message for an exception.

    Unclassified errors pass their raw message through.
    """
    if isinstance(error, SubsheetError):
        return str(error)
    kind = classify_error(error)
    if kind in _MESSAGES:
        return _MESSAGES[kind]
    if isinstance(error, HttpError) and getattr(error, "reason", None):
        return str(error.reason)
    return str(error)


def translate_error(error: Exception) -> SubsheetError:
    """Convert any exception into the matching SubsheetError subclass.

    Args:
        error: The exception to convert

    Returns:
        A SubsheetError, the original one if it already is
    """
    if isinstance(error, SubsheetError):
        return error
    translated = _ERROR_CLASSES[classify_error(error)](error_message(error))
    translated.__cause__ = error
    return translated


def log_error(error: Exception, context: Optional[str] = None) -> None:
    """Log an error with optional context.

    Args:
        error: The exception to log
        context: Optional context about where/why the error occurred
    """
    if context:
        logger.error("%s: %s", context, str(error))
    else:
        logger.error(str(error))


@dataclass(frozen=True)
class Diagnostic:
    """Record of a failed best-effort step."""

    operation: str
    message: str
    kind: ErrorKind

    def to_dict(self) -> dict:
        return {"operation": self.operation, "message": self.message, "kind": self.kind.value}


def best_effort(
    operation: str, func: Callable[..., T], *args: Any, **kwargs: Any
) -> Tuple[Optional[T], Optional[Diagnostic]]:
    """Run a side step whose failure must not fail the caller.

    Args:
        operation: Name of the step, used in the log line and diagnostic
        func: Callable to run
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Tuple of (result, None) on success or (None, Diagnostic) on failure
    """
    try:
        return func(*args, **kwargs), None
    except Exception as e:  # pylint: disable=broad-except
        diagnostic = Diagnostic(operation, error_message(e), classify_error(e))
        logger.warning("%s failed: %s", operation, diagnostic.message)
        return None, diagnostic

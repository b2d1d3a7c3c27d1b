"""Data types passed between the transfer components."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from . import config
from .errors import Diagnostic, ErrorKind


@dataclass(frozen=True)
class Subscription:
    """Snapshot of one subscription from the directory API."""

    channel_id: str
    title: str

    @property
    def url(self) -> str:
        return config.CHANNEL_URL_TEMPLATE.format(channel_id=self.channel_id)

    def to_row(self) -> List[str]:
        """Get the sheet row for this subscription."""
        return [self.channel_id, self.title, self.url]


@dataclass(frozen=True)
class SheetRef:
    """A spreadsheet created or copied by this package."""

    id: str
    url: str


@dataclass(frozen=True)
class SheetHandle:
    """An opened spreadsheet and its first worksheet."""

    spreadsheet_id: str
    sheet_id: int
    title: str
    sheet_title: str

    @property
    def url(self) -> str:
        return config.SPREADSHEET_URL_TEMPLATE.format(spreadsheet_id=self.spreadsheet_id)


@dataclass(frozen=True)
class ChannelProfile:
    """Public details of the caller's own channel."""

    id: str
    title: str
    subscriber_count: Optional[int] = None
    thumbnail_url: Optional[str] = None


@dataclass(frozen=True)
class UserIdentity:
    """Caller identity: account email and, when available, channel profile."""

    email: str
    channel: Optional[ChannelProfile] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"email": self.email, "channel": None}
        if self.channel:
            result["channel"] = {
                "id": self.channel.id,
                "title": self.channel.title,
                "subscriber_count": self.channel.subscriber_count,
                "thumbnail_url": self.channel.thumbnail_url,
            }
        return result


@dataclass
class ExportResult:
    """Outcome of an export or copy-and-append run."""

    sheet: SheetRef
    count: int
    duplicates: int = 0
    new_count: Optional[int] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "success": True,
            "sheet_url": self.sheet.url,
            "sheet_id": self.sheet.id,
            "count": self.count,
            "duplicates": self.duplicates,
        }
        if self.new_count is not None:
            result["new_count"] = self.new_count
        if self.diagnostics:
            result["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        return result


@dataclass(frozen=True)
class SubscribeOutcome:
    """Result of a single subscribe call."""

    channel_id: str
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @property
    def skippable(self) -> bool:
        return self.kind in (ErrorKind.DUPLICATE, ErrorKind.NOT_FOUND)

    @property
    def critical(self) -> bool:
        return self.kind == ErrorKind.QUOTA_EXCEEDED

    @property
    def duplicate(self) -> bool:
        return self.kind == ErrorKind.DUPLICATE

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "channel_id": self.channel_id, "message": self.message}
        result: Dict[str, Any] = {
            "success": False,
            "channel_id": self.channel_id,
            "error": self.error,
        }
        if self.skippable:
            result["skippable"] = True
        if self.critical:
            result["critical"] = True
        return result


@dataclass
class TransferResult:
    """Counts accumulated over one import pass."""

    succeeded: int = 0
    duplicates: int = 0
    failures: List[Tuple[str, ErrorKind]] = field(default_factory=list)
    halted: bool = False

    def record(self, outcome: SubscribeOutcome) -> None:
        """Add one subscribe outcome to the totals."""
        if outcome.success:
            self.succeeded += 1
        elif outcome.duplicate:
            self.duplicates += 1
        else:
            self.failures.append((outcome.channel_id, outcome.kind or ErrorKind.REMOTE))

    @property
    def failed(self) -> int:
        return len(self.failures)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": not self.halted,
            "succeeded": self.succeeded,
            "duplicates": self.duplicates,
            "failed": self.failed,
            "halted": self.halted,
            "failures": [
                {"channel_id": channel_id, "kind": kind.value} for channel_id, kind in self.failures
            ],
        }

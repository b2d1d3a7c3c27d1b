"""Web API for subscription export and import."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from . import auth
from .service import SubsheetService, share_message

logger = logging.getLogger(__name__)

app = FastAPI(title="subsheet")


class SheetRequest(BaseModel):
    """Request model for operations on an existing spreadsheet."""

    spreadsheet_id: str


class SubscribeRequest(BaseModel):
    """Request model for subscribing to one channel."""

    channel_id: str


class ShareMessageRequest(BaseModel):
    """Request model for building a share message."""

    sheet_url: str
    count: int


class ExportResponse(BaseModel):
    """Response model for export and copy endpoints."""

    success: bool
    sheet_url: Optional[str] = None
    sheet_id: Optional[str] = None
    count: int = 0
    new_count: Optional[int] = None
    duplicates: int = 0
    error: Optional[str] = None
    diagnostics: List[Dict[str, str]] = []


class ShareMessageResponse(BaseModel):
    """Response model for the share message endpoint."""

    message: str


def get_service() -> SubsheetService:
    """Get a service bound to the authenticated user.

    Returns:
        SubsheetService: Service with fresh API clients

    Raises:
        HTTPException: If authentication fails
    """
    try:
        return SubsheetService(auth.build_session())
    except Exception as e:
        logger.error("Failed to authenticate: %s", str(e))
        raise HTTPException(status_code=500, detail="Failed to authenticate")


@app.get("/user")
def current_user() -> Dict[str, Any]:
    """Get the signed-in user's email and channel profile."""
    return get_service().get_current_user()


@app.get("/subscriptions/count")
def subscription_count() -> Dict[str, Any]:
    """Get the number of channels the user subscribes to."""
    return get_service().get_subscription_count()


@app.post("/export", response_model=ExportResponse)
def export_endpoint() -> Dict[str, Any]:
    """Export the user's subscriptions to a new spreadsheet."""
    return get_service().export_subscriptions_to_sheet()


@app.post("/copy", response_model=ExportResponse)
def copy_endpoint(request: SheetRequest) -> Dict[str, Any]:
    """Copy a spreadsheet and append the user's subscriptions not already in it."""
    return get_service().copy_and_append_to_sheet(request.spreadsheet_id)


@app.post("/fetch")
def fetch_endpoint(request: SheetRequest) -> Dict[str, Any]:
    """Read the channel IDs listed in a spreadsheet."""
    return get_service().fetch_from_sheet(request.spreadsheet_id)


@app.post("/subscribe")
def subscribe_endpoint(request: SubscribeRequest) -> Dict[str, Any]:
    """Subscribe the user to one channel."""
    return get_service().subscribe_to_channel(request.channel_id)


@app.post("/import")
def import_endpoint(request: SheetRequest) -> Dict[str, Any]:
    """Subscribe the user to every channel listed in a spreadsheet."""
    return get_service().import_from_sheet(request.spreadsheet_id)


@app.post("/validate")
def validate_endpoint(request: SheetRequest) -> Dict[str, Any]:
    """Check that a spreadsheet exists and is readable."""
    return get_service().validate_spreadsheet(request.spreadsheet_id)


@app.post("/share-message", response_model=ShareMessageResponse)
def share_message_endpoint(request: ShareMessageRequest) -> ShareMessageResponse:
    """Build the text to send along with a shared spreadsheet."""
    return ShareMessageResponse(message=share_message(request.sheet_url, request.count))

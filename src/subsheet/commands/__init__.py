"""Command module initialization."""

from .base import SubsheetCommand
from .account import CountCommand, WhoAmICommand  # noqa: F401
from .export import CopyCommand, ExportCommand  # noqa: F401
from .subscribe import FetchCommand, ImportCommand  # noqa: F401

__all__ = [
    "SubsheetCommand",
    "CountCommand",
    "WhoAmICommand",
    "CopyCommand",
    "ExportCommand",
    "FetchCommand",
    "ImportCommand",
]

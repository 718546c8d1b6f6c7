"""Typed exception hierarchy for file mapper errors.

This module defines all custom exceptions raised while discovering the
markdown files to import. All exceptions inherit from FileMapperError.
"""

from src.notion_api.errors import SyncError


class FileMapperError(SyncError):
    """Base exception for all file mapper errors."""
    pass


class ScanError(FileMapperError):
    """Raised when an input path cannot be scanned."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path

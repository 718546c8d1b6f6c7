"""Typed exception hierarchy for Notion-related errors.

This module defines all custom exceptions used by the Notion client layer.
All exceptions inherit from NotionError (itself a SyncError) for easy
catching and include descriptive messages with context to help with
debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all md-to-notion errors.

    Use this to catch any application-level error from the import tool.
    """
    pass


class NotionError(SyncError):
    """Base exception for all Notion-related errors."""
    pass


class MissingCredentialsError(NotionError):
    """Raised when the integration token is not configured."""

    def __init__(self, variable: str = "NOTION_API_KEY"):
        super().__init__(f"Missing {variable} environment variable.")
        self.variable = variable


class InvalidCredentialsError(NotionError):
    """Raised when Notion rejects the integration token."""

    def __init__(self):
        super().__init__("Notion API token is invalid or lacks access")


class PageNotFoundError(NotionError):
    """Raised when a page or block does not exist or is not shared with the integration."""

    def __init__(self, object_id: str):
        super().__init__(f"Notion object {object_id} not found")
        self.object_id = object_id


class APIUnreachableError(NotionError):
    """Raised when the Notion API cannot be reached."""

    def __init__(self, reason: Optional[str] = None):
        message = "Notion API is not reachable"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.reason = reason


class APIAccessError(NotionError):
    """Raised when an API call fails after retries or is rejected by Notion."""

    def __init__(self, message: str = "Notion API failure (after 3 retries)"):
        super().__init__(message)


class UploadError(NotionError):
    """Raised when a file upload cannot be completed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"Upload failed for {file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason

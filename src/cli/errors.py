"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError and include descriptive messages.
"""

from src.notion_api.errors import SyncError

USAGE = "Usage: md-to-notion <path...> <destination_page_id> [--force] [--dry-run] [--verbose]"


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class UsageError(CLIError):
    """Raised when the command line is missing required arguments."""

    def __init__(self, message: str = USAGE):
        super().__init__(message)

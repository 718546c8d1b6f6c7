"""Typed exception hierarchy for sync engine errors.

This module defines all custom exceptions raised while importing documents.
All exceptions inherit from SyncEngineError and include descriptive
messages with context to help with debugging.
"""

from typing import Optional

from src.notion_api.errors import SyncError


class SyncEngineError(SyncError):
    """Base exception for all sync engine errors."""
    pass


class DestinationMismatchError(SyncEngineError):
    """Raised when the state file is bound to a different destination page."""

    def __init__(self, expected: str, requested: str):
        super().__init__(
            f"Destination page ID mismatch: expected {expected}, got {requested}"
        )
        self.expected = expected
        self.requested = requested


class MissingParentError(SyncEngineError):
    """Raised when a directory or document has no known parent page."""

    def __init__(self, message: str, relative_path: str):
        super().__init__(message)
        self.relative_path = relative_path


class DocumentProcessingError(SyncEngineError):
    """Raised when building or uploading a single document fails."""

    def __init__(self, relative_path: str, original: Exception):
        super().__init__(f"Error processing {relative_path}: {original}")
        self.relative_path = relative_path
        self.original = original


class StateError(SyncEngineError):
    """Raised when the state file is malformed."""

    def __init__(self, message: str, state_field: Optional[str] = None):
        if state_field:
            full_message = f"State error in field '{state_field}': {message}"
        else:
            full_message = f"State error: {message}"
        super().__init__(full_message)
        self.state_field = state_field
        self.original_message = message


class StateFilesystemError(SyncEngineError):
    """Raised when state file filesystem operations fail."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"State file operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason

"""Notion client layer for the markdown importer.

This package wraps the notion-client SDK: authentication, error
translation, rate-limit retry, file uploads and conversion of parsed
markdown blocks into Notion block objects.
"""

from .errors import (
    SyncError,
    NotionError,
    MissingCredentialsError,
    InvalidCredentialsError,
    PageNotFoundError,
    APIUnreachableError,
    APIAccessError,
    UploadError,
)

__all__ = [
    "SyncError",
    "NotionError",
    "MissingCredentialsError",
    "InvalidCredentialsError",
    "PageNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "UploadError",
]

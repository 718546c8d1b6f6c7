"""Synchronization engine for the markdown importer.

This package maps scanned markdown trees onto Notion pages, persisting the
path-to-page mapping in a JSON state file so re-runs only touch changed
documents.
"""

from .errors import (
    SyncEngineError,
    DestinationMismatchError,
    MissingParentError,
    DocumentProcessingError,
    StateError,
    StateFilesystemError,
)
from .link_resolver import LinkResolver
from .models import DirectoryEntry, FileEntry, ImportOptions, ImportSummary, SyncState
from .state_manager import StateManager
from .sync_engine import SyncEngine

__all__ = [
    'SyncEngineError',
    'DestinationMismatchError',
    'MissingParentError',
    'DocumentProcessingError',
    'StateError',
    'StateFilesystemError',
    'LinkResolver',
    'DirectoryEntry',
    'FileEntry',
    'ImportOptions',
    'ImportSummary',
    'SyncState',
    'StateManager',
    'SyncEngine',
]

"""Data models for the sync engine.

The sync state records which Notion page each imported document and
directory maps to, plus a content hash used to skip unchanged documents on
re-runs.
"""

from dataclasses import dataclass, field
from typing import Dict

ROOT_KEY = '.'
DRY_RUN_PAGE_ID = 'dry-run'


@dataclass
class FileEntry:
    """Sync record for one imported document.

    Attributes:
        notion_page_id: Page holding the document content
        content_hash: SHA-256 hex digest of the document bytes at last sync
        last_synced: ISO 8601 UTC timestamp of the last successful sync
    """
    notion_page_id: str
    content_hash: str
    last_synced: str


@dataclass
class DirectoryEntry:
    notion_page_id: str


@dataclass
class SyncState:
    """Persistent mapping of local paths to Notion pages for one destination.

    Attributes:
        destination_page_id: Page the import tree hangs under
        files: Relative forward-slash document path -> FileEntry
        directories: Relative directory path -> DirectoryEntry ("." is the root)

    Example:
        >>> state = SyncState(destination_page_id="abc123")
        >>> state.directories[ROOT_KEY] = DirectoryEntry("abc123")
    """
    destination_page_id: str
    files: Dict[str, FileEntry] = field(default_factory=dict)
    directories: Dict[str, DirectoryEntry] = field(default_factory=dict)


@dataclass
class ImportOptions:
    """Run options for an import.

    Attributes:
        force: Re-import documents even when their hash is unchanged
        dry_run: Report planned actions without any remote call or state write
        verbose: Print per-document progress
    """
    force: bool = False
    dry_run: bool = False
    verbose: bool = False


@dataclass
class ImportSummary:
    """Counts reported at the end of an import."""
    created: int = 0
    updated: int = 0
    skipped: int = 0
    directories_created: int = 0

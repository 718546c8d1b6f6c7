"""Two-pass import of a scanned markdown tree into Notion.

The engine first materializes a page for every directory (parents before
children), then imports each document under its directory's page. Every
successfully processed unit is written to the sync state immediately, so an
interrupted run resumes where it stopped and unchanged documents are
skipped on re-runs.
"""

import hashlib
import logging
import os
import posixpath
from datetime import datetime, UTC
from typing import Any, Dict, List, Optional

from src.file_mapper.models import ScanResult
from src.file_mapper.scanner import to_relative_path
from src.markdown_parser import parse_markdown
from src.notion_api.api_wrapper import APIWrapper
from src.notion_api.block_builder import NotionBlockBuilder
from src.notion_api.upload import FileUploader

from .errors import DocumentProcessingError, MissingParentError
from .link_resolver import LinkResolver
from .models import (
    DRY_RUN_PAGE_ID,
    ROOT_KEY,
    DirectoryEntry,
    FileEntry,
    ImportOptions,
    ImportSummary,
    SyncState,
)
from .state_manager import StateManager

logger = logging.getLogger(__name__)


def compute_hash(data: bytes) -> str:
    """Return the SHA-256 hex digest of data."""
    return hashlib.sha256(data).hexdigest()


def _parent_key(relative_dir: str) -> str:
    parent = posixpath.dirname(relative_dir)
    return parent if parent else ROOT_KEY


class SyncEngine:
    """Imports markdown documents into a destination Notion page.

    Attributes:
        api: APIWrapper for all remote calls
        output: Optional OutputHandler for verbose progress lines
        state_path: State file path (defaults to ./.notion-sync.json)

    Example:
        >>> engine = SyncEngine(APIWrapper(Authenticator()))
        >>> engine.import_markdown(scan_input("./notes"), "abc123", ImportOptions())
    """

    def __init__(self, api: APIWrapper, output=None, state_path: Optional[str] = None):
        self.api = api
        self.output = output
        self.state_path = state_path

    def import_markdown(
        self,
        scan: ScanResult,
        destination_page_id: str,
        options: ImportOptions,
    ) -> ImportSummary:
        """Import every document of a scan under the destination page.

        Args:
            scan: Result of scan_input or scan_multiple_inputs
            destination_page_id: Notion page the import hangs under
            options: Force, dry-run and verbose flags

        Returns:
            ImportSummary with created/updated/skipped counts

        Raises:
            DestinationMismatchError: If the state belongs to another destination
            MissingParentError: If a directory or document has no parent page
            DocumentProcessingError: If a document fails to build or upload
            StateError / StateFilesystemError: If the state file is unusable
            NotionError: If a directory page cannot be created
        """
        summary = ImportSummary()

        if scan.is_directory and not scan.md_files:
            self._report("No markdown files found. Nothing to import.", options)
            return summary

        state = StateManager.load(destination_page_id, self.state_path)

        root_page_id = destination_page_id
        if scan.is_directory:
            root_page_id = self._ensure_directory_pages(state, scan, destination_page_id, options, summary)

        for file_path in scan.md_files:
            self._import_file(state, scan, file_path, root_page_id, options, summary)

        logger.info(
            f"Import finished: {summary.created} created, {summary.updated} updated, "
            f"{summary.skipped} skipped"
        )
        return summary

    def _ensure_directory_pages(
        self,
        state: SyncState,
        scan: ScanResult,
        destination_page_id: str,
        options: ImportOptions,
        summary: ImportSummary,
    ) -> str:
        """Create a page for the root (if wrapped) and every subdirectory.

        Returns:
            Page ID the root directory maps to
        """
        if not scan.create_root_page:
            if ROOT_KEY not in state.directories:
                state.directories[ROOT_KEY] = DirectoryEntry(destination_page_id)
                self._save(state, options)
        elif ROOT_KEY not in state.directories:
            if options.dry_run:
                self._report(f"[dry-run] create root dir page: {scan.root_name}", options)
                state.directories[ROOT_KEY] = DirectoryEntry(DRY_RUN_PAGE_ID)
            else:
                page_id = self.api.create_page(destination_page_id, scan.root_name, [])
                state.directories[ROOT_KEY] = DirectoryEntry(page_id)
                summary.directories_created += 1
                self._save(state, options)

        relative_dirs = [to_relative_path(scan.root_dir, directory) for directory in scan.directories]
        relative_dirs = sorted(
            (rel for rel in relative_dirs if rel and rel != ROOT_KEY),
            key=len,
        )

        for relative_dir in relative_dirs:
            if relative_dir in state.directories:
                continue

            parent_entry = state.directories.get(_parent_key(relative_dir))
            if parent_entry is None:
                raise MissingParentError(
                    f"Missing parent directory mapping for {relative_dir}",
                    relative_dir,
                )

            if options.dry_run:
                self._report(f"[dry-run] create dir page: {relative_dir}", options)
                state.directories[relative_dir] = DirectoryEntry(DRY_RUN_PAGE_ID)
                continue

            title = posixpath.basename(relative_dir)
            page_id = self.api.create_page(parent_entry.notion_page_id, title, [])
            state.directories[relative_dir] = DirectoryEntry(page_id)
            summary.directories_created += 1
            self._save(state, options)

        return state.directories[ROOT_KEY].notion_page_id

    def _import_file(
        self,
        state: SyncState,
        scan: ScanResult,
        file_path: str,
        root_page_id: str,
        options: ImportOptions,
        summary: ImportSummary,
    ) -> None:
        if scan.is_directory:
            relative_path = to_relative_path(scan.root_dir, file_path)
        else:
            relative_path = os.path.basename(file_path)

        with open(file_path, 'rb') as f:
            data = f.read()
        file_hash = compute_hash(data)

        existing = state.files.get(relative_path)
        should_update = options.force or existing is None or existing.content_hash != file_hash
        if not should_update:
            self._report(f"skip: {relative_path}", options)
            summary.skipped += 1
            return

        if options.dry_run:
            action = "update" if existing else "create"
            self._report(f"[dry-run] {action}: {relative_path}", options)
            return

        relative_dir = posixpath.dirname(relative_path) or ROOT_KEY
        if scan.is_directory:
            parent_entry = state.directories.get(relative_dir)
            parent_page_id = parent_entry.notion_page_id if parent_entry else None
        else:
            parent_page_id = root_page_id
        if not parent_page_id:
            raise MissingParentError(f"Missing parent page for {relative_path}", relative_path)

        title = os.path.splitext(os.path.basename(file_path))[0]
        try:
            blocks = self._build_blocks(state, file_path, data, relative_dir, options)
            if existing:
                page_id = existing.notion_page_id
                self.api.replace_page_blocks(page_id, blocks)
                self._report(f"updated: {relative_path}", options)
                summary.updated += 1
            else:
                page_id = self.api.create_page(parent_page_id, title, blocks)
                self._report(f"created: {relative_path}", options)
                summary.created += 1
        except Exception as e:
            logger.debug(f"Failed to import {relative_path}", exc_info=True)
            raise DocumentProcessingError(relative_path, e) from e

        state.files[relative_path] = FileEntry(
            notion_page_id=page_id,
            content_hash=file_hash,
            last_synced=datetime.now(UTC).isoformat(),
        )
        self._save(state, options)

    def _build_blocks(
        self,
        state: SyncState,
        file_path: str,
        data: bytes,
        relative_dir: str,
        options: ImportOptions,
    ) -> List[Dict[str, Any]]:
        content = data.decode('utf-8-sig')
        resolver = LinkResolver(state)
        builder = NotionBlockBuilder(
            uploader=FileUploader(self.api, verbose=options.verbose),
            resolve_link=lambda target: resolver.resolve(target, relative_dir),
        )
        return builder.build(parse_markdown(content, file_path))

    def _save(self, state: SyncState, options: ImportOptions) -> None:
        if options.dry_run:
            return
        StateManager.save(state, self.state_path)

    def _report(self, message: str, options: ImportOptions) -> None:
        logger.debug(message)
        if options.verbose and self.output is not None:
            self.output.print(message)

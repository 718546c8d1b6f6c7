"""Resolution of wiki-link targets to Notion page IDs.

Links are resolved against the documents already recorded in the sync
state, so a link only becomes a page mention once its target has been
imported (earlier in the same run or in a previous run).
"""

import posixpath
from typing import Optional
from urllib.parse import unquote

from .models import DRY_RUN_PAGE_ID, SyncState

MARKDOWN_EXTENSION = '.md'


def normalize_target(target: str) -> str:
    """Decode a link target and drop its fragment and query.

    Example:
        >>> normalize_target("My%20Note.md#Section")
        'My Note.md'
    """
    target = unquote(target.strip())
    for separator in ('#', '?'):
        target = target.split(separator, 1)[0]
    target = target.strip()
    if target and not target.lower().endswith(MARKDOWN_EXTENSION):
        target += MARKDOWN_EXTENSION
    return target


class LinkResolver:
    """Maps wiki-link targets to page IDs using the current sync state.

    Candidates are tried in order: relative to the linking document's
    directory, relative to the import root, then by file name anywhere in
    the import (first match in sorted path order).

    Example:
        >>> resolver = LinkResolver(state)
        >>> resolver.resolve("Other Note", source_dir="A")
        'page-id-of-A/Other Note.md'
    """

    def __init__(self, state: SyncState):
        self.state = state

    def resolve(self, target: str, source_dir: str = "") -> Optional[str]:
        path = normalize_target(target)
        if not path:
            return None

        candidates = []
        if source_dir and source_dir != '.':
            candidates.append(posixpath.normpath(posixpath.join(source_dir, path)))
        candidates.append(posixpath.normpath(path.lstrip('/')))

        for candidate in candidates:
            page_id = self._page_id(candidate)
            if page_id:
                return page_id

        basename = posixpath.basename(path)
        for relative_path in sorted(self.state.files):
            if posixpath.basename(relative_path) == basename:
                page_id = self._page_id(relative_path)
                if page_id:
                    return page_id
        return None

    def _page_id(self, relative_path: str) -> Optional[str]:
        entry = self.state.files.get(relative_path)
        if entry is None or entry.notion_page_id == DRY_RUN_PAGE_ID:
            return None
        return entry.notion_page_id

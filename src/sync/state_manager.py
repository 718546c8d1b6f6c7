"""Sync state file loading and saving.

The state lives in `.notion-sync.json` in the working directory. It is bound
to a single destination page; loading it for a different destination is an
error. Keys are camelCase on disk.
"""

import json
import os
import tempfile
from typing import Any, Dict, Optional

from .errors import DestinationMismatchError, StateError, StateFilesystemError
from .models import DirectoryEntry, FileEntry, SyncState


class StateManager:
    """Handles state file loading, validation, and saving.

    State file structure:
        {
          "destinationPageId": "abc123",
          "files": {"A/note.md": {"notionPageId": "...", "contentHash": "...",
                                  "lastSynced": "2024-01-15T10:30:00+00:00"}},
          "directories": {".": {"notionPageId": "..."}}
        }

    A missing or empty file is treated as a fresh state.
    """

    DEFAULT_STATE_FILE = '.notion-sync.json'

    @classmethod
    def default_path(cls) -> str:
        return os.path.join(os.getcwd(), cls.DEFAULT_STATE_FILE)

    @classmethod
    def load(cls, destination_page_id: str, state_path: Optional[str] = None) -> SyncState:
        """Load the state for a destination page.

        Args:
            destination_page_id: Destination the caller is importing into
            state_path: State file path (defaults to ./.notion-sync.json)

        Returns:
            Persisted SyncState, or an empty one bound to destination_page_id

        Raises:
            DestinationMismatchError: If the file belongs to another destination
            StateFilesystemError: If the file cannot be read
            StateError: If the file is not valid state JSON
        """
        state_path = state_path or cls.default_path()

        try:
            with open(state_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            return SyncState(destination_page_id=destination_page_id)
        except PermissionError:
            raise StateFilesystemError(state_path, 'read', 'Permission denied')
        except OSError as e:
            raise StateFilesystemError(state_path, 'read', str(e))

        if not content.strip():
            return SyncState(destination_page_id=destination_page_id)

        try:
            state_dict = json.loads(content)
        except json.JSONDecodeError as e:
            raise StateError(f"Invalid JSON syntax: {e}")

        if not isinstance(state_dict, dict):
            raise StateError(
                f"State must be a JSON object, got {type(state_dict).__name__}"
            )

        state = cls._parse_state(state_dict)
        if state.destination_page_id != destination_page_id:
            raise DestinationMismatchError(state.destination_page_id, destination_page_id)
        return state

    @classmethod
    def save(cls, state: SyncState, state_path: Optional[str] = None) -> None:
        """Write the state file, replacing any previous content.

        The file is written to a temporary sibling and moved into place so an
        interrupted write never leaves a truncated state file.

        Raises:
            StateFilesystemError: If file cannot be written
        """
        state_path = state_path or cls.default_path()
        payload = json.dumps(cls._to_dict(state), indent=2, ensure_ascii=False)

        state_dir = os.path.dirname(os.path.abspath(state_path))
        try:
            fd, tmp_path = tempfile.mkstemp(dir=state_dir, prefix='.notion-sync.', suffix='.tmp')
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
            os.replace(tmp_path, state_path)
        except PermissionError:
            raise StateFilesystemError(state_path, 'write', 'Permission denied')
        except OSError as e:
            raise StateFilesystemError(state_path, 'write', str(e))

    @classmethod
    def _to_dict(cls, state: SyncState) -> Dict[str, Any]:
        return {
            'destinationPageId': state.destination_page_id,
            'files': {
                path: {
                    'notionPageId': entry.notion_page_id,
                    'contentHash': entry.content_hash,
                    'lastSynced': entry.last_synced,
                }
                for path, entry in state.files.items()
            },
            'directories': {
                path: {'notionPageId': entry.notion_page_id}
                for path, entry in state.directories.items()
            },
        }

    @classmethod
    def _parse_state(cls, state_dict: Dict[str, Any]) -> SyncState:
        """Parse and validate a raw state dictionary.

        Raises:
            StateError: If a required field is missing or has the wrong type
        """
        destination = state_dict.get('destinationPageId')
        if not isinstance(destination, str) or not destination:
            raise StateError("Field 'destinationPageId' must be a non-empty string", 'destinationPageId')

        files = cls._require_mapping(state_dict, 'files')
        directories = cls._require_mapping(state_dict, 'directories')

        state = SyncState(destination_page_id=destination)
        for path, entry in files.items():
            if not isinstance(entry, dict) or not isinstance(entry.get('notionPageId'), str):
                raise StateError(f"Invalid entry for file '{path}'", 'files')
            state.files[path] = FileEntry(
                notion_page_id=entry['notionPageId'],
                content_hash=str(entry.get('contentHash', '')),
                last_synced=str(entry.get('lastSynced', '')),
            )
        for path, entry in directories.items():
            if not isinstance(entry, dict) or not isinstance(entry.get('notionPageId'), str):
                raise StateError(f"Invalid entry for directory '{path}'", 'directories')
            state.directories[path] = DirectoryEntry(notion_page_id=entry['notionPageId'])
        return state

    @staticmethod
    def _require_mapping(state_dict: Dict[str, Any], field_name: str) -> Dict[str, Any]:
        value = state_dict.get(field_name, {})
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise StateError(
                f"Field '{field_name}' must be an object, got {type(value).__name__}",
                field_name
            )
        return value

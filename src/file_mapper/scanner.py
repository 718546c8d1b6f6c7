"""Discovery of markdown files to import.

Supports three input shapes: a single markdown file, a single directory
(mirrored under a wrapper page), and several sibling paths (placed directly
under the destination page, relative to their common parent directory).
"""

import logging
import os
from pathlib import PurePath
from typing import Iterable, List, Set

from .errors import ScanError
from .models import ScanResult

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSION = '.md'
IGNORED_EXTENSIONS = ('.canvas',)
STATE_FILE_NAME = '.notion-sync.json'


def collect_markdown_files(directory: str, files: List[str]) -> None:
    """Recursively append markdown files under directory to files.

    Entries are visited in sorted name order so imports are deterministic.
    """
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda entry: entry.name)

    for entry in entries:
        if entry.is_dir():
            collect_markdown_files(entry.path, files)
            continue
        if not entry.is_file():
            continue
        if entry.name.endswith(IGNORED_EXTENSIONS):
            continue
        if entry.name.endswith(MARKDOWN_EXTENSION):
            files.append(entry.path)


def derive_directories(root_dir: str, md_files: Iterable[str]) -> List[str]:
    """Return every directory between root_dir and each file, inclusive of root_dir.

    Args:
        root_dir: Absolute root directory
        md_files: Absolute markdown file paths under root_dir

    Returns:
        Directory paths sorted shortest first, so parents precede children
    """
    directories: Set[str] = set()
    for file_path in md_files:
        current = os.path.dirname(file_path)
        while _is_within(current, root_dir):
            directories.add(current)
            if current == root_dir:
                break
            parent = os.path.dirname(current)
            if parent == current:
                break
            current = parent
    return sorted(directories, key=lambda d: (len(d), d))


def _is_within(path: str, directory: str) -> bool:
    return path == directory or path.startswith(directory.rstrip(os.sep) + os.sep)


def scan_input(input_path: str) -> ScanResult:
    """Scan a single file or directory.

    Args:
        input_path: Path to a .md file or a directory

    Returns:
        ScanResult for the input

    Raises:
        ScanError: If the path is a non-markdown file, or neither a file
            nor a directory
    """
    resolved = os.path.abspath(input_path)

    if os.path.isfile(resolved):
        if not resolved.endswith(MARKDOWN_EXTENSION):
            raise ScanError(f"Input file must be .md: {resolved}", resolved)
        return ScanResult(
            input_path=resolved,
            is_directory=False,
            root_dir=os.path.dirname(resolved),
            root_name=os.path.splitext(os.path.basename(resolved))[0],
            md_files=[resolved],
            directories=[],
            create_root_page=False,
        )

    if not os.path.isdir(resolved):
        raise ScanError(f"Input path is not a file or directory: {resolved}", resolved)

    md_files: List[str] = []
    collect_markdown_files(resolved, md_files)
    logger.info(f"Found {len(md_files)} markdown file(s) in {resolved}")

    return ScanResult(
        input_path=resolved,
        is_directory=True,
        root_dir=resolved,
        root_name=os.path.basename(resolved),
        md_files=md_files,
        directories=derive_directories(resolved, md_files),
        create_root_page=True,
    )


def _common_parent(paths: List[str]) -> str:
    common = os.path.dirname(paths[0])
    for path in paths:
        while not _is_within(path, common):
            parent = os.path.dirname(common)
            if parent == common:
                break
            common = parent
    return common


def scan_multiple_inputs(input_paths: List[str]) -> ScanResult:
    """Scan several files and/or directories as one import.

    Paths are made relative to their common parent directory and placed
    directly under the destination page (no wrapper page). Sync state files
    and paths that don't exist are skipped.

    Args:
        input_paths: One or more file or directory paths

    Returns:
        ScanResult covering all inputs

    Raises:
        ScanError: If no usable input paths are given
    """
    if not input_paths:
        raise ScanError("No input paths provided")

    if len(input_paths) == 1:
        return scan_input(input_paths[0])

    resolved_paths = [
        os.path.abspath(p) for p in input_paths
        if not p.endswith(STATE_FILE_NAME)
    ]
    if not resolved_paths:
        raise ScanError("No valid input paths provided")

    common_parent = _common_parent(resolved_paths)

    md_files: List[str] = []
    sub_dirs: List[str] = []
    direct_file_dirs: Set[str] = set()

    for resolved in resolved_paths:
        if os.path.isfile(resolved):
            if resolved.endswith(MARKDOWN_EXTENSION):
                md_files.append(resolved)
                direct_file_dirs.add(os.path.dirname(resolved))
        elif os.path.isdir(resolved):
            sub_dirs.append(resolved)
            collect_markdown_files(resolved, md_files)
        else:
            logger.warning(f"Skipping missing input path: {resolved}")

    all_directories = derive_directories(common_parent, md_files)
    relevant_dirs = [
        directory for directory in all_directories
        if any(_is_within(directory, sub_dir) for sub_dir in sub_dirs)
        or any(_is_within(file_dir, directory) for file_dir in direct_file_dirs)
    ]

    return ScanResult(
        input_path=common_parent,
        is_directory=True,
        root_dir=common_parent,
        root_name=os.path.basename(common_parent),
        md_files=md_files,
        directories=relevant_dirs,
        create_root_page=False,
    )


def to_relative_path(root_dir: str, target_path: str) -> str:
    """Return target_path relative to root_dir with forward slashes.

    Example:
        >>> to_relative_path("/notes", "/notes/A/B/note.md")
        'A/B/note.md'
    """
    return PurePath(os.path.relpath(target_path, root_dir)).as_posix()

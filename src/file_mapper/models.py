"""Data models for file mapper.

This module defines the result of scanning input paths for markdown files.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ScanResult:
    """Markdown files and directories discovered under an input path.

    Attributes:
        input_path: Absolute path that was scanned (the common parent for
            multi-path scans)
        is_directory: True unless a single file was given
        root_dir: Directory all relative paths are computed against
        root_name: Base name used as the title of a wrapper page
        md_files: Absolute paths of the markdown files, in import order
        directories: Absolute paths of directories that need a page,
            shortest path first so parents precede children
        create_root_page: Create a wrapper page named root_name under the
            destination (single directory input only)

    Example:
        >>> scan = ScanResult(input_path="/notes", is_directory=True,
        ...                   root_dir="/notes", root_name="notes")
    """
    input_path: str
    is_directory: bool
    root_dir: str
    root_name: str
    md_files: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)
    create_root_page: bool = False

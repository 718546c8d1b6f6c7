"""File discovery for the markdown importer.

This package finds the markdown files and directories to import and
expresses them relative to the import root.
"""

from .models import ScanResult
from .errors import FileMapperError, ScanError
from .scanner import scan_input, scan_multiple_inputs, to_relative_path

__all__ = [
    'ScanResult',
    'FileMapperError',
    'ScanError',
    'scan_input',
    'scan_multiple_inputs',
    'to_relative_path',
]

"""Command-line interface for the markdown-to-Notion importer.

This package provides the `md-to-notion` CLI tool that scans markdown
paths and imports them under a destination Notion page, with progress
output and error handling.
"""

from .import_command import ImportCommand
from .models import ExitCode
from .errors import CLIError, UsageError

__all__ = [
    'ImportCommand',
    'ExitCode',
    'CLIError',
    'UsageError',
]

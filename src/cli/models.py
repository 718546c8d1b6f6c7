"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Import completed successfully
    - GENERAL_ERROR (1): Usage, configuration, state or document errors
    - AUTH_ERROR (3): Notion rejected the integration token
    - NETWORK_ERROR (4): Notion API unreachable or failing

    Example:
        >>> sys.exit(ExitCode.SUCCESS)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4

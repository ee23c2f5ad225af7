"""Data models for CLI operations."""

from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): General error (config issues, validation failures)
    - CONFLICTS (2): Target already exists or the saved order changed underneath
    - AUTH_ERROR (3): Authentication or authorization failure
    - NETWORK_ERROR (4): Network connectivity or API availability issues

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFLICTS = 2
    AUTH_ERROR = 3
    NETWORK_ERROR = 4


ERROR_KIND_EXIT_CODES = {
    'conflict': ExitCode.CONFLICTS,
    'credentials': ExitCode.AUTH_ERROR,
    'upstream_unavailable': ExitCode.NETWORK_ERROR,
}


def exit_code_for(error_kind: Optional[str]) -> ExitCode:
    """Exit code for a failed operation's error_kind."""
    if error_kind is None:
        return ExitCode.SUCCESS
    return ERROR_KIND_EXIT_CODES.get(error_kind, ExitCode.GENERAL_ERROR)

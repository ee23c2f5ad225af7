"""Typed exception hierarchy for navigation errors.

This module defines all custom exceptions raised by the navigation model.
All exceptions inherit from NavigationError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional, Sequence

from src.store_client.errors import NavSyncError


class NavigationError(NavSyncError):
    """Base exception for all navigation errors."""
    pass


class InvalidPathError(NavigationError):
    """Raised when a path fails slug syntax or addresses nothing valid."""

    def __init__(self, path: str, reason: Optional[str] = None):
        message = f"Invalid path '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason


class TreeCorruptError(NavigationError):
    """Raised when a stored navigation document fails to parse or has the wrong shape."""

    def __init__(self, message: str, location: Optional[str] = None):
        if location:
            full_message = f"Navigation document is corrupt at {location}: {message}"
        else:
            full_message = f"Navigation document is corrupt: {message}"
        super().__init__(full_message)
        self.location = location
        self.original_message = message


class EditError(NavigationError):
    """Raised when a sidebar edit is not allowed for the addressed item."""

    def __init__(self, message: str, index_path: Sequence[int] = ()):
        super().__init__(message)
        self.index_path = tuple(index_path)


class FolderNotEmptyError(EditError):
    """Raised when deleting a folder that still has children."""

    def __init__(self, path: str, index_path: Sequence[int] = ()):
        super().__init__(
            f"Folder '{path}' must be empty before it can be deleted",
            index_path
        )
        self.path = path


class ConfigError(NavigationError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message


class FilesystemError(NavigationError):
    """Raised when local filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason

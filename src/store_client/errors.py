"""Typed exception hierarchy for backing-store errors.

This module defines all custom exceptions raised by the content store client.
All exceptions inherit from ContentStoreError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class NavSyncError(Exception):
    """Base exception for all docs-nav-sync errors.

    Use this to catch any application-level error from the tool.
    """
    pass


class ContentStoreError(NavSyncError):
    """Base exception for all backing-store errors."""
    pass


class InvalidCredentialsError(ContentStoreError):
    """Raised when the API token is missing, invalid, or rejected."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"GitHub token is missing or invalid (endpoint: {endpoint})"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class NotFoundError(ContentStoreError):
    """Raised when a requested path does not exist in the store."""

    def __init__(self, path: str):
        super().__init__(f"Path {path} not found")
        self.path = path


class ConflictError(ContentStoreError):
    """Raised when a create or rename target already exists."""

    def __init__(self, path: str, message: Optional[str] = None):
        super().__init__(message or f"Something already exists at {path}")
        self.path = path


class StaleRevisionError(ConflictError):
    """Raised when a write carries a revision token the store no longer holds."""

    def __init__(self, path: str, revision: Optional[str] = None):
        super().__init__(
            path,
            f"Revision {revision or '(none)'} of {path} is out of date"
        )
        self.revision = revision


class UpstreamUnavailableError(ContentStoreError):
    """Raised when the store is unreachable, failing, or rate limited after retries."""

    def __init__(self, endpoint: str, reason: Optional[str] = None):
        message = f"Content store is not available at {endpoint}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.endpoint = endpoint
        self.reason = reason


class RateLimitedError(ContentStoreError):
    """Raised for a single rate-limited response; retried by retry_logic."""

    status_code = 429

    def __init__(self, endpoint: str, retry_after: Optional[float] = None):
        super().__init__(f"Rate limit hit at {endpoint}")
        self.endpoint = endpoint
        self.retry_after = retry_after

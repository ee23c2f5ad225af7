"""Content store client for docs-nav-sync.

This package provides Python abstractions over the GitHub repository contents
API, exposing the repository as a key-value blob store keyed by path with
blob shas as revision tokens.
"""

from .errors import (
    NavSyncError,
    ContentStoreError,
    InvalidCredentialsError,
    NotFoundError,
    ConflictError,
    StaleRevisionError,
    UpstreamUnavailableError,
    RateLimitedError,
)
from .models import DirEntry, StoreFile

__all__ = [
    "NavSyncError",
    "ContentStoreError",
    "InvalidCredentialsError",
    "NotFoundError",
    "ConflictError",
    "StaleRevisionError",
    "UpstreamUnavailableError",
    "RateLimitedError",
    "DirEntry",
    "StoreFile",
]

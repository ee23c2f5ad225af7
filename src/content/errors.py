"""Exceptions raised by the content layer."""

from src.store_client.errors import NavSyncError


class ContentError(NavSyncError):
    """Base exception for content-layer errors."""
    pass


class FrontmatterError(ContentError):
    """Raised when a page's YAML preamble is malformed."""

    def __init__(self, file_path: str, reason: str):
        super().__init__(f"Invalid frontmatter in {file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason

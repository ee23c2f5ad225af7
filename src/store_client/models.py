"""Data models for the content store client.

The backing store is treated as a key-value store keyed by path. Files carry
their raw bytes and the blob sha, which doubles as the revision token for
optimistic concurrency on writes.
"""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True)
class StoreFile:
    """A file fetched from the store.

    Attributes:
        path: Repository-relative path (e.g. "content/foundations/colors.md")
        data: Raw file bytes
        sha: Blob sha, passed back on update/delete
    """
    path: str
    data: bytes
    sha: str

    @property
    def text(self) -> str:
        """File content decoded as UTF-8."""
        return self.data.decode('utf-8')


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing.

    Attributes:
        name: Entry name (last path segment)
        path: Repository-relative path
        sha: Blob or tree sha
        type: "file" or "dir" (other GitHub types such as "symlink" pass through)
    """
    name: str
    path: str
    sha: str
    type: Literal["file", "dir", "symlink", "submodule"]

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def is_dir(self) -> bool:
        return self.type == "dir"

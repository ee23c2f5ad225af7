"""Open/closed state of sidebar folders.

Each folder's flag is independent and keyed by its path, so inserting or
moving items never disturbs the open state of unrelated folders. Opening a
folder opens its whole ancestor trail and closes the other open folders under
the same parent (one open folder per level).
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from .paths import ancestors, parent_path


@dataclass(frozen=True)
class FolderOpenState:
    """Immutable set of open folder paths."""
    open_paths: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> 'FolderOpenState':
        state = cls()
        for path in paths:
            state = state.open(path)
        return state

    def is_open(self, path: str) -> bool:
        return path in self.open_paths

    def is_visible(self, path: str) -> bool:
        """True if every ancestor folder of path is open."""
        return all(ancestor in self.open_paths for ancestor in ancestors(path))

    def open(self, path: str) -> 'FolderOpenState':
        trail = ancestors(path) + (path,)
        opened = set(self.open_paths)
        for folder in trail:
            level = parent_path(folder)
            opened = {
                other for other in opened
                if other == folder or parent_path(other) != level
            }
            opened.add(folder)
        return FolderOpenState(frozenset(opened))

    def close(self, path: str) -> 'FolderOpenState':
        return FolderOpenState(self.open_paths - {path})

    def toggle(self, path: str) -> 'FolderOpenState':
        if self.is_open(path):
            return self.close(path)
        return self.open(path)

    def reveal(self, page_path: str) -> 'FolderOpenState':
        """Open the folder trail leading to a page."""
        folder = parent_path(page_path)
        if not folder:
            return self
        return self.open(folder)

"""Data models for sidebar navigation.

This module defines the navigation node types and the configured-tree value.
Nodes are frozen dataclasses with tuple children: every edit builds new nodes
along the touched path and shares untouched subtrees with the previous tree.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class PageNode:
    """A content page in the sidebar.

    Attributes:
        path: Slash-joined slug path, unique across the tree (e.g. "foundations/colors")
        order: Sort hint within the page's sibling zone
        pinned: Whether the page is pinned above its unpinned siblings
    """
    path: str
    order: int = 0
    pinned: bool = False


@dataclass(frozen=True)
class FolderNode:
    """A folder grouping pages and nested folders.

    Attributes:
        path: Slash-joined slug path; a strict prefix of every descendant path
        order: Sort hint within the folder's sibling zone
        pinned: Whether the folder is pinned above its unpinned siblings
        children: Ordered child nodes, arbitrary depth
    """
    path: str
    order: int = 0
    pinned: bool = False
    children: Tuple['Node', ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class DividerNode:
    """A visual separator at one sibling level. Has no path and cannot be pinned."""
    order: int = 0


Node = Union[PageNode, FolderNode, DividerNode]
Tree = Tuple[Node, ...]


def is_divider(node: Node) -> bool:
    return isinstance(node, DividerNode)


def is_pinned(node: Node) -> bool:
    """Dividers are never pinned."""
    if isinstance(node, DividerNode):
        return False
    return node.pinned


def node_path(node: Node) -> str:
    """Path of a page or folder; empty string for dividers."""
    if isinstance(node, DividerNode):
        return ''
    return node.path


@dataclass(frozen=True)
class ConfiguredTree:
    """The persisted navigation-order document plus its revision token.

    Passed explicitly through read-modify-write calls so the revision that was
    read is the one offered back on write.

    Attributes:
        structure: Root-level nodes
        revision: Blob sha of the stored document (None if never saved)
        missing: True when no usable document exists (never saved, or corrupt)
    """
    structure: Tree = ()
    revision: Optional[str] = None
    missing: bool = False

    @classmethod
    def missing_tree(cls, revision: Optional[str] = None) -> 'ConfiguredTree':
        """The explicit "nothing saved" result; reconciles like an empty tree."""
        return cls(structure=(), revision=revision, missing=True)


@dataclass
class NavConfig:
    """Repository and layout settings for the sidebar.

    Attributes:
        owner: GitHub account or organization owning the content repository
        repo: Repository name
        branch: Branch that holds the content and the order document
        content_root: Directory holding the markdown pages
        order_file: Repository path of the navigation-order document
        trash_dir: Trash directory name under content_root
        placeholder_file: File written to keep an empty folder in the store
        preferred_root_order: Root folders listed first on a fresh scan
        max_retries: Rate-limit retries before giving up
        request_timeout: HTTP timeout in seconds
    """
    owner: str
    repo: str
    branch: str = 'main'
    content_root: str = 'content'
    order_file: str = 'sidebar-config.json'
    trash_dir: str = 'trash'
    placeholder_file: str = '.gitkeep'
    preferred_root_order: List[str] = field(default_factory=list)
    max_retries: int = 3
    request_timeout: int = 30

    @property
    def trash_root(self) -> str:
        """Repository path of the trash directory."""
        return f"{self.content_root}/{self.trash_dir}"

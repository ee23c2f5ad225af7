"""Sidebar navigation model for docs-nav-sync.

This package holds the pure part of the sidebar: node types, the stored
document codec, reconciliation of saved order with observed content, display
ordering, path and slug utilities, sidebar edits and folder accordion state.
Nothing here talks to the content store.
"""

from .models import (
    PageNode,
    FolderNode,
    DividerNode,
    Node,
    Tree,
    ConfiguredTree,
    NavConfig,
)
from .errors import (
    NavigationError,
    InvalidPathError,
    TreeCorruptError,
    EditError,
    FolderNotEmptyError,
    ConfigError,
    FilesystemError,
)
from .config_loader import ConfigLoader
from .display_order import sort_to_display_order
from .folder_state import FolderOpenState
from .reconciler import reconcile

__all__ = [
    'PageNode',
    'FolderNode',
    'DividerNode',
    'Node',
    'Tree',
    'ConfiguredTree',
    'NavConfig',
    'NavigationError',
    'InvalidPathError',
    'TreeCorruptError',
    'EditError',
    'FolderNotEmptyError',
    'ConfigError',
    'FilesystemError',
    'ConfigLoader',
    'sort_to_display_order',
    'FolderOpenState',
    'reconcile',
]

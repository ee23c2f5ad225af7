"""Test helper modules for docs-nav-sync testing.

This package provides utilities for unit tests:
- fake_store: In-memory stand-in for the GitHub contents API wrapper
- tree_builders: Short constructors for navigation trees
"""

from .fake_store import FakeStore
from .tree_builders import page, folder, divider, paths_of

__all__ = [
    'FakeStore',
    'page',
    'folder',
    'divider',
    'paths_of',
]

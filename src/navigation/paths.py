"""Path utilities over navigation trees.

Paths are slash-joined slug sequences. Prefix tests always respect segment
boundaries: "component" is an ancestor of "component/button" but not of
"components/button".
"""

from dataclasses import replace
from typing import FrozenSet, Iterable, Optional, Sequence, Tuple

from .models import DividerNode, FolderNode, Node, Tree, is_pinned


def split_path(path: str) -> Tuple[str, ...]:
    return tuple(segment for segment in path.split('/') if segment)


def join_path(*segments: str) -> str:
    return '/'.join(segment.strip('/') for segment in segments if segment)


def parent_path(path: str) -> str:
    """Parent folder path; empty string for root-level paths."""
    head, _, _ = path.rpartition('/')
    return head


def last_segment(path: str) -> str:
    return path.rpartition('/')[2]


def is_ancestor(ancestor: str, path: str) -> bool:
    """True if ancestor is a strict segment-boundary prefix of path."""
    return bool(ancestor) and path.startswith(ancestor + '/')


def ancestors(path: str) -> Tuple[str, ...]:
    """All ancestor paths, outermost first.

    Example:
        >>> ancestors("a/b/c")
        ('a', 'a/b')
    """
    segments = split_path(path)
    return tuple('/'.join(segments[:i]) for i in range(1, len(segments)))


def can_reorder(node: Node, depth: int = 1) -> bool:
    """Whether a node may be dragged to a new position.

    Every root item is custom-ordered. Below the root only pinned pages and
    folders and dividers hold a stored position; unpinned items are placed
    alphabetically.
    """
    if depth == 0:
        return True
    if isinstance(node, DividerNode):
        return True
    return is_pinned(node)


def valid_paths(tree: Iterable[Node]) -> FrozenSet[str]:
    """Every page and folder path in the tree, at any depth."""
    paths = set()
    stack = list(tree)
    while stack:
        node = stack.pop()
        if isinstance(node, DividerNode):
            continue
        paths.add(node.path)
        if isinstance(node, FolderNode):
            stack.extend(node.children)
    return frozenset(paths)


def filter_to_existing(config_tree: Iterable[Node], paths: FrozenSet[str]) -> Tree:
    """Prune configured entries whose path is not in paths.

    Dividers are kept. A folder that is absent takes its whole subtree with it.
    """
    result = []
    for node in config_tree:
        if isinstance(node, DividerNode):
            result.append(node)
        elif node.path not in paths:
            continue
        elif isinstance(node, FolderNode):
            children = filter_to_existing(node.children, paths)
            result.append(node if children == node.children else replace(node, children=children))
        else:
            result.append(node)
    return tuple(result)


def _rewrite(path: str, old_path: str, new_path: str) -> str:
    if path == old_path:
        return new_path
    if is_ancestor(old_path, path):
        return new_path + path[len(old_path):]
    return path


def rename_path(tree: Iterable[Node], old_path: str, new_path: str) -> Tree:
    """Rewrite old_path and every descendant path under it to start with new_path.

    Untouched nodes are returned as the same objects.
    """
    result = []
    for node in tree:
        if isinstance(node, DividerNode):
            result.append(node)
            continue
        path = _rewrite(node.path, old_path, new_path)
        if isinstance(node, FolderNode):
            children = rename_path(node.children, old_path, new_path)
            if path != node.path or children != node.children:
                node = replace(node, path=path, children=children)
        elif path != node.path:
            node = replace(node, path=path)
        result.append(node)
    return tuple(result)


def node_at(tree: Sequence[Node], index_path: Sequence[int]) -> Optional[Node]:
    """Node addressed by a child-index sequence from the root, or None."""
    if not index_path:
        return None
    current: Sequence[Node] = tree
    for depth, index in enumerate(index_path):
        if index < 0 or index >= len(current):
            return None
        node = current[index]
        if depth == len(index_path) - 1:
            return node
        if not isinstance(node, FolderNode):
            return None
        current = node.children
    return None


def find_index_path(tree: Sequence[Node], path: str) -> Optional[Tuple[int, ...]]:
    """Index path of the page or folder with the given path, or None."""
    for index, node in enumerate(tree):
        if isinstance(node, DividerNode):
            continue
        if node.path == path:
            return (index,)
        if isinstance(node, FolderNode) and is_ancestor(node.path, path):
            found = find_index_path(node.children, path)
            if found is not None:
                return (index,) + found
    return None

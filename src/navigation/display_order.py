"""Deterministic display order for reconciled navigation trees.

Root level: every item sorted by order, pins ignored.

Below the root, three zones in fixed sequence:
    1. pinned pages/folders, by order
    2. dividers, by order
    3. unpinned pages/folders, alphabetically by path (case-insensitive)

Sorting is stable, so items with equal keys keep their reconciled sequence.
"""

from dataclasses import replace
from typing import Sequence

from .models import DividerNode, FolderNode, Node, Tree, is_pinned


def _order_key(node: Node) -> int:
    return node.order


def _path_key(node: Node) -> str:
    return node.path.casefold()


def sort_to_display_order(items: Sequence[Node], depth: int = 0) -> Tree:
    """Sort one sibling list for display and recurse into folders.

    Args:
        items: Reconciled sibling list
        depth: Nesting depth of the list (0 for the root)

    Returns:
        New tuple in display order; stored order and pinned values are untouched
    """
    if depth == 0:
        ordered = sorted(items, key=_order_key)
    else:
        pinned = sorted(
            (n for n in items if not isinstance(n, DividerNode) and is_pinned(n)),
            key=_order_key,
        )
        dividers = sorted(
            (n for n in items if isinstance(n, DividerNode)),
            key=_order_key,
        )
        unpinned = sorted(
            (n for n in items if not isinstance(n, DividerNode) and not is_pinned(n)),
            key=_path_key,
        )
        ordered = pinned + dividers + unpinned

    result = []
    for node in ordered:
        if isinstance(node, FolderNode):
            children = sort_to_display_order(node.children, depth + 1)
            if children != node.children:
                node = replace(node, children=children)
        result.append(node)
    return tuple(result)


def zone_of(node: Node, depth: int) -> str:
    """Name of the sort zone a node falls into at the given depth."""
    if depth == 0:
        return 'root'
    if isinstance(node, DividerNode):
        return 'divider'
    return 'pinned' if is_pinned(node) else 'unpinned'

"""Sidebar edits as pure functions over navigation trees.

Items are addressed by index path: the sequence of child indexes from the
root (e.g. (2, 0) is the first child of the third root item). Every function
returns a new tree; only the ancestors of the edited position are rebuilt and
every other subtree is shared with the input.

Edits are local until the caller saves. Saving normalizes orders to a dense
1..N per sibling list (normalize_orders).
"""

import logging
from dataclasses import replace
from typing import Callable, Sequence, Tuple

from .display_order import zone_of
from .errors import EditError, FolderNotEmptyError
from .models import DividerNode, FolderNode, Node, Tree
from .paths import can_reorder, node_at

logger = logging.getLogger(__name__)

ZONE_RANK = {'pinned': 0, 'divider': 1, 'unpinned': 2}


def _renumber(items: Sequence[Node]) -> Tree:
    return tuple(
        node if node.order == position else replace(node, order=position)
        for position, node in enumerate(items, start=1)
    )


def normalize_orders(tree: Sequence[Node]) -> Tree:
    """Renumber every sibling list to 1..N in its current sequence, recursively."""
    result = []
    for position, node in enumerate(tree, start=1):
        if isinstance(node, FolderNode):
            children = normalize_orders(node.children)
            if node.order != position or children != node.children:
                node = replace(node, order=position, children=children)
        elif node.order != position:
            node = replace(node, order=position)
        result.append(node)
    return tuple(result)


def sibling_list(tree: Sequence[Node], parent_index_path: Sequence[int]) -> Tree:
    """Children of the folder at parent_index_path (the root list for ())."""
    if not parent_index_path:
        return tuple(tree)
    parent = node_at(tree, parent_index_path)
    if not isinstance(parent, FolderNode):
        raise EditError("Parent position is not a folder", parent_index_path)
    return parent.children


def replace_sibling_list(
    tree: Sequence[Node],
    parent_index_path: Sequence[int],
    new_list: Sequence[Node],
) -> Tree:
    """Swap in a new child list under parent_index_path, rebuilding ancestors."""
    if not parent_index_path:
        return tuple(new_list)
    index, rest = parent_index_path[0], parent_index_path[1:]
    folder = tree[index]
    if not isinstance(folder, FolderNode):
        raise EditError("Parent position is not a folder", parent_index_path)
    updated = replace(folder, children=replace_sibling_list(folder.children, rest, new_list))
    return tuple(tree[:index]) + (updated,) + tuple(tree[index + 1:])


def update_node(
    tree: Sequence[Node],
    index_path: Sequence[int],
    updater: Callable[[Node], Node],
) -> Tree:
    """Replace the node at index_path with updater(node)."""
    node = node_at(tree, index_path)
    if node is None:
        raise EditError("No item at that position", index_path)
    parent = tuple(index_path[:-1])
    siblings = list(sibling_list(tree, parent))
    siblings[index_path[-1]] = updater(node)
    return replace_sibling_list(tree, parent, siblings)


def move_item(tree: Sequence[Node], index_path: Sequence[int], drop_index: int) -> Tree:
    """Drag an item to a new slot in its own sibling list.

    drop_index is an insertion slot in the list as displayed before the move
    (0 places the item first, len(list) places it last). The sibling list is
    renumbered in its new sequence.

    Raises:
        EditError: If the item is not reorderable, the slot is out of range, or
            the move would carry the item out of its zone below the root
    """
    if not index_path:
        raise EditError("No item addressed", index_path)
    parent = tuple(index_path[:-1])
    depth = len(parent)
    siblings = list(sibling_list(tree, parent))
    from_index = index_path[-1]

    if from_index < 0 or from_index >= len(siblings):
        raise EditError("No item at that position", index_path)
    if drop_index < 0 or drop_index > len(siblings):
        raise EditError(f"Drop slot {drop_index} is out of range", index_path)

    item = siblings[from_index]
    if not can_reorder(item, depth):
        raise EditError(
            "Only pinned items and dividers can be reordered inside a folder",
            index_path
        )
    if drop_index == from_index:
        return tuple(tree)

    to_index = drop_index - 1 if drop_index > from_index else drop_index
    moved = siblings[:from_index] + siblings[from_index + 1:]
    moved.insert(to_index, item)

    if depth > 0:
        ranks = [ZONE_RANK[zone_of(node, depth)] for node in moved]
        if ranks != sorted(ranks):
            raise EditError("Items can only be moved within their own zone", index_path)

    logger.debug(f"Moved item {tuple(index_path)} to slot {to_index} at depth {depth}")
    return replace_sibling_list(tree, parent, _renumber(moved))


def toggle_pin(tree: Sequence[Node], index_path: Sequence[int]) -> Tree:
    """Flip the pinned flag of a page or folder.

    Raises:
        EditError: If the addressed item is a divider or missing
    """
    node = node_at(tree, index_path)
    if node is None:
        raise EditError("No item at that position", index_path)
    if isinstance(node, DividerNode):
        raise EditError("Dividers cannot be pinned", index_path)
    return update_node(tree, index_path, lambda n: replace(n, pinned=not n.pinned))


def insert_divider(tree: Sequence[Node], parent_index_path: Sequence[int] = ()) -> Tree:
    """Append a divider to a sibling list, after every existing order value."""
    siblings = sibling_list(tree, tuple(parent_index_path))
    next_order = max((node.order for node in siblings), default=0) + 1
    return replace_sibling_list(
        tree,
        tuple(parent_index_path),
        siblings + (DividerNode(order=next_order),),
    )


def remove_item(tree: Sequence[Node], index_path: Sequence[int]) -> Tree:
    """Remove a single item from the sidebar.

    Raises:
        FolderNotEmptyError: If the item is a folder that still has children
        EditError: If nothing is at index_path
    """
    node = node_at(tree, index_path)
    if node is None:
        raise EditError("No item at that position", index_path)
    if isinstance(node, FolderNode) and node.children:
        raise FolderNotEmptyError(node.path, index_path)

    parent = tuple(index_path[:-1])
    siblings = sibling_list(tree, parent)
    index = index_path[-1]
    return replace_sibling_list(tree, parent, siblings[:index] + siblings[index + 1:])


def index_path_of(position: str) -> Tuple[int, ...]:
    """Parse a dotted index path such as "2.0.1".

    Raises:
        EditError: If the text is not a dotted sequence of non-negative integers
    """
    try:
        indexes = tuple(int(part) for part in position.split('.'))
    except ValueError:
        raise EditError(f"Invalid position '{position}': expected e.g. 2.0.1")
    if any(index < 0 for index in indexes):
        raise EditError(f"Invalid position '{position}': indexes start at 0")
    return indexes

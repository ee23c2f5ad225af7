"""JSON encoding of the navigation-order document.

Document shape:
    {
      "structure": [
        {"type": "folder", "path": "foundations", "order": 1, "pinned": false,
         "children": [{"type": "page", "path": "foundations/colors", "order": 1, "pinned": true}]},
        {"type": "divider", "order": 2}
      ]
    }

Decoding is strict about shape (TreeCorruptError on anything unexpected) and
lenient about optional fields: a missing order reads as 0, a missing pinned
flag as False and missing folder children as an empty list.
"""

import json
from typing import Any, Dict, List, Sequence

from .errors import TreeCorruptError
from .models import DividerNode, FolderNode, Node, PageNode, Tree

NODE_TYPES = ('page', 'folder', 'divider')


def node_to_dict(node: Node) -> Dict[str, Any]:
    if isinstance(node, DividerNode):
        return {'type': 'divider', 'order': node.order}
    if isinstance(node, FolderNode):
        return {
            'type': 'folder',
            'path': node.path,
            'order': node.order,
            'pinned': node.pinned,
            'children': [node_to_dict(child) for child in node.children],
        }
    return {
        'type': 'page',
        'path': node.path,
        'order': node.order,
        'pinned': node.pinned,
    }


def tree_to_list(tree: Sequence[Node]) -> List[Dict[str, Any]]:
    return [node_to_dict(node) for node in tree]


def dumps(tree: Sequence[Node]) -> str:
    """Serialize a tree as the stored document text."""
    return json.dumps({'structure': tree_to_list(tree)}, indent=2) + '\n'


def _read_order(item: Dict[str, Any], location: str) -> int:
    order = item.get('order', 0)
    if order is None:
        return 0
    # bool is an int subclass; true/false here is a shape error
    if isinstance(order, bool) or not isinstance(order, (int, float)):
        raise TreeCorruptError(f"'order' must be a number, got {type(order).__name__}", location)
    return int(order)


def _read_pinned(item: Dict[str, Any], location: str) -> bool:
    pinned = item.get('pinned', False)
    if pinned is None:
        return False
    if not isinstance(pinned, bool):
        raise TreeCorruptError(f"'pinned' must be a boolean, got {type(pinned).__name__}", location)
    return pinned


def _read_path(item: Dict[str, Any], location: str) -> str:
    path = item.get('path')
    if not isinstance(path, str) or not path.strip():
        raise TreeCorruptError("'path' must be a non-empty string", location)
    return path.strip()


def node_from_dict(item: Any, location: str = 'structure') -> Node:
    """Decode one node.

    Raises:
        TreeCorruptError: If the item is not a well-formed node
    """
    if not isinstance(item, dict):
        raise TreeCorruptError(f"node must be an object, got {type(item).__name__}", location)

    node_type = item.get('type')
    if node_type not in NODE_TYPES:
        raise TreeCorruptError(f"unknown node type {node_type!r}", location)

    order = _read_order(item, location)
    if node_type == 'divider':
        return DividerNode(order=order)

    path = _read_path(item, location)
    pinned = _read_pinned(item, location)
    if node_type == 'page':
        return PageNode(path=path, order=order, pinned=pinned)

    children_raw = item.get('children')
    if children_raw is None:
        children_raw = []
    if not isinstance(children_raw, list):
        raise TreeCorruptError("'children' must be a list", location)
    children = tree_from_list(children_raw, f"{location}.{path}")
    return FolderNode(path=path, order=order, pinned=pinned, children=children)


def tree_from_list(items: List[Any], location: str = 'structure') -> Tree:
    return tuple(
        node_from_dict(item, f"{location}[{index}]")
        for index, item in enumerate(items)
    )


def loads(text: str) -> Tree:
    """Parse stored document text.

    Raises:
        TreeCorruptError: If the text is not JSON or not {"structure": [...]}
    """
    try:
        document = json.loads(text)
    except (ValueError, TypeError) as e:
        raise TreeCorruptError(f"invalid JSON: {e}")

    if not isinstance(document, dict):
        raise TreeCorruptError(f"expected an object, got {type(document).__name__}")

    structure = document.get('structure')
    if not isinstance(structure, list):
        raise TreeCorruptError("expected { \"structure\": [...] }")

    return tree_from_list(structure)

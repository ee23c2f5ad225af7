"""Short constructors for navigation trees in tests."""

from typing import List, Sequence

from src.navigation.models import DividerNode, FolderNode, Node, PageNode


def page(path: str, order: int = 0, pinned: bool = False) -> PageNode:
    return PageNode(path=path, order=order, pinned=pinned)


def folder(path: str, order: int = 0, *children: Node, pinned: bool = False) -> FolderNode:
    return FolderNode(path=path, order=order, pinned=pinned, children=tuple(children))


def divider(order: int = 0) -> DividerNode:
    return DividerNode(order=order)


def paths_of(items: Sequence[Node]) -> List[str]:
    """Paths of one sibling list, with '---' standing in for dividers."""
    return ['---' if isinstance(node, DividerNode) else node.path for node in items]

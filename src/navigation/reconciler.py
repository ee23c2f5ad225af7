"""Reconciliation of the configured navigation tree with observed content.

The observed tree (what the content store holds right now) decides which
pages and folders exist. The configured tree (what was last saved) decides
their order, pins and the dividers between them. Reconciliation merges the two
one sibling list at a time:

1. Index the observed children by kind and path.
2. Walk the configured children in order. Dividers pass through. A page or
   folder passes through only if the observed list has the same kind of node
   at that path; folders recurse into their observed counterpart. Everything
   else (deleted, renamed, changed kind, duplicated) is dropped.
3. Walk the observed children in their own order and append every path not
   consumed in step 2 as unpinned, numbering upward from the largest order
   among the survivors. A new folder's children are reconciled against an
   empty configuration, so all of them count as new.
4. Return the survivors followed by the appended nodes.

Existing order values are never renumbered here. Dense renumbering happens
only when the user saves (see editor.normalize_orders), so reading the same
content twice never shifts unrelated items.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from .models import DividerNode, FolderNode, Node, PageNode, Tree

logger = logging.getLogger(__name__)


def _max_order(nodes: Iterable[Node]) -> int:
    return max((node.order for node in nodes), default=0)


def _key(node: Node) -> Tuple[bool, str]:
    return isinstance(node, FolderNode), node.path


def reconcile(observed: Sequence[Node], configured: Sequence[Node]) -> Tree:
    """Merge one observed sibling list with its configured counterpart.

    Nodes are matched by kind and path, so a page and a folder sharing a
    path (``intro.md`` next to ``intro/``) are two separate entries.

    Args:
        observed: Nodes found by the content scanner at this level
        configured: Previously saved nodes at this level (empty if none)

    Returns:
        Configured nodes that still exist, then newly discovered nodes
    """
    observed_by_key: Dict[Tuple[bool, str], Node] = {
        _key(node): node
        for node in observed
        if not isinstance(node, DividerNode)
    }
    observed_paths: Set[str] = {path for _, path in observed_by_key}
    consumed: Set[Tuple[bool, str]] = set()
    survivors: List[Node] = []

    for node in configured:
        if isinstance(node, DividerNode):
            survivors.append(node)
            continue

        key = _key(node)
        if key in consumed:
            logger.debug(f"Dropping duplicate entry for '{node.path}'")
            continue

        match = observed_by_key.get(key)
        if isinstance(match, FolderNode):
            children = reconcile(match.children, node.children)
            if children != node.children:
                node = replace(node, children=children)
            survivors.append(node)
            consumed.add(key)
        elif match is not None:
            survivors.append(node)
            consumed.add(key)
        elif node.path in observed_paths:
            logger.debug(
                f"Dropping '{node.path}': configured as {type(node).__name__}, "
                f"found as a different kind"
            )
        else:
            logger.debug(f"Dropping '{node.path}': no longer in content")

    running_max = _max_order(survivors)
    appended: List[Node] = []

    for node in observed:
        if isinstance(node, DividerNode):
            continue
        key = _key(node)
        if key in consumed:
            continue
        consumed.add(key)
        running_max += 1
        if isinstance(node, FolderNode):
            appended.append(FolderNode(
                path=node.path,
                order=running_max,
                pinned=False,
                children=reconcile(node.children, ()),
            ))
        else:
            appended.append(PageNode(path=node.path, order=running_max, pinned=False))
        logger.debug(f"Appending newly discovered '{node.path}' with order {running_max}")

    return tuple(survivors) + tuple(appended)

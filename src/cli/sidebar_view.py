"""Sidebar rendering for the terminal.

Each row shows the item's position (the dotted index path the editing
commands take), its label and its markers. Folders are collapsed unless open
in the FolderOpenState; a collapsed folder shows how many items it hides.
"""

from typing import List, Optional, Sequence, Tuple

from rich.text import Text
from rich.tree import Tree as RichTree

from src.navigation.folder_state import FolderOpenState
from src.navigation.models import DividerNode, FolderNode, Node
from src.navigation.paths import last_segment
from src.navigation.slugs import slug_to_label

DIVIDER_LABEL = '────────'
PIN_MARKER = '(pinned)'


def position_label(index_path: Sequence[int]) -> str:
    return '.'.join(str(index) for index in index_path)


def _row(node: Node, index_path: Tuple[int, ...], open_state: Optional[FolderOpenState]) -> Text:
    text = Text(f"{position_label(index_path):>6}  ", style='dim')
    if isinstance(node, DividerNode):
        text.append(DIVIDER_LABEL, style='dim')
        return text

    label = slug_to_label(last_segment(node.path))
    if isinstance(node, FolderNode):
        is_open = open_state is None or open_state.is_open(node.path)
        text.append('▾ ' if is_open else '▸ ', style='bold')
        text.append(label, style='bold')
        if not is_open and node.children:
            text.append(f"  ({len(node.children)} items)", style='dim')
    else:
        text.append(label)
    if node.pinned:
        text.append(f" {PIN_MARKER}", style='yellow')
    text.append(f"  {node.path}", style='dim cyan')
    return text


def _add_level(
    parent: RichTree,
    items: Sequence[Node],
    prefix: Tuple[int, ...],
    open_state: Optional[FolderOpenState],
) -> None:
    for index, node in enumerate(items):
        index_path = prefix + (index,)
        branch = parent.add(_row(node, index_path, open_state))
        if isinstance(node, FolderNode):
            if open_state is None or open_state.is_open(node.path):
                _add_level(branch, node.children, index_path, open_state)


def render_sidebar(
    structure: Sequence[Node],
    open_state: Optional[FolderOpenState] = None,
    title: str = 'Sidebar',
) -> RichTree:
    """Build a Rich tree of the display structure.

    Args:
        structure: Display Tree (already in display order)
        open_state: Open folders; None expands every folder
        title: Root label
    """
    root = RichTree(Text(title, style='bold'), guide_style='dim')
    _add_level(root, structure, (), open_state)
    return root


def sidebar_lines(
    structure: Sequence[Node],
    open_state: Optional[FolderOpenState] = None,
) -> List[str]:
    """Plain-text rows of the sidebar, indented two spaces per level."""
    lines: List[str] = []

    def walk(items: Sequence[Node], prefix: Tuple[int, ...], depth: int) -> None:
        for index, node in enumerate(items):
            index_path = prefix + (index,)
            lines.append('  ' * depth + _row(node, index_path, open_state).plain.strip())
            if isinstance(node, FolderNode) and (open_state is None or open_state.is_open(node.path)):
                walk(node.children, index_path, depth + 1)

    walk(structure, (), 0)
    return lines

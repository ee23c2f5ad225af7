"""Unit tests for cli.sidebar_view module."""

from rich.tree import Tree as RichTree

from src.cli.sidebar_view import (
    DIVIDER_LABEL,
    PIN_MARKER,
    position_label,
    render_sidebar,
    sidebar_lines,
)
from src.navigation.folder_state import FolderOpenState
from tests.helpers import divider, folder, page


def structure():
    return (
        page('getting-started', 1),
        folder('components', 2,
               page('components/date-picker', 1, pinned=True),
               divider(2),
               folder('components/inputs', 3, page('components/inputs/text-field', 1))),
        divider(3),
    )


class TestPositionLabel:
    """Test cases for position_label()."""

    def test_dotted(self):
        assert position_label((2, 0, 1)) == '2.0.1'
        assert position_label((0,)) == '0'


class TestSidebarLines:
    """Test cases for sidebar_lines()."""

    def test_all_folders_expanded_without_state(self):
        """No open state expands every folder."""
        lines = sidebar_lines(structure())

        assert lines[0].startswith('0  Getting Started')
        assert lines[1].startswith('1  ▾ Components')
        assert lines[2] == f'  1.0  Date Picker {PIN_MARKER}  components/date-picker'
        assert lines[3] == f'  1.1  {DIVIDER_LABEL}'
        assert lines[5] == '    1.2.0  Text Field  components/inputs/text-field'
        assert lines[6] == f'2  {DIVIDER_LABEL}'

    def test_closed_folder_shows_item_count(self):
        lines = sidebar_lines(structure(), FolderOpenState())

        assert lines == [
            '0  Getting Started  getting-started',
            '1  ▸ Components  (3 items)  components',
            f'2  {DIVIDER_LABEL}',
        ]

    def test_open_state_expands_one_trail(self):
        lines = sidebar_lines(structure(), FolderOpenState().open('components'))

        assert lines[4] == '  1.2  ▸ Inputs  (1 items)  components/inputs'
        assert len(lines) == 6


class TestRenderSidebar:
    """Test cases for render_sidebar()."""

    def test_builds_rich_tree(self):
        tree = render_sidebar(structure(), FolderOpenState(), title='Docs')

        assert isinstance(tree, RichTree)
        assert tree.label.plain == 'Docs'
        assert len(tree.children) == 3
        assert tree.children[1].children == []

    def test_expanded_folder_has_children(self):
        tree = render_sidebar(structure())

        assert len(tree.children[1].children) == 3
        assert len(tree.children[1].children[2].children) == 1

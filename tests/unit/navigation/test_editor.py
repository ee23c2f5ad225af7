"""Unit tests for navigation.editor module."""

import pytest

from src.navigation.editor import (
    index_path_of,
    insert_divider,
    move_item,
    normalize_orders,
    remove_item,
    toggle_pin,
)
from src.navigation.errors import EditError, FolderNotEmptyError
from src.navigation.models import DividerNode
from tests.helpers import divider, folder, page, paths_of


def display_tree():
    """A tree already in display order."""
    return (
        page('intro', 1),
        folder('components', 2,
               page('components/button', 1, pinned=True),
               page('components/chip', 2, pinned=True),
               divider(3),
               page('components/avatar', 4),
               page('components/badge', 5)),
        divider(3),
        folder('empty', 4),
    )


class TestNormalizeOrders:
    """Test cases for normalize_orders()."""

    def test_renumbers_every_level_densely(self):
        tree = (
            page('a', 7),
            folder('b', 7, page('b/x', 30), divider(2)),
            divider(40),
        )

        result = normalize_orders(tree)

        assert [n.order for n in result] == [1, 2, 3]
        assert [n.order for n in result[1].children] == [1, 2]

    def test_already_dense_tree_is_returned_unchanged(self):
        tree = (page('a', 1), folder('b', 2, page('b/x', 1)))

        result = normalize_orders(tree)

        assert result == tree
        assert result[1] is tree[1]


class TestMoveItem:
    """Test cases for move_item()."""

    def test_move_root_item_down(self):
        """Dropping into slot 3 places the item after the item at index 2."""
        result = move_item(display_tree(), (0,), 3)

        assert paths_of(result) == ['components', '---', 'intro', 'empty']
        assert [n.order for n in result] == [1, 2, 3, 4]

    def test_move_root_item_up(self):
        result = move_item(display_tree(), (3,), 0)

        assert paths_of(result) == ['empty', 'intro', 'components', '---']

    def test_move_to_end_slot(self):
        result = move_item(display_tree(), (0,), 4)

        assert paths_of(result)[-1] == 'intro'

    def test_same_slot_is_a_no_op(self):
        tree = display_tree()

        assert move_item(tree, (1,), 1) == tree

    def test_reorder_pinned_within_folder(self):
        result = move_item(display_tree(), (1, 1), 0)
        children = result[1].children

        assert paths_of(children)[:2] == ['components/chip', 'components/button']
        assert [n.order for n in children] == [1, 2, 3, 4, 5]

    def test_unpinned_item_in_folder_cannot_move(self):
        with pytest.raises(EditError, match='Only pinned items'):
            move_item(display_tree(), (1, 3), 0)

    def test_pinned_item_cannot_leave_pinned_zone(self):
        with pytest.raises(EditError, match='own zone'):
            move_item(display_tree(), (1, 0), 5)

    def test_divider_cannot_move_above_pins(self):
        with pytest.raises(EditError, match='own zone'):
            move_item(display_tree(), (1, 2), 0)

    def test_out_of_range_slot(self):
        with pytest.raises(EditError, match='out of range'):
            move_item(display_tree(), (0,), 9)

    def test_missing_item(self):
        with pytest.raises(EditError):
            move_item(display_tree(), (8,), 0)

    def test_move_leaves_other_subtrees_shared(self):
        tree = display_tree()

        result = move_item(tree, (0,), 3)

        assert result[0].children is tree[1].children


class TestTogglePin:
    """Test cases for toggle_pin()."""

    def test_pins_and_unpins(self):
        pinned = toggle_pin(display_tree(), (1, 3))
        assert pinned[1].children[3].pinned is True

        unpinned = toggle_pin(pinned, (1, 3))
        assert unpinned[1].children[3].pinned is False

    def test_order_is_kept(self):
        result = toggle_pin(display_tree(), (0,))

        assert result[0].order == 1

    def test_divider_cannot_be_pinned(self):
        with pytest.raises(EditError, match='Dividers cannot be pinned'):
            toggle_pin(display_tree(), (2,))

    def test_missing_item(self):
        with pytest.raises(EditError):
            toggle_pin(display_tree(), (1, 9))


class TestInsertDivider:
    """Test cases for insert_divider()."""

    def test_appends_at_root_after_max_order(self):
        result = insert_divider(display_tree())

        assert result[-1] == DividerNode(order=5)

    def test_appends_inside_folder(self):
        result = insert_divider(display_tree(), (1,))

        assert result[1].children[-1] == DividerNode(order=6)

    def test_empty_folder_starts_at_one(self):
        result = insert_divider(display_tree(), (3,))

        assert result[3].children == (DividerNode(order=1),)

    def test_parent_must_be_folder(self):
        with pytest.raises(EditError, match='not a folder'):
            insert_divider(display_tree(), (0,))


class TestRemoveItem:
    """Test cases for remove_item()."""

    def test_removes_page(self):
        result = remove_item(display_tree(), (1, 3))

        assert 'components/avatar' not in paths_of(result[1].children)

    def test_removes_empty_folder_and_divider(self):
        result = remove_item(remove_item(display_tree(), (3,)), (2,))

        assert paths_of(result) == ['intro', 'components']

    def test_folder_with_children_is_refused(self):
        tree = display_tree()

        with pytest.raises(FolderNotEmptyError) as exc_info:
            remove_item(tree, (1,))

        assert exc_info.value.path == 'components'
        assert paths_of(tree) == ['intro', 'components', '---', 'empty']


class TestIndexPathOf:
    """Test cases for index_path_of()."""

    def test_parses_dotted_positions(self):
        assert index_path_of('2.0.1') == (2, 0, 1)
        assert index_path_of('0') == (0,)

    @pytest.mark.parametrize('position', ['', 'a', '1..2', '1.-1'])
    def test_rejects_malformed_positions(self, position):
        with pytest.raises(EditError):
            index_path_of(position)

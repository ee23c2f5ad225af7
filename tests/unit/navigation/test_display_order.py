"""Unit tests for navigation.display_order module."""

from src.navigation.display_order import sort_to_display_order, zone_of
from tests.helpers import divider, folder, page, paths_of


class TestSortToDisplayOrder:
    """Test cases for sort_to_display_order()."""

    def test_root_sorts_by_order_ignoring_pins(self):
        """At the root every item is ordered by its order value alone."""
        items = (
            page('zeta', 1),
            page('alpha', 3, pinned=True),
            divider(2),
        )

        assert paths_of(sort_to_display_order(items)) == ['zeta', '---', 'alpha']

    def test_nested_zones(self):
        """Below the root: pinned by order, dividers by order, unpinned by path."""
        items = (
            page('f/zebra', 1),
            divider(7),
            page('f/pinned-late', 9, pinned=True),
            page('f/Apple', 2),
            divider(3),
            page('f/pinned-early', 4, pinned=True),
            page('f/mango', 0),
        )
        nested = (folder('f', 1, *items),)

        result = sort_to_display_order(nested)[0].children

        assert paths_of(result) == [
            'f/pinned-early', 'f/pinned-late', '---', '---', 'f/Apple', 'f/mango', 'f/zebra',
        ]
        assert [n.order for n in result[2:4]] == [3, 7]

    def test_unpinned_sort_is_case_insensitive(self):
        """Unpinned items compare paths without case."""
        nested = (folder('f', 1, page('f/beta', 1), page('f/Alpha', 2), page('f/alpha-two', 3)),)

        result = sort_to_display_order(nested)[0].children

        assert paths_of(result) == ['f/Alpha', 'f/alpha-two', 'f/beta']

    def test_stable_for_equal_orders(self):
        """Items with equal sort keys keep their incoming sequence."""
        items = (page('b', 1), page('a', 1), page('c', 1))

        assert paths_of(sort_to_display_order(items)) == ['b', 'a', 'c']

    def test_deterministic(self):
        """Sorting the same input twice gives the same output."""
        items = (
            folder('x', 2, page('x/b', 1), divider(2), page('x/a', 3, pinned=True)),
            page('y', 1),
        )

        assert sort_to_display_order(items) == sort_to_display_order(items)

    def test_does_not_touch_stored_values(self):
        """Order and pinned values are carried through unchanged."""
        items = (page('b', 7, pinned=True), page('a', 3))

        result = sort_to_display_order(items)

        assert [(n.path, n.order, n.pinned) for n in result] == [('a', 3, False), ('b', 7, True)]

    def test_recurses_into_deep_folders(self):
        """Every nesting level below the root uses the zone rules."""
        items = (folder('a', 1, folder('a/b', 1, page('a/b/z', 1), page('a/b/y', 2))),)

        result = sort_to_display_order(items)

        assert paths_of(result[0].children[0].children) == ['a/b/y', 'a/b/z']


class TestZoneOf:
    """Test cases for zone_of()."""

    def test_root_is_single_zone(self):
        assert zone_of(page('a', 1, pinned=True), 0) == 'root'
        assert zone_of(divider(1), 0) == 'root'

    def test_nested_zones(self):
        assert zone_of(page('a/b', 1, pinned=True), 1) == 'pinned'
        assert zone_of(page('a/b', 1), 1) == 'unpinned'
        assert zone_of(divider(1), 2) == 'divider'

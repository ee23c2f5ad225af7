"""Unit tests for navigation.paths module."""

import pytest

from src.navigation.models import DividerNode
from src.navigation.paths import (
    ancestors,
    can_reorder,
    filter_to_existing,
    find_index_path,
    is_ancestor,
    join_path,
    node_at,
    parent_path,
    rename_path,
    valid_paths,
)
from tests.helpers import divider, folder, page, paths_of


def sample_tree():
    return (
        page('intro', 1),
        divider(2),
        folder('components', 3,
               page('components/button', 1, pinned=True),
               folder('components/inputs', 2,
                      page('components/inputs/text-field', 1))),
        folder('component', 4, page('component/legacy', 1)),
    )


class TestPathHelpers:
    """Test cases for the string path helpers."""

    def test_parent_path(self):
        assert parent_path('a/b/c') == 'a/b'
        assert parent_path('a') == ''

    def test_join_path_skips_empty(self):
        assert join_path('', 'a') == 'a'
        assert join_path('a/b', 'c') == 'a/b/c'

    def test_ancestors_outermost_first(self):
        assert ancestors('a/b/c') == ('a', 'a/b')
        assert ancestors('a') == ()

    @pytest.mark.parametrize('ancestor,path,expected', [
        ('components', 'components/button', True),
        ('component', 'components/button', False),
        ('components', 'components', False),
        ('', 'components', False),
    ])
    def test_is_ancestor_respects_segment_boundary(self, ancestor, path, expected):
        assert is_ancestor(ancestor, path) is expected


class TestCanReorder:
    """Test cases for can_reorder()."""

    def test_everything_reorders_at_root(self):
        assert can_reorder(page('a', 1), 0) is True

    def test_nested_unpinned_is_fixed(self):
        assert can_reorder(page('a/b', 1), 1) is False

    def test_nested_pinned_and_dividers_reorder(self):
        assert can_reorder(page('a/b', 1, pinned=True), 1) is True
        assert can_reorder(divider(1), 2) is True


class TestValidPaths:
    """Test cases for valid_paths()."""

    def test_collects_every_depth(self):
        assert valid_paths(sample_tree()) == frozenset({
            'intro',
            'components',
            'components/button',
            'components/inputs',
            'components/inputs/text-field',
            'component',
            'component/legacy',
        })

    def test_empty_tree(self):
        assert valid_paths(()) == frozenset()


class TestFilterToExisting:
    """Test cases for filter_to_existing()."""

    def test_prunes_missing_paths_recursively_and_keeps_dividers(self):
        keep = frozenset({'intro', 'components', 'components/button'})

        result = filter_to_existing(sample_tree(), keep)

        assert paths_of(result) == ['intro', '---', 'components']
        assert paths_of(result[2].children) == ['components/button']

    def test_returns_same_nodes_when_nothing_pruned(self):
        tree = sample_tree()

        result = filter_to_existing(tree, valid_paths(tree))

        assert result == tree
        assert result[2] is tree[2]


class TestRenamePath:
    """Test cases for rename_path()."""

    def test_cascades_to_descendants(self):
        result = rename_path(sample_tree(), 'components', 'widgets')

        assert valid_paths(result) == frozenset({
            'intro',
            'widgets',
            'widgets/button',
            'widgets/inputs',
            'widgets/inputs/text-field',
            'component',
            'component/legacy',
        })

    def test_respects_segment_boundary(self):
        """Renaming 'component' must not touch 'components/...'."""
        result = rename_path(sample_tree(), 'component', 'old')

        assert 'components/button' in valid_paths(result)
        assert 'old/legacy' in valid_paths(result)

    def test_keeps_order_and_pins(self):
        result = rename_path(sample_tree(), 'components/button', 'components/cta')
        renamed = result[2].children[0]

        assert (renamed.path, renamed.order, renamed.pinned) == ('components/cta', 1, True)

    def test_untouched_nodes_are_shared(self):
        tree = sample_tree()

        result = rename_path(tree, 'components', 'widgets')

        assert result[0] is tree[0]
        assert result[3] is tree[3]


class TestIndexPaths:
    """Test cases for node_at() and find_index_path()."""

    def test_node_at(self):
        tree = sample_tree()

        assert node_at(tree, (2, 1, 0)).path == 'components/inputs/text-field'
        assert isinstance(node_at(tree, (1,)), DividerNode)

    @pytest.mark.parametrize('index_path', [(), (9,), (0, 0), (2, 5)])
    def test_node_at_out_of_range(self, index_path):
        assert node_at(sample_tree(), index_path) is None

    def test_find_index_path(self):
        assert find_index_path(sample_tree(), 'components/inputs/text-field') == (2, 1, 0)
        assert find_index_path(sample_tree(), 'component/legacy') == (3, 0)
        assert find_index_path(sample_tree(), 'missing') is None

"""Unit tests for navigation.folder_state module."""

from src.navigation.folder_state import FolderOpenState


class TestFolderOpenState:
    """Test cases for FolderOpenState."""

    def test_starts_closed(self):
        state = FolderOpenState()

        assert state.is_open('components') is False
        assert state.is_visible('components') is True
        assert state.is_visible('components/button') is False

    def test_open_opens_ancestor_trail(self):
        state = FolderOpenState().open('components/inputs')

        assert state.open_paths == frozenset({'components', 'components/inputs'})
        assert state.is_visible('components/inputs/text-field') is True

    def test_opening_sibling_closes_other_folder_at_same_level(self):
        state = FolderOpenState().open('components').open('foundations')

        assert state.open_paths == frozenset({'foundations'})

    def test_nested_sibling_accordion_keeps_parent_open(self):
        state = FolderOpenState().open('components/inputs').open('components/overlays')

        assert state.open_paths == frozenset({'components', 'components/overlays'})

    def test_segment_boundaries_are_respected(self):
        """'component' and 'components' are distinct folders at the same level."""
        state = FolderOpenState().open('components/inputs').open('component')

        assert state.is_open('component') is True
        assert state.is_open('components') is False
        # A descendant left behind under a closed parent stays keyed by path
        assert state.is_visible('components/inputs/x') is False

    def test_close_and_toggle(self):
        state = FolderOpenState().open('components')

        assert state.close('components').is_open('components') is False
        assert state.toggle('components').is_open('components') is False
        assert FolderOpenState().toggle('components').is_open('components') is True

    def test_reveal_opens_page_trail(self):
        state = FolderOpenState().reveal('components/inputs/text-field')

        assert state.is_visible('components/inputs/text-field') is True

    def test_reveal_root_page_changes_nothing(self):
        state = FolderOpenState().open('components')

        assert state.reveal('intro') is state

    def test_from_paths(self):
        state = FolderOpenState.from_paths(['a', 'a/c'])

        assert state.open_paths == frozenset({'a', 'a/c'})

    def test_state_is_immutable_value(self):
        original = FolderOpenState()

        original.open('a')

        assert original.open_paths == frozenset()

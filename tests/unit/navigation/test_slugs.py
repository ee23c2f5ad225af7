"""Unit tests for navigation.slugs module."""

import pytest

from src.navigation.slugs import (
    SlugConverter,
    is_valid_path,
    is_valid_slug,
    name_to_slug,
    normalize_path,
    slug_to_label,
)


class TestNameToSlug:
    """Test cases for name_to_slug()."""

    @pytest.mark.parametrize('name,expected', [
        ('Bottom Sheets', 'bottom-sheets'),
        ('  Q&A  Session ', 'qa-session'),
        ('--Hello,  World!--', 'hello-world'),
        ('already-a-slug', 'already-a-slug'),
        ('Multiple   ---   hyphens', 'multiple-hyphens'),
        ('!!!', ''),
    ])
    def test_conversion(self, name, expected):
        assert name_to_slug(name) == expected

    def test_non_string_is_empty(self):
        assert SlugConverter.name_to_slug(None) == ''


class TestValidation:
    """Test cases for is_valid_slug() and is_valid_path()."""

    @pytest.mark.parametrize('slug', ['a', 'date-picker', 'h1', '2024-notes'])
    def test_valid_slugs(self, slug):
        assert is_valid_slug(slug) is True

    @pytest.mark.parametrize('slug', ['', 'Date', 'a--b', '-a', 'a-', 'a b', 'a/b'])
    def test_invalid_slugs(self, slug):
        assert is_valid_slug(slug) is False

    def test_paths(self):
        assert is_valid_path('components/date-picker') is True
        assert is_valid_path('components//date-picker') is False
        assert is_valid_path('') is False


class TestNormalizePath:
    """Test cases for normalize_path()."""

    def test_slugifies_every_segment(self):
        assert normalize_path(' Foundations / Color Tokens ') == 'foundations/color-tokens'

    def test_drops_empty_segments(self):
        assert normalize_path('/components//Chips/') == 'components/chips'


class TestSlugToLabel:
    """Test cases for slug_to_label()."""

    def test_title_cases_words(self):
        assert slug_to_label('bottom-sheets') == 'Bottom Sheets'
        assert slug_to_label('ui') == 'Ui'

"""Slug conversion and validation for content paths.

A slug is a URL-safe lowercase token of letters, digits and single hyphens.
A path is a slash-joined sequence of slugs.

Conversion rules for display names:
- Leading/trailing whitespace trimmed, lowercased
- Whitespace runs -> single hyphen
- Anything outside [a-z0-9-] removed
- Hyphen runs collapsed, leading/trailing hyphens trimmed

Examples:
    - "Bottom Sheets" -> "bottom-sheets"
    - "  Q&A  Session " -> "qa-session"
"""

import re

SLUG_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*$')


class SlugConverter:
    """Converts display names to slugs and slugs back to labels."""

    @staticmethod
    def name_to_slug(name: str) -> str:
        """Convert a display name to a URL-safe slug.

        Examples:
            >>> SlugConverter.name_to_slug("Bottom Sheets")
            'bottom-sheets'
            >>> SlugConverter.name_to_slug("--Hello,  World!--")
            'hello-world'
        """
        if not isinstance(name, str):
            return ''
        slug = name.strip().lower()
        slug = re.sub(r'\s+', '-', slug)
        slug = re.sub(r'[^a-z0-9-]', '', slug)
        slug = re.sub(r'-+', '-', slug)
        return slug.strip('-')

    @staticmethod
    def slug_to_label(slug: str) -> str:
        """Convert a slug to a sidebar label.

        Examples:
            >>> SlugConverter.slug_to_label("bottom-sheets")
            'Bottom Sheets'
        """
        return ' '.join(word[:1].upper() + word[1:] for word in slug.split('-'))


def name_to_slug(name: str) -> str:
    return SlugConverter.name_to_slug(name)


def slug_to_label(slug: str) -> str:
    return SlugConverter.slug_to_label(slug)


def is_valid_slug(slug: str) -> bool:
    """Non-empty, lowercase letters, digits and single inner hyphens only."""
    return isinstance(slug, str) and bool(SLUG_PATTERN.match(slug))


def is_valid_path(path: str) -> bool:
    """True if every slash-separated segment is a valid slug."""
    if not isinstance(path, str) or not path:
        return False
    return all(is_valid_slug(segment) for segment in path.split('/'))


def normalize_path(raw: str) -> str:
    """Slugify every segment of a user-typed path, dropping empty segments.

    Examples:
        >>> normalize_path(" Foundations / Color Tokens ")
        'foundations/color-tokens'
    """
    if not isinstance(raw, str):
        return ''
    segments = [name_to_slug(segment) for segment in raw.split('/')]
    return '/'.join(segment for segment in segments if segment)

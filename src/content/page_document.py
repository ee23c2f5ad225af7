"""YAML frontmatter parsing and generation for content pages.

A page file is a markdown body preceded by a YAML preamble between ---
delimiters:

    ---
    name: Colors
    description: Brand and semantic color tokens
    figmaLink: https://figma.com/file/...
    do: Use semantic tokens
    dont: Hardcode hex values
    ---
    # Colors
    ...

Keys the sidebar does not know about are kept and written back unchanged.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from src.navigation.paths import last_segment
from src.navigation.slugs import slug_to_label

from .errors import FrontmatterError

# Preamble keys in the order they are written
KNOWN_KEYS = ('name', 'description', 'figmaLink', 'do', 'dont', 'image')


@dataclass
class PageDocument:
    """Parsed content page.

    Attributes:
        name: Display name (preamble 'name', falling back to 'title')
        description: Short summary shown under the title
        figma_link: Link to the design source
        do: Recommended usage
        dont: Usage to avoid
        image: Optional preview image reference
        body: Markdown after the preamble
        extra: Preamble keys outside the known set, in file order
    """
    name: str
    description: str = ''
    figma_link: str = ''
    do: str = ''
    dont: str = ''
    image: Optional[str] = None
    body: str = ''
    extra: Dict[str, Any] = field(default_factory=dict)

    # Regex pattern to match YAML frontmatter (between --- delimiters)
    FRONTMATTER_PATTERN = re.compile(
        r'^---\s*\n(.*?)\n---\s*\n',
        re.DOTALL
    )

    # Maximum allowed depth for YAML structures to prevent DoS attacks
    MAX_YAML_DEPTH = 10

    @classmethod
    def _validate_yaml_depth(cls, obj, file_path: str, current_depth: int = 0) -> None:
        """Reject deeply nested YAML structures.

        Raises:
            FrontmatterError: If depth exceeds MAX_YAML_DEPTH
        """
        if current_depth > cls.MAX_YAML_DEPTH:
            raise FrontmatterError(
                file_path,
                f"YAML structure exceeds maximum depth of {cls.MAX_YAML_DEPTH}"
            )

        if isinstance(obj, dict):
            for value in obj.values():
                cls._validate_yaml_depth(value, file_path, current_depth + 1)
        elif isinstance(obj, list):
            for item in obj:
                cls._validate_yaml_depth(item, file_path, current_depth + 1)

    @classmethod
    def new(cls, path: str, display_name: Optional[str] = None) -> 'PageDocument':
        """Blank page for path, named display_name or the label of its slug."""
        name = (display_name or '').strip() or slug_to_label(last_segment(path))
        return cls(name=name, body='\n')

    @classmethod
    def parse(cls, path: str, text: str) -> 'PageDocument':
        """Parse a page file.

        Args:
            path: Content path of the page (for the fallback name and errors)
            text: Full file text

        Returns:
            PageDocument; a page without a preamble is named after its slug

        Raises:
            FrontmatterError: If the preamble is not a valid YAML dictionary
        """
        match = cls.FRONTMATTER_PATTERN.match(text)
        if not match:
            return cls(name=slug_to_label(last_segment(path)), body=text)

        try:
            frontmatter = yaml.safe_load(match.group(1))
        except yaml.YAMLError as e:
            raise FrontmatterError(path, f"Invalid YAML syntax: {str(e)}")

        if frontmatter is None:
            frontmatter = {}
        if not isinstance(frontmatter, dict):
            raise FrontmatterError(
                path,
                f"Frontmatter must be a YAML dictionary, got {type(frontmatter).__name__}"
            )
        cls._validate_yaml_depth(frontmatter, path)

        def text_of(key: str) -> str:
            value = frontmatter.get(key)
            return '' if value is None else str(value)

        name = text_of('name') or text_of('title') or slug_to_label(last_segment(path))
        image = frontmatter.get('image')
        extra = {
            key: value for key, value in frontmatter.items()
            if key not in KNOWN_KEYS and key != 'title'
        }

        return cls(
            name=name,
            description=text_of('description'),
            figma_link=text_of('figmaLink'),
            do=text_of('do'),
            dont=text_of('dont'),
            image=str(image) if image else None,
            body=text[match.end():],
            extra=extra,
        )

    def render(self) -> str:
        """Full file text: preamble then body."""
        frontmatter: Dict[str, Any] = {
            'name': self.name,
            'description': self.description,
            'figmaLink': self.figma_link,
            'do': self.do,
            'dont': self.dont,
        }
        if self.image:
            frontmatter['image'] = self.image
        frontmatter.update(self.extra)

        yaml_str = yaml.safe_dump(
            frontmatter,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )
        return f"---\n{yaml_str}---\n{self.body}"

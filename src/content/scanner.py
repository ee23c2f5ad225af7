"""Content scanner for discovering the page hierarchy in the content store.

This module walks the content root of the repository and builds the observed
navigation tree: every markdown file becomes a page and every directory a
folder. The scan is read-only and all-or-nothing; a failed listing anywhere
aborts the scan so callers never reconcile against a partial tree.
"""

import logging
from typing import List

from src.navigation.models import FolderNode, NavConfig, Node, PageNode, Tree
from src.store_client.api_wrapper import APIWrapper
from src.store_client.errors import NotFoundError
from src.store_client.models import DirEntry

logger = logging.getLogger(__name__)

PAGE_SUFFIX = '.md'


def _name_key(entry: DirEntry) -> str:
    return entry.name.casefold()


class ContentScanner:
    """Builds the observed tree from the content store.

    Baseline order within each directory is files first, then subdirectories,
    each alphabetical (case-insensitive), numbered 1..N. At the root, folders
    named in preferred_root_order come before everything else, in that order.
    The trash directory at the root is never part of the tree.

    Example:
        >>> scanner = ContentScanner(api, config)
        >>> tree = scanner.scan()
        >>> [node.path for node in tree]
        ['foundations', 'components', 'getting-started']
    """

    def __init__(self, api: APIWrapper, config: NavConfig):
        """Initialize the scanner.

        Args:
            api: Store client used for directory listings
            config: Content layout settings
        """
        self._api = api
        self._config = config

    def scan(self) -> Tree:
        """Scan the whole content root.

        Returns:
            Observed root-level nodes; an absent content root scans as empty

        Raises:
            UpstreamUnavailableError: If any listing fails to reach the store
            ContentStoreError: If any listing fails otherwise
        """
        root = self._config.content_root
        logger.info(f"Scanning content root '{root}'")
        try:
            entries = self._api.list_directory(root)
        except NotFoundError:
            logger.warning(f"Content root '{root}' does not exist, scanning as empty")
            return ()

        tree = self._build_level(entries, prefix='', depth=0)
        logger.debug(f"Scan found {len(tree)} root items")
        return tree

    def _build_level(self, entries: List[DirEntry], prefix: str, depth: int) -> Tree:
        files = sorted(
            (e for e in entries if e.is_file and self._is_page_file(e.name)),
            key=_name_key,
        )
        dirs = sorted(
            (e for e in entries if e.is_dir and not e.name.startswith('.')),
            key=_name_key,
        )
        if depth == 0:
            dirs = [e for e in dirs if e.name != self._config.trash_dir]
            preferred = [
                entry
                for name in self._config.preferred_root_order
                for entry in dirs
                if entry.name == name
            ]
            remaining_dirs = [e for e in dirs if e not in preferred]
            ordered = preferred + files + remaining_dirs
        else:
            ordered = files + dirs

        page_slugs = {e.name[:-len(PAGE_SUFFIX)] for e in files}
        for entry in dirs:
            if entry.name in page_slugs:
                logger.warning(
                    f"Page and folder share the path '{prefix}{entry.name}'; "
                    f"both are listed"
                )

        nodes: List[Node] = []
        for position, entry in enumerate(ordered, start=1):
            if entry.is_file:
                slug = entry.name[:-len(PAGE_SUFFIX)]
                nodes.append(PageNode(path=prefix + slug, order=position))
            else:
                folder_path = prefix + entry.name
                children_entries = self._api.list_directory(entry.path)
                children = self._build_level(children_entries, folder_path + '/', depth + 1)
                nodes.append(FolderNode(path=folder_path, order=position, children=children))
        return tuple(nodes)

    def _is_page_file(self, name: str) -> bool:
        if name == self._config.placeholder_file or name.startswith('.'):
            return False
        return name.endswith(PAGE_SUFFIX) and len(name) > len(PAGE_SUFFIX)

    def walk_files(self, directory: str) -> List[DirEntry]:
        """Every file under a repository directory, recursively.

        Raises:
            NotFoundError: If the directory does not exist
        """
        files: List[DirEntry] = []
        for entry in self._api.list_directory(directory):
            if entry.is_dir:
                files.extend(self.walk_files(entry.path))
            elif entry.is_file:
                files.append(entry)
        return files

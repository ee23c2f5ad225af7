"""Persistence of the navigation-order document.

The document lives at a fixed path in the content repository. Its blob sha is
the revision token: get() returns it alongside the structure and put() takes
it back so the store can reject a write based on an outdated read.
"""

import logging
from typing import Optional, Sequence

from src.navigation import codec
from src.navigation.errors import TreeCorruptError
from src.navigation.models import ConfiguredTree, NavConfig, Node
from src.store_client.api_wrapper import APIWrapper
from src.store_client.errors import NotFoundError

logger = logging.getLogger(__name__)


class OrderStore:
    """Reads and writes the navigation-order document."""

    def __init__(self, api: APIWrapper, config: NavConfig):
        self._api = api
        self._path = config.order_file

    @property
    def path(self) -> str:
        return self._path

    def get(self) -> ConfiguredTree:
        """Load the saved navigation order.

        Returns:
            The saved tree, or the missing tree when nothing was saved yet or
            the stored document is unreadable (its revision is kept so the
            next save can replace it)

        Raises:
            UpstreamUnavailableError: If the store cannot be reached
        """
        try:
            stored = self._api.get_file(self._path)
        except NotFoundError:
            logger.info(f"No navigation order saved at '{self._path}'")
            return ConfiguredTree.missing_tree()

        try:
            structure = codec.loads(stored.text)
        except (TreeCorruptError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable navigation order at '{self._path}': {e}")
            return ConfiguredTree.missing_tree(revision=stored.sha)

        return ConfiguredTree(structure=structure, revision=stored.sha)

    def put(self, structure: Sequence[Node], revision: Optional[str]) -> str:
        """Replace the saved navigation order.

        Args:
            structure: Root-level nodes to save
            revision: Revision returned by the last get() (None if missing)

        Returns:
            The new revision token

        Raises:
            StaleRevisionError: If revision is outdated
            ConflictError: If a document exists but no revision was given
            UpstreamUnavailableError: If the store cannot be reached
        """
        logger.info(f"Saving navigation order to '{self._path}'")
        return self._api.put_file(
            self._path,
            codec.dumps(structure),
            "Update sidebar navigation order",
            sha=revision,
        )

"""Operations on the sidebar and the content it lists.

This module provides NavigationService, the single surface the sidebar
renderer talks to. Reads return trees; every write returns an OperationResult
and never raises store errors to the caller.

Multi-step writes (rename, trash, restore) run their steps in sequence and
stop at the first failure, reporting the failed step. Steps are ordered so the
destination exists before the source is removed. There is no rollback: an
interrupted sequence can leave both copies in the store.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from src.navigation.display_order import sort_to_display_order
from src.navigation.editor import normalize_orders
from src.navigation.errors import EditError, FolderNotEmptyError, InvalidPathError, TreeCorruptError
from src.navigation.models import ConfiguredTree, NavConfig, Node, Tree
from src.navigation.paths import (
    ancestors,
    filter_to_existing,
    is_ancestor,
    join_path,
    last_segment,
    parent_path,
    rename_path,
    valid_paths,
)
from src.navigation.reconciler import reconcile
from src.navigation.slugs import is_valid_path, is_valid_slug, name_to_slug, normalize_path
from src.store_client.api_wrapper import APIWrapper
from src.store_client.errors import (
    ConflictError,
    InvalidCredentialsError,
    NavSyncError,
    NotFoundError,
    UpstreamUnavailableError,
)

from .errors import FrontmatterError
from .models import DisplayTreeResult, OperationResult, TrashItem
from .order_store import OrderStore
from .page_document import PageDocument
from .scanner import PAGE_SUFFIX, ContentScanner

logger = logging.getLogger(__name__)

# Most specific first
ERROR_KINDS: Tuple[Tuple[type, str], ...] = (
    (NotFoundError, 'not_found'),
    (ConflictError, 'conflict'),
    (InvalidPathError, 'invalid_path'),
    (UpstreamUnavailableError, 'upstream_unavailable'),
    (TreeCorruptError, 'tree_corrupt'),
    (InvalidCredentialsError, 'credentials'),
    (FolderNotEmptyError, 'folder_not_empty'),
    (EditError, 'edit'),
    (FrontmatterError, 'invalid_content'),
)


def error_kind_of(error: Exception) -> str:
    for error_type, kind in ERROR_KINDS:
        if isinstance(error, error_type):
            return kind
    return 'store'


class NavigationService:
    """Sidebar reads and content writes against one content repository.

    Usage:
        service = NavigationService(api, config)

        display = service.load_display_tree()
        edited = editor.toggle_pin(display.structure, (1, 0))
        result = service.save_configured_tree(edited)

        result = service.create_page("components/chips", "Chips")
    """

    def __init__(
        self,
        api: APIWrapper,
        config: NavConfig,
        scanner: Optional[ContentScanner] = None,
        order_store: Optional[OrderStore] = None,
    ):
        self._api = api
        self._config = config
        self._scanner = scanner or ContentScanner(api, config)
        self._order_store = order_store or OrderStore(api, config)
        self._last_display: Optional[DisplayTreeResult] = None

    # ------------------------------------------------------------------
    # Reads

    def fetch_configured_tree(self) -> ConfiguredTree:
        """Saved navigation order (the missing tree if none is usable)."""
        return self._order_store.get()

    def fetch_observed_tree(self) -> Tree:
        """Current content hierarchy. Scan failures propagate."""
        return self._scanner.scan()

    def load_display_tree(self) -> DisplayTreeResult:
        """Reconcile saved order with current content, ready for display.

        When the store cannot be read, the last good tree is served marked
        stale. With no previous tree the result carries only the error.
        """
        try:
            configured = self.fetch_configured_tree()
            observed = self.fetch_observed_tree()
        except NavSyncError as e:
            logger.warning(f"Could not refresh sidebar: {e}")
            if self._last_display is not None:
                return DisplayTreeResult(
                    structure=self._last_display.structure,
                    revision=self._last_display.revision,
                    stale=True,
                    error=str(e),
                    error_kind=error_kind_of(e),
                )
            return DisplayTreeResult(error=str(e), error_kind=error_kind_of(e))

        display = sort_to_display_order(self._merge(configured.structure, observed))
        self._last_display = DisplayTreeResult(structure=display, revision=configured.revision)
        return self._last_display

    @staticmethod
    def _merge(configured: Sequence[Node], observed: Tree) -> Tree:
        existing = filter_to_existing(configured, valid_paths(observed))
        return reconcile(observed, existing)

    # ------------------------------------------------------------------
    # Sidebar order

    def save_configured_tree(self, structure: Sequence[Node]) -> OperationResult:
        """Save an edited sidebar.

        The edit is reconciled against a fresh scan first, so content added or
        removed since the sidebar was loaded is accounted for. Orders are
        renumbered 1..N per sibling list. Nothing is written if the scan fails.
        """
        step = 'scan'
        try:
            observed = self.fetch_observed_tree()
            step = 'read_order'
            current = self.fetch_configured_tree()

            merged = self._merge(structure, observed)
            normalized = normalize_orders(sort_to_display_order(merged))

            step = 'write_order'
            revision = self._order_store.put(normalized, current.revision)
        except NavSyncError as e:
            return self._failure(e, failed_step=step)

        self._last_display = DisplayTreeResult(
            structure=sort_to_display_order(normalized),
            revision=revision,
        )
        logger.info(f"Saved sidebar order (revision {revision})")
        return OperationResult(
            success=True,
            message=f"Saved sidebar with {len(normalized)} root items",
            revision=revision,
        )

    def _patch_order_document(self, old_path: str, new_path: str) -> Optional[str]:
        """Rewrite one path prefix in the saved order. Returns the new revision."""
        configured = self.fetch_configured_tree()
        if configured.missing:
            logger.debug("No saved order to update")
            return configured.revision
        renamed = rename_path(configured.structure, old_path, new_path)
        if renamed == configured.structure:
            return configured.revision
        return self._order_store.put(renamed, configured.revision)

    # ------------------------------------------------------------------
    # Content paths

    def _page_file(self, path: str) -> str:
        return f"{self._config.content_root}/{path}{PAGE_SUFFIX}"

    def _folder_dir(self, path: str) -> str:
        return f"{self._config.content_root}/{path}"

    def _normalize_new_path(self, raw: str) -> str:
        """Slugify a user-entered path and check it names something creatable.

        Raises:
            InvalidPathError: If nothing valid remains or it points into the trash
        """
        path = normalize_path(raw)
        if not path or not is_valid_path(path):
            raise InvalidPathError(raw, "use only lowercase letters, numbers, and hyphens")
        self._check_not_trash(path)
        return path

    def _check_existing_path(self, path: str) -> str:
        """Check a path that must already name a page or folder.

        Unlike new paths, existing paths are not slugified: they must already
        be in slug form.

        Raises:
            InvalidPathError: If path is empty, not slug form, or inside the trash
        """
        path = path.strip('/')
        if not path:
            raise InvalidPathError(path, "path is required")
        if not is_valid_path(path):
            raise InvalidPathError(path, "use only lowercase letters, numbers, and hyphens")
        self._check_not_trash(path)
        return path

    def _check_not_trash(self, path: str) -> None:
        if path.split('/')[0] == self._config.trash_dir:
            raise InvalidPathError(path, "the trash folder is reserved")

    def _ensure_free(self, path: str) -> None:
        """Raise ConflictError if path, or any folder it would live in, is taken.

        A page already using path or a folder already using path conflicts.
        So does a page at any ancestor path: "intro/sub" cannot be created
        while "intro" is a page.
        """
        for ancestor in ancestors(path):
            if self._api.exists(self._page_file(ancestor)):
                raise ConflictError(path, f"A page already exists at {ancestor}")
        if self._api.exists(self._page_file(path)):
            raise ConflictError(path, f"A page already exists at {path}")
        if self._api.exists(self._folder_dir(path)):
            raise ConflictError(path, f"A folder already exists at {path}")

    def _sha_if_exists(self, repo_path: str) -> Optional[str]:
        try:
            return self._api.get_file(repo_path).sha
        except NotFoundError:
            return None

    def _failure(
        self,
        error: Exception,
        path: Optional[str] = None,
        failed_step: Optional[str] = None,
    ) -> OperationResult:
        kind = error_kind_of(error)
        if failed_step:
            logger.error(f"  Failed at step '{failed_step}' ({kind}): {error}")
        else:
            logger.error(f"  Failed ({kind}): {error}")
        return OperationResult(
            success=False,
            path=path,
            error=str(error),
            error_kind=kind,
            failed_step=failed_step,
        )

    # ------------------------------------------------------------------
    # Content writes

    def create_page(self, path: str, display_name: Optional[str] = None) -> OperationResult:
        """Create an empty page.

        Args:
            path: Page path; each segment is slugified ("Components/Date Picker"
                becomes "components/date-picker")
            display_name: Name written to the preamble (default: label of the slug)
        """
        logger.debug(f"Creating page: {path}")
        try:
            page_path = self._normalize_new_path(path)
            self._ensure_free(page_path)
            document = PageDocument.new(page_path, display_name)
            self._api.put_file(
                self._page_file(page_path),
                document.render(),
                f"Create page {page_path}",
            )
        except NavSyncError as e:
            return self._failure(e, path=path)

        logger.info(f"Created page {page_path}")
        return OperationResult(success=True, path=page_path, message=f"Created page {page_path}")

    def create_folder(self, path: str) -> OperationResult:
        """Create an empty folder by writing its placeholder file."""
        logger.debug(f"Creating folder: {path}")
        try:
            folder_path = self._normalize_new_path(path)
            self._ensure_free(folder_path)
            self._api.put_file(
                f"{self._folder_dir(folder_path)}/{self._config.placeholder_file}",
                '',
                f"Create folder {folder_path}",
            )
        except NavSyncError as e:
            return self._failure(e, path=path)

        logger.info(f"Created folder {folder_path}")
        return OperationResult(success=True, path=folder_path, message=f"Created folder {folder_path}")

    def rename_folder(self, old_path: str, new_path: str) -> OperationResult:
        """Move a folder and everything in it to a new path.

        Steps: copy every file to the destination, delete every source file,
        then rewrite the folder's paths in the saved sidebar order.
        """
        old_path = old_path.strip('/')
        logger.debug(f"Renaming folder: {old_path} -> {new_path}")
        step = 'validate'
        try:
            old_path = self._check_existing_path(old_path)
            destination = self._normalize_new_path(new_path)
            if destination == old_path or is_ancestor(old_path, destination):
                raise InvalidPathError(destination, "a folder cannot be moved into itself")

            source_dir = self._folder_dir(old_path)
            files = self._scanner.walk_files(source_dir)
            self._ensure_free(destination)

            step = 'copy'
            copied = []
            destination_dir = self._folder_dir(destination)
            for entry in files:
                stored = self._api.get_file(entry.path)
                target = destination_dir + entry.path[len(source_dir):]
                self._api.put_file(target, stored.data, f"Rename folder {old_path} to {destination}")
                copied.append(stored)
                logger.debug(f"  Copied {entry.path} -> {target}")

            step = 'delete'
            for stored in copied:
                self._api.delete_file(
                    stored.path,
                    stored.sha,
                    f"Rename folder {old_path} to {destination}",
                )

            step = 'update_order'
            revision = self._patch_order_document(old_path, destination)
        except NavSyncError as e:
            return self._failure(e, path=old_path, failed_step=step)

        logger.info(f"Renamed folder {old_path} to {destination} ({len(copied)} files)")
        return OperationResult(
            success=True,
            path=destination,
            message=f"Renamed folder {old_path} to {destination}",
            revision=revision,
        )

    def move_to_trash(self, path: str) -> OperationResult:
        """Move a page into the trash, or delete an empty folder.

        A folder that still holds pages or subfolders is rejected.
        """
        path = path.strip('/')
        logger.debug(f"Moving to trash: {path}")
        step = 'validate'
        try:
            path = self._check_existing_path(path)
            page_file = self._page_file(path)
            try:
                stored = self._api.get_file(page_file)
            except NotFoundError:
                stored = None

            if stored is None:
                step = 'delete_folder'
                message = self._delete_empty_folder(path)
                logger.info(message)
                return OperationResult(success=True, path=path, message=message)

            trash_file = f"{self._config.trash_root}/{path}{PAGE_SUFFIX}"
            step = 'copy'
            self._api.put_file(
                trash_file,
                stored.data,
                f"Move to trash: {page_file}",
                sha=self._sha_if_exists(trash_file),
            )
            step = 'delete'
            self._api.delete_file(page_file, stored.sha, f"Remove (moved to trash): {page_file}")
        except NavSyncError as e:
            return self._failure(e, path=path, failed_step=step)

        logger.info(f"Moved {page_file} to {trash_file}")
        return OperationResult(success=True, path=trash_file, message=f"Moved to {trash_file}")

    def _delete_empty_folder(self, path: str) -> str:
        folder_dir = self._folder_dir(path)
        entries = self._api.list_directory(folder_dir)
        placeholder = self._config.placeholder_file
        if any(entry.name != placeholder for entry in entries):
            raise FolderNotEmptyError(path)
        for entry in entries:
            self._api.delete_file(entry.path, entry.sha, f"Delete empty folder {path}")
        return f"Deleted empty folder {path}"

    def restore_from_trash(self, trash_path: str) -> OperationResult:
        """Move a trashed page back to where it came from.

        Args:
            trash_path: Repository path of the trashed file (see list_trash)
        """
        logger.debug(f"Restoring from trash: {trash_path}")
        step = 'validate'
        try:
            original = self._original_path(trash_path)
            if original is None:
                raise InvalidPathError(trash_path, "not a page in the trash")
            if not is_valid_path(original):
                raise InvalidPathError(trash_path, "trashed page has no valid original path")
            self._ensure_free(original)

            stored = self._api.get_file(trash_path)
            step = 'copy'
            self._api.put_file(
                self._page_file(original),
                stored.data,
                f"Restore from trash: {trash_path}",
            )
            step = 'delete'
            self._api.delete_file(trash_path, stored.sha, f"Remove from trash (restored): {trash_path}")
        except NavSyncError as e:
            return self._failure(e, path=trash_path, failed_step=step)

        logger.info(f"Restored {trash_path} to {original}")
        return OperationResult(success=True, path=original, message=f"Restored to {original}")

    def _original_path(self, trash_path: str) -> Optional[str]:
        prefix = self._config.trash_root + '/'
        if not trash_path.startswith(prefix) or not trash_path.endswith(PAGE_SUFFIX):
            return None
        original = trash_path[len(prefix):-len(PAGE_SUFFIX)]
        return original or None

    def list_trash(self) -> List[TrashItem]:
        """Every page in the trash. An absent trash directory is empty."""
        try:
            files = self._scanner.walk_files(self._config.trash_root)
        except NotFoundError:
            return []

        items = []
        for entry in files:
            original = self._original_path(entry.path)
            if original is not None:
                items.append(TrashItem(trash_path=entry.path, original_path=original))
        return sorted(items, key=lambda item: item.trash_path)

    def load_page(self, path: str) -> PageDocument:
        """Read and parse a page.

        Raises:
            InvalidPathError: If path is not a page path
            NotFoundError: If the page does not exist
            FrontmatterError: If its preamble is malformed
        """
        path = self._check_existing_path(path)
        stored = self._api.get_file(self._page_file(path))
        try:
            text = stored.text
        except UnicodeDecodeError:
            raise FrontmatterError(path, "page is not UTF-8 text")
        return PageDocument.parse(path, text)

    def save_page_content(
        self,
        path: str,
        full_text: str,
        display_name_for_rename: Optional[str] = None,
    ) -> OperationResult:
        """Write a page, optionally renaming it.

        When display_name_for_rename slugifies to something other than the
        page's current slug, the page moves to the new slug in the same folder
        and the saved sidebar order follows it. Otherwise the page is updated
        in place (created if it does not exist yet).
        """
        path = path.strip('/')
        logger.debug(f"Saving page: {path}")
        step = 'validate'
        try:
            path = self._check_existing_path(path)
            PageDocument.parse(path, full_text)

            new_slug = last_segment(path)
            if display_name_for_rename is not None and display_name_for_rename.strip():
                new_slug = name_to_slug(display_name_for_rename)

            page_file = self._page_file(path)
            if new_slug == last_segment(path):
                sha = self._sha_if_exists(page_file)
                if sha is None:
                    self._ensure_free(path)
                step = 'write'
                self._api.put_file(page_file, full_text, f"Update page {path}", sha=sha)
                logger.info(f"Saved page {path}")
                return OperationResult(success=True, path=path, message=f"Saved {path}")

            if not is_valid_slug(new_slug):
                raise InvalidPathError(
                    display_name_for_rename,
                    "use only letters, numbers, and spaces (spaces become hyphens)"
                )
            new_path = join_path(parent_path(path), new_slug)
            self._ensure_free(new_path)
            stored = self._api.get_file(page_file)

            step = 'create'
            self._api.put_file(self._page_file(new_path), full_text, f"Rename page {path} to {new_path}")
            step = 'delete'
            self._api.delete_file(page_file, stored.sha, f"Rename page {path} to {new_path}")
            step = 'update_order'
            revision = self._patch_order_document(path, new_path)
        except NavSyncError as e:
            return self._failure(e, path=path, failed_step=step)

        logger.info(f"Renamed page {path} to {new_path}")
        return OperationResult(
            success=True,
            path=new_path,
            message=f"Saved and renamed to {new_path}",
            revision=revision,
        )

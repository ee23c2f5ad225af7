"""Main CLI entry point for the docs-nav command.

This module provides the Typer application for viewing and editing the
documentation sidebar. Editing commands load the current sidebar, apply one
edit locally, and save the result; content commands create, rename and trash
pages and folders in the content repository.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

import typer

from src.cli.errors import ConfigNotFoundError, InitError
from src.cli.models import ExitCode, exit_code_for
from src.cli.output import OutputHandler
from src.cli.sidebar_view import render_sidebar, sidebar_lines
from src.content.models import OperationResult
from src.content.operations import NavigationService, error_kind_of
from src.navigation import editor
from src.navigation.config_loader import ConfigLoader
from src.navigation.errors import ConfigError, EditError, FilesystemError, NavigationError
from src.navigation.folder_state import FolderOpenState
from src.navigation.models import DividerNode, NavConfig, Tree
from src.navigation.paths import node_at
from src.store_client.api_wrapper import APIWrapper
from src.store_client.auth import Authenticator
from src.store_client.errors import NavSyncError

DEFAULT_CONFIG_PATH = ".docs-nav/config.yaml"

app = typer.Typer(
    name="docs-nav",
    help="""View and edit the documentation sidebar stored in a GitHub repository.

QUICK START:
  docs-nav init --owner <owner> --repo <repo>   # Write .docs-nav/config.yaml
  docs-nav show                                 # Show the sidebar
  docs-nav pin 1.0                              # Pin the first item of folder 1
  docs-nav move 3 0                             # Move root item 3 to the top""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
    no_args_is_help=True,
)

# Module logger
logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Global options shared by every command."""
    config_path: str = DEFAULT_CONFIG_PATH
    verbosity: int = 0
    no_color: bool = False
    logdir: Optional[str] = None


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Configure logging based on verbosity level.

    Configures only the 'src' namespace logger to avoid affecting third-party
    libraries. The root logger is left unchanged.

    Args:
        verbosity: Verbosity level (0=WARNING, 1=INFO, 2=DEBUG)
        logdir: Optional directory for log files (creates timestamped log file)
    """
    if verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:  # verbosity >= 2
        level = logging.DEBUG

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)

    log_format = "%(asctime)s [%(levelname)8s] %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(log_format, datefmt=date_format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    app_logger.addHandler(console_handler)

    if logdir:
        log_path = Path(logdir)
        log_path.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"docs-nav_{timestamp}.log"

        file_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        file_formatter = logging.Formatter(file_format, datefmt=date_format)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(file_formatter)
        app_logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file}")


def _load_config(config_path: str) -> NavConfig:
    """Load configuration, turning a missing file into ConfigNotFoundError."""
    if not Path(config_path).exists():
        raise ConfigNotFoundError(config_path)
    return ConfigLoader.load(config_path)


def _build_service(settings: Settings) -> NavigationService:
    """Wire the store client and navigation service from configuration.

    Raises:
        ConfigNotFoundError: If the config file does not exist
        ConfigError: If the config file is invalid
    """
    config = _load_config(settings.config_path)
    api = APIWrapper(
        Authenticator(),
        owner=config.owner,
        repo=config.repo,
        branch=config.branch,
        timeout=config.request_timeout,
        max_retries=config.max_retries,
    )
    return NavigationService(api, config)


def _context(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else Settings()


def _open_service(settings: Settings, output: OutputHandler) -> NavigationService:
    try:
        return _build_service(settings)
    except ConfigNotFoundError as e:
        output.error(str(e))
        output.print("Run 'docs-nav init --owner <owner> --repo <repo>' first.")
        raise typer.Exit(ExitCode.GENERAL_ERROR)
    except (ConfigError, FilesystemError) as e:
        output.error(str(e))
        raise typer.Exit(ExitCode.GENERAL_ERROR)


def _finish(output: OutputHandler, result: OperationResult) -> None:
    output.print_result(result)
    raise typer.Exit(ExitCode.SUCCESS if result.success else exit_code_for(result.error_kind))


def _load_display(service: NavigationService, output: OutputHandler, allow_stale: bool) -> Tree:
    with output.spinner("Loading sidebar..."):
        display = service.load_display_tree()

    if display.error and not display.stale:
        output.error(f"Could not load sidebar: {display.error}")
        raise typer.Exit(exit_code_for(display.error_kind))
    if display.stale:
        if not allow_stale:
            output.error(f"Sidebar is out of date and cannot be edited: {display.error}")
            raise typer.Exit(exit_code_for(display.error_kind))
        output.warning(f"Showing the last loaded sidebar: {display.error}")
    return display.structure


def _edit(ctx: typer.Context, description: str, mutate: Callable[[Tree], Tree]) -> None:
    """Apply one sidebar edit to the current Display Tree and save it."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)
    structure = _load_display(service, output, allow_stale=False)

    try:
        edited = mutate(structure)
    except NavSyncError as e:
        output.error(str(e))
        raise typer.Exit(exit_code_for(error_kind_of(e)))

    output.info(description)
    with output.spinner("Saving sidebar..."):
        result = service.save_configured_tree(edited)
    _finish(output, result)


def _parse_position(position: str) -> tuple:
    try:
        return editor.index_path_of(position)
    except NavigationError as e:
        raise typer.BadParameter(str(e))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo("docs-nav version 0.1.0")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_path: str = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Path to the configuration file",
        metavar="FILE",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """View and edit the documentation sidebar."""
    ctx.obj = Settings(
        config_path=config_path,
        verbosity=verbosity,
        no_color=no_color,
        logdir=logdir,
    )
    _configure_logging(verbosity, logdir)


@app.command()
def init(
    ctx: typer.Context,
    owner: Optional[str] = typer.Option(None, "--owner", help="Repository owner (or GITHUB_OWNER)"),
    repo: Optional[str] = typer.Option(None, "--repo", help="Repository name (or GITHUB_REPO)"),
    branch: str = typer.Option("main", "--branch", help="Branch holding the content"),
    content_root: str = typer.Option("content", "--content-root", help="Directory holding the pages"),
    order_file: str = typer.Option("sidebar-config.json", "--order-file", help="Path of the sidebar order document"),
    preferred: Optional[List[str]] = typer.Option(
        None,
        "--preferred",
        help="Root folder listed first on a fresh sidebar (can be used multiple times)",
        metavar="FOLDER",
    ),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing configuration"),
) -> None:
    """Write the configuration file."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)

    try:
        if Path(settings.config_path).exists() and not force:
            raise InitError(
                f"Configuration already exists at {settings.config_path} (use --force to overwrite)"
            )

        raw = {
            'repository': {'branch': branch},
            'content_root': content_root,
            'order_file': order_file,
            'preferred_root_order': list(preferred or []),
        }
        if owner:
            raw['repository']['owner'] = owner
        if repo:
            raw['repository']['repo'] = repo

        config = ConfigLoader.parse(raw)
        ConfigLoader.save(settings.config_path, config)

    except (InitError, ConfigError, FilesystemError) as e:
        logger.error(f"Initialization failed: {e}")
        output.error(f"Initialization failed: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    output.success(f"Configuration written to {settings.config_path}")
    output.info(f"  Repository: {config.owner}/{config.repo}@{config.branch}")
    output.info(f"  Content root: {config.content_root}")
    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def show(
    ctx: typer.Context,
    open_paths: Optional[List[str]] = typer.Option(
        None,
        "--open",
        "-o",
        help="Folder path to expand (can be used multiple times)",
        metavar="PATH",
    ),
    expand_all: bool = typer.Option(False, "--all", "-a", help="Expand every folder"),
    plain: bool = typer.Option(False, "--plain", help="Print plain indented text"),
) -> None:
    """Show the sidebar with item positions."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)
    structure = _load_display(service, output, allow_stale=True)

    open_state = None if expand_all else FolderOpenState.from_paths(open_paths or [])

    if not structure:
        output.warning("The sidebar is empty")
    elif plain:
        for line in sidebar_lines(structure, open_state):
            output.print(line)
    else:
        output.render(render_sidebar(structure, open_state))
    raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def save(ctx: typer.Context) -> None:
    """Save the current sidebar, picking up new content and renumbering orders."""
    _edit(ctx, "Saving sidebar as displayed", lambda structure: structure)


@app.command()
def pin(
    ctx: typer.Context,
    position: str = typer.Argument(..., help="Item position as shown by 'show' (e.g. 2.0)"),
) -> None:
    """Pin a page or folder above its unpinned siblings."""
    index_path = _parse_position(position)

    def mutate(structure: Tree) -> Tree:
        node = node_at(structure, index_path)
        if node is not None and getattr(node, 'pinned', False):
            raise EditError(f"Item {position} is already pinned", index_path)
        return editor.toggle_pin(structure, index_path)

    _edit(ctx, f"Pinning item {position}", mutate)


@app.command()
def unpin(
    ctx: typer.Context,
    position: str = typer.Argument(..., help="Item position as shown by 'show' (e.g. 2.0)"),
) -> None:
    """Unpin a page or folder."""
    index_path = _parse_position(position)

    def mutate(structure: Tree) -> Tree:
        node = node_at(structure, index_path)
        if node is not None and not getattr(node, 'pinned', True):
            raise EditError(f"Item {position} is not pinned", index_path)
        return editor.toggle_pin(structure, index_path)

    _edit(ctx, f"Unpinning item {position}", mutate)


@app.command()
def move(
    ctx: typer.Context,
    position: str = typer.Argument(..., help="Item position as shown by 'show'"),
    slot: int = typer.Argument(..., help="Slot in the same list to drop the item into (0 = first)"),
) -> None:
    """Reorder an item within its own list."""
    index_path = _parse_position(position)
    _edit(
        ctx,
        f"Moving item {position} to slot {slot}",
        lambda structure: editor.move_item(structure, index_path, slot),
    )


@app.command("add-divider")
def add_divider(
    ctx: typer.Context,
    parent: Optional[str] = typer.Option(
        None,
        "--parent",
        help="Folder position to add the divider to (default: root)",
        metavar="POSITION",
    ),
) -> None:
    """Append a divider to the root or to a folder."""
    parent_path = _parse_position(parent) if parent else ()
    _edit(
        ctx,
        "Adding divider",
        lambda structure: editor.insert_divider(structure, parent_path),
    )


@app.command()
def remove(
    ctx: typer.Context,
    position: str = typer.Argument(..., help="Divider position as shown by 'show'"),
) -> None:
    """Remove a divider from the sidebar.

    Pages and folders are listed for as long as they exist in the content;
    use 'trash' to remove a page or an empty folder.
    """
    index_path = _parse_position(position)

    def mutate(structure: Tree) -> Tree:
        node = node_at(structure, index_path)
        if node is not None and not isinstance(node, DividerNode):
            raise EditError(
                f"Item {position} is not a divider; use 'trash {node.path}' to remove it",
                index_path,
            )
        return editor.remove_item(structure, index_path)

    _edit(ctx, f"Removing divider {position}", mutate)


@app.command("create-page")
def create_page(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Page path, e.g. 'components/date picker'"),
    name: Optional[str] = typer.Option(None, "--name", help="Display name (default: from the slug)"),
) -> None:
    """Create a new page."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)
    with output.spinner("Creating page..."):
        result = service.create_page(path, name)
    _finish(output, result)


@app.command("create-folder")
def create_folder(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Folder path, e.g. 'components/inputs'"),
) -> None:
    """Create a new empty folder."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)
    with output.spinner("Creating folder..."):
        result = service.create_folder(path)
    _finish(output, result)


@app.command("rename-folder")
def rename_folder(
    ctx: typer.Context,
    old_path: str = typer.Argument(..., help="Current folder path"),
    new_path: str = typer.Argument(..., help="New folder path"),
) -> None:
    """Move a folder and everything in it to a new path."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)
    with output.spinner("Renaming folder..."):
        result = service.rename_folder(old_path, new_path)
    _finish(output, result)


@app.command("rename-page")
def rename_page(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Current page path"),
    name: str = typer.Argument(..., help="New display name; the file is renamed to match"),
) -> None:
    """Rename a page's display name and file."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)

    try:
        document = service.load_page(path)
    except NavSyncError as e:
        output.error(f"Could not read page {path}: {e}")
        raise typer.Exit(exit_code_for(error_kind_of(e)))

    document.name = name
    with output.spinner("Saving page..."):
        result = service.save_page_content(path, document.render(), name)
    _finish(output, result)


@app.command()
def trash(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Page path, or an empty folder's path"),
) -> None:
    """Move a page to the trash, or delete an empty folder."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)
    with output.spinner("Moving to trash..."):
        result = service.move_to_trash(path)
    _finish(output, result)


@app.command()
def restore(
    ctx: typer.Context,
    trash_path: str = typer.Argument(..., help="Trashed file as shown by 'trash-list'"),
) -> None:
    """Restore a page from the trash."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)
    with output.spinner("Restoring..."):
        result = service.restore_from_trash(trash_path)
    _finish(output, result)


@app.command("trash-list")
def trash_list(ctx: typer.Context) -> None:
    """List the pages in the trash."""
    settings = _context(ctx)
    output = OutputHandler(verbosity=settings.verbosity, no_color=settings.no_color)
    service = _open_service(settings, output)

    try:
        items = service.list_trash()
    except NavSyncError as e:
        output.error(f"Could not list trash: {e}")
        raise typer.Exit(exit_code_for(error_kind_of(e)))

    if not items:
        output.print("Trash is empty")
    for item in items:
        output.print(f"{item.trash_path}  ->  {item.original_path}")
    raise typer.Exit(ExitCode.SUCCESS)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()

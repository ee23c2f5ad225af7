"""Result types returned by the content operation surface."""

from dataclasses import dataclass, field
from typing import Optional

from src.navigation.models import Tree


@dataclass
class OperationResult:
    """Outcome of one store-changing operation.

    Failures never raise out of NavigationService; they come back here.

    Attributes:
        success: Whether every step completed
        path: Content path the operation ended on (the new path after a rename)
        message: Human-readable summary on success
        error: Error message on failure
        error_kind: Failure category (not_found, conflict, invalid_path,
            upstream_unavailable, tree_corrupt, credentials, edit, store)
        failed_step: Name of the step that failed in a multi-step operation
        revision: New revision of the order document when it was written
    """
    success: bool
    path: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None
    error_kind: Optional[str] = None
    failed_step: Optional[str] = None
    revision: Optional[str] = None


@dataclass(frozen=True)
class TrashItem:
    """A page waiting in the trash.

    Attributes:
        trash_path: Repository path of the trashed file
        original_path: Content path the page is restored to
    """
    trash_path: str
    original_path: str


@dataclass
class DisplayTreeResult:
    """Display Tree handed to the renderer.

    Attributes:
        structure: Reconciled tree in display order
        revision: Order-document revision the tree was built from
        stale: True when the scan failed and a previous tree is being served
        error: Scan failure message when stale or when no tree is available
        error_kind: Failure category, as in OperationResult
    """
    structure: Tree = field(default_factory=tuple)
    revision: Optional[str] = None
    stale: bool = False
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @property
    def available(self) -> bool:
        return self.error is None or self.stale

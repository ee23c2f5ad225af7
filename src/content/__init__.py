"""Store-facing sidebar components for docs-nav-sync.

This package connects the navigation model to the content repository: the
scanner that observes pages and folders, the store for the saved sidebar
order, the page document format, and the NavigationService operations.
"""

from .errors import ContentError, FrontmatterError
from .models import DisplayTreeResult, OperationResult, TrashItem
from .order_store import OrderStore
from .page_document import PageDocument
from .scanner import ContentScanner
from .operations import NavigationService

__all__ = [
    'ContentError',
    'FrontmatterError',
    'DisplayTreeResult',
    'OperationResult',
    'TrashItem',
    'OrderStore',
    'PageDocument',
    'ContentScanner',
    'NavigationService',
]

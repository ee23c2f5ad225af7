"""Command-line interface for the documentation sidebar.

This package provides the `docs-nav` CLI tool: it renders the reconciled
sidebar, applies sidebar edits (pin, move, dividers) and saves them, and
drives the page and folder operations against the content repository.
"""

from .models import ExitCode, exit_code_for
from .errors import (
    CLIError,
    ConfigNotFoundError,
    InitError,
)

__all__ = [
    'ExitCode',
    'exit_code_for',
    'CLIError',
    'ConfigNotFoundError',
    'InitError',
]

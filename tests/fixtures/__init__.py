"""Test fixtures for GitHub integration tests.

This module provides test fixtures for:
- GitHub credentials and the scratch repository (from .env.test)
"""

from .github_credentials import get_test_credentials

__all__ = [
    "get_test_credentials",
]

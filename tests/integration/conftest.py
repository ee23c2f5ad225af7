"""Pytest configuration and fixtures for integration tests.

Provides an APIWrapper and a NavigationService bound to a fresh content root
in the scratch repository named by .env.test.
"""

import uuid
from typing import Dict, Generator

import pytest

from src.content.operations import NavigationService
from src.navigation.models import NavConfig
from src.store_client.api_wrapper import APIWrapper
from src.store_client.auth import Authenticator
from src.store_client.errors import NotFoundError
from tests.fixtures.github_credentials import get_test_credentials


@pytest.fixture(scope="session")
def test_credentials() -> Dict[str, str]:
    """Load test GitHub credentials, skipping the suite when none are configured."""
    try:
        return get_test_credentials()
    except (FileNotFoundError, ValueError) as e:
        pytest.skip(f"GitHub integration tests disabled: {e}")


@pytest.fixture(scope="session")
def api_wrapper(test_credentials: Dict[str, str]) -> APIWrapper:
    """Authenticated API wrapper for the scratch repository.

    The token comes from the environment loaded by get_test_credentials().
    """
    return APIWrapper(
        Authenticator(),
        owner=test_credentials['test_owner'],
        repo=test_credentials['test_repo'],
        branch=test_credentials['test_branch'],
    )


@pytest.fixture
def nav_config(test_credentials: Dict[str, str]) -> NavConfig:
    """Configuration rooted in a unique directory for this test."""
    root = f"docs-nav-test-{uuid.uuid4().hex[:8]}"
    return NavConfig(
        owner=test_credentials['test_owner'],
        repo=test_credentials['test_repo'],
        branch=test_credentials['test_branch'],
        content_root=f"{root}/content",
        order_file=f"{root}/sidebar-config.json",
    )


def _delete_tree(api: APIWrapper, directory: str) -> None:
    try:
        entries = api.list_directory(directory)
    except NotFoundError:
        return
    for entry in entries:
        if entry.is_dir:
            _delete_tree(api, entry.path)
        else:
            api.delete_file(entry.path, entry.sha, "Clean up integration test")


@pytest.fixture
def nav_service(api_wrapper: APIWrapper, nav_config: NavConfig) -> Generator[NavigationService, None, None]:
    """NavigationService over the test's content root; removes everything afterwards."""
    yield NavigationService(api_wrapper, nav_config)
    _delete_tree(api_wrapper, nav_config.order_file.rpartition('/')[0])

"""Authentication module for loading GitHub credentials.

This module handles loading the GitHub API token from environment variables
using python-dotenv. It validates that the token is present and raises an
appropriate error if it is missing.
"""

import os
from typing import NamedTuple

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

DEFAULT_API_URL = "https://api.github.com"


class Credentials(NamedTuple):
    """GitHub API credentials."""
    api_url: str
    token: str


class Authenticator:
    """Loads and validates GitHub credentials from environment variables.

    Credentials are loaded from a .env file using python-dotenv and are never
    cached or logged.

    Environment variables:
        GITHUB_TOKEN: Personal access or installation token (required)
        GITHUB_API_URL: API base URL (optional, defaults to https://api.github.com)

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.api_url}")
    """

    def __init__(self):
        """Initialize the authenticator by loading environment variables from .env file."""
        load_dotenv()

    def get_credentials(self) -> Credentials:
        """Get GitHub credentials from environment variables.

        Returns:
            Credentials: A named tuple containing api_url and token

        Raises:
            InvalidCredentialsError: If GITHUB_TOKEN is missing
        """
        api_url = (os.getenv('GITHUB_API_URL') or DEFAULT_API_URL).rstrip('/')
        token = os.getenv('GITHUB_TOKEN')

        if not token:
            raise InvalidCredentialsError(
                endpoint=api_url,
                reason="GITHUB_TOKEN is not set"
            )

        return Credentials(api_url=api_url, token=token)

"""API wrapper for the GitHub repository contents API.

This module wraps a requests Session and provides error translation from
HTTP failures to our typed exception hierarchy. It integrates with the retry
logic for handling rate limits.
"""

import base64
import logging
import re
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import requests
from requests.exceptions import Timeout, ConnectTimeout, ReadTimeout, ConnectionError, HTTPError

from .auth import Authenticator
from .errors import (
    ConflictError,
    ContentStoreError,
    InvalidCredentialsError,
    NotFoundError,
    RateLimitedError,
    StaleRevisionError,
    UpstreamUnavailableError,
)
from .models import DirEntry, StoreFile
from .retry_logic import DEFAULT_MAX_RETRIES, retry_on_rate_limit

logger = logging.getLogger(__name__)


class APIWrapper:
    """Wrapper around the GitHub contents API with error translation.

    This class provides a thin wrapper over the REST endpoints that:
    1. Handles authentication using the Authenticator
    2. Translates HTTP errors to typed exceptions
    3. Integrates retry logic for rate limits
    4. Exposes the store as blobs keyed by path (get, list, put, delete)

    Example:
        >>> auth = Authenticator()
        >>> api = APIWrapper(auth, owner="acme", repo="design-docs")
        >>> page = api.get_file("content/foundations/colors.md")
    """

    def __init__(
        self,
        authenticator: Authenticator,
        owner: str,
        repo: str,
        branch: str = "main",
        timeout: int = 30,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator instance for loading credentials
            owner: Repository owner (user or organization)
            repo: Repository name
            branch: Branch that holds the content
            timeout: Per-request timeout in seconds
            max_retries: Rate-limit retries per request
        """
        self._authenticator = authenticator
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self._timeout = timeout
        self._max_retries = max_retries
        self._session: Optional[requests.Session] = None
        self._api_url: Optional[str] = None

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session.

        The session is created lazily on first use so that constructing the
        wrapper never touches credentials.

        Raises:
            InvalidCredentialsError: If credentials are missing
        """
        if self._session is None:
            creds = self._authenticator.get_credentials()
            session = requests.Session()
            session.headers.update({
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {creds.token}",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "docs-nav-sync",
            })
            self._session = session
            self._api_url = creds.api_url
        return self._session

    def _contents_url(self, path: str) -> str:
        return (
            f"{self._api_url}/repos/{self.owner}/{self.repo}"
            f"/contents/{quote(path)}"
        )

    def _validate_path(self, path: str) -> None:
        """Validate that a repository path is well formed.

        Rejects absolute paths, empty segments and parent references so a
        caller can never address anything outside the repository tree.

        Raises:
            ValueError: If path is malformed
        """
        if not path or not path.strip():
            raise ValueError("path cannot be empty")
        if path.startswith('/') or path.endswith('/'):
            raise ValueError(f"Invalid path '{path}': leading or trailing '/'")
        segments = path.split('/')
        if any(seg in ('', '.', '..') for seg in segments):
            raise ValueError(f"Invalid path '{path}': empty or relative segment")

    def _sanitize_credentials(self, text: str) -> str:
        """Mask tokens in error messages before they are logged.

        Example:
            >>> api._sanitize_credentials("Authorization: Bearer ghp_abc123")
            'Authorization: ***REDACTED***'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'://([\w.-]+):([\w.-]+)@',
            r'://***:***@',
            text
        )
        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        # GitHub token prefixes: ghp_, gho_, ghu_, ghs_, ghr_, github_pat_
        sanitized = re.sub(
            r'\b(gh[pousr]_|github_pat_)[A-Za-z0-9_]{8,}\b',
            '***REDACTED***',
            sanitized
        )
        sanitized = re.sub(
            r'(token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        return sanitized

    def _translate_error(
        self,
        exception: Exception,
        operation: str,
        path: str
    ) -> Exception:
        """Translate HTTP exceptions to typed store exceptions.

        Args:
            exception: The original exception from requests
            operation: Description of the operation that failed (for logging)
            path: Repository path the operation targeted

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        endpoint = self._api_url or "unknown"

        if isinstance(exception, (Timeout, ConnectTimeout, ReadTimeout, ConnectionError)):
            return UpstreamUnavailableError(endpoint, "connection failed or timed out")

        status_code = None
        response = getattr(exception, 'response', None)
        if response is not None:
            status_code = getattr(response, 'status_code', None)

        if status_code == 401:
            return InvalidCredentialsError(endpoint)
        if status_code == 403:
            return InvalidCredentialsError(endpoint, "access forbidden")
        if status_code == 404:
            return NotFoundError(path)
        if status_code == 409:
            return StaleRevisionError(path)
        if status_code == 422:
            return ConflictError(path, f"Store rejected {operation} for {path}")
        if status_code is not None and status_code >= 500:
            return UpstreamUnavailableError(endpoint, f"HTTP {status_code}")

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return ContentStoreError(f"Content store failure during {operation}")

    @staticmethod
    def _is_rate_limited(response: requests.Response) -> bool:
        if response.status_code == 429:
            return True
        if response.status_code == 403:
            return response.headers.get('X-RateLimit-Remaining') == '0'
        return False

    @staticmethod
    def _parse_retry_after(value: Optional[str]) -> Optional[float]:
        """Seconds from a Retry-After header, or None.

        Only the delta-seconds form is read. HTTP dates and anything else
        malformed are ignored; the retry backoff does not depend on it.
        """
        if not value:
            return None
        try:
            return float(value)
        except ValueError:
            logger.debug(f"Ignoring non-numeric Retry-After header: {value!r}")
            return None

    def _json(self, response: requests.Response, operation: str) -> Any:
        """Decode a response body, treating a non-JSON body as a store failure."""
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"API operation failed: {operation} - response body is not JSON")
            raise ContentStoreError(
                f"Content store returned an unreadable response during {operation}"
            ) from e

    def _request(
        self,
        method: str,
        path: str,
        operation: str,
        **kwargs
    ) -> requests.Response:
        """Send one request with rate-limit retries and error translation."""
        self._validate_path(path)
        session = self._get_session()
        url = self._contents_url(path)

        def _send() -> requests.Response:
            try:
                response = session.request(method, url, timeout=self._timeout, **kwargs)
            except (Timeout, ConnectionError) as e:
                raise self._translate_error(e, operation, path) from e

            if self._is_rate_limited(response):
                raise RateLimitedError(
                    url,
                    self._parse_retry_after(response.headers.get('Retry-After'))
                )

            try:
                response.raise_for_status()
            except HTTPError as e:
                raise self._translate_error(e, operation, path) from e
            return response

        return retry_on_rate_limit(_send, max_retries=self._max_retries)

    def get_file(self, path: str) -> StoreFile:
        """Fetch a file by path.

        Args:
            path: Repository-relative file path

        Returns:
            StoreFile with decoded bytes and blob sha

        Raises:
            NotFoundError: If nothing exists at path
            ContentStoreError: If path is a directory or the file is too large
            UpstreamUnavailableError: If the store is unreachable
        """
        logger.debug(f"GitHub API: GET contents/{path}")
        response = self._request(
            "GET", path, f"get_file({path})",
            params={"ref": self.branch}
        )
        payload = self._json(response, f"get_file({path})")

        if not isinstance(payload, dict) or payload.get('type') != 'file':
            raise ContentStoreError(f"Path is not a file: {path}")
        if payload.get('encoding') != 'base64':
            raise ContentStoreError(f"File content missing or too large: {path}")
        if not payload.get('sha'):
            raise ContentStoreError(f"File has no revision sha: {path}")

        try:
            data = base64.b64decode(payload.get('content', ''))
        except (ValueError, TypeError) as e:
            raise ContentStoreError(f"File content is not valid base64: {path}") from e
        return StoreFile(path=path, data=data, sha=payload['sha'])

    def list_directory(self, path: str) -> List[DirEntry]:
        """List the direct entries of a directory.

        Raises:
            NotFoundError: If the directory does not exist
            ContentStoreError: If path is a file
            UpstreamUnavailableError: If the store is unreachable
        """
        logger.debug(f"GitHub API: GET contents/{path} (listing)")
        response = self._request(
            "GET", path, f"list_directory({path})",
            params={"ref": self.branch}
        )
        payload = self._json(response, f"list_directory({path})")

        if not isinstance(payload, list):
            raise ContentStoreError(f"Path is not a directory: {path}")

        entries = []
        for item in payload:
            if not isinstance(item, dict):
                raise ContentStoreError(f"Malformed directory listing: {path}")
            name = item.get('name', '')
            entries.append(DirEntry(
                name=name,
                path=item.get('path') or f"{path}/{name}",
                sha=item.get('sha', ''),
                type=item.get('type', 'file'),
            ))
        return entries

    def exists(self, path: str) -> bool:
        """Return True if a file or directory exists at path."""
        try:
            self._request(
                "GET", path, f"exists({path})",
                params={"ref": self.branch}
            )
        except NotFoundError:
            return False
        return True

    def put_file(
        self,
        path: str,
        content: Union[str, bytes],
        message: str,
        sha: Optional[str] = None,
    ) -> str:
        """Create or replace a file.

        Args:
            path: Repository-relative file path
            content: New file content
            message: Commit message
            sha: Current blob sha when replacing; None when creating

        Returns:
            The new blob sha (the document's next revision token)

        Raises:
            StaleRevisionError: If sha no longer matches the stored blob
            ConflictError: If the file exists and no sha was supplied
            UpstreamUnavailableError: If the store is unreachable
        """
        data = content.encode('utf-8') if isinstance(content, str) else content
        body: Dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(data).decode('ascii'),
            "branch": self.branch,
        }
        if sha:
            body["sha"] = sha

        logger.debug(f"GitHub API: PUT contents/{path} (sha={sha})")
        response = self._request("PUT", path, f"put_file({path})", json=body)
        payload = self._json(response, f"put_file({path})")
        content = payload.get('content') if isinstance(payload, dict) else None
        if not isinstance(content, dict) or not content.get('sha'):
            raise ContentStoreError(f"Store did not return a revision for {path}")
        return content['sha']

    def delete_file(self, path: str, sha: str, message: str) -> None:
        """Delete a file.

        Raises:
            NotFoundError: If the file does not exist
            StaleRevisionError: If sha no longer matches the stored blob
            UpstreamUnavailableError: If the store is unreachable
        """
        logger.debug(f"GitHub API: DELETE contents/{path} (sha={sha})")
        self._request(
            "DELETE", path, f"delete_file({path})",
            json={"message": message, "sha": sha, "branch": self.branch}
        )

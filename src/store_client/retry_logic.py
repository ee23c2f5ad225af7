"""Retry logic with exponential backoff for content store rate limits.

This module provides retry functionality specifically for handling rate limit
responses from the GitHub API. It implements bounded exponential backoff
(1s, 2s, 4s by default) and fails fast for non-rate-limit errors.
"""

import time
import logging
from typing import Callable, TypeVar

from .errors import RateLimitedError, UpstreamUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar('T')

DEFAULT_MAX_RETRIES = 3


def retry_on_rate_limit(
    func: Callable[..., T],
    *args,
    max_retries: int = DEFAULT_MAX_RETRIES,
    **kwargs
) -> T:
    """Retry function on rate limit with exponential backoff.

    Executes the given function with the provided arguments, retrying up to
    max_retries times with exponential backoff (1s, 2s, 4s, ...) when a rate
    limit error is encountered. Fails fast for all other errors.

    Args:
        func: The function to execute with retry logic
        *args: Positional arguments to pass to the function
        max_retries: Number of retries after the first attempt
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        UpstreamUnavailableError: If rate limit persists after all retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> result = retry_on_rate_limit(api.get_file, "content/intro.md")
    """
    for retry_num in range(max_retries + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= max_retries:
                logger.error(
                    f"Rate limit persisted after {max_retries} retries, giving up"
                )
                endpoint = getattr(e, 'endpoint', 'unknown')
                raise UpstreamUnavailableError(
                    endpoint,
                    f"rate limited after {max_retries} retries"
                ) from e

            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{max_retries})"
            )
            time.sleep(wait_time)

    # Unreachable: the loop either returns or raises
    raise UpstreamUnavailableError('unknown', 'rate limited')


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit error.

    Args:
        exception: The exception to check

    Returns:
        True if this appears to be a rate limit error, False otherwise
    """
    if isinstance(exception, RateLimitedError):
        return True

    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    error_msg = str(exception).lower()
    rate_limit_patterns = [
        'too many requests',
        'rate limit exceeded',
        'rate limit hit',
        'api rate limit',
    ]
    return any(pattern in error_msg for pattern in rate_limit_patterns)

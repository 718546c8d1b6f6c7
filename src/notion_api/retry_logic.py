"""Retry logic with exponential backoff for Notion API rate limits.

Notion answers 429 (code `rate_limited`) when an integration exceeds its
request budget. Calls are retried with exponential backoff (1s, 2s, 4s);
every other error fails fast.
"""

import logging
import time
from typing import Callable, TypeVar

from .errors import APIAccessError

logger = logging.getLogger(__name__)

T = TypeVar('T')

MAX_RETRIES = 3


def retry_on_rate_limit(func: Callable[..., T], *args, **kwargs) -> T:
    """Retry function on 429 rate limit with exponential backoff.

    Args:
        func: The function to execute with retry logic
        *args: Positional arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function

    Returns:
        The return value of the function

    Raises:
        APIAccessError: If rate limit persists after 3 retries
        Other exceptions: Passed through immediately without retry

    Example:
        >>> result = retry_on_rate_limit(client.pages.create, parent=..., properties=...)
    """
    for retry_num in range(MAX_RETRIES + 1):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            if not _is_rate_limit_error(e):
                raise

            if retry_num >= MAX_RETRIES:
                logger.info(f"Rate limit persisted after {MAX_RETRIES} retries, giving up")
                raise APIAccessError() from e

            wait_time = 2 ** retry_num
            logger.info(
                f"Rate limit hit, retrying in {wait_time}s "
                f"(retry {retry_num + 1}/{MAX_RETRIES})"
            )
            time.sleep(wait_time)

    raise APIAccessError()


def _is_rate_limit_error(exception: Exception) -> bool:
    """Check if an exception represents a rate limit (429) error.

    Recognizes notion-client's APIResponseError (`status` and `code`
    attributes) as well as generic HTTP exceptions exposing `status_code`
    or `response.status_code`.
    """
    if getattr(exception, 'status', None) == 429:
        return True
    if getattr(exception, 'code', None) == 'rate_limited':
        return True
    if getattr(exception, 'status_code', None) == 429:
        return True

    response = getattr(exception, 'response', None)
    if response is not None and getattr(response, 'status_code', None) == 429:
        return True

    error_msg = str(exception).lower()
    return any(pattern in error_msg for pattern in ('too many requests', 'rate limited'))

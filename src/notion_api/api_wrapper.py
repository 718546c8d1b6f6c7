"""API wrapper for the Notion REST API.

This module wraps the notion-client SDK and provides error translation
from SDK/HTTP exceptions to our typed exception hierarchy. It integrates
with the retry logic for handling rate limits and hides Notion's request
limits (100 children per append, paginated child listings) from callers.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
from notion_client import Client
from notion_client.errors import APIResponseError, RequestTimeoutError

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
)
from .retry_logic import _is_rate_limit_error, retry_on_rate_limit

logger = logging.getLogger(__name__)

# Notion rejects requests carrying more than 100 child blocks
MAX_BLOCKS_PER_REQUEST = 100
PAGE_SIZE = 100
REQUEST_TIMEOUT_MS = 60_000


def chunk_blocks(blocks: List[Dict[str, Any]], size: int = MAX_BLOCKS_PER_REQUEST) -> List[List[Dict[str, Any]]]:
    """Split a block list into request-sized batches."""
    return [blocks[i:i + size] for i in range(0, len(blocks), size)]


class APIWrapper:
    """Wrapper around the notion-client SDK with error translation.

    This class provides a thin wrapper over the Notion client that:
    1. Handles authentication using the Authenticator
    2. Translates HTTP errors to typed exceptions
    3. Integrates retry logic for 429 rate limits
    4. Batches block appends and paginates child listings

    Example:
        >>> api = APIWrapper(Authenticator())
        >>> page_id = api.create_page("parent-id", "Notes", children=[])
    """

    def __init__(self, authenticator: Authenticator, client: Optional[Client] = None):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator instance for loading credentials
            client: Optional pre-built notion-client Client (used in tests)
        """
        self._authenticator = authenticator
        self._client: Optional[Client] = client

    def _get_client(self) -> Client:
        """Get or lazily create the notion-client Client.

        Raises:
            MissingCredentialsError: If NOTION_API_KEY is not set
        """
        if self._client is None:
            creds = self._authenticator.get_credentials()
            self._client = Client(auth=creds.api_key, timeout_ms=REQUEST_TIMEOUT_MS)
        return self._client

    def _sanitize_credentials(self, text: str) -> str:
        """Mask integration tokens and auth headers in error text.

        Example:
            >>> api._sanitize_credentials("Bearer secret_abc123 rejected")
            'Bearer ***REDACTED*** rejected'
        """
        if not text:
            return text

        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            text,
            flags=re.IGNORECASE
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE
        )
        # Notion integration secrets: secret_... (legacy) and ntn_...
        sanitized = re.sub(
            r'\b(secret|ntn)_[A-Za-z0-9]{8,}\b',
            '***REDACTED***',
            sanitized
        )
        return sanitized

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate SDK/HTTP exceptions to typed Notion exceptions.

        Args:
            exception: The original exception from the SDK
            operation: Description of the operation that failed, e.g.
                "append_children(<block id>)"

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        if isinstance(exception, (RequestTimeoutError, httpx.TimeoutException)):
            return APIUnreachableError("request timed out")

        if isinstance(exception, httpx.TransportError):
            return APIUnreachableError(self._sanitize_credentials(str(exception)))

        status = getattr(exception, 'status', None)
        if isinstance(exception, APIResponseError) or status is not None:
            if status == 401:
                return InvalidCredentialsError()
            if status == 404:
                object_id = "unknown"
                match = re.search(r'\(([^)]+)\)', operation)
                if match:
                    object_id = match.group(1)
                return PageNotFoundError(object_id)

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.info(f"API operation failed: {operation} - {safe_error_msg}")
        return APIAccessError(safe_error_msg or f"Notion API failure during {operation}")

    def _call(self, operation: str, func: Callable[[Client], Any]) -> Any:
        """Run one SDK call with rate-limit retry and error translation."""
        def _execute():
            client = self._get_client()
            try:
                return func(client)
            except Exception as e:
                # Rate limits propagate untranslated so the retry loop sees them
                if _is_rate_limit_error(e):
                    raise
                raise self._translate_error(e, operation) from e

        return retry_on_rate_limit(_execute)

    def create_page(
        self,
        parent_id: str,
        title: str,
        children: Optional[List[Dict[str, Any]]] = None,
    ) -> str:
        """Create a page under a parent page.

        The first 100 children are sent with the create request; the rest
        are appended in further batches.

        Args:
            parent_id: Parent page ID
            title: Page title
            children: Notion block objects for the page body

        Returns:
            str: ID of the created page

        Raises:
            InvalidCredentialsError: If the token is rejected
            PageNotFoundError: If the parent page doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the API call fails
        """
        children = children or []
        first_batch, remaining = children[:MAX_BLOCKS_PER_REQUEST], children[MAX_BLOCKS_PER_REQUEST:]

        page = self._call(
            f"create_page({parent_id})",
            lambda client: client.pages.create(
                parent={"type": "page_id", "page_id": parent_id},
                properties={
                    "title": {
                        "title": [{"type": "text", "text": {"content": title}}],
                    },
                },
                children=first_batch,
            ),
        )
        page_id = page["id"]
        logger.debug(f"Created page '{title}' ({page_id}) under {parent_id}")

        if remaining:
            self.append_children(page_id, remaining)

        return page_id

    def append_children(self, block_id: str, children: List[Dict[str, Any]]) -> None:
        """Append blocks to a page or block in batches of 100.

        Args:
            block_id: Target page or block ID
            children: Notion block objects to append
        """
        for batch in chunk_blocks(children):
            self._call(
                f"append_children({block_id})",
                lambda client, batch=batch: client.blocks.children.append(
                    block_id=block_id,
                    children=batch,
                ),
            )

    def list_children(self, block_id: str) -> List[Dict[str, Any]]:
        """List all direct children of a block, following pagination.

        Args:
            block_id: Page or block ID

        Returns:
            List of block objects in page order
        """
        results: List[Dict[str, Any]] = []
        cursor: Optional[str] = None

        while True:
            kwargs: Dict[str, Any] = {"block_id": block_id, "page_size": PAGE_SIZE}
            if cursor:
                kwargs["start_cursor"] = cursor

            response = self._call(
                f"list_children({block_id})",
                lambda client, kwargs=kwargs: client.blocks.children.list(**kwargs),
            )
            results.extend(response.get("results", []))

            if not response.get("has_more"):
                break
            cursor = response.get("next_cursor")
            if not cursor:
                break

        return results

    def delete_block(self, block_id: str) -> None:
        """Archive a block."""
        self._call(
            f"delete_block({block_id})",
            lambda client: client.blocks.delete(block_id=block_id),
        )

    def replace_page_blocks(self, page_id: str, children: List[Dict[str, Any]]) -> None:
        """Replace the entire body of a page.

        Every existing child block is deleted, then the new blocks are
        appended. A failure part-way leaves the page partially updated.

        Args:
            page_id: Page ID
            children: New Notion block objects
        """
        existing = self.list_children(page_id)
        logger.debug(f"Replacing {len(existing)} block(s) on page {page_id}")
        for block in existing:
            self.delete_block(block["id"])
        self.append_children(page_id, children)

    def create_file_upload(
        self,
        filename: str,
        content_type: str,
        number_of_parts: Optional[int] = None,
    ) -> str:
        """Create a file upload object.

        Args:
            filename: Name shown in Notion
            content_type: MIME type of the file
            number_of_parts: Part count for multi-part uploads; None for single-part

        Returns:
            str: File upload ID
        """
        kwargs: Dict[str, Any] = {"filename": filename, "content_type": content_type}
        if number_of_parts is None:
            kwargs["mode"] = "single_part"
        else:
            kwargs["mode"] = "multi_part"
            kwargs["number_of_parts"] = number_of_parts

        upload = self._call(
            f"create_file_upload({filename})",
            lambda client: client.file_uploads.create(**kwargs),
        )
        return upload["id"]

    def send_file_upload(
        self,
        upload_id: str,
        file: Tuple[str, bytes, str],
        part_number: Optional[int] = None,
    ) -> None:
        """Send file contents (or one part of them) to an upload.

        Args:
            upload_id: File upload ID
            file: (filename, data, content_type) tuple
            part_number: 1-based part number for multi-part uploads
        """
        kwargs: Dict[str, Any] = {"file_upload_id": upload_id, "file": file}
        if part_number is not None:
            kwargs["part_number"] = str(part_number)

        self._call(
            f"send_file_upload({upload_id})",
            lambda client: client.file_uploads.send(**kwargs),
        )

    def complete_file_upload(self, upload_id: str) -> None:
        """Finalize a multi-part upload after all parts are sent."""
        self._call(
            f"complete_file_upload({upload_id})",
            lambda client: client.file_uploads.complete(file_upload_id=upload_id),
        )

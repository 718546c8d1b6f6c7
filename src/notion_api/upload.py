"""Image upload to Notion's file upload API.

Files up to 20 MiB are sent in a single request. Larger files are split into
10 MiB parts which are sent concurrently; the upload is then completed with
one final call.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List

from .api_wrapper import APIWrapper
from .errors import NotionError, UploadError

logger = logging.getLogger(__name__)

TEN_MB = 10 * 1024 * 1024
TWENTY_MB = 20 * 1024 * 1024
MAX_PARALLEL_PARTS = 4

CONTENT_TYPES = {
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.gif': 'image/gif',
    '.webp': 'image/webp',
    '.svg': 'image/svg+xml',
}
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def guess_content_type(file_path: str) -> str:
    """Return the MIME type for a file based on its extension."""
    _, ext = os.path.splitext(file_path)
    return CONTENT_TYPES.get(ext.lower(), DEFAULT_CONTENT_TYPE)


def split_into_chunks(data: bytes, chunk_size: int) -> List[bytes]:
    """Split data into consecutive chunks of at most chunk_size bytes."""
    return [data[i:i + chunk_size] for i in range(0, len(data), chunk_size)]


class FileUploader:
    """Uploads local files and returns Notion file upload IDs.

    Attributes:
        api: APIWrapper used for the upload calls
        verbose: Log file names and sizes at INFO level

    Example:
        >>> uploader = FileUploader(api)
        >>> upload_id = uploader.upload("/notes/diagram.png")
    """

    def __init__(self, api: APIWrapper, verbose: bool = False):
        self.api = api
        self.verbose = verbose

    def upload(self, file_path: str) -> str:
        """Upload a file and return its file upload ID.

        Args:
            file_path: Absolute path of an existing local file

        Returns:
            str: Notion file upload ID, usable in `file_upload` image blocks

        Raises:
            UploadError: If the file cannot be read or a part fails to upload
            NotionError: If the upload cannot be created or sent
        """
        try:
            with open(file_path, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise UploadError(file_path, str(e)) from e

        filename = os.path.basename(file_path)
        content_type = guess_content_type(file_path)

        if self.verbose:
            logger.info(f"uploading image: {filename} ({len(data) / (1024 * 1024):.2f} MB)")

        if len(data) <= TWENTY_MB:
            upload_id = self.api.create_file_upload(filename, content_type)
            self.api.send_file_upload(upload_id, (filename, data, content_type))
            return upload_id

        return self._upload_multi_part(file_path, filename, content_type, data)

    def _upload_multi_part(self, file_path: str, filename: str, content_type: str, data: bytes) -> str:
        parts = split_into_chunks(data, TEN_MB)
        upload_id = self.api.create_file_upload(filename, content_type, number_of_parts=len(parts))
        logger.debug(f"Sending {len(parts)} part(s) for {filename}")

        with ThreadPoolExecutor(max_workers=min(MAX_PARALLEL_PARTS, len(parts))) as executor:
            futures = {
                executor.submit(
                    self.api.send_file_upload,
                    upload_id,
                    (filename, part, content_type),
                    index + 1,
                ): index + 1
                for index, part in enumerate(parts)
            }
            for future in as_completed(futures):
                part_number = futures[future]
                try:
                    future.result()
                except NotionError as e:
                    raise UploadError(file_path, f"part {part_number} failed: {e}") from e

        self.api.complete_file_upload(upload_id)
        return upload_id

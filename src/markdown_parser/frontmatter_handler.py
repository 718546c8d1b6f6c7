"""YAML frontmatter stripping for markdown files.

Documents may start with a YAML block delimited by `---` lines. The importer
does not use the metadata (page titles come from filenames), but the block
must never reach the page body.
"""

import logging
import re
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)


class FrontmatterHandler:
    """Separates YAML frontmatter from the markdown body.

    Frontmatter is recognized only when the document starts with `---\\n`
    and the block is closed by `\\n---\\n`. Documents with CRLF line endings
    do not match and are returned unchanged.
    """

    # Whole-string match: opening delimiter, lazy metadata, closing delimiter, body
    FRONTMATTER_PATTERN = re.compile(r'\A---\n(.*?)\n---\n(.*)\Z', re.DOTALL)

    @classmethod
    def strip(cls, content: str) -> Tuple[Dict[str, Any], str]:
        """Split markdown content into metadata and body.

        Args:
            content: Raw markdown document text

        Returns:
            Tuple of (metadata, body). Metadata is {} when absent, empty,
            not a mapping, or not valid YAML. Body is the content after the
            closing delimiter, or the whole content when no frontmatter is
            detected.

        Example:
            >>> FrontmatterHandler.strip("---\\ntitle: Test\\n---\\nBody")
            ({'title': 'Test'}, 'Body')
        """
        match = cls.FRONTMATTER_PATTERN.match(content)
        if not match:
            return {}, content

        raw_metadata, body = match.group(1), match.group(2)

        try:
            metadata = yaml.safe_load(raw_metadata)
        except yaml.YAMLError as e:
            logger.debug(f"Ignoring invalid frontmatter: {e}")
            return {}, body

        if not isinstance(metadata, dict):
            return {}, body

        return metadata, body

"""Markdown parsing pipeline for the Notion importer.

This package turns Obsidian-flavored markdown into a tree of typed blocks
with inline spans: frontmatter is stripped, footnotes are extracted and the
body is segmented into blocks and spans.
"""

from typing import List

from .block_parser import CALLOUT_CONFIG, parse_markdown_blocks
from .frontmatter_handler import FrontmatterHandler
from .inline_parser import (
    replace_footnote_refs,
    resolve_image_path,
    segment,
    to_styled_internal_text,
)
from .models import Block


def parse_markdown(content: str, markdown_file_path: str) -> List[Block]:
    """Strip frontmatter and parse the remaining body into blocks.

    Args:
        content: Full document text
        markdown_file_path: Path of the document on disk

    Returns:
        Ordered list of top-level blocks
    """
    _, body = FrontmatterHandler.strip(content)
    return parse_markdown_blocks(body, markdown_file_path)


__all__ = [
    'CALLOUT_CONFIG',
    'FrontmatterHandler',
    'parse_markdown',
    'parse_markdown_blocks',
    'replace_footnote_refs',
    'resolve_image_path',
    'segment',
    'to_styled_internal_text',
]
